"""Attaching request state to classes.

    as_request = create_request_decorator(provider)

    class UserStore:
        users = as_request(url="/users")
        profile = as_request(url="/profile", method="POST")

Every UserStore instance gets its own RequestState per field, built the first
time the field is read on that instance.
"""

import logging
import weakref
from typing import Any, Callable, Optional

from request_store.core.provider import Provider, RequestConfig
from request_store.core.request_state import FailurePolicy, RequestState
from request_store.exceptions import RequestFieldError
from request_store.settings import Settings

logger = logging.getLogger(__name__)


class RequestField:
    """Data descriptor handing each owner instance its own lazily built RequestState.

    States live in a side table keyed by the owner's identity. A weakref finalizer
    removes the entry when the owner is collected, so the state lives exactly as long
    as its owner and an `id` is never reused while its entry is still present.
    """

    def __init__(self, build: Callable[[], RequestState], name: Optional[str] = None) -> None:
        self._build = build
        self._name = name
        self._states: dict[int, RequestState] = {}

    @property
    def name(self) -> Optional[str]:
        return self._name

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        state = self._states.get(id(instance))
        if state is None:
            state = self._materialize(instance)
        return state

    def __set__(self, instance: Any, value: Any) -> None:
        raise RequestFieldError(f"Request field '{self._name}' is read-only", field_name=self._name)

    def __delete__(self, instance: Any) -> None:
        raise RequestFieldError(f"Request field '{self._name}' cannot be deleted", field_name=self._name)

    def _materialize(self, instance: Any) -> RequestState:
        key = id(instance)
        try:
            weakref.finalize(instance, self._states.pop, key, None)
        except TypeError as e:
            raise RequestFieldError(
                f"Cannot attach request field '{self._name}' to {type(instance).__name__}: "
                "instances must support weak references",
                field_name=self._name,
            ) from e
        state = self._build()
        self._states[key] = state
        logger.debug(f"Created request state for {type(instance).__name__}.{self._name}")
        return state


class FieldInitializer:
    """Reusable result of one attachment: a provider plus a RequestConfig.

    Apply it to as many (class, name) pairs as needed, either explicitly with
    `apply()` or by assigning it in a class body. Each application installs a
    separate RequestField.
    """

    def __init__(self, provider: Provider, config: RequestConfig, failure_policy: FailurePolicy) -> None:
        self._provider = provider
        self._config = config
        self._failure_policy = failure_policy

    @property
    def config(self) -> RequestConfig:
        return self._config

    def build(self) -> RequestState:
        """Construct a standalone RequestState, e.g. from an owner's __init__."""
        return RequestState(self._provider, self._config, failure_policy=self._failure_policy)

    def apply(self, owner: type, name: str) -> RequestField:
        """Install a RequestField named `name` on `owner`."""
        if not isinstance(owner, type):
            raise RequestFieldError(f"Request fields attach to classes, not {type(owner).__name__} objects")
        if not name or not name.isidentifier():
            raise RequestFieldError(f"Invalid request field name: {name!r}", field_name=name)
        field = RequestField(self.build, name=name)
        setattr(owner, name, field)
        return field

    def __set_name__(self, owner: type, name: str) -> None:
        # Class-body assignment: swap this initializer for a real descriptor.
        self.apply(owner, name)


class RequestDecorator:
    """Binds a provider once; calling it captures a configuration for a field."""

    def __init__(self, provider: Provider, failure_policy: Optional[FailurePolicy] = None) -> None:
        if not callable(provider):
            raise TypeError(f"Provider must be callable, got {type(provider).__name__}")
        self._provider = provider
        self._failure_policy = FailurePolicy(failure_policy) if failure_policy else Settings().get_failure_policy()

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    def attach(self, url: str, method: str = "GET", extra_data: Optional[Any] = None) -> FieldInitializer:
        """Capture a RequestConfig and return the initializer for it.

        Raises:
            pydantic.ValidationError: If `method` is not a supported HTTP method.
        """
        config = RequestConfig(url=url, method=method, extra_data=extra_data)
        return FieldInitializer(self._provider, config, self._failure_policy)

    __call__ = attach


def create_request_decorator(
    provider: Provider, *, failure_policy: Optional[FailurePolicy] = None
) -> RequestDecorator:
    """Bind `provider` and return the decorator used to declare request fields.

    Args:
        provider: Async callable receiving a ProviderParameter.
        failure_policy: Overrides REQUEST_STORE_FAILURE_POLICY for fields declared
            through this decorator.
    """
    return RequestDecorator(provider, failure_policy=failure_policy)
