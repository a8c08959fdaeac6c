"""RequestState: the per-field, per-owner container tracking one async request."""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional

from psygnal import Signal
from pydantic import Field, PrivateAttr

from request_store.core.provider import Provider, ProviderParameter, RequestConfig
from request_store.utils.evented_model import BatchedEventedModel

logger = logging.getLogger(__name__)


class FailurePolicy(str, Enum):
    """How a failed fetch treats the `initial` flag."""

    CLEAR_INITIAL = "clear_initial"
    KEEP_INITIAL = "keep_initial"


@dataclass(frozen=True)
class RequestSnapshot:
    """The four public fields of a RequestState at one instant."""

    initial: bool
    loading: bool
    data: Optional[Any]
    error: Optional[Exception]


class RequestState(BatchedEventedModel):
    """
    Tracks the lifecycle of requests issued through one provider and configuration.

    `initial` is True until a fetch has settled (or again after reset). `loading` is
    True from the moment fetch() is called until a fetch settles. `data` holds the
    payload of the most recent success and `error` the exception of the most recent
    failure.

    Overlapping fetches are neither queued nor deduplicated: every call runs to
    completion and the last one to settle determines the fields.

    The fields can only be changed by fetch() and reset(); each transition is a single
    batched update, announced by one `changed` emission carrying a RequestSnapshot.
    Per-field signals are available at `state.events.<field>`.
    """

    initial: bool = Field(default=True)
    loading: bool = Field(default=False)
    data: Optional[Any] = Field(default=None)
    error: Optional[Exception] = Field(default=None)

    changed: ClassVar[Signal] = Signal(RequestSnapshot)

    _provider: Provider = PrivateAttr()
    _config: RequestConfig = PrivateAttr()
    _failure_policy: FailurePolicy = PrivateAttr(default=FailurePolicy.CLEAR_INITIAL)
    _pending: set = PrivateAttr(default_factory=set)

    def __init__(
        self,
        provider: Provider,
        config: RequestConfig,
        failure_policy: FailurePolicy = FailurePolicy.CLEAR_INITIAL,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._provider = provider
        self._config = config
        self._failure_policy = FailurePolicy(failure_policy)

    @property
    def config(self) -> RequestConfig:
        return self._config

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def method(self) -> str:
        return self._config.method

    @property
    def extra_data(self) -> Optional[Any]:
        return self._config.extra_data

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    @property
    def in_flight(self) -> int:
        """Number of fetches issued but not yet settled."""
        return len(self._pending)

    def snapshot(self) -> RequestSnapshot:
        return RequestSnapshot(initial=self.initial, loading=self.loading, data=self.data, error=self.error)

    def fetch(self, params: Optional[Any] = None) -> "asyncio.Task[Any]":
        """
        Issue a request through the provider.

        `loading` is set before this method returns. The provider call runs as a task on
        the running event loop; awaiting the returned task gives the payload, or raises
        whatever the provider raised. The failure is recorded in `error` either way.

        Args:
            params: Passed to the provider as both `body` and `query`.

        Returns:
            The task settling this fetch.

        Raises:
            RuntimeError: If called without a running event loop.
        """
        loop = asyncio.get_running_loop()
        parameter = ProviderParameter.from_config(self._config, params)
        self.batch_update(loading=True)
        logger.debug(f"Fetching {parameter.method} {parameter.url}")

        task = loop.create_task(self._settle(parameter))
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def reset(self) -> None:
        """Return to the initial state. A fetch still in flight will apply its outcome when it settles."""
        if self.batch_update(initial=True, loading=False, data=None, error=None):
            logger.debug(f"Reset request state for {self.method} {self.url}")

    async def _settle(self, parameter: ProviderParameter) -> Any:
        try:
            payload = await self._call_provider(parameter)
        except Exception as e:
            logger.warning(f"Request {parameter.method} {parameter.url} failed: {e.__class__.__name__}: {e}")
            updates: dict[str, Any] = {"error": e, "loading": False}
            if self._failure_policy is FailurePolicy.CLEAR_INITIAL:
                updates["initial"] = False
            self.batch_update(**updates)
            raise

        self.batch_update(data=payload, initial=False, error=None, loading=False)
        logger.debug(f"Request {parameter.method} {parameter.url} succeeded")
        return payload

    def _on_task_done(self, task: "asyncio.Task[Any]") -> None:
        self._pending.discard(task)
        # Cancellation at any point, including before _settle has started.
        if task.cancelled():
            self.batch_update(loading=False)
            logger.debug(f"Request {self.method} {self.url} cancelled")

    async def _call_provider(self, parameter: ProviderParameter) -> Any:
        result = self._provider(parameter)
        if inspect.isawaitable(result):
            result = await result
        return result
