from typing import Any, Awaitable, Callable, Optional, Protocol, runtime_checkable

from request_store.core.provider import ProviderParameter

# Plain-function form of the provider contract
ProviderFunc = Callable[[ProviderParameter], Awaitable[Any]]


@runtime_checkable
class RequestStore(Protocol):
    """What owning code sees when it reads a request field."""

    initial: bool
    loading: bool
    data: Optional[Any]
    error: Optional[Exception]

    def fetch(self, params: Optional[Any] = None) -> Awaitable[Any]: ...

    def reset(self) -> None: ...
