"""Provider contract: the configuration captured at an attachment site and the
argument handed to the provider on every fetch."""

from typing import Annotated, Any, Awaitable, Literal, Optional, Protocol, get_args

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]

HTTP_METHODS: tuple[str, ...] = get_args(HTTPMethod)


def _normalize_method(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().upper()
    return value


# Accepts any casing and surrounding whitespace.
MethodField = Annotated[HTTPMethod, BeforeValidator(_normalize_method)]


class RequestConfig(BaseModel):
    """
    Immutable configuration captured once per attachment site.

    Shared read-only by every RequestState built from the same field initializer.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: str
    method: MethodField = Field(default="GET")
    extra_data: Optional[Any] = Field(default=None)


class ProviderParameter(BaseModel):
    """The single argument passed to a provider.

    `body` and `query` both carry the params given to fetch(); deciding which one
    to use for a given method is up to the provider.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: str
    method: MethodField = Field(default="GET")
    body: Optional[Any] = Field(default=None)
    query: Optional[Any] = Field(default=None)
    extra_data: Optional[Any] = Field(default=None)

    @classmethod
    def from_config(cls, config: RequestConfig, params: Optional[Any] = None) -> "ProviderParameter":
        return cls(
            url=config.url,
            method=config.method,
            body=params,
            query=params,
            extra_data=config.extra_data,
        )


class Provider(Protocol):
    """Async callable performing the actual request."""

    def __call__(self, parameter: ProviderParameter) -> Awaitable[Any]: ...
