from .provider import HTTP_METHODS, HTTPMethod, Provider, ProviderParameter, RequestConfig
from .request_field import FieldInitializer, RequestDecorator, RequestField, create_request_decorator
from .request_state import FailurePolicy, RequestSnapshot, RequestState

__all__ = [
    "HTTP_METHODS",
    "HTTPMethod",
    "FailurePolicy",
    "FieldInitializer",
    "Provider",
    "ProviderParameter",
    "RequestConfig",
    "RequestDecorator",
    "RequestField",
    "RequestSnapshot",
    "RequestState",
    "create_request_decorator",
]
