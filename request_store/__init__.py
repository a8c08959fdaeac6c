"""Per-field async request state for Python objects."""

from request_store.core.logging import configure_request_store_logging
from request_store.core.provider import HTTP_METHODS, HTTPMethod, Provider, ProviderParameter, RequestConfig
from request_store.core.request_field import (
    FieldInitializer,
    RequestDecorator,
    RequestField,
    create_request_decorator,
)
from request_store.core.request_state import FailurePolicy, RequestSnapshot, RequestState
from request_store.exceptions import ReadOnlyStateError, RequestFieldError, RequestStoreError
from request_store.types import ProviderFunc, RequestStore

__all__ = [
    "HTTP_METHODS",
    "HTTPMethod",
    "FailurePolicy",
    "FieldInitializer",
    "Provider",
    "ProviderFunc",
    "ProviderParameter",
    "ReadOnlyStateError",
    "RequestConfig",
    "RequestDecorator",
    "RequestField",
    "RequestFieldError",
    "RequestSnapshot",
    "RequestState",
    "RequestStore",
    "RequestStoreError",
    "configure_request_store_logging",
    "create_request_decorator",
]
