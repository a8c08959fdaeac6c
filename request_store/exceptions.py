# Request store exceptions


class RequestStoreError(Exception):
    """Base exception for all request store errors."""

    pass


class RequestFieldError(RequestStoreError):
    """Exception raised when a request field is attached or used incorrectly."""

    def __init__(self, *args, field_name: str | None = None):
        super().__init__(*args)
        self.field_name = field_name


class ReadOnlyStateError(RequestStoreError, AttributeError):
    """Exception raised when code outside fetch() or reset() writes a state field."""

    # Inherit from AttributeError so hasattr/setattr callers see the usual failure type
    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"'{field_name}' is read-only; use fetch() or reset() to change request state")
