from typing import Optional


class ValenceError(Exception):
    """Base class for errors raised by valencehelper."""

    pass


class ConfigurationError(ValenceError):
    """Raised when the Valence credentials or host cannot be resolved."""

    pass


class ResponseError(ValenceError):
    """Raised for a non-2xx response when the facade is set to raise."""

    def __init__(self, status_code: int, body: Optional[str] = None):
        super().__init__(f"{status_code} {body or ''}".rstrip())
        self.status_code = status_code
        self.body = body


class PaginationError(ValenceError):
    """Raised when a continuation URL does not point into the Valence API."""

    pass
