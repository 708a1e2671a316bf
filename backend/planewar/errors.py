"""Error kinds raised by services and converted to JSON responses by controllers."""
from typing import Optional


class ApiError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """Required input is missing or has the wrong type."""

    status_code = 400


class NotFoundError(ApiError):
    """Referenced announcement id does not exist."""

    status_code = 404


class ConfigurationError(ApiError):
    """Required server-side secret is not configured."""

    status_code = 500


class UpstreamError(ApiError):
    """Identity exchange service failed or reported an error.

    Upstream-reported errors map to 400 and keep the upstream ``errcode``;
    transport failures (timeout, connection error, bad body) map to 500.
    """

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None, errcode: Optional[int] = None):
        super().__init__(message, status_code)
        self.errcode = errcode
