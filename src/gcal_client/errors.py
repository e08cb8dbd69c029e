# src/gcal_client/errors.py
"""Exception hierarchy shared by every gcal_client module."""


class GCalError(Exception):
    """Base class for all errors raised by gcal_client."""


class ConfigError(GCalError):
    pass


class AuthError(GCalError):
    """Credential loading, signing or token exchange failed."""


class ValidationError(GCalError):
    pass


class RequestError(GCalError):
    """The transport could not complete the request."""


class ApiError(GCalError):
    """The calendar API answered with an error status or an unreadable body."""

    def __init__(self, status: int, body: str, message: str = ""):
        self.status = status
        self.body = body
        super().__init__(message or f"API error: status {status} - {body}")


class TimezoneError(GCalError):
    pass


class InvalidTimezone(TimezoneError, ValueError):
    def __init__(self, timezone: str):
        self.timezone = timezone
        super().__init__(f"Invalid timezone designator: {timezone!r}")


class ConversionError(TimezoneError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Datetime conversion failed: {detail}")
