"""Error taxonomy for the request portal."""
from typing import Optional


class PortalError(Exception):
    """Base class for errors raised by the request portal."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """Caller input is missing or invalid. Carries a list of field errors."""
    status_code = 400

    def __init__(self, errors: list[dict], message: str = "Validation error"):
        super().__init__(message)
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        return [error["field"] for error in self.errors]


class NotFoundError(PortalError):
    """The request identifier does not resolve to a stored record."""
    status_code = 404


class PersistenceError(PortalError):
    """The relational store rejected or failed a write."""
    status_code = 500


class RemoteFetchError(PortalError):
    """Report storage could not deliver a usable report document."""
    status_code = 502

    def __init__(self, reason: str, message: Optional[str] = None):
        super().__init__(message or reason)
        self.reason = reason


class NotificationError(PortalError):
    """The notification webhook could not be reached or refused the payload."""
