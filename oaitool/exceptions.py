"""Exceptions raised by the oaitool package."""
from typing import Optional


class OaiError(Exception):
    """Base exception for oaitool errors."""
    pass


class ValidationError(OaiError):
    """Raised when a value is rejected locally, before any request is sent."""
    pass


class AuthenticationError(OaiError):
    """Raised when the offline token cannot be exchanged for an access token."""
    pass


class APIError(OaiError):
    """Raised when the API answers with a status code other than the expected one."""

    def __init__(self, action: str, status_code: int, reason: Optional[str], body: str):
        self.action = action
        self.status_code = status_code
        self.reason = reason or ""
        self.body = body
        super().__init__(f"failed to {action}: {self.reason} [{status_code}]: {body}")


class NotFoundError(OaiError):
    """Raised when an identifier matches neither a resource id nor a resource name."""
    pass


class InventoryError(OaiError):
    """Raised when a host inventory payload cannot be parsed."""
    pass


class NoHostsMatchedError(OaiError):
    """Raised when a host query leaves nothing in the result set."""
    pass


class WaitError(OaiError):
    """Base exception for a wait that ended without reaching its condition."""
    pass


class WaitTimeoutError(WaitError):
    pass


class TooManyRetriesError(WaitError):
    pass


class InvalidResponseError(OaiError):
    """Raised when a successful response carries a payload that does not fit the model."""
    pass
