"""
Error taxonomy of the registry.

Every failure is reported by raising a ``RegistryError`` subclass.
Each class carries a stable ``tag`` that clients can match on and the
HTTP status the API layer responds with.  Failures are final: the
service layer never retries and never rolls back earlier writes.
"""

from typing import Dict

MISSING_CREDENTIALS = "Some credentials are missing."


class RegistryError(Exception):
    """Base class for failures reported to callers."""

    tag = "registry-error"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_detail(self) -> Dict[str, str]:
        return {"tag": self.tag, "message": self.message}


class NotFound(RegistryError):
    tag = "not-found"
    status_code = 404


class MissingCredentials(RegistryError):
    tag = "missing-credentials"
    status_code = 400


class RegistrationFailed(RegistryError):
    """The store rejected the write of a new registration."""

    tag = "registration-failed"
    status_code = 500


class AlreadyRegistered(RegistryError):
    tag = "already-registered"
    status_code = 409


class NotRegistered(RegistryError):
    """A username referenced by the payload has not registered."""

    tag = "not-registered"
    status_code = 403


class ProductNotAvailable(NotFound):
    tag = "product-unavailable"


class UserNotFound(NotFound):
    tag = "user-not-found"


class InvalidName(RegistryError):
    """A username or product name cannot be used as a key."""

    tag = "invalid-name"
    status_code = 400


class CallerMismatch(RegistryError):
    """The caller principal does not match the user it claims to act as."""

    tag = "caller-mismatch"
    status_code = 403


def require(*values: str, message: str = MISSING_CREDENTIALS) -> None:
    """Raise ``MissingCredentials`` unless every value is non-empty."""
    if not all(values):
        raise MissingCredentials(message)


def require_path_safe(name: str, kind: str) -> None:
    """Reject names that could not be addressed as a single URL path segment."""
    if "/" in name:
        raise InvalidName(f"{kind} must not contain '/'.")
