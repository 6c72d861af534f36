"""
Domain errors raised by the identity service layer.
Each carries the HTTP status it maps to; handlers in main.py render them.
"""


class ServiceError(Exception):
    """Base class for errors that are translated into explicit responses."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed input. Fixed by the client, never retried."""

    status_code = 422


class TokenValidationError(ValidationError):
    """A token failed structural, signature or expiry checks."""

    status_code = 401


class ConflictError(ServiceError):
    """Duplicate unique key."""

    status_code = 409


class UnauthorizedError(ServiceError):
    status_code = 401


class TransientStoreError(ServiceError):
    """Persistence failure unrelated to business rules. Safe for callers to retry."""

    status_code = 503


class SigningError(ServiceError):
    """Token could not be signed. Never exposed verbatim to clients."""

    status_code = 500
