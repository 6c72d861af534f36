"""
Domain errors raised by the item service layer.
Each carries the HTTP status it maps to; handlers in main.py render them.
"""


class ServiceError(Exception):
    """Base class for errors that are translated into explicit responses."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = 422


class UnauthorizedError(ServiceError):
    """Missing, invalid or expired credential, or identity service unreachable."""

    status_code = 401


class NotFoundError(ServiceError):
    """Item absent or owned by someone else. Same shape for both."""

    status_code = 404


class TransientStoreError(ServiceError):
    """Persistence failure unrelated to business rules. Safe for callers to retry."""

    status_code = 503


class IdentityUnavailableError(Exception):
    """The identity service could not be reached or answered garbage. Internal only."""
