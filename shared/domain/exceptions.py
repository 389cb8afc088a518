"""
Domain Errors

Typed failures raised by the lifecycle engine. They are propagated to the
caller unchanged; the API layer maps each kind to its own HTTP status.
"""


class DomainError(Exception):
    """Base class for every failure the engine reports to its caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed or out-of-range input (date ordering, rating range, required fields)."""


class PermissionDeniedError(DomainError):
    """The actor lacks the required role or ownership."""


class NotFoundError(DomainError):
    """A referenced booking, reschedule request or unit does not exist."""


class ConflictError(DomainError):
    """The operation violates a workflow invariant for the current state."""
