"""Domain exceptions.

Raised by the service layer when a precondition or a store operation
fails.  Each exception carries the HTTP status the API layer answers
with, so endpoint handlers can translate them into ``HTTPException``
without knowing which service raised them.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = 400
    default_message: str = "Bad request."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ValidationError(StoreError):
    """Malformed or missing input that the client can correct."""

    default_message = "Invalid request."


class InvalidReferenceError(StoreError):
    """A payload id points at a record that does not exist."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Invalid {kind}.")


class OutOfStockError(StoreError):
    """The movie has no copies left to rent."""

    default_message = "Movie not in stock."


class NotFoundError(StoreError):
    """No record with the requested id."""

    status_code = 404

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"The {kind} with the given ID was not found.")


class TransactionError(StoreError):
    """The atomic store operation failed and was rolled back.

    The message is deliberately generic; store diagnostics are logged
    by the service that raised it.
    """

    status_code = 500
    default_message = "Something failed."
