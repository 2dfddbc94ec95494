"""Exceptions raised by the service layer; routes map them to HTTP errors."""

from __future__ import annotations


class LedgerliteError(Exception):
    """Base exception for service errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class AuthorKeyRequiredError(LedgerliteError):
    """Raised when a write is attempted without a valid author key."""

    def __init__(self, action: str = "modify transactions") -> None:
        super().__init__(f"Valid author key is required to {action}")


class StoreError(LedgerliteError):
    """Raised when the transaction store fails to answer."""

    pass


class TransactionNotFoundError(LedgerliteError):
    """Raised when an update targets an unknown transaction id."""

    pass


class TransactionValidationError(LedgerliteError):
    """Raised when a row cannot be stored as given."""

    pass
