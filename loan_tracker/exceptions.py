"""Custom exception hierarchy for loan-tracker."""


class LoanTrackerError(Exception):
    """Base exception for all loan-tracker errors."""


class EntityNotFoundError(LoanTrackerError):
    """Raised when a referenced record does not exist in the store."""


class InvalidEntityStateError(LoanTrackerError):
    """Raised when a record is in an invalid state for the operation."""


class ConfigurationError(LoanTrackerError):
    """Raised when configuration is invalid or missing."""


class StorageError(LoanTrackerError):
    """Raised when persisted records cannot be read or written."""
