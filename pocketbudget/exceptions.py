"""Domain-specific exceptions for the PocketBudget ledger."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class MissingFieldError(ValidationError):
    """Raised when a required transaction field is absent or blank."""


class InvalidAmountError(ValidationError):
    """Raised when an amount is not a positive number."""


class InvalidKindError(ValidationError):
    """Raised when a transaction type is neither income nor expense."""


class InsufficientBalanceError(ValidationError):
    """Raised when an expense would exceed the available balance."""


class NotFoundError(LookupError):
    """Raised when a transaction cannot be located."""


class StoreFailure(IOError):
    """Raised when the persistence layer is unavailable or rejects an operation."""
