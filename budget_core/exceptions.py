"""Domain-specific exceptions for the budget ledger engine."""

from decimal import Decimal
from typing import Optional


class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class LedgerError(Exception):
    """Base class for every failure raised by the ledger engine."""


class CapacityExceededError(LedgerError):
    """Raised when a category is added to a ledger that is already full."""

    def __init__(self, capacity: int) -> None:
        super().__init__(
            f"There is a limit of {capacity} categories. Remove a category to add a new one."
        )
        self.capacity = capacity


class CategoryNotFoundError(LedgerError, LookupError):
    """Raised when no non-total category carries the requested id."""

    def __init__(self, category_id: int) -> None:
        super().__init__(f"ID {category_id} not found")
        self.category_id = category_id


class CannotModifyTotalError(LedgerError):
    """Raised when a balance change or removal targets the Total record."""

    def __init__(self) -> None:
        super().__init__("Cannot modify Total directly, select another category")


class SharesNotFullySpecifiedError(LedgerError, ValueError):
    """Raised when the number of shares does not match the category count."""


class SharesDoNotSumToOneError(LedgerError, ValueError):
    """Raised when re-assigned shares do not add up to exactly 100%."""

    def __init__(self, total: Decimal) -> None:
        super().__init__(
            f"Total percent is {total * 100:.2f}%, not 100%. Please re-enter the values."
        )
        self.total = total


class InvalidRecordError(LedgerError, ValueError):
    """Raised when stored ledger text cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class StorageUnavailableError(LedgerError, IOError):
    """Raised when the ledger file cannot be opened, read or written."""
