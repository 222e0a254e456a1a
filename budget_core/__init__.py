"""Core ledger engine for the budget category tracker."""

from .allocation import apply_to_category, distribute
from .codec import format_ledger, parse_ledger
from .exceptions import (
    CannotModifyTotalError,
    CapacityExceededError,
    CategoryNotFoundError,
    InvalidRecordError,
    LedgerError,
    SharesDoNotSumToOneError,
    SharesNotFullySpecifiedError,
    StorageUnavailableError,
    ValidationError,
)
from .ledger import Ledger
from .models import CategoryRecord
from .rebalancing import set_shares
from .services import Action, BudgetService
from .storage import LedgerFileStorage

__all__ = [
    "Action",
    "BudgetService",
    "CategoryRecord",
    "Ledger",
    "LedgerFileStorage",
    "apply_to_category",
    "distribute",
    "format_ledger",
    "parse_ledger",
    "set_shares",
    "CannotModifyTotalError",
    "CapacityExceededError",
    "CategoryNotFoundError",
    "InvalidRecordError",
    "LedgerError",
    "SharesDoNotSumToOneError",
    "SharesNotFullySpecifiedError",
    "StorageUnavailableError",
    "ValidationError",
]
