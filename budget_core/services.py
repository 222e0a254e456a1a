"""Framework-agnostic action facade over a single session ledger."""

from __future__ import annotations

import enum
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from . import allocation, codec, rebalancing
from .config import DEFAULT_CAPACITY
from .exceptions import CannotModifyTotalError, CategoryNotFoundError
from .ledger import Ledger
from .models import TOTAL_ID, CategoryRecord
from .storage import LedgerFileStorage
from .validators import (
    parse_amount,
    parse_category_id,
    parse_percentages,
    validate_category_name,
)

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    DISPLAY = "display"
    ADJUST_TOTAL_BALANCE = "adjust-total-balance"
    ADJUST_CATEGORY_BALANCE = "adjust-category-balance"
    SET_SHARES = "set-shares"
    ADD_CATEGORY = "add-category"
    REMOVE_CATEGORY = "remove-category"
    SAVE = "save"
    LOAD = "load"
    NEW = "new"
    EXIT = "exit"


class BudgetService:
    """Owns the ledger of one session and applies validated actions to it.

    When ``autosave_path`` is set the ledger is written back after every
    successful mutation.
    """

    def __init__(
        self,
        storage: Optional[LedgerFileStorage] = None,
        *,
        capacity: int = DEFAULT_CAPACITY,
        autosave_path: Optional[Union[str, Path]] = None,
    ) -> None:
        self._storage = storage or LedgerFileStorage()
        self._capacity = capacity
        self._autosave_path = autosave_path
        self._ledger = Ledger.initialize_new(capacity)

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def storage(self) -> LedgerFileStorage:
        return self._storage

    # Public API -----------------------------------------------------------
    def new(self) -> Ledger:
        self._ledger = Ledger.initialize_new(self._capacity)
        self._persist()
        return self._ledger

    def display(self) -> str:
        return codec.format_ledger(self._ledger)

    def adjust_total_balance(self, amount: object) -> Decimal:
        delta = parse_amount(amount, "amount")
        total = allocation.distribute(self._ledger, delta)
        self._persist()
        return total

    def adjust_category_balance(self, category_id: object, amount: object) -> CategoryRecord:
        target = parse_category_id(category_id)
        delta = parse_amount(amount, "amount")
        record = allocation.apply_to_category(self._ledger, target, delta)
        self._persist()
        return record

    def set_shares(self, percentages: Iterable[object]) -> List[Decimal]:
        """Assign shares from percentages (``70`` for 70%) in category order."""
        shares = rebalancing.set_shares(self._ledger, parse_percentages(percentages))
        self._persist()
        return shares

    def add_category(self, name: object, starting_balance: object = 0) -> CategoryRecord:
        record = self._ledger.add_category(
            validate_category_name(name), parse_amount(starting_balance, "balance")
        )
        self._persist()
        return record

    def remove_category(self, category_id: object) -> CategoryRecord:
        target = parse_category_id(category_id)
        record = self._ledger.remove_category(target)
        self._persist()
        return record

    def get_category(self, category_id: object) -> CategoryRecord:
        target = parse_category_id(category_id)
        if target == TOTAL_ID:
            return self._ledger.total()
        index = self._ledger.find_index_by_id(target)
        if index is None:
            raise CategoryNotFoundError(target)
        return self._ledger.records()[index]

    def save(self, path: Union[str, Path]) -> Path:
        return self._storage.write(path, codec.format_ledger(self._ledger))

    def load(self, path: Union[str, Path]) -> Ledger:
        return self.import_text(self._storage.read(path))

    def import_text(self, text: str) -> Ledger:
        # Parse fully before swapping so a bad file leaves the session intact.
        self._ledger = codec.parse_ledger(text, self._capacity)
        logger.info("Loaded ledger with %d categories", len(self._ledger.categories()))
        self._persist()
        return self._ledger

    def snapshot(self) -> Dict[str, Any]:
        """Return a JSON-friendly view of the ledger."""
        return {
            "total": self._ledger.total().to_dict(),
            "categories": [record.to_dict() for record in self._ledger.categories()],
            "capacity": self._ledger.capacity,
            "next_id": self._ledger.next_id,
        }

    def perform(self, action: Union[Action, str], **arguments: Any) -> Any:
        """Dispatch an enumerated action with its keyword arguments."""
        handlers: Dict[Action, Callable[..., Any]] = {
            Action.DISPLAY: self.display,
            Action.ADJUST_TOTAL_BALANCE: self.adjust_total_balance,
            Action.ADJUST_CATEGORY_BALANCE: self.adjust_category_balance,
            Action.SET_SHARES: self.set_shares,
            Action.ADD_CATEGORY: self.add_category,
            Action.REMOVE_CATEGORY: self.remove_category,
            Action.SAVE: self.save,
            Action.LOAD: self.load,
            Action.NEW: self.new,
            Action.EXIT: lambda: None,
        }
        return handlers[Action(action)](**arguments)

    # Internal helpers -----------------------------------------------------
    def _persist(self) -> None:
        if self._autosave_path is None:
            return
        self.save(self._autosave_path)


def ensure_not_total(category_id: int) -> int:
    """Reject the Total id for balance changes and removal."""
    if category_id == TOTAL_ID:
        raise CannotModifyTotalError()
    return category_id
