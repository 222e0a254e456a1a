"""Ordered, bounded collection of budget categories headed by a Total record."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .config import DEFAULT_CAPACITY
from .exceptions import (
    CannotModifyTotalError,
    CapacityExceededError,
    CategoryNotFoundError,
    InvalidRecordError,
    ValidationError,
)
from .models import TOTAL_ID, TOTAL_NAME, CategoryRecord, to_decimal

logger = logging.getLogger(__name__)

RecordRow = Union[CategoryRecord, Tuple[int, str, object, object]]


class Ledger:
    """Budget categories with a synthetic Total in slot 0.

    Total's balance is the sum of every other balance and its share is the sum
    of every other share. Ids come from a counter owned by the ledger; it only
    moves forward, so removing a category never frees its id for reuse.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must leave room for the Total record")
        self._capacity = capacity
        self._records: List[CategoryRecord] = [
            CategoryRecord(TOTAL_ID, TOTAL_NAME, Decimal("0"), Decimal("1.0"))
        ]
        self._next_id = TOTAL_ID + 1

    # Construction ---------------------------------------------------------
    @classmethod
    def initialize_new(cls, capacity: int = DEFAULT_CAPACITY) -> "Ledger":
        """Return a ledger holding only Total; the next category gets id 2."""
        return cls(capacity)

    @classmethod
    def load(cls, records: Iterable[RecordRow], capacity: int = DEFAULT_CAPACITY) -> "Ledger":
        """Rebuild a ledger from stored, non-total records.

        Total is recomputed from the records: its share is their plain sum and
        is not forced to 1.0, even when the stored shares are inconsistent.
        """
        ledger = cls(capacity)
        seen = set()
        for row in records:
            try:
                record = row if isinstance(row, CategoryRecord) else CategoryRecord(*row)
                record.id = int(record.id)
            except (InvalidOperation, TypeError, ValueError) as exc:
                raise InvalidRecordError(f"malformed category record {row!r}") from exc
            if record.id <= TOTAL_ID:
                raise InvalidRecordError(f"category id must be greater than {TOTAL_ID}, got {record.id}")
            if record.id in seen:
                raise InvalidRecordError(f"duplicate category id {record.id}")
            if len(ledger._records) >= capacity:
                raise CapacityExceededError(capacity)
            seen.add(record.id)
            ledger._records.append(record)

        total = ledger.total()
        total.balance = ledger.sum_balances()
        total.share = ledger.sum_shares()
        ledger._next_id = max(seen) + 1 if seen else TOTAL_ID + 1
        logger.debug("Loaded ledger with %d categories, next id %d", len(seen), ledger._next_id)
        return ledger

    # Read accessors -------------------------------------------------------
    def total(self) -> CategoryRecord:
        return self._records[0]

    def categories(self) -> List[CategoryRecord]:
        """Non-total records in ledger order."""
        return self._records[1:]

    def records(self) -> List[CategoryRecord]:
        """Every record, Total first."""
        return list(self._records)

    def count(self) -> int:
        """Number of occupied slots, Total included."""
        return len(self._records)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def next_id(self) -> int:
        return self._next_id

    def is_full(self) -> bool:
        return len(self._records) >= self._capacity

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CategoryRecord]:
        return iter(list(self._records))

    # Lookup ---------------------------------------------------------------
    def find_index_by_id(self, category_id: int) -> Optional[int]:
        """Return the slot holding ``category_id`` or ``None``.

        Slot ``id - 1`` is probed first, which is where the record sits until
        a removal shifts later records down; otherwise scan from slot 1.
        """
        probe = category_id - 1
        if 0 <= probe < len(self._records) and self._records[probe].id == category_id:
            return probe
        for index in range(1, len(self._records)):
            if self._records[index].id == category_id:
                return index
        return None

    def get(self, category_id: int) -> CategoryRecord:
        """Return the non-total record with ``category_id``."""
        if category_id == TOTAL_ID:
            raise CannotModifyTotalError()
        index = self.find_index_by_id(category_id)
        if index is None:
            raise CategoryNotFoundError(category_id)
        return self._records[index]

    # Mutation -------------------------------------------------------------
    def add_category(self, name: str, starting_balance: object = 0) -> CategoryRecord:
        if self.is_full():
            raise CapacityExceededError(self._capacity)
        try:
            balance = to_decimal(starting_balance)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValidationError("balance must be a numeric value") from exc
        self.total().add_to_balance(balance)
        share = Decimal("1.0") if len(self._records) == 1 else Decimal("0.0")
        record = CategoryRecord(self._next_id, name, balance, share)
        self._next_id += 1
        self._records.append(record)
        self.total().share = self.sum_shares()
        logger.debug("Added category %s with id %d", record.name, record.id)
        return record

    def remove_category(self, category_id: int) -> CategoryRecord:
        """Remove a category; later records keep their order and move up one slot."""
        if category_id == TOTAL_ID:
            raise CannotModifyTotalError()
        index = self.find_index_by_id(category_id)
        if index is None or index == 0:
            raise CategoryNotFoundError(category_id)
        record = self._records.pop(index)
        total = self.total()
        total.balance -= record.balance
        total.share -= record.share
        logger.debug("Removed category id %d found at index %d", category_id, index)
        return record

    def recalculate_total_balance(self) -> Decimal:
        """Set Total's balance to the sum of every other balance."""
        self.total().balance = self.sum_balances()
        return self.total().balance

    def sum_balances(self) -> Decimal:
        return sum((record.balance for record in self._records[1:]), Decimal("0"))

    def sum_shares(self) -> Decimal:
        return sum((record.share for record in self._records[1:]), Decimal("0"))

    def assign_shares(self, shares: Sequence[Decimal]) -> None:
        """Write ``shares`` onto the non-total records in order and set Total's share."""
        for record, share in zip(self._records[1:], shares):
            record.share = share
        self.total().share = self.sum_shares()
