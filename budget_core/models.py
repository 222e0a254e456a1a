"""Data models for the budget ledger domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict

__all__ = ["CategoryRecord", "TOTAL_ID", "TOTAL_NAME", "to_decimal"]

TOTAL_ID = 1
TOTAL_NAME = "Total"


def to_decimal(value: object) -> Decimal:
    """Coerce ints, floats and numeric strings to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(eq=False)
class CategoryRecord:
    """One budget bucket.

    ``share`` is a fraction in ``[0, 1]``; it is shown multiplied by 100.
    Records compare equal by name only, ``id`` is the stable key.
    """

    id: int = 0
    name: str = "default"
    balance: Decimal = field(default_factory=lambda: Decimal("0"))
    share: Decimal = field(default_factory=lambda: Decimal("0"))

    def __post_init__(self) -> None:
        self.balance = to_decimal(self.balance)
        self.share = to_decimal(self.share)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryRecord):
            return NotImplemented
        return self.name == other.name

    __hash__ = None  # type: ignore[assignment]

    def add_to_balance(self, amount: object) -> None:
        """Add ``amount`` to the balance in place (negative values subtract)."""
        self.balance += to_decimal(amount)

    @property
    def percentage(self) -> Decimal:
        return self.share * 100

    @property
    def is_total(self) -> bool:
        return self.id == TOTAL_ID

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the record to JSON-friendly natives."""
        return {
            "id": self.id,
            "name": self.name,
            "balance": f"{self.balance:.2f}",
            "percentage": f"{self.percentage:.2f}",
        }
