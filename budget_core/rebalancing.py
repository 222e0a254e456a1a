"""Re-assigning category shares under the 100% constraint."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Sequence

from .exceptions import SharesDoNotSumToOneError, SharesNotFullySpecifiedError, ValidationError
from .ledger import Ledger
from .models import to_decimal

ONE = Decimal("1")
ZERO = Decimal("0")


def set_shares(ledger: Ledger, new_shares: Sequence[object]) -> List[Decimal]:
    """Assign one share fraction per non-total category, in ledger order.

    Each value must lie in [0, 1] and together they must add up to exactly
    1.0. On any failure the ledger is left as it was and the caller must
    supply every share again; there is no single-field correction.
    """
    categories = ledger.categories()
    if not categories:
        raise SharesNotFullySpecifiedError("No categories except Total exist, cannot modify percentages")
    shares = [to_decimal(value) for value in new_shares]
    for position, share in enumerate(shares, start=1):
        if not ZERO <= share <= ONE:
            raise ValidationError(f"share #{position} must be between 0 and 1, got {share}")
    if len(shares) != len(categories):
        raise SharesNotFullySpecifiedError(
            f"Expected {len(categories)} shares, got {len(shares)}"
        )
    total = sum(shares, Decimal("0"))
    if total != ONE:
        raise SharesDoNotSumToOneError(total)
    ledger.assign_shares(shares)
    return shares
