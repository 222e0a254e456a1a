"""Spreading balance changes across the ledger's categories."""

from __future__ import annotations

import logging
from decimal import Decimal

from .ledger import Ledger
from .models import CategoryRecord, to_decimal

logger = logging.getLogger(__name__)


def distribute(ledger: Ledger, delta: object) -> Decimal:
    """Add ``delta * share`` to every non-total category.

    Total is re-summed from the categories afterwards rather than adjusted by
    ``delta``, so it always matches its parts even when shares do not add up
    to 100%. Returns the new Total balance.
    """
    amount = to_decimal(delta)
    for record in ledger.categories():
        record.add_to_balance(amount * record.share)
    total = ledger.recalculate_total_balance()
    logger.debug("Distributed %s across %d categories", amount, len(ledger.categories()))
    return total


def apply_to_category(ledger: Ledger, category_id: int, delta: object) -> CategoryRecord:
    """Add ``delta`` to a single category; other categories are left untouched.

    Total is recomputed only when the category exists.
    """
    record = ledger.get(category_id)
    record.add_to_balance(delta)
    ledger.recalculate_total_balance()
    return record
