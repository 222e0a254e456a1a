from decimal import Decimal

import pytest

from budget_core.exceptions import (
    SharesDoNotSumToOneError,
    SharesNotFullySpecifiedError,
    ValidationError,
)
from budget_core.ledger import Ledger
from budget_core.rebalancing import set_shares


def _two_categories():
    ledger = Ledger.initialize_new()
    ledger.add_category("rent", 500)
    ledger.add_category("fun", 100)
    return ledger


def test_set_shares_assigns_in_order_and_totals_one():
    ledger = _two_categories()

    set_shares(ledger, [0.7, 0.3])

    rent, fun = ledger.categories()
    assert rent.share == Decimal("0.7")
    assert fun.share == Decimal("0.3")
    assert ledger.total().share == 1


def test_set_shares_accepts_three_way_split():
    ledger = _two_categories()
    ledger.add_category("save", 0)

    set_shares(ledger, ["0.333", "0.333", "0.334"])

    assert ledger.total().share == Decimal("1")


def test_set_shares_rejects_sum_other_than_one():
    ledger = _two_categories()

    with pytest.raises(SharesDoNotSumToOneError) as excinfo:
        set_shares(ledger, [0.5, 0.4])

    assert excinfo.value.total == Decimal("0.9")
    assert [record.share for record in ledger.categories()] == [1, 0]
    assert ledger.total().share == 1


def test_set_shares_rejects_overshoot():
    ledger = _two_categories()

    with pytest.raises(SharesDoNotSumToOneError):
        set_shares(ledger, [0.7, 0.31])


@pytest.mark.parametrize("shares", [[1.0], [0.5, 0.25, 0.25], []])
def test_set_shares_requires_one_value_per_category(shares):
    ledger = _two_categories()

    with pytest.raises(SharesNotFullySpecifiedError):
        set_shares(ledger, shares)
    assert ledger.categories()[0].share == 1


def test_set_shares_without_categories():
    with pytest.raises(SharesNotFullySpecifiedError):
        set_shares(Ledger.initialize_new(), [])


@pytest.mark.parametrize("shares", [[1.5, -0.5], [-0.25, 1.25], ["2", "-1"]])
def test_set_shares_rejects_values_outside_unit_range(shares):
    ledger = _two_categories()

    with pytest.raises(ValidationError):
        set_shares(ledger, shares)

    assert [record.share for record in ledger.categories()] == [1, 0]
    assert ledger.total().share == 1


def test_set_shares_accepts_range_edges():
    ledger = _two_categories()

    set_shares(ledger, [0, 1])

    assert [record.share for record in ledger.categories()] == [0, 1]
