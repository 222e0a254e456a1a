import random
from decimal import Decimal

import pytest

from budget_core.exceptions import (
    CannotModifyTotalError,
    CapacityExceededError,
    CategoryNotFoundError,
    InvalidRecordError,
    ValidationError,
)
from budget_core.ledger import Ledger
from budget_core.models import CategoryRecord


def _ids(ledger):
    return [record.id for record in ledger]


def test_initialize_new_holds_only_total():
    ledger = Ledger.initialize_new()
    total = ledger.total()

    assert ledger.count() == 1
    assert ledger.categories() == []
    assert (total.id, total.name, total.balance, total.share) == (1, "Total", 0, 1)
    assert ledger.next_id == 2
    assert ledger.capacity == 10


def test_first_category_takes_full_share_and_later_ones_none():
    ledger = Ledger.initialize_new()
    rent = ledger.add_category("rent", 500)
    assert rent.id == 2
    assert rent.share == 1

    fun = ledger.add_category("fun", 100)
    assert fun.id == 3
    assert fun.share == 0
    assert rent.share == 1
    assert ledger.total().balance == 600
    assert ledger.count() == 3


def test_add_category_respects_capacity():
    ledger = Ledger.initialize_new(capacity=3)
    ledger.add_category("a", 1)
    ledger.add_category("b", 2)

    with pytest.raises(CapacityExceededError):
        ledger.add_category("c", 3)

    assert ledger.count() == 3
    assert ledger.total().balance == 3
    assert ledger.next_id == 4


def test_remove_category_shifts_later_records_and_updates_total():
    ledger = Ledger.initialize_new()
    ledger.add_category("a", 10)
    ledger.add_category("b", 20)
    ledger.add_category("c", 30)
    ledger.get(3).share = Decimal("0.25")
    ledger.total().share = ledger.sum_shares()

    removed = ledger.remove_category(3)

    assert removed.name == "b"
    assert _ids(ledger) == [1, 2, 4]
    assert [record.name for record in ledger.categories()] == ["a", "c"]
    assert ledger.total().balance == 40
    assert ledger.total().share == 1
    assert ledger.count() == 3


def test_removed_ids_are_never_reissued():
    ledger = Ledger.initialize_new()
    ledger.add_category("a", 0)
    ledger.add_category("b", 0)
    ledger.remove_category(3)
    ledger.remove_category(2)

    replacement = ledger.add_category("c", 0)

    assert replacement.id == 4


def test_remove_total_is_refused():
    ledger = Ledger.initialize_new()
    ledger.add_category("a", 10)

    with pytest.raises(CannotModifyTotalError):
        ledger.remove_category(1)
    assert ledger.count() == 2


def test_remove_unknown_id():
    ledger = Ledger.initialize_new()
    ledger.add_category("a", 10)

    with pytest.raises(CategoryNotFoundError) as excinfo:
        ledger.remove_category(9)
    assert excinfo.value.category_id == 9
    assert ledger.total().balance == 10


def test_find_index_by_id_when_ids_are_dense():
    ledger = Ledger.initialize_new()
    for name in ("a", "b", "c", "d"):
        ledger.add_category(name, 0)

    for index, record in enumerate(ledger):
        assert record.id == index + 1
        assert ledger.find_index_by_id(record.id) == index


def test_find_index_by_id_after_removals():
    ledger = Ledger.initialize_new()
    for name in ("a", "b", "c", "d"):
        ledger.add_category(name, 0)
    ledger.remove_category(2)
    ledger.remove_category(4)
    ledger.add_category("e", 0)

    assert _ids(ledger) == [1, 3, 5, 6]
    assert ledger.find_index_by_id(1) == 0
    assert ledger.find_index_by_id(3) == 1
    assert ledger.find_index_by_id(5) == 2
    assert ledger.find_index_by_id(6) == 3
    assert ledger.find_index_by_id(2) is None
    assert ledger.find_index_by_id(4) is None
    assert ledger.find_index_by_id(0) is None
    assert ledger.find_index_by_id(-3) is None
    assert ledger.find_index_by_id(42) is None


def test_load_rebuilds_total_without_forcing_full_share():
    ledger = Ledger.load(
        [
            (5, "rent", "10.00", "0.5"),
            CategoryRecord(3, "fun", Decimal("20.00"), Decimal("0.25")),
        ]
    )

    assert _ids(ledger) == [1, 5, 3]
    assert ledger.total().name == "Total"
    assert ledger.total().balance == Decimal("30.00")
    assert ledger.total().share == Decimal("0.75")
    assert ledger.next_id == 6


def test_load_empty_starts_ids_after_total():
    ledger = Ledger.load([])

    assert ledger.count() == 1
    assert ledger.total().balance == 0
    assert ledger.total().share == 0
    assert ledger.next_id == 2


def test_load_rejects_duplicate_and_reserved_ids():
    with pytest.raises(InvalidRecordError):
        Ledger.load([(2, "a", 0, 0), (2, "b", 0, 0)])
    with pytest.raises(InvalidRecordError):
        Ledger.load([(1, "Total", 0, 0)])


def test_load_respects_capacity():
    with pytest.raises(CapacityExceededError):
        Ledger.load([(2, "a", 0, 0), (3, "b", 0, 0)], capacity=2)


def test_total_tracks_members_through_random_add_remove_sequences():
    rng = random.Random(20251128)
    ledger = Ledger.initialize_new(capacity=6)
    issued = set()

    for _ in range(300):
        categories = ledger.categories()
        if categories and (ledger.is_full() or rng.random() < 0.4):
            ledger.remove_category(rng.choice(categories).id)
        else:
            balance = Decimal(rng.randint(-5000, 5000)) / 100
            record = ledger.add_category(f"c{len(issued)}", balance)
            assert record.id not in issued
            issued.add(record.id)

        assert ledger.total().balance == ledger.sum_balances()
        assert ledger.total().share == ledger.sum_shares() or not ledger.categories()
        ids = _ids(ledger)
        assert len(ids) == len(set(ids))
        assert ledger.count() <= ledger.capacity


@pytest.mark.parametrize("balance", ["abc", None, ""])
def test_add_category_rejects_malformed_balance(balance):
    ledger = Ledger.initialize_new()

    with pytest.raises(ValidationError):
        ledger.add_category("rent", balance)

    assert ledger.count() == 1
    assert ledger.total().balance == 0
    assert ledger.next_id == 2


@pytest.mark.parametrize("row", [(2, "rent", "abc", "0.5"), (2, "rent", 1, "half"), ("two", "rent", 1, 0)])
def test_load_rejects_malformed_rows(row):
    with pytest.raises(InvalidRecordError):
        Ledger.load([row])
