"""Shared fixtures for the budget ledger tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from budget_core.ledger import Ledger
from budget_core.rebalancing import set_shares
from budget_core.services import BudgetService
from budget_core.storage import LedgerFileStorage


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment overrides out of the tests."""
    for name in (
        "BUDGET_LEDGER_CAPACITY",
        "BUDGET_LEDGER_FILE",
        "BUDGET_LEDGER_LOG_LEVEL",
        "BUDGET_LEDGER_ENV",
        "BUDGET_LEDGER_ALLOWED_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_package_loggers():
    """Drop handlers the CLI attaches so later tests do not write to stale streams."""
    yield
    for name in ("budget_core", "budget_tracker", "budget_api"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def budget() -> Ledger:
    """rent 500 / fun 100 split 70/30."""
    ledger = Ledger.initialize_new()
    ledger.add_category("rent", 500)
    ledger.add_category("fun", 100)
    set_shares(ledger, [0.7, 0.3])
    return ledger


@pytest.fixture
def service(tmp_path: Path) -> BudgetService:
    return BudgetService(LedgerFileStorage(tmp_path))
