"""Configuration defaults for the budget ledger with environment overrides."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_CAPACITY = 10
DEFAULT_LEDGER_FILE = "budget.txt"


def get_capacity() -> int:
    """Maximum number of records a ledger holds, Total included."""
    raw = os.getenv("BUDGET_LEDGER_CAPACITY")
    if not raw:
        return DEFAULT_CAPACITY
    try:
        capacity = int(raw)
    except ValueError as exc:
        raise ValueError(f"BUDGET_LEDGER_CAPACITY must be an integer, got {raw!r}") from exc
    if capacity < 1:
        raise ValueError("BUDGET_LEDGER_CAPACITY must be at least 1")
    return capacity


def get_ledger_path() -> Path:
    return Path(os.getenv("BUDGET_LEDGER_FILE", DEFAULT_LEDGER_FILE))


def get_log_level() -> str:
    return os.getenv("BUDGET_LEDGER_LOG_LEVEL", "INFO")
