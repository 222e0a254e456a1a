"""Validation helpers shared by the ledger surfaces."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, List

from .exceptions import ValidationError
from .models import to_decimal

FIELD_DELIMITER = "|"
WHITESPACE_PATTERN = re.compile(r"\s")


def parse_amount(raw: object, field: str) -> Decimal:
    """Convert raw input to a Decimal; negative values are allowed."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = to_decimal(raw)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return amount


def validate_percentage(raw: object, field: str) -> Decimal:
    """Return a percentage between 0 and 100 inclusive."""
    percentage = parse_amount(raw, field)
    if not 0 <= percentage <= 100:
        raise ValidationError(f"{field} must be between 0 and 100")
    return percentage


def parse_percentage(raw: object, field: str) -> Decimal:
    """Convert a percentage (``45.2``) into its share fraction (``0.452``)."""
    return validate_percentage(raw, field) / 100


def parse_percentages(raw_values: Iterable[object]) -> List[Decimal]:
    return [
        parse_percentage(raw, f"percentage #{position}")
        for position, raw in enumerate(raw_values, start=1)
    ]


def parse_category_id(raw: object, field: str = "id") -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be an integer") from exc


def validate_category_name(value: object) -> str:
    """Return the name up to its first whitespace character.

    Whitespace terminates a name both when typed and when parsed back from a
    saved ledger, so only the first token is kept.
    """
    if not isinstance(value, str):
        raise ValidationError("name must be a string")
    token = WHITESPACE_PATTERN.split(value.strip(), maxsplit=1)[0]
    if not token:
        raise ValidationError("name cannot be empty")
    if FIELD_DELIMITER in token:
        raise ValidationError(f"name cannot contain '{FIELD_DELIMITER}'")
    return token
