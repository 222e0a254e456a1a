"""Fixed-width text table used to save and load a ledger.

Layout::

    ID | Category     |  Balance    | Percentage   |
    1  | Total        | 600.00      | 100.00       |
    2  | rent         | 420.00      | 70.00        |

Fields are separated by ``" | "`` and each row ends with ``"|"``. Rows are
joined by newlines with no newline after the last one. On load the header and
the stored Total row are skipped; Total is always rebuilt from the categories.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import List, Tuple

from .config import DEFAULT_CAPACITY
from .exceptions import InvalidRecordError
from .ledger import Ledger
from .models import CategoryRecord

__all__ = [
    "HEADER",
    "format_ledger",
    "format_id_listing",
    "format_share_listing",
    "parse_ledger",
    "parse_records",
]

HEADER = "ID | Category     |  Balance    | Percentage   |"
DELIMITER = "|"
NUMERIC_CHARS = frozenset("0123456789.")


def format_record(record: CategoryRecord) -> str:
    return (
        f"{record.id:<2} | {record.name:<12} | {record.balance:<11.2f} | "
        f"{record.percentage:<13.2f}{DELIMITER}"
    )


def format_ledger(ledger: Ledger) -> str:
    """Render the ledger, Total first, as the persisted text table."""
    return "\n".join([HEADER] + [format_record(record) for record in ledger])


def format_id_listing(ledger: Ledger) -> str:
    lines = [f"{'ID':>2} | {'Category':<14}"]
    lines.extend(f"{record.id:>2} | {record.name:<14}" for record in ledger)
    return "\n".join(lines)


def format_share_listing(ledger: Ledger) -> str:
    return "\n".join(
        f"{record.name:<14} | {record.percentage:<4.1f}%" for record in ledger
    )


class _LineReader:
    """Cursor over one table row that reads field by field."""

    def __init__(self, line: str, line_number: int) -> None:
        self._line = line
        self._position = 0
        self.line_number = line_number

    def read_field(self) -> str:
        end = self._line.find(DELIMITER, self._position)
        if end == -1:
            raise InvalidRecordError("missing field delimiter", self.line_number)
        field = self._line[self._position:end]
        self._position = end + 1
        return field

    def skip_separator(self) -> None:
        # Fields are joined by " | "; step over the space that follows the pipe.
        end = self._line.find(" ", self._position)
        if end == -1:
            raise InvalidRecordError("missing field separator", self.line_number)
        self._position = end + 1


def _numeric_token(field: str, label: str, line_number: int) -> str:
    stripped = field.strip()
    sign = "-" if stripped.startswith("-") else ""
    digits = "".join(char for char in stripped if char in NUMERIC_CHARS)
    if not digits:
        raise InvalidRecordError(f"{label} is not a number: {field!r}", line_number)
    return sign + digits


def _parse_decimal(field: str, label: str, line_number: int) -> Decimal:
    token = _numeric_token(field, label, line_number)
    try:
        return Decimal(token)
    except InvalidOperation as exc:
        raise InvalidRecordError(f"{label} is not a number: {field!r}", line_number) from exc


def _parse_id(field: str, line_number: int) -> int:
    token = _numeric_token(field, "id", line_number)
    try:
        return int(token)
    except ValueError as exc:
        raise InvalidRecordError(f"id is not an integer: {field!r}", line_number) from exc


def parse_row(line: str, line_number: int) -> CategoryRecord:
    reader = _LineReader(line, line_number)
    category_id = _parse_id(reader.read_field(), line_number)
    reader.skip_separator()
    name_field = reader.read_field()
    # Whitespace ends a name; anything after the first blank is padding.
    name = name_field.split(" ", 1)[0]
    if not name:
        raise InvalidRecordError("category name is empty", line_number)
    reader.skip_separator()
    balance = _parse_decimal(reader.read_field(), "balance", line_number)
    reader.skip_separator()
    percentage = _parse_decimal(reader.read_field(), "percentage", line_number)
    return CategoryRecord(category_id, name, balance, percentage / 100)


def parse_records(text: str) -> List[CategoryRecord]:
    """Parse the non-total rows of a stored table, in file order."""
    lines: List[Tuple[int, str]] = list(enumerate(text.splitlines(), start=1))
    if not lines:
        raise InvalidRecordError("ledger text is empty")
    # lines[0] is the header, lines[1] the stored Total row.
    records = []
    for line_number, line in lines[2:]:
        if not line.strip():
            continue
        records.append(parse_row(line, line_number))
    return records


def parse_ledger(text: str, capacity: int = DEFAULT_CAPACITY) -> Ledger:
    return Ledger.load(parse_records(text), capacity)
