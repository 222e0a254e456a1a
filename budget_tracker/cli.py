"""Console interface for the budget category tracker."""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from budget_core import config
from budget_core.codec import format_id_listing, format_share_listing
from budget_core.exceptions import (
    CannotModifyTotalError,
    CapacityExceededError,
    CategoryNotFoundError,
    InvalidRecordError,
    LedgerError,
    SharesDoNotSumToOneError,
    StorageUnavailableError,
    ValidationError,
)
from budget_core.logging_setup import configure_logging
from budget_core.services import BudgetService, ensure_not_total
from budget_core.storage import LedgerFileStorage
from budget_core.validators import (
    parse_amount,
    parse_category_id,
    validate_category_name,
    validate_percentage,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
Prompt = Callable[[str], str]
Output = Callable[[str], None]

START_MENU = "Budget Program\n1. New File\n2. Load File\n3. Exit\nChoice: "
MAIN_MENU = (
    "\n1. Display\n2. Add/Subtract balance\n3. Add/Subtract from category\n"
    "4. Modify category percentage\n5. Add/Remove category\n"
    "6. Save File\n7. Exit\nChoice: "
)


def _parse_amount(value: str) -> str:
    try:
        Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError("Amount must be a numeric value") from exc
    return value


def _parse_id(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("ID must be an integer") from exc


def _parse_capacity(value: str) -> int:
    try:
        capacity = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Capacity must be an integer") from exc
    if capacity < 1:
        raise argparse.ArgumentTypeError("Capacity must be at least 1 to hold the Total record")
    return capacity


def _ask(prompt: Prompt, output: Output, message: str, convert: Callable[[str], T]) -> T:
    """Prompt until ``convert`` accepts the answer."""
    while True:
        try:
            return convert(prompt(message))
        except ValidationError as exc:
            output(f"Invalid input: {exc}")


# Interactive menu ---------------------------------------------------------
def _start_menu(service: BudgetService, prompt: Prompt, output: Output) -> bool:
    """Run the New/Load/Exit menu; return False when the user exits."""
    while True:
        choice = prompt(START_MENU).strip()
        if choice == "1":
            service.new()
            return True
        if choice == "2":
            file_name = prompt("Enter the name of your file: ").strip()
            try:
                service.load(file_name)
            except (StorageUnavailableError, InvalidRecordError, CapacityExceededError) as exc:
                output(f"Unable to load {file_name}: {exc}")
                continue
            return True
        if choice == "3":
            return False
        output("Error, invalid choice")


def _ask_non_total_id(prompt: Prompt, output: Output, message: str) -> int:
    while True:
        category_id = _ask(prompt, output, message, parse_category_id)
        try:
            return ensure_not_total(category_id)
        except CannotModifyTotalError as exc:
            output(f"{exc}.")


def _adjust_category(service: BudgetService, prompt: Prompt, output: Output) -> None:
    output("List of Categories:\n" + format_id_listing(service.ledger))
    category_id = _ask_non_total_id(
        prompt, output, "Select a category ID other than Total to modify: "
    )
    amount = _ask(
        prompt,
        output,
        "Enter the amount to add to the category, enter a negative value to subtract: ",
        lambda raw: parse_amount(raw, "amount"),
    )
    try:
        service.adjust_category_balance(category_id, amount)
    except CategoryNotFoundError:
        output("ID not found, no addition/subtraction performed")


def _modify_shares(service: BudgetService, prompt: Prompt, output: Output) -> None:
    ledger = service.ledger
    if not ledger.categories():
        output("No categories except Total exist, cannot modify percentages.")
        return
    output("List of Categories:\n" + format_share_listing(ledger) + "\n")
    while True:
        percentages = [
            _ask(
                prompt,
                output,
                f"Enter the percentage for the {record.name} category (ex: 45.2): ",
                lambda raw: validate_percentage(raw, "percentage"),
            )
            for record in ledger.categories()
        ]
        try:
            service.set_shares(percentages)
        except SharesDoNotSumToOneError as exc:
            output(f"Error: {exc}")
            continue
        break
    output("\nPercentages set:\n" + format_share_listing(ledger))


def _add_or_remove(service: BudgetService, prompt: Prompt, output: Output) -> None:
    output("List of Categories:\n" + format_id_listing(service.ledger))
    category_id = _ask_non_total_id(
        prompt,
        output,
        "Select a category ID to remove, or select a negative value to add "
        "a new category (You cannot select Total): ",
    )
    if category_id > 0:
        try:
            service.remove_category(category_id)
        except CategoryNotFoundError:
            output(f"ID {category_id} not found.")
        else:
            output(f"ID {category_id} removed.")
        return
    if service.ledger.is_full():
        output(
            f"ERROR: There is a limit of {service.ledger.capacity} categories. "
            "Please remove a category to add a new one."
        )
        return
    name = _ask(
        prompt, output, "Enter a name for the new category (Do not include spaces): ",
        validate_category_name,
    )
    balance = _ask(
        prompt, output, "Enter a starting balance for the category: ",
        lambda raw: parse_amount(raw, "balance"),
    )
    output("Percent of Budget will be initialized as 0 or 100, the ID will be automatically chosen.")
    record = service.add_category(name, balance)
    output(f"Category {record.name} added with ID {record.id}.")


def run_menu(
    service: BudgetService,
    prompt: Prompt = input,
    output: Output = print,
) -> int:
    """Interactive menu loop; ``prompt`` and ``output`` stand in for the console."""
    try:
        if not _start_menu(service, prompt, output):
            return 0
        while True:
            choice = prompt(MAIN_MENU).strip()
            if choice == "1":
                output(service.display())
            elif choice == "2":
                amount = _ask(
                    prompt,
                    output,
                    "How much balance are you adding? (enter a negative value for subtraction): ",
                    lambda raw: parse_amount(raw, "amount"),
                )
                service.adjust_total_balance(amount)
            elif choice == "3":
                _adjust_category(service, prompt, output)
            elif choice == "4":
                _modify_shares(service, prompt, output)
            elif choice == "5":
                _add_or_remove(service, prompt, output)
            elif choice == "6":
                file_name = prompt(
                    "Enter the name of the new file (This will override a file if it already exists): "
                ).strip()
                try:
                    path = service.save(file_name)
                except StorageUnavailableError as exc:
                    output(f"Storage error: {exc}")
                else:
                    output(f"Saved to {path}")
            elif choice == "7":
                answer = prompt(
                    "Are you sure you wish to exit? If you have not saved a file "
                    "your data will be lost (y/n): "
                ).strip()
                if answer[:1] in ("y", "Y"):
                    return 0
            else:
                output("Error, invalid choice")
    except EOFError:
        return 0


# One-shot commands --------------------------------------------------------
def handle_command(args: argparse.Namespace, service: BudgetService) -> None:
    if args.command == "show":
        print(service.display())
        return
    if args.command == "distribute":
        total = service.adjust_total_balance(args.amount)
        print(f"Distributed {args.amount}; total balance is now {total:.2f}")
    elif args.command == "adjust":
        record = service.adjust_category_balance(args.id, args.amount)
        print(f"Category {record.name} balance is now {record.balance:.2f}")
    elif args.command == "shares":
        service.set_shares(args.percentages)
        print("Percentages set:\n" + format_share_listing(service.ledger))
    elif args.command == "add":
        record = service.add_category(args.name, args.balance)
        print(f"Category {record.name} added with ID {record.id}.")
    elif args.command == "remove":
        record = service.remove_category(args.id)
        print(f"Category {record.name} (ID {record.id}) removed.")
    service.save(args.file)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Budget Category Tracker CLI")
    parser.add_argument(
        "--file",
        default=config.get_ledger_path(),
        type=Path,
        help="Ledger text file (default: $BUDGET_LEDGER_FILE or ./budget.txt)",
    )
    parser.add_argument(
        "--capacity",
        default=None,
        type=_parse_capacity,
        help="Maximum number of categories, Total included (default: $BUDGET_LEDGER_CAPACITY or 10)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("new", help="Start a new ledger holding only Total")
    subparsers.add_parser("show", help="Display the ledger table")
    subparsers.add_parser("menu", help="Run the interactive menu")

    distribute = subparsers.add_parser(
        "distribute", help="Spread an amount across categories by share"
    )
    distribute.add_argument("amount", type=_parse_amount)

    adjust = subparsers.add_parser("adjust", help="Add/subtract an amount on one category")
    adjust.add_argument("id", type=_parse_id)
    adjust.add_argument("amount", type=_parse_amount)

    shares = subparsers.add_parser(
        "shares", help="Set every category's percentage (must total 100)"
    )
    shares.add_argument("percentages", nargs="+", type=_parse_amount)

    add = subparsers.add_parser("add", help="Add a new category")
    add.add_argument("name")
    add.add_argument("balance", nargs="?", default="0", type=_parse_amount)

    remove = subparsers.add_parser("remove", help="Remove a category by ID")
    remove.add_argument("id", type=_parse_id)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    logger.debug("Running %s against %s", args.command, args.file)

    try:
        capacity = args.capacity if args.capacity is not None else config.get_capacity()
        service = BudgetService(LedgerFileStorage(), capacity=capacity)
        if args.command == "menu":
            return run_menu(service)
        if args.command == "new":
            service.new()
            service.save(args.file)
            print(service.display())
        else:
            service.load(args.file)
            handle_command(args, service)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except StorageUnavailableError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    except LedgerError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
