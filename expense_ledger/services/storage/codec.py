"""
CSV Codec for Expenses

Converts between a list of Expense records and the durable text format:

    ID,Name,Amount,Date,Category,Description
    3f2c...,"Lunch, Fri",12.50,2024-03-01,FOOD,"a ""quick"" bite"

QUOTING RULE: A text field is wrapped in double quotes only when it
contains a comma, a double quote, a line feed or a carriage return.
Inner double quotes are doubled. Everything else, including
numeric-looking text and leading/trailing spaces, is written verbatim
and read back verbatim.

DECODING: The first logical line is the header and is skipped without
checking it. Rows with fewer than six fields are skipped. Amounts must
be plain decimals such as 12.50 or -3 with nothing around them. Any other
malformed value aborts the whole decode with a DecodeError.
"""

import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, Iterator

from pydantic import ValidationError

from expense_ledger.models.expense import Expense, ExpenseCategory
from expense_ledger.services.storage.interface import DecodeError


HEADER = ["ID", "Name", "Amount", "Date", "Category", "Description"]
FIELD_COUNT = len(HEADER)

_QUOTE = '"'
_SPECIAL_CHARS = (",", _QUOTE, "\n", "\r")
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
_AMOUNT_PATTERN = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")
_CENT = Decimal("0.01")


# =============================================================================
# ENCODING
# =============================================================================

def escape_field(value: str) -> str:
    """Quote a field if it contains a separator, quote or line break."""
    if any(char in value for char in _SPECIAL_CHARS):
        return _QUOTE + value.replace(_QUOTE, _QUOTE * 2) + _QUOTE
    return value


def format_amount(amount: Decimal) -> str:
    """Two fractional digits, rounding half up, at any magnitude."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return str(amount.quantize(_CENT, rounding=ROUND_HALF_UP))


def encode_row(expense: Expense) -> str:
    return ",".join([
        escape_field(expense.id),
        escape_field(expense.name),
        format_amount(expense.amount),
        expense.date.isoformat(),
        expense.category.machine_name,
        escape_field(expense.description),
    ])


def encode(expenses: Iterable[Expense]) -> str:
    """Encode expenses as CSV text: header line, then one line per expense."""
    lines = [",".join(HEADER)]
    lines.extend(encode_row(expense) for expense in expenses)
    return "\n".join(lines) + "\n"


# =============================================================================
# DECODING
# =============================================================================

def split_records(text: str) -> Iterator[tuple[int, list[str]]]:
    """
    Split CSV text into logical records.

    Yields (line_number, fields) where line_number is the 1-based physical
    line the record starts on. Line breaks inside quoted fields belong to
    the field, so one record may span several physical lines.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    line_number = 1
    record_start = 1

    idx = 0
    length = len(text)
    while idx < length:
        char = text[idx]
        if in_quotes:
            if char == _QUOTE:
                if idx + 1 < length and text[idx + 1] == _QUOTE:
                    current.append(_QUOTE)
                    idx += 1
                else:
                    in_quotes = False
            else:
                if char == "\n":
                    line_number += 1
                current.append(char)
        elif char == _QUOTE:
            in_quotes = True
        elif char == ",":
            fields.append("".join(current))
            current = []
        elif char == "\r" and idx + 1 < length and text[idx + 1] == "\n":
            # CRLF line ending; the LF ends the record
            pass
        elif char == "\n":
            fields.append("".join(current))
            yield record_start, fields
            fields = []
            current = []
            line_number += 1
            record_start = line_number
        else:
            current.append(char)
        idx += 1

    if fields or current or in_quotes:
        fields.append("".join(current))
        yield record_start, fields


def parse_amount(text: str, line_number: int) -> Decimal:
    if not _AMOUNT_PATTERN.fullmatch(text):
        raise DecodeError(f"Invalid amount: {text!r}", line_number)
    return Decimal(text)


def parse_date(text: str, line_number: int) -> date:
    if not _DATE_PATTERN.fullmatch(text):
        raise DecodeError(
            f"Invalid date: {text!r} (expected YYYY-MM-DD)", line_number
        )
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise DecodeError(f"Invalid date: {text!r}", line_number)


def parse_category(text: str, line_number: int) -> ExpenseCategory:
    try:
        return ExpenseCategory.from_machine_name(text)
    except ValueError as e:
        raise DecodeError(str(e), line_number)


def decode_row(fields: list[str], line_number: int) -> Expense:
    """
    Build an Expense from the first six fields of a row.

    Raises:
        DecodeError: If any value cannot be parsed
    """
    expense_id, name, amount_text, date_text, category_text, description = (
        fields[:FIELD_COUNT]
    )
    amount = parse_amount(amount_text, line_number)
    expense_date = parse_date(date_text, line_number)
    category = parse_category(category_text, line_number)

    try:
        return Expense(
            id=expense_id,
            name=name,
            amount=amount,
            date=expense_date,
            category=category,
            description=description,
        )
    except ValidationError as e:
        raise DecodeError(f"Invalid expense record: {e}", line_number)


def decode(text: str) -> list[Expense]:
    """
    Decode CSV text produced by `encode`.

    Raises:
        DecodeError: On the first malformed value or repeated id.
            No partial result is returned.
    """
    records = split_records(text)
    next(records, None)  # header

    expenses = []
    seen_ids = set()
    for line_number, fields in records:
        if len(fields) < FIELD_COUNT:
            continue

        expense = decode_row(fields, line_number)
        if expense.id in seen_ids:
            raise DecodeError(f"Duplicate expense id: {expense.id}", line_number)
        seen_ids.add(expense.id)
        expenses.append(expense)

    return expenses
