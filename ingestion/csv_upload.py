import csv
import re
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, TextIO

from dateutil import parser as date_parser

from errors import InvalidInputError
from logger import get_logger
from models.transaction import Transaction

logger = get_logger()

# Accepted spellings for each column, first match wins
DATE_COLUMNS = ("date", "Date")
DESCRIPTION_COLUMNS = ("description", "Description")
AMOUNT_COLUMNS = ("amount", "Amount")

_AMOUNT_NOISE_RE = re.compile(r"[,\s₹$€£]")


def _first_value(row: Dict[str, Optional[str]], columns) -> str:
    for column in columns:
        value = row.get(column)
        if value:
            return value.strip()
    return ""


def parse_amount(raw: str) -> Optional[Decimal]:
    """Parse an amount such as "-1,250.50" or "₹300". Returns None if invalid."""
    cleaned = _AMOUNT_NOISE_RE.sub("", raw)
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def row_to_transaction(row: Dict[str, Optional[str]], user_id: int) -> Optional[Transaction]:
    """Convert one CSV row into a pending transaction.

    Returns:
        The Transaction, or None when the row lacks a description, a non-zero
        amount or a parseable date.
    """
    description = _first_value(row, DESCRIPTION_COLUMNS)
    amount_value = parse_amount(_first_value(row, AMOUNT_COLUMNS))
    date_str = _first_value(row, DATE_COLUMNS)

    if not description or not amount_value or not date_str:
        return None

    try:
        transaction_date = date_parser.parse(date_str).date()
    except (ValueError, OverflowError):
        return None

    return Transaction(
        user_id=user_id,
        transaction_date=transaction_date,
        description=description,
        amount=abs(amount_value),
        type="debit" if amount_value < 0 else "credit",
        category="Other",
        status="pending",
    )


def ingest(source: TextIO, user_id: int) -> List[Transaction]:
    """
    Ingest an uploaded CSV of transactions.

    Expected format:
    - Header row naming at least date, description and amount columns
      (lower-case or capitalized)
    - Negative amounts are debits, positive amounts are credits

    Raises:
        InvalidInputError: If the file is not valid CSV.
    """
    transactions = []
    reader = csv.DictReader(source)

    line_num = 1
    try:
        for row in reader:
            line_num += 1

            if not any(value and value.strip() for value in row.values() if isinstance(value, str)):
                continue

            transaction = row_to_transaction(row, user_id)
            if transaction is None:
                logger.warning(f"Skipping invalid line {line_num}: {row}")
                continue

            transactions.append(transaction)
    except csv.Error as e:
        logger.error(f"Malformed CSV at line {line_num}: {e}")
        raise InvalidInputError("Invalid CSV format") from e

    logger.info(f"Parsed {len(transactions)} transactions from CSV")
    return transactions
