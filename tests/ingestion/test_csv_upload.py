import io
import pytest
from datetime import date
from decimal import Decimal

from errors import InvalidInputError
from ingestion.csv_upload import ingest, parse_amount, row_to_transaction


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("-1,250.50", Decimal("-1250.50")),
            ("₹300", Decimal("300")),
            (" 42 ", Decimal("42")),
            ("$-7.25", Decimal("-7.25")),
        ],
    )
    def test_valid(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "NaN", "1.2.3"])
    def test_invalid(self, raw):
        assert parse_amount(raw) is None


class TestRowToTransaction:
    """Tests for row_to_transaction function."""

    def test_negative_amount_is_debit(self):
        row = {"date": "2025-01-15", "description": "Swiggy", "amount": "-250"}

        transaction = row_to_transaction(row, 7)

        assert transaction.user_id == 7
        assert transaction.transaction_date == date(2025, 1, 15)
        assert transaction.description == "Swiggy"
        assert transaction.amount == Decimal("250")
        assert transaction.type == "debit"
        assert transaction.category == "Other"
        assert transaction.status == "pending"

    def test_positive_amount_is_credit(self):
        row = {"Date": "15/01/2025", "Description": "Salary", "Amount": "50000"}

        transaction = row_to_transaction(row, 1)

        assert transaction.type == "credit"
        assert transaction.amount == Decimal("50000")

    @pytest.mark.parametrize(
        "row",
        [
            {"date": "2025-01-15", "description": "", "amount": "10"},
            {"date": "2025-01-15", "description": "X", "amount": ""},
            {"date": "2025-01-15", "description": "X", "amount": "0"},
            {"date": "not a date", "description": "X", "amount": "10"},
            {"date": "", "description": "X", "amount": "10"},
        ],
    )
    def test_invalid_rows_are_skipped(self, row):
        assert row_to_transaction(row, 1) is None


class TestIngest:
    """Tests for ingest function."""

    def test_ingest_skips_bad_rows(self):
        csv_data = """date,description,amount
2025-01-15,Swiggy order,-250
2025-01-16,,-10
2025-01-17,Salary,50000

garbage,Coffee,-5
"""

        transactions = ingest(io.StringIO(csv_data), 1)

        assert [t.description for t in transactions] == ["Swiggy order", "Salary"]
        assert [t.type for t in transactions] == ["debit", "credit"]

    def test_ingest_extra_columns(self):
        csv_data = """Date,Description,Amount,Balance
2025-01-15,Uber,-300,1000
"""

        (transaction,) = ingest(io.StringIO(csv_data), 1)

        assert transaction.description == "Uber"
        assert transaction.amount == Decimal("300")

    def test_ingest_empty_file(self):
        assert ingest(io.StringIO(""), 1) == []

    def test_ingest_malformed_csv(self):
        oversized = "x" * 200_000
        csv_data = f"date,description,amount\n2025-01-15,{oversized},-5\n"

        with pytest.raises(InvalidInputError):
            ingest(io.StringIO(csv_data), 1)
