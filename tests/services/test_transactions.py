import json
from datetime import date, timedelta
from decimal import Decimal

import pytest

from errors import NotFoundError
from models.schemas import TransactionCreate, TransactionUpdate
from tests.helpers import make_transaction


def _create(**fields):
    values = {
        "date": date(2025, 1, 15),
        "description": "Swiggy order",
        "amount": Decimal("250"),
        "type": "debit",
    }
    values.update(fields)
    return TransactionCreate(**values)


class TestTransactionService:
    """Tests for TransactionService."""

    def test_add_categorizes_by_rule(self, services, user):
        transaction = services.transactions.add(user.id, _create())

        assert transaction.id is not None
        assert transaction.category == "Food & Dining"
        assert transaction.confidence == 95
        assert transaction.status == "categorized"
        assert transaction.amount == Decimal("250")
        assert transaction.created_at is not None

    def test_add_with_category_skips_categorizer(self, services, user, fake_llm):
        transaction = services.transactions.add(
            user.id, _create(description="XYZ Corp", category="Shopping")
        )

        assert transaction.category == "Shopping"
        assert transaction.confidence == 100
        assert fake_llm.calls == []

    def test_add_falls_back_to_llm(self, services, user, fake_llm):
        fake_llm.replies["categorization"] = json.dumps(
            {"category": "Healthcare", "confidence": 70}
        )

        transaction = services.transactions.add(
            user.id, _create(description="City clinic")
        )

        assert transaction.category == "Healthcare"
        assert transaction.confidence == 70

    def test_bulk_create(self, services, user):
        transactions = [
            make_transaction(f"Txn {i}", user_id=user.id, status="pending")
            for i in range(3)
        ]

        services.transactions.bulk_create(transactions)

        assert all(t.id is not None for t in transactions)
        assert len(services.transactions.find_by_user(user.id)) == 3

    def test_bulk_create_rolls_back_on_error(self, services, user):
        transactions = [
            make_transaction("Good", user_id=user.id),
            make_transaction("Bad", amount="-5", user_id=user.id),
        ]

        with pytest.raises(Exception):
            services.transactions.bulk_create(transactions)

        assert services.transactions.find_by_user(user.id) == []
        assert transactions[0].id is None

    def test_bulk_create_empty_list(self, services):
        assert services.transactions.bulk_create([]) == []

    def test_find_by_user_newest_first_with_filters(self, services, user):
        services.transactions.bulk_create(
            [
                make_transaction(
                    "Old", "10", "debit", "Shopping", user.id, date(2025, 1, 1)
                ),
                make_transaction(
                    "New", "20", "debit", "Shopping", user.id, date(2025, 2, 1)
                ),
                make_transaction(
                    "Pay", "30", "credit", "Income", user.id, date(2025, 1, 15)
                ),
            ]
        )

        all_rows = services.transactions.find_by_user(user.id)
        shopping = services.transactions.find_by_user(user.id, category="Shopping")
        credits = services.transactions.find_by_user(user.id, transaction_type="credit")
        limited = services.transactions.find_by_user(user.id, limit=1)

        assert [t.description for t in all_rows] == ["New", "Pay", "Old"]
        assert [t.description for t in shopping] == ["New", "Old"]
        assert [t.description for t in credits] == ["Pay"]
        assert [t.description for t in limited] == ["New"]

    def test_transactions_are_scoped_to_user(self, services, user):
        other = services.users.create("Ravi Kumar", "ravi@example.com", 40, "x")
        created = services.transactions.add(user.id, _create())

        assert services.transactions.find(created.id, other.id) is None
        assert services.transactions.find_by_user(other.id) == []
        assert services.transactions.delete(created.id, other.id) is False
        with pytest.raises(NotFoundError):
            services.transactions.apply_update(
                created.id, other.id, TransactionUpdate(description="Hacked")
            )

    def test_find_since(self, services, user):
        today = date.today()
        services.transactions.bulk_create(
            [
                make_transaction(
                    "Recent", user_id=user.id, transaction_date=today - timedelta(days=3)
                ),
                make_transaction(
                    "Stale", user_id=user.id, transaction_date=today - timedelta(days=60)
                ),
            ]
        )

        recent = services.transactions.find_since(user.id, today - timedelta(days=30))

        assert [t.description for t in recent] == ["Recent"]

    def test_find_pending(self, services, user):
        services.transactions.bulk_create(
            [
                make_transaction("Waiting", user_id=user.id, status="pending"),
                make_transaction("Done", user_id=user.id),
            ]
        )

        pending = services.transactions.find_pending(user.id)

        assert [t.description for t in pending] == ["Waiting"]

    def test_apply_update_category_marks_categorized(self, services, user):
        (pending,) = services.transactions.bulk_create(
            [make_transaction("Mystery", user_id=user.id, status="pending")]
        )

        updated = services.transactions.apply_update(
            pending.id, user.id, TransactionUpdate(category="Education")
        )

        assert updated.category == "Education"
        assert updated.status == "categorized"
        assert updated.confidence == 100

    def test_apply_update_fields(self, services, user):
        created = services.transactions.add(user.id, _create())

        updated = services.transactions.apply_update(
            created.id,
            user.id,
            TransactionUpdate(
                date=date(2025, 3, 1), amount=Decimal("99.5"), type="credit"
            ),
        )

        assert updated.transaction_date == date(2025, 3, 1)
        assert updated.amount == Decimal("99.5")
        assert updated.type == "credit"
        assert updated.category == "Food & Dining"

    def test_update_rejects_unknown_fields(self, services, user):
        created = services.transactions.add(user.id, _create())

        with pytest.raises(ValueError):
            services.transactions.update(created, ["user_id"])
        with pytest.raises(ValueError):
            services.transactions.update(created, [])

    def test_delete(self, services, user):
        created = services.transactions.add(user.id, _create())

        assert services.transactions.delete(created.id, user.id) is True
        assert services.transactions.find(created.id, user.id) is None
        assert services.transactions.delete(created.id, user.id) is False
