"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import sqlite3

from llm.providers.base import LLMProvider
from models.goal import Goal
from models.transaction import Transaction


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text())

    conn.commit()


class FakeLLMProvider(LLMProvider):
    """Scripted provider that records every prompt it is asked to run.

    Args:
        replies: Mapping of prompt name to reply. A reply may be a string, an
            exception instance (raised when the prompt runs) or a list of
            either, consumed one per call.
    """

    def __init__(self, replies=None):
        super().__init__()
        self.replies = dict(replies or {})
        self.calls = []
        self._current_prompt = None

    def complete(self, prompt_name, variables):
        self._current_prompt = prompt_name
        self.calls.append((prompt_name, dict(variables)))
        return super().complete(prompt_name, variables)

    def generate_text(self, system_prompt, user_prompt, **kwargs):
        reply = self.replies.get(self._current_prompt, "")
        if isinstance(reply, list):
            reply = reply.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def calls_for(self, prompt_name):
        return [variables for name, variables in self.calls if name == prompt_name]


def make_transaction(
    description="Test transaction",
    amount="100",
    type="debit",
    category="Other",
    user_id=1,
    transaction_date=date(2025, 1, 15),
    status="categorized",
):
    return Transaction(
        user_id=user_id,
        transaction_date=transaction_date,
        description=description,
        amount=Decimal(amount),
        type=type,
        category=category,
        status=status,
    )


def make_goal(
    name="Emergency fund",
    target_amount="300000",
    current_amount="150000",
    deadline=date(2026, 12, 31),
    status="active",
    monthly_contribution="10000",
    user_id=1,
):
    return Goal(
        user_id=user_id,
        name=name,
        description=f"{name} goal",
        target_amount=Decimal(target_amount),
        current_amount=Decimal(current_amount),
        deadline=deadline,
        category="Savings",
        priority="high",
        monthly_contribution=Decimal(monthly_contribution),
        status=status,
    )
