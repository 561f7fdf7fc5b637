"""Transaction service for database operations."""

from typing import Dict, List, Optional
from datetime import date, datetime
from decimal import Decimal

from errors import NotFoundError
from models.schemas import TransactionCreate, TransactionUpdate
from models.transaction import Transaction

_TRANSACTION_SELECT_FIELDS = """id, user_id, transaction_date, description, amount,
       transaction_type, category, status, confidence, created_at"""

_TRANSACTION_INSERT_FIELDS = """user_id, transaction_date, description, amount,
    transaction_type, category, status, confidence"""

_TRANSACTION_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_TRANSACTION_INSERT_FIELDS.split(',')))})"
)

# Model attribute -> column for fields that may be updated
_UPDATABLE_COLUMNS: Dict[str, str] = {
    "transaction_date": "transaction_date",
    "description": "description",
    "amount": "amount",
    "type": "transaction_type",
    "category": "category",
    "status": "status",
    "confidence": "confidence",
}


def _insert_values(t: Transaction) -> tuple:
    return (
        t.user_id,
        t.transaction_date.isoformat(),
        t.description,
        float(t.amount),
        t.type,
        t.category,
        t.status,
        t.confidence,
    )


def _column_value(transaction: Transaction, field: str):
    value = getattr(transaction, field)
    if field == "transaction_date":
        return value.isoformat()
    if field == "amount":
        return float(value)
    return value


class TransactionService:
    """Service for managing a user's transactions."""

    def __init__(self, db_manager, categorizer=None):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
            categorizer: TransactionCategorizer used when a new transaction
                arrives without a category.
        """
        self.db_manager = db_manager
        self.categorizer = categorizer

    def add(self, user_id: int, data: TransactionCreate) -> Transaction:
        """Record a manually entered transaction.

        If no category is given the categorizer decides one. The stored
        transaction is always categorized.

        Args:
            user_id: Owning user.
            data: Validated transaction fields.

        Returns:
            The stored Transaction.
        """
        if data.category:
            category, confidence = data.category, 100
        elif self.categorizer is not None:
            result = self.categorizer.categorize(data.description)
            category, confidence = result.category, result.confidence
        else:
            category, confidence = "Other", None

        transaction = Transaction(
            user_id=user_id,
            transaction_date=data.date,
            description=data.description,
            amount=data.amount,
            type=data.type,
            category=category,
            status="categorized",
            confidence=confidence,
        )
        return self.create(transaction)

    def create(self, transaction: Transaction) -> Transaction:
        """Insert a single transaction.

        Returns:
            The stored transaction with id and created_at populated.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                INSERT INTO transactions ({_TRANSACTION_INSERT_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                _insert_values(transaction),
            )
            conn.commit()
            transaction_id = cursor.lastrowid

        return self.find(transaction_id, transaction.user_id)

    def bulk_create(self, transactions: List[Transaction]) -> List[Transaction]:
        """Insert multiple transactions in a single database transaction.

        Args:
            transactions: Transactions to insert. Their ``id`` is set in place.

        Returns:
            The same transactions with ids populated.

        Raises:
            Exception: If any insert fails. All inserts are rolled back.
        """
        if not transactions:
            return transactions

        with self.db_manager.connect() as conn:
            try:
                for t in transactions:
                    cursor = conn.execute(
                        f"""
                        INSERT INTO transactions ({_TRANSACTION_INSERT_FIELDS})
                        VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                        """,
                        _insert_values(t),
                    )
                    t.id = cursor.lastrowid
                conn.commit()
            except Exception:
                conn.rollback()
                for t in transactions:
                    t.id = None
                raise

        return transactions

    def update(self, transaction: Transaction, field_names: List[str]) -> bool:
        """Write the given fields of a transaction back to the database.

        The update is scoped to the transaction's owner.

        Args:
            transaction: Transaction carrying the new values.
            field_names: Model attributes to update. Supported: transaction_date,
                description, amount, type, category, status, confidence.

        Returns:
            True if a row was updated.

        Raises:
            ValueError: If field_names is empty or has unsupported names.
        """
        if not field_names:
            raise ValueError("field_names cannot be empty")

        invalid_fields = set(field_names) - set(_UPDATABLE_COLUMNS)
        if invalid_fields:
            raise ValueError(f"Unsupported field names: {invalid_fields}")

        set_clause = ", ".join(
            f"{_UPDATABLE_COLUMNS[field]} = ?" for field in field_names
        )
        values = [_column_value(transaction, field) for field in field_names]

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"UPDATE transactions SET {set_clause} WHERE id = ? AND user_id = ?",
                (*values, transaction.id, transaction.user_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def apply_update(
        self, transaction_id: int, user_id: int, changes: TransactionUpdate
    ) -> Transaction:
        """Apply validated changes to a user's transaction.

        Setting a category marks the transaction as categorized.

        Raises:
            NotFoundError: If the transaction does not exist for this user.
        """
        transaction = self.find(transaction_id, user_id)
        if transaction is None:
            raise NotFoundError("Transaction not found")

        provided = changes.model_dump(exclude_unset=True, exclude_none=True)
        if not provided:
            return transaction

        field_names = []
        for key, value in provided.items():
            field = "transaction_date" if key == "date" else key
            setattr(transaction, field, value)
            field_names.append(field)

        if "category" in provided:
            transaction.status = "categorized"
            transaction.confidence = 100
            field_names.extend(["status", "confidence"])

        self.update(transaction, field_names)
        return self.find(transaction_id, user_id)

    def find(self, transaction_id: int, user_id: int) -> Optional[Transaction]:
        """Get one of a user's transactions by ID.

        Returns:
            Transaction object if found for this user, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE id = ? AND user_id = ?
                """,
                (transaction_id, user_id),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def find_by_user(
        self,
        user_id: int,
        *,
        category: Optional[str] = None,
        transaction_type: Optional[str] = None,
        limit: Optional[int] = 100,
    ) -> List[Transaction]:
        """Get a user's transactions, newest first.

        Args:
            user_id: Owning user.
            category: Optional exact category filter.
            transaction_type: Optional 'debit' or 'credit' filter.
            limit: Maximum rows to return. None returns everything.

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        query = f"""
            SELECT {_TRANSACTION_SELECT_FIELDS}
            FROM transactions
            WHERE user_id = ?
        """
        params: list = [user_id]

        if category is not None:
            query += " AND category = ?"
            params.append(category)

        if transaction_type is not None:
            query += " AND transaction_type = ?"
            params.append(transaction_type)

        query += " ORDER BY transaction_date DESC, id DESC"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_since(self, user_id: int, since: date) -> List[Transaction]:
        """Get a user's transactions dated on or after ``since``, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE user_id = ? AND transaction_date >= ?
                ORDER BY transaction_date DESC, id DESC
                """,
                (user_id, since.isoformat()),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_pending(self, user_id: int) -> List[Transaction]:
        """Get a user's transactions that have not been categorized yet."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE user_id = ? AND status = 'pending'
                ORDER BY transaction_date DESC, id DESC
                """,
                (user_id,),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def delete(self, transaction_id: int, user_id: int) -> bool:
        """Delete one of a user's transactions.

        Returns:
            True if deleted, False if not found for this user.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM transactions WHERE id = ? AND user_id = ?",
                (transaction_id, user_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            user_id=row[1],
            transaction_date=date.fromisoformat(row[2]),
            description=row[3],
            amount=Decimal(str(row[4])),
            type=row[5],
            category=row[6],
            status=row[7],
            confidence=row[8],
            created_at=datetime.fromisoformat(row[9]) if row[9] else None,
        )
