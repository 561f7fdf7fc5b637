"""User service for database operations."""

from typing import Optional
from datetime import datetime

from errors import NotFoundError
from models.schemas import SettingsUpdate
from models.user import User

_USER_SELECT_FIELDS = (
    "id, full_name, email, age, password_hash, currency, timezone, created_at"
)


class UserService:
    """Service for managing user accounts."""

    def __init__(self, db_manager):
        """Initialize the user service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(
        self, full_name: str, email: str, age: Optional[int], password_hash: str
    ) -> User:
        """Create a new user with default currency and timezone.

        Raises:
            sqlite3.IntegrityError: If the email is already registered.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO users (full_name, email, age, password_hash)
                VALUES (?, ?, ?, ?)
                """,
                (full_name, email, age, password_hash),
            )
            conn.commit()
            user_id = cursor.lastrowid

        return self.find(user_id)

    def find(self, user_id: int) -> Optional[User]:
        """Get a single user by ID."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_USER_SELECT_FIELDS} FROM users WHERE id = ?", (user_id,)
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_user(row)
            return None

    def find_by_email(self, email: str) -> Optional[User]:
        """Get a single user by email (case-insensitive)."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_USER_SELECT_FIELDS} FROM users WHERE lower(email) = lower(?)",
                (email,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_user(row)
            return None

    def update_settings(self, user_id: int, changes: SettingsUpdate) -> User:
        """Update profile settings.

        Raises:
            NotFoundError: If the user does not exist.
        """
        provided = changes.model_dump(exclude_unset=True, exclude_none=True)

        if provided:
            set_clause = ", ".join(f"{field} = ?" for field in provided)
            with self.db_manager.connect() as conn:
                conn.execute(
                    f"UPDATE users SET {set_clause} WHERE id = ?",
                    (*provided.values(), user_id),
                )
                conn.commit()

        user = self.find(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _row_to_user(self, row: tuple) -> User:
        return User(
            id=row[0],
            full_name=row[1],
            email=row[2],
            age=row[3],
            password_hash=row[4],
            currency=row[5],
            timezone=row[6],
            created_at=datetime.fromisoformat(row[7]) if row[7] else None,
        )
