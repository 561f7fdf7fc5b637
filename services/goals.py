"""Goal service for database operations."""

from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from errors import NotFoundError
from models.goal import Goal
from models.schemas import GoalCreate, GoalUpdate

_GOAL_SELECT_FIELDS = """id, user_id, name, description, target_amount, current_amount,
       deadline, category, priority, status, monthly_contribution, created_at"""

_UPDATABLE_FIELDS = {
    "name",
    "description",
    "target_amount",
    "current_amount",
    "deadline",
    "category",
    "priority",
    "status",
    "monthly_contribution",
}

_AMOUNT_FIELDS = {"target_amount", "current_amount", "monthly_contribution"}


class GoalService:
    """Service for managing a user's savings goals."""

    def __init__(self, db_manager):
        """Initialize the goal service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, user_id: int, data: GoalCreate) -> Goal:
        """Create a new active goal.

        Args:
            user_id: Owning user.
            data: Validated goal fields. current_amount defaults to 0.

        Returns:
            The created Goal with id and created_at populated.
        """
        current_amount = data.current_amount or Decimal("0")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO goals (user_id, name, description, target_amount,
                    current_amount, deadline, category, priority, status,
                    monthly_contribution)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, 'active', ?)
                """,
                (
                    user_id,
                    data.name,
                    data.description,
                    float(data.target_amount),
                    float(current_amount),
                    data.deadline.isoformat(),
                    data.category,
                    data.priority,
                    float(data.monthly_contribution),
                ),
            )
            conn.commit()
            goal_id = cursor.lastrowid

        return self.find(goal_id, user_id)

    def find(self, goal_id: int, user_id: int) -> Optional[Goal]:
        """Get one of a user's goals by ID.

        Returns:
            Goal object if found for this user, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_GOAL_SELECT_FIELDS} FROM goals WHERE id = ? AND user_id = ?",
                (goal_id, user_id),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_goal(row)
            return None

    def find_by_user(self, user_id: int) -> List[Goal]:
        """Get all of a user's goals, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_GOAL_SELECT_FIELDS}
                FROM goals
                WHERE user_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (user_id,),
            )
            return [self._row_to_goal(row) for row in cursor.fetchall()]

    def update(self, goal_id: int, user_id: int, changes: GoalUpdate) -> Goal:
        """Apply validated changes to a user's goal.

        Returns:
            The updated Goal.

        Raises:
            NotFoundError: If the goal does not exist for this user.
        """
        provided = changes.model_dump(exclude_unset=True, exclude_none=True)
        fields = [field for field in provided if field in _UPDATABLE_FIELDS]

        if not fields:
            goal = self.find(goal_id, user_id)
            if goal is None:
                raise NotFoundError("Goal not found")
            return goal

        values = []
        for field in fields:
            value = provided[field]
            if field in _AMOUNT_FIELDS:
                value = float(value)
            elif field == "deadline":
                value = value.isoformat()
            values.append(value)

        set_clause = ", ".join(f"{field} = ?" for field in fields)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"UPDATE goals SET {set_clause} WHERE id = ? AND user_id = ?",
                (*values, goal_id, user_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise NotFoundError("Goal not found")

        return self.find(goal_id, user_id)

    def delete(self, goal_id: int, user_id: int) -> bool:
        """Delete one of a user's goals.

        Returns:
            True if deleted, False if not found for this user.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM goals WHERE id = ? AND user_id = ?", (goal_id, user_id)
            )
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_goal(self, row: tuple) -> Goal:
        """Convert a database row to a Goal object."""
        return Goal(
            id=row[0],
            user_id=row[1],
            name=row[2],
            description=row[3],
            target_amount=Decimal(str(row[4])),
            current_amount=Decimal(str(row[5])),
            deadline=date.fromisoformat(row[6]),
            category=row[7],
            priority=row[8],
            status=row[9],
            monthly_contribution=Decimal(str(row[10])),
            created_at=datetime.fromisoformat(row[11]) if row[11] else None,
        )
