"""Goal model for savings targets."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

GOAL_PRIORITIES = ("high", "medium", "low")
GOAL_STATUSES = ("active", "completed", "paused")


@dataclass
class Goal:
    """Represents a user's savings goal.

    Attributes:
        user_id: Owning user.
        name: Short goal name (e.g., "Emergency fund").
        description: Free-text description.
        target_amount: Amount to reach (positive).
        current_amount: Amount saved so far.
        deadline: Date the goal should be reached by.
        category: User-chosen goal category.
        priority: One of 'high', 'medium', 'low'.
        monthly_contribution: Planned monthly saving towards the goal.
        status: One of 'active', 'completed', 'paused'.
        id: Unique identifier (auto-generated).
        created_at: Creation timestamp.
    """

    user_id: int
    name: str
    description: str
    target_amount: Decimal
    current_amount: Decimal
    deadline: date
    category: str
    priority: str
    monthly_contribution: Decimal
    status: str = "active"
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert goal to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "target_amount": float(self.target_amount),
            "current_amount": float(self.current_amount),
            "deadline": self.deadline.isoformat(),
            "category": self.category,
            "priority": self.priority,
            "monthly_contribution": float(self.monthly_contribution),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
