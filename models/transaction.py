from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

TRANSACTION_TYPES = ("debit", "credit")
TRANSACTION_STATUSES = ("pending", "categorized")


@dataclass
class Transaction:
    user_id: int
    transaction_date: date
    description: str
    amount: Decimal  # always positive
    type: str  # 'debit' or 'credit'
    category: str = "Other"
    status: str = "pending"  # 'pending' until the categorizer has run
    confidence: Optional[int] = None  # 0-100, set by the categorizer
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.transaction_date.isoformat(),
            "description": self.description,
            "amount": float(self.amount),
            "type": self.type,
            "category": self.category,
            "status": self.status,
            "confidence": self.confidence,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
