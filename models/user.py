from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    id: int
    full_name: str
    email: str
    password_hash: str
    age: Optional[int] = None
    currency: str = "INR"
    timezone: str = "Asia/Kolkata"
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert user to a dictionary safe to show (no password hash)."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "age": self.age,
            "currency": self.currency,
            "timezone": self.timezone,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
