"""Response envelope returned by the conversational assistant.

The structured ``data`` payload is one of the variants below, tagged by its
``type`` field so callers can handle every case explicitly.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Union


@dataclass
class CategorySpend:
    name: str
    amount: Decimal
    percentage: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "amount": float(self.amount),
            "percentage": self.percentage,
        }


@dataclass
class SpendingSummaryData:
    total_spent: Decimal
    categories: List[CategorySpend]
    type: str = field(default="spending_summary", init=False)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "total_spent": float(self.total_spent),
            "categories": [c.to_dict() for c in self.categories],
        }


@dataclass
class GoalProgressItem:
    name: str
    progress: int
    remaining: Decimal

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "progress": self.progress,
            "remaining": float(self.remaining),
        }


@dataclass
class GoalProgressData:
    active_goals: int
    goals: List[GoalProgressItem]
    type: str = field(default="goal_progress", init=False)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "active_goals": self.active_goals,
            "goals": [g.to_dict() for g in self.goals],
        }


@dataclass
class SavingsTipsData:
    tips: List[str]
    top_category: Optional[str] = None
    type: str = field(default="savings_tips", init=False)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "tips": list(self.tips),
            "top_category": self.top_category,
        }


@dataclass
class BudgetStatusData:
    total_income: Decimal
    total_spent: Decimal
    net: Decimal
    savings_rate: int
    type: str = field(default="budget_status", init=False)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "total_income": float(self.total_income),
            "total_spent": float(self.total_spent),
            "net": float(self.net),
            "savings_rate": self.savings_rate,
        }


@dataclass
class GeneralQueryData:
    type: str = field(default="general_query", init=False)

    def to_dict(self) -> dict:
        return {"type": self.type}


@dataclass
class ErrorData:
    type: str = field(default="error", init=False)

    def to_dict(self) -> dict:
        return {"type": self.type}


ResponseData = Union[
    SpendingSummaryData,
    GoalProgressData,
    SavingsTipsData,
    BudgetStatusData,
    GeneralQueryData,
    ErrorData,
]


@dataclass
class ResponseEnvelope:
    """Uniform reply: message text, structured data, follow-up prompts."""

    message: str
    data: ResponseData
    suggestions: List[str]

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "data": self.data.to_dict(),
            "suggestions": list(self.suggestions),
        }
