"""Conversational intents recognized by the assistant."""

from enum import Enum


class Intent(str, Enum):
    """Closed set of query types the assistant can answer."""

    SPENDING_SUMMARY = "spending_summary"
    GOAL_PROGRESS = "goal_progress"
    SAVINGS_TIPS = "savings_tips"
    BUDGET_STATUS = "budget_status"
    GENERAL_QUERY = "general_query"

    @classmethod
    def parse(cls, label: str) -> "Intent":
        """Map a free-text label to an Intent.

        Unknown labels map to GENERAL_QUERY.
        """
        normalized = label.strip().strip("'\"`").rstrip(".").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            return cls.GENERAL_QUERY
