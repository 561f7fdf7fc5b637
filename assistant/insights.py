"""AI-generated spending insights."""

import json
from typing import List, Optional

from pydantic import TypeAdapter

from llm.parsing import extract_json_text
from llm.providers.base import LLMProvider
from logger import get_logger
from models.transaction import Transaction

logger = get_logger()

MAX_TRANSACTIONS_IN_PROMPT = 50

DEFAULT_INSIGHTS = [
    "Keep tracking your expenses for better insights!",
    "Consider setting up a monthly budget.",
    "Review your spending categories regularly.",
]

_insights_adapter = TypeAdapter(List[str])


def generate_insights(
    provider: Optional[LLMProvider], transactions: List[Transaction]
) -> List[str]:
    """Ask the LLM for three short insights about recent transactions.

    Args:
        provider: Shared LLM provider, or None when LLM features are disabled.
        transactions: Recent transactions, newest first. Only the first 50
            are sent to the model.

    Returns:
        List of insight strings. Falls back to DEFAULT_INSIGHTS on any failure.
    """
    if provider is None:
        return list(DEFAULT_INSIGHTS)

    payload = json.dumps(
        [
            {
                "date": t.transaction_date.isoformat(),
                "description": t.description,
                "amount": float(t.amount),
                "type": t.type,
                "category": t.category,
            }
            for t in transactions[:MAX_TRANSACTIONS_IN_PROMPT]
        ]
    )

    try:
        reply = provider.complete("insights", {"transactions": payload})
        insights = _insights_adapter.validate_json(extract_json_text(reply))
    except Exception as e:
        logger.warning(f"Insights generation failed: {e}")
        return list(DEFAULT_INSIGHTS)

    insights = [text.strip() for text in insights if text.strip()]
    if not insights:
        return list(DEFAULT_INSIGHTS)

    return insights
