"""Conversational query orchestration.

A chat message is classified into an Intent, answered by the matching
builder (or by the LLM for general questions) and wrapped in a
ResponseEnvelope. Any failure along the way yields a fixed apology envelope.
"""

from typing import Dict, List, Optional

from assistant.builders import BUILDERS
from assistant.intent import IntentClassifier
from errors import LLMUnavailableError
from llm.providers.base import LLMProvider
from logger import get_logger
from models.goal import Goal
from models.intent import Intent
from models.response import ErrorData, GeneralQueryData, ResponseEnvelope
from models.transaction import Transaction

logger = get_logger()

APOLOGY_MESSAGE = (
    "I'm having trouble processing your request right now. Please try again later."
)

DEFAULT_SUGGESTIONS = [
    "How can I save more money?",
    "Show my spending trends",
    "What are my biggest expenses?",
]

SUGGESTIONS: Dict[Intent, List[str]] = {
    Intent.SPENDING_SUMMARY: [
        "How can I save more money?",
        "How is my budget looking?",
        "How are my goals doing?",
    ],
    Intent.GOAL_PROGRESS: [
        "How can I reach my goals faster?",
        "What are my biggest expenses?",
        "How is my budget looking?",
    ],
    Intent.SAVINGS_TIPS: [
        "Show my spending trends",
        "How are my goals doing?",
        "How is my budget looking?",
    ],
    Intent.BUDGET_STATUS: [
        "What are my biggest expenses?",
        "How can I save more money?",
        "How are my goals doing?",
    ],
    Intent.GENERAL_QUERY: DEFAULT_SUGGESTIONS,
}


def degraded_response() -> ResponseEnvelope:
    """The fixed envelope returned when a query cannot be answered."""
    return ResponseEnvelope(
        message=APOLOGY_MESSAGE,
        data=ErrorData(),
        suggestions=list(DEFAULT_SUGGESTIONS),
    )


class Assistant:
    """Answers chat messages over one user's transactions and goals.

    Args:
        provider: Shared LLM provider, or None when LLM features are disabled
            (every query then gets the degraded envelope).
    """

    def __init__(self, provider: Optional[LLMProvider]):
        self.provider = provider
        self.intent_classifier = IntentClassifier(provider)

    def answer(
        self,
        message: str,
        transactions: List[Transaction],
        goals: List[Goal],
        currency: str = "INR",
    ) -> ResponseEnvelope:
        """Answer a chat message. Never raises."""
        try:
            intent = self.intent_classifier.classify(message)
            logger.info(f"Assistant intent: {intent.value}")

            builder = BUILDERS.get(intent)
            if builder is None:
                envelope = ResponseEnvelope(
                    message=self._answer_general(message),
                    data=GeneralQueryData(),
                    suggestions=list(SUGGESTIONS[Intent.GENERAL_QUERY]),
                )
            else:
                built = builder(transactions, goals, currency)
                envelope = ResponseEnvelope(
                    message=built.message,
                    data=built.data,
                    suggestions=list(SUGGESTIONS[intent]),
                )
        except Exception as e:
            logger.error(f"Assistant query processing failed: {e}")
            return degraded_response()

        return envelope

    def _answer_general(self, message: str) -> str:
        if self.provider is None:
            raise LLMUnavailableError("LLM features are disabled")

        reply = self.provider.complete("general_query", {"message": message}).strip()
        if not reply:
            raise ValueError("LLM returned an empty answer")
        return reply
