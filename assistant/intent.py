"""Intent classification for chat messages."""

from typing import Optional

from errors import LLMUnavailableError
from llm.providers.base import LLMProvider
from logger import get_logger
from models.intent import Intent

logger = get_logger()


class IntentClassifier:
    """Maps a free-text message to one Intent using the LLM."""

    def __init__(self, provider: Optional[LLMProvider]):
        self.provider = provider

    def classify(self, message: str) -> Intent:
        """Classify a message.

        Raises:
            LLMUnavailableError: If no provider is configured.
            Exception: Provider errors are not caught here.
        """
        if self.provider is None:
            raise LLMUnavailableError("LLM features are disabled")

        reply = self.provider.complete(
            "intent",
            {
                "intents": ", ".join(f"'{intent.value}'" for intent in Intent),
                "message": message,
            },
        )
        intent = Intent.parse(reply)

        logger.debug(f"Classified message as {intent.value} (raw reply: {reply!r})")
        return intent
