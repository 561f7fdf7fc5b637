"""Feeds a user's data snapshot to the assistant and insights generator."""

from datetime import date, timedelta
from typing import List

from assistant import Assistant, generate_insights
from logger import get_logger
from models.response import ResponseEnvelope
from models.schemas import ChatRequest, parse_request

logger = get_logger()


class AssistantService:
    """Answers chat messages and produces insights for one user at a time.

    The assistant sees the user's ``transaction_window`` most recent
    transactions and all of their goals. Insights use the last
    ``insights_days`` days of transactions.
    """

    def __init__(
        self,
        users,
        transactions,
        goals,
        provider,
        transaction_window: int = 100,
        insights_days: int = 30,
    ):
        self.users = users
        self.transactions = transactions
        self.goals = goals
        self.provider = provider
        self.assistant = Assistant(provider)
        self.transaction_window = transaction_window
        self.insights_days = insights_days

    def ask(self, user_id: int, message: str) -> ResponseEnvelope:
        """Answer a chat message for a user.

        Raises:
            InvalidInputError: If the message is empty.
        """
        request = parse_request(ChatRequest, {"message": message})

        user = self.users.find(user_id)
        currency = user.currency if user else "INR"

        transactions = self.transactions.find_by_user(
            user_id, limit=self.transaction_window
        )
        goals = self.goals.find_by_user(user_id)
        logger.info(
            f"Answering query for user {user_id} over {len(transactions)} "
            f"transaction(s) and {len(goals)} goal(s)"
        )

        return self.assistant.answer(request.message, transactions, goals, currency)

    def insights(self, user_id: int) -> List[str]:
        """Generate insights from the user's recent transactions."""
        since = date.today() - timedelta(days=self.insights_days)
        transactions = self.transactions.find_since(user_id, since)
        return generate_insights(self.provider, transactions)
