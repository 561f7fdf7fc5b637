"""Conversational assistant over a user's transactions and goals."""

from assistant.orchestrator import Assistant
from assistant.insights import generate_insights

__all__ = ["Assistant", "generate_insights"]
