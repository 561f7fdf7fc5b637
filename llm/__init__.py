"""LLM integration module for categorization and the assistant."""

from llm.factory import get_llm_provider
from llm.parsing import extract_json_text

__all__ = ["get_llm_provider", "extract_json_text"]
