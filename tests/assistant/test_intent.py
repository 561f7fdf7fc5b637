import pytest

from assistant.intent import IntentClassifier
from errors import LLMUnavailableError
from models.intent import Intent
from tests.helpers import FakeLLMProvider


class TestIntentParse:
    """Tests for Intent.parse."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("spending_summary", Intent.SPENDING_SUMMARY),
            ("  Goal_Progress\n", Intent.GOAL_PROGRESS),
            ("'savings_tips'", Intent.SAVINGS_TIPS),
            ("budget_status.", Intent.BUDGET_STATUS),
            ("general_query", Intent.GENERAL_QUERY),
        ],
    )
    def test_known_labels(self, label, expected):
        assert Intent.parse(label) == expected

    @pytest.mark.parametrize("label", ["weather", "", "spending summary please"])
    def test_unknown_label_is_general_query(self, label):
        assert Intent.parse(label) == Intent.GENERAL_QUERY


class TestIntentClassifier:
    """Tests for IntentClassifier."""

    def test_classify_uses_reply(self):
        provider = FakeLLMProvider({"intent": "goal_progress"})

        intent = IntentClassifier(provider).classify("How are my goals?")

        assert intent == Intent.GOAL_PROGRESS
        (variables,) = provider.calls_for("intent")
        assert variables["message"] == "How are my goals?"
        assert "budget_status" in variables["intents"]

    def test_unrecognized_reply_is_general_query(self):
        provider = FakeLLMProvider({"intent": "I am not sure"})

        assert IntentClassifier(provider).classify("hi") == Intent.GENERAL_QUERY

    def test_provider_error_propagates(self):
        provider = FakeLLMProvider({"intent": RuntimeError("down")})

        with pytest.raises(RuntimeError):
            IntentClassifier(provider).classify("hi")

    def test_no_provider_raises(self):
        with pytest.raises(LLMUnavailableError):
            IntentClassifier(None).classify("hi")
