import pytest

from llm.prompts.loader import PromptManager


class TestPromptManager:
    """Tests for PromptManager."""

    def test_bundled_prompts(self):
        assert PromptManager().available_prompts() == [
            "categorization",
            "general_query",
            "insights",
            "intent",
        ]

    def test_render_categorization(self):
        rendered = PromptManager().render_prompt(
            "categorization",
            {"categories": "'Shopping', 'Other'", "description": "XYZ Corp"},
        )

        assert "XYZ Corp" in rendered["user_prompt"]
        assert "'Shopping', 'Other'" in rendered["user_prompt"]
        assert rendered["parameters"]["json_mode"] is True
        assert rendered["system_prompt"]

    def test_missing_variable(self):
        with pytest.raises(KeyError):
            PromptManager().render_prompt("intent", {"message": "hi"})

    def test_missing_prompt(self):
        with pytest.raises(FileNotFoundError):
            PromptManager().load_prompt("nope")

    def test_missing_required_keys(self, tmp_path):
        (tmp_path / "broken.yaml").write_text("version: '1'\nsystem_prompt: hi\n")

        with pytest.raises(ValueError):
            PromptManager(tmp_path).load_prompt("broken")

    def test_custom_directory(self, tmp_path):
        (tmp_path / "echo.yaml").write_text(
            "system_prompt: Echo\nuser_prompt_template: 'Say {word}'\n"
        )

        rendered = PromptManager(tmp_path).render_prompt("echo", {"word": "hi"})

        assert rendered["user_prompt"] == "Say hi"
        assert rendered["parameters"] == {}
        assert rendered["version"] == "unknown"
