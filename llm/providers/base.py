"""Base provider interface for LLM implementations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from llm.prompts.loader import PromptManager
from logger import get_logger

logger = get_logger()


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    A provider is constructed once per process and shared by every component
    that needs the model. Prompt construction lives in YAML files rendered by
    the PromptManager; response parsing is the caller's job.
    """

    def __init__(self, prompt_manager: Optional[PromptManager] = None):
        self.prompt_manager = prompt_manager or PromptManager()

    @abstractmethod
    def generate_text(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        """Generate a completion for a prompt.

        Args:
            system_prompt: Instructions for the model.
            user_prompt: The rendered user message.
            model: Model override. If None, the provider default is used.
            temperature: Sampling temperature.
            max_tokens: Upper bound on the reply length.
            json_mode: Ask the model to reply with a JSON object.

        Returns:
            Raw reply text (may be empty).

        Raises:
            Exception: If the API call fails.
        """
        pass

    def complete(self, prompt_name: str, variables: Dict[str, Any]) -> str:
        """Render a named prompt and return the model's raw reply.

        Args:
            prompt_name: Name of the YAML prompt (without extension).
            variables: Template variables for the user prompt.

        Returns:
            Raw reply text.
        """
        rendered = self.prompt_manager.render_prompt(prompt_name, variables)
        parameters = rendered["parameters"]

        logger.debug(
            f"Running prompt '{prompt_name}' (version {rendered['version']})"
        )

        return self.generate_text(
            rendered["system_prompt"],
            rendered["user_prompt"],
            model=parameters.get("model"),
            temperature=parameters.get("temperature"),
            max_tokens=parameters.get("max_tokens"),
            json_mode=parameters.get("json_mode", False),
        )
