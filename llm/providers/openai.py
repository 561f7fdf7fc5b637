"""OpenAI provider implementation using the chat completions API."""

from typing import Optional
from openai import OpenAI
from llm.providers.base import LLMProvider
from llm.prompts.loader import PromptManager
from logger import get_logger

logger = get_logger()

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAIProvider(LLMProvider):
    """OpenAI implementation of the text generation interface."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout: float = 20.0,
        prompt_manager: Optional[PromptManager] = None,
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key.
            model: Model to use (e.g., "gpt-4o-mini"). If None, uses prompt default.
            timeout: Per-request timeout in seconds.
            prompt_manager: Optional prompt manager (defaults to llm/prompts/).
        """
        super().__init__(prompt_manager)
        # Failures degrade at the call site, so the client never retries
        self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.model = model

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
        """Call the chat completions endpoint once.

        Raises:
            Exception: If the OpenAI API call fails.
        """
        # The configured model wins over the prompt's suggested model
        model = self.model or model or DEFAULT_MODEL

        kwargs = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self.client.chat.completions.create(**kwargs)
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise

        content = response.choices[0].message.content
        if content is None:
            logger.warning("OpenAI returned an empty message")
            return ""

        return content
