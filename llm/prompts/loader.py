"""Prompt loading and rendering."""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from logger import get_logger

logger = get_logger()

_REQUIRED_KEYS = ("system_prompt", "user_prompt_template")


class PromptManager:
    """Loads prompt definitions from YAML files and renders them.

    Each file holds ``version``, ``system_prompt``, ``user_prompt_template``
    (a ``str.format`` template) and optional model ``parameters``.
    """

    def __init__(self, prompts_dir: Optional[Path] = None):
        """Initialize the prompt manager.

        Args:
            prompts_dir: Directory containing prompt YAML files.
                        Defaults to the directory of this module.
        """
        self.prompts_dir = prompts_dir or Path(__file__).parent
        self._cache: Dict[str, Dict[str, Any]] = {}

    def available_prompts(self) -> List[str]:
        """List prompt names found in the prompts directory."""
        return sorted(p.stem for p in self.prompts_dir.glob("*.yaml"))

    def load_prompt(self, prompt_name: str) -> Dict[str, Any]:
        """Load a prompt configuration from its YAML file.

        Args:
            prompt_name: Name of the prompt file (without .yaml extension).

        Returns:
            Dictionary containing prompt configuration.

        Raises:
            FileNotFoundError: If prompt file doesn't exist.
            ValueError: If required keys are missing.
            yaml.YAMLError: If YAML is invalid.
        """
        if prompt_name in self._cache:
            return self._cache[prompt_name]

        prompt_file = self.prompts_dir / f"{prompt_name}.yaml"
        if not prompt_file.exists():
            raise FileNotFoundError(f"Prompt file not found: {prompt_file}")

        logger.debug(f"Loading prompt from {prompt_file}")

        with open(prompt_file, "r") as f:
            prompt_config = yaml.safe_load(f) or {}

        missing = [key for key in _REQUIRED_KEYS if key not in prompt_config]
        if missing:
            raise ValueError(f"Prompt '{prompt_name}' is missing keys: {missing}")

        self._cache[prompt_name] = prompt_config
        return prompt_config

    def render_prompt(
        self, prompt_name: str, variables: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Load and render a prompt with the given variables.

        Args:
            prompt_name: Name of the prompt to load.
            variables: Values substituted into the user prompt template.

        Returns:
            Dictionary with keys system_prompt, user_prompt, parameters, version.

        Raises:
            KeyError: If the template references a variable that was not given.
        """
        prompt_config = self.load_prompt(prompt_name)

        user_prompt = prompt_config["user_prompt_template"].format(**variables)

        return {
            "system_prompt": prompt_config["system_prompt"],
            "user_prompt": user_prompt,
            "parameters": prompt_config.get("parameters") or {},
            "version": prompt_config.get("version", "unknown"),
        }
