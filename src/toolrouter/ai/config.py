"""Orchestrator configuration loaded from the environment.

Values come from environment variables (a local ``.env`` file is loaded
first). Command-line options override them in ``toolrouter.cli``.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

DEFAULT_ORCHESTRATOR_MODEL = "gpt-4o-mini"


@dataclass
class OrchestratorConfig:
    """Configuration for the tool-selection orchestrator."""
    model: str = DEFAULT_ORCHESTRATOR_MODEL
    provider: str = "openai"
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    # None means the prompt is generated from the tool registry
    orchestration_prompt: Optional[str] = None
    temperature: float = 0.0
    max_tokens: Optional[int] = None


def load_prompt_file(path: str) -> str:
    """Read an orchestration prompt from disk."""
    prompt_path = Path(path).expanduser()
    if not prompt_path.is_file():
        raise ConfigurationError(f"Orchestration prompt file not found: {prompt_path}")
    return prompt_path.read_text(encoding="utf-8").strip()


def get_orchestrator_config_from_env(require_api_key: bool = True) -> OrchestratorConfig:
    """Get orchestrator configuration from environment variables.

    Args:
        require_api_key: Raise when the hosted OpenAI API has no key configured.
            The CLI turns this off when a key is passed on the command line.

    Returns:
        OrchestratorConfig with model, api_key, base_url, provider and prompt

    Raises:
        ConfigurationError: If no API key is available for the hosted OpenAI API,
            or a numeric setting cannot be parsed
    """
    llm_provider = os.getenv("LLM_PROVIDER", "openai").lower()
    llm_model = os.getenv("ORCHESTRATOR_MODEL") or os.getenv("LLM_MODEL") or DEFAULT_ORCHESTRATOR_MODEL
    api_key = os.getenv("OPENAI_API_KEY") or os.getenv("LLM_API_KEY")
    base_url = os.getenv("LLM_BASE_URL") or os.getenv("OPENAI_BASE_URL")

    if base_url and "openai.com" not in base_url:
        # Local OpenAI-compatible endpoint - use dummy key if none provided
        if not api_key:
            api_key = "dummy-key"
    elif not api_key and require_api_key:
        raise ConfigurationError("OPENAI_API_KEY not found in environment")

    prompt = os.getenv("ORCHESTRATION_PROMPT")
    prompt_file = os.getenv("ORCHESTRATION_PROMPT_FILE")
    if not prompt and prompt_file:
        prompt = load_prompt_file(prompt_file)

    max_tokens = os.getenv("ORCHESTRATOR_MAX_TOKENS")
    try:
        max_tokens_value = int(max_tokens) if max_tokens else None
    except ValueError:
        raise ConfigurationError(f"ORCHESTRATOR_MAX_TOKENS must be an integer, got {max_tokens!r}")

    return OrchestratorConfig(
        model=llm_model,
        provider=llm_provider,
        api_key=api_key,
        base_url=base_url,
        orchestration_prompt=prompt or None,
        max_tokens=max_tokens_value,
    )
