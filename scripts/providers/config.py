"""
Provider Settings
Resolved credentials and backend options, read from the environment
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

DEFAULT_TIMEOUT = 60.0
DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_LOCAL_MODEL = "llama3.2"

DEFAULT_MODELS: Dict[str, str] = {
    "openai": "gpt-4o",
    "anthropic": "claude-sonnet-4-20250514",
    "gemini": "gemini-2.5-flash",
    "grok": "grok-3-mini",
}


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


@dataclass
class ProviderSettings:
    """Everything the provider registry needs to build a backend."""
    preferred: str = "local"
    api_keys: Dict[str, Optional[str]] = field(default_factory=dict)
    ollama_host: str = DEFAULT_OLLAMA_HOST
    local_model: str = DEFAULT_LOCAL_MODEL
    models: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MODELS))
    timeout: float = DEFAULT_TIMEOUT
    temperature: float = 0.7
    max_tokens: int = 2048

    def api_key(self, provider: str) -> Optional[str]:
        return self.api_keys.get(provider)

    def model_for(self, provider: str) -> str:
        return self.models.get(provider, DEFAULT_MODELS.get(provider, ""))

    @classmethod
    def from_env(cls, preferred: Optional[str] = None) -> 'ProviderSettings':
        """Build settings from environment variables; an explicit preference wins."""
        timeout_raw = os.environ.get("PROMPT_ARCHITECT_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError:
            timeout = DEFAULT_TIMEOUT

        return cls(
            preferred=preferred or os.environ.get("PROMPT_ARCHITECT_PROVIDER", "local"),
            api_keys={
                "openai": _first_env("OPENAI_API_KEY"),
                "anthropic": _first_env("ANTHROPIC_API_KEY", "CLAUDE_API_KEY"),
                "gemini": _first_env("GEMINI_API_KEY"),
                "grok": _first_env("XAI_API_KEY", "GROK_API_KEY"),
            },
            ollama_host=os.environ.get("OLLAMA_HOST", DEFAULT_OLLAMA_HOST),
            local_model=os.environ.get("PROMPT_ARCHITECT_LOCAL_MODEL", DEFAULT_LOCAL_MODEL),
            timeout=timeout,
        )
