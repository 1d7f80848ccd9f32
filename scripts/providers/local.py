"""
On-Device Completion Provider

Talks to a local Ollama daemon. Takes a (system_prompt, user_prompt) pair
natively; complete() folds a role-tagged message list into that pair.
"""

import logging
from typing import List

import requests

from .base import CompletionProvider, CompletionResult, Message, split_messages
from .config import DEFAULT_LOCAL_MODEL, DEFAULT_OLLAMA_HOST, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def _normalize_host(host: str) -> str:
    host = (host or DEFAULT_OLLAMA_HOST).rstrip('/')
    if not host.startswith(('http://', 'https://')):
        host = f"http://{host}"
    return host


class LocalModelProvider(CompletionProvider):
    """Local model served over the Ollama HTTP API."""

    name = "local"

    def __init__(
        self,
        host: str = DEFAULT_OLLAMA_HOST,
        model: str = DEFAULT_LOCAL_MODEL,
        timeout: float = DEFAULT_TIMEOUT
    ):
        self.host = _normalize_host(host)
        self.model = model
        self.timeout = timeout

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2048
    ) -> CompletionResult:
        """Run one prompt pair through the local model."""
        payload = {
            "model": self.model,
            "system": system_prompt,
            "prompt": user_prompt,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
            },
        }

        try:
            response = requests.post(
                f"{self.host}/api/generate",
                json=payload,
                timeout=self.timeout
            )
        except requests.exceptions.ConnectionError as e:
            # No daemon listening means there is no on-device model
            return CompletionResult.unavailable(self.name, f"Local model not reachable at {self.host}: {e}")
        except requests.exceptions.Timeout:
            return CompletionResult.transport_failure(self.name, f"Local model timed out after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            return CompletionResult.transport_failure(self.name, str(e))

        if response.status_code == 404:
            return CompletionResult.unavailable(self.name, f"Local model '{self.model}' is not installed")

        try:
            response.raise_for_status()
            text = response.json()["response"]
        except requests.exceptions.HTTPError as e:
            return CompletionResult.transport_failure(self.name, f"Local model error: {e}")
        except (ValueError, KeyError, TypeError) as e:
            return CompletionResult.transport_failure(self.name, f"Unexpected local model response: {e}")

        logger.debug("Local model returned %d chars", len(text))
        return CompletionResult.success(text, self.name)

    def complete(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2048
    ) -> CompletionResult:
        system_prompt, turns = split_messages(messages)
        user_prompt = '\n\n'.join(m['content'] for m in turns)
        return self.generate(system_prompt, user_prompt, temperature, max_tokens)
