"""
Anthropic Completion Provider
Claude through the official anthropic SDK
"""

import logging
from typing import List, Optional

import anthropic

from .base import CompletionProvider, CompletionResult, Message, split_messages
from .config import DEFAULT_MODELS, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class AnthropicProvider(CompletionProvider):
    """Claude messages API."""

    name = "anthropic"
    DEFAULT_MODEL = DEFAULT_MODELS["anthropic"]

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT
    ):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout
        self.client = None
        if api_key:
            self.client = anthropic.Anthropic(api_key=api_key, timeout=timeout)

    def is_configured(self) -> bool:
        return self.client is not None

    def complete(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2048
    ) -> CompletionResult:
        if self.client is None:
            return CompletionResult.unavailable(self.name, "anthropic API key not configured")

        system_prompt, turns = split_messages(messages)
        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": turns,
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            response = self.client.messages.create(**kwargs)
        except anthropic.AuthenticationError as e:
            return CompletionResult.unavailable(self.name, f"anthropic rejected the API key: {e}")
        except anthropic.PermissionDeniedError as e:
            return CompletionResult.unavailable(self.name, f"anthropic denied access: {e}")
        except anthropic.APITimeoutError:
            return CompletionResult.transport_failure(self.name, f"anthropic timed out after {self.timeout}s")
        except anthropic.APIConnectionError as e:
            return CompletionResult.transport_failure(self.name, f"anthropic connection failed: {e}")
        except anthropic.APIStatusError as e:
            return CompletionResult.transport_failure(self.name, f"anthropic error {e.status_code}: {e}")

        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", "text") == "text"
        )
        logger.debug("anthropic returned %d chars", len(text))
        return CompletionResult.success(text, self.name)
