"""
Hosted HTTP Completion Providers

OpenAI, Grok (OpenAI-compatible) and Gemini over plain requests.

Usage:
    from providers.hosted import OpenAIProvider

    provider = OpenAIProvider(api_key="sk-...")
    result = provider.complete([{"role": "user", "content": "Hello"}])
    if result.ok:
        print(result.text)
"""

import logging
from typing import Dict, List, Optional

import requests

from .base import CompletionProvider, CompletionResult, Message, split_messages
from .config import DEFAULT_MODELS, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

_AUTH_STATUS_CODES = (401, 403)


class HostedProvider(CompletionProvider):
    """
    Shared request/response handling for hosted JSON APIs.

    Subclasses supply the URL, headers, payload and response extraction.
    """

    API_URL = ""
    DEFAULT_MODEL = ""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT
    ):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def _params(self) -> Optional[Dict[str, str]]:
        return None

    def _url(self) -> str:
        return self.API_URL

    def _payload(self, messages: List[Message], temperature: float, max_tokens: int) -> Dict:
        raise NotImplementedError

    def _extract_text(self, data: Dict) -> str:
        raise NotImplementedError

    def _make_request(self, payload: Dict) -> Dict:
        """POST the payload and return the decoded JSON body."""
        response = requests.post(
            self._url(),
            headers=self._headers(),
            params=self._params(),
            json=payload,
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def complete(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2048
    ) -> CompletionResult:
        if not self.api_key:
            return CompletionResult.unavailable(self.name, f"{self.name} API key not configured")

        try:
            data = self._make_request(self._payload(messages, temperature, max_tokens))
        except requests.exceptions.Timeout:
            return CompletionResult.transport_failure(self.name, f"{self.name} timed out after {self.timeout}s")
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status in _AUTH_STATUS_CODES:
                return CompletionResult.unavailable(self.name, f"{self.name} rejected the API key ({status})")
            return CompletionResult.transport_failure(self.name, f"{self.name} error: {e}")
        except requests.exceptions.RequestException as e:
            return CompletionResult.transport_failure(self.name, f"{self.name} request failed: {e}")
        except ValueError as e:
            return CompletionResult.transport_failure(self.name, f"{self.name} returned invalid JSON: {e}")

        try:
            text = self._extract_text(data)
        except (KeyError, IndexError, TypeError) as e:
            return CompletionResult.transport_failure(self.name, f"Unexpected {self.name} response shape: {e}")

        logger.debug("%s returned %d chars", self.name, len(text or ""))
        return CompletionResult.success(text or "", self.name)


class OpenAIProvider(HostedProvider):
    """OpenAI chat completions."""

    name = "openai"
    API_URL = "https://api.openai.com/v1/chat/completions"
    DEFAULT_MODEL = DEFAULT_MODELS["openai"]

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

    def _payload(self, messages, temperature, max_tokens):
        return {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

    def _extract_text(self, data):
        return data["choices"][0]["message"]["content"]


class GrokProvider(OpenAIProvider):
    """xAI Grok; same wire format as OpenAI."""

    name = "grok"
    API_URL = "https://api.x.ai/v1/chat/completions"
    DEFAULT_MODEL = DEFAULT_MODELS["grok"]


class GeminiProvider(HostedProvider):
    """Google Gemini generateContent."""

    name = "gemini"
    API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    DEFAULT_MODEL = DEFAULT_MODELS["gemini"]

    def _url(self) -> str:
        return self.API_URL.format(model=self.model)

    def _params(self):
        return {"key": self.api_key}

    def _payload(self, messages, temperature, max_tokens):
        system_prompt, turns = split_messages(messages)
        payload = {
            "contents": [
                {
                    "role": "model" if m["role"] == "assistant" else "user",
                    "parts": [{"text": m["content"]}],
                }
                for m in turns
            ],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        return payload

    def _extract_text(self, data):
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)
