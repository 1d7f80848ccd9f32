"""
Provider Registry and Fallback Chain
"""

import logging
from typing import Callable, Dict, List, Optional

from interview.errors import UnknownProviderError

from .anthropic_client import AnthropicProvider
from .base import CompletionProvider, CompletionResult, CompletionStatus, Message
from .config import ProviderSettings
from .hosted import GeminiProvider, GrokProvider, OpenAIProvider
from .local import LocalModelProvider

logger = logging.getLogger(__name__)

FALLBACK_ORDER: List[str] = ["local", "gemini", "grok", "openai", "anthropic"]


def _hosted_factory(cls) -> Callable[[ProviderSettings], CompletionProvider]:
    def build(settings: ProviderSettings) -> CompletionProvider:
        return cls(
            api_key=settings.api_key(cls.name),
            model=settings.model_for(cls.name),
            timeout=settings.timeout
        )
    return build


PROVIDER_REGISTRY: Dict[str, Callable[[ProviderSettings], CompletionProvider]] = {
    "local": lambda s: LocalModelProvider(host=s.ollama_host, model=s.local_model, timeout=s.timeout),
    "openai": _hosted_factory(OpenAIProvider),
    "grok": _hosted_factory(GrokProvider),
    "gemini": _hosted_factory(GeminiProvider),
    "anthropic": _hosted_factory(AnthropicProvider),
}


def create_provider(name: str, settings: Optional[ProviderSettings] = None) -> CompletionProvider:
    """Build a single provider by registry name."""
    factory = PROVIDER_REGISTRY.get(name)
    if factory is None:
        raise UnknownProviderError(name)
    return factory(settings or ProviderSettings())


class ProviderChain(CompletionProvider):
    """
    Preferred provider first, then the fixed fallback order.

    Each provider is tried at most once per call and the order is walked
    afresh every time, so a backend that recovers is used again next turn.
    """

    name = "chain"

    def __init__(self, providers: List[CompletionProvider]):
        if not providers:
            raise ValueError("ProviderChain needs at least one provider")
        self.providers = providers

    @classmethod
    def from_settings(cls, settings: ProviderSettings) -> 'ProviderChain':
        if settings.preferred not in PROVIDER_REGISTRY:
            raise UnknownProviderError(settings.preferred)
        order = [settings.preferred] + [n for n in FALLBACK_ORDER if n != settings.preferred]
        return cls([create_provider(name, settings) for name in order])

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.providers]

    def complete(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2048
    ) -> CompletionResult:
        failures: List[CompletionResult] = []

        for provider in self.providers:
            result = provider.complete(messages, temperature=temperature, max_tokens=max_tokens)
            if result.ok:
                if failures:
                    logger.info("Fell back to provider '%s' after %d failure(s)", provider.name, len(failures))
                return result

            logger.info("Provider '%s' %s: %s", provider.name, result.status.value, result.error)
            failures.append(result)

        if all(f.status == CompletionStatus.PROVIDER_UNAVAILABLE for f in failures):
            return CompletionResult.unavailable(
                self.name,
                "No completion provider available (tried: " + ", ".join(self.names) + ")"
            )
        transport = [f for f in failures if f.status == CompletionStatus.TRANSPORT_ERROR]
        return transport[-1]
