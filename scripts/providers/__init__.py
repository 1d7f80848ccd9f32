"""
Completion Providers
Local and hosted model backends behind one complete() contract
"""

from .base import (
    CompletionProvider,
    CompletionResult,
    CompletionStatus,
    Message
)

from .config import ProviderSettings

from .registry import (
    FALLBACK_ORDER,
    PROVIDER_REGISTRY,
    ProviderChain,
    create_provider
)

__all__ = [
    # Contract
    'CompletionProvider',
    'CompletionResult',
    'CompletionStatus',
    'Message',
    # Settings
    'ProviderSettings',
    # Registry
    'FALLBACK_ORDER',
    'PROVIDER_REGISTRY',
    'ProviderChain',
    'create_provider'
]
