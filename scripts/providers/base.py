"""
Completion Provider Contract

Every backend returns a CompletionResult instead of raising, so the fallback
chain can tell "not available here" apart from "failed on the wire".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

Message = Dict[str, str]


class CompletionStatus(Enum):
    """Outcome of one completion call."""
    OK = "ok"
    PROVIDER_UNAVAILABLE = "provider_unavailable"   # no credentials, no local model
    TRANSPORT_ERROR = "transport_error"             # network, timeout, backend failure


@dataclass
class CompletionResult:
    """Text from a provider, or the reason there is none."""
    status: CompletionStatus
    text: str = ""
    provider: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CompletionStatus.OK

    @classmethod
    def success(cls, text: str, provider: str) -> 'CompletionResult':
        return cls(status=CompletionStatus.OK, text=text, provider=provider)

    @classmethod
    def unavailable(cls, provider: str, error: str) -> 'CompletionResult':
        return cls(status=CompletionStatus.PROVIDER_UNAVAILABLE, provider=provider, error=error)

    @classmethod
    def transport_failure(cls, provider: str, error: str) -> 'CompletionResult':
        return cls(status=CompletionStatus.TRANSPORT_ERROR, provider=provider, error=error)

    def to_dict(self) -> Dict:
        return {
            'status': self.status.value,
            'text': self.text,
            'provider': self.provider,
            'error': self.error,
        }


def split_messages(messages: List[Message]) -> Tuple[str, List[Message]]:
    """Separate system content from the user/assistant turns."""
    system_parts = [m['content'] for m in messages if m.get('role') == 'system']
    turns = [m for m in messages if m.get('role') != 'system']
    return '\n\n'.join(system_parts), turns


class CompletionProvider:
    """
    Base class for completion backends.

    Subclasses implement complete(); they must never raise for network or
    credential problems and return a non-ok CompletionResult instead.
    """

    name = "base"

    def is_configured(self) -> bool:
        """Whether the provider has what it needs to attempt a call."""
        return True

    def complete(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2048
    ) -> CompletionResult:
        raise NotImplementedError
