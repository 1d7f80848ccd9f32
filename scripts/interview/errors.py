"""
Prompt Architect Error Hierarchy

Provider failures and malformed model output are kept apart so callers can
fall back to another provider for the first and abandon the turn for the second.
"""

from typing import List, Optional


class PromptArchitectError(Exception):
    """Base exception for all interview and compilation errors."""

    def __init__(self, message: str, code: str = "PROMPT_ARCHITECT_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a response dict for the UI layer."""
        return {
            "success": False,
            "error": self.message,
            "code": self.code
        }


# =============================================================================
# Provider Errors (network-grade, eligible for fallback)
# =============================================================================

class ProviderError(PromptArchitectError):
    """Raised when no completion provider produced text."""

    def __init__(self, detail: str, provider: Optional[str] = None,
                 code: str = "PROVIDER_ERROR"):
        super().__init__(f"Completion provider failed: {detail}", code)
        self.detail = detail
        self.provider = provider


class ProviderUnavailableError(ProviderError):
    """Raised when every provider is unavailable (no model, no credentials)."""

    def __init__(self, detail: str, provider: Optional[str] = None):
        super().__init__(detail, provider, "PROVIDER_UNAVAILABLE")


class TransportError(ProviderError):
    """Raised on network failure, timeout or backend-side failure."""

    def __init__(self, detail: str, provider: Optional[str] = None):
        super().__init__(detail, provider, "TRANSPORT_ERROR")


class UnknownProviderError(PromptArchitectError):
    """Raised when a provider name is not in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown completion provider: {name}", "UNKNOWN_PROVIDER")
        self.name = name


# =============================================================================
# Content Errors (content-grade, never retried past one repair)
# =============================================================================

class MalformedOutputError(PromptArchitectError):
    """Raised when model output is still invalid after the repair attempt."""

    def __init__(self, errors: List[str], attempts: int, stage: str = "next_question"):
        summary = "; ".join(errors) if errors else "empty output"
        super().__init__(
            f"Could not produce a valid {stage.replace('_', ' ')} after {attempts} attempt(s): {summary}",
            "MALFORMED_OUTPUT"
        )
        self.errors = list(errors)
        self.attempts = attempts
        self.stage = stage

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["validation_errors"] = self.errors
        data["attempts"] = self.attempts
        return data


# =============================================================================
# Session Errors
# =============================================================================

class SessionError(PromptArchitectError):
    """Raised when a session invariant would be broken."""

    def __init__(self, detail: str):
        super().__init__(detail, "SESSION_ERROR")
        self.detail = detail
