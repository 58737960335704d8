"""Provider registry: map configured credentials to the active LLM backend."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .settings import Settings


class ProviderIdentity(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    HUGGINGFACE = "huggingface"
    OLLAMA = "ollama"
    NONE = "none"


# Resolution order when several keys are configured. Ollama is checked before
# Hugging Face.
PRECEDENCE: Tuple[ProviderIdentity, ...] = (
    ProviderIdentity.OPENAI,
    ProviderIdentity.ANTHROPIC,
    ProviderIdentity.OLLAMA,
    ProviderIdentity.HUGGINGFACE,
)

CREDENTIAL_ENV_VARS: Dict[ProviderIdentity, str] = {
    ProviderIdentity.OPENAI: "OPENAI_API_KEY",
    ProviderIdentity.ANTHROPIC: "ANTHROPIC_API_KEY",
    ProviderIdentity.OLLAMA: "OLLAMA_API_KEY",
    ProviderIdentity.HUGGINGFACE: "HUGGINGFACE_API_KEY",
}


@dataclass(frozen=True)
class CredentialSnapshot:
    """Which provider keys are present for the current request."""

    openai: bool = False
    anthropic: bool = False
    ollama: bool = False
    huggingface: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialSnapshot":
        return cls(
            openai=bool(settings.OPENAI_API_KEY.strip()),
            anthropic=bool(settings.ANTHROPIC_API_KEY.strip()),
            ollama=bool(settings.OLLAMA_API_KEY.strip()),
            huggingface=bool(settings.HUGGINGFACE_API_KEY.strip()),
        )

    def has(self, provider: ProviderIdentity) -> bool:
        if provider is ProviderIdentity.NONE:
            return False
        return bool(getattr(self, provider.value))


def resolve_provider(snapshot: CredentialSnapshot) -> ProviderIdentity:
    """Return the highest-precedence provider with a credential, or ``NONE``."""

    for provider in PRECEDENCE:
        if snapshot.has(provider):
            return provider
    return ProviderIdentity.NONE


def available_providers(snapshot: CredentialSnapshot) -> Dict[str, bool]:
    return {provider.value: snapshot.has(provider) for provider in PRECEDENCE}


def missing_credentials_message() -> str:
    names = ", ".join(CREDENTIAL_ENV_VARS[provider] for provider in PRECEDENCE)
    return f"No API keys configured. Set one of: {names}"


__all__ = [
    "CREDENTIAL_ENV_VARS",
    "CredentialSnapshot",
    "PRECEDENCE",
    "ProviderIdentity",
    "available_providers",
    "missing_credentials_message",
    "resolve_provider",
]
