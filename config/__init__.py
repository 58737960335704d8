"""Configuration package for the interview gateway."""
from .registry import (
    CREDENTIAL_ENV_VARS,
    PRECEDENCE,
    CredentialSnapshot,
    ProviderIdentity,
    available_providers,
    missing_credentials_message,
    resolve_provider,
)
from .settings import Settings, get_settings

__all__ = [
    "CREDENTIAL_ENV_VARS",
    "PRECEDENCE",
    "CredentialSnapshot",
    "ProviderIdentity",
    "available_providers",
    "missing_credentials_message",
    "resolve_provider",
    "Settings",
    "get_settings",
]
