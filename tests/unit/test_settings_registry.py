from config.registry import (
    CREDENTIAL_ENV_VARS,
    CredentialSnapshot,
    ProviderIdentity,
    available_providers,
    missing_credentials_message,
    resolve_provider,
)
from config.settings import Settings, get_settings

from conftest import make_settings


def test_settings_defaults():
    settings = make_settings()
    assert settings.OPENAI_MODEL == "gpt-4o-mini"
    assert settings.OLLAMA_API_URL.endswith("/v1/completions")
    assert settings.CHAT_MAX_TOKENS == 1024
    assert settings.LLM_TEMPERATURE == 0.7


def test_get_settings_reads_environment_each_call(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "first")
    assert get_settings().ANTHROPIC_API_KEY == "first"
    monkeypatch.setenv("ANTHROPIC_API_KEY", "second")
    assert get_settings().ANTHROPIC_API_KEY == "second"


def test_all_credentials_select_openai():
    snapshot = CredentialSnapshot(openai=True, anthropic=True, ollama=True, huggingface=True)
    assert resolve_provider(snapshot) is ProviderIdentity.OPENAI


def test_anthropic_beats_ollama():
    snapshot = CredentialSnapshot(anthropic=True, ollama=True)
    assert resolve_provider(snapshot) is ProviderIdentity.ANTHROPIC


def test_ollama_beats_huggingface():
    assert resolve_provider(CredentialSnapshot(ollama=True)) is ProviderIdentity.OLLAMA
    assert resolve_provider(CredentialSnapshot(ollama=True, huggingface=True)) is ProviderIdentity.OLLAMA
    assert resolve_provider(CredentialSnapshot(huggingface=True)) is ProviderIdentity.HUGGINGFACE


def test_no_credentials_select_none():
    assert resolve_provider(CredentialSnapshot()) is ProviderIdentity.NONE


def test_blank_keys_count_as_missing():
    snapshot = CredentialSnapshot.from_settings(make_settings(OPENAI_API_KEY="   ", OLLAMA_API_KEY="key"))
    assert snapshot.openai is False
    assert resolve_provider(snapshot) is ProviderIdentity.OLLAMA


def test_available_providers_lists_every_backend():
    snapshot = CredentialSnapshot.from_settings(make_settings(HUGGINGFACE_API_KEY="hf"))
    assert available_providers(snapshot) == {
        "openai": False,
        "anthropic": False,
        "ollama": False,
        "huggingface": True,
    }


def test_missing_credentials_message_names_variables():
    message = missing_credentials_message()
    for name in CREDENTIAL_ENV_VARS.values():
        assert name in message


def test_settings_ignore_unrelated_environment(monkeypatch):
    monkeypatch.setenv("SOME_UNRELATED_VARIABLE", "1")
    assert isinstance(Settings(_env_file=None), Settings)


def test_read_timeout_can_be_disabled_from_environment(monkeypatch):
    monkeypatch.setenv("LLM_READ_TIMEOUT_S", "None")
    assert Settings(_env_file=None).LLM_READ_TIMEOUT_S is None
    monkeypatch.setenv("LLM_READ_TIMEOUT_S", "30")
    assert Settings(_env_file=None).LLM_READ_TIMEOUT_S == 30.0
