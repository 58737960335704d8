from __future__ import annotations  # LLM request gateway module

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

import httpx

from config import (
    CredentialSnapshot,
    ProviderIdentity,
    Settings,
    missing_credentials_message,
    resolve_provider,
)
from interview_prompt import InterviewConfig, build_system_prompt
from observability import span

from .adapters import ADAPTERS, Message, WireAdapter
from .errors import ConfigurationError, UnknownProviderError
from .normalizer import normalize_stream


logger = logging.getLogger(__name__)  # Module logger setup


@dataclass
class GatewayReply:
    """Result of one chat dispatch: a live chunk stream, or the full text for non-streaming providers."""

    provider: ProviderIdentity
    chunks: Optional[AsyncIterator[bytes]] = None
    text: Optional[str] = None
    events: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def streaming(self) -> bool:
        return self.chunks is not None


def active_provider(settings: Settings) -> ProviderIdentity:  # Resolve the provider or fail fast
    provider = resolve_provider(CredentialSnapshot.from_settings(settings))
    if provider is ProviderIdentity.NONE:
        raise ConfigurationError(missing_credentials_message())
    return provider


def adapter_for(provider: ProviderIdentity, settings: Settings) -> WireAdapter:
    adapter_cls = ADAPTERS.get(provider)
    if adapter_cls is None:
        raise UnknownProviderError(f"Unknown provider: {provider.value}")
    return adapter_cls(settings)


def http_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    timeout = httpx.Timeout(settings.LLM_READ_TIMEOUT_S, connect=settings.LLM_CONNECT_TIMEOUT_S)
    return httpx.AsyncClient(timeout=timeout, transport=transport)


async def dispatch_chat(
    messages: Sequence[Message],
    config: InterviewConfig,
    *,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GatewayReply:
    """Send the conversation to the active provider and return its normalized reply.

    The upstream status is checked before returning, so callers can still
    answer with an error status. Streamed replies own the upstream response
    and HTTP client; both are closed when the chunk iterator finishes or is
    closed early.

    Raises:
        ConfigurationError: No provider credential is configured.
        UpstreamError: The provider answered with a non-success status or
            could not be reached.
    """

    provider = active_provider(settings)
    adapter = adapter_for(provider, settings)
    system_prompt = build_system_prompt(config)
    reply = GatewayReply(provider=provider)
    logger.info(
        "LLM chat start provider=%s messages=%d prompt_chars=%d",
        provider.value,
        len(messages),
        len(system_prompt),
    )

    client = http_client(settings, transport)
    try:
        with span(reply.events, "upstream_open"):
            if not adapter.streaming:
                reply.text = await adapter.complete(client, adapter.build_request(messages, system_prompt))
                await client.aclose()
                return reply
            response = await adapter.open_stream(client, messages, system_prompt)
    except BaseException:
        await client.aclose()
        raise

    reply.chunks = _relay(response, client, adapter)
    return reply


async def request_completion(
    prompt: str,
    *,
    settings: Settings,
    max_tokens: int,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> tuple[ProviderIdentity, str]:
    """Send a single prompt without streaming and return the provider and full text."""

    provider = active_provider(settings)
    adapter = adapter_for(provider, settings)
    logger.info("LLM completion start provider=%s prompt_chars=%d", provider.value, len(prompt))
    async with http_client(settings, transport) as client:
        text = await adapter.complete(client, adapter.build_completion_request(prompt, max_tokens))
    logger.info("LLM completion done provider=%s chars=%d", provider.value, len(text))
    return provider, text


async def _relay(response: httpx.Response, client: httpx.AsyncClient, adapter: WireAdapter) -> AsyncIterator[bytes]:
    try:
        async for chunk in normalize_stream(response.aiter_bytes(), adapter):
            yield chunk
    except httpx.HTTPError as exc:
        logger.error("%s stream interrupted: %s", adapter.label, exc)
        raise
    finally:
        await response.aclose()
        await client.aclose()
