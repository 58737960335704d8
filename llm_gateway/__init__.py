from __future__ import annotations  # Re-export llm_gateway public API

from .adapters import (
    ADAPTERS,
    AnthropicAdapter,
    HuggingFaceAdapter,
    Message,
    OllamaAdapter,
    OpenAIAdapter,
    UpstreamRequest,
    WireAdapter,
)
from .errors import ConfigurationError, LlmGatewayError, UnknownProviderError, UpstreamError
from .llm_gateway import GatewayReply, active_provider, adapter_for, dispatch_chat, request_completion
from .normalizer import LineDecoder, normalize_stream

__all__ = [
    "ADAPTERS",
    "AnthropicAdapter",
    "ConfigurationError",
    "GatewayReply",
    "HuggingFaceAdapter",
    "LineDecoder",
    "LlmGatewayError",
    "Message",
    "OllamaAdapter",
    "OpenAIAdapter",
    "UnknownProviderError",
    "UpstreamError",
    "UpstreamRequest",
    "WireAdapter",
    "active_provider",
    "adapter_for",
    "dispatch_chat",
    "normalize_stream",
    "request_completion",
]
