from __future__ import annotations  # Provider wire formats for chat and completion calls

import json
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Sequence

import httpx

from config import ProviderIdentity, Settings

from .errors import LlmGatewayError, UpstreamError


logger = logging.getLogger(__name__)

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


@dataclass(frozen=True)
class UpstreamRequest:  # One POST to a provider
    url: str
    payload: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)


class WireAdapter:
    """Translate (messages, system prompt) into one provider's HTTP format and back."""

    provider: ClassVar[ProviderIdentity]
    label: ClassVar[str]
    streaming: ClassVar[bool] = True

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def build_request(self, messages: Sequence[Message], system_prompt: str) -> UpstreamRequest:
        raise NotImplementedError

    def build_completion_request(self, prompt: str, max_tokens: int) -> UpstreamRequest:
        raise NotImplementedError

    def is_terminal(self, line: str) -> bool:
        return False

    def decode_line(self, line: str) -> Optional[str]:
        raise NotImplementedError

    def decode_body(self, data: Any) -> Optional[str]:
        raise NotImplementedError

    async def open_stream(self, client: httpx.AsyncClient, messages: Sequence[Message], system_prompt: str) -> httpx.Response:
        """Start the upstream call and return the response with its body still unread."""

        return await self._send(client, self.build_request(messages, system_prompt), stream=True)

    async def complete(self, client: httpx.AsyncClient, request: UpstreamRequest) -> str:
        """Send a non-streaming request and return the full generated text."""

        response = await self._send(client, request, stream=False)
        try:
            data = response.json()
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON payload from %s: %s", self.label, exc)
            raise LlmGatewayError(f"{self.label} response was not JSON") from exc
        content = self.decode_body(data)
        if not content:
            raise LlmGatewayError(f"No content in {self.label} response")
        return content

    async def _send(self, client: httpx.AsyncClient, request: UpstreamRequest, *, stream: bool) -> httpx.Response:
        http_request = client.build_request("POST", request.url, json=request.payload, headers=request.headers)
        try:
            response = await client.send(http_request, stream=stream)
        except httpx.TimeoutException as exc:
            logger.error("%s request timed out: %s", self.label, exc)
            raise UpstreamError(self.label, 504, "upstream request timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("%s transport failure: %s", self.label, exc)
            raise UpstreamError(self.label, 502, str(exc) or exc.__class__.__name__) from exc
        if response.is_error:
            await response.aread()
            body = response.text
            await response.aclose()
            logger.error("%s error status: %s", self.label, response.status_code)
            raise UpstreamError(self.label, response.status_code, body)
        return response

    def _sampling(self) -> Dict[str, Any]:
        return {"temperature": self.settings.LLM_TEMPERATURE}


class OpenAIAdapter(WireAdapter):
    provider = ProviderIdentity.OPENAI
    label = "OpenAI"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.OPENAI_API_KEY}",
        }

    def build_request(self, messages: Sequence[Message], system_prompt: str) -> UpstreamRequest:
        payload = {
            "model": self.settings.OPENAI_MODEL,
            "messages": [{"role": "system", "content": system_prompt}, *_plain(messages)],
            "stream": True,
            "max_tokens": self.settings.CHAT_MAX_TOKENS,
            **self._sampling(),
        }
        return UpstreamRequest(self.settings.OPENAI_API_URL, payload, self._headers())

    def build_completion_request(self, prompt: str, max_tokens: int) -> UpstreamRequest:
        payload = {
            "model": self.settings.OPENAI_MODEL,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            **self._sampling(),
        }
        return UpstreamRequest(self.settings.OPENAI_API_URL, payload, self._headers())

    def is_terminal(self, line: str) -> bool:
        return _sse_data(line) == "[DONE]"

    def decode_line(self, line: str) -> Optional[str]:
        data = _sse_data(line)
        if data is None:
            return None
        event = _loads(data, self.label)
        choice = _first(event, "choices")
        delta = choice.get("delta") if isinstance(choice, dict) else None
        return _text(delta, "content")

    def decode_body(self, data: Any) -> Optional[str]:
        choice = _first(data, "choices")
        message = choice.get("message") if isinstance(choice, dict) else None
        return _text(message, "content")


class AnthropicAdapter(WireAdapter):
    provider = ProviderIdentity.ANTHROPIC
    label = "Anthropic"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.settings.ANTHROPIC_API_KEY,
            "anthropic-version": self.settings.ANTHROPIC_VERSION,
        }

    def build_request(self, messages: Sequence[Message], system_prompt: str) -> UpstreamRequest:
        converted = [
            {"role": "assistant" if message["role"] == "assistant" else "user", "content": message["content"]}
            for message in messages
        ]
        payload = {
            "model": self.settings.ANTHROPIC_MODEL,
            "max_tokens": self.settings.CHAT_MAX_TOKENS,
            "system": system_prompt,
            "messages": converted,
            "stream": True,
        }
        return UpstreamRequest(self.settings.ANTHROPIC_API_URL, payload, self._headers())

    def build_completion_request(self, prompt: str, max_tokens: int) -> UpstreamRequest:
        payload = {
            "model": self.settings.ANTHROPIC_MODEL,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        return UpstreamRequest(self.settings.ANTHROPIC_API_URL, payload, self._headers())

    def decode_line(self, line: str) -> Optional[str]:
        data = _sse_data(line)
        if data is None:
            return None
        event = _loads(data, self.label)
        if not isinstance(event, dict) or event.get("type") != "content_block_delta":
            return None
        return _text(event.get("delta"), "text")

    def decode_body(self, data: Any) -> Optional[str]:
        return _text(_first(data, "content"), "text")


class OllamaAdapter(WireAdapter):
    provider = ProviderIdentity.OLLAMA
    label = "Ollama"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.OLLAMA_API_KEY:
            headers["Authorization"] = f"Bearer {self.settings.OLLAMA_API_KEY}"
        return headers

    def build_request(self, messages: Sequence[Message], system_prompt: str) -> UpstreamRequest:
        payload = {
            "model": self.settings.OLLAMA_MODEL,
            "prompt": _role_prompt(messages, system_prompt),
            "max_tokens": self.settings.CHAT_MAX_TOKENS,
            "stream": True,
            **self._sampling(),
        }
        return UpstreamRequest(self.settings.OLLAMA_API_URL, payload, self._headers())

    def build_completion_request(self, prompt: str, max_tokens: int) -> UpstreamRequest:
        payload = {
            "model": self.settings.OLLAMA_MODEL,
            "prompt": prompt,
            "max_tokens": max_tokens,
            "stream": False,
            **self._sampling(),
        }
        return UpstreamRequest(self.settings.OLLAMA_API_URL, payload, self._headers())

    def is_terminal(self, line: str) -> bool:
        return _sse_data(line) == "[DONE]"

    def decode_line(self, line: str) -> Optional[str]:
        # Completion endpoints emit bare JSON lines or SSE "data: " lines.
        data = _sse_data(line)
        return self.decode_body(_loads(line if data is None else data, self.label))

    def decode_body(self, data: Any) -> Optional[str]:
        text = _text(_first(data, "choices"), "text")
        if text is None:
            text = _text(data, "response")
        return text


class HuggingFaceAdapter(WireAdapter):
    provider = ProviderIdentity.HUGGINGFACE
    label = "Hugging Face"
    streaming = False

    def _url(self) -> str:
        return f"{self.settings.HUGGINGFACE_API_URL.rstrip('/')}/{self.settings.HUGGINGFACE_MODEL}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.HUGGINGFACE_API_KEY}",
        }

    def _payload(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        return {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": max_tokens,
                "temperature": self.settings.LLM_TEMPERATURE,
                "return_full_text": False,
            },
        }

    def build_request(self, messages: Sequence[Message], system_prompt: str) -> UpstreamRequest:
        prompt = _instruction_prompt(messages, system_prompt)
        return UpstreamRequest(self._url(), self._payload(prompt, self.settings.CHAT_MAX_TOKENS), self._headers())

    def build_completion_request(self, prompt: str, max_tokens: int) -> UpstreamRequest:
        return UpstreamRequest(self._url(), self._payload(f"<s>[INST] {prompt} [/INST]", max_tokens), self._headers())

    def decode_line(self, line: str) -> Optional[str]:
        return self.decode_body(_loads(line, self.label))

    def decode_body(self, data: Any) -> Optional[str]:
        if isinstance(data, list):
            data = data[0] if data else None
        return _text(data, "generated_text")


def _plain(messages: Sequence[Message]) -> List[Message]:
    return [{"role": message["role"], "content": message["content"]} for message in messages]


def _role_prompt(messages: Sequence[Message], system_prompt: str) -> str:
    lines = [f"System: {system_prompt}"]
    for message in messages:
        speaker = "User" if message["role"] == "user" else "Assistant"
        lines.append(f"{speaker}: {message['content']}")
    return "\n".join(lines)


def _instruction_prompt(messages: Sequence[Message], system_prompt: str) -> str:
    prompt = f"<s>[INST] {system_prompt}\n\n"
    last = len(messages) - 1
    for index, message in enumerate(messages):
        if message["role"] == "user":
            prompt += f"[INST] {message['content']} [/INST]"
        elif message["role"] == "assistant":
            prompt += f" {message['content']}</s>"
            if index < last:
                prompt += "<s>"
    return prompt


def _sse_data(line: str) -> Optional[str]:
    if not line.startswith("data:"):
        return None
    data = line[5:]
    if data.startswith(" "):
        data = data[1:]
    return data.strip()


def _loads(data: str, label: str) -> Any:
    try:
        return json.loads(data)
    except json.JSONDecodeError:
        logger.debug("Skipping malformed %s frame: %.80s", label, data)
        return None


def _first(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        return None
    items = data.get(key)
    if isinstance(items, list) and items:
        return items[0]
    return None


def _text(data: Any, key: str) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    value = data.get(key)
    return value if isinstance(value, str) else None


ADAPTERS: Dict[ProviderIdentity, type[WireAdapter]] = {
    adapter.provider: adapter for adapter in (OpenAIAdapter, AnthropicAdapter, OllamaAdapter, HuggingFaceAdapter)
}


__all__ = [
    "ADAPTERS",
    "AnthropicAdapter",
    "HuggingFaceAdapter",
    "Message",
    "OllamaAdapter",
    "OpenAIAdapter",
    "UpstreamRequest",
    "WireAdapter",
]
