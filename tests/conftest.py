import json
import sys
from pathlib import Path
from typing import Callable, Dict, List

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import Settings


NO_KEYS = {
    "OPENAI_API_KEY": "",
    "ANTHROPIC_API_KEY": "",
    "OLLAMA_API_KEY": "",
    "HUGGINGFACE_API_KEY": "",
}


def make_settings(**overrides) -> Settings:
    """Settings isolated from the host environment and any .env file."""

    values = dict(NO_KEYS)
    values.update(overrides)
    return Settings(_env_file=None, **values)


class UpstreamRecorder:
    """Fake provider: records every request and answers with a canned response."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last_json(self) -> Dict:
        return json.loads(self.requests[-1].content)


def sse_body(events: List[Dict], *, done: bool = True) -> bytes:
    lines = [f"data: {json.dumps(event)}\n\n" for event in events]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def openai_delta(text: str) -> Dict:
    return {"choices": [{"index": 0, "delta": {"content": text}}]}


@pytest.fixture
def settings_factory():
    return make_settings
