"""FastAPI routes for the interview chat gateway."""
from __future__ import annotations

import logging
import uuid
from typing import AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse

from api.dependencies import get_upstream_transport
from api.schemas import ChatRequest, HealthResp, ScorecardRequest
from config import CredentialSnapshot, Settings, available_providers, get_settings, resolve_provider
from llm_gateway import GatewayReply, LlmGatewayError, UpstreamError, dispatch_chat
from observability import log_event
from scorecard import Scorecard, generate_scorecard


logger = logging.getLogger(__name__)

router = APIRouter()

STREAM_HEADERS = {"Cache-Control": "no-cache"}


def _request_id() -> str:
    return uuid.uuid4().hex[:12]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _upstream_ms(reply: GatewayReply) -> Optional[int]:
    for event in reply.events:
        if event.get("span") == "upstream_open":
            return event.get("ms")
    return None


async def _logged_chunks(chunks: AsyncIterator[bytes], provider: str, request_id: str) -> AsyncIterator[bytes]:
    count = 0
    size = 0
    outcome = "error"
    try:
        async for chunk in chunks:
            count += 1
            size += len(chunk)
            yield chunk
        outcome = "ok"
    finally:
        log_event(
            "chat_done",
            request_id,
            level=logging.INFO if outcome == "ok" else logging.ERROR,
            provider=provider,
            chunks=count,
            bytes=size,
            outcome=outcome,
        )


@router.post("/chat")
async def chat(
    body: ChatRequest,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> Response:
    request_id = _request_id()
    try:
        reply = await dispatch_chat(
            body.message_dicts(),
            body.interview_config(),
            settings=settings,
            transport=transport,
        )
    except LlmGatewayError as exc:
        status = exc.status_code if isinstance(exc, UpstreamError) else None
        log_event("chat_error", request_id, level=logging.ERROR, status=status, error=str(exc))
        logger.exception("Chat request failed")
        return error_response(500, str(exc))

    log_event("chat_start", request_id, provider=reply.provider.value, ms=_upstream_ms(reply))
    if reply.chunks is None:
        log_event("chat_done", request_id, provider=reply.provider.value, chunks=1, outcome="ok")
        return PlainTextResponse(reply.text or "", headers=STREAM_HEADERS)
    return StreamingResponse(
        _logged_chunks(reply.chunks, reply.provider.value, request_id),
        media_type="text/plain; charset=utf-8",
        headers=STREAM_HEADERS,
    )


@router.get("/chat", response_model=HealthResp)
async def health(settings: Settings = Depends(get_settings)) -> HealthResp:
    snapshot = CredentialSnapshot.from_settings(settings)
    return HealthResp(
        provider=resolve_provider(snapshot).value,
        availableProviders=available_providers(snapshot),
    )


@router.post("/scorecard", response_model=Scorecard)
async def score_interview(
    body: ScorecardRequest,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
):
    request_id = _request_id()
    try:
        provider, result = await generate_scorecard(
            body.message_dicts(),
            body.interview_config(),
            settings=settings,
            transport=transport,
        )
    except LlmGatewayError as exc:
        log_event("scorecard_error", request_id, level=logging.ERROR, error=str(exc))
        logger.exception("Scorecard request failed")
        return error_response(500, str(exc))
    log_event("scorecard_done", request_id, provider=provider.value, outcome="ok")
    return result
