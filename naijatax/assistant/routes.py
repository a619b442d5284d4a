"""
Assistant HTTP routes - POST /api/assistant/chat
                        GET  /api/assistant/history

Conversation turns are persisted per session_id and replayed to the LLM on
every request, so the client only sends the new message.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from naijatax.assistant.llm_service import AssistantError, history_from_rows, send_message
from naijatax.assistant.schemas import ChatMessage, ChatRequest, ChatResponse
from naijatax.database import get_db
from naijatax.errors import make_error_response
from naijatax.store import get_chat_history, save_chat_message

router = APIRouter(prefix="/api/assistant", tags=["assistant"])
logger = logging.getLogger(__name__)


@router.post("/chat")
async def chat(
    request: Request,
    body: ChatRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Returns:
      200: ChatResponse with the reply and the full updated history
      502: upstream LLM failure
      503: assistant not configured (no API key)
    """
    client = getattr(request.app.state, "mistral", None)
    if client is None:
        return make_error_response(
            code="SERVICE_UNAVAILABLE",
            message="Assistant is not configured. Set MISTRAL_API_KEY and restart.",
            status_code=503,
        )

    rows = await get_chat_history(db, body.session_id)
    history = history_from_rows(rows)

    try:
        reply = await send_message(client, history, body.message)
    except AssistantError as exc:
        return make_error_response(
            code="ASSISTANT_ERROR",
            message=f"Assistant request failed: {exc}",
            status_code=502,
        )

    await save_chat_message(db, body.session_id, body.message, reply)
    logger.info("Assistant reply session_id=%s prior_turns=%d", body.session_id, len(history))

    history.extend([
        ChatMessage(role="user", text=body.message),
        ChatMessage(role="model", text=reply),
    ])
    response = ChatResponse(session_id=body.session_id, reply=reply, history=history)
    return JSONResponse(status_code=200, content=response.model_dump())


@router.get("/history")
async def chat_history(
    session_id: str = Query(..., description="Session ID to retrieve chat history for"),
    db: AsyncSession = Depends(get_db),
) -> dict:
    messages = await get_chat_history(db, session_id)
    logger.info("Chat history request session_id=%s messages=%d", session_id, len(messages))
    return {"session_id": session_id, "messages": messages}
