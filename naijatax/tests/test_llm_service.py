"""
Assistant LLM service tests.

The Mistral client is mocked with AsyncMock - no external API calls.
"""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from naijatax.assistant.llm_service import (
    ASSISTANT_TEMPERATURE,
    ASSISTANT_TOP_P,
    DISCLAIMER,
    FALLBACK_REPLY,
    SYSTEM_PROMPT,
    AssistantError,
    build_messages,
    history_from_rows,
    send_message,
)
from naijatax.assistant.schemas import ChatMessage


def _mock_client(content) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    client = MagicMock()
    client.chat.complete_async = AsyncMock(return_value=response)
    return client


def test_system_prompt_carries_persona_and_disclaimer() -> None:
    assert "NaijaTax Buddy" in SYSTEM_PROMPT
    assert DISCLAIMER in SYSTEM_PROMPT


def test_build_messages_maps_roles_in_order() -> None:
    history = [
        ChatMessage(role="user", text="What is CRA?"),
        ChatMessage(role="model", text="A relief allowance."),
    ]
    messages = build_messages(history, "How much is it?")
    assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
    assert messages[0]["content"] == SYSTEM_PROMPT
    assert messages[-1]["content"] == "How much is it?"


def test_history_from_rows_alternates_turns() -> None:
    rows = [
        {"message": "q1", "reply": "a1", "created_at": "2025-01-01T00:00:00+00:00"},
        {"message": "q2", "reply": "a2", "created_at": "2025-01-01T00:01:00+00:00"},
    ]
    turns = history_from_rows(rows)
    assert [(t.role, t.text) for t in turns] == [
        ("user", "q1"), ("model", "a1"), ("user", "q2"), ("model", "a2"),
    ]


@pytest.mark.asyncio
async def test_send_message_returns_reply_text() -> None:
    client = _mock_client("PAYE is deducted by your employer. " + DISCLAIMER)
    reply = await send_message(client, [], "What is PAYE?")

    assert reply.startswith("PAYE is deducted")
    kwargs = client.chat.complete_async.await_args.kwargs
    assert kwargs["temperature"] == ASSISTANT_TEMPERATURE
    assert kwargs["top_p"] == ASSISTANT_TOP_P
    assert kwargs["messages"][-1] == {"role": "user", "content": "What is PAYE?"}


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "", "   "])
async def test_send_message_empty_reply_uses_fallback(content) -> None:
    reply = await send_message(_mock_client(content), [], "hello")
    assert reply == FALLBACK_REPLY


@pytest.mark.asyncio
async def test_send_message_wraps_upstream_errors() -> None:
    client = MagicMock()
    client.chat.complete_async = AsyncMock(side_effect=RuntimeError("rate limited"))
    with pytest.raises(AssistantError, match="rate limited"):
        await send_message(client, [], "hello")
