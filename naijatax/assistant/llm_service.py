"""
llm_service.py - Mistral async chat layer for the NaijaTax assistant.

Components:
  SYSTEM_PROMPT        - "NaijaTax Buddy" persona and tone constraints
  build_messages()     - system prompt + prior turns + new user message
  history_from_rows()  - stored exchanges → alternating ChatMessage turns
  send_message()       - async Mistral call, returns reply text

The assistant is an opaque external service. Nothing here touches the tax
engine; figures in replies come from the model, not from calculate_tax().

No HTTPException anywhere - this is pure business logic, HTTP layer is routes.py.
"""
import logging

from mistralai import Mistral

from naijatax.assistant.schemas import ChatMessage
from naijatax.config import settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Mistral API constants
# ---------------------------------------------------------------------------

ASSISTANT_TEMPERATURE = 0.75
ASSISTANT_TOP_P = 0.95
ASSISTANT_MAX_TOKENS = 256

DISCLAIMER = (
    "Note: This is for informational purposes only and does not constitute "
    "official tax advice."
)

FALLBACK_REPLY = "I'm sorry, I couldn't process that request."

SYSTEM_PROMPT = (
    "You are 'NaijaTax Buddy', a friendly and knowledgeable Nigerian tax assistant. "
    "Speak in a helpful, conversational tone as if chatting with a colleague. "
    "Keep your answers very brief—strictly 1 to 3 sentences. "
    "Focus on Nigerian tax specifics like PAYE, Consolidated Relief (CRA), and the Finance Act. "
    f"Always end every response with this exact disclaimer: '{DISCLAIMER}'"
)

# Our 'model' role maps to Mistral's 'assistant' role
_ROLE_MAP = {"user": "user", "model": "assistant"}


class AssistantError(Exception):
    """Raised when the upstream LLM call fails."""


def build_messages(history: list[ChatMessage], new_message: str) -> list[dict]:
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    for turn in history:
        messages.append({"role": _ROLE_MAP[turn.role], "content": turn.text})
    messages.append({"role": "user", "content": new_message})
    return messages


def history_from_rows(rows: list[dict]) -> list[ChatMessage]:
    """Expand stored {message, reply} rows into user/model turns, in order."""
    turns: list[ChatMessage] = []
    for row in rows:
        turns.append(ChatMessage(role="user", text=row["message"]))
        turns.append(ChatMessage(role="model", text=row["reply"]))
    return turns


async def send_message(
    client: Mistral,
    history: list[ChatMessage],
    new_message: str,
) -> str:
    """
    Send the conversation so far plus new_message and return the reply text.

    An empty reply becomes FALLBACK_REPLY.

    Raises:
        AssistantError: if the Mistral call fails for any reason.
    """
    messages = build_messages(history, new_message)
    logger.info(
        "Calling Mistral API model=%s turns=%d", settings.mistral_model, len(history)
    )

    try:
        response = await client.chat.complete_async(
            model=settings.mistral_model,
            messages=messages,
            temperature=ASSISTANT_TEMPERATURE,
            top_p=ASSISTANT_TOP_P,
            max_tokens=ASSISTANT_MAX_TOKENS,
        )
    except Exception as exc:
        logger.error("Mistral call failed: %s", exc)
        raise AssistantError(str(exc)) from exc

    reply: str = ""
    if response is not None and response.choices:
        reply = response.choices[0].message.content or ""
    if not reply.strip():
        return FALLBACK_REPLY

    logger.info("Mistral response received reply_len=%d", len(reply))
    return reply
