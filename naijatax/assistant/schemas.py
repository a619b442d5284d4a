"""
schemas.py - Assistant Pydantic v2 data contracts.
"""
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One conversational turn. 'model' is the assistant side."""
    model_config = ConfigDict(extra="forbid")

    role: Literal["user", "model"]
    text: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    session_id: str = Field(..., min_length=1, max_length=36)
    message: str = Field(..., min_length=1, max_length=2000)


class ChatResponse(BaseModel):
    session_id: str
    reply: str
    history: List[ChatMessage]
