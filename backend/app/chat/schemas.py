"""Pydantic schemas for the chat endpoint."""
from typing import Any, Literal

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Incoming chat message.

    ``type`` is validated by the dispatcher rather than here, so an unknown
    channel yields the ``Invalid message type`` error instead of a schema
    validation error.
    """
    message: str = Field("", description="Message text or transcript")
    type: Any = Field(None, description="Channel: text, voice or video")


class ChatResponse(BaseModel):
    response: str = Field(..., description="Generated reply")
    type: Literal["text"] = Field("text", description="Reply modality (always text)")
