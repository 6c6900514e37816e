"""Chat module: message dispatch and the /api/chat endpoint."""
from .dispatcher import (
    DEFAULT_HANDLERS,
    ChannelHandler,
    MessageChannel,
    MessageDispatcher,
    parse_channel,
)
from .schemas import ChatRequest, ChatResponse

__all__ = [
    "DEFAULT_HANDLERS",
    "ChannelHandler",
    "MessageChannel",
    "MessageDispatcher",
    "parse_channel",
    "ChatRequest",
    "ChatResponse",
]
