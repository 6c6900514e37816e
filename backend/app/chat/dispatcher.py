"""Message dispatcher.

Routes a chat message to the handler for its declared channel. Every
channel shares one code path and differs only in its apology text and
its preprocessing step.

Voice and video preprocessing is not implemented yet: the frontend sends
a transcript string for both, and it is passed through unchanged. No
speech-to-text or sign-language frame extraction happens here.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from app.errors import InvalidMessageTypeError
from app.generation import DEFAULT_FALLBACK, GenerationClient

logger = logging.getLogger(__name__)


class MessageChannel(str, Enum):
    """Declared modality of an incoming chat message."""
    TEXT = "text"
    VOICE = "voice"
    VIDEO = "video"


def passthrough(message: str) -> str:
    """Placeholder preprocessing: the message is used as the prompt verbatim."""
    return message


@dataclass(frozen=True)
class ChannelHandler:
    """Per-channel strategy.

    Attributes:
        channel: Channel this handler serves.
        fallback_message: Apology returned when generation fails.
        preprocess: Turns the raw message into the generation prompt.
    """
    channel: MessageChannel
    fallback_message: str
    preprocess: Callable[[str], str] = field(default=passthrough)


DEFAULT_HANDLERS: Dict[MessageChannel, ChannelHandler] = {
    MessageChannel.TEXT: ChannelHandler(
        channel=MessageChannel.TEXT,
        fallback_message=DEFAULT_FALLBACK,
    ),
    MessageChannel.VOICE: ChannelHandler(
        channel=MessageChannel.VOICE,
        fallback_message="I'm sorry, I'm having trouble processing your voice message.",
    ),
    MessageChannel.VIDEO: ChannelHandler(
        channel=MessageChannel.VIDEO,
        fallback_message="I'm sorry, I'm having trouble processing your video message.",
    ),
}


def parse_channel(message_type: Any) -> MessageChannel:
    """Resolve a declared type to a channel. Only the exact channel strings match.

    Raises:
        InvalidMessageTypeError: If *message_type* is not a known channel.
    """
    if not isinstance(message_type, str):
        raise InvalidMessageTypeError(message_type)
    try:
        return MessageChannel(message_type)
    except (TypeError, ValueError):
        raise InvalidMessageTypeError(message_type) from None


class MessageDispatcher:
    """Selects the channel handler for a message and generates the reply.

    Args:
        client: Generation client used for every channel.
        handlers: Channel strategies; defaults to ``DEFAULT_HANDLERS``.
    """

    def __init__(
        self,
        client: GenerationClient,
        handlers: Optional[Dict[MessageChannel, ChannelHandler]] = None,
    ) -> None:
        self._client = client
        self._handlers = dict(handlers or DEFAULT_HANDLERS)

    def handler_for(self, channel: MessageChannel) -> ChannelHandler:
        try:
            return self._handlers[channel]
        except KeyError:
            raise InvalidMessageTypeError(channel.value) from None

    async def dispatch(self, message: str, message_type: Any) -> str:
        """Generate a reply for *message* on the declared channel.

        Generation failures are answered with the channel's apology; only
        an unknown *message_type* raises.

        Raises:
            InvalidMessageTypeError: If *message_type* is not a known channel.
        """
        handler = self.handler_for(parse_channel(message_type))
        prompt = handler.preprocess(message)
        logger.debug(
            "[Dispatcher] channel=%s prompt_chars=%d", handler.channel.value, len(prompt)
        )
        return await self._client.generate_or_fallback(
            prompt, fallback=handler.fallback_message
        )
