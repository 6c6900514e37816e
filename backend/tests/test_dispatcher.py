"""Tests for the message dispatcher and its channel handlers."""
from unittest.mock import AsyncMock

import pytest

from app.chat.dispatcher import (
    DEFAULT_HANDLERS,
    ChannelHandler,
    MessageChannel,
    MessageDispatcher,
    parse_channel,
    passthrough,
)
from app.errors import InvalidMessageTypeError
from app.generation import DEFAULT_FALLBACK, GenerationClient, StaticGenerationClient


class _BrokenClient(GenerationClient):
    async def generate(self, prompt: str) -> str:
        raise ConnectionError("network down")


FALLBACKS = {
    "text": "I'm sorry, I'm having trouble processing your message right now.",
    "voice": "I'm sorry, I'm having trouble processing your voice message.",
    "video": "I'm sorry, I'm having trouble processing your video message.",
}


class TestParseChannel:
    @pytest.mark.parametrize("value", ["text", "voice", "video"])
    def test_known_channels(self, value):
        assert parse_channel(value) is MessageChannel(value)

    @pytest.mark.parametrize("value", ["sms", "", "TEXT", "Text ", None, 1, True, ["text"], {"k": "v"}])
    def test_unknown_channels_raise(self, value):
        with pytest.raises(InvalidMessageTypeError) as exc_info:
            parse_channel(value)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid message type"


class TestDefaultHandlers:
    def test_every_channel_has_a_handler(self):
        assert set(DEFAULT_HANDLERS) == set(MessageChannel)

    def test_text_fallback_matches_generation_default(self):
        assert DEFAULT_HANDLERS[MessageChannel.TEXT].fallback_message == DEFAULT_FALLBACK

    @pytest.mark.parametrize("channel", list(MessageChannel))
    def test_preprocessing_is_passthrough(self, channel):
        handler = DEFAULT_HANDLERS[channel]
        assert handler.preprocess is passthrough
        assert handler.preprocess("raw transcript") == "raw transcript"


class TestMessageDispatcher:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("channel", ["text", "voice", "video"])
    async def test_valid_channels_return_generated_text(self, channel):
        client = StaticGenerationClient("Hi there")
        dispatcher = MessageDispatcher(client)

        assert await dispatcher.dispatch("hello", channel) == "Hi there"
        assert client.prompts == ["hello"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("channel", ["text", "voice", "video"])
    async def test_generation_failure_returns_channel_apology(self, channel):
        dispatcher = MessageDispatcher(_BrokenClient())
        assert await dispatcher.dispatch("hello", channel) == FALLBACKS[channel]

    @pytest.mark.asyncio
    async def test_invalid_type_does_not_call_generator(self):
        client = StaticGenerationClient("Hi there")
        dispatcher = MessageDispatcher(client)

        with pytest.raises(InvalidMessageTypeError):
            await dispatcher.dispatch("hi", "sms")
        assert client.prompts == []

    @pytest.mark.asyncio
    async def test_identical_prompts_are_not_cached(self):
        client = StaticGenerationClient("Hi there")
        dispatcher = MessageDispatcher(client)

        await dispatcher.dispatch("same", "text")
        await dispatcher.dispatch("same", "text")
        assert client.prompts == ["same", "same"]

    @pytest.mark.asyncio
    async def test_custom_handler_preprocess_and_fallback(self):
        client = AsyncMock(spec=GenerationClient)
        client.generate_or_fallback.return_value = "ok"
        handlers = dict(DEFAULT_HANDLERS)
        handlers[MessageChannel.VOICE] = ChannelHandler(
            channel=MessageChannel.VOICE,
            fallback_message="voice unavailable",
            preprocess=str.upper,
        )
        dispatcher = MessageDispatcher(client, handlers=handlers)

        assert await dispatcher.dispatch("hello", "voice") == "ok"
        client.generate_or_fallback.assert_awaited_once_with(
            "HELLO", fallback="voice unavailable"
        )

    @pytest.mark.asyncio
    async def test_channel_without_handler_is_invalid(self):
        handlers = {MessageChannel.TEXT: DEFAULT_HANDLERS[MessageChannel.TEXT]}
        dispatcher = MessageDispatcher(StaticGenerationClient(), handlers=handlers)

        with pytest.raises(InvalidMessageTypeError):
            await dispatcher.dispatch("hello", "video")
