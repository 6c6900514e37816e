"""GenerationClient abstract interface.

Every backend for the external generation API implements ``generate()``.
The shared ``generate_or_fallback()`` applies the "always answer" policy:
exactly one call, and a fixed apology string instead of an error.
"""
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = "I'm sorry, I'm having trouble processing your message right now."


class GenerationClient(ABC):
    """Abstract base class for generation API clients.

    Implementations perform a single call per ``generate()``: no retry,
    no caching and no streaming.
    """

    name = "generation"

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Send *prompt* to the external API and return the generated text.

        Raises:
            GenerationError: If the call fails or returns no usable text.
        """

    async def generate_or_fallback(self, prompt: str, fallback: str = DEFAULT_FALLBACK) -> str:
        """Like ``generate()`` but returns *fallback* on any failure."""
        try:
            return await self.generate(prompt)
        except Exception:
            logger.exception("Generation via %s failed, answering with fallback", self.name)
            return fallback


class StaticGenerationClient(GenerationClient):
    """Client that answers every prompt with the same text.

    Useful as a stand-in for the real API in local runs and tests.
    """

    name = "static"

    def __init__(self, text: str = DEFAULT_FALLBACK) -> None:
        self.text = text
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text
