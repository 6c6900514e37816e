"""Generation client module.

Wraps the external generative-language API behind a small async interface
so the chat dispatcher never talks to an SDK directly.

Usage:
    from app.generation import GeminiClient

    client = GeminiClient(api_key="...")
    text = await client.generate_or_fallback("hello")
"""
from .base import DEFAULT_FALLBACK, GenerationClient, StaticGenerationClient
from .gemini import GeminiClient, build_generation_client

__all__ = [
    "DEFAULT_FALLBACK",
    "GenerationClient",
    "StaticGenerationClient",
    "GeminiClient",
    "build_generation_client",
]
