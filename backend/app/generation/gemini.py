"""Google Gemini generation client.

This module provides a GenerationClient implementation backed by
LangChain's Gemini chat model.

Usage:
    client = GeminiClient(api_key="AIza...")
    text = await client.generate("hello")
"""
import logging
from typing import Optional

from langchain_core.messages import HumanMessage

from app.config import AppConfig
from app.errors import GenerationError

from .base import GenerationClient

logger = logging.getLogger(__name__)


class GeminiClient(GenerationClient):
    """GenerationClient implementation using Google's Gemini API.

    Attributes:
        api_key: Gemini API key.
        model: Gemini model name (default: gemini-2.0-flash).
    """

    DEFAULT_MODEL = "gemini-2.0-flash"
    name = "gemini"

    def __init__(self, api_key: Optional[str], model: Optional[str] = None) -> None:
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self._chat_model: Optional[object] = None

    def _get_chat_model(self) -> object:
        """Get or create the LangChain Gemini chat model.

        Raises:
            GenerationError: If no API key is configured.
            ImportError: If langchain-google-genai is not installed.
        """
        if self._chat_model is None:
            if not self.api_key:
                raise GenerationError("GEMINI_API_KEY is not configured", self.name)
            try:
                from langchain_google_genai import ChatGoogleGenerativeAI
            except ImportError:
                raise ImportError(
                    "langchain-google-genai package is required for GeminiClient. "
                    "Install it with: pip install langchain-google-genai"
                )
            self._chat_model = ChatGoogleGenerativeAI(
                model=self.model,
                google_api_key=self.api_key,
                # Single attempt per request.
                max_retries=1,
            )
        return self._chat_model

    async def generate(self, prompt: str) -> str:
        chat_model = self._get_chat_model()
        try:
            response = await chat_model.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            raise GenerationError(str(e), self.name) from e

        text = _response_text(getattr(response, "content", None))
        if not text:
            raise GenerationError("empty response", self.name)
        return text


def _response_text(content) -> str:
    # Newer Gemini models may return a list of content parts instead of a str.
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


def build_generation_client(config: AppConfig) -> GenerationClient:
    """Construct the generation client described by *config*."""
    settings = config.generation
    if not settings.api_key:
        logger.warning(
            "GEMINI_API_KEY not set; chat requests will be answered with fallback messages"
        )
    else:
        logger.info("Generation client ready: provider=gemini model=%s", settings.model)
    return GeminiClient(api_key=settings.api_key, model=settings.model)
