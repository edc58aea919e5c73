"""LLM adapters and factory helpers."""

from ai_scaffold.config import Settings
from ai_scaffold.llm.base import TextGenerator, TransportError
from ai_scaffold.llm.openai_adapter import OpenAIAdapter


def create_text_generator(settings: Settings) -> TextGenerator:
    """Create default text generator for current settings."""
    return OpenAIAdapter(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        timeout_seconds=settings.openai_timeout_seconds,
    )


__all__ = [
    "OpenAIAdapter",
    "TextGenerator",
    "TransportError",
    "create_text_generator",
]
