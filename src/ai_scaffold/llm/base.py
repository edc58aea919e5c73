"""Provider-independent text generation interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ai_scaffold.models.generation import GenerationResult, Prompt


class TransportError(RuntimeError):
    """Raised when the generation service cannot return usable text."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class TextGenerator(ABC):
    """Abstract text generation adapter."""

    @abstractmethod
    def generate(self, prompt: Prompt) -> GenerationResult:
        """Send ``prompt`` once and return the generated text."""
