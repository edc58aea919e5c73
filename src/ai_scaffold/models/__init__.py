"""Typed request, prompt and artifact models."""

from ai_scaffold.models.generation import (
    Artifact,
    ArtifactKind,
    GenerationRequest,
    GenerationResult,
    Prompt,
)

__all__ = [
    "Artifact",
    "ArtifactKind",
    "GenerationRequest",
    "GenerationResult",
    "Prompt",
]
