"""Typed models flowing through the artifact generation pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

_RULE_NAME_SPLIT = re.compile(r"[\\/]+")


class ArtifactKind(str, Enum):
    MIGRATION = "migration"
    VALIDATION_RULE = "rule"


class GenerationRequest(BaseModel):
    """Validated description of a single artifact to generate."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ArtifactKind
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    table: str | None = None
    table_schema: tuple[str, ...] | None = None
    output_path: Path | None = None
    namespace: str | None = None
    implicit: bool = False

    @model_validator(mode="after")
    def check_table_binding(self) -> GenerationRequest:
        if self.table_schema is not None and self.table is None:
            raise ValueError("table_schema requires a table.")
        if self.kind is ArtifactKind.VALIDATION_RULE and self.table is not None:
            raise ValueError("validation rules are not bound to a table.")
        return self

    @property
    def name_segments(self) -> list[str]:
        return [segment for segment in _RULE_NAME_SPLIT.split(self.name) if segment]

    @property
    def class_name(self) -> str:
        """Class name of a rule request (last segment of a nested name)."""
        return self.name_segments[-1]

    @property
    def subdirectories(self) -> list[str]:
        return self.name_segments[:-1]


@dataclass(frozen=True)
class Prompt:
    """Rendered prompt text and its output budget."""

    text: str
    max_output_tokens: int


class GenerationResult(BaseModel):
    """Text returned by the generation service."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(min_length=1)
    model: str | None = None
    finish_reason: str | None = None

    @property
    def truncated(self) -> bool:
        return self.finish_reason == "length"


@dataclass(frozen=True)
class Artifact:
    """File about to be written: name, target directory and raw content."""

    file_name: str
    directory: Path
    content: str

    @property
    def path(self) -> Path:
        return self.directory / self.file_name
