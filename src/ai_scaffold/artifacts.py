"""Artifact naming and persistence."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable

from ai_scaffold.models.generation import Artifact, ArtifactKind, GenerationRequest

logger = logging.getLogger(__name__)

ARTIFACT_EXTENSION = "php"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


class ArtifactWriteError(OSError):
    """Raised when an artifact directory or file cannot be written."""


class ArtifactExistsError(ArtifactWriteError):
    """Raised when a rule class file already exists."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class ArtifactWriter:
    """Derive artifact file names and write generated content to disk.

    Migration names carry a second-resolution timestamp prefix so that a
    lexicographic listing is also chronological. Two migrations with the same
    name generated within one second share a file name; the later write wins.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock

    def migration_file_name(self, name: str) -> str:
        stamp = self._clock().strftime(TIMESTAMP_FORMAT)
        return f"{stamp}_{name}.{ARTIFACT_EXTENSION}"

    @staticmethod
    def rule_file_name(request: GenerationRequest) -> str:
        return f"{request.class_name}.{ARTIFACT_EXTENSION}"

    def target_directory(self, request: GenerationRequest, default: Path) -> Path:
        if request.kind is ArtifactKind.MIGRATION:
            return request.output_path or default
        return default.joinpath(*request.subdirectories)

    def file_name(self, request: GenerationRequest) -> str:
        if request.kind is ArtifactKind.MIGRATION:
            return self.migration_file_name(request.name)
        return self.rule_file_name(request)

    def write(self, artifact: Artifact) -> Path:
        """Create the target directory if needed and write the content once."""
        try:
            artifact.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArtifactWriteError(
                f"Could not create directory '{artifact.directory}': {exc}"
            ) from exc

        path = artifact.path
        try:
            path.write_text(artifact.content, encoding="utf-8", newline="")
        except OSError as exc:
            raise ArtifactWriteError(f"Could not write '{path}': {exc}") from exc

        logger.debug("Wrote %d characters to %s", len(artifact.content), path)
        return path
