from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from ai_scaffold.artifacts import ArtifactWriter
from ai_scaffold.config import Settings
from ai_scaffold.llm.base import TextGenerator, TransportError
from ai_scaffold.models.generation import GenerationResult, Prompt


class StubGenerator(TextGenerator):
    def __init__(self, text: str = "<?php // generated", *, error: TransportError | None = None):
        self.text = text
        self.error = error
        self.prompts: list[Prompt] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def generate(self, prompt: Prompt) -> GenerationResult:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return GenerationResult(content=self.text, model="stub", finish_reason="stop")


class StubProbe:
    def __init__(self, tables: dict[str, list[str]]):
        self.tables = tables
        self.lookups: list[str] = []

    def table_exists(self, table: str) -> bool:
        self.lookups.append(table)
        return table in self.tables

    def list_columns(self, table: str) -> list[str]:
        return list(self.tables[table])


class TickingClock:
    """Return a fixed start time advanced by ``step`` seconds on every call."""

    def __init__(self, start: datetime, step: int = 1):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = datetime.fromtimestamp(value.timestamp() + self.step, tz=UTC)
        return value


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        openai_api_key="sk-test",
        migrations_path=tmp_path / "database" / "migrations",
        rules_path=tmp_path / "app" / "Rules",
    )


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2024, 5, 17, 9, 30, 0, tzinfo=UTC))


@pytest.fixture
def writer(clock: TickingClock) -> ArtifactWriter:
    return ArtifactWriter(clock=clock)
