"""Command orchestration for migration and validation rule generation."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Callable, TextIO

from ai_scaffold.artifacts import ArtifactExistsError, ArtifactWriteError, ArtifactWriter
from ai_scaffold.config import Settings
from ai_scaffold.db.introspect import (
    SchemaNotFoundError,
    SchemaProbe,
    SchemaProbeError,
    TableIdentifierError,
)
from ai_scaffold.inputs import InputResolver, RequestValidationError
from ai_scaffold.llm.base import TextGenerator, TransportError
from ai_scaffold.models.generation import Artifact, GenerationRequest, Prompt
from ai_scaffold.prompts.artifact_generation import build_prompt
from ai_scaffold.stubs import render_rule_stub

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1


class Stage(str, Enum):
    RESOLVING = "resolving"
    PROBING = "probing"
    PROMPTING = "prompting"
    GENERATING = "generating"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


class CommandOrchestrator:
    """Run one generation command from raw input to a written artifact.

    Every collaborator is injected: the text generator, the schema probe used
    for ``--table``, the writer and the fallback template provider for rules.
    ``stage`` holds the last stage reached, ``FAILED`` included.
    """

    def __init__(
        self,
        generator: TextGenerator,
        *,
        settings: Settings,
        resolver: InputResolver,
        writer: ArtifactWriter | None = None,
        schema_probe: SchemaProbe | None = None,
        fallback_template: Callable[[GenerationRequest], str] = render_rule_stub,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.generator = generator
        self.settings = settings
        self.resolver = resolver
        self.writer = writer or ArtifactWriter()
        self.schema_probe = schema_probe
        self.fallback_template = fallback_template
        self._stdout = stdout
        self._stderr = stderr
        self.stage = Stage.RESOLVING

    def generate_migration(
        self,
        name: object,
        description: object,
        *,
        table: object = None,
        path: object = None,
        dry_run: bool = False,
    ) -> int:
        try:
            self._enter(Stage.RESOLVING)
            request = self.resolver.resolve_migration(
                name, description, table=table, output_path=path
            )

            self._enter(Stage.PROBING)
            request = self._attach_schema(request)

            self._enter(Stage.PROMPTING)
            prompt = build_prompt(request)
            if dry_run:
                return self._show_prompt(prompt)

            self._enter(Stage.GENERATING)
            self._info("Generating AI migration, this might take a few moments...")
            result = self.generator.generate(prompt)

            self._enter(Stage.WRITING)
            written = self.writer.write(
                Artifact(
                    file_name=self.writer.file_name(request),
                    directory=self.writer.target_directory(
                        request, self.settings.migrations_path
                    ),
                    content=result.content,
                )
            )
        except (RequestValidationError, TableIdentifierError) as exc:
            return self._fail(f"Invalid input:\n{exc}")
        except SchemaNotFoundError as exc:
            return self._fail(str(exc))
        except SchemaProbeError as exc:
            return self._fail(f"Schema lookup failed:\n{exc}")
        except TransportError as exc:
            return self._fail(f"Error fetching AI-generated content: {exc}")
        except ArtifactWriteError as exc:
            return self._fail(f"Error writing migration:\n{exc}")

        self._info(f"Migration [{written}] created successfully.")
        return self._done()

    def generate_rule(
        self,
        name: object,
        description: object,
        *,
        implicit: bool = False,
        force: bool = False,
        dry_run: bool = False,
    ) -> int:
        try:
            self._enter(Stage.RESOLVING)
            request = self.resolver.resolve_rule(
                name,
                description,
                namespace=self.settings.rules_namespace,
                implicit=implicit,
            )
            directory = self.writer.target_directory(request, self.settings.rules_path)
            file_name = self.writer.file_name(request)
            if not (force or dry_run) and (directory / file_name).exists():
                raise ArtifactExistsError(f"Rule [{directory / file_name}] already exists.")

            self._enter(Stage.PROMPTING)
            prompt = build_prompt(request)
            if dry_run:
                return self._show_prompt(prompt)

            self._enter(Stage.GENERATING)
            self._info("Generating AI rule, this might take a few moments...")
            try:
                content = self.generator.generate(prompt).content
            except TransportError as exc:
                logger.info("Rule generation failed, using default template: %s", exc)
                self._warn(
                    f"Error fetching AI-generated content: {exc}\n"
                    "Falling back to the default rule template."
                )
                content = self.fallback_template(request)

            self._enter(Stage.WRITING)
            written = self.writer.write(
                Artifact(file_name=file_name, directory=directory, content=content)
            )
        except RequestValidationError as exc:
            return self._fail(f"Invalid input:\n{exc}")
        except ArtifactWriteError as exc:
            return self._fail(f"Error writing rule:\n{exc}")

        self._info(f"Rule [{written}] created successfully.")
        return self._done()

    def _attach_schema(self, request: GenerationRequest) -> GenerationRequest:
        if request.table is None:
            return request
        if self.schema_probe is None:
            raise SchemaProbeError(
                f"No database is configured to inspect table '{request.table}'."
            )
        if not self.schema_probe.table_exists(request.table):
            raise SchemaNotFoundError(request.table)
        columns = self.schema_probe.list_columns(request.table)
        logger.debug("Table %s has columns: %s", request.table, columns)
        return request.model_copy(update={"table_schema": tuple(columns)})

    def _show_prompt(self, prompt: Prompt) -> int:
        self._info(f"--- PROMPT (max {prompt.max_output_tokens} output tokens) ---")
        self._info(prompt.text)
        return self._done()

    def _enter(self, stage: Stage) -> None:
        logger.debug("Stage %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    def _done(self) -> int:
        self._enter(Stage.DONE)
        return EXIT_OK

    def _fail(self, message: str) -> int:
        logger.debug("Failed during %s stage", self.stage.value)
        self.stage = Stage.FAILED
        print(message, file=self._stderr or sys.stderr)
        return EXIT_FAILED

    def _info(self, message: str) -> None:
        print(message, file=self._stdout or sys.stdout)

    def _warn(self, message: str) -> None:
        print(message, file=self._stderr or sys.stderr)
