"""Resolve raw command input into validated generation requests."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from ai_scaffold.models.generation import ArtifactKind, GenerationRequest

_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")
_PHP_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

MIGRATION_NAME_QUESTION = "What should the migration be named?"
MIGRATION_DESCRIPTION_QUESTION = (
    "Please describe the migration you want to generate "
    '(e.g., "Add email column to users table")'
)
RULE_NAME_QUESTION = "What should the rule be named?"
RULE_DESCRIPTION_QUESTION = (
    "Please describe the validation rule you want to generate "
    '(e.g., "validate unique email")'
)


class RequestValidationError(ValueError):
    """Raised when command input cannot form a valid generation request."""


def snake_case(value: str) -> str:
    """Normalize a free-form name to lower snake_case.

    Word boundaries are case transitions (``addEmail``, ``HTTPServer``) and
    runs of non-alphanumeric characters, which collapse to one underscore.
    """
    split = _CASE_BOUNDARY.sub("_", value.strip())
    return _SEPARATORS.sub("_", split).strip("_").lower()


class InputResolver:
    """Turn optional CLI values into a ``GenerationRequest``.

    Missing names and descriptions are asked for through ``prompt_user``,
    which blocks until the user answers.
    """

    def __init__(self, prompt_user: Callable[[str], str]) -> None:
        self._prompt_user = prompt_user

    def resolve_migration(
        self,
        name: object,
        description: object,
        *,
        table: object = None,
        output_path: object = None,
    ) -> GenerationRequest:
        raw_name = self._require(name, MIGRATION_NAME_QUESTION, "name")
        normalized_name = snake_case(raw_name)
        if not normalized_name:
            raise RequestValidationError(
                f"Migration name {raw_name!r} has no usable characters."
            )
        text = self._require(description, MIGRATION_DESCRIPTION_QUESTION, "description")

        return self._build(
            kind=ArtifactKind.MIGRATION,
            name=normalized_name,
            description=text,
            table=_optional_table(table),
            output_path=_optional_path(output_path),
        )

    def resolve_rule(
        self,
        name: object,
        description: object,
        *,
        namespace: str,
        implicit: bool = False,
    ) -> GenerationRequest:
        raw_name = self._require(name, RULE_NAME_QUESTION, "name").strip()
        segments = [segment for segment in re.split(r"[\\/]+", raw_name) if segment]
        if not segments:
            raise RequestValidationError("Rule name cannot be empty.")
        for segment in segments:
            if not _PHP_IDENTIFIER.match(segment):
                raise RequestValidationError(
                    f"Rule name {raw_name!r} is not a valid class name."
                )
        text = self._require(description, RULE_DESCRIPTION_QUESTION, "description")

        return self._build(
            kind=ArtifactKind.VALIDATION_RULE,
            name=raw_name,
            description=text,
            namespace="\\".join([namespace, *segments[:-1]]),
            implicit=implicit,
        )

    def _require(self, value: object, question: str, field: str) -> str:
        if value is not None and not isinstance(value, str):
            raise RequestValidationError(f"The '{field}' argument must be a string.")
        if not value or not value.strip():
            value = self._prompt_user(question)
        if not isinstance(value, str) or not value.strip():
            raise RequestValidationError(f"A {field} is required.")
        return value

    @staticmethod
    def _build(**fields: object) -> GenerationRequest:
        try:
            return GenerationRequest.model_validate(fields)
        except ValidationError as exc:
            raise RequestValidationError(str(exc)) from exc


def _optional_table(table: object) -> str | None:
    if table is None:
        return None
    if not isinstance(table, str) or not table.strip():
        raise RequestValidationError("Invalid table provided.")
    return table.strip()


def _optional_path(path: object) -> Path | None:
    if path is None:
        return None
    if not isinstance(path, (str, os.PathLike)):
        raise RequestValidationError("Invalid path provided.")
    if not str(os.fspath(path)).strip():
        raise RequestValidationError("Invalid path provided.")
    return Path(path).expanduser()
