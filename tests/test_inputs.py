from __future__ import annotations

from pathlib import Path

import pytest

from ai_scaffold.inputs import (
    MIGRATION_DESCRIPTION_QUESTION,
    MIGRATION_NAME_QUESTION,
    InputResolver,
    RequestValidationError,
    snake_case,
)
from ai_scaffold.models.generation import ArtifactKind


class _ScriptedPrompt:
    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.questions: list[str] = []

    def __call__(self, question: str) -> str:
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else ""


def _never_asked(question: str) -> str:
    raise AssertionError(f"unexpected prompt: {question}")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("add email to users", "add_email_to_users"),
        ("  AddEmailToUsers  ", "add_email_to_users"),
        ("addEmail--to__users", "add_email_to_users"),
        ("create HTTPLogs table", "create_http_logs_table"),
        ("add_2fa_columns", "add_2fa_columns"),
        ("Add email (users)!", "add_email_users"),
    ],
)
def test_snake_case(raw: str, expected: str):
    assert snake_case(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["add email to users", "CreateOrdersTable", "already_snake_case", "x--Y  z"],
)
def test_snake_case_is_idempotent(raw: str):
    once = snake_case(raw)
    assert snake_case(once) == once


def test_resolve_migration_uses_supplied_values():
    request = InputResolver(_never_asked).resolve_migration(
        "Add Email To Users",
        "Add email column",
        table="users",
        output_path="out/migrations",
    )

    assert request.kind is ArtifactKind.MIGRATION
    assert request.name == "add_email_to_users"
    assert request.description == "Add email column"
    assert request.table == "users"
    assert request.table_schema is None
    assert request.output_path == Path("out/migrations")


def test_resolve_migration_prompts_for_missing_values():
    ask = _ScriptedPrompt("create orders", "Create the orders table")

    request = InputResolver(ask).resolve_migration(None, "   ")

    assert ask.questions == [MIGRATION_NAME_QUESTION, MIGRATION_DESCRIPTION_QUESTION]
    assert request.name == "create_orders"
    assert request.description == "Create the orders table"


def test_resolve_migration_fails_when_prompt_returns_nothing():
    with pytest.raises(RequestValidationError, match="description"):
        InputResolver(_ScriptedPrompt()).resolve_migration("create_orders", None)


def test_resolve_migration_rejects_name_without_word_characters():
    with pytest.raises(RequestValidationError, match="no usable characters"):
        InputResolver(_never_asked).resolve_migration("!!!", "desc")


@pytest.mark.parametrize("path", [42, ["a"], "   "])
def test_resolve_migration_rejects_invalid_path(path: object):
    with pytest.raises(RequestValidationError, match="Invalid path"):
        InputResolver(_never_asked).resolve_migration("name", "desc", output_path=path)


def test_resolve_migration_accepts_pathlike(tmp_path: Path):
    request = InputResolver(_never_asked).resolve_migration(
        "name", "desc", output_path=tmp_path
    )
    assert request.output_path == tmp_path


def test_resolve_migration_rejects_non_string_name():
    with pytest.raises(RequestValidationError, match="must be a string"):
        InputResolver(_never_asked).resolve_migration(123, "desc")


def test_resolve_rule_keeps_name_verbatim():
    request = InputResolver(_never_asked).resolve_rule(
        "Admin/UniqueEmail", "validate unique email", namespace="App\\Rules"
    )

    assert request.kind is ArtifactKind.VALIDATION_RULE
    assert request.name == "Admin/UniqueEmail"
    assert request.class_name == "UniqueEmail"
    assert request.subdirectories == ["Admin"]
    assert request.namespace == "App\\Rules\\Admin"


@pytest.mark.parametrize("name", ["unique-email", "9Lives", "Admin/Bad Name"])
def test_resolve_rule_rejects_invalid_class_names(name: str):
    with pytest.raises(RequestValidationError, match="not a valid class name"):
        InputResolver(_never_asked).resolve_rule(name, "desc", namespace="App\\Rules")
