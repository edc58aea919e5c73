from __future__ import annotations

from ai_scaffold.models.generation import ArtifactKind, GenerationRequest
from ai_scaffold.prompts import (
    MIGRATION_MAX_TOKENS,
    RULE_MAX_TOKENS,
    build_prompt,
)


def _migration(**overrides) -> GenerationRequest:
    fields = {
        "kind": ArtifactKind.MIGRATION,
        "name": "add_email_to_users",
        "description": "Add email column",
    }
    fields.update(overrides)
    return GenerationRequest(**fields)


def _rule(**overrides) -> GenerationRequest:
    fields = {
        "kind": ArtifactKind.VALIDATION_RULE,
        "name": "UniqueEmail",
        "description": "validate unique email",
        "namespace": "App\\Rules",
    }
    fields.update(overrides)
    return GenerationRequest(**fields)


def test_migration_prompt_is_deterministic():
    first = build_prompt(_migration(table="users", table_schema=["id", "name"]))
    second = build_prompt(_migration(table="users", table_schema=["id", "name"]))

    assert first == second
    assert first.text.encode("utf-8") == second.text.encode("utf-8")


def test_migration_prompt_sections_in_order():
    prompt = build_prompt(
        _migration(table="users", table_schema=["id", "name", "created_at"])
    )
    text = prompt.text

    instruction = text.index("Generate a Laravel migration")
    description = text.index("Add email column")
    schema = text.index("id, name, created_at")
    output_shape = text.index("return new class extends Migration")

    assert instruction < description < schema < output_shape
    assert "'users' table" in text
    assert "public function up(): void" in text
    assert "code only" in text
    assert prompt.max_output_tokens == MIGRATION_MAX_TOKENS == 2000


def test_migration_prompt_without_table_has_no_schema_section():
    text = build_prompt(_migration()).text

    assert "Current schema" not in text


def test_migration_prompt_keeps_description_verbatim():
    description = "  Rename `fullname` to name;\nkeep data  "
    text = build_prompt(_migration(description=description)).text

    assert f"Description:\n{description}\n" in text


def test_rule_prompt_names_class_and_contract():
    prompt = build_prompt(_rule())

    assert "'UniqueEmail'" in prompt.text
    assert "'App\\Rules'" in prompt.text
    assert "Illuminate\\Contracts\\Validation\\ValidationRule" in prompt.text
    assert "ImplicitRule" not in prompt.text
    assert "validate unique email" in prompt.text
    assert "code only" in prompt.text
    assert prompt.max_output_tokens == RULE_MAX_TOKENS == 1000


def test_implicit_rule_prompt_matches_stub_shape():
    text = build_prompt(_rule(implicit=True)).text

    assert "public $implicit = true;" in text
    assert "implements Illuminate\\Contracts\\Validation\\ValidationRule" in text
    assert "ValidationRule and Illuminate" not in text
