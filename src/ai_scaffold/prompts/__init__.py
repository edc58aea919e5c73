"""Prompt builders for ai-scaffold."""

from ai_scaffold.prompts.artifact_generation import (
    MIGRATION_MAX_TOKENS,
    RULE_MAX_TOKENS,
    build_migration_prompt,
    build_prompt,
    build_rule_prompt,
)

__all__ = [
    "MIGRATION_MAX_TOKENS",
    "RULE_MAX_TOKENS",
    "build_migration_prompt",
    "build_prompt",
    "build_rule_prompt",
]
