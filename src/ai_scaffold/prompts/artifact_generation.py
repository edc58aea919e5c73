"""Deterministic prompt rendering for migration and rule generation."""

from __future__ import annotations

from ai_scaffold.models.generation import ArtifactKind, GenerationRequest, Prompt

MIGRATION_MAX_TOKENS = 2000
RULE_MAX_TOKENS = 1000

_MIGRATION_OUTPUT_SHAPE = (
    "Output requirements:\n"
    "- Return a single Laravel migration file using the anonymous class format:\n"
    "<?php\n"
    "\n"
    "use Illuminate\\Database\\Migrations\\Migration;\n"
    "use Illuminate\\Database\\Schema\\Blueprint;\n"
    "use Illuminate\\Support\\Facades\\Schema;\n"
    "\n"
    "return new class extends Migration\n"
    "{\n"
    "    public function up(): void\n"
    "    {\n"
    "        // apply the change\n"
    "    }\n"
    "\n"
    "    public function down(): void\n"
    "    {\n"
    "        // revert the change\n"
    "    }\n"
    "};\n"
    "- Include the opening <?php tag and every use statement the code needs.\n"
    "- Declare parameter and return types on every method signature.\n"
    "- Respond with the code only: no markdown fences, explanations or extra context."
)

_RULE_OUTPUT_SHAPE = (
    "Output requirements:\n"
    "- Return the complete PHP file, including the opening <?php tag, "
    "the namespace declaration and every use statement the code needs.\n"
    "- Declare parameter and return types on every method signature.\n"
    "- Respond with the code only: no markdown fences, explanations or extra context."
)

_IMPLICIT_RULE_SHAPE = (
    "The rule must be implicit: declare `public $implicit = true;` on the class "
    "so it also runs when the attribute is missing or empty. Do not implement "
    "Illuminate\\Contracts\\Validation\\ImplicitRule."
)


def build_migration_prompt(request: GenerationRequest) -> Prompt:
    """Render the prompt for a migration request."""
    sections = [
        "Task: Generate a Laravel migration that performs the following change.",
        f"Description:\n{request.description}",
    ]
    if request.table_schema is not None:
        sections.append(
            f"Current schema of the '{request.table}' table "
            f"(columns in order):\n{', '.join(request.table_schema)}"
        )
    sections.append(_MIGRATION_OUTPUT_SHAPE)
    return Prompt(text="\n\n".join(sections), max_output_tokens=MIGRATION_MAX_TOKENS)


def build_rule_prompt(request: GenerationRequest) -> Prompt:
    """Render the prompt for a validation rule request."""
    sections = [
        (
            "Task: Generate the PHP code for a Laravel validation rule class "
            f"named '{request.class_name}' in the namespace '{request.namespace}' "
            "that implements Illuminate\\Contracts\\Validation\\ValidationRule "
            "and does the following."
        ),
        f"Description:\n{request.description}",
    ]
    if request.implicit:
        sections.append(_IMPLICIT_RULE_SHAPE)
    sections.append(_RULE_OUTPUT_SHAPE)
    return Prompt(text="\n\n".join(sections), max_output_tokens=RULE_MAX_TOKENS)



def build_prompt(request: GenerationRequest) -> Prompt:
    """Render ``request`` into prompt text; identical requests give identical text."""
    if request.kind is ArtifactKind.MIGRATION:
        return build_migration_prompt(request)
    return build_rule_prompt(request)
