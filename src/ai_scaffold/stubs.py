"""Default Laravel rule class bodies used when generation is unavailable."""

from __future__ import annotations

from ai_scaffold.models.generation import GenerationRequest

RULE_STUB = """<?php

namespace {{ namespace }};

use Closure;
use Illuminate\\Contracts\\Validation\\ValidationRule;

class {{ class }} implements ValidationRule
{
    /**
     * Run the validation rule.
     *
     * @param  \\Closure(string, ?string=): \\Illuminate\\Translation\\PotentiallyTranslatedString  $fail
     */
    public function validate(string $attribute, mixed $value, Closure $fail): void
    {
        //
    }
}
"""

IMPLICIT_RULE_STUB = """<?php

namespace {{ namespace }};

use Closure;
use Illuminate\\Contracts\\Validation\\ValidationRule;

class {{ class }} implements ValidationRule
{
    /**
     * Indicates whether the rule should be implicit.
     *
     * @var bool
     */
    public $implicit = true;

    /**
     * Run the validation rule.
     *
     * @param  \\Closure(string, ?string=): \\Illuminate\\Translation\\PotentiallyTranslatedString  $fail
     */
    public function validate(string $attribute, mixed $value, Closure $fail): void
    {
        //
    }
}
"""


def render_rule_stub(request: GenerationRequest) -> str:
    stub = IMPLICIT_RULE_STUB if request.implicit else RULE_STUB
    return stub.replace("{{ namespace }}", request.namespace or "App\\Rules").replace(
        "{{ class }}", request.class_name
    )
