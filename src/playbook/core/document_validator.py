"""Semantic and referential validation of playbook documents.

Unlike the parser, which stops at the first defect, validation collects every
violation so a single run reports everything wrong with a document. It works
on any Document, including ones built without the parser.
"""

from ..constants import SLUG_PATTERN, SLUG_PATTERN_TEXT
from ..models import FIELD_VOCABULARIES, LIST_FIELDS, Document, Step, allowed, values

_TOP_LEVEL_REQUIRED = ("name", "description", "version", "args", "steps")
_STEP_REQUIRED = ("id", "command", "autonomy", "error_policy")
_STEP_ENUMS = ("autonomy", "error_policy", "model")


def _validate_top_level(doc: Document) -> list[str]:
    violations: list[str] = []
    for field in _TOP_LEVEL_REQUIRED:
        value = getattr(doc, field)
        if value is None or value == "":
            violations.append(f'missing required top-level field "{field}"')

    if doc.name and not SLUG_PATTERN.match(doc.name):
        violations.append(f'name "{doc.name}" must match pattern {SLUG_PATTERN_TEXT}')

    if not doc.steps:
        violations.append("steps must contain at least 1 step")
    return violations


def _validate_step(step: Step, ref: str) -> list[str]:
    violations: list[str] = []
    for field in _STEP_REQUIRED:
        if not getattr(step, field):
            violations.append(f'{ref}: missing required field "{field}"')

    if step.id and not SLUG_PATTERN.match(step.id):
        violations.append(f'{ref}: id "{step.id}" must match pattern {SLUG_PATTERN_TEXT}')

    # Unset enum fields are reported above as missing (or are optional).
    for field in _STEP_ENUMS:
        value = getattr(step, field)
        vocab, label = FIELD_VOCABULARIES[field]
        if value and value not in values(vocab):
            violations.append(f'{ref}: {label} "{value}" is not valid (allowed: {allowed(vocab)})')

    for field in LIST_FIELDS:
        vocab, label = FIELD_VOCABULARIES[field]
        for value in getattr(step, field):
            if value not in values(vocab):
                violations.append(
                    f'{ref}: {label} "{value}" is not valid (allowed: {allowed(vocab)})'
                )
    return violations


def _validate_references(step: Step, ref: str, declared: set[str]) -> list[str]:
    return [
        f'{ref}: args references "{{{{{name}}}}}" but "{name}" is not a declared arg'
        for name in step.placeholders()
        if name not in declared
    ]


def validate_document(doc: Document) -> list[str]:
    """Check a document and return every violation found.

    Checks required top-level fields, the name pattern, that at least one
    step exists, per-step required fields, id pattern and uniqueness, enum
    membership of every vocabulary field, and that every ``{{name}}``
    placeholder in a step's args refers to a declared argument.

    Args:
        doc: Document to check; it is not modified

    Returns:
        Human-readable violation messages, empty when the document is valid
    """
    violations = _validate_top_level(doc)
    declared = doc.arg_names()
    seen_ids: set[str] = set()

    for step in doc.steps or ():
        ref = f'step "{step.id}"' if step.id else "step (unknown id)"
        violations.extend(_validate_step(step, ref))

        if step.id:
            if step.id in seen_ids:
                violations.append(f'step id "{step.id}" is not unique')
            seen_ids.add(step.id)

        violations.extend(_validate_references(step, ref, declared))

    return violations
