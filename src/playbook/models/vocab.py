"""Closed vocabularies for playbook step fields.

Parser and validator both check values against these enums, so the allowed
sets live here and nowhere else.
"""

from enum import Enum


class Autonomy(str, Enum):
    """How much human gating a step gets."""

    AUTO = "auto"
    GATE_ON_BREAKING = "gate_on_breaking"
    GATE_ALWAYS = "gate_always"
    SKIP = "skip"


class ErrorPolicy(str, Enum):
    """What happens when a step fails."""

    STOP = "stop"
    RETRY_ONCE = "retry_once"
    GATE = "gate"


class EscalationTrigger(str, Enum):
    """Events that promote an automatic step to a gated one."""

    POSTCONDITION_FAIL = "postcondition_fail"
    VERDICT_FAIL = "verdict_fail"
    AGREEMENT_BREAKING = "agreement_breaking"
    SUBAGENT_ERROR = "subagent_error"


class Condition(str, Enum):
    """Named facts about project state used as pre/postconditions."""

    SPEC_EXISTS = "spec_exists"
    PLAN_EXISTS = "plan_exists"
    TASKS_EXISTS = "tasks_exists"
    AGREEMENT_EXISTS = "agreement_exists"
    AGREEMENT_PASS = "agreement_pass"
    QA_PLAN_EXISTS = "qa_plan_exists"
    QA_VERDICT_PASS = "qa_verdict_pass"
    PR_CREATED = "pr_created"


class Model(str, Enum):
    """Model tier a step may be pinned to."""

    OPUS = "opus"
    SONNET = "sonnet"
    HAIKU = "haiku"


def values(vocab: type[Enum]) -> tuple[str, ...]:
    """Return the string values of a vocabulary, in declaration order."""
    return tuple(member.value for member in vocab)


def allowed(vocab: type[Enum]) -> str:
    """Return the allowed values as a comma-separated string for messages."""
    return ", ".join(values(vocab))


# Step fields checked against a vocabulary, with the singular label used in
# error messages. List fields are checked member by member.
FIELD_VOCABULARIES: dict[str, tuple[type[Enum], str]] = {
    "autonomy": (Autonomy, "autonomy"),
    "error_policy": (ErrorPolicy, "error_policy"),
    "model": (Model, "model"),
    "preconditions": (Condition, "precondition"),
    "postconditions": (Condition, "postcondition"),
    "escalation_triggers": (EscalationTrigger, "escalation_trigger"),
}

LIST_FIELDS = ("preconditions", "postconditions", "escalation_triggers")
