"""Tests for playbook data models."""

import pytest
from pydantic import ValidationError

from playbook.models import (
    FIELD_VOCABULARIES,
    LIST_FIELDS,
    Argument,
    Autonomy,
    Condition,
    Document,
    ErrorPolicy,
    EscalationTrigger,
    Model,
    Step,
    allowed,
    values,
)


def test_step_defaults():
    step = Step(id="s", command="/c", autonomy="auto", error_policy="stop")
    assert step.args == ""
    assert step.preconditions == ()
    assert step.postconditions == ()
    assert step.escalation_triggers == ()
    assert step.parallel_group is None
    assert step.model is None


def test_step_lists_become_tuples():
    step = Step(id="s", preconditions=["spec_exists", "plan_exists"])
    assert step.preconditions == ("spec_exists", "plan_exists")


def test_step_placeholders():
    step = Step(id="s", args="{{feature}} --base {{ base }} {{feature}}")
    assert step.placeholders() == ["feature", "base", "feature"]


def test_step_without_placeholders():
    assert Step(id="s", args="--dry-run").placeholders() == []


def test_document_is_frozen():
    doc = Document(name="d", description="d", version="1")
    with pytest.raises(ValidationError):
        doc.name = "other"  # type: ignore[misc]


def test_step_is_frozen():
    step = Step(id="s")
    with pytest.raises(ValidationError):
        step.id = "t"  # type: ignore[misc]


def test_document_arg_names():
    doc = Document(
        args=[
            Argument(name="feature", description="f", required=True),
            Argument(name=None, description="unnamed"),
        ]
    )
    assert doc.arg_names() == {"feature"}
    assert Document(args=None).arg_names() == set()


def test_document_get_step():
    doc = Document(steps=[Step(id="a"), Step(id="b")])
    assert doc.get_step("b") == Step(id="b")
    assert doc.get_step("c") is None


def test_document_round_trips_through_json():
    doc = Document(
        name="d",
        description="desc",
        version="1",
        args=[Argument(name="a", description="A", required=False)],
        steps=[Step(id="s", command="/c", autonomy="auto", error_policy="stop", model="haiku")],
    )
    assert Document.model_validate_json(doc.model_dump_json()) == doc


def test_vocabulary_values():
    assert values(Autonomy) == ("auto", "gate_on_breaking", "gate_always", "skip")
    assert values(ErrorPolicy) == ("stop", "retry_once", "gate")
    assert values(Model) == ("opus", "sonnet", "haiku")
    assert len(values(Condition)) == 8
    assert "agreement_breaking" in values(EscalationTrigger)


def test_allowed_joins_values():
    assert allowed(ErrorPolicy) == "stop, retry_once, gate"


def test_enum_members_compare_to_strings():
    assert Autonomy.GATE_ALWAYS == "gate_always"


def test_field_vocabularies_cover_list_fields():
    assert set(LIST_FIELDS) <= set(FIELD_VOCABULARIES)
    assert FIELD_VOCABULARIES["preconditions"][0] is Condition
    assert FIELD_VOCABULARIES["escalation_triggers"] == (EscalationTrigger, "escalation_trigger")
