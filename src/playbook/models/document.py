"""Playbook document models.

A parsed playbook is a tree of frozen value objects: one Document holding
its declared Arguments and its ordered Steps. Enum-valued fields hold the
plain string value (see ``playbook.models.vocab``) so that documents built
outside the parser, including invalid ones, can still be materialised and
checked with ``validate_document``.

Example:
    >>> from playbook.models import Document, Step
    >>> doc = Document(
    ...     name="m",
    ...     description="d",
    ...     version="1.0",
    ...     steps=[Step(id="s", command="/c", autonomy="auto", error_policy="stop")],
    ... )
    >>> doc.steps[0].preconditions
    ()
"""

from pydantic import BaseModel, ConfigDict, Field

from ..constants import ARG_REF_PATTERN


class Argument(BaseModel):
    """Argument declared by a playbook and interpolated into step args."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Argument name")
    description: str | None = Field(default=None, description="Human-readable description")
    required: bool | None = Field(default=None, description="Whether the argument is mandatory")


class Step(BaseModel):
    """One unit of work in a playbook.

    Attributes:
        id: Slug identifier, unique within the playbook.
        command: Command reference the step runs (e.g. ``/speckit.plan``).
        args: Argument template; may contain ``{{name}}`` placeholders.
        autonomy: Gating level, one of ``Autonomy``.
        preconditions: Conditions required before the step runs.
        postconditions: Conditions the step must establish.
        error_policy: Failure handling, one of ``ErrorPolicy``.
        escalation_triggers: Events that escalate the step.
        parallel_group: Free-form key grouping steps that may run together.
        model: Model tier override, one of ``Model``, or None.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Step identifier (slug)")
    command: str | None = Field(default=None, description="Command reference")
    args: str = Field(default="", description="Argument template")
    autonomy: str | None = Field(default=None, description="Autonomy level")
    preconditions: tuple[str, ...] = Field(default=(), description="Required conditions")
    postconditions: tuple[str, ...] = Field(default=(), description="Established conditions")
    error_policy: str | None = Field(default=None, description="Error policy")
    escalation_triggers: tuple[str, ...] = Field(default=(), description="Escalation triggers")
    parallel_group: str | None = Field(default=None, description="Parallel group key")
    model: str | None = Field(default=None, description="Model tier override")

    def placeholders(self) -> list[str]:
        """Return ``{{name}}`` references in args, one entry per occurrence."""
        return [match.group(1).strip() for match in ARG_REF_PATTERN.finditer(self.args)]


class Document(BaseModel):
    """A parsed playbook."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Playbook name (slug)")
    description: str | None = Field(default=None, description="What the playbook does")
    version: str | None = Field(default=None, description="Opaque version string")
    args: tuple[Argument, ...] | None = Field(default=(), description="Declared arguments")
    steps: tuple[Step, ...] | None = Field(default=(), description="Ordered steps")

    def arg_names(self) -> set[str]:
        """Return the set of declared argument names."""
        return {arg.name for arg in self.args or () if arg.name}

    def get_step(self, step_id: str) -> Step | None:
        """Return the first step with the given id, or None."""
        for step in self.steps or ():
            if step.id == step_id:
                return step
        return None
