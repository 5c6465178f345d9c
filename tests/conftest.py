"""Shared test fixtures for playbook tests."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

MINIMAL_PLAYBOOK = """
name: minimal
description: A minimal playbook
version: "1.0"

args: []

steps:
  - id: first-step
    command: /some.command
    autonomy: auto
    error_policy: stop
"""

FULL_PLAYBOOK = """
name: auto-feature
description: Full feature workflow from plan to PR
version: "1.0"

args:
  - name: feature
    description: Feature branch name
    required: true

steps:
  - id: plan
    command: /speckit.plan
    args: ""
    autonomy: auto
    preconditions:
      - spec_exists
    postconditions:
      - plan_exists
    error_policy: stop
    escalation_triggers: []

  - id: agreement
    command: /agreement.create
    args: "{{feature}}"
    autonomy: auto
    preconditions: [plan_exists]
    postconditions:
      - agreement_exists
    error_policy: gate
    escalation_triggers:
      - subagent_error

  - id: implement
    command: /speckit.implement
    autonomy: auto
    preconditions:
      - agreement_exists
    error_policy: retry_once
    escalation_triggers:
      - postcondition_fail
      - subagent_error
    parallel_group: build
    model: sonnet

  - id: pr
    command: /feature.pr
    args: "{{feature}}"
    autonomy: gate_always
    preconditions:
      - agreement_exists
    postconditions:
      - pr_created
    error_policy: stop
"""

INVALID_PLAYBOOK = """
name: broken
description: Parses but references an undeclared arg
version: "1.0"
args: []
steps:
  - id: s
    command: /c
    args: "{{missing}}"
    autonomy: auto
    error_policy: stop
"""


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def minimal_playbook() -> str:
    """Return the smallest valid playbook."""
    return MINIMAL_PLAYBOOK


@pytest.fixture
def full_playbook() -> str:
    """Return a playbook exercising every step field."""
    return FULL_PLAYBOOK


@pytest.fixture
def invalid_playbook() -> str:
    """Return a playbook that parses but fails validation."""
    return INVALID_PLAYBOOK


@pytest.fixture
def playbooks_project(tmp_path: Path) -> Path:
    """Create a project with a .playbooks/playbooks directory.

    Contains a valid playbook, an invalid one and the scaffolded template.
    Returns the project root.
    """
    playbooks_dir = tmp_path / ".playbooks" / "playbooks"
    playbooks_dir.mkdir(parents=True)
    (playbooks_dir / "auto-feature.yaml").write_text(FULL_PLAYBOOK)
    (playbooks_dir / "minimal.yml").write_text(MINIMAL_PLAYBOOK)
    (playbooks_dir / "playbook.tpl.yaml").write_text("name: {{name}}\n")
    return tmp_path
