"""Tests for playbook file checking."""

from pathlib import Path

import pytest

from playbook.config import CheckConfig, PlaybookConfig
from playbook.core.checker import (
    CheckResult,
    check_file,
    check_text,
    discover_playbooks,
    resolve_target,
)
from playbook.errors import PlaybookFileError


class TestCheckText:
    """Tests for check_text."""

    def test_valid_playbook(self, full_playbook: str) -> None:
        result = check_text(full_playbook, "auto-feature.yaml")
        assert result == CheckResult(path="auto-feature.yaml", violations=[])
        assert result.valid

    def test_parse_error_is_single_violation(self) -> None:
        result = check_text("name: t\nbogus: field\n", "bad.yaml")
        assert not result.valid
        assert result.violations == ['parse error: Line 2: unknown top-level field "bogus"']

    def test_validation_violations(self, invalid_playbook: str) -> None:
        result = check_text(invalid_playbook)
        assert result.path == "<string>"
        assert result.violations == [
            'step "s": args references "{{missing}}" but "missing" is not a declared arg'
        ]


class TestCheckFile:
    """Tests for check_file."""

    def test_reads_and_checks(self, tmp_path: Path, minimal_playbook: str) -> None:
        path = tmp_path / "minimal.yaml"
        path.write_text(minimal_playbook)
        result = check_file(path)
        assert result.valid
        assert result.path == str(path)

    def test_display_path(self, tmp_path: Path, minimal_playbook: str) -> None:
        path = tmp_path / "minimal.yaml"
        path.write_text(minimal_playbook)
        assert check_file(path, display="minimal").path == "minimal"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(PlaybookFileError, match="Cannot read file"):
            check_file(tmp_path / "nope.yaml")

    def test_binary_file(self, tmp_path: Path) -> None:
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe\x00\x01")
        with pytest.raises(PlaybookFileError):
            check_file(path)


class TestResolveTarget:
    """Tests for resolve_target."""

    def test_existing_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("")
        assert resolve_target(str(path), PlaybookConfig(), tmp_path) == path

    def test_name_in_playbooks_dir(self, playbooks_project: Path) -> None:
        resolved = resolve_target("auto-feature", PlaybookConfig(), playbooks_project)
        assert resolved == playbooks_project / ".playbooks" / "playbooks" / "auto-feature.yaml"

    def test_name_with_yml_suffix(self, playbooks_project: Path) -> None:
        resolved = resolve_target("minimal", PlaybookConfig(), playbooks_project)
        assert resolved.name == "minimal.yml"

    def test_configured_playbooks_dir(self, tmp_path: Path) -> None:
        custom = tmp_path / ".playbooks" / "flows"
        custom.mkdir(parents=True)
        (custom / "release.yaml").write_text("")
        config = PlaybookConfig(check=CheckConfig(playbooks_dir="flows"))
        assert resolve_target("release", config, tmp_path) == custom / "release.yaml"

    def test_unknown_target(self, playbooks_project: Path) -> None:
        with pytest.raises(PlaybookFileError, match="Cannot read file: ghost"):
            resolve_target("ghost", PlaybookConfig(), playbooks_project)


class TestDiscoverPlaybooks:
    """Tests for discover_playbooks."""

    def test_excludes_template_and_sorts(self, playbooks_project: Path) -> None:
        found = discover_playbooks(PlaybookConfig(), playbooks_project)
        assert [p.name for p in found] == ["auto-feature.yaml", "minimal.yml"]

    def test_custom_patterns(self, playbooks_project: Path) -> None:
        config = PlaybookConfig(check=CheckConfig(patterns=["*.yml"]))
        found = discover_playbooks(config, playbooks_project)
        assert [p.name for p in found] == ["minimal.yml"]

    def test_custom_exclude(self, playbooks_project: Path) -> None:
        config = PlaybookConfig(check=CheckConfig(exclude=["minimal.yml"]))
        found = discover_playbooks(config, playbooks_project)
        assert [p.name for p in found] == ["auto-feature.yaml", "playbook.tpl.yaml"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert discover_playbooks(PlaybookConfig(), tmp_path) == []
