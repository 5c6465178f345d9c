"""Playbook file checking: parse, validate, report."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from ..config import PlaybookConfig, get_playbooks_root
from ..constants import PLAYBOOK_SUFFIXES
from ..errors import PlaybookFileError, PlaybookParseError
from .document_parser import parse_document
from .document_validator import validate_document

logger = logging.getLogger(__name__)


class CheckResult(BaseModel):
    """Outcome of checking one playbook."""

    path: str = Field(description="Path as given by the caller")
    violations: list[str] = Field(default_factory=list, description="Violation messages")

    @property
    def valid(self) -> bool:
        return not self.violations


def check_text(text: str, path: str = "<string>") -> CheckResult:
    """Parse and validate playbook text.

    A parse failure is reported as a single ``parse error:`` violation;
    validation only runs on documents that parsed.
    """
    try:
        document = parse_document(text)
    except PlaybookParseError as e:
        logger.debug(f"{path}: parse failed: {e}")
        return CheckResult(path=path, violations=[f"parse error: {e}"])

    violations = validate_document(document)
    logger.debug(f"{path}: {len(violations)} violation(s)")
    return CheckResult(path=path, violations=violations)


def check_file(path: Path, display: str | None = None) -> CheckResult:
    """Read and check a playbook file.

    Args:
        path: File to read (UTF-8)
        display: Path shown in the result, defaults to ``str(path)``

    Raises:
        PlaybookFileError: If the file cannot be read
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PlaybookFileError(f"Cannot read file: {display or path}") from e
    return check_text(text, display or str(path))


def resolve_target(target: str, config: PlaybookConfig, root: Path) -> Path:
    """Resolve a CLI target to a playbook file.

    An existing file path is returned as is. Otherwise the target is looked up
    by name in the configured playbooks directory.

    Raises:
        PlaybookFileError: If no file matches
    """
    path = Path(target)
    if path.is_file():
        return path

    playbooks_dir = config.get_playbooks_dir(get_playbooks_root(root))
    for suffix in PLAYBOOK_SUFFIXES:
        candidate = playbooks_dir / f"{target}{suffix}"
        if candidate.is_file():
            logger.debug(f"Resolved playbook {target} to {candidate}")
            return candidate
    raise PlaybookFileError(f"Cannot read file: {target}")


def discover_playbooks(config: PlaybookConfig, root: Path) -> list[Path]:
    """List playbook files in the configured playbooks directory, sorted."""
    playbooks_dir = config.get_playbooks_dir(get_playbooks_root(root))
    if not playbooks_dir.is_dir():
        return []
    found = {
        path
        for pattern in config.check.patterns
        for path in playbooks_dir.glob(pattern)
        if path.is_file() and path.name not in config.check.exclude
    }
    return sorted(found)
