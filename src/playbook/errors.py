"""Playbook errors."""


class PlaybookError(Exception):
    """Base exception for playbook errors."""


class PlaybookParseError(PlaybookError):
    """Raised when a playbook document cannot be parsed.

    Attributes:
        line: 1-indexed line number of the offending line, if known
        field: Name of the field involved, if any
        allowed: Allowed values for enum violations (empty otherwise)
    """

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        field: str | None = None,
        allowed: tuple[str, ...] = (),
    ) -> None:
        self.line = line
        self.field = field
        self.allowed = allowed
        self.detail = message
        super().__init__(f"Line {line}: {message}" if line is not None else message)


class PlaybookSyntaxError(PlaybookParseError):
    """Raised on malformed lines, bad indentation or bad inline lists."""


class PlaybookSchemaError(PlaybookParseError):
    """Raised on unknown or missing fields and invalid values."""


class PlaybookReferenceError(PlaybookParseError):
    """Raised when a step id is used by more than one step."""


class PlaybookFileError(PlaybookError):
    """Raised when a playbook file cannot be found or read."""


class ConfigError(PlaybookError):
    """Raised when .playbooks/config.toml is invalid."""
