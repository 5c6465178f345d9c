"""Configuration management for playbook."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .constants import CONFIG_FILE_NAME, PLAYBOOKS_ROOT_NAME
from .errors import ConfigError


class CheckConfig(BaseModel):
    """Configuration for the check command."""

    playbooks_dir: str = Field(
        default="playbooks", description="Playbook directory, relative to .playbooks/"
    )
    patterns: list[str] = Field(
        default=["*.yaml", "*.yml"], description="Glob patterns selecting playbook files"
    )
    exclude: list[str] = Field(
        default=["playbook.tpl.yaml"], description="File names never checked (templates)"
    )


class PlaybookConfig(BaseModel):
    """Root configuration for playbook."""

    check: CheckConfig = Field(default_factory=CheckConfig)

    def get_playbooks_dir(self, playbooks_root: Path) -> Path:
        """Resolve the directory holding playbook files."""
        return playbooks_root / self.check.playbooks_dir


def get_playbooks_root(root: Path) -> Path:
    """Return the .playbooks directory for a project root."""
    return root / PLAYBOOKS_ROOT_NAME


def load_config(playbooks_root: Path) -> PlaybookConfig:
    """Load config from .playbooks/config.toml.

    Args:
        playbooks_root: Path to .playbooks directory

    Returns:
        Loaded configuration, or defaults if config.toml doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or does not match the schema
    """
    config_path = playbooks_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return PlaybookConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return PlaybookConfig.model_validate(data)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
