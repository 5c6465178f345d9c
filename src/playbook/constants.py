"""Constants for playbook parsing and checking."""

import re

# Step ids and playbook names
SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
SLUG_PATTERN_TEXT = "[a-z0-9-]+"

# {{argname}} references inside a step's args template
ARG_REF_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

# Project layout
PLAYBOOKS_ROOT_NAME = ".playbooks"
CONFIG_FILE_NAME = "config.toml"
PLAYBOOK_SUFFIXES = (".yaml", ".yml")
