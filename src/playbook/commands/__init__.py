"""CLI command implementations for playbook.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .check import check

__all__ = ["check"]
