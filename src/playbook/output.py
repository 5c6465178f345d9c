"""Output formatting for the playbook CLI."""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape

from .core import CheckResult


@dataclass
class OutputContext:
    """Context for output formatting."""

    console: Console
    json_mode: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message respecting output mode."""
        if not self.json_mode:
            self.console.print(message, style=style, highlight=False, soft_wrap=True)

    def print_json(self, data: dict[str, Any]) -> None:
        """Print JSON data."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format."""
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.print(f"[red]Error: {escape(message)}[/red]")

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print success message in appropriate format."""
        if self.json_mode:
            self.print_json({"success": message, **(data or {})})
        else:
            self.print(f"[green]{escape(message)}[/green]")

    def report(self, result: CheckResult) -> None:
        """Print the outcome of checking one playbook.

        Every violation is listed; nothing is truncated.
        """
        if self.json_mode:
            self.print_json(result_to_dict(result))
            return
        path = escape(result.path)
        if result.valid:
            self.print(f"[green]✓[/green] {path} is valid")
            return
        self.print(f"[red]✗[/red] {path} has {len(result.violations)} violation(s):")
        for violation in result.violations:
            self.print(f"  - {escape(violation)}")


def result_to_dict(result: CheckResult) -> dict[str, Any]:
    """Serialize a check result for JSON output."""
    return {"path": result.path, "valid": result.valid, "violations": result.violations}


# Global output context (set by cli.py main callback)
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context.

    Returns a default OutputContext if not yet initialized by CLI.
    """
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


def set_output_context(ctx: OutputContext) -> None:
    """Set the global output context. Called by CLI main callback."""
    global _ctx
    _ctx = ctx
