"""Check command: validate playbook files against the schema."""

import logging
from pathlib import Path
from typing import Any

import typer
from rich.markup import escape

from ..config import get_playbooks_root, load_config
from ..core import check_file, discover_playbooks, resolve_target
from ..errors import ConfigError, PlaybookFileError
from ..output import get_output_context, result_to_dict

logger = logging.getLogger(__name__)


def check(
    targets: list[str] | None = typer.Argument(
        None,
        help="Playbook files or names (defaults to every playbook in .playbooks/)",
        show_default=False,
    ),
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        help="Project root containing .playbooks/",
    ),
) -> None:
    """Validate playbooks, reporting every violation found."""
    ctx = get_output_context()

    try:
        config = load_config(get_playbooks_root(root))
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    if not targets:
        found = discover_playbooks(config, root)
        if not found:
            playbooks_dir = config.get_playbooks_dir(get_playbooks_root(root))
            ctx.error(f"No playbooks found in {playbooks_dir}")
            raise typer.Exit(1)
        targets = [str(path) for path in found]

    reports: list[dict[str, Any]] = []
    all_valid = True
    for target in targets:
        try:
            result = check_file(resolve_target(target, config, root), display=target)
        except PlaybookFileError as e:
            all_valid = False
            reports.append({"path": target, "valid": False, "error": str(e)})
            ctx.print(f"[red]✗[/red] {escape(str(e))}")
            continue

        all_valid = all_valid and result.valid
        reports.append(result_to_dict(result))
        if not ctx.json_mode:
            ctx.report(result)

    logger.debug(f"Checked {len(targets)} playbook(s), valid={all_valid}")
    if len(reports) == 1:
        ctx.print_json(reports[0])
    else:
        ctx.print_json({"results": reports, "valid": all_valid})

    if not all_valid:
        raise typer.Exit(1)
