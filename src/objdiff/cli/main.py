"""
objdiff CLI - Command line interface for diffing JSON snapshots.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

import click

from .. import __version__
from ..core.sanitize import NotDiffableError, validate_diffable
from ..diff.renderer import DiffRenderer
from ..diff.structural_diff import StructuralDiffEngine

logger = logging.getLogger(__name__)

# Exit status for unusable input; 1 is reserved for --exit-code
EXIT_INPUT_ERROR = 2


def load_snapshot(path: str) -> Dict[str, Any]:
    """
    Read a JSON snapshot and check it is diffable.

    Raises:
        ValueError: If the file is not valid JSON or not a diffable object
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON ({e})") from e

    try:
        validate_diffable(data)
    except NotDiffableError as e:
        raise ValueError(f"{path}: {e}") from e

    return data


@click.group()
@click.version_option(version=__version__, prog_name="objdiff")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity",
    envvar="OBJDIFF_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, log_level):
    """
    objdiff - Structural diff for JSON record snapshots

    Report which fields were added, removed or modified between two versions.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("before", type=click.Path(exists=True, dir_okay=False))
@click.argument("after", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "-f", type=click.Choice(["text", "json"]), default="text")
@click.option("--output", "-o", type=click.Path(), help="Output file path")
@click.option("--color/--no-color", default=None, help="Colorize text output (default: when writing to a terminal)")
@click.option("--exit-code", is_flag=True, help="Exit with status 1 when there are changes")
@click.pass_context
def diff(ctx, before, after, format, output, color, exit_code):
    """
    Compare two JSON snapshots and show the changes.

    BEFORE is the baseline snapshot.
    AFTER is the changed snapshot.
    """
    try:
        snapshot_a = load_snapshot(before)
        snapshot_b = load_snapshot(after)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    engine = StructuralDiffEngine()
    changes = engine.diff(snapshot_a, snapshot_b)
    logger.info("Diffed %s against %s: %d change(s)", before, after, len(changes))

    if color is None:
        color = output is None and sys.stdout.isatty()
    renderer = DiffRenderer(color=color)

    if format == "json":
        result = renderer.render_json(changes)
    else:
        result = renderer.render_terminal(changes)

    if output:
        Path(output).write_text(result, encoding="utf-8")
        click.echo(f"Output written to: {output}")
    else:
        click.echo(result)

    if exit_code and changes:
        sys.exit(1)


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
