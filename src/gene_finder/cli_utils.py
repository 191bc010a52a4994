"""Console output helpers for the gene-finder command."""

from typing import Optional

import click

# Report output is hidden in quiet mode, errors never are
_quiet_mode = False


def set_quiet_mode(quiet: bool) -> None:
    global _quiet_mode
    _quiet_mode = quiet


def echo(message: str = "", **kwargs) -> None:
    """Print report output to stdout unless quiet mode is on."""
    if not _quiet_mode:
        click.echo(message, **kwargs)


def echo_error(message: str, suggestion: Optional[str] = None) -> None:
    """Print an error line, and a hint for fixing it, to stderr."""
    click.echo(f"ERROR: {message}", err=True)
    if suggestion:
        click.echo(f"Suggestion: {suggestion}", err=True)
