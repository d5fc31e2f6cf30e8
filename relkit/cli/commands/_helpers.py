"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from relkit.core.errors import ErrorCode
from relkit.services.release.errors import ReleaseError
from relkit.services.release.pipeline import ReleaseFailure


def confirm_prompt(prompt: str) -> bool:
    """Interactive yes/no prompt, defaulting to no."""
    return typer.confirm(prompt, default=False)


def echo_release_error(error: ReleaseError) -> None:
    typer.echo(f"error: {error.message}", err=True)
    if error.detail:
        typer.echo("  details:", err=True)
        for line in error.detail.splitlines():
            typer.echo(f"    {line}", err=True)


def exit_on_failure(failure: ReleaseFailure) -> NoReturn:
    """Print the failure and what was or was not done, then exit 1."""
    echo_release_error(failure.error)
    if failure.completed:
        typer.echo(f"completed before failure: {', '.join(failure.completed)}", err=True)
    if failure.pending:
        typer.echo(f"not done: {', '.join(failure.pending)}", err=True)
    raise typer.Exit(code=int(ErrorCode.FAILURE))
