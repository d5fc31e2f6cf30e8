from __future__ import annotations

from pathlib import Path

import typer

from relkit.cli.commands._helpers import confirm_prompt, exit_on_failure
from relkit.cli.context import build_context
from relkit.core.result import Err
from relkit.output.console import ConsoleProtocol, Style
from relkit.services.release.model import ReleaseContext, ReleaseRequest
from relkit.services.release.pipeline import ReleaseOutcome, run_release


def release(
    version: str | None = typer.Argument(None, help="Version to release (e.g. 1.1.0)"),
    bump: str | None = typer.Option(
        None, "--bump", metavar="TYPE", help="Auto-bump version (major|minor|patch)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be done without changes"
    ),
    no_push: bool = typer.Option(
        False, "--no-push", help="Create commit and tag locally but don't push or publish"
    ),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompts"),
    project_root: Path | None = typer.Option(
        None, "--project-root", help="Project root (default: current directory)"
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Release config file (default: <project-root>/release.toml)"
    ),
) -> None:
    """Build, bundle, tag and publish a release."""
    ctx = build_context(project_root=project_root, config_path=config)
    request = ReleaseRequest(
        explicit_version=version,
        bump_kind=bump,
        dry_run=dry_run,
        no_push=no_push,
        force=force,
    )

    release_ctx = ReleaseContext(
        project_root=ctx.project_root,
        config=ctx.config,
        console=ctx.console,
        confirm=confirm_prompt,
    )
    result = run_release(release_ctx, request)
    if isinstance(result, Err):
        exit_on_failure(result.error)

    _print_outcome(ctx.console, result.value)


def _print_outcome(console: ConsoleProtocol, outcome: ReleaseOutcome) -> None:
    console.newline()
    if outcome.dry_run:
        console.success(f"Dry run for {outcome.version} completed; nothing was changed")
        return

    console.success(f"Release {outcome.version} completed successfully!")
    console.print(f"tag: {outcome.bundle.tag}", Style.DIM)
    console.print(f"archive: {outcome.bundle.archive_path}", Style.DIM)
    if not outcome.pushed:
        console.print("push and GitHub release skipped (--no-push)", Style.DIM)
    elif outcome.release_url:
        console.print(f"release: {outcome.release_url}", Style.DIM)
