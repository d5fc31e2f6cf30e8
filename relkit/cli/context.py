from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relkit.core.config import ReleaseConfig, load_config
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    project_root: Path
    config: ReleaseConfig
    console: ConsoleProtocol


def build_context(
    *,
    project_root: Path | None = None,
    config_path: Path | None = None,
) -> CLIContext:
    try:
        root = (project_root or Path.cwd()).expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --project-root: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    if not root.is_dir():
        typer.echo(f"error: project root is not a directory: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    config_result = load_config(project_root=root, path=config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(
        project_root=root,
        config=config_result.value,
        console=RichConsole(),
    )
