from __future__ import annotations

import typer

from relkit.cli.commands.release_cmd import release

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command()(release)


def main() -> None:
    app()
