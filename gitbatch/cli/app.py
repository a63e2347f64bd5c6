from __future__ import annotations

from pathlib import Path

import typer

from gitbatch import __version__
from gitbatch.cli.commands.commit import commit
from gitbatch.cli.commands.run_cmd import run
from gitbatch.cli.commands.stage import discard, stage, unstage
from gitbatch.cli.commands.where import where
from gitbatch.cli.context import GlobalOptions, set_global_options
from gitbatch.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(stage)
app.command()(unstage)
app.command()(discard)
app.command()(commit)
app.command()(run)
app.command()(where)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: ./gitbatch.toml).",
    ),
    workspace: list[str] = typer.Option(
        [],
        "--workspace",
        "-w",
        help="Workspace folder, path or URI (repeatable; default: config, then cwd).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show git commands and output."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if config is not None and not config.expanduser().is_file():
        typer.echo(f"error: --config '{config}' does not exist", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    set_global_options(
        GlobalOptions(
            config_path=config.expanduser() if config is not None else None,
            workspaces=tuple(workspace),
            verbose=verbose,
        )
    )


def main() -> None:
    app()
