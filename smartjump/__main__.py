"""Entry point for smartjump."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from smartjump import __version__
from smartjump.commands import config as config_commands
from smartjump.commands.languages import languages_command
from smartjump.commands.navigate import classify_command, exec_command, jump_command
from smartjump.core.classify import rules_from_config
from smartjump.core.config import (
    ConfigError,
    default_config_path,
    load_config,
    resolve_debug,
    resolve_lookahead,
    smart_enabled,
)
from smartjump.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Go to definition, or find references when already on a definition",
    invoke_without_command=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    debug: Optional[bool] = typer.Option(
        None,
        "--debug/--no-debug",
        help="Trace which navigation branch was taken",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
        rules = rules_from_config(cfg)
        lookahead = resolve_lookahead(cfg)
        debug_enabled = resolve_debug(cfg, explicit=debug)
        smart_enabled(cfg)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    ctx.obj = CLIState(
        json_output=(json_output and not plain_output),
        plain_output=plain_output,
        debug=debug_enabled,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
        rules=rules,
        lookahead=lookahead,
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


# Top-level commands
app.command("classify")(classify_command)
app.command("jump")(jump_command)
app.command("exec")(exec_command)
app.command("languages")(languages_command)
app.add_typer(config_commands.app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
