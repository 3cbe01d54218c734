"""Navigation commands: classify, jump, exec."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer
from rich.markup import escape

from smartjump.commands.common import (
    build_session,
    get_state,
    open_host,
    print_action_result,
    print_json_payload,
)
from smartjump.core.actions import ActionError, ActionResult
from smartjump.core.classify import classify_context
from smartjump.core.constants import GOTO_DEFINITION
from smartjump.core.dispatch import WrapHandle
from smartjump.core.host import CommandError, HostError
from smartjump.core.state import CLIState
from smartjump.utils.formatting import describe_match, format_location, match_to_dict


def _validate_line(value: int) -> int:
    if value < 1:
        raise typer.BadParameter("line numbers start at 1")
    return value


def _validate_column(value: int) -> int:
    if value < 0:
        raise typer.BadParameter("column must be >= 0")
    return value


def _fail(state: CLIState, message: str, code: int) -> NoReturn:
    if state.json_output:
        print_json_payload(state, {"status": "error", "message": message})
    else:
        typer.echo(message)
    raise typer.Exit(code=code)


def _print_outcome(state: CLIState, name: str, outcome: Any) -> None:
    if isinstance(outcome, WrapHandle):
        outcome = f"{outcome.command} wrapped"
    if isinstance(outcome, ActionResult):
        print_action_result(state, outcome)
        return
    if state.json_output:
        print_json_payload(state, {"command": name, "result": outcome})
        return
    if state.plain_output:
        typer.echo(f"{name}\t{outcome}")
        return
    state.console.print(f"[bold]{escape(name)}[/bold] -> {escape(repr(outcome))}")


def classify_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Source file"),
    line: int = typer.Argument(..., help="1-based line number", callback=_validate_line),
    column: int = typer.Option(0, "--column", "-c", help="0-based column", callback=_validate_column),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language tag or mode name"),
) -> None:
    """Report whether the cursor line is a definition."""
    state = get_state(ctx)
    host = open_host(state, path, line, column=column, language=language)
    try:
        context = host.snapshot()
    except HostError as exc:
        _fail(state, str(exc), code=2)

    match = classify_context(context, rules=state.rules, lookahead=state.lookahead)
    payload = match_to_dict(match)
    payload["location"] = format_location(context.path, context.position)

    if state.json_output:
        print_json_payload(state, payload)
        return
    if state.plain_output:
        typer.echo(f"at_definition\t{str(match.at_definition).lower()}")
        typer.echo(f"language\t{match.language.value}")
        typer.echo(f"rule\t{match.rule or ''}")
        typer.echo(f"symbol\t{match.symbol or ''}")
        return
    state.console.print(f"{escape(payload['location'])}  {escape(describe_match(match))}")


def jump_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Source file"),
    line: int = typer.Argument(..., help="1-based line number", callback=_validate_line),
    column: int = typer.Option(0, "--column", "-c", help="0-based column", callback=_validate_column),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language tag or mode name"),
    smart: bool = typer.Option(True, "--smart/--no-smart", help="Wrap go-to-definition"),
) -> None:
    """Go to definition, or find references when already on one."""
    state = get_state(ctx)
    session = build_session(state, path, line, column=column, language=language, smart=smart)
    try:
        result = session.registry.invoke(GOTO_DEFINITION)
    except HostError as exc:
        _fail(state, str(exc), code=2)
    except ActionError as exc:
        _fail(state, str(exc), code=1)
    print_action_result(state, result)


def exec_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Source file"),
    line: int = typer.Argument(..., help="1-based line number", callback=_validate_line),
    commands: List[str] = typer.Argument(..., help="Registry commands to run in order"),
    column: int = typer.Option(0, "--column", "-c", help="0-based column", callback=_validate_column),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language tag or mode name"),
) -> None:
    """Run registry commands in order, e.g. smart-jump-disable goto-definition."""
    state = get_state(ctx)
    session = build_session(state, path, line, column=column, language=language)

    unknown = [name for name in commands if name not in session.registry]
    if unknown:
        known = ", ".join(session.registry.names())
        _fail(state, f"Unknown command(s): {', '.join(unknown)} (known: {known})", code=2)

    for name in commands:
        try:
            outcome = session.registry.invoke(name)
        except (HostError, CommandError) as exc:
            _fail(state, str(exc), code=2)
        except ActionError as exc:
            _fail(state, str(exc), code=1)
        _print_outcome(state, name, outcome)
