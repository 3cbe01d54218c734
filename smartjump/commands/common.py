"""Shared command helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from smartjump.core.actions import ActionResult, NavigationAction
from smartjump.core.config import smart_enabled
from smartjump.core.constants import FIND_DEFINITIONS_ACTION, FIND_REFERENCES, GOTO_DEFINITION
from smartjump.core.dispatch import SmartJump, Tracer, WrapHandle
from smartjump.core.host import CommandRegistry, FileHost
from smartjump.core.state import CLIState
from smartjump.utils.formatting import format_location


@dataclass
class Session:
    """Registry, host and extension for one CLI invocation."""

    registry: CommandRegistry
    host: FileHost
    extension: SmartJump
    handle: Optional[WrapHandle]


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def tracer_for(state: CLIState) -> Optional[Tracer]:
    """Debug trace hook writing through the console, or None when off."""
    if not state.debug:
        return None
    # stderr keeps --json output parseable.
    trace_console = Console(
        stderr=True,
        quiet=state.quiet,
        no_color=state.plain_output,
        log_time=False,
        log_path=False,
    )
    return lambda message: trace_console.log(message, markup=False)


def open_host(
    state: CLIState,
    path: Path,
    line: int,
    column: int = 0,
    language: Optional[str] = None,
) -> FileHost:
    return FileHost(
        path=path,
        line=line,
        column=column,
        language=language,
        aliases=state.config.get("languages", {}),
    )


def build_session(
    state: CLIState,
    path: Path,
    line: int,
    column: int = 0,
    language: Optional[str] = None,
    smart: bool = True,
) -> Session:
    """Register navigation actions, install smart-jump and wrap if enabled."""
    host = open_host(state, path, line, column=column, language=language)
    actions_cfg = state.config.get("actions", {})

    registry = CommandRegistry()
    registry.register(
        GOTO_DEFINITION,
        NavigationAction(
            FIND_DEFINITIONS_ACTION,
            host,
            template=str(actions_cfg.get("find_definitions") or ""),
        ),
    )
    registry.register(
        FIND_REFERENCES,
        NavigationAction(
            FIND_REFERENCES,
            host,
            template=str(actions_cfg.get("find_references") or ""),
        ),
    )

    extension = SmartJump(
        host,
        rules=state.rules,
        lookahead=state.lookahead,
        tracer=tracer_for(state),
    )
    extension.install(registry)

    handle = None
    if smart and smart_enabled(state.config):
        handle = extension.enable(registry)
    return Session(registry=registry, host=host, extension=extension, handle=handle)


def print_action_result(state: CLIState, result: ActionResult) -> None:
    """Render the outcome of a navigation action."""
    if state.json_output:
        print_json_payload(state, result.to_dict())
        return

    request = result.request
    location = format_location(request.path, request.position)
    symbol = request.symbol or ""
    if state.plain_output:
        typer.echo(f"{request.action}\t{location}\t{symbol}")
    else:
        state.console.print(f"[bold]{request.action}[/bold] {escape(symbol)} at {escape(location)}")
    if result.output:
        typer.echo(result.output)
