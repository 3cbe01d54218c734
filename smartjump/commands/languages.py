"""Language and rule listing."""

from __future__ import annotations

from typing import Any, Dict, List

import typer
from rich.table import Table

from smartjump.commands.common import get_state, print_json_payload
from smartjump.core.constants import EXTENSION_LANGUAGES, MODE_ALIASES
from smartjump.core.models import Language
from smartjump.core.state import CLIState
from smartjump.utils.formatting import language_label


def _language_rows(state: CLIState) -> List[Dict[str, Any]]:
    modes = state.config.get("languages", {}).get("modes", {})
    extensions = state.config.get("languages", {}).get("extensions", {})

    rows: List[Dict[str, Any]] = []
    for language in Language:
        aliases = sorted(
            {name for name, tag in MODE_ALIASES.items() if tag is language}
            | {str(name) for name, tag in modes.items() if str(tag) == language.value}
        )
        suffixes = sorted(
            {ext for ext, tag in EXTENSION_LANGUAGES.items() if tag is language}
            | {str(ext) for ext, tag in extensions.items() if str(tag) == language.value}
        )
        rows.append(
            {
                "language": language.value,
                "label": language_label(language),
                "modes": aliases,
                "extensions": suffixes,
                "rules": [rule.name for rule in state.rules.get(language, ())],
            }
        )
    return rows


def languages_command(ctx: typer.Context) -> None:
    """List recognized languages and their definition rules."""
    state = get_state(ctx)
    rows = _language_rows(state)

    if state.json_output:
        print_json_payload(state, rows)
        return

    if state.plain_output:
        for row in rows:
            typer.echo(
                "\t".join(
                    [
                        row["language"],
                        ",".join(row["extensions"]),
                        ",".join(row["rules"]) or "-",
                    ]
                )
            )
        return

    table = Table(title="Definition rules")
    table.add_column("Language")
    table.add_column("Extensions")
    table.add_column("Rules")
    for row in rows:
        table.add_row(row["label"], " ".join(row["extensions"]), ", ".join(row["rules"]) or "-")
    state.console.print(table)
