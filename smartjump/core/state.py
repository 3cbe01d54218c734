"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

from rich.console import Console

from smartjump.core.classify import DefinitionRule
from smartjump.core.models import Language


@dataclass
class CLIState:
    """CLI runtime options and loaded configuration."""

    json_output: bool
    plain_output: bool
    debug: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console
    rules: Dict[Language, Tuple[DefinitionRule, ...]]
    lookahead: int
