"""Formatting helpers used by console output."""

from __future__ import annotations

from typing import Any, Dict, Optional

from smartjump.core.constants import LANGUAGE_LABELS
from smartjump.core.models import CursorPosition, DefinitionMatch, Language


def format_location(path: Optional[str], position: CursorPosition) -> str:
    """Format path:line:column, grep style."""
    location = f"{position.line}:{position.column}"
    return f"{path}:{location}" if path else location


def language_label(language: Language) -> str:
    return LANGUAGE_LABELS.get(language, language.value)


def match_to_dict(match: DefinitionMatch) -> Dict[str, Any]:
    """Serializable view of a classification result."""
    return {
        "at_definition": match.at_definition,
        "language": match.language.value,
        "rule": match.rule,
        "symbol": match.symbol,
    }


def describe_match(match: DefinitionMatch) -> str:
    """One-line human summary of a classification result."""
    verdict = "definition" if match.at_definition else "reference"
    parts = [verdict, language_label(match.language)]
    if match.rule:
        parts.append(f"rule={match.rule}")
    if match.symbol:
        parts.append(f"symbol={match.symbol}")
    return "  ".join(parts)
