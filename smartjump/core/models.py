"""Lightweight data models shared by the classifier, host and dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Language(str, Enum):
    """Language tag resolved from the active document's declared type."""

    GO = "go"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    C = "c"
    CPP = "cpp"
    RUST = "rust"
    LISP = "lisp"
    OTHER = "other"


@dataclass(frozen=True)
class CursorPosition:
    """Cursor location: 1-based line, 0-based column."""

    line: int
    column: int = 0


@dataclass(frozen=True)
class DocumentContext:
    """Snapshot of the active document taken for a single invocation."""

    lines: Tuple[str, ...]
    position: CursorPosition
    language: Language
    path: Optional[str] = None

    @property
    def current_line(self) -> str:
        index = self.position.line - 1
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return ""

    def following_lines(self, count: int) -> Tuple[str, ...]:
        if count <= 0 or self.position.line < 1:
            return ()
        start = self.position.line
        return self.lines[start : start + count]


@dataclass(frozen=True)
class DefinitionMatch:
    """Classification result for the line under the cursor."""

    at_definition: bool
    language: Language
    rule: Optional[str] = None
    symbol: Optional[str] = None


@dataclass(frozen=True)
class NavigationRequest:
    """What a navigation action was asked to do."""

    action: str
    position: CursorPosition
    language: Language
    symbol: Optional[str] = None
    path: Optional[str] = None
