"""Editor host abstraction: document snapshots and the command table."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Protocol, Union

from smartjump.core.classify import language_for_mode, language_for_path
from smartjump.core.models import CursorPosition, DocumentContext, Language


class HostError(RuntimeError):
    """Raised when the host cannot provide document state."""


class CommandError(RuntimeError):
    """Raised when a command is not registered."""


class EditorHost(Protocol):
    """Anything that can report the active document and cursor."""

    def snapshot(self) -> DocumentContext:
        ...


def _resolve_language(value: Union[str, Language, None], aliases: Optional[Mapping[str, Any]] = None) -> Language:
    if value is None:
        return Language.OTHER
    if isinstance(value, Language):
        return value
    return language_for_mode(value, aliases)


class BufferHost:
    """In-memory document with a movable cursor."""

    def __init__(
        self,
        text: str,
        line: int = 1,
        column: int = 0,
        language: Union[str, Language, None] = None,
        path: Optional[str] = None,
    ) -> None:
        self.lines = tuple(text.splitlines())
        self.position = CursorPosition(line=line, column=column)
        self.language = _resolve_language(language)
        self.path = path

    def move_to(self, line: int, column: int = 0) -> None:
        self.position = CursorPosition(line=line, column=column)

    def snapshot(self) -> DocumentContext:
        return DocumentContext(
            lines=self.lines,
            position=self.position,
            language=self.language,
            path=self.path,
        )


class FileHost:
    """Document backed by a file on disk, re-read on every snapshot."""

    def __init__(
        self,
        path: Path,
        line: int,
        column: int = 0,
        language: Union[str, Language, None] = None,
        aliases: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> None:
        self.path = path
        self.position = CursorPosition(line=line, column=column)
        aliases = aliases or {}
        if language is not None:
            self.language = _resolve_language(language, aliases.get("modes"))
        else:
            self.language = language_for_path(path, aliases.get("extensions"))

    def snapshot(self) -> DocumentContext:
        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise HostError(f"Cannot read {self.path}: {exc}") from exc
        return DocumentContext(
            lines=tuple(text.splitlines()),
            position=self.position,
            language=self.language,
            path=str(self.path),
        )


class CommandRegistry:
    """Name -> callable table standing in for the host's command layer."""

    def __init__(self) -> None:
        self._commands: Dict[str, Callable[..., Any]] = {}

    def register(self, name: str, command: Callable[..., Any]) -> None:
        self._commands[name] = command

    def get(self, name: str, default: Optional[Callable[..., Any]] = None) -> Optional[Callable[..., Any]]:
        return self._commands.get(name, default)

    def replace(self, name: str, command: Callable[..., Any]) -> Callable[..., Any]:
        """Swap a registered command and return the previous callable."""
        if name not in self._commands:
            raise CommandError(f"Unknown command: {name}")
        previous = self._commands[name]
        self._commands[name] = command
        return previous

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        command = self._commands.get(name)
        if command is None:
            raise CommandError(f"Unknown command: {name}")
        return command(*args, **kwargs)

    def names(self) -> List[str]:
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())
