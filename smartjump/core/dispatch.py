"""Context-sensitive go-to-definition dispatch.

``SmartDefinition`` decorates the host's go-to-definition command. Each call
classifies the cursor line once: on a definition it runs find-references,
anywhere else it runs the original command unchanged. ``enable`` and
``disable`` swap the decorator in and out of a ``CommandRegistry``; the
registry entry itself records whether the command is wrapped.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from smartjump.core.classify import DEFINITION_RULES, RuleTable, classify_context
from smartjump.core.constants import (
    DEFAULT_BLOCK_LOOKAHEAD,
    FIND_REFERENCES,
    GOTO_DEFINITION,
    LANGUAGE_LABELS,
    SMART_JUMP,
    SMART_JUMP_DISABLE,
    SMART_JUMP_ENABLE,
)
from smartjump.core.host import CommandError, CommandRegistry, EditorHost
from smartjump.core.models import DefinitionMatch

Tracer = Callable[[str], None]
ReferencesTarget = Union[str, Callable[..., Any]]


def _trace_message(match: DefinitionMatch, branch: str) -> str:
    label = LANGUAGE_LABELS.get(match.language, match.language.value)
    rule = f" rule={match.rule}" if match.rule else ""
    symbol = f" symbol={match.symbol}" if match.symbol else ""
    return f"smart-jump: {branch} ({label}{rule}{symbol})"


class SmartDefinition:
    """Callable wrapper that reroutes go-to-definition at definition sites."""

    def __init__(
        self,
        original: Callable[..., Any],
        host: EditorHost,
        find_references: Callable[[], Callable[..., Any]],
        command: str = GOTO_DEFINITION,
        rules: RuleTable = DEFINITION_RULES,
        lookahead: int = DEFAULT_BLOCK_LOOKAHEAD,
        tracer: Optional[Tracer] = None,
    ) -> None:
        self.original = original
        self.host = host
        self.command = command
        self.rules = rules
        self.lookahead = lookahead
        self.tracer = tracer
        self._find_references = find_references
        self.handle = WrapHandle(command=command, wrapper=self)
        # Copy name/doc and set __wrapped__; leave our own attributes alone.
        functools.update_wrapper(self, original, updated=())

    def classify(self) -> DefinitionMatch:
        return classify_context(self.host.snapshot(), rules=self.rules, lookahead=self.lookahead)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.dispatch(self.classify(), *args, **kwargs)

    def dispatch(self, match: DefinitionMatch, *args: Any, **kwargs: Any) -> Any:
        if match.at_definition:
            if self.tracer is not None:
                self.tracer(_trace_message(match, "at definition, finding references"))
            return self._find_references()(*args, **kwargs)

        if self.tracer is not None:
            self.tracer(_trace_message(match, "not at definition, going to definition"))
        return self.original(*args, **kwargs)


@dataclass(frozen=True)
class WrapHandle:
    """Token returned by ``enable`` and accepted by ``disable``."""

    command: str
    wrapper: SmartDefinition


def _references_resolver(registry: CommandRegistry, target: ReferencesTarget) -> Callable[[], Callable[..., Any]]:
    if callable(target):
        return lambda: target

    def resolve() -> Callable[..., Any]:
        command = registry.get(target)
        if command is None:
            raise CommandError(f"Unknown command: {target}")
        return command

    return resolve


def is_enabled(registry: CommandRegistry, command: str = GOTO_DEFINITION) -> bool:
    """Whether ``command`` is currently wrapped."""
    return isinstance(registry.get(command), SmartDefinition)


def enable(
    registry: CommandRegistry,
    host: EditorHost,
    command: str = GOTO_DEFINITION,
    find_references: ReferencesTarget = FIND_REFERENCES,
    rules: RuleTable = DEFINITION_RULES,
    lookahead: int = DEFAULT_BLOCK_LOOKAHEAD,
    tracer: Optional[Tracer] = None,
) -> WrapHandle:
    """Wrap ``command`` in the registry; a second call returns the same handle."""
    current = registry.get(command)
    if current is None:
        raise CommandError(f"Unknown command: {command}")
    if isinstance(current, SmartDefinition):
        return current.handle

    wrapper = SmartDefinition(
        current,
        host,
        _references_resolver(registry, find_references),
        command=command,
        rules=rules,
        lookahead=lookahead,
        tracer=tracer,
    )
    registry.replace(command, wrapper)
    return wrapper.handle


def disable(
    registry: CommandRegistry,
    handle: Optional[WrapHandle] = None,
    command: str = GOTO_DEFINITION,
) -> bool:
    """Restore the original command. Returns False when nothing was wrapped."""
    if handle is not None:
        command = handle.command
    current = registry.get(command)
    if not isinstance(current, SmartDefinition):
        return False
    if handle is not None and handle.wrapper is not current:
        return False
    registry.replace(command, current.original)
    return True


class SmartJump:
    """Settings bundle exposing the interactive and lifecycle commands."""

    def __init__(
        self,
        host: EditorHost,
        rules: RuleTable = DEFINITION_RULES,
        lookahead: int = DEFAULT_BLOCK_LOOKAHEAD,
        tracer: Optional[Tracer] = None,
        command: str = GOTO_DEFINITION,
        references: str = FIND_REFERENCES,
    ) -> None:
        self.host = host
        self.rules = rules
        self.lookahead = lookahead
        self.tracer = tracer
        self.command = command
        self.references = references

    def enable(self, registry: CommandRegistry) -> WrapHandle:
        return enable(
            registry,
            self.host,
            command=self.command,
            find_references=self.references,
            rules=self.rules,
            lookahead=self.lookahead,
            tracer=self.tracer,
        )

    def disable(self, registry: CommandRegistry, handle: Optional[WrapHandle] = None) -> bool:
        return disable(registry, handle=handle, command=self.command)

    def jump(self, registry: CommandRegistry, *args: Any, **kwargs: Any) -> Any:
        """Smart go to definition or references, whether or not wrapping is on."""
        current = registry.get(self.command)
        if current is None:
            raise CommandError(f"Unknown command: {self.command}")
        # Use the unwrapped command so the line is classified exactly once.
        if isinstance(current, SmartDefinition):
            current = current.original
        wrapper = SmartDefinition(
            current,
            self.host,
            _references_resolver(registry, self.references),
            command=self.command,
            rules=self.rules,
            lookahead=self.lookahead,
            tracer=self.tracer,
        )
        return wrapper(*args, **kwargs)

    def install(self, registry: CommandRegistry) -> None:
        """Register the smart-jump command and its enable/disable commands."""
        registry.register(SMART_JUMP, functools.partial(self.jump, registry))
        registry.register(SMART_JUMP_ENABLE, functools.partial(self.enable, registry))
        registry.register(SMART_JUMP_DISABLE, functools.partial(self.disable, registry))
