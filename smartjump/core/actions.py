"""Navigation actions used when smartjump itself acts as the host."""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from smartjump.core.host import EditorHost
from smartjump.core.models import NavigationRequest
from smartjump.utils.text import symbol_at


class ActionError(RuntimeError):
    """Raised when an external navigation command fails."""


@dataclass(frozen=True)
class ActionResult:
    """Navigation request plus whatever the external command printed."""

    request: NavigationRequest
    output: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        request = self.request
        return {
            "action": request.action,
            "path": request.path,
            "line": request.position.line,
            "column": request.position.column,
            "language": request.language.value,
            "symbol": request.symbol,
            "output": self.output,
        }


class NavigationAction:
    """Find-definitions or find-references against the current document.

    Without a command template the action only reports the request. With
    one, the template is formatted with ``{path} {line} {column} {symbol}
    {language}`` and run; the command's own failure is surfaced as
    ``ActionError``.
    """

    def __init__(
        self,
        action: str,
        host: EditorHost,
        template: str = "",
        runner: Optional[Callable[..., "subprocess.CompletedProcess[str]"]] = None,
    ) -> None:
        self.action = action
        self.host = host
        self.template = template.strip()
        self.runner = runner or subprocess.run

    def request(self) -> NavigationRequest:
        context = self.host.snapshot()
        return NavigationRequest(
            action=self.action,
            position=context.position,
            language=context.language,
            symbol=symbol_at(context.current_line, context.position.column, context.language),
            path=context.path,
        )

    def _command(self, request: NavigationRequest) -> List[str]:
        fields = {
            "path": request.path or "",
            "line": request.position.line,
            "column": request.position.column,
            "symbol": request.symbol or "",
            "language": request.language.value,
        }
        try:
            return [part.format(**fields) for part in shlex.split(self.template)]
        except (KeyError, ValueError) as exc:
            raise ActionError(f"Invalid {self.action} command template {self.template!r}: {exc}") from exc

    def __call__(self, *_args: Any, **_kwargs: Any) -> ActionResult:
        request = self.request()
        if not self.template:
            return ActionResult(request=request)

        argv = self._command(request)
        try:
            result = self.runner(argv, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise ActionError(f"{self.action} failed to start {argv[0]!r}: {exc}") from exc
        if result.returncode != 0:
            raise ActionError(f"{self.action} failed: {result.stderr.strip() or result.returncode}")
        return ActionResult(request=request, output=result.stdout.strip())

