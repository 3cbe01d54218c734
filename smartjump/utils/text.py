"""Text helpers."""

from __future__ import annotations

import re
from typing import Optional

from smartjump.core.models import Language

_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
# Lisp symbols may contain most punctuation.
_LISP_SYMBOL = re.compile(r"[^\s()\[\]{}\"';`,]+")


def symbol_at(line: str, column: int, language: Language = Language.OTHER) -> Optional[str]:
    """Return the identifier touching ``column`` on ``line``, if any."""
    pattern = _LISP_SYMBOL if language is Language.LISP else _IDENTIFIER
    column = max(column, 0)
    for match in pattern.finditer(line):
        if match.start() <= column <= match.end():
            return match.group(0)
    return None
