"""Definition-line classification utilities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from smartjump.core.config import ConfigError
from smartjump.core.constants import DEFAULT_BLOCK_LOOKAHEAD, EXTENSION_LANGUAGES, MODE_ALIASES
from smartjump.core.models import CursorPosition, DefinitionMatch, DocumentContext, Language
from smartjump.utils.text import symbol_at


@dataclass(frozen=True)
class DefinitionRule:
    """A line-anchored pattern that marks a definition."""

    name: str
    pattern: "re.Pattern[str]"
    reject_terminator: bool = False
    block_lookahead: bool = False


RuleTable = Mapping[Language, Sequence[DefinitionRule]]


def _rule(name: str, pattern: str, **kwargs: Any) -> DefinitionRule:
    return DefinitionRule(name=name, pattern=re.compile(pattern), **kwargs)


_GO_RULES = (
    _rule("func", r"^func\s+(?:\([^)]*\)\s*)?[A-Za-z_]\w*"),
    _rule("type", r"^type\s+[A-Za-z_]\w*(?:\[[^\]]*\])?\s+(?:struct|interface)\b"),
    _rule("var", r"^var\s+(?:[A-Za-z_]\w*|\()"),
    _rule("const", r"^const\s+(?:[A-Za-z_]\w*|\()"),
)

_PYTHON_RULES = (
    _rule("def", r"^\s*(?:async\s+)?def\s+[A-Za-z_]\w*"),
    _rule("class", r"^\s*class\s+[A-Za-z_]\w*"),
)

_JS_EXPORT = r"(?:export\s+(?:default\s+)?)?(?:declare\s+)?"
_JS_BINDING = r"^\s*(?:export\s+)?(?:const|let|var)\s+[A-Za-z_$][\w$]*(?:\s*:[^=]+)?\s*=\s*(?:async\s+)?"

_JS_RULES = (
    _rule("function", r"^\s*" + _JS_EXPORT + r"(?:async\s+)?function\s*\*?\s*[A-Za-z_$][\w$]*"),
    _rule("function-expression", _JS_BINDING + r"function\b"),
    _rule("arrow-function", _JS_BINDING + r"(?:\([^)]*\)|[A-Za-z_$][\w$]*)\s*(?::\s*[^=]+)?=>"),
    _rule("class", r"^\s*" + _JS_EXPORT + r"(?:abstract\s+)?class\s+[A-Za-z_$][\w$]*"),
    _rule("interface", r"^\s*" + _JS_EXPORT + r"interface\s+[A-Za-z_$][\w$]*"),
    _rule("type-alias", r"^\s*" + _JS_EXPORT + r"type\s+[A-Za-z_$][\w$]*(?:\s*<[^>]*>)?\s*="),
)

_C_RULES = (
    _rule(
        "function",
        r"^\s*(?=\S)(?!(?:if|else|for|while|do|switch|case|return|sizeof|catch|new|delete|throw)\b)"
        r"(?:[\w*&:<>,~]+\s+)*[*&]*\s*[A-Za-z_~][\w:~]*\s*\(",
        reject_terminator=True,
        block_lookahead=True,
    ),
)

_RUST_VISIBILITY = r"^\s*(?:pub(?:\s*\([^)]*\))?\s+)?"

_RUST_RULES = (
    _rule("fn", _RUST_VISIBILITY + r'(?:(?:const|async|unsafe|extern\s+"[^"]*")\s+)*fn\s+[A-Za-z_]\w*'),
    _rule("struct", _RUST_VISIBILITY + r"struct\s+[A-Za-z_]\w*"),
    _rule("enum", _RUST_VISIBILITY + r"enum\s+[A-Za-z_]\w*"),
    _rule("trait", _RUST_VISIBILITY + r"(?:unsafe\s+)?trait\s+[A-Za-z_]\w*"),
)

_LISP_RULES = (
    _rule("defun", r"^\s*\((?:cl-)?defun\s+\S"),
    _rule("defmacro", r"^\s*\((?:cl-)?defmacro\s+\S"),
    _rule("defvar", r"^\s*\(defvar\s+\S"),
    _rule("defcustom", r"^\s*\(defcustom\s+\S"),
)

DEFINITION_RULES: Dict[Language, Tuple[DefinitionRule, ...]] = {
    Language.GO: _GO_RULES,
    Language.PYTHON: _PYTHON_RULES,
    Language.JAVASCRIPT: _JS_RULES,
    Language.TYPESCRIPT: _JS_RULES,
    Language.C: _C_RULES,
    Language.CPP: _C_RULES,
    Language.RUST: _RUST_RULES,
    Language.LISP: _LISP_RULES,
    Language.OTHER: (),
}


def _normalize_mode(mode: str) -> str:
    name = mode.strip().lower()
    if name.endswith("-mode"):
        name = name[: -len("-mode")]
    if name.endswith("-ts"):
        name = name[: -len("-ts")]
    return name


def parse_language(value: Union[str, Language]) -> Language:
    """Parse a language tag, raising ValueError for unknown tags."""
    if isinstance(value, Language):
        return value
    return Language(value.strip().lower())


def language_for_mode(mode: Optional[str], aliases: Optional[Mapping[str, Any]] = None) -> Language:
    """Resolve a mode name or language id to a language tag."""
    if not mode:
        return Language.OTHER
    name = _normalize_mode(mode)
    for table in (aliases or {}, MODE_ALIASES):
        for key, value in table.items():
            if _normalize_mode(str(key)) == name:
                try:
                    return parse_language(value)
                except ValueError:
                    return Language.OTHER
    try:
        return Language(name)
    except ValueError:
        return Language.OTHER


def language_for_path(
    path: Union[str, Path],
    aliases: Optional[Mapping[str, Any]] = None,
) -> Language:
    """Resolve a file path to a language tag from its extension."""
    suffix = Path(path).suffix.lower()
    if not suffix:
        return Language.OTHER
    for key, value in (aliases or {}).items():
        if str(key).lower() == suffix:
            try:
                return parse_language(value)
            except ValueError:
                return Language.OTHER
    return EXTENSION_LANGUAGES.get(suffix, Language.OTHER)


def _strip_comments(line: str) -> str:
    """Drop // and /* */ comments that sit outside string and char literals."""
    code: List[str] = []
    quote: Optional[str] = None
    index = 0
    while index < len(line):
        char = line[index]
        if quote is not None:
            code.append(char)
            if char == "\\" and index + 1 < len(line):
                code.append(line[index + 1])
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
            code.append(char)
        elif line.startswith("//", index):
            break
        elif line.startswith("/*", index):
            end = line.find("*/", index + 2)
            if end == -1:
                break
            code.append(" ")
            index = end + 2
            continue
        else:
            code.append(char)
        index += 1
    return "".join(code)


def _ends_with_terminator(line: str) -> bool:
    return _strip_comments(line).rstrip().endswith(";")


def _opens_block(line: str, following: Sequence[str], lookahead: int) -> bool:
    paren = line.find("(")
    if "{" in line[paren:]:
        return True
    return any("{" in candidate for candidate in list(following)[:lookahead])


def _rule_matches(
    rule: DefinitionRule,
    line: str,
    following: Sequence[str],
    lookahead: int,
) -> bool:
    if not rule.pattern.search(line):
        return False
    if rule.reject_terminator and _ends_with_terminator(line):
        return False
    if rule.block_lookahead and not _opens_block(line, following, lookahead):
        return False
    return True


def _matching_rule(
    line: str,
    language: Language,
    following: Sequence[str],
    rules: RuleTable,
    lookahead: int,
) -> Optional[str]:
    for rule in rules.get(language, ()):
        if _rule_matches(rule, line, following, lookahead):
            return rule.name
    return None


def classify_context(
    context: DocumentContext,
    rules: RuleTable = DEFINITION_RULES,
    lookahead: int = DEFAULT_BLOCK_LOOKAHEAD,
) -> DefinitionMatch:
    """Classify the cursor line of ``context`` as definition or reference."""
    line = context.current_line
    rule = _matching_rule(
        line,
        context.language,
        context.following_lines(lookahead),
        rules,
        lookahead,
    )
    return DefinitionMatch(
        at_definition=rule is not None,
        language=context.language,
        rule=rule,
        symbol=symbol_at(line, context.position.column, context.language),
    )


def is_at_definition(
    context: DocumentContext,
    rules: RuleTable = DEFINITION_RULES,
    lookahead: int = DEFAULT_BLOCK_LOOKAHEAD,
) -> bool:
    """True if the cursor sits on a line shaped like a definition."""
    return classify_context(context, rules=rules, lookahead=lookahead).at_definition


def classify_line(
    line: str,
    language: Union[str, Language],
    following: Iterable[str] = (),
    rules: RuleTable = DEFINITION_RULES,
    lookahead: int = DEFAULT_BLOCK_LOOKAHEAD,
) -> bool:
    """Classify a bare line of text; unknown language tags are never definitions."""
    try:
        tag = parse_language(language)
    except ValueError:
        return False
    context = DocumentContext(
        lines=(line, *following),
        position=CursorPosition(line=1),
        language=tag,
    )
    return is_at_definition(context, rules=rules, lookahead=lookahead)


def rules_from_config(config: Dict[str, Any]) -> Dict[Language, Tuple[DefinitionRule, ...]]:
    """Build the rule table from config extras, otherwise defaults."""
    table: Dict[Language, Tuple[DefinitionRule, ...]] = dict(DEFINITION_RULES)
    configured = config.get("rules", {})
    if not isinstance(configured, dict) or not configured:
        return table

    for key, patterns in configured.items():
        try:
            language = parse_language(str(key))
        except ValueError as exc:
            raise ConfigError(f"rules: unknown language {key!r}") from exc
        if language is Language.OTHER:
            raise ConfigError(
                "rules: 'other' cannot take rules; map the mode to a language under [languages.modes]"
            )
        if isinstance(patterns, str) or not isinstance(patterns, Iterable):
            raise ConfigError(f"rules.{key} must be a list of regular expressions")

        extra: List[DefinitionRule] = []
        for index, raw in enumerate(patterns):
            try:
                extra.append(_rule(f"custom-{index + 1}", str(raw)))
            except re.error as exc:
                raise ConfigError(f"rules.{key}: invalid pattern {raw!r}: {exc}") from exc
        table[language] = tuple(table.get(language, ())) + tuple(extra)
    return table
