"""Static constants and mappings for smartjump."""

from __future__ import annotations

from smartjump.core.models import Language

GOTO_DEFINITION = "goto-definition"
FIND_REFERENCES = "find-references"
FIND_DEFINITIONS_ACTION = "find-definitions"

SMART_JUMP = "smart-jump"
SMART_JUMP_ENABLE = "smart-jump-enable"
SMART_JUMP_DISABLE = "smart-jump-disable"

# Lines after the current one searched for `{` by the C/C++ rule.
DEFAULT_BLOCK_LOOKAHEAD = 2

DEBUG_VALUES = {"on": True, "off": False}

MODE_ALIASES = {
    "go": Language.GO,
    "golang": Language.GO,
    "python": Language.PYTHON,
    "py": Language.PYTHON,
    "javascript": Language.JAVASCRIPT,
    "js": Language.JAVASCRIPT,
    "js2": Language.JAVASCRIPT,
    "js-jsx": Language.JAVASCRIPT,
    "rjsx": Language.JAVASCRIPT,
    "javascriptreact": Language.JAVASCRIPT,
    "typescript": Language.TYPESCRIPT,
    "ts": Language.TYPESCRIPT,
    "tsx": Language.TYPESCRIPT,
    "typescriptreact": Language.TYPESCRIPT,
    "c": Language.C,
    "c++": Language.CPP,
    "cpp": Language.CPP,
    "cxx": Language.CPP,
    "rust": Language.RUST,
    "rustic": Language.RUST,
    "lisp": Language.LISP,
    "emacs-lisp": Language.LISP,
    "elisp": Language.LISP,
    "lisp-interaction": Language.LISP,
    "common-lisp": Language.LISP,
    "scheme": Language.LISP,
    "clojure": Language.LISP,
}

EXTENSION_LANGUAGES = {
    ".go": Language.GO,
    ".py": Language.PYTHON,
    ".pyi": Language.PYTHON,
    ".js": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".cjs": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".ts": Language.TYPESCRIPT,
    ".mts": Language.TYPESCRIPT,
    ".cts": Language.TYPESCRIPT,
    ".tsx": Language.TYPESCRIPT,
    ".c": Language.C,
    ".h": Language.C,
    ".cc": Language.CPP,
    ".cpp": Language.CPP,
    ".cxx": Language.CPP,
    ".hpp": Language.CPP,
    ".hh": Language.CPP,
    ".hxx": Language.CPP,
    ".rs": Language.RUST,
    ".el": Language.LISP,
    ".lisp": Language.LISP,
    ".cl": Language.LISP,
    ".lsp": Language.LISP,
    ".scm": Language.LISP,
    ".clj": Language.LISP,
}

LANGUAGE_LABELS = {
    Language.GO: "Go",
    Language.PYTHON: "Python",
    Language.JAVASCRIPT: "JavaScript",
    Language.TYPESCRIPT: "TypeScript",
    Language.C: "C",
    Language.CPP: "C++",
    Language.RUST: "Rust",
    Language.LISP: "Lisp",
    Language.OTHER: "Other",
}
