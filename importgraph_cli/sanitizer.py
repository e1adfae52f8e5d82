"""Strip string literals and comments from Python source before import matching.

This is a pattern-based approximation of a lexer, not a tokenizer:

1. triple-quoted strings (``'''`` and ``\"\"\"``) are removed, non-greedy,
   across lines;
2. single-line ``'...'`` and ``"..."`` literals are removed, honouring
   backslash-escaped quotes;
3. everything from ``#`` to the end of the line is removed.

Removed triple-quoted strings leave their newlines behind so that line-anchored
matching downstream still sees the original line structure.  Unterminated
literals are never an error; they simply do not match.
"""

from __future__ import annotations

import re

_TRIPLE_QUOTED = re.compile(r"'''[\s\S]*?'''|\"\"\"[\s\S]*?\"\"\"")
_SINGLE_LINE = re.compile(r"'[^'\\\n]*(?:\\.[^'\\\n]*)*'|\"[^\"\\\n]*(?:\\.[^\"\\\n]*)*\"")
_LINE_COMMENT = re.compile(r"#[^\n]*")


def _keep_newlines(match: re.Match) -> str:
    return "\n" * match.group(0).count("\n")


def strip_strings_and_comments(text: str) -> str:
    """Return *text* with string literals and line comments removed."""
    cleaned = _TRIPLE_QUOTED.sub(_keep_newlines, text)
    cleaned = _SINGLE_LINE.sub("", cleaned)
    return _LINE_COMMENT.sub("", cleaned)
