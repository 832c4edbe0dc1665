"""Lexical rules of the S-expression text format."""

from __future__ import annotations

import string

# Characters allowed in tokens and list names besides ASCII letters and digits.
TOKEN_SPECIAL_CHARS = frozenset("\\.:_-{}")
TOKEN_CHARS = frozenset(string.ascii_letters + string.digits) | TOKEN_SPECIAL_CHARS

# Inline whitespace. A newline is parsed as a LineBreak node, not skipped.
WHITESPACE = frozenset(" \r\t\v\f")

COMMENT_CHAR = ";"
NEWLINE = "\n"
LIST_OPEN = "("
LIST_CLOSE = ")"
QUOTE = '"'
PATH_SEPARATOR = "/"
POSITIONAL_PREFIX = "@"


def is_valid_token_char(c: str) -> bool:
    """Check whether a single character may appear in a token."""
    return c in TOKEN_CHARS


def is_valid_token(token: str) -> bool:
    """Check whether text is a non-empty run of token characters."""
    return bool(token) and all(c in TOKEN_CHARS for c in token)
