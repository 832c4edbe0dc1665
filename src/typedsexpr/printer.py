"""Canonical text rendering of S-expression trees.

The layout is fully determined by the tree: line breaks are explicit
``LINE_BREAK`` nodes, and indentation follows from nesting depth. Printing a
freshly parsed canonical document therefore reproduces it byte for byte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typedsexpr.errors import InvalidTokenError
from typedsexpr.syntax import LIST_CLOSE, LIST_OPEN, NEWLINE, QUOTE, is_valid_token

if TYPE_CHECKING:
    from typedsexpr.nodes import SExpr

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"


def _checked_token(text: str, what: str) -> str:
    if not is_valid_token(text):
        msg = f"Invalid {what} {text!r}: use ASCII letters, digits and \\.:_-{{}}"
        raise InvalidTokenError(msg)
    return text


@dataclass(slots=True)
class _OpenList:
    """A list whose children are still being rendered."""

    node: SExpr
    indent: int
    next_index: int = 0
    ends_with_indent: bool = False


def _render_atom(node: SExpr, indent: int) -> str:
    if node.is_token:
        return _checked_token(node.value, "token")
    if node.is_string:
        return QUOTE + node.value + QUOTE
    return NEWLINE + " " * indent


def _render_list(node: SExpr, indent: int) -> str:
    parts = [LIST_OPEN, _checked_token(node.value, "list name")]
    stack = [_OpenList(node, indent)]
    while stack:
        current = stack[-1]
        children = current.node.children
        i = current.next_index
        if i == len(children):
            parts.append(LIST_CLOSE)
            stack.pop()
            continue
        child = children[i]
        current.next_index += 1
        if not current.ends_with_indent and not child.is_line_break:
            parts.append(" ")
        last = i == len(children) - 1
        next_is_line_break = not last and children[i + 1].is_line_break
        child_indent = (
            0 if child.is_line_break and next_is_line_break else current.indent + 1
        )
        current.ends_with_indent = child.is_line_break and child_indent > 0
        # Closing parenthesis lines up with the line that opened the list.
        if current.ends_with_indent and last:
            child_indent -= 1
        if child.is_list:
            parts.append(LIST_OPEN)
            parts.append(_checked_token(child.value, "list name"))
            stack.append(_OpenList(child, child_indent))
        else:
            parts.append(_render_atom(child, child_indent))
    return "".join(parts)


def to_string(node: SExpr, indent: int = 0) -> str:
    """Render ``node`` as text.

    Args:
        node: Root of the subtree to render
        indent: Number of spaces a line break inside this node indents by

    Returns:
        The canonical text, without a trailing newline being enforced

    Raises:
        InvalidTokenError: If a list name or token value is not a valid token

    """
    if node.is_list:
        return _render_list(node, indent)
    return _render_atom(node, indent)


def to_bytes(root: SExpr) -> bytes:
    """Render a document as UTF-8, terminated by a newline."""
    text = to_string(root)
    if not text.endswith(NEWLINE):
        text += NEWLINE
    logger.debug(f"Rendered S-expression document: {len(text)} characters")
    return text.encode(_ENCODING)
