"""Slash-separated path queries over S-expression trees.

A path is a sequence of segments joined by ``/``. Each segment selects one
child of the node reached so far:

- ``@N`` selects the N-th child that is not a line break, so formatting never
  changes what a positional path refers to.
- Any other segment selects the first list child with that name.

``try_get_child`` is the probe: it returns None on a miss. ``get_child`` is
for call sites where the structure must be present and raises
``ChildNotFoundError`` instead.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from typedsexpr.errors import ChildNotFoundError
from typedsexpr.syntax import PATH_SEPARATOR, POSITIONAL_PREFIX

if TYPE_CHECKING:
    from typedsexpr.nodes import SExpr

_INDEX_PATTERN = re.compile(r"[0-9]+")


def split_path(path: str) -> list[str]:
    """Split a path into its segments."""
    return path.split(PATH_SEPARATOR)


def _nth_content_child(node: SExpr, index: int) -> SExpr | None:
    position = 0
    for child in node.children:
        if child.is_line_break:
            continue
        if position == index:
            return child
        position += 1
    return None


def _named_child(node: SExpr, name: str) -> SExpr | None:
    for child in node.children:
        if child.is_list and child.value == name:
            return child
    return None


def resolve_segment(node: SExpr, segment: str) -> SExpr | None:
    """Resolve a single path segment against the children of ``node``."""
    if segment.startswith(POSITIONAL_PREFIX):
        digits = segment[len(POSITIONAL_PREFIX) :]
        if not _INDEX_PATTERN.fullmatch(digits):
            return None
        return _nth_content_child(node, int(digits))
    return _named_child(node, segment)


def _walk(node: SExpr, path: str) -> tuple[SExpr, str | None]:
    """Follow ``path`` as far as it resolves.

    Returns:
        The last node reached and the segment that did not resolve, or None
        as the segment when the whole path resolved

    """
    current = node
    for segment in split_path(path):
        found = resolve_segment(current, segment)
        if found is None:
            return current, segment
        current = found
    return current, None


def try_get_child(node: SExpr, path: str) -> SExpr | None:
    """Resolve ``path`` below ``node``.

    Returns:
        The addressed descendant, or None if any segment does not resolve

    """
    reached, missed = _walk(node, path)
    return reached if missed is None else None


def get_child(node: SExpr, path: str) -> SExpr:
    """Resolve ``path`` below ``node``, failing on a miss.

    Raises:
        ChildNotFoundError: Naming the first segment that did not resolve

    """
    reached, missed = _walk(node, path)
    if missed is not None:
        raise ChildNotFoundError(path, missed)
    return reached
