"""S-expression node model with value semantics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from typedsexpr import paths, printer
from typedsexpr.errors import InvalidAccessError, InvalidOperationError


class Kind(Enum):
    """Kind of an S-expression node."""

    LIST = "list"  # named, with any number of children
    TOKEN = "token"  # unquoted value, e.g. -12.34
    STRING = "string"  # double-quoted value, e.g. "Foo!"
    LINE_BREAK = "line_break"  # manual line break inside a list


@dataclass
class SExpr:
    """A node of an S-expression tree.

    Lists own their children exclusively: ``append_child`` stores a deep copy
    of the given node, and ``copy`` returns an independent tree. Two nodes
    compare equal when kind, value and children are equal.

    Create nodes through the ``create_*`` factories rather than the
    constructor.
    """

    kind: Kind = Kind.STRING
    value: str = ""
    children: list[SExpr] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create_list(cls, name: str) -> SExpr:
        """Create an empty list named ``name``."""
        return cls(Kind.LIST, name)

    @classmethod
    def create_token(cls, token: str) -> SExpr:
        """Create an unquoted token."""
        return cls(Kind.TOKEN, token)

    @classmethod
    def create_string(cls, text: str) -> SExpr:
        """Create a quoted string."""
        return cls(Kind.STRING, text)

    @classmethod
    def create_line_break(cls) -> SExpr:
        """Create a line break."""
        return cls(Kind.LINE_BREAK, "")

    @staticmethod
    def parse(content: bytes | str) -> SExpr:
        """Parse a document into its root node. See ``typedsexpr.parser.parse``."""
        from typedsexpr.parser import parse

        return parse(content)

    # ------------------------------------------------------------------
    # Kind predicates and accessors
    # ------------------------------------------------------------------

    @property
    def is_list(self) -> bool:
        return self.kind is Kind.LIST

    @property
    def is_token(self) -> bool:
        return self.kind is Kind.TOKEN

    @property
    def is_string(self) -> bool:
        return self.kind is Kind.STRING

    @property
    def is_line_break(self) -> bool:
        return self.kind is Kind.LINE_BREAK

    def get_name(self) -> str:
        """Return the name of a list.

        Raises:
            InvalidAccessError: If this node is not a list

        """
        if not self.is_list:
            msg = f"get_name() requires a list, got {self.kind.value}"
            raise InvalidAccessError(msg)
        return self.value

    def get_value(self) -> str:
        """Return the text of a token or string.

        Raises:
            InvalidAccessError: If this node is a list or a line break

        """
        if not (self.is_token or self.is_string):
            msg = f"get_value() requires a token or string, got {self.kind.value}"
            raise InvalidAccessError(msg)
        return self.value

    def get_children(self, selector: Kind | str | None = None) -> list[SExpr]:
        """Return immediate children, optionally filtered.

        Args:
            selector: ``None`` for all children, a ``Kind`` to keep children of
                that kind, or a name to keep lists with that name

        Returns:
            Matching children in document order

        """
        if selector is None:
            return list(self.children)
        if isinstance(selector, Kind):
            return [child for child in self.children if child.kind is selector]
        return [
            child
            for child in self.children
            if child.is_list and child.value == selector
        ]

    def get_child(self, path: str) -> SExpr:
        """Resolve ``path`` below this node, raising if any segment misses."""
        return paths.get_child(self, path)

    def try_get_child(self, path: str) -> SExpr | None:
        """Resolve ``path`` below this node, or return None."""
        return paths.try_get_child(self, path)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append_child(self, child: SExpr) -> SExpr:
        """Append a copy of ``child`` and return the stored node.

        Raises:
            InvalidOperationError: If this node is not a list

        """
        if not self.is_list:
            msg = f"Cannot append a child to a {self.kind.value}"
            raise InvalidOperationError(msg)
        stored = child.copy()
        self.children.append(stored)
        return stored

    def append_list(self, name: str) -> SExpr:
        """Append a new empty list and return it."""
        return self.append_child(SExpr.create_list(name))

    def append_value(self, obj: Any) -> SExpr:
        """Serialize ``obj`` with the codec registry and append it.

        Returns self, so several values can be chained.
        """
        from typedsexpr.codecs import serialize

        self.append_child(serialize(obj))
        return self

    def append_field(self, name: str, obj: Any) -> SExpr:
        """Append ``(name <obj>)`` and return the new list."""
        return self.append_list(name).append_value(obj)

    def ensure_line_break(self) -> None:
        """Append a line break unless the last child already is one."""
        if not self.children or not self.children[-1].is_line_break:
            self.append_child(SExpr.create_line_break())

    def ensure_line_break_if_multi_line(self) -> None:
        """Like ``ensure_line_break``, but only for multi-line subtrees."""
        if self.is_multi_line():
            self.ensure_line_break()

    def is_multi_line(self) -> bool:
        """Check whether this node is or contains a line break."""
        pending = [self]
        while pending:
            node = pending.pop()
            if node.is_line_break:
                return True
            pending.extend(node.children)
        return False

    # ------------------------------------------------------------------
    # Copying and output
    # ------------------------------------------------------------------

    def copy(self) -> SExpr:
        """Return an independent deep copy of this subtree."""
        root = SExpr(self.kind, self.value)
        pending = [(self, root)]
        while pending:
            source, target = pending.pop()
            for child in source.children:
                clone = SExpr(child.kind, child.value)
                target.children.append(clone)
                pending.append((child, clone))
        return root

    def __copy__(self) -> SExpr:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> SExpr:
        return self.copy()

    def to_bytes(self) -> bytes:
        """Render this tree in canonical form. See ``typedsexpr.printer``."""
        return printer.to_bytes(self)
