"""Error hierarchy for S-expression parsing, printing and conversion."""

from __future__ import annotations


class SExprError(Exception):
    """Base class for all errors raised by typedsexpr."""


class ParseError(SExprError, ValueError):
    """Malformed S-expression text.

    Carries the character offset of the failure together with the 1-based
    line and column it maps to.
    """

    def __init__(self, message: str, content: str = "", position: int = 0) -> None:
        self.position = position
        self.line = content.count("\n", 0, position) + 1
        self.column = position - (content.rfind("\n", 0, position) + 1) + 1
        self.reason = message
        super().__init__(f"{message} (line {self.line}, column {self.column})")


class ContractError(SExprError):
    """The caller violated a node contract (wrong kind, invalid token)."""


class InvalidAccessError(ContractError, TypeError):
    """An accessor was called on a node of the wrong kind."""


class InvalidOperationError(ContractError, TypeError):
    """A mutation was attempted on a node that does not support it."""


class InvalidTokenError(ContractError, ValueError):
    """A list name or token value violates the token lexical rule."""


class ChildNotFoundError(SExprError, LookupError):
    """A path segment could not be resolved by the demanding accessor."""

    def __init__(self, path: str, segment: str) -> None:
        self.path = path
        self.segment = segment
        super().__init__(f"Path '{path}' not found: no child matches '{segment}'")


class TypeConversionError(SExprError, ValueError):
    """A node's text does not have the lexical form of the requested type."""
