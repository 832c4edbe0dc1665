"""typedsexpr - Deterministic S-expression documents for typed Python data."""

from typedsexpr.codecs import (
    SExprCodecs,
    deserialize,
    serialize,
)
from typedsexpr.errors import (
    ChildNotFoundError,
    ContractError,
    InvalidAccessError,
    InvalidOperationError,
    InvalidTokenError,
    ParseError,
    SExprError,
    TypeConversionError,
)
from typedsexpr.nodes import (
    Kind,
    SExpr,
)
from typedsexpr.parser import (
    parse,
    skip_whitespace_and_comments,
)
from typedsexpr.paths import (
    get_child,
    try_get_child,
)
from typedsexpr.printer import (
    to_bytes,
    to_string,
)
from typedsexpr.serializable import Serializable
from typedsexpr.syntax import (
    is_valid_token,
    is_valid_token_char,
)

__all__ = [
    # Errors
    "ChildNotFoundError",
    "ContractError",
    "InvalidAccessError",
    "InvalidOperationError",
    "InvalidTokenError",
    # Node model
    "Kind",
    "ParseError",
    "SExpr",
    "SExprCodecs",
    "SExprError",
    # Object protocol
    "Serializable",
    "TypeConversionError",
    # Typed conversion
    "deserialize",
    # Path queries
    "get_child",
    "is_valid_token",
    "is_valid_token_char",
    # Text format
    "parse",
    "serialize",
    "skip_whitespace_and_comments",
    "to_bytes",
    "to_string",
    "try_get_child",
]
