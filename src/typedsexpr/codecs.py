"""Typed conversion between Python values and S-expression nodes."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any, ClassVar, TypeVar
from uuid import UUID

from typedsexpr.errors import TypeConversionError
from typedsexpr.nodes import SExpr

logger = logging.getLogger(__name__)

T = TypeVar("T")

_INTEGER_PATTERN = re.compile(r"-?[0-9]+")
_UUID_HEX = "-".join(f"[0-9a-fA-F]{{{n}}}" for n in (8, 4, 4, 4, 12))
_UUID_PATTERN = re.compile(rf"\{{{_UUID_HEX}\}}|{_UUID_HEX}")
_TRUE = "true"
_FALSE = "false"


class SExprCodecs:
    """Registry of serialize/deserialize functions per Python type.

    Builtin codecs cover ``bool``, ``int``, ``str`` and ``uuid.UUID``.
    Application types plug in without touching this module.

    Usage:
        SExprCodecs.register(
            Decimal,
            encode=lambda d: SExpr.create_token(str(d)),
            decode=lambda node: Decimal(node.get_value()),
        )
    """

    _registry: ClassVar[
        dict[type, tuple[Callable[[Any], SExpr], Callable[[SExpr], Any]]]
    ] = {}

    @classmethod
    def register(
        cls,
        typ: type[T],
        encode: Callable[[T], SExpr],
        decode: Callable[[SExpr], T],
    ) -> None:
        """Register encode/decode functions for a type.

        Registering a type again replaces its previous codec.

        Args:
            typ: The type to register
            encode: Function converting a T into a node
            decode: Function converting a node back into a T; it should raise
                TypeConversionError for malformed input

        """
        if typ in cls._registry:
            logger.debug(f"Replacing S-expression codec for {typ.__name__}")
        cls._registry[typ] = (encode, decode)

    @classmethod
    def get(
        cls,
        typ: type[T],
    ) -> tuple[Callable[[T], SExpr], Callable[[SExpr], T]] | None:
        """Get the codec registered for exactly ``typ``, or None."""
        return cls._registry.get(typ)

    @classmethod
    def lookup(
        cls,
        typ: type,
    ) -> tuple[Callable[[Any], SExpr], Callable[[SExpr], Any]] | None:
        """Get the codec for ``typ`` or its nearest registered base class."""
        for base in typ.__mro__:
            if codec := cls._registry.get(base):
                return codec
        return None

    @classmethod
    def unregister(cls, typ: type) -> bool:
        """Unregister a type's codec.

        Returns:
            True if the type was registered and removed, False otherwise.

        """
        if typ in cls._registry:
            del cls._registry[typ]
            return True
        return False

    @classmethod
    def clear(cls) -> None:
        """Clear the registry and re-register builtins."""
        cls._registry.clear()
        _register_builtins()


def _encode_bool(value: bool) -> SExpr:
    return SExpr.create_token(_TRUE if value else _FALSE)


def _decode_bool(node: SExpr) -> bool:
    text = node.get_value()
    if text == _TRUE:
        return True
    if text == _FALSE:
        return False
    msg = f"Expected '{_TRUE}' or '{_FALSE}', got {text!r}"
    raise TypeConversionError(msg)


def _decode_int(node: SExpr) -> int:
    text = node.get_value()
    if not _INTEGER_PATTERN.fullmatch(text):
        msg = f"Expected a decimal integer, got {text!r}"
        raise TypeConversionError(msg)
    return int(text)


def _encode_uuid(value: UUID) -> SExpr:
    return SExpr.create_token(f"{{{value}}}")


def _decode_uuid(node: SExpr) -> UUID:
    text = node.get_value()
    if not _UUID_PATTERN.fullmatch(text):
        msg = f"Expected a UUID in 8-4-4-4-12 form, got {text!r}"
        raise TypeConversionError(msg)
    return UUID(text)


def _register_builtins() -> None:
    """Pre-register codecs for the primitive types."""
    SExprCodecs.register(bool, encode=_encode_bool, decode=_decode_bool)

    SExprCodecs.register(
        int,
        encode=lambda i: SExpr.create_token(str(i)),
        decode=_decode_int,
    )

    SExprCodecs.register(
        str,
        encode=SExpr.create_string,
        decode=lambda node: node.get_value(),
    )

    SExprCodecs.register(UUID, encode=_encode_uuid, decode=_decode_uuid)


# Register builtins on module load
_register_builtins()


def serialize(obj: Any) -> SExpr:
    """Convert a value into a node using its registered codec.

    Raises:
        TypeError: If no codec is registered for the value's type

    """
    codec = SExprCodecs.lookup(type(obj))
    if codec is None:
        msg = f"No S-expression codec registered for {type(obj).__name__}"
        raise TypeError(msg)
    encode, _ = codec
    return encode(obj)


def deserialize(node: SExpr, typ: type[T]) -> T:
    """Convert a node back into a value of type ``typ``.

    Raises:
        TypeError: If no codec is registered for ``typ``
        TypeConversionError: If the node's text has the wrong lexical form
        InvalidAccessError: If the node is a list or line break where the
            codec expects a token or string

    """
    codec = SExprCodecs.lookup(typ)
    if codec is None:
        msg = f"No S-expression codec registered for {typ.__name__}"
        raise TypeError(msg)
    _, decode = codec
    return decode(node)
