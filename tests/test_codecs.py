"""Tests for SExprCodecs - typed conversion registry."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

import pytest

from typedsexpr.codecs import SExprCodecs, deserialize, serialize
from typedsexpr.errors import InvalidAccessError, TypeConversionError
from typedsexpr.nodes import SExpr
from typedsexpr.parser import parse

SAMPLE_UUID = UUID("0b3f9d1e-53ab-4b29-9c6a-0a3f0e7d2c11")


@pytest.fixture(autouse=True)
def _reset_registry():
    SExprCodecs.clear()
    yield
    SExprCodecs.clear()


@dataclass(frozen=True)
class Point:
    """Simple application type for testing extension."""

    x: int
    y: int


def _encode_point(p: Point) -> SExpr:
    node = SExpr.create_list("point")
    node.append_value(p.x).append_value(p.y)
    return node


def _decode_point(node: SExpr) -> Point:
    return Point(
        x=deserialize(node.get_child("@0"), int),
        y=deserialize(node.get_child("@1"), int),
    )


class TestBuiltinSerialize:
    """Test serialization of the primitive types."""

    def test_bool(self) -> None:
        assert serialize(True) == SExpr.create_token("true")
        assert serialize(False) == SExpr.create_token("false")

    def test_int(self) -> None:
        assert serialize(42) == SExpr.create_token("42")
        assert serialize(-7) == SExpr.create_token("-7")
        assert serialize(0) == SExpr.create_token("0")

    def test_str(self) -> None:
        assert serialize("Hello world") == SExpr.create_string("Hello world")

    def test_uuid_uses_braced_form(self) -> None:
        assert serialize(SAMPLE_UUID) == SExpr.create_token(
            "{0b3f9d1e-53ab-4b29-9c6a-0a3f0e7d2c11}"
        )

    def test_unregistered_type(self) -> None:
        with pytest.raises(TypeError, match="No S-expression codec"):
            serialize(1.5)


class TestBuiltinDeserialize:
    """Test deserialization of the primitive types."""

    def test_bool(self) -> None:
        assert deserialize(SExpr.create_token("true"), bool) is True
        assert deserialize(SExpr.create_token("false"), bool) is False

    @pytest.mark.parametrize("text", ["True", "1", "yes", ""])
    def test_bool_rejects_other_text(self, text: str) -> None:
        with pytest.raises(TypeConversionError):
            deserialize(SExpr.create_token(text), bool)

    def test_int(self) -> None:
        assert deserialize(SExpr.create_token("-12"), int) == -12
        assert deserialize(SExpr.create_token("0042"), int) == 42

    @pytest.mark.parametrize("text", ["1.5", "abc", "", "1_000", "0x10", " 1"])
    def test_int_rejects_non_numeric(self, text: str) -> None:
        with pytest.raises(TypeConversionError):
            deserialize(SExpr.create_token(text), int)

    def test_str(self) -> None:
        assert deserialize(SExpr.create_string("Alice"), str) == "Alice"

    def test_str_from_token(self) -> None:
        assert deserialize(SExpr.create_token("abc"), str) == "abc"

    def test_uuid_braced_and_bare(self) -> None:
        braced = SExpr.create_token("{0b3f9d1e-53ab-4b29-9c6a-0a3f0e7d2c11}")
        bare = SExpr.create_token("0b3f9d1e-53ab-4b29-9c6a-0a3f0e7d2c11")
        assert deserialize(braced, UUID) == SAMPLE_UUID
        assert deserialize(bare, UUID) == SAMPLE_UUID

    def test_uuid_rejects_garbage(self) -> None:
        with pytest.raises(TypeConversionError):
            deserialize(SExpr.create_token("{not-a-uuid}"), UUID)

    @pytest.mark.parametrize(
        "text",
        [
            "0b3f-9d1e-53ab-4b29-9c6a-0a3f-0e7d-2c11",
            "0b3f9d1e53ab4b299c6a0a3f0e7d2c11",
            "urn:uuid:0b3f9d1e-53ab-4b29-9c6a-0a3f0e7d2c11",
            "{0b3f9d1e-53ab-4b29-9c6a-0a3f0e7d2c11",
            "0b3f9d1e-53ab-4b29-9c6a-0a3f0e7d2c11}",
        ],
    )
    def test_uuid_requires_canonical_form(self, text: str) -> None:
        with pytest.raises(TypeConversionError):
            deserialize(SExpr.create_token(text), UUID)

    def test_uuid_accepts_upper_case(self) -> None:
        upper = SExpr.create_token("{0B3F9D1E-53AB-4B29-9C6A-0A3F0E7D2C11}")
        assert deserialize(upper, UUID) == SAMPLE_UUID

    def test_wrong_node_kind(self) -> None:
        with pytest.raises(InvalidAccessError):
            deserialize(SExpr.create_list("x"), int)

    def test_scenario_name_lookup(self) -> None:
        root = parse(b'(root (name "Alice") (id 1))')
        assert deserialize(root.get_child("name/@0"), str) == "Alice"
        assert deserialize(root.get_child("id/@0"), int) == 1

    def test_conversion_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            deserialize(SExpr.create_token("x"), int)


class TestRegistry:
    """Test registering application types."""

    def test_register_custom_type(self) -> None:
        SExprCodecs.register(Point, encode=_encode_point, decode=_decode_point)
        node = serialize(Point(1, -2))
        assert node.to_bytes() == b"(point 1 -2)\n"
        assert deserialize(parse(b"(point 3 4)"), Point) == Point(3, 4)

    def test_get(self) -> None:
        assert SExprCodecs.get(Point) is None
        SExprCodecs.register(Point, encode=_encode_point, decode=_decode_point)
        assert SExprCodecs.get(Point) == (_encode_point, _decode_point)

    def test_register_overwrites(self) -> None:
        SExprCodecs.register(
            Decimal,
            encode=lambda d: SExpr.create_token(str(d)),
            decode=lambda n: Decimal(n.get_value()),
        )
        SExprCodecs.register(
            Decimal,
            encode=lambda d: SExpr.create_string(str(d)),
            decode=lambda n: Decimal(n.get_value()),
        )
        assert serialize(Decimal("1.5")) == SExpr.create_string("1.5")

    def test_override_builtin(self) -> None:
        SExprCodecs.register(
            bool,
            encode=lambda b: SExpr.create_token("yes" if b else "no"),
            decode=lambda n: n.get_value() == "yes",
        )
        assert serialize(True) == SExpr.create_token("yes")

    def test_unregister(self) -> None:
        SExprCodecs.register(Point, encode=_encode_point, decode=_decode_point)
        assert SExprCodecs.unregister(Point) is True
        assert SExprCodecs.unregister(Point) is False
        with pytest.raises(TypeError):
            serialize(Point(0, 0))

    def test_clear_restores_builtins(self) -> None:
        SExprCodecs.unregister(int)
        SExprCodecs.register(Point, encode=_encode_point, decode=_decode_point)
        SExprCodecs.clear()
        assert SExprCodecs.get(int) is not None
        assert SExprCodecs.get(Point) is None

    def test_subclass_uses_base_codec(self) -> None:
        class Name(str):
            pass

        assert serialize(Name("x")) == SExpr.create_string("x")

    def test_bool_is_not_encoded_as_int(self) -> None:
        assert serialize(True) != SExpr.create_token("1")

    def test_deserialize_unregistered_type(self) -> None:
        with pytest.raises(TypeError):
            deserialize(SExpr.create_token("1.5"), float)

    def test_append_field_uses_registry(self) -> None:
        SExprCodecs.register(Point, encode=_encode_point, decode=_decode_point)
        root = SExpr.create_list("shape")
        root.append_field("origin", Point(0, 0))
        assert root.to_bytes() == b"(shape (origin (point 0 0)))\n"
