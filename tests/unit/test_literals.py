"""Tests for classdsl.parsers.literals — number, angle, string and mark decoding."""

import math
import struct

import pytest

from classdsl.errors import LiteralError
from classdsl.parsers.literals import (
    decode_angle,
    decode_association_mark,
    decode_float,
    decode_signed_integer,
    decode_string_literal,
)
from classdsl.types import AssociationEnd


def f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


# ─── Integers ────────────────────────────────────────────────────────────────


def test_integer_signs():
    assert decode_signed_integer("42") == 42
    assert decode_signed_integer("-42") == -42
    assert decode_signed_integer("+7") == 7


def test_integer_range():
    assert decode_signed_integer(str(-(2**63))) == -(2**63)
    assert decode_signed_integer(str(2**63 - 1)) == 2**63 - 1
    with pytest.raises(LiteralError, match="out of range"):
        decode_signed_integer(str(2**63))


def test_integer_rejects_fraction():
    with pytest.raises(LiteralError):
        decode_signed_integer("1.0")


# ─── Floats ──────────────────────────────────────────────────────────────────


def test_float_integral_and_fractional():
    assert decode_float("1") == 1.0
    assert decode_float("-2.5") == -2.5
    assert decode_float("+0.25") == 0.25


def test_float_is_single_precision():
    assert decode_float("0.1") == f32(0.1)
    assert decode_float("0.1") != 0.1


def test_float_overflow():
    with pytest.raises(LiteralError, match="out of range"):
        decode_float("1" + "0" * 39)


@pytest.mark.parametrize("text", ["1.", ".5", "abc", "1e5", ""])
def test_float_malformed(text):
    with pytest.raises(LiteralError):
        decode_float(text)


# ─── Angles ──────────────────────────────────────────────────────────────────


def test_angle_radians():
    assert decode_angle("1.5rad") == 1.5


def test_angle_degrees_converted_to_radians():
    assert decode_angle("90deg") == f32(math.radians(90))
    assert decode_angle("-180deg") == f32(math.radians(-180))


def test_angle_unknown_unit():
    with pytest.raises(LiteralError, match="unsupported angle unit"):
        decode_angle("10grad")


def test_angle_missing_unit():
    with pytest.raises(LiteralError, match="rad or deg"):
        decode_angle("10")


# ─── Strings ─────────────────────────────────────────────────────────────────


def test_string_strips_quotes():
    assert decode_string_literal('"hello world"') == "hello world"
    assert decode_string_literal('""') == ""


def test_string_requires_quotes():
    with pytest.raises(LiteralError):
        decode_string_literal("hello")


# ─── Marks ───────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "mark,end",
    [
        ("", AssociationEnd.Plain),
        ("o", AssociationEnd.Aggregation),
        ("*", AssociationEnd.Composition),
        ("<", AssociationEnd.Navigable),
        (">", AssociationEnd.Navigable),
        ("x", AssociationEnd.NonNavigable),
        ("o-x", AssociationEnd.Aggregation),
        ("x-*", AssociationEnd.Composition),
    ],
)
def test_marks(mark, end):
    assert decode_association_mark(mark) == end


def test_unknown_mark():
    with pytest.raises(LiteralError):
        decode_association_mark("?")
