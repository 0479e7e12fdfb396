"""Literal and association-mark decoding.

The grammar never converts lexemes itself; it goes through a
LiteralDecoders bundle so tests can swap in stubs.
"""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Callable
from dataclasses import dataclass

from classdsl.errors import LiteralError
from classdsl.types import AssociationEnd

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?\d+(?:\.\d+)?")
_ANGLE_RE = re.compile(r"([+-]?\d+(?:\.\d+)?)(\w*)")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_MARKS: dict[str, AssociationEnd] = {
    "": AssociationEnd.Plain,
    "o": AssociationEnd.Aggregation,
    "*": AssociationEnd.Composition,
    "<": AssociationEnd.Navigable,
    ">": AssociationEnd.Navigable,
    "x": AssociationEnd.NonNavigable,
}


def _to_f32(value: float, text: str) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as e:
        raise LiteralError(f"number out of range: {text!r}") from e


def decode_signed_integer(text: str) -> int:
    if not _INTEGER_RE.fullmatch(text):
        raise LiteralError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise LiteralError(f"integer out of range: {text!r}")
    return value


def decode_float(text: str) -> float:
    """Decode ``[+-]digits[.digits]`` to the nearest single-precision value."""
    if not _FLOAT_RE.fullmatch(text):
        raise LiteralError(f"invalid number: {text!r}")
    return _to_f32(float(text), text)


def decode_angle(text: str) -> float:
    """Decode an angle with a mandatory ``rad`` or ``deg`` suffix, in radians."""
    m = _ANGLE_RE.fullmatch(text)
    if not m:
        raise LiteralError(f"invalid angle: {text!r}")
    magnitude, unit = m.groups()
    if unit == "rad":
        value = float(magnitude)
    elif unit == "deg":
        value = math.radians(float(magnitude))
    elif unit:
        raise LiteralError(f"unsupported angle unit {unit!r}, use rad or deg")
    else:
        raise LiteralError(f"angle {text!r} needs a rad or deg unit")
    return _to_f32(value, text)


def decode_string_literal(text: str) -> str:
    # the lexer rejects quotes, backslashes and line breaks inside the literal
    if len(text) < 2 or text[0] != '"' or text[-1] != '"':
        raise LiteralError(f"invalid string literal: {text!r}")
    return text[1:-1]


def decode_association_mark(text: str) -> AssociationEnd:
    """Map one side of an association arrow to its end kind.

    A diamond carrying an inner cross (``o-x`` on the left, ``x-*`` on the
    right) decodes to the diamond.
    """
    mark = text.replace("-x", "").replace("x-", "")
    try:
        return _MARKS[mark]
    except KeyError:
        raise LiteralError(f"invalid association mark: {text!r}") from None


@dataclass(frozen=True)
class LiteralDecoders:
    """The decoding functions the grammar calls for literal lexemes.

    ``integer`` is not reached by the grammar, which has no integer slot;
    it is carried for callers decoding integer lexemes of their own.
    """

    integer: Callable[[str], int] = decode_signed_integer
    number: Callable[[str], float] = decode_float
    angle: Callable[[str], float] = decode_angle
    string: Callable[[str], str] = decode_string_literal
    mark: Callable[[str], AssociationEnd] = decode_association_mark


DEFAULT_DECODERS = LiteralDecoders()
