"""Shared type definitions for classdsl.

Enums used across the lexer, grammar, AST and renderers.
"""

from __future__ import annotations

from enum import Enum, auto


class ClassifierKind(Enum):
    Class = "class"
    DataType = "dataType"
    Enumeration = "enumeration"
    Interface = "interface"
    Primitive = "primitive"


class Visibility(Enum):
    Private = "-"
    Package = "~"
    Protected = "#"
    Public = "+"

    @property
    def sigil(self) -> str:
        return self.value


class Direction(Enum):
    AtoB = auto()  # target is `b`
    BtoA = auto()  # target is `a`


class AssociationEnd(Enum):
    Plain = auto()  # --
    Aggregation = auto()  # o--
    Composition = auto()  # *--
    Navigable = auto()  # <-- / -->
    NonNavigable = auto()  # x--


class MetaKey(str, Enum):
    """Canonical metadata keys; string-valued so they sort and compare as text."""

    BEND = "bend"
    POS = "pos"
    VIA = "via"

    def __str__(self) -> str:
        return self.value
