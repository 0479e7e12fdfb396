"""Canonical notation writer.

Produces text that parses back into an equal Diagram: classifiers first,
then edges, one statement per line.
"""

from __future__ import annotations

from decimal import Decimal

from classdsl.errors import LexError
from classdsl.parsers.classdiagram import CLASSIFIER_KEYWORDS
from classdsl.parsers.lexer import TokenKind, tokenize
from classdsl.syntax.types import (
    Association,
    Attribute,
    Bend,
    Classifier,
    Dependency,
    Diagram,
    Edge,
    Generalization,
    Meta,
    MetaMap,
    Operation,
    Parameter,
    Position,
    Realization,
    Via,
)
from classdsl.types import AssociationEnd, Direction

_KEYWORDS = {value: keyword for keyword, value in CLASSIFIER_KEYWORDS.items()}

_OPERATORS: dict[tuple[type, Direction], str] = {
    (Realization, Direction.AtoB): "..|>",
    (Realization, Direction.BtoA): "<|..",
    (Generalization, Direction.AtoB): "--|>",
    (Generalization, Direction.BtoA): "<|--",
    (Dependency, Direction.AtoB): "..>",
    (Dependency, Direction.BtoA): "<..",
}

_LEFT_MARKS = {
    AssociationEnd.Plain: "",
    AssociationEnd.Aggregation: "o",
    AssociationEnd.Composition: "*",
    AssociationEnd.Navigable: "<",
    AssociationEnd.NonNavigable: "x",
}
_RIGHT_MARKS = {**_LEFT_MARKS, AssociationEnd.Navigable: ">"}


def format_float(value: float) -> str:
    text = repr(value)
    if "e" in text or "E" in text:
        # the notation has no exponent form
        text = format(Decimal(text), "f")
    return text


def format_meta(meta: Meta) -> str:
    if isinstance(meta, Position):
        return f"pos({format_float(meta.x)}, {format_float(meta.y)})"
    if isinstance(meta, Via):
        points = ", ".join(f"({format_float(x)}, {format_float(y)})" for x, y in meta.points)
        return f"via({points})"
    if isinstance(meta, Bend):
        return f"bend({format_float(meta.angle)}rad)"
    raise TypeError(f"Not a metadata value: {meta!r}")


def format_label(value: str) -> str:
    """Write a type as a bare name when it lexes as one, else as a string."""
    try:
        tokens = tokenize(value) if value else []
    except LexError:
        tokens = []
    if len(tokens) == 2 and tokens[0].kind is TokenKind.Ident and tokens[0].text == value:
        return value
    if any(ch in value for ch in '"\\\r\n'):
        raise ValueError(f"Label cannot be written as a string literal: {value!r}")
    return f'"{value}"'


def _typed(name: str, type_: str | None) -> str:
    return name if type_ is None else f"{name}: {format_label(type_)}"


def format_attribute(attr: Attribute) -> str:
    sigil = attr.visibility.sigil if attr.visibility else ""
    return sigil + _typed(attr.name, attr.type)


def format_parameter(param: Parameter) -> str:
    return _typed(param.name, param.type)


def format_operation(op: Operation) -> str:
    sigil = op.visibility.sigil if op.visibility else ""
    params = ", ".join(format_parameter(p) for p in op.parameters)
    return sigil + _typed(f"{op.name}({params})", op.return_type)


def _format_metas(meta: MetaMap) -> str:
    if not meta:
        return ""
    return "#[" + ", ".join(format_meta(m) for m in meta.values()) + "]\n"


def format_classifier(classifier: Classifier) -> str:
    keyword = _KEYWORDS.get((classifier.kind, classifier.stereotype))
    if keyword is None:
        raise ValueError(f"No keyword for {classifier.kind.value} with stereotype {classifier.stereotype!r}")
    parts: list[str] = []
    if classifier.is_abstract and keyword not in ("interface", "annotation"):
        parts.append("abstract")
    if classifier.is_final:
        parts.append("final")
    parts += [keyword, classifier.name]
    if classifier.id is not None:
        parts += ["as", classifier.id]
    text = " ".join(parts)
    if classifier.attributes or classifier.operations:
        members = [format_attribute(a) for a in classifier.attributes]
        members += [format_operation(o) for o in classifier.operations]
        text += " {\n" + "".join(f"  {m}\n" for m in members) + "}"
    return _format_metas(classifier.meta) + text


def format_edge(edge: Edge) -> str:
    kind = edge.kind
    if isinstance(kind, Association):
        arrow = _LEFT_MARKS[kind.a_end] + "--" + _RIGHT_MARKS[kind.b_end]
    else:
        arrow = _OPERATORS[(type(kind), kind.direction)]
    return _format_metas(edge.meta) + f"{edge.a} {arrow} {edge.b}"


def to_text(diagram: Diagram) -> str:
    statements = [format_classifier(c) for c in diagram.classifiers]
    statements += [format_edge(e) for e in diagram.edges]
    return "".join(s + "\n" for s in statements)


class TextRenderer:
    """Renders a Diagram back to canonical notation."""

    def render(self, diagram: Diagram) -> str:
        return to_text(diagram)
