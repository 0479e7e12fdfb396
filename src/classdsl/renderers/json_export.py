"""JSON export of a Diagram.

Keys are kebab-case, metadata is flattened into its owner, and false flags,
absent values and empty collections are left out.
"""

from __future__ import annotations

import json
from typing import Any

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

_DIRECTIONS = {Direction.AtoB: "a-to-b", Direction.BtoA: "b-to-a"}

_ENDS = {
    AssociationEnd.Plain: "plain",
    AssociationEnd.Aggregation: "aggregation",
    AssociationEnd.Composition: "composition",
    AssociationEnd.Navigable: "navigable",
    AssociationEnd.NonNavigable: "non-navigable",
}

_KINDS = {
    "class": "class",
    "dataType": "data-type",
    "enumeration": "enumeration",
    "interface": "interface",
    "primitive": "primitive",
}


def _meta_value(meta: Meta) -> Any:
    if isinstance(meta, Position):
        return [meta.x, meta.y]
    if isinstance(meta, Via):
        return [list(point) for point in meta.points]
    if isinstance(meta, Bend):
        return meta.angle
    raise TypeError(f"Not a metadata value: {meta!r}")


def _metas(meta: MetaMap) -> dict[str, Any]:
    return {str(key): _meta_value(value) for key, value in meta.items()}


def _typed(out: dict[str, Any], key: str, value: str | None) -> dict[str, Any]:
    if value is not None:
        out[key] = value
    return out


def attribute_to_dict(attr: Attribute) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if attr.visibility is not None:
        out["visibility"] = attr.visibility.name.lower()
    out["name"] = attr.name
    return _typed(out, "type", attr.type)


def parameter_to_dict(param: Parameter) -> dict[str, Any]:
    return _typed({"name": param.name}, "type", param.type)


def operation_to_dict(op: Operation) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if op.visibility is not None:
        out["visibility"] = op.visibility.name.lower()
    out["name"] = op.name
    if op.parameters:
        out["parameters"] = [parameter_to_dict(p) for p in op.parameters]
    return _typed(out, "return-type", op.return_type)


def classifier_to_dict(classifier: Classifier) -> dict[str, Any]:
    out = _metas(classifier.meta)
    if classifier.is_abstract:
        out["abstract"] = True
    if classifier.is_final:
        out["final"] = True
    out["kind"] = _KINDS[classifier.kind.value]
    out["name"] = classifier.name
    _typed(out, "id", classifier.id)
    if classifier.stereotypes:
        out["stereotypes"] = list(classifier.stereotypes)
    if classifier.attributes:
        out["attributes"] = [attribute_to_dict(a) for a in classifier.attributes]
    if classifier.operations:
        out["operations"] = [operation_to_dict(o) for o in classifier.operations]
    return out


def edge_kind_to_dict(kind: Realization | Generalization | Dependency | Association) -> dict[str, Any]:
    if isinstance(kind, Association):
        out: dict[str, Any] = {"type": "association"}
        _typed(out, "name", kind.name)
        out["a-end"] = _ENDS[kind.a_end]
        out["b-end"] = _ENDS[kind.b_end]
        return out
    out = {"type": type(kind).__name__.lower(), "direction": _DIRECTIONS[kind.direction]}
    if isinstance(kind, Dependency):
        _typed(out, "name", kind.name)
    return out


def edge_to_dict(edge: Edge) -> dict[str, Any]:
    out = _metas(edge.meta)
    out["a"] = edge.a
    out["b"] = edge.b
    out["kind"] = edge_kind_to_dict(edge.kind)
    return out


def to_dict(diagram: Diagram) -> dict[str, Any]:
    return {
        "classifiers": [classifier_to_dict(c) for c in diagram.classifiers],
        "edges": [edge_to_dict(e) for e in diagram.edges],
    }


def to_json(diagram: Diagram, indent: int | None = 2) -> str:
    return json.dumps(to_dict(diagram), indent=indent, ensure_ascii=False)


class JsonRenderer:
    """Renders a Diagram as a JSON document."""

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def render(self, diagram: Diagram) -> str:
        return to_json(diagram, self.indent) + "\n"
