"""AST data structures for the class diagram notation.

These types represent the parsed form of the input text: metadata variants
(Position, Via, Bend), members (Attribute, Operation, Parameter), edge kinds
(Realization, Generalization, Dependency, Association) and the two statement
types (Classifier, Edge) collected into a Diagram.

Every node is a frozen dataclass and metadata maps are read-only views, so
a Diagram is hashable. Names and labels are plain ``str`` copies of the
input slices; a Diagram never refers back to the source text.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Union

from classdsl.types import AssociationEnd, ClassifierKind, Direction, MetaKey, Visibility

# ─── Metadata ────────────────────────────────────────────────────────────────

Point = tuple[float, float]


@dataclass(frozen=True)
class Position:
    key: ClassVar[MetaKey] = MetaKey.POS

    x: float
    y: float


@dataclass(frozen=True)
class Via:
    key: ClassVar[MetaKey] = MetaKey.VIA

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        if not self.points:
            raise ValueError("via() needs at least one waypoint")


@dataclass(frozen=True)
class Bend:
    key: ClassVar[MetaKey] = MetaKey.BEND

    angle: float  # radians


Meta = Union[Position, Via, Bend]


MetaMap = Mapping[MetaKey, Meta]


def freeze_meta(meta: Mapping[MetaKey, Meta]) -> MetaMap:
    """Return a read-only copy of ``meta`` ordered by key name."""
    return MappingProxyType(dict(sorted(meta.items())))


def meta_map(metas: Iterable[Meta]) -> MetaMap:
    """Collect metadata in encounter order; a repeated key keeps the last value.

    The returned mapping is read-only and ordered by key name.
    """
    by_key: dict[MetaKey, Meta] = {}
    for meta in metas:
        by_key[meta.key] = meta
    return freeze_meta(by_key)


# ─── Members ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Attribute:
    name: str
    visibility: Visibility | None = None
    type: str | None = None


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str | None = None


@dataclass(frozen=True)
class Operation:
    name: str
    visibility: Visibility | None = None
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None


# ─── Classifier ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Classifier:
    kind: ClassifierKind
    name: str
    id: str | None = None
    is_abstract: bool = False
    is_final: bool = False
    stereotype: str | None = None
    attributes: tuple[Attribute, ...] = ()
    operations: tuple[Operation, ...] = ()
    meta: MetaMap = field(default_factory=lambda: meta_map(()), hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))
        if self.kind is ClassifierKind.Interface and not self.is_abstract:
            object.__setattr__(self, "is_abstract", True)

    @property
    def stereotypes(self) -> tuple[str, ...]:
        return (self.stereotype,) if self.stereotype is not None else ()


# ─── Edges ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Realization:
    direction: Direction


@dataclass(frozen=True)
class Generalization:
    direction: Direction


@dataclass(frozen=True)
class Dependency:
    direction: Direction
    name: str | None = None


@dataclass(frozen=True)
class Association:
    a_end: AssociationEnd = AssociationEnd.Plain
    b_end: AssociationEnd = AssociationEnd.Plain
    name: str | None = None


EdgeKind = Union[Realization, Generalization, Dependency, Association]


@dataclass(frozen=True)
class Edge:
    a: str
    b: str
    kind: EdgeKind
    meta: MetaMap = field(default_factory=lambda: meta_map(()), hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))


# ─── Diagram ─────────────────────────────────────────────────────────────────

Statement = Union[Classifier, Edge]


@dataclass(frozen=True)
class Diagram:
    classifiers: tuple[Classifier, ...] = ()
    edges: tuple[Edge, ...] = ()

    @classmethod
    def from_statements(cls, statements: list[Statement]) -> Diagram:
        """Partition statements by kind, keeping source order within each kind."""
        classifiers = tuple(s for s in statements if isinstance(s, Classifier))
        edges = tuple(s for s in statements if isinstance(s, Edge))
        return cls(classifiers=classifiers, edges=edges)
