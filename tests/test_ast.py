"""Tests for classdsl.syntax.types — construction, invariants and helpers."""

from dataclasses import FrozenInstanceError

import pytest

from classdsl.parsers import parse

from classdsl.syntax.types import (
    Association,
    Bend,
    Classifier,
    Diagram,
    Edge,
    Generalization,
    Position,
    Via,
    meta_map,
)
from classdsl.types import AssociationEnd, ClassifierKind, Direction, MetaKey, Visibility

# ─── Enums ───────────────────────────────────────────────────────────────────


def test_visibility_sigils():
    assert [v.sigil for v in Visibility] == ["-", "~", "#", "+"]


def test_classifier_kinds():
    assert len(ClassifierKind) == 5


def test_meta_keys_are_names():
    assert str(MetaKey.POS) == "pos"
    assert sorted(MetaKey) == [MetaKey.BEND, MetaKey.POS, MetaKey.VIA]


# ─── Metadata ────────────────────────────────────────────────────────────────


def test_meta_variant_keys():
    assert Position(0, 0).key == MetaKey.POS
    assert Via(((0, 0),)).key == MetaKey.VIA
    assert Bend(0).key == MetaKey.BEND


def test_via_needs_points():
    with pytest.raises(ValueError):
        Via(())


def test_meta_map_last_wins_and_sorts():
    metas = meta_map([Position(1, 2), Bend(0.5), Position(3, 4)])
    assert list(metas) == [MetaKey.BEND, MetaKey.POS]
    assert metas[MetaKey.POS] == Position(3, 4)


def test_meta_map_is_read_only():
    metas = meta_map([Position(1, 2)])
    with pytest.raises(TypeError):
        metas[MetaKey.POS] = Position(9, 9)


# ─── Classifier ──────────────────────────────────────────────────────────────


def test_interface_forces_abstract():
    c = Classifier(kind=ClassifierKind.Interface, name="I")
    assert c.is_abstract


def test_class_defaults():
    c = Classifier(kind=ClassifierKind.Class, name="C")
    assert not c.is_abstract
    assert not c.is_final
    assert c.id is None
    assert c.stereotypes == ()
    assert c.attributes == ()
    assert c.operations == ()
    assert c.meta == {}


def test_stereotypes_view():
    c = Classifier(kind=ClassifierKind.Class, name="E", stereotype="exception")
    assert c.stereotypes == ("exception",)


def test_frozen():
    c = Classifier(kind=ClassifierKind.Class, name="C")
    with pytest.raises(FrozenInstanceError):
        c.name = "D"


def test_classifier_meta_copied_and_sorted():
    given = {MetaKey.POS: Position(1, 2), MetaKey.BEND: Bend(0.5)}
    c = Classifier(kind=ClassifierKind.Class, name="C", meta=given)
    given[MetaKey.POS] = Position(9, 9)
    assert c.meta[MetaKey.POS] == Position(1, 2)
    assert list(c.meta) == [MetaKey.BEND, MetaKey.POS]


def test_parsed_meta_is_read_only():
    (c,) = parse("#[pos(1, 2)]\nclass A").classifiers
    with pytest.raises(TypeError):
        c.meta[MetaKey.POS] = Position(9.0, 9.0)
    (e,) = parse("#[bend(1rad)]\nA -- B").edges
    with pytest.raises(TypeError):
        del e.meta[MetaKey.BEND]
    assert c.meta[MetaKey.POS] == Position(1.0, 2.0)


def test_classifier_hashable():
    c = parse("class A").classifiers[0]
    assert hash(c) == hash(Classifier(kind=ClassifierKind.Class, name="A"))
    assert {c} == {Classifier(kind=ClassifierKind.Class, name="A")}


# ─── Edges and diagram ───────────────────────────────────────────────────────


def test_association_defaults():
    kind = Association()
    assert kind.a_end == AssociationEnd.Plain
    assert kind.b_end == AssociationEnd.Plain
    assert kind.name is None


def test_from_statements_partitions():
    a = Classifier(kind=ClassifierKind.Class, name="A")
    b = Classifier(kind=ClassifierKind.Class, name="B")
    e1 = Edge("A", "B", Generalization(Direction.AtoB))
    e2 = Edge("B", "A", Association())
    diagram = Diagram.from_statements([e1, a, e2, b])
    assert diagram.classifiers == (a, b)
    assert diagram.edges == (e1, e2)


def test_diagram_equality():
    edge = Edge("A", "B", Generalization(Direction.BtoA), {MetaKey.BEND: Bend(1.0)})
    assert Diagram(edges=(edge,)) == Diagram(edges=(Edge("A", "B", Generalization(Direction.BtoA), {MetaKey.BEND: Bend(1.0)}),))


def test_edge_and_diagram_hashable():
    src = "#[pos(1, 2)]\nclass A {\n  a: Int\n}\n#[via((0, 0))]\nA o--* B\n"
    assert hash(parse(src)) == hash(parse(src))
    (edge,) = parse(src).edges
    bare = Edge("A", "B", Association(AssociationEnd.Aggregation, AssociationEnd.Composition))
    assert hash(edge) == hash(bare)
    assert edge != bare
