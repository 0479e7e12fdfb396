"""Round-trip every sample diagram in examples/ through the text writer."""

from pathlib import Path

import pytest

from classdsl import parse, to_text
from classdsl.syntax.types import Association
from classdsl.types import AssociationEnd, MetaKey

EXAMPLES_DIR = Path(__file__).parent.parent.parent / "examples"

EXAMPLE_FILES = sorted(EXAMPLES_DIR.glob("*.cd"))


@pytest.mark.parametrize("path", EXAMPLE_FILES, ids=[p.stem for p in EXAMPLE_FILES])
def test_example_round_trips(path: Path) -> None:
    diagram = parse(path.read_text(encoding="utf-8"))
    text = to_text(diagram)
    assert parse(text) == diagram
    assert to_text(parse(text)) == text


def test_shapes_example():
    diagram = parse((EXAMPLES_DIR / "shapes.cd").read_text(encoding="utf-8"))
    assert [c.name for c in diagram.classifiers] == ["Shape", "Drawable", "Circle", "Point", "Color"]
    assert len(diagram.edges) == 4
    shape, drawable, circle, point, color = diagram.classifiers
    assert shape.is_abstract and drawable.is_abstract and not circle.is_abstract
    assert circle.is_final and circle.id == "circle"
    assert list(circle.meta) == [MetaKey.BEND, MetaKey.POS]
    assert [p.name for p in shape.operations[1].parameters] == ["x", "y"]
    assert [a.name for a in color.attributes] == ["RED", "GREEN"]
    assert point.stereotypes == ("struct",)
    canvas = diagram.edges[2]
    assert canvas.kind == Association(a_end=AssociationEnd.Aggregation, b_end=AssociationEnd.Composition)
    assert canvas.meta[MetaKey.VIA].points == ((10.0, 20.0), (30.5, 40.0))


def test_errors_example():
    diagram = parse((EXAMPLES_DIR / "errors.cd").read_text(encoding="utf-8"))
    assert [c.stereotypes for c in diagram.classifiers] == [("exception",), ("annotation",), (), ()]
    (money,) = [c for c in diagram.classifiers if c.name == "Money"]
    assert money.attributes[0].type == "decimal(10, 2)"
    order = diagram.edges[-1]
    assert (order.a, order.b) == ("Order", "Item")
    assert order.kind == Association(a_end=AssociationEnd.Composition, b_end=AssociationEnd.Aggregation)
