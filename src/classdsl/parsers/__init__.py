"""Parser entry point."""

from __future__ import annotations

from classdsl.parsers.base import Parser
from classdsl.parsers.classdiagram import ClassDiagramParser
from classdsl.parsers.literals import DEFAULT_DECODERS, LiteralDecoders
from classdsl.syntax.types import Diagram

__all__ = ["ClassDiagramParser", "LiteralDecoders", "Parser", "parse"]


def parse(src: str, decoders: LiteralDecoders = DEFAULT_DECODERS) -> Diagram:
    """Parse class diagram notation into a Diagram AST.

    Raises ParseError (a ValueError) on the first lexical, grammar or
    literal error.
    """
    parser: Parser = ClassDiagramParser(decoders)
    return parser.parse(src)
