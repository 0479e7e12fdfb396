"""classdsl: compact class diagram notation to a structured AST."""

from classdsl.config import OutputConfig
from classdsl.errors import GrammarError, LexError, LiteralError, ParseError
from classdsl.parsers import parse
from classdsl.renderers import get_renderer, to_dict, to_json, to_text
from classdsl.syntax.types import Diagram

__all__ = [
    "Diagram",
    "GrammarError",
    "LexError",
    "LiteralError",
    "OutputConfig",
    "ParseError",
    "convert",
    "parse",
    "to_dict",
    "to_json",
    "to_text",
]


def convert(src: str, config: OutputConfig | None = None) -> str:
    """Parse notation text and write it out in the configured format.

    Args:
        src: Class diagram source text.
        config: Output settings; defaults to indented JSON.

    Returns:
        The rendered diagram.

    Raises:
        ParseError: If the input cannot be parsed (a ValueError subclass).
    """
    config = config or OutputConfig()
    diagram = parse(src)
    return get_renderer(config.format, config.indent).render(diagram)
