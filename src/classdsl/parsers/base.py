"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from classdsl.syntax.types import Diagram


class Parser(Protocol):
    """Protocol that all notation parsers must implement."""

    def parse(self, src: str) -> Diagram:
        """Parse source text into a Diagram."""
        ...
