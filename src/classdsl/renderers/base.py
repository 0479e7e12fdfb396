"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from classdsl.syntax.types import Diagram


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, diagram: Diagram) -> str:
        """Render a parsed diagram to an output string."""
        ...
