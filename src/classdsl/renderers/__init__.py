"""Diagram renderers: canonical notation text and JSON."""

from __future__ import annotations

from classdsl.renderers.base import Renderer
from classdsl.renderers.json_export import JsonRenderer, to_dict, to_json
from classdsl.renderers.text import TextRenderer, to_text

__all__ = ["JsonRenderer", "Renderer", "TextRenderer", "get_renderer", "to_dict", "to_json", "to_text"]


def get_renderer(format: str, indent: int = 2) -> Renderer:
    """Return the renderer for an output format name ('json' or 'text')."""
    if format == "json":
        return JsonRenderer(indent=indent)
    if format == "text":
        return TextRenderer()
    raise ValueError(f"Unknown output format '{format}'; use json or text")
