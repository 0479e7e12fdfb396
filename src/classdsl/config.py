"""Centralized configuration for classdsl."""

from __future__ import annotations

from dataclasses import dataclass

FORMATS = ("json", "text")


@dataclass
class OutputConfig:
    """Configuration for writing a parsed diagram."""

    format: str = "json"
    indent: int = 2

    def __post_init__(self) -> None:
        if self.format not in FORMATS:
            raise ValueError(f"Unknown output format '{self.format}'; use json or text")
