"""Typed export errors."""

from __future__ import annotations


class ExportError(ValueError):
    """Base error for malformed export input."""


class DegeneratePathError(ExportError):
    """A path without segments has no geometry to classify or draw."""

    def __init__(self, name: str | None = None) -> None:
        label = f"path {name!r}" if name else "path"
        super().__init__(f"Degenerate {label}: no segments")
        self.name = name
