"""Exported SVG element tree."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


class SvgNode(BaseModel):
    """One SVG element with ordered attributes and child elements."""

    tag: str
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list[SvgNode] = Field(default_factory=list)
    text: str | None = None

    def set(self, **attrs: str) -> SvgNode:
        self.attributes.update(attrs)
        return self

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    def append(self, child: SvgNode) -> None:
        self.children.append(child)

    def iter(self, tag: str | None = None) -> Iterator[SvgNode]:
        """Depth-first walk over this node and its descendants."""
        stack = [self]
        while stack:
            node = stack.pop()
            if tag is None or node.tag == tag:
                yield node
            stack.extend(reversed(node.children))
