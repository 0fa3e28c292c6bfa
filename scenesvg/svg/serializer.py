"""Write SVG markup from an exported SvgNode tree.

Both functions walk the tree with an explicit stack, so arbitrarily deep
scene graphs render without hitting the recursion limit.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape

from scenesvg.models.svg_document import SvgNode

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
_ATTRIBUTE_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\t": "&#09;"}


def to_element(node: SvgNode) -> ET.Element:
    """Convert an SvgNode tree into an ElementTree element tree."""
    root = ET.Element(node.tag, dict(node.attributes))
    root.text = node.text
    stack: list[tuple[SvgNode, ET.Element]] = [(node, root)]
    while stack:
        current, element = stack.pop()
        for child in current.children:
            sub = ET.SubElement(element, child.tag, dict(child.attributes))
            sub.text = child.text
            stack.append((child, sub))
    return root


def _open_tag(node: SvgNode) -> str:
    attrs = "".join(
        f' {key}="{escape(value, _ATTRIBUTE_ENTITIES)}"' for key, value in node.attributes.items()
    )
    return f"<{node.tag}{attrs}"


def serialize_svg(
    node: SvgNode,
    *,
    xml_declaration: bool = True,
    indent: str | None = "  ",
) -> str:
    """Generate SVG markup text for the given tree.

    With ``indent`` every element starts on its own line, nested one
    ``indent`` deeper than its parent; without it the markup is compact.
    """
    lines: list[str] = []
    # (node, depth, closing): closing entries emit the end tag of a parent.
    stack: list[tuple[SvgNode, int, bool]] = [(node, 0, False)]
    while stack:
        current, depth, closing = stack.pop()
        pad = indent * depth if indent else ""
        if closing:
            lines.append(f"{pad}</{current.tag}>")
            continue
        text = escape(current.text) if current.text else ""
        if not current.children:
            if text:
                lines.append(f"{pad}{_open_tag(current)}>{text}</{current.tag}>")
            else:
                lines.append(f"{pad}{_open_tag(current)} />")
            continue
        lines.append(f"{pad}{_open_tag(current)}>{text}")
        stack.append((current, depth, True))
        stack.extend((child, depth + 1, False) for child in reversed(current.children))

    markup = ("\n" if indent else "").join(lines)
    if xml_declaration:
        return f"{_XML_DECLARATION}\n{markup}\n"
    return markup
