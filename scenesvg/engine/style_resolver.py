"""Style resolution: minimal SVG presentation attributes per node.

Two styles flow down the traversal:

* ``inherited``: the parent item's resolved style; it supplies the value of
  every property an item does not set itself.
* ``rendered``: what the parent SVG node actually renders with, including
  attributes a container forces on its node (``fill="none"``).

A property is emitted only when the item's value differs from ``rendered``;
anything equal is inherited by the SVG cascade for free. Baseline properties
of a container are always written: the container's own value when it sets
one that differs from what it would inherit, otherwise the baseline.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any

from scenesvg.models.style import Color, Style
from scenesvg.utils.math_helpers import NumberFormatter


class PropertyKind(enum.Enum):
    COLOR = "color"
    NUMBER = "number"
    ARRAY = "array"
    STRING = "string"


@dataclass(frozen=True)
class StyleProperty:
    name: str
    attribute: str
    kind: PropertyKind


STYLE_PROPERTIES: tuple[StyleProperty, ...] = (
    StyleProperty("fill_color", "fill", PropertyKind.COLOR),
    StyleProperty("stroke_color", "stroke", PropertyKind.COLOR),
    StyleProperty("stroke_width", "stroke-width", PropertyKind.NUMBER),
    StyleProperty("dash_array", "stroke-dasharray", PropertyKind.ARRAY),
    StyleProperty("dash_offset", "stroke-dashoffset", PropertyKind.NUMBER),
    StyleProperty("stroke_cap", "stroke-linecap", PropertyKind.STRING),
    StyleProperty("stroke_join", "stroke-linejoin", PropertyKind.STRING),
    StyleProperty("miter_limit", "stroke-miterlimit", PropertyKind.NUMBER),
    StyleProperty("font_family", "font-family", PropertyKind.STRING),
    StyleProperty("font_size", "font-size", PropertyKind.NUMBER),
)

_PROPERTY_BY_NAME = {p.name: p for p in STYLE_PROPERTIES}


@dataclass(frozen=True)
class ResolvedStyle:
    """Effective value of every inheritable property. Defaults are SVG's initial values."""

    fill_color: Color | None = field(default_factory=Color)
    stroke_color: Color | None = None
    stroke_width: float | None = 1.0
    dash_array: tuple[float, ...] | None = None
    dash_offset: float | None = 0.0
    stroke_cap: str | None = "butt"
    stroke_join: str | None = "miter"
    miter_limit: float | None = 4.0
    font_family: str | None = None
    font_size: float | None = None

    def merged(self, style: Style) -> ResolvedStyle:
        """This style overridden by whatever ``style`` sets explicitly."""
        updates = {k: v for k, v in style.explicit().items() if k in _PROPERTY_BY_NAME}
        return replace(self, **updates) if updates else self

    def value(self, name: str) -> Any:
        return getattr(self, name)

    @property
    def has_fill(self) -> bool:
        return self.fill_color is not None

    @property
    def has_stroke(self) -> bool:
        return self.stroke_color is not None


ROOT_STYLE = ResolvedStyle()


@dataclass(frozen=True)
class StyleContext:
    """Parent styles handed to a node while it is exported."""

    inherited: ResolvedStyle = ROOT_STYLE
    rendered: ResolvedStyle = ROOT_STYLE


@dataclass(frozen=True)
class StyleResolution:
    attributes: dict[str, str]
    # Semantic style of the item (its children inherit values from it)
    resolved: ResolvedStyle
    # Style the item's SVG node renders with (its children diff against it)
    rendered: ResolvedStyle

    def child_context(self) -> StyleContext:
        return StyleContext(inherited=self.resolved, rendered=self.rendered)


class StyleResolver:
    def __init__(self, formatter: NumberFormatter | None = None) -> None:
        self.formatter = formatter or NumberFormatter()

    def resolve(
        self,
        style: Style,
        context: StyleContext | None = None,
        *,
        name: str | None = None,
        baseline: dict[str, Any] | None = None,
    ) -> StyleResolution:
        """Compute the attributes ``style`` needs on top of ``context``.

        ``baseline`` holds property values a container node carries unless the
        item itself sets a different value (containers pass
        ``{"fill_color": None}``). Inherited values never override a baseline.
        """
        context = context or StyleContext()
        resolved = context.inherited.merged(style)
        baseline = baseline or {}

        attrs: dict[str, str] = {}
        if name is not None:
            attrs["id"] = name

        forced: dict[str, Any] = {}
        for prop_name, fallback in baseline.items():
            prop = _PROPERTY_BY_NAME[prop_name]
            value = resolved.value(prop_name)
            own = style.is_explicit(prop_name) and value != context.inherited.value(prop_name)
            forced[prop_name] = value if own else fallback
            attrs[prop.attribute] = self.format_value(prop, forced[prop_name])

        emitted: dict[str, Any] = {}
        for prop in STYLE_PROPERTIES:
            if prop.name in forced:
                continue
            value = resolved.value(prop.name)
            if value != context.rendered.value(prop.name):
                emitted[prop.name] = value
                attrs[prop.attribute] = self.format_value(prop, value)

        # Opacity and visibility composite the whole subtree; emit whenever set.
        if style.is_explicit("opacity") and style.opacity is not None:
            attrs["opacity"] = self.formatter.number(style.opacity)
        if style.is_explicit("visible") and style.visible is not None:
            attrs["visibility"] = "visible" if style.visible else "hidden"

        rendered = replace(context.rendered, **forced, **emitted)
        return StyleResolution(attributes=attrs, resolved=resolved, rendered=rendered)

    def format_value(self, prop: StyleProperty, value: Any) -> str:
        if value is None:
            return "none"
        if prop.kind is PropertyKind.COLOR:
            return value.to_css(self.formatter.precision)
        if prop.kind is PropertyKind.ARRAY:
            if not value:
                return "none"
            return ",".join(self.formatter.number(v) for v in value)
        if prop.kind is PropertyKind.NUMBER:
            return self.formatter.number(value)
        return str(value)
