"""Visual style model for scene items."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from scenesvg.utils.math_helpers import format_number


class Color(BaseModel):
    """RGB color with alpha, components in 0..1. Equality is component-wise."""

    model_config = ConfigDict(frozen=True)

    red: float = Field(default=0.0, ge=0.0, le=1.0)
    green: float = Field(default=0.0, ge=0.0, le=1.0)
    blue: float = Field(default=0.0, ge=0.0, le=1.0)
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RGB`` / ``#RRGGBB`` / ``#RRGGBBAA``."""
        text = value.lstrip("#")
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        channels = [int(text[i : i + 2], 16) / 255 for i in range(0, len(text), 2)]
        return cls(red=channels[0], green=channels[1], blue=channels[2],
                   alpha=channels[3] if len(channels) == 4 else 1.0)

    def to_css(self, precision: int = 5) -> str:
        """CSS color; alpha is rounded to ``precision`` fractional digits."""
        r, g, b = (round(c * 255) for c in (self.red, self.green, self.blue))
        if self.alpha < 1.0:
            return f"rgba({r},{g},{b},{format_number(self.alpha, precision)})"
        return f"rgb({r},{g},{b})"


class Style(BaseModel):
    """Item style.

    A field that was never passed is absent and inherits from the container.
    A field passed explicitly as ``None`` is unset and renders as ``none``.
    ``model_fields_set`` tells the two apart.
    """

    model_config = ConfigDict(frozen=True)

    fill_color: Color | None = None
    stroke_color: Color | None = None
    stroke_width: float | None = Field(default=None, ge=0.0)
    dash_array: tuple[float, ...] | None = None
    dash_offset: float | None = None
    stroke_cap: str | None = None
    stroke_join: str | None = None
    miter_limit: float | None = Field(default=None, ge=1.0)
    font_family: str | None = None
    font_size: float | None = Field(default=None, gt=0.0)
    opacity: float | None = Field(default=None, ge=0.0, le=1.0)
    visible: bool | None = None

    def explicit(self) -> dict[str, object]:
        """Only the fields this style sets itself (values may be None)."""
        return {name: getattr(self, name) for name in self.model_fields_set}

    def is_explicit(self, name: str) -> bool:
        return name in self.model_fields_set
