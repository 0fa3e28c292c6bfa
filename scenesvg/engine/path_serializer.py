"""Generic path data: `d` attribute for paths no primitive matched.

Grammar: ``M x,y`` followed by ``L x,y`` for straight connectors or relative
``c dx1,dy1 dx2,dy2 dx,dy`` for curves, optionally ending in ``z``.
"""

from __future__ import annotations

from scenesvg.engine.errors import DegeneratePathError
from scenesvg.models.scene import Path, Segment
from scenesvg.utils.geometry import GeometryKernel
from scenesvg.utils.math_helpers import NumberFormatter


class PathSerializer:
    def __init__(
        self,
        kernel: GeometryKernel | None = None,
        formatter: NumberFormatter | None = None,
    ) -> None:
        self.kernel = kernel or GeometryKernel()
        self.formatter = formatter or NumberFormatter()

    def serialize(self, path: Path, *, stroked: bool = False, filled: bool = False) -> str:
        """Path data for ``path``.

        ``stroked`` / ``filled`` describe the style the path renders with;
        they decide whether the closing connector has to be drawn explicitly.
        """
        segments = path.segments
        if not segments:
            raise DegeneratePathError(path.name)

        parts = [f"M{self.formatter.point(segments[0].point)}"]
        if len(segments) == 1:
            return parts[0]

        for current, following in zip(segments, segments[1:]):
            parts.extend(self._connect(current, following))

        if path.closed:
            last, first = segments[-1], segments[0]
            if self._is_straight(last, first):
                # z already fills the gap; only a stroke needs the explicit line.
                if stroked:
                    parts.extend(self._connect(last, first))
            elif stroked or filled:
                parts.extend(self._connect(last, first))
            parts.append("z")
        return " ".join(parts)

    def _is_straight(self, start: Segment, end: Segment) -> bool:
        return self.kernel.is_zero(start.handle_out) and self.kernel.is_zero(end.handle_in)

    def _connect(self, start: Segment, end: Segment) -> list[str]:
        fmt = self.formatter
        if self._is_straight(start, end):
            return [f"L{fmt.point(end.point)}"]
        # Relative curve: every control offset is measured from the start anchor.
        chord = end.point - start.point
        return [
            f"c{fmt.point(start.handle_out)}",
            fmt.point(chord + end.handle_in),
            fmt.point(chord),
        ]
