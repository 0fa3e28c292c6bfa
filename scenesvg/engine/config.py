"""Export configuration: the values the engine actually consumes."""

from __future__ import annotations

from dataclasses import dataclass

from scenesvg.config import Settings


@dataclass(frozen=True)
class ExportConfig:
    """Controls numeric output and geometric tolerance for one export."""

    # Fractional digits for numeric attributes (trailing zeros trimmed)
    precision: int = 5
    # Tolerance shared by the geometry kernel, classifier and serializer
    epsilon: float = 1e-7
    # Prepend <?xml ...?> when rendering markup text
    xml_declaration: bool = True

    def __post_init__(self) -> None:
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")
        if not 0.0 < self.epsilon < 1.0:
            raise ValueError(f"epsilon must be in (0, 1), got {self.epsilon}")

    @classmethod
    def from_settings(cls, settings: Settings) -> ExportConfig:
        return cls(
            precision=settings.scenesvg_precision,
            epsilon=settings.scenesvg_epsilon,
        )
