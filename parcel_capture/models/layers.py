"""Map-surface value types: click events and layer styles.

Style presets reproduce the look of the original farm and planning
pickers (forest-green fill on dark-grey stroke, dashed preview line).
"""

from __future__ import annotations

from dataclasses import dataclass

from parcel_capture.core.exceptions import ValidationError

PRIMARY_COLOR = "#1F2937"
SECONDARY_COLOR = "#059669"
WHITE = "#FFFFFF"


class StyleValidationError(ValidationError):
    """Raised when a LayerStyle is constructed with invalid values."""

    default_stage = "model"
    default_code = "STYLE_INVALID"


@dataclass(frozen=True, slots=True)
class MapClick:
    """A click/tap resolved to a geographic coordinate by the map surface."""

    longitude: float
    latitude: float

    @property
    def point(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)


@dataclass(frozen=True, slots=True)
class LayerStyle:
    """Rendering hints passed to the map surface with every layer.

    Attributes:
        color: Stroke colour.
        fill_color: Fill colour (markers and polygons).
        weight: Stroke width in pixels.
        opacity: Stroke opacity (0-1).
        fill_opacity: Fill opacity (0-1).
        radius: Marker radius in pixels (markers only).
        dash_array: SVG dash pattern, empty for a solid stroke.
    """

    color: str = PRIMARY_COLOR
    fill_color: str = SECONDARY_COLOR
    weight: float = 2.0
    opacity: float = 1.0
    fill_opacity: float = 0.2
    radius: float = 0.0
    dash_array: str = ""

    def __post_init__(self) -> None:
        _check_range("opacity", self.opacity, 0.0, 1.0)
        _check_range("fill_opacity", self.fill_opacity, 0.0, 1.0)
        if self.weight < 0:
            msg = f"LayerStyle.weight={self.weight!r}: must be >= 0"
            raise StyleValidationError(msg)
        if self.radius < 0:
            msg = f"LayerStyle.radius={self.radius!r}: must be >= 0"
            raise StyleValidationError(msg)

    def to_dict(self) -> dict[str, object]:
        return {
            "color": self.color,
            "fill_color": self.fill_color,
            "weight": self.weight,
            "opacity": self.opacity,
            "fill_opacity": self.fill_opacity,
            "radius": self.radius,
            "dash_array": self.dash_array,
        }


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        msg = f"LayerStyle.{name}={value!r}: must be between {low} and {high}"
        raise StyleValidationError(msg)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

VERTEX_MARKER_STYLE = LayerStyle(
    color=PRIMARY_COLOR,
    fill_color=SECONDARY_COLOR,
    weight=2.0,
    opacity=1.0,
    fill_opacity=0.8,
    radius=6.0,
)

PREVIEW_LINE_STYLE = LayerStyle(
    color=PRIMARY_COLOR,
    weight=3.0,
    opacity=0.7,
    fill_opacity=0.0,
    dash_array="10, 5",
)

PREVIEW_POLYGON_STYLE = LayerStyle(
    color=SECONDARY_COLOR,
    fill_color=SECONDARY_COLOR,
    weight=2.0,
    opacity=0.8,
    fill_opacity=0.2,
)

FINAL_POLYGON_STYLE = LayerStyle(
    color=PRIMARY_COLOR,
    fill_color=PRIMARY_COLOR,
    weight=3.0,
    opacity=1.0,
    fill_opacity=0.2,
)
