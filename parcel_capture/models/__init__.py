"""Data models and schemas.

Defines the values exchanged between the capture session and its host:
- CapturedPolygon: Closed ring plus area emitted on finish
- FinishRefused: Typed refusal returned when finishing is not possible
- CaptureSummary: Live point count / area read-out
- MapClick, LayerStyle: Map-surface events and rendering hints
"""

from parcel_capture.models.layers import (
    FINAL_POLYGON_STYLE,
    PREVIEW_LINE_STYLE,
    PREVIEW_POLYGON_STYLE,
    VERTEX_MARKER_STYLE,
    LayerStyle,
    MapClick,
    StyleValidationError,
)
from parcel_capture.models.polygon import CapturedPolygon, PolygonPayloadError
from parcel_capture.models.results import (
    INSUFFICIENT_POINTS,
    NOT_COLLECTING,
    CaptureSummary,
    FinishRefused,
)

__all__ = [
    "FINAL_POLYGON_STYLE",
    "INSUFFICIENT_POINTS",
    "NOT_COLLECTING",
    "PREVIEW_LINE_STYLE",
    "PREVIEW_POLYGON_STYLE",
    "VERTEX_MARKER_STYLE",
    "CaptureSummary",
    "CapturedPolygon",
    "FinishRefused",
    "LayerStyle",
    "MapClick",
    "PolygonPayloadError",
    "StyleValidationError",
]
