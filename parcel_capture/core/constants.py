"""Shared capture constants — single source of truth.

Centralises the numeric constants of the area estimator, the drawing
guard, and the default map view so that the session, the geometry
helpers and the configuration layer agree on them.
"""

from __future__ import annotations

import enum

# ---------------------------------------------------------------------------
# Drawing guard
# ---------------------------------------------------------------------------

MIN_POLYGON_POINTS: int = 3
"""Fewest vertices that close into a polygon."""

MIN_POLYLINE_POINTS: int = 2
"""Fewest vertices that draw a preview line."""

# ---------------------------------------------------------------------------
# Flat-Earth area approximation
# ---------------------------------------------------------------------------

METERS_PER_DEGREE: float = 111_000.0
"""Metres per degree of latitude (and of longitude at the equator)."""

SQ_METRES_PER_HECTARE: float = 10_000.0
SQ_METRES_PER_KM2: float = 1_000_000.0

# Validity envelope of the flat-Earth estimate: within about 2 % of the
# WGS 84 geodesic area inside these bounds.
DEFAULT_MAX_LATITUDE_SPAN_DEG: float = 0.5
DEFAULT_MAX_ANCHOR_LATITUDE_DEG: float = 60.0

DEFAULT_AREA_WARNING_M2: float = 100_000_000.0
"""Area (100 km², 10,000 ha) above which a captured parcel is flagged."""

# ---------------------------------------------------------------------------
# Coordinate bounds (WGS 84)
# ---------------------------------------------------------------------------

MIN_LONGITUDE: float = -180.0
MAX_LONGITUDE: float = 180.0
MIN_LATITUDE: float = -90.0
MAX_LATITUDE: float = 90.0

# ---------------------------------------------------------------------------
# Map view (Portoviejo, Manabí)
# ---------------------------------------------------------------------------

DEFAULT_MAP_CENTER: tuple[float, float] = (-80.4558, -1.0543)
"""Initial map centre as ``(lon, lat)``."""

DEFAULT_MAP_ZOOM: int = 12
MAX_MAP_ZOOM: int = 19

DEFAULT_MAP_SURFACE: str = "memory"


class DrawingMode(enum.Enum):
    """Lifecycle state of a capture session."""

    IDLE = "idle"
    COLLECTING = "collecting"
    FINISHED = "finished"
