"""Polygon area estimation.

The capture component reports area with a flat-Earth approximation:
the shoelace formula is applied in degree space and the result is
scaled to square metres using constant metres-per-degree factors
anchored at the first vertex's latitude.

The approximation is only locally valid.  ``assess_accuracy`` compares
it against the WGS 84 geodesic area (``pyproj.Geod``) and reports
whether the polygon sits inside the documented validity envelope:

    latitude span <= 0.5 deg, |anchor latitude| <= 60 deg, and no
    antimeridian crossing  ->  within about 2 % of the geodesic area.

Outside the envelope the estimate is still returned unchanged; callers
decide what to do with the report.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from parcel_capture.core.constants import (
    DEFAULT_MAX_ANCHOR_LATITUDE_DEG,
    DEFAULT_MAX_LATITUDE_SPAN_DEG,
    METERS_PER_DEGREE,
    MIN_POLYGON_POINTS,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

# Longitude jump between consecutive vertices that indicates the ring
# wraps across +/-180 rather than spanning most of the globe.
ANTIMERIDIAN_JUMP_DEG = 180.0


# ---------------------------------------------------------------------------
# Flat-Earth estimate
# ---------------------------------------------------------------------------


def shoelace_area_deg2(coords: Sequence[tuple[float, float]]) -> float:
    """Return the unsigned planar area of a ring in square degrees.

    Applies ``sum(lng_i * lat_{i+1} - lng_{i+1} * lat_i)`` with
    wraparound.  Winding order does not matter.  A ring that repeats
    its first vertex at the end yields the same value because the
    closing term is zero.

    Returns ``0.0`` for fewer than three vertices.
    """
    n = len(coords)
    if n < MIN_POLYGON_POINTS:
        return 0.0

    total = 0.0
    for i in range(n):
        lng1, lat1 = coords[i]
        lng2, lat2 = coords[(i + 1) % n]
        total += lng1 * lat2 - lng2 * lat1
    return abs(total) / 2


def estimate_area_m2(
    coords: Sequence[tuple[float, float]],
    *,
    meters_per_degree: float = METERS_PER_DEGREE,
) -> int:
    """Estimate polygon area in square metres (flat-Earth approximation).

    Args:
        coords: Vertices as ``(lon, lat)`` tuples, open or closed.
        meters_per_degree: Metres per degree of latitude.  The longitude
            factor is this value times ``cos(latitude of first vertex)``.

    Returns:
        Area in square metres, rounded with Python's ``round()`` (exact
        halves go to the nearest even integer).  Exactly ``0`` for fewer
        than three vertices.  Negative when the anchor latitude lies
        beyond +/-90 deg, because the longitude factor changes sign.
    """
    if len(coords) < MIN_POLYGON_POINTS:
        return 0

    area_deg2 = shoelace_area_deg2(coords)
    anchor_lat = math.radians(coords[0][1])
    meters_per_degree_lat = meters_per_degree
    meters_per_degree_lng = meters_per_degree * math.cos(anchor_lat)
    return round(area_deg2 * meters_per_degree_lat * meters_per_degree_lng)


# ---------------------------------------------------------------------------
# Geodesic reference
# ---------------------------------------------------------------------------


def compute_geodesic_area_m2(coords: Sequence[tuple[float, float]]) -> float:
    """Compute the WGS 84 geodesic area of a ring in square metres.

    Uses ``pyproj.Geod.polygon_area_perimeter``; the result is absolute
    (winding-order agnostic).  Returns ``0.0`` for fewer than three
    vertices.
    """
    if len(coords) < MIN_POLYGON_POINTS:
        return 0.0

    from pyproj import Geod

    geod = Geod(ellps="WGS84")
    lons = [c[0] for c in coords]
    lats = [c[1] for c in coords]
    area_m2, _perimeter = geod.polygon_area_perimeter(lons, lats)
    return abs(area_m2)


# ---------------------------------------------------------------------------
# Accuracy envelope
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AccuracyReport:
    """How far a flat-Earth estimate can be trusted for a given ring.

    Attributes:
        estimated_area_m2: Flat-Earth estimate (``estimate_area_m2``).
        geodesic_area_m2: WGS 84 reference area.
        deviation_pct: ``|estimate - geodesic| / geodesic * 100``
            (``0.0`` when the geodesic area is zero).
        anchor_latitude: Latitude of the first vertex.
        latitude_span_deg: ``max(lat) - min(lat)``.
        longitude_span_deg: ``max(lon) - min(lon)``.
        crosses_antimeridian: Whether consecutive vertices jump across +/-180.
        within_validity: Whether the ring is inside the validity envelope.
    """

    estimated_area_m2: int
    geodesic_area_m2: float
    deviation_pct: float
    anchor_latitude: float
    latitude_span_deg: float
    longitude_span_deg: float
    crosses_antimeridian: bool
    within_validity: bool

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict for logging or host display."""
        return {
            "estimated_area_m2": self.estimated_area_m2,
            "geodesic_area_m2": self.geodesic_area_m2,
            "deviation_pct": self.deviation_pct,
            "anchor_latitude": self.anchor_latitude,
            "latitude_span_deg": self.latitude_span_deg,
            "longitude_span_deg": self.longitude_span_deg,
            "crosses_antimeridian": self.crosses_antimeridian,
            "within_validity": self.within_validity,
        }


def assess_accuracy(
    coords: Sequence[tuple[float, float]],
    *,
    meters_per_degree: float = METERS_PER_DEGREE,
    max_latitude_span_deg: float = DEFAULT_MAX_LATITUDE_SPAN_DEG,
    max_anchor_latitude_deg: float = DEFAULT_MAX_ANCHOR_LATITUDE_DEG,
) -> AccuracyReport:
    """Compare the flat-Earth estimate against the geodesic area.

    Args:
        coords: Ring vertices as ``(lon, lat)`` tuples (at least three).
        meters_per_degree: Scale factor handed to ``estimate_area_m2``.
        max_latitude_span_deg: Envelope bound on latitude span.
        max_anchor_latitude_deg: Envelope bound on ``|anchor latitude|``.

    Returns:
        An ``AccuracyReport``.

    Raises:
        ValueError: If fewer than three vertices are given.
    """
    if len(coords) < MIN_POLYGON_POINTS:
        msg = f"Accuracy needs at least {MIN_POLYGON_POINTS} vertices, got {len(coords)}"
        raise ValueError(msg)

    lons = [c[0] for c in coords]
    lats = [c[1] for c in coords]
    latitude_span = max(lats) - min(lats)
    longitude_span = max(lons) - min(lons)
    anchor_latitude = coords[0][1]
    crosses = crosses_antimeridian(coords)

    estimated = estimate_area_m2(coords, meters_per_degree=meters_per_degree)
    geodesic = compute_geodesic_area_m2(coords)
    deviation = abs(estimated - geodesic) / geodesic * 100 if geodesic > 0 else 0.0

    within = (
        latitude_span <= max_latitude_span_deg
        and abs(anchor_latitude) <= max_anchor_latitude_deg
        and not crosses
    )

    return AccuracyReport(
        estimated_area_m2=estimated,
        geodesic_area_m2=geodesic,
        deviation_pct=deviation,
        anchor_latitude=anchor_latitude,
        latitude_span_deg=latitude_span,
        longitude_span_deg=longitude_span,
        crosses_antimeridian=crosses,
        within_validity=within,
    )


def crosses_antimeridian(coords: Sequence[tuple[float, float]]) -> bool:
    """Whether any edge of the ring (including the closing edge) wraps +/-180."""
    n = len(coords)
    for i in range(n):
        lon1 = coords[i][0]
        lon2 = coords[(i + 1) % n][0]
        if abs(lon2 - lon1) > ANTIMERIDIAN_JUMP_DEG:
            return True
    return False
