"""Ring helpers: closure, bounding box, centroid.

All coordinates are ``(lon, lat)`` tuples in WGS 84 decimal degrees.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from parcel_capture.core.constants import MIN_POLYGON_POINTS
from parcel_capture.core.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence


class RingError(ValidationError):
    """Raised when a ring helper is given too few vertices."""

    default_stage = "geometry"
    default_code = "RING_INVALID"


def close_ring(points: Sequence[tuple[float, float]]) -> list[tuple[float, float]]:
    """Return the points as a closed ring (first vertex repeated last).

    The vertex list is always closed by appending the first point, even
    when the last point happens to coincide with it: duplicates are
    legitimate input and are not collapsed.

    Raises:
        RingError: If fewer than three points are given.
    """
    _require_polygon(points, "ring closure")
    ring = [(float(lon), float(lat)) for lon, lat in points]
    ring.append(ring[0])
    return ring


def is_closed(ring: Sequence[tuple[float, float]]) -> bool:
    """Whether the ring's first and last vertices coincide."""
    return len(ring) > 1 and tuple(ring[0]) == tuple(ring[-1])


def open_ring(ring: Sequence[tuple[float, float]]) -> list[tuple[float, float]]:
    """Drop the closing vertex of a closed ring (open rings pass through)."""
    coords = [tuple(c) for c in ring]
    if is_closed(coords):
        coords = coords[:-1]
    return coords  # type: ignore[return-value]


def compute_bbox(
    coords: Sequence[tuple[float, float]],
) -> tuple[float, float, float, float]:
    """Compute a tight bounding box ``(min_lon, min_lat, max_lon, max_lat)``.

    Raises:
        RingError: If no coordinates are given.
    """
    if not coords:
        msg = "Empty coordinates — no coordinates provided for bbox computation"
        raise RingError(msg)
    lons = [c[0] for c in coords]
    lats = [c[1] for c in coords]
    return (min(lons), min(lats), max(lons), max(lats))


def compute_centroid(coords: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """Compute the planar centroid of a ring using Shapely.

    Degenerate rings (all vertices collinear or coincident) have no
    area; the centroid of their vertices' convex hull is returned
    instead.

    Raises:
        RingError: If fewer than three vertices are given.
    """
    _require_polygon(coords, "centroid computation")

    from shapely.geometry import MultiPoint, Polygon

    poly = Polygon(coords)
    if poly.area == 0:
        centroid = MultiPoint(list(coords)).convex_hull.centroid
    else:
        centroid = poly.centroid
    return (centroid.x, centroid.y)


def _require_polygon(coords: Sequence[tuple[float, float]], context: str) -> None:
    if len(coords) < MIN_POLYGON_POINTS:
        msg = (
            f"Insufficient coordinates for {context}: "
            f"need at least {MIN_POLYGON_POINTS}, got {len(coords)}"
        )
        raise RingError(msg)
