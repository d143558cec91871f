"""Data model for a finished polygon capture.

A CapturedPolygon is what the capture session emits when the user
finishes drawing: the closed outer ring and its estimated area.  The
host form converts units and persists it; this model knows nothing
about persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from parcel_capture.core.constants import METERS_PER_DEGREE, MIN_POLYGON_POINTS
from parcel_capture.core.exceptions import ContractError
from parcel_capture.geometry.area import estimate_area_m2
from parcel_capture.geometry.rings import compute_bbox, compute_centroid, is_closed, open_ring
from parcel_capture.utils.units import m2_to_ha, m2_to_km2

GEOJSON_POLYGON = "Polygon"

# A closed ring of three distinct vertices has four positions.
MIN_RING_LENGTH = MIN_POLYGON_POINTS + 1


class PolygonPayloadError(ContractError):
    """Raised when a serialised polygon does not match the emission contract."""

    default_stage = "model"
    default_code = "POLYGON_PAYLOAD_INVALID"


@dataclass(frozen=True, slots=True)
class CapturedPolygon:
    """A closed parcel boundary with its estimated area.

    Attributes:
        coordinates: Closed outer ring as ``(lon, lat)`` tuples; the first
            vertex is repeated at the end.  No holes.
        area_m2: Flat-Earth area estimate in square metres.  Negative only
            for rings anchored outside the WGS 84 latitude range.
    """

    coordinates: list[tuple[float, float]] = field(default_factory=list)
    area_m2: int = 0

    @property
    def vertex_count(self) -> int:
        """Number of distinct positions in the ring (closing vertex excluded)."""
        return max(len(self.coordinates) - 1, 0)

    @property
    def area_km2(self) -> float:
        return m2_to_km2(self.area_m2)

    @property
    def area_ha(self) -> float:
        return m2_to_ha(self.area_m2)

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        """Bounding box ``(min_lon, min_lat, max_lon, max_lat)``."""
        return compute_bbox(self.coordinates)

    @property
    def centroid(self) -> tuple[float, float]:
        """Planar centroid as ``(lon, lat)``."""
        return compute_centroid(self.coordinates)

    def to_dict(self) -> dict[str, object]:
        """Serialise to the caller payload ``{coordinates, area_m2}``."""
        return {
            "coordinates": [list(c) for c in self.coordinates],
            "area_m2": self.area_m2,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> CapturedPolygon:
        """Deserialise a ``to_dict`` payload.

        Raises:
            PolygonPayloadError: If the ring is malformed or not closed,
                or ``area_m2`` is not an integer.
        """
        ring = _parse_ring(data.get("coordinates"))
        area = data.get("area_m2", 0)
        if isinstance(area, bool) or not isinstance(area, int):
            msg = f"area_m2 must be an integer, got {area!r}"
            raise PolygonPayloadError(msg)
        return cls(coordinates=ring, area_m2=area)

    def to_geojson(self) -> dict[str, object]:
        """Return the ring as a GeoJSON ``Polygon`` geometry."""
        return {
            "type": GEOJSON_POLYGON,
            "coordinates": [[list(c) for c in self.coordinates]],
        }

    @classmethod
    def from_geojson(
        cls,
        geometry: dict[str, object],
        *,
        meters_per_degree: float = METERS_PER_DEGREE,
    ) -> CapturedPolygon:
        """Build a CapturedPolygon from a GeoJSON ``Polygon`` geometry.

        Only the outer ring is used; interior rings are rejected because
        captured parcels never carry holes.  The area is recomputed with
        the flat-Earth estimate.

        Raises:
            PolygonPayloadError: If the geometry is not a single-ring
                ``Polygon`` with a closed outer ring.
        """
        geom_type = geometry.get("type")
        if geom_type != GEOJSON_POLYGON:
            msg = f"Expected GeoJSON type {GEOJSON_POLYGON!r}, got {geom_type!r}"
            raise PolygonPayloadError(msg)

        rings = geometry.get("coordinates")
        if not isinstance(rings, list) or not rings:
            msg = "GeoJSON Polygon must have at least one ring"
            raise PolygonPayloadError(msg)
        if len(rings) > 1:
            msg = f"Captured polygons have no holes, got {len(rings) - 1} interior ring(s)"
            raise PolygonPayloadError(msg)

        ring = _parse_ring(rings[0])
        area = estimate_area_m2(open_ring(ring), meters_per_degree=meters_per_degree)
        return cls(coordinates=ring, area_m2=area)


def _parse_ring(raw: object) -> list[tuple[float, float]]:
    if not isinstance(raw, list):
        msg = f"coordinates must be a list, got {type(raw).__name__}"
        raise PolygonPayloadError(msg)

    ring: list[tuple[float, float]] = []
    for index, pair in enumerate(raw):
        if (
            not isinstance(pair, (list, tuple))
            or len(pair) != 2
            or not all(_is_number(v) for v in pair)
        ):
            msg = f"coordinates[{index}] must be a [lon, lat] number pair, got {pair!r}"
            raise PolygonPayloadError(msg)
        ring.append((float(pair[0]), float(pair[1])))

    if len(ring) < MIN_RING_LENGTH:
        msg = f"Ring needs at least {MIN_RING_LENGTH} positions, got {len(ring)}"
        raise PolygonPayloadError(msg)
    if not is_closed(ring):
        msg = "Ring is not closed: first and last positions differ"
        raise PolygonPayloadError(msg)
    return ring


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
