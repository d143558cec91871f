"""Unit tests for polygon area estimation.

Covers the shoelace summation in degree space, the flat-Earth
conversion to square metres, the WGS 84 geodesic reference and the
accuracy envelope report.
"""

from __future__ import annotations

import math

import pytest

from parcel_capture.geometry.area import (
    AccuracyReport,
    assess_accuracy,
    compute_geodesic_area_m2,
    crosses_antimeridian,
    estimate_area_m2,
    shoelace_area_deg2,
)

# ---------------------------------------------------------------------------
# Reference polygons (lon, lat)
# ---------------------------------------------------------------------------

# Right triangle near Portoviejo, Manabí (legs of 0.01 deg).
PORTOVIEJO_TRIANGLE = [
    (-80.0, -1.0),
    (-80.0, -1.01),
    (-79.99, -1.01),
]

# round(0.00005 deg² * 111000² * cos(1 deg))
PORTOVIEJO_AREA_M2 = 615_956

# Cacao parcel near Portoviejo, 0.004 x 0.003 deg.
CACAO_PARCEL = [
    (-80.4600, -1.0500),
    (-80.4560, -1.0500),
    (-80.4560, -1.0530),
    (-80.4600, -1.0530),
]

# Spans 2 deg of latitude in Patagonia.
TALL_STRIP = [
    (-70.0, -40.0),
    (-69.9, -40.0),
    (-69.9, -42.0),
    (-70.0, -42.0),
]

# Straddles the antimeridian near Fiji.
FIJI_DATELINE = [
    (179.95, -16.50),
    (-179.95, -16.50),
    (-179.95, -16.40),
    (179.95, -16.40),
]


def _reference_area_m2(coords: list[tuple[float, float]]) -> float:
    """Straight transcription of the flat-Earth formula for comparison."""
    n = len(coords)
    total = sum(
        coords[i][0] * coords[(i + 1) % n][1] - coords[(i + 1) % n][0] * coords[i][1]
        for i in range(n)
    )
    deg2 = abs(total) / 2
    return deg2 * 111_000 * 111_000 * math.cos(math.radians(coords[0][1]))


# ===========================================================================
# Shoelace in degree space
# ===========================================================================


class TestShoelaceDegrees:
    """Planar area of a ring in square degrees."""

    def test_unit_square(self) -> None:
        assert shoelace_area_deg2([(0, 0), (1, 0), (1, 1), (0, 1)]) == pytest.approx(1.0)

    def test_triangle(self) -> None:
        assert shoelace_area_deg2(PORTOVIEJO_TRIANGLE) == pytest.approx(0.00005)

    def test_winding_order_agnostic(self) -> None:
        """Clockwise and counter-clockwise rings give the same area."""
        reversed_ring = list(reversed(CACAO_PARCEL))
        assert shoelace_area_deg2(reversed_ring) == pytest.approx(shoelace_area_deg2(CACAO_PARCEL))

    def test_closed_ring_same_as_open(self) -> None:
        """Repeating the first vertex adds a zero-length closing edge."""
        closed = [*CACAO_PARCEL, CACAO_PARCEL[0]]
        assert shoelace_area_deg2(closed) == pytest.approx(shoelace_area_deg2(CACAO_PARCEL))

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_fewer_than_three_is_zero(self, count: int) -> None:
        assert shoelace_area_deg2(CACAO_PARCEL[:count]) == 0.0

    def test_collinear_is_zero(self) -> None:
        assert shoelace_area_deg2([(0, 0), (1, 1), (2, 2)]) == pytest.approx(0.0)


# ===========================================================================
# Flat-Earth estimate in square metres
# ===========================================================================


class TestEstimateAreaM2:
    """Degree² to m² conversion anchored at the first vertex latitude."""

    def test_portoviejo_golden_value(self) -> None:
        """The Portoviejo triangle matches the hand-computed value within 1 m²."""
        area = estimate_area_m2(PORTOVIEJO_TRIANGLE)
        assert abs(area - PORTOVIEJO_AREA_M2) <= 1

    def test_matches_reference_formula(self) -> None:
        for coords in (PORTOVIEJO_TRIANGLE, CACAO_PARCEL, TALL_STRIP):
            assert abs(estimate_area_m2(coords) - _reference_area_m2(coords)) <= 1

    def test_returns_int(self) -> None:
        assert isinstance(estimate_area_m2(CACAO_PARCEL), int)

    def test_non_negative_for_either_winding(self) -> None:
        assert estimate_area_m2(CACAO_PARCEL) > 0
        assert estimate_area_m2(list(reversed(CACAO_PARCEL))) > 0

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_fewer_than_three_is_exactly_zero(self, count: int) -> None:
        area = estimate_area_m2(PORTOVIEJO_TRIANGLE[:count])
        assert area == 0
        assert isinstance(area, int)

    def test_duplicate_points_contribute_nothing(self) -> None:
        """Coincident vertices are accepted; a fully degenerate ring has no area."""
        assert estimate_area_m2([(-80.0, -1.0)] * 3) == 0

    def test_anchored_at_first_vertex_latitude(self) -> None:
        """Rotating the vertex order changes the anchor, and so the estimate."""
        rotated = TALL_STRIP[2:] + TALL_STRIP[:2]
        assert estimate_area_m2(rotated) != estimate_area_m2(TALL_STRIP)
        assert estimate_area_m2(rotated) < estimate_area_m2(TALL_STRIP)

    def test_equator_uses_full_longitude_scale(self) -> None:
        square = [(0.0, 0.0), (0.001, 0.0), (0.001, 0.001), (0.0, 0.001)]
        assert estimate_area_m2(square) == round(0.001 * 0.001 * 111_000 * 111_000)

    def test_custom_meters_per_degree(self) -> None:
        square = [(0.0, 0.0), (0.001, 0.0), (0.001, 0.001), (0.0, 0.001)]
        assert estimate_area_m2(square, meters_per_degree=100_000) == 10_000

    @pytest.mark.parametrize(("apex_lat", "expected"), [(5.0, 2), (7.0, 4)])
    def test_exact_halves_round_to_even(self, apex_lat: float, expected: int) -> None:
        """2.5 m² rounds to 2 and 3.5 m² to 4 (Python round-half-even)."""
        triangle = [(0.0, 0.0), (1.0, 0.0), (0.0, apex_lat)]
        assert estimate_area_m2(triangle, meters_per_degree=1.0) == expected

    def test_negative_beyond_valid_latitude(self) -> None:
        """An anchor past -90 deg flips the sign of the longitude factor."""
        ring = [(250.0, -120.0), (251.0, -120.0), (251.0, -119.0)]
        assert estimate_area_m2(ring) == pytest.approx(-3_080_250_000, abs=1)


# ===========================================================================
# Geodesic reference and accuracy envelope
# ===========================================================================


class TestGeodesicArea:
    """WGS 84 reference area via pyproj."""

    def test_close_to_estimate_near_equator(self) -> None:
        geodesic = compute_geodesic_area_m2(PORTOVIEJO_TRIANGLE)
        assert geodesic == pytest.approx(PORTOVIEJO_AREA_M2, rel=0.01)

    def test_winding_order_agnostic(self) -> None:
        forward = compute_geodesic_area_m2(CACAO_PARCEL)
        backward = compute_geodesic_area_m2(list(reversed(CACAO_PARCEL)))
        assert forward > 0
        assert backward == pytest.approx(forward)

    def test_fewer_than_three_is_zero(self) -> None:
        assert compute_geodesic_area_m2(CACAO_PARCEL[:2]) == 0.0


class TestAssessAccuracy:
    """Validity envelope report."""

    def test_small_parcel_within_validity(self) -> None:
        report = assess_accuracy(CACAO_PARCEL)
        assert isinstance(report, AccuracyReport)
        assert report.within_validity is True
        assert report.deviation_pct < 2.0
        assert report.estimated_area_m2 == estimate_area_m2(CACAO_PARCEL)
        assert report.anchor_latitude == pytest.approx(-1.05)
        assert report.latitude_span_deg == pytest.approx(0.003)
        assert report.longitude_span_deg == pytest.approx(0.004)

    def test_tall_polygon_outside_validity(self) -> None:
        report = assess_accuracy(TALL_STRIP)
        assert report.latitude_span_deg == pytest.approx(2.0)
        assert report.within_validity is False

    def test_high_latitude_anchor_outside_validity(self) -> None:
        svalbard = [(15.0, 78.0), (15.01, 78.0), (15.01, 78.01), (15.0, 78.01)]
        report = assess_accuracy(svalbard)
        assert report.within_validity is False
        assert report.crosses_antimeridian is False

    def test_custom_envelope(self) -> None:
        report = assess_accuracy(TALL_STRIP, max_latitude_span_deg=5.0)
        assert report.within_validity is True

    def test_antimeridian_outside_validity(self) -> None:
        report = assess_accuracy(FIJI_DATELINE)
        assert report.crosses_antimeridian is True
        assert report.within_validity is False

    def test_requires_three_vertices(self) -> None:
        with pytest.raises(ValueError, match=r"at least 3"):
            assess_accuracy(CACAO_PARCEL[:2])

    def test_to_dict_keys(self) -> None:
        data = assess_accuracy(CACAO_PARCEL).to_dict()
        assert set(data) == {
            "estimated_area_m2",
            "geodesic_area_m2",
            "deviation_pct",
            "anchor_latitude",
            "latitude_span_deg",
            "longitude_span_deg",
            "crosses_antimeridian",
            "within_validity",
        }


class TestCrossesAntimeridian:
    def test_regular_ring(self) -> None:
        assert crosses_antimeridian(CACAO_PARCEL) is False

    def test_dateline_ring(self) -> None:
        assert crosses_antimeridian(FIJI_DATELINE) is True
