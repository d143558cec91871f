"""Geometry helpers for captured rings.

- area: flat-Earth area estimate, geodesic reference, accuracy envelope
- rings: ring closure, bounding box, centroid
"""

from parcel_capture.geometry.area import (
    AccuracyReport,
    assess_accuracy,
    compute_geodesic_area_m2,
    estimate_area_m2,
    shoelace_area_deg2,
)
from parcel_capture.geometry.rings import (
    RingError,
    close_ring,
    compute_bbox,
    compute_centroid,
    is_closed,
    open_ring,
)

__all__ = [
    "AccuracyReport",
    "RingError",
    "assess_accuracy",
    "close_ring",
    "compute_bbox",
    "compute_centroid",
    "compute_geodesic_area_m2",
    "estimate_area_m2",
    "is_closed",
    "open_ring",
    "shoelace_area_deg2",
]
