"""Area unit conversions for host display and record forms.

The capture component always reports square metres; forms that store
parcels in km² or farms in hectares convert with these helpers.
"""

from __future__ import annotations

from parcel_capture.core.constants import SQ_METRES_PER_HECTARE, SQ_METRES_PER_KM2

KM2_DISPLAY_DECIMALS = 4


def m2_to_km2(area_m2: float) -> float:
    """Convert square metres to square kilometres."""
    return area_m2 / SQ_METRES_PER_KM2


def m2_to_ha(area_m2: float) -> float:
    """Convert square metres to hectares."""
    return area_m2 / SQ_METRES_PER_HECTARE


def format_km2(area_m2: float, decimals: int = KM2_DISPLAY_DECIMALS) -> str:
    """Format an area in m² as a fixed-point km² string (``"0.6160"``)."""
    return f"{m2_to_km2(area_m2):.{decimals}f}"
