"""Capture configuration loaded from environment variables.

All configuration values have defaults matching the original farm and
parcel pickers (Portoviejo map view, 111 km per degree).

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric
    value is out of its valid range, so a bad deployment setting is
    caught when the host builds its capture session rather than on the
    first click.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from parcel_capture.core.constants import (
    DEFAULT_AREA_WARNING_M2,
    DEFAULT_MAP_CENTER,
    DEFAULT_MAP_SURFACE,
    DEFAULT_MAP_ZOOM,
    DEFAULT_MAX_ANCHOR_LATITUDE_DEG,
    DEFAULT_MAX_LATITUDE_SPAN_DEG,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MAX_MAP_ZOOM,
    METERS_PER_DEGREE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from parcel_capture.core.exceptions import CaptureError


class ConfigValidationError(CaptureError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class CaptureConfig:
    """Immutable capture configuration.

    Loaded once by the host and handed to every ``CaptureSession`` it
    creates.

    Attributes:
        map_surface: Registered map surface adapter name (``memory`` by default).
        meters_per_degree: Metres per degree used by the flat-Earth estimate.
        max_latitude_span_deg: Latitude span (degrees) beyond which the
            estimate is flagged as outside its validity envelope.
        max_anchor_latitude_deg: Absolute anchor latitude beyond which the
            estimate is flagged as outside its validity envelope.
        area_warning_m2: Area (m²) above which a warning is logged.
        map_center_lon: Initial map centre longitude.
        map_center_lat: Initial map centre latitude.
        map_zoom: Initial map zoom level.
    """

    map_surface: str = DEFAULT_MAP_SURFACE
    meters_per_degree: float = METERS_PER_DEGREE
    max_latitude_span_deg: float = DEFAULT_MAX_LATITUDE_SPAN_DEG
    max_anchor_latitude_deg: float = DEFAULT_MAX_ANCHOR_LATITUDE_DEG
    area_warning_m2: float = DEFAULT_AREA_WARNING_M2
    map_center_lon: float = DEFAULT_MAP_CENTER[0]
    map_center_lat: float = DEFAULT_MAP_CENTER[1]
    map_zoom: int = DEFAULT_MAP_ZOOM

    @property
    def map_center(self) -> tuple[float, float]:
        """Initial map centre as ``(lon, lat)``."""
        return (self.map_center_lon, self.map_center_lat)

    @classmethod
    def from_env(cls) -> CaptureConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range
                or a required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``CAPTURE_MAP_ZOOM=abc``).
        """
        config = cls(
            map_surface=os.getenv("CAPTURE_MAP_SURFACE", DEFAULT_MAP_SURFACE),
            meters_per_degree=float(
                os.getenv("CAPTURE_METERS_PER_DEGREE", str(METERS_PER_DEGREE))
            ),
            max_latitude_span_deg=float(
                os.getenv("CAPTURE_MAX_LATITUDE_SPAN_DEG", str(DEFAULT_MAX_LATITUDE_SPAN_DEG))
            ),
            max_anchor_latitude_deg=float(
                os.getenv("CAPTURE_MAX_ANCHOR_LATITUDE_DEG", str(DEFAULT_MAX_ANCHOR_LATITUDE_DEG))
            ),
            area_warning_m2=float(os.getenv("CAPTURE_AREA_WARNING_M2", str(DEFAULT_AREA_WARNING_M2))),
            map_center_lon=float(os.getenv("CAPTURE_MAP_CENTER_LON", str(DEFAULT_MAP_CENTER[0]))),
            map_center_lat=float(os.getenv("CAPTURE_MAP_CENTER_LAT", str(DEFAULT_MAP_CENTER[1]))),
            map_zoom=int(os.getenv("CAPTURE_MAP_ZOOM", str(DEFAULT_MAP_ZOOM))),
        )
        _validate(config)
        return config


def _validate(config: CaptureConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.map_surface:
        raise ConfigValidationError(
            "CAPTURE_MAP_SURFACE",
            config.map_surface,
            "must not be empty",
        )

    if config.meters_per_degree <= 0:
        raise ConfigValidationError(
            "CAPTURE_METERS_PER_DEGREE",
            config.meters_per_degree,
            "must be > 0 (metres)",
        )

    if config.max_latitude_span_deg <= 0:
        raise ConfigValidationError(
            "CAPTURE_MAX_LATITUDE_SPAN_DEG",
            config.max_latitude_span_deg,
            "must be > 0 (degrees)",
        )

    if not 0.0 < config.max_anchor_latitude_deg <= MAX_LATITUDE:
        raise ConfigValidationError(
            "CAPTURE_MAX_ANCHOR_LATITUDE_DEG",
            config.max_anchor_latitude_deg,
            f"must be in (0, {MAX_LATITUDE}] (degrees)",
        )

    if config.area_warning_m2 <= 0:
        raise ConfigValidationError(
            "CAPTURE_AREA_WARNING_M2",
            config.area_warning_m2,
            "must be > 0 (square metres)",
        )

    if not MIN_LONGITUDE <= config.map_center_lon <= MAX_LONGITUDE:
        raise ConfigValidationError(
            "CAPTURE_MAP_CENTER_LON",
            config.map_center_lon,
            f"must be between {MIN_LONGITUDE} and {MAX_LONGITUDE} (degrees)",
        )

    if not MIN_LATITUDE <= config.map_center_lat <= MAX_LATITUDE:
        raise ConfigValidationError(
            "CAPTURE_MAP_CENTER_LAT",
            config.map_center_lat,
            f"must be between {MIN_LATITUDE} and {MAX_LATITUDE} (degrees)",
        )

    if not 0 <= config.map_zoom <= MAX_MAP_ZOOM:
        raise ConfigValidationError(
            "CAPTURE_MAP_ZOOM",
            config.map_zoom,
            f"must be between 0 and {MAX_MAP_ZOOM}",
        )
