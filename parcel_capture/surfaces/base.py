"""MapSurface abstract base class.

Defines the drawing capability a capture session needs from whatever
mapping library the host renders with.  The session interacts
exclusively with this interface — it never reaches for a global map
handle and never knows which library is behind it.

Contract:
    - ``on_click(handler)``      — deliver clicks as ``MapClick`` values.
    - ``add_marker(point)``      — draw a vertex marker, return a layer id.
    - ``add_polyline(points)``   — draw the preview line, return a layer id.
    - ``add_polygon(ring)``      — draw a polygon overlay, return a layer id.
    - ``remove_layer(layer_id)`` — remove a layer previously returned.

Coordinates always cross this boundary as ``(lon, lat)``; adapters for
libraries that expect ``[lat, lng]`` (Leaflet and friends) swap the
order themselves.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from parcel_capture.core.constants import DEFAULT_MAP_CENTER, DEFAULT_MAP_ZOOM
from parcel_capture.core.exceptions import CaptureError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from parcel_capture.models.layers import LayerStyle, MapClick


class MapSurface(abc.ABC):
    """Abstract base class for map surface adapters.

    The constructor receives the initial map view.  Concrete adapters
    must override the five drawing/event methods; ``fit_bounds`` and
    ``off_click`` have no-op defaults for libraries without an
    equivalent.

    Example usage::

        surface = get_surface("memory")
        session = CaptureSession(surface, on_finish=form.set_polygon)
        session.start_drawing()
    """

    def __init__(
        self,
        *,
        center: tuple[float, float] = DEFAULT_MAP_CENTER,
        zoom: int = DEFAULT_MAP_ZOOM,
    ) -> None:
        self._center = center
        self._zoom = zoom

    @property
    def center(self) -> tuple[float, float]:
        """Initial map centre as ``(lon, lat)``."""
        return self._center

    @property
    def zoom(self) -> int:
        return self._zoom

    # ------------------------------------------------------------------
    # Abstract methods — every adapter must implement these
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def on_click(self, handler: Callable[[MapClick], None]) -> None:
        """Register *handler* to receive every map click."""

    @abc.abstractmethod
    def add_marker(
        self,
        point: tuple[float, float],
        *,
        label: str = "",
        style: LayerStyle | None = None,
    ) -> str:
        """Draw a vertex marker at *point*.

        Args:
            point: ``(lon, lat)`` position.
            label: Short text shown on the marker (the vertex number).
            style: Rendering hints; adapter defaults when ``None``.

        Returns:
            An opaque layer id accepted by ``remove_layer``.
        """

    @abc.abstractmethod
    def add_polyline(
        self,
        points: Sequence[tuple[float, float]],
        *,
        style: LayerStyle | None = None,
    ) -> str:
        """Draw an open line through *points* and return its layer id."""

    @abc.abstractmethod
    def add_polygon(
        self,
        ring: Sequence[tuple[float, float]],
        *,
        style: LayerStyle | None = None,
    ) -> str:
        """Draw a filled polygon for *ring* and return its layer id."""

    @abc.abstractmethod
    def remove_layer(self, layer_id: str) -> None:
        """Remove a layer previously returned by an ``add_*`` method.

        Raises:
            MapSurfaceError: If the layer id is unknown.
        """

    # ------------------------------------------------------------------
    # Optional hooks
    # ------------------------------------------------------------------

    def off_click(self, handler: Callable[[MapClick], None]) -> None:  # noqa: B027
        """Unregister a click handler.  No-op by default."""

    def fit_bounds(self, bbox: tuple[float, float, float, float]) -> None:  # noqa: B027
        """Pan/zoom to ``(min_lon, min_lat, max_lon, max_lat)``.  No-op by default."""


# ---------------------------------------------------------------------------
# Surface exceptions
# ---------------------------------------------------------------------------


class MapSurfaceError(CaptureError):
    """Base exception for map surface errors.

    Attributes:
        surface: Name of the surface adapter that raised the error.
        message: Human-readable error description.
    """

    default_stage = "surface"
    default_code = "MAP_SURFACE_ERROR"

    def __init__(self, surface: str, message: str) -> None:
        self.surface = surface
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.surface}] {self.message}"


class UnknownLayerError(MapSurfaceError):
    """A layer id was not issued by (or was already removed from) the surface."""

    default_code = "MAP_LAYER_UNKNOWN"
