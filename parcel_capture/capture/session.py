"""Polygon capture session.

Collects an ordered sequence of clicked ``(lon, lat)`` points, keeps a
live preview on the map surface (numbered vertex markers, a dashed
line through the points and, from three points on, a translucent
polygon with its area), and on finish emits the closed ring plus the
area estimate to the host.

State machine::

    idle --start_drawing--> collecting
    collecting --add_point / remove_last_point--> collecting
    collecting --finish_drawing [>= 3 points]--> finished
    collecting | finished --reset--> idle

Everything runs synchronously inside the map surface's click callbacks:
each handler mutates the sequence, redraws and recomputes the area
before returning, so the host never observes a half-updated session.
``reset`` is the only cancellation mechanism.

Interactive operations never raise for user input.  Events arriving in
the wrong state are ignored (and logged at DEBUG); finishing with too
few points returns a ``FinishRefused`` value for the host to render.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from parcel_capture.core.config import CaptureConfig
from parcel_capture.core.constants import (
    MIN_POLYGON_POINTS,
    MIN_POLYLINE_POINTS,
    DrawingMode,
)
from parcel_capture.geometry.area import assess_accuracy, estimate_area_m2
from parcel_capture.geometry.rings import close_ring, compute_bbox
from parcel_capture.models.layers import (
    FINAL_POLYGON_STYLE,
    PREVIEW_LINE_STYLE,
    PREVIEW_POLYGON_STYLE,
    VERTEX_MARKER_STYLE,
)
from parcel_capture.models.polygon import CapturedPolygon
from parcel_capture.models.results import (
    INSUFFICIENT_POINTS,
    NOT_COLLECTING,
    CaptureSummary,
    FinishRefused,
)
from parcel_capture.surfaces.factory import get_surface

if TYPE_CHECKING:
    from collections.abc import Callable

    from parcel_capture.models.layers import MapClick
    from parcel_capture.surfaces.base import MapSurface

logger = logging.getLogger("parcel_capture.capture.session")


class CaptureSession:
    """Interactive polygon capture over a ``MapSurface``.

    Args:
        surface: Drawing capability supplied by the host.  When ``None``
            the surface named by ``config.map_surface`` is created.
        on_finish: Called with the ``CapturedPolygon`` when drawing
            finishes successfully.
        on_change: Called with a ``CaptureSummary`` after every accepted
            point change, finish and reset.
        config: Capture configuration (defaults when ``None``).

    Example usage::

        session = CaptureSession(surface, on_finish=form.set_boundary)
        session.start_drawing()
        # ... user clicks; surface calls session.handle_click ...
        outcome = session.finish_drawing()
        if isinstance(outcome, FinishRefused):
            toast(outcome.message)
    """

    def __init__(
        self,
        surface: MapSurface | None = None,
        *,
        on_finish: Callable[[CapturedPolygon], None] | None = None,
        on_change: Callable[[CaptureSummary], None] | None = None,
        config: CaptureConfig | None = None,
    ) -> None:
        self._config = config or CaptureConfig()
        self._surface = surface if surface is not None else get_surface(config=self._config)
        self._on_finish = on_finish
        self._on_change = on_change

        self._state = DrawingMode.IDLE
        self._points: list[tuple[float, float]] = []
        self._area_m2 = 0
        self._result: CapturedPolygon | None = None

        self._marker_ids: list[str] = []
        self._line_id: str | None = None
        self._polygon_id: str | None = None

        self._surface.on_click(self.handle_click)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> DrawingMode:
        return self._state

    @property
    def points(self) -> tuple[tuple[float, float], ...]:
        """The point sequence in insertion order."""
        return tuple(self._points)

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def area_m2(self) -> int:
        """Area of the current polygon; ``0`` below three points."""
        return self._area_m2

    @property
    def result(self) -> CapturedPolygon | None:
        """The finished polygon, or ``None`` unless the session is finished."""
        return self._result

    @property
    def can_finish(self) -> bool:
        return self._state is DrawingMode.COLLECTING and len(self._points) >= MIN_POLYGON_POINTS

    @property
    def surface(self) -> MapSurface:
        return self._surface

    def summary(self) -> CaptureSummary:
        """Snapshot for the host's point-count / area panel."""
        return CaptureSummary(
            state=self._state,
            point_count=len(self._points),
            area_m2=self._area_m2,
            can_finish=self.can_finish,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_drawing(self) -> bool:
        """Enter collecting mode from ``idle``.

        Returns:
            ``True`` if the session is now collecting, ``False`` if it was
            not idle (a finished polygon must be reset before redrawing).
        """
        if self._state is not DrawingMode.IDLE:
            logger.debug("start_drawing ignored | state=%s", self._state.value)
            return False

        self._clear()
        self._state = DrawingMode.COLLECTING
        logger.debug("Drawing started")
        self._notify_change()
        return True

    def handle_click(self, event: MapClick) -> None:
        """Map-surface click handler: append the clicked point."""
        self.add_point(event.longitude, event.latitude)

    def add_point(self, lon: float, lat: float) -> bool:
        """Append ``(lon, lat)`` while collecting.

        Coordinates are taken as supplied by the map surface; no range
        check is applied.

        Returns:
            ``True`` if the point was appended, ``False`` when the
            session is not collecting.
        """
        if self._state is not DrawingMode.COLLECTING:
            logger.debug("add_point ignored | state=%s", self._state.value)
            return False

        point = (float(lon), float(lat))
        self._points.append(point)
        self._marker_ids.append(
            self._surface.add_marker(
                point,
                label=str(len(self._points)),
                style=VERTEX_MARKER_STYLE,
            )
        )
        self._redraw()
        logger.debug(
            "Point added | n=%d | lon=%.6f | lat=%.6f | area=%d m²",
            len(self._points),
            point[0],
            point[1],
            self._area_m2,
        )
        self._notify_change()
        return True

    def remove_last_point(self) -> bool:
        """Undo the most recent ``add_point``.

        Returns:
            ``True`` if a point was removed, ``False`` when the sequence
            is empty or the session is not collecting.
        """
        if self._state is not DrawingMode.COLLECTING or not self._points:
            logger.debug(
                "remove_last_point ignored | state=%s | n=%d",
                self._state.value,
                len(self._points),
            )
            return False

        self._points.pop()
        self._surface.remove_layer(self._marker_ids.pop())
        self._redraw()
        logger.debug("Point removed | n=%d | area=%d m²", len(self._points), self._area_m2)
        self._notify_change()
        return True

    def finish_drawing(self) -> CapturedPolygon | FinishRefused:
        """Close the ring and emit it to ``on_finish``.

        Returns:
            The ``CapturedPolygon`` on success, or a ``FinishRefused``
            describing why the session did not transition.  A refusal
            leaves the session untouched and calls no callback.
        """
        if self._state is not DrawingMode.COLLECTING:
            return self._refuse(
                NOT_COLLECTING,
                f"Cannot finish while {self._state.value}; start drawing first",
            )
        if len(self._points) < MIN_POLYGON_POINTS:
            return self._refuse(
                INSUFFICIENT_POINTS,
                f"At least {MIN_POLYGON_POINTS} points are needed to create a polygon",
            )

        self._remove_preview()
        ring = close_ring(self._points)
        self._area_m2 = estimate_area_m2(
            self._points,
            meters_per_degree=self._config.meters_per_degree,
        )
        self._polygon_id = self._surface.add_polygon(ring, style=FINAL_POLYGON_STYLE)
        self._surface.fit_bounds(compute_bbox(ring))

        self._result = CapturedPolygon(coordinates=ring, area_m2=self._area_m2)
        self._state = DrawingMode.FINISHED
        self._log_finished(self._result)
        self._notify_change()

        if self._on_finish is not None:
            self._on_finish(self._result)
        return self._result

    def reset(self) -> None:
        """Discard all points and layers and return to ``idle``.  Valid from any state."""
        self._clear()
        self._state = DrawingMode.IDLE
        logger.debug("Session reset")
        self._notify_change()

    def close(self) -> None:
        """Reset and stop listening to the surface's clicks."""
        self.reset()
        self._surface.off_click(self.handle_click)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _redraw(self) -> None:
        """Redraw the preview line and polygon and recompute the area."""
        self._remove_preview()

        if len(self._points) >= MIN_POLYLINE_POINTS:
            self._line_id = self._surface.add_polyline(self._points, style=PREVIEW_LINE_STYLE)

        if len(self._points) >= MIN_POLYGON_POINTS:
            self._polygon_id = self._surface.add_polygon(
                close_ring(self._points),
                style=PREVIEW_POLYGON_STYLE,
            )
            self._area_m2 = estimate_area_m2(
                self._points,
                meters_per_degree=self._config.meters_per_degree,
            )
        else:
            self._area_m2 = 0

    def _remove_preview(self) -> None:
        if self._line_id is not None:
            self._surface.remove_layer(self._line_id)
            self._line_id = None
        if self._polygon_id is not None:
            self._surface.remove_layer(self._polygon_id)
            self._polygon_id = None

    def _clear(self) -> None:
        self._remove_preview()
        for marker_id in self._marker_ids:
            self._surface.remove_layer(marker_id)
        self._marker_ids.clear()
        self._points.clear()
        self._area_m2 = 0
        self._result = None

    def _refuse(self, code: str, message: str) -> FinishRefused:
        logger.info(
            "Finish refused | code=%s | points=%d | state=%s",
            code,
            len(self._points),
            self._state.value,
        )
        return FinishRefused(
            code=code,
            message=message,
            points_required=MIN_POLYGON_POINTS,
            points_collected=len(self._points),
            state=self._state,
        )

    def _notify_change(self) -> None:
        if self._on_change is not None:
            self._on_change(self.summary())

    def _log_finished(self, polygon: CapturedPolygon) -> None:
        report = assess_accuracy(
            self._points,
            meters_per_degree=self._config.meters_per_degree,
            max_latitude_span_deg=self._config.max_latitude_span_deg,
            max_anchor_latitude_deg=self._config.max_anchor_latitude_deg,
        )

        if not report.within_validity:
            logger.warning(
                "Area estimate outside flat-Earth validity | lat_span=%.4f deg | "
                "anchor_lat=%.4f | antimeridian=%s | deviation=%.2f%%",
                report.latitude_span_deg,
                report.anchor_latitude,
                report.crosses_antimeridian,
                report.deviation_pct,
            )

        if polygon.area_m2 > self._config.area_warning_m2:
            logger.warning(
                "Area %d m² exceeds threshold of %.0f m²",
                polygon.area_m2,
                self._config.area_warning_m2,
            )

        logger.info(
            "Polygon captured | vertices=%d | area=%d m² | geodesic=%.0f m² | "
            "bbox=[%.6f, %.6f, %.6f, %.6f]",
            polygon.vertex_count,
            polygon.area_m2,
            report.geodesic_area_m2,
            *polygon.bbox,
        )
