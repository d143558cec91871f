"""Headless in-memory map surface.

Records every layer the capture session draws and dispatches clicks
injected through ``click(lon, lat)``.  Hosts that render GeoJSON
directly (a web front-end polling the session, a notebook widget) can
pull the visible layers with ``to_geojson()``; tests use it to assert
on the exact drawing side effects.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from parcel_capture.models.layers import LayerStyle, MapClick
from parcel_capture.surfaces.base import MapSurface, UnknownLayerError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger("parcel_capture.surfaces.memory")

SURFACE_NAME = "memory"

MARKER = "marker"
POLYLINE = "polyline"
POLYGON = "polygon"


@dataclass(frozen=True, slots=True)
class Layer:
    """A drawn layer as recorded by the in-memory surface.

    Attributes:
        layer_id: Id returned to the caller.
        kind: ``"marker"``, ``"polyline"`` or ``"polygon"``.
        coordinates: ``(lon, lat)`` positions (one for markers).
        style: Rendering hints the layer was drawn with.
        label: Marker label (empty for other kinds).
    """

    layer_id: str
    kind: str
    coordinates: tuple[tuple[float, float], ...]
    style: LayerStyle
    label: str = ""

    def to_feature(self) -> dict[str, object]:
        """Return the layer as a GeoJSON ``Feature``."""
        from shapely.geometry import LineString, Point, Polygon, mapping

        if self.kind == MARKER:
            geometry = Point(self.coordinates[0])
        elif self.kind == POLYLINE:
            geometry = LineString(self.coordinates)
        else:
            geometry = Polygon(self.coordinates)

        return {
            "type": "Feature",
            "id": self.layer_id,
            "geometry": mapping(geometry),
            "properties": {
                "kind": self.kind,
                "label": self.label,
                **self.style.to_dict(),
            },
        }


class InMemoryMapSurface(MapSurface):
    """Map surface that keeps layers in a dict instead of rendering them."""

    def __init__(
        self,
        *,
        center: tuple[float, float] | None = None,
        zoom: int | None = None,
    ) -> None:
        kwargs: dict[str, object] = {}
        if center is not None:
            kwargs["center"] = center
        if zoom is not None:
            kwargs["zoom"] = zoom
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self._layers: dict[str, Layer] = {}
        self._handlers: list[Callable[[MapClick], None]] = []
        self._ids = itertools.count(1)
        self.bounds: tuple[float, float, float, float] | None = None

    # ------------------------------------------------------------------
    # MapSurface contract
    # ------------------------------------------------------------------

    def on_click(self, handler: Callable[[MapClick], None]) -> None:
        self._handlers.append(handler)

    def off_click(self, handler: Callable[[MapClick], None]) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def add_marker(
        self,
        point: tuple[float, float],
        *,
        label: str = "",
        style: LayerStyle | None = None,
    ) -> str:
        return self._add(MARKER, (point,), style, label)

    def add_polyline(
        self,
        points: Sequence[tuple[float, float]],
        *,
        style: LayerStyle | None = None,
    ) -> str:
        return self._add(POLYLINE, points, style)

    def add_polygon(
        self,
        ring: Sequence[tuple[float, float]],
        *,
        style: LayerStyle | None = None,
    ) -> str:
        return self._add(POLYGON, ring, style)

    def remove_layer(self, layer_id: str) -> None:
        if self._layers.pop(layer_id, None) is None:
            msg = f"Unknown layer id: {layer_id!r}"
            raise UnknownLayerError(SURFACE_NAME, msg)
        logger.debug("Layer removed | id=%s | remaining=%d", layer_id, len(self._layers))

    def fit_bounds(self, bbox: tuple[float, float, float, float]) -> None:
        self.bounds = bbox

    # ------------------------------------------------------------------
    # Host / test helpers
    # ------------------------------------------------------------------

    def click(self, lon: float, lat: float) -> None:
        """Simulate a user click at ``(lon, lat)``."""
        event = MapClick(longitude=lon, latitude=lat)
        for handler in list(self._handlers):
            handler(event)

    @property
    def layers(self) -> list[Layer]:
        """Visible layers in drawing order."""
        return list(self._layers.values())

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def layers_of(self, kind: str) -> list[Layer]:
        return [layer for layer in self._layers.values() if layer.kind == kind]

    def get_layer(self, layer_id: str) -> Layer:
        """Return a visible layer.

        Raises:
            UnknownLayerError: If the id is not visible.
        """
        try:
            return self._layers[layer_id]
        except KeyError:
            msg = f"Unknown layer id: {layer_id!r}"
            raise UnknownLayerError(SURFACE_NAME, msg) from None

    def to_geojson(self) -> dict[str, object]:
        """Return the visible layers as a GeoJSON ``FeatureCollection``."""
        return {
            "type": "FeatureCollection",
            "features": [layer.to_feature() for layer in self._layers.values()],
        }

    def _add(
        self,
        kind: str,
        coordinates: Sequence[tuple[float, float]],
        style: LayerStyle | None,
        label: str = "",
    ) -> str:
        layer_id = f"{kind}-{next(self._ids)}"
        self._layers[layer_id] = Layer(
            layer_id=layer_id,
            kind=kind,
            coordinates=tuple((float(lon), float(lat)) for lon, lat in coordinates),
            style=style or LayerStyle(),
            label=label,
        )
        logger.debug("Layer added | id=%s | vertices=%d", layer_id, len(coordinates))
        return layer_id
