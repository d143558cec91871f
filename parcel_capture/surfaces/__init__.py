"""Map surface adapters.

The capture session draws through the ``MapSurface`` interface only.
``InMemoryMapSurface`` is the built-in headless adapter; hosts register
adapters for their own mapping library with ``register_surface``.
"""

from parcel_capture.surfaces.base import MapSurface, MapSurfaceError, UnknownLayerError
from parcel_capture.surfaces.factory import get_surface, list_surfaces, register_surface
from parcel_capture.surfaces.memory import InMemoryMapSurface

__all__ = [
    "InMemoryMapSurface",
    "MapSurface",
    "MapSurfaceError",
    "UnknownLayerError",
    "get_surface",
    "list_surfaces",
    "register_surface",
]
