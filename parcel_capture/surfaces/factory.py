"""Map surface factory — selects a surface adapter by name.

The factory maintains a registry of known adapters.  Hosts plug in the
adapter for their own mapping library with ``register_surface``.

Usage::

    from parcel_capture.surfaces.factory import get_surface

    surface = get_surface("memory")
    session = CaptureSession(surface)

The default surface name is read from the ``CAPTURE_MAP_SURFACE``
environment variable via ``CaptureConfig.map_surface``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from parcel_capture.surfaces.base import MapSurface, MapSurfaceError

if TYPE_CHECKING:
    from collections.abc import Callable

    from parcel_capture.core.config import CaptureConfig

logger = logging.getLogger(__name__)

MEMORY = "memory"

# Each entry maps a surface name to a callable that returns the adapter
# *class*, so that a host's mapping library is only imported when its
# adapter is selected.

_SURFACE_REGISTRY: dict[str, Callable[[], type[MapSurface]]] = {}


def _register_builtin_surfaces() -> None:
    """Register the built-in surface adapters."""

    def _memory() -> type[MapSurface]:
        from parcel_capture.surfaces.memory import InMemoryMapSurface

        return InMemoryMapSurface

    _SURFACE_REGISTRY[MEMORY] = _memory


def _ensure_registry() -> None:
    """Initialise the adapter registry once (idempotent)."""
    if not _SURFACE_REGISTRY:
        _register_builtin_surfaces()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_surface(
    name: str,
    loader: Callable[[], type[MapSurface]],
) -> None:
    """Register a map surface adapter.

    Args:
        name: Surface name (e.g. ``"leaflet"``).
        loader: A zero-argument callable that returns the adapter class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Surface name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _SURFACE_REGISTRY[name] = loader
    logger.debug("Registered map surface adapter: %s", name)


def get_surface(
    name: str | None = None,
    config: CaptureConfig | None = None,
) -> MapSurface:
    """Create and return a map surface instance.

    Args:
        name: Surface identifier.  Defaults to ``config.map_surface``.
        config: Optional ``CaptureConfig`` supplying the initial map
            view.  Defaults are used when ``None``.

    Returns:
        A ``MapSurface`` centred on the configured view.

    Raises:
        MapSurfaceError: If the named surface is not registered.
    """
    from parcel_capture.core.config import CaptureConfig

    _ensure_registry()

    if config is None:
        config = CaptureConfig()
    name = name or config.map_surface

    loader = _SURFACE_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_SURFACE_REGISTRY))
        msg = f"Unknown map surface: {name!r}. Available: {available}"
        raise MapSurfaceError(surface=name, message=msg)

    surface_cls = loader()
    logger.info("Creating map surface: %s", name)
    return surface_cls(center=config.map_center, zoom=config.map_zoom)


def list_surfaces() -> list[str]:
    """Return the names of all registered surface adapters."""
    _ensure_registry()
    return sorted(_SURFACE_REGISTRY)
