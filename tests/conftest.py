"""Shared pytest fixtures for the parcel capture test suite."""

from __future__ import annotations

import pytest

from parcel_capture.capture.session import CaptureSession
from parcel_capture.models.polygon import CapturedPolygon
from parcel_capture.surfaces.memory import InMemoryMapSurface

# ---------------------------------------------------------------------------
# Session fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def surface() -> InMemoryMapSurface:
    """Return an empty headless map surface."""
    return InMemoryMapSurface()


@pytest.fixture()
def finished() -> list[CapturedPolygon]:
    """Collects every polygon emitted through ``on_finish``."""
    return []


@pytest.fixture()
def session(surface: InMemoryMapSurface, finished: list[CapturedPolygon]) -> CaptureSession:
    """Return an idle session drawing on ``surface``."""
    return CaptureSession(surface, on_finish=finished.append)


@pytest.fixture()
def collecting(session: CaptureSession) -> CaptureSession:
    """Return a session already in collecting mode."""
    session.start_drawing()
    return session
