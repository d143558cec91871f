"""Values the capture session hands back to its host.

- ``FinishRefused``: typed refusal returned by ``finish_drawing`` when
  the guard fails, so the host can render it as a toast, inline
  message or modal.
- ``CaptureSummary``: live read-out (point count, area) for the
  host's info panel and ``on_change`` listeners.
"""

from __future__ import annotations

from dataclasses import dataclass

from parcel_capture.core.constants import DrawingMode
from parcel_capture.utils.units import format_km2, m2_to_km2

INSUFFICIENT_POINTS = "INSUFFICIENT_POINTS"
NOT_COLLECTING = "NOT_COLLECTING"


@dataclass(frozen=True, slots=True)
class FinishRefused:
    """``finish_drawing`` did not transition the session.

    Attributes:
        code: ``INSUFFICIENT_POINTS`` or ``NOT_COLLECTING``.
        message: Human-readable reason for the host to display.
        points_required: Fewest points needed to finish.
        points_collected: Points in the sequence when finishing was refused.
        state: Session state when finishing was refused.
    """

    code: str
    message: str
    points_required: int
    points_collected: int
    state: DrawingMode

    @property
    def points_missing(self) -> int:
        return max(self.points_required - self.points_collected, 0)

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured payload with the same keys as ``CaptureError``."""
        return {
            "category": "validation",
            "code": self.code,
            "stage": "finish_drawing",
            "message": self.message,
            "points_required": self.points_required,
            "points_collected": self.points_collected,
            "state": self.state.value,
        }


@dataclass(frozen=True, slots=True)
class CaptureSummary:
    """Snapshot of a capture session for display.

    Attributes:
        state: Current drawing mode.
        point_count: Number of points in the sequence.
        area_m2: Current area estimate (``0`` below three points).
        can_finish: Whether ``finish_drawing`` would succeed now.
    """

    state: DrawingMode
    point_count: int
    area_m2: int
    can_finish: bool

    @property
    def area_km2(self) -> float:
        return m2_to_km2(self.area_m2)

    @property
    def area_km2_display(self) -> str:
        """Area in km² with four decimals, as shown in the info panel."""
        return format_km2(self.area_m2)

    def to_dict(self) -> dict[str, object]:
        return {
            "state": self.state.value,
            "point_count": self.point_count,
            "area_m2": self.area_m2,
            "area_km2": self.area_km2_display,
            "can_finish": self.can_finish,
        }
