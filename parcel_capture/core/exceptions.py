"""Unified exception taxonomy for the capture component.

Every domain exception inherits from ``CaptureError`` and carries
structured context fields so hosts can render or log failures
consistently.

Taxonomy categories
-------------------
- ``ValidationError``  — bad input handed to a public helper.
- ``ContractError``    — payload/schema drift (e.g. a GeoJSON object
  that is not a closed ``Polygon``).
- any other subclass — reported as ``permanent`` (surface and
  configuration failures).

Interactive drawing operations never raise for user input; the single
user-facing failure (finishing with too few points) is reported as a
``FinishRefused`` value instead.
"""

from __future__ import annotations


class CaptureError(Exception):
    """Base exception for all capture-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Component area where the error occurred
            (e.g. ``"config"``, ``"surface"``, ``"model"``).
        code: Machine-readable error code (e.g. ``"GEOJSON_INVALID"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(CaptureError):
    """Input validation failure in a public helper."""

    default_code = "VALIDATION_FAILED"


class ContractError(CaptureError):
    """Payload or schema drift between the component and its host."""

    default_code = "CONTRACT_VIOLATION"
