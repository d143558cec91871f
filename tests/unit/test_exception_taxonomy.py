"""Tests for the unified exception taxonomy.

Validates:
- CaptureError hierarchy and structured attributes
- Category classification (validation, contract, permanent)
- ``to_error_dict()`` produces stable payload keys
- All component exceptions are CaptureError subclasses
"""

from __future__ import annotations

from typing import ClassVar

import pytest

from parcel_capture.core.config import ConfigValidationError
from parcel_capture.core.exceptions import (
    CaptureError,
    ContractError,
    ValidationError,
)
from parcel_capture.geometry.rings import RingError
from parcel_capture.models.layers import StyleValidationError
from parcel_capture.models.polygon import PolygonPayloadError
from parcel_capture.surfaces.base import MapSurfaceError, UnknownLayerError

ERROR_DICT_KEYS = {"category", "code", "stage", "message"}


class TestCaptureErrorBase:
    """CaptureError base class behaviour."""

    def test_default_attributes(self) -> None:
        err = CaptureError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert str(err) == "boom"

    def test_custom_attributes(self) -> None:
        err = CaptureError("fail", stage="surface", code="LAYER_GONE")
        assert err.stage == "surface"
        assert err.code == "LAYER_GONE"

    def test_kwargs_override_class_defaults(self) -> None:
        err = RingError("bad", code="CUSTOM")
        assert err.code == "CUSTOM"
        assert err.stage == "geometry"

    def test_error_dict_keys(self) -> None:
        assert set(CaptureError("x").to_error_dict()) == ERROR_DICT_KEYS


class TestCategories:
    """Category is derived from the concrete class."""

    CASES: ClassVar[list[tuple[type[CaptureError], str]]] = [
        (ValidationError, "validation"),
        (ContractError, "contract"),
        (CaptureError, "permanent"),
    ]

    @pytest.mark.parametrize(("cls", "category"), CASES)
    def test_category(self, cls: type[CaptureError], category: str) -> None:
        err = cls("x")
        assert err.category == category
        assert err.to_error_dict()["category"] == category

    def test_surface_and_config_errors_are_permanent(self) -> None:
        assert MapSurfaceError("memory", "x").category == "permanent"
        assert ConfigValidationError("CAPTURE_MAP_ZOOM", 30, "x").category == "permanent"


class TestComponentExceptions:
    """Every component exception sits in the taxonomy."""

    def test_ring_error(self) -> None:
        assert issubclass(RingError, ValidationError)

    def test_style_error(self) -> None:
        assert issubclass(StyleValidationError, ValidationError)

    def test_payload_error(self) -> None:
        assert issubclass(PolygonPayloadError, ContractError)

    def test_config_error(self) -> None:
        assert issubclass(ConfigValidationError, CaptureError)

    def test_surface_errors(self) -> None:
        assert issubclass(MapSurfaceError, CaptureError)
        assert issubclass(UnknownLayerError, MapSurfaceError)

    def test_surface_error_dict(self) -> None:
        data = UnknownLayerError("memory", "Unknown layer id: 'marker-7'").to_error_dict()
        assert data == {
            "category": "permanent",
            "code": "MAP_LAYER_UNKNOWN",
            "stage": "surface",
            "message": "Unknown layer id: 'marker-7'",
        }
