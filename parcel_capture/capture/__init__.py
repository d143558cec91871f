"""Interactive polygon capture."""

from parcel_capture.capture.session import CaptureSession

__all__ = ["CaptureSession"]
