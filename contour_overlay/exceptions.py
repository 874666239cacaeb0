"""
Custom exceptions for the contour_overlay package.

This module defines exception classes for the hard failures of the overlay
pipeline (schema, configuration and parameter violations) plus the
``OverlayWarning`` record used to report soft failures back to callers.
"""

from dataclasses import dataclass
from typing import Iterable, List


class ContourOverlayError(Exception):
    """Base exception class for all contour_overlay errors."""
    pass


class SchemaError(ContourOverlayError):
    """
    Raised when a sample set is missing required fields.

    All missing field names are reported at once and are available on the
    ``missing`` attribute in canonical order.
    """

    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        super().__init__(
            "Data must contain columns: " + ", ".join(self.missing)
        )


class ConfigurationError(ContourOverlayError):
    """
    Raised for unusable pipeline configuration.

    This covers unrecognized interpolation methods and required runtime
    capabilities (such as deflate compression for KMZ archives) that are
    not available.
    """
    pass


class InvalidParameterError(ContourOverlayError):
    """
    Raised for invalid user inputs.

    This exception is used for parameter validation failures such as an
    out-of-range grid resolution, a negative buffer percentage, opacity
    outside [0, 1] or malformed contour breaks.
    """
    pass


class InterpolationError(ContourOverlayError):
    """
    Raised when the numerical backend cannot grid the sample set.

    Typical causes are degenerate sample geometry (all points collinear)
    or a singular spline system caused by duplicated locations.
    """
    pass


@dataclass(frozen=True)
class OverlayWarning:
    """A non-fatal condition that changed pipeline behavior."""

    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
