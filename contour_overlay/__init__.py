"""
contour_overlay - Turn sparse lat/lon/value samples into Google Earth overlays.

This package grids irregular point samples (Delaunay triangulation or thin
plate spline), renders filled contour bands, and exports them as a
transparent PNG with a KML GroundOverlay descriptor, optionally bundled
into a KMZ.

Quick Start:
    >>> import pandas as pd
    >>> from contour_overlay import create_overlay
    >>>
    >>> data = pd.read_csv("my_data.csv")  # lat, lon, value columns
    >>> result = create_overlay(data, output_name="my_contour_overlay")
    >>> result.archive_path
    'my_contour_overlay.kmz'

Advanced Usage:
    >>> from contour_overlay import OverlayConfig, create_contour_plot
    >>> from contour_overlay import save_contour_for_overlay, create_contour_kml
    >>>
    >>> config = OverlayConfig(interp_method="thin-plate-spline", buffer_percent=5)
    >>> result = create_overlay(data, config, output_name="tps_overlay")
    >>>
    >>> # Manual workflow
    >>> plot = create_contour_plot(data, contour_breaks=8, title="Ozone")
    >>> png = save_contour_for_overlay(plot, "ozone", include_legend=True)
    >>> kml = create_contour_kml(data, png, "ozone", buffer_percent=2)
"""

__version__ = "0.1.0"

# Initialize logging with default settings
from .logging_config import setup_logging
setup_logging()

# Core constants and configuration
from .constants import DENSITY_THRESHOLD, MIN_INTERPOLATION_SAMPLES
from .config import OverlayConfig

# Sample data
from .data import PointSample, make_example_data, validate_samples

# Interpolation
from .interpolation import InterpolationMethod, get_interpolator, prepare_plot_data

# Rendering components
from .rendering import ContourPlot, create_contour_plot, save_contour_for_overlay

# Geo descriptor and packaging
from .geo import GeoBounds, compute_bounds
from .kml import create_contour_kml, create_contour_kmz

# User-facing API
from .api import OverlayArtifactSet, create_overlay

# Exceptions
from .exceptions import (
    ContourOverlayError,
    SchemaError,
    ConfigurationError,
    InvalidParameterError,
    InterpolationError,
    OverlayWarning,
)

__all__ = [
    # Version info
    "__version__",

    # Constants and config
    "DENSITY_THRESHOLD",
    "MIN_INTERPOLATION_SAMPLES",
    "OverlayConfig",

    # Core components
    "PointSample",
    "make_example_data",
    "validate_samples",
    "InterpolationMethod",
    "get_interpolator",
    "prepare_plot_data",
    "ContourPlot",
    "create_contour_plot",
    "save_contour_for_overlay",
    "GeoBounds",
    "compute_bounds",
    "create_contour_kml",
    "create_contour_kmz",

    # User-facing API
    "OverlayArtifactSet",
    "create_overlay",

    # Exceptions
    "ContourOverlayError",
    "SchemaError",
    "ConfigurationError",
    "InvalidParameterError",
    "InterpolationError",
    "OverlayWarning",
]
