"""
Constants and fixed parameters for the contour_overlay package.

This module defines the sample-set schema, interpolation dispatch thresholds,
default styling, and the KML/KMZ naming used throughout the package.
"""

# ============================================================================
# Sample Schema
# ============================================================================

REQUIRED_COLUMNS = ("lat", "lon", "value")

# ============================================================================
# Interpolation Dispatch
# ============================================================================

# Sample sets this large are considered dense and are contoured directly.
DENSITY_THRESHOLD = 200

# Fewest samples for which gridding is attempted.
MIN_INTERPOLATION_SAMPLES = 4

# Smallest usable grid (steps per axis).
MIN_GRID_RESOLUTION = 2

DEFAULT_GRID_RESOLUTION = 100

# ============================================================================
# Styling Defaults
# ============================================================================

DEFAULT_PALETTE = "viridis"
DEFAULT_CONTOUR_BREAKS = 10
DEFAULT_ALPHA = 0.7

LEGEND_FONT_SIZE = 8
LEGEND_LOCATION = "upper right"

# ============================================================================
# Image Export Defaults
# ============================================================================

DEFAULT_WIDTH = 10.0  # inches
DEFAULT_HEIGHT = 8.0  # inches
DEFAULT_DPI = 300

# ============================================================================
# Overlay Descriptor
# ============================================================================

DEFAULT_OUTPUT_NAME = "contour_overlay"
DEFAULT_BUFFER_PERCENT = 2.0

IMAGE_EXTENSION = ".png"
DESCRIPTOR_EXTENSION = ".kml"
ARCHIVE_EXTENSION = ".kmz"

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
DEFAULT_OVERLAY_NAME = "Contour Plot Overlay"
DEFAULT_OVERLAY_DESCRIPTION = "Created from contour data"
