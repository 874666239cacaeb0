"""
KML GroundOverlay descriptors and KMZ packaging.

The descriptor has a fixed schema: a GroundOverlay with a name, a
description, an image reference and a LatLonBox whose rotation is always 0.
"""

import logging
import os
import zipfile
from pathlib import Path
from xml.sax.saxutils import escape

from .constants import (
    ARCHIVE_EXTENSION,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_OVERLAY_DESCRIPTION,
    DEFAULT_OVERLAY_NAME,
    DESCRIPTOR_EXTENSION,
    IMAGE_EXTENSION,
    KML_NAMESPACE,
)
from .exceptions import ConfigurationError
from .geo import GeoBounds, compute_bounds

logger = logging.getLogger("contour_overlay.kml")

try:
    import zlib  # noqa: F401
    DEFLATE_AVAILABLE = True
except ImportError:
    DEFLATE_AVAILABLE = False
    logger.debug("zlib not available - KMZ archives cannot be written")


KML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="{namespace}">
  <GroundOverlay>
    <name>{name}</name>
    <description>{description}</description>
    <Icon>
      <href>{href}</href>
    </Icon>
    <LatLonBox>
      <north>{north!r}</north>
      <south>{south!r}</south>
      <east>{east!r}</east>
      <west>{west!r}</west>
      <rotation>0</rotation>
    </LatLonBox>
  </GroundOverlay>
</kml>
"""


def _image_href(png_filename: str, kml_filename: str) -> str:
    """Image path relative to the directory holding the KML."""
    kml_dir = os.path.dirname(kml_filename) or os.curdir
    href = os.path.relpath(png_filename, start=kml_dir)
    return Path(href).as_posix()


def render_kml(
    bounds: GeoBounds,
    href: str,
    name: str = DEFAULT_OVERLAY_NAME,
    description: str = DEFAULT_OVERLAY_DESCRIPTION,
) -> str:
    """Fill the GroundOverlay template."""
    return KML_TEMPLATE.format(
        namespace=KML_NAMESPACE,
        name=escape(name),
        description=escape(description),
        href=escape(href),
        north=float(bounds.north),
        south=float(bounds.south),
        east=float(bounds.east),
        west=float(bounds.west),
    )


def create_contour_kml(
    data,
    png_filename: str = f"{DEFAULT_OUTPUT_NAME}{IMAGE_EXTENSION}",
    output_filename: str = DEFAULT_OUTPUT_NAME,
    buffer_percent: float = 0.0,
    name: str = DEFAULT_OVERLAY_NAME,
    description: str = DEFAULT_OVERLAY_DESCRIPTION,
) -> str:
    """
    Create a KML file for the contour overlay.

    Bounds always come from ``data``; pass the original samples, not an
    interpolated grid.

    Args:
        data: The original sample set used to create the plot
        png_filename: The PNG the overlay displays
        output_filename: Base filename for the KML (without extension)
        buffer_percent: Padding around the data extent, percent of each span
        name: GroundOverlay name
        description: GroundOverlay description

    Returns:
        Path of the written KML

    Example:
        >>> create_contour_kml(samples, "ozone.png", "ozone", buffer_percent=2)
        'ozone.kml'
    """
    bounds = compute_bounds(data, buffer_percent=buffer_percent)

    kml_filename = f"{output_filename}{DESCRIPTOR_EXTENSION}"
    href = _image_href(png_filename, kml_filename)
    content = render_kml(bounds, href, name=name, description=description)

    Path(kml_filename).parent.mkdir(parents=True, exist_ok=True)
    with open(kml_filename, "w", encoding="utf-8") as f:
        f.write(content)

    logger.info(f"Wrote KML overlay: {kml_filename} (image {href})")
    return kml_filename


def create_contour_kmz(
    kml_filename: str,
    png_filename: str,
    output_filename: str = DEFAULT_OUTPUT_NAME,
) -> str:
    """
    Bundle the KML and PNG into a KMZ archive.

    Both files are stored under their base names at the archive root.

    Args:
        kml_filename: The KML file to include
        png_filename: The PNG file to include
        output_filename: Base filename for the KMZ (without extension)

    Returns:
        Path of the written KMZ

    Raises:
        ConfigurationError: If deflate compression is unavailable
        FileNotFoundError: If either input file is missing
    """
    if not DEFLATE_AVAILABLE:
        raise ConfigurationError(
            "zlib is required for KMZ creation but is not available in this Python build"
        )

    for path in (kml_filename, png_filename):
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Cannot create KMZ, file not found: {path}")

    kmz_filename = f"{output_filename}{ARCHIVE_EXTENSION}"
    Path(kmz_filename).parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(kmz_filename, "w", zipfile.ZIP_DEFLATED) as kmz:
        # The KML goes first; viewers open the first .kml entry.
        kmz.write(kml_filename, arcname=os.path.basename(kml_filename))
        kmz.write(png_filename, arcname=os.path.basename(png_filename))

    logger.info(f"Wrote KMZ overlay: {kmz_filename}")
    return kmz_filename
