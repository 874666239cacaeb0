"""
Geographic bounding boxes for ground overlays.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .data.samples import validate_samples
from .exceptions import InvalidParameterError

logger = logging.getLogger("contour_overlay.geo")


@dataclass(frozen=True)
class GeoBounds:
    """Bounding box in decimal degrees."""

    west: float
    east: float
    south: float
    north: float

    @property
    def lon_span(self) -> float:
        return self.east - self.west

    @property
    def lat_span(self) -> float:
        return self.north - self.south

    def buffered(self, buffer_percent: float) -> "GeoBounds":
        """
        Expand each axis symmetrically by a percentage of its span.

        A 5 degree span with ``buffer_percent=10`` gains 0.5 degrees on both
        sides. Zero returns the bounds unchanged.

        Raises:
            InvalidParameterError: If buffer_percent is negative
        """
        if buffer_percent < 0:
            raise InvalidParameterError(
                f"buffer_percent must be non-negative, got {buffer_percent}"
            )
        if buffer_percent == 0:
            return self

        buffer_lon = self.lon_span * buffer_percent / 100
        buffer_lat = self.lat_span * buffer_percent / 100
        return GeoBounds(
            west=self.west - buffer_lon,
            east=self.east + buffer_lon,
            south=self.south - buffer_lat,
            north=self.north + buffer_lat,
        )

    def as_extent(self):
        """[west, east, south, north]"""
        return [self.west, self.east, self.south, self.north]


def compute_bounds(data, buffer_percent: float = 0.0) -> GeoBounds:
    """
    Bounding box of a sample set, optionally buffered.

    Missing coordinates are ignored. A ground overlay needs an area, so
    samples sharing a single longitude or latitude are rejected.

    Args:
        data: Sample set with lat and lon columns
        buffer_percent: Padding per side as a percentage of each span

    Returns:
        GeoBounds of the samples

    Raises:
        InvalidParameterError: If the coordinates are all missing, span zero
                               degrees on an axis, or buffer_percent is negative

    Example:
        >>> compute_bounds(samples, buffer_percent=10).as_extent()
        [-120.5, -114.5, 29.5, 35.5]
    """
    samples = validate_samples(data)
    lons = samples["lon"].to_numpy()
    lats = samples["lat"].to_numpy()
    if np.all(np.isnan(lons)) or np.all(np.isnan(lats)):
        raise InvalidParameterError("Sample set has no valid coordinates")

    bounds = GeoBounds(
        west=float(np.nanmin(lons)),
        east=float(np.nanmax(lons)),
        south=float(np.nanmin(lats)),
        north=float(np.nanmax(lats)),
    )
    if bounds.lon_span <= 0 or bounds.lat_span <= 0:
        raise InvalidParameterError(
            f"Samples span zero degrees (lon {bounds.west}..{bounds.east}, "
            f"lat {bounds.south}..{bounds.north}); cannot place a ground overlay"
        )
    bounds = bounds.buffered(buffer_percent)

    logger.debug(f"Overlay bounds (buffer {buffer_percent}%): {bounds.as_extent()}")
    return bounds
