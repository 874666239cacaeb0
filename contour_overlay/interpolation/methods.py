"""
Scattered-data gridding strategies.

Each strategy turns a lat/lon/value sample set into a regular
``xarray.DataArray`` named ``value`` with dims ``("lon", "lat")``. The
lattice spans ``[min(lon), max(lon)] x [min(lat), max(lat)]`` with the
requested number of steps per axis.

Strategies are looked up by name through ``get_interpolator`` so the method
dispatch lives in a single place.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Tuple, Union

import numpy as np
import pandas as pd
import xarray as xr
from scipy.interpolate import LinearNDInterpolator, RBFInterpolator
from scipy.spatial import QhullError

from ..constants import MIN_GRID_RESOLUTION
from ..exceptions import ConfigurationError, InterpolationError, InvalidParameterError

logger = logging.getLogger("contour_overlay.interpolation.methods")


class InterpolationMethod(str, Enum):
    """Supported gridding methods."""

    TRIANGULATION = "triangulation"
    THIN_PLATE_SPLINE = "thin-plate-spline"


# Historical names kept as aliases.
METHOD_ALIASES = {
    "akima": InterpolationMethod.TRIANGULATION,
    "linear": InterpolationMethod.TRIANGULATION,
    "tps": InterpolationMethod.THIN_PLATE_SPLINE,
    "thin_plate_spline": InterpolationMethod.THIN_PLATE_SPLINE,
}


def _grid_axes(samples: pd.DataFrame, resolution: int) -> Tuple[np.ndarray, np.ndarray]:
    """Evenly spaced lon and lat axes over the sample extent."""
    if isinstance(resolution, bool) or not isinstance(resolution, (int, np.integer)):
        raise InvalidParameterError(f"Grid resolution must be an integer, got {resolution!r}")
    if resolution < MIN_GRID_RESOLUTION:
        raise InvalidParameterError(
            f"Grid resolution must be >= {MIN_GRID_RESOLUTION}, got {resolution}"
        )
    lon_axis = np.linspace(samples["lon"].min(), samples["lon"].max(), int(resolution))
    lat_axis = np.linspace(samples["lat"].min(), samples["lat"].max(), int(resolution))
    return lon_axis, lat_axis


def _to_field(values: np.ndarray, lon_axis: np.ndarray, lat_axis: np.ndarray, method: str) -> xr.DataArray:
    return xr.DataArray(
        values,
        coords={"lon": lon_axis, "lat": lat_axis},
        dims=("lon", "lat"),
        name="value",
        attrs={"interpolation_method": method},
    )


class Interpolator:
    """Base class for gridding strategies."""

    method: InterpolationMethod

    def interpolate(self, samples: pd.DataFrame, resolution: int) -> xr.DataArray:
        """Grid ``samples`` onto a ``resolution`` x ``resolution`` lattice."""
        raise NotImplementedError


class TriangulationInterpolator(Interpolator):
    """
    Linear barycentric interpolation over a Delaunay triangulation.

    Lattice nodes outside the convex hull of the samples are NaN; nothing
    is extrapolated.
    """

    method = InterpolationMethod.TRIANGULATION

    def interpolate(self, samples: pd.DataFrame, resolution: int) -> xr.DataArray:
        lon_axis, lat_axis = _grid_axes(samples, resolution)
        points = samples[["lon", "lat"]].to_numpy()

        try:
            interpolator = LinearNDInterpolator(
                points, samples["value"].to_numpy(), fill_value=np.nan
            )
        except QhullError as e:
            raise InterpolationError(
                f"Cannot triangulate {len(samples)} samples (degenerate geometry?): {e}"
            ) from e

        lon_grid, lat_grid = np.meshgrid(lon_axis, lat_axis, indexing="ij")
        values = interpolator(lon_grid, lat_grid)

        inside = int(np.count_nonzero(~np.isnan(values)))
        logger.debug(
            f"Triangulation grid {resolution}x{resolution}: "
            f"{inside} of {values.size} nodes inside the sample hull"
        )
        return _to_field(values, lon_axis, lat_axis, self.method.value)


class ThinPlateSplineInterpolator(Interpolator):
    """
    Thin-plate spline surface with a linear trend, fit on (lat, lon).

    The fitted surface is evaluated at every lattice node, so values are
    extrapolated beyond the sample hull.

    Args:
        smoothing: Spline smoothing parameter; 0 passes through every sample
    """

    method = InterpolationMethod.THIN_PLATE_SPLINE

    def __init__(self, smoothing: float = 0.0):
        if smoothing < 0:
            raise InvalidParameterError("Spline smoothing must be non-negative")
        self.smoothing = float(smoothing)

    def interpolate(self, samples: pd.DataFrame, resolution: int) -> xr.DataArray:
        lon_axis, lat_axis = _grid_axes(samples, resolution)
        predictors = samples[["lat", "lon"]].to_numpy()

        try:
            surface = RBFInterpolator(
                predictors,
                samples["value"].to_numpy(),
                kernel="thin_plate_spline",
                degree=1,
                smoothing=self.smoothing,
            )
        except (ValueError, np.linalg.LinAlgError) as e:
            raise InterpolationError(
                f"Cannot fit thin-plate spline to {len(samples)} samples: {e}"
            ) from e

        lon_grid, lat_grid = np.meshgrid(lon_axis, lat_axis, indexing="ij")
        nodes = np.column_stack([lat_grid.ravel(), lon_grid.ravel()])
        values = surface(nodes).reshape(lon_grid.shape)

        logger.debug(
            f"Thin-plate spline grid {resolution}x{resolution} "
            f"(smoothing={self.smoothing})"
        )
        return _to_field(values, lon_axis, lat_axis, self.method.value)


# Factories take the spline smoothing; methods without one ignore it.
_REGISTRY: Dict[InterpolationMethod, Callable[[float], Interpolator]] = {
    InterpolationMethod.TRIANGULATION: lambda smoothing: TriangulationInterpolator(),
    InterpolationMethod.THIN_PLATE_SPLINE: lambda smoothing: ThinPlateSplineInterpolator(smoothing=smoothing),
}


def resolve_method(method: Union[str, InterpolationMethod]) -> InterpolationMethod:
    """
    Map a method selector to an ``InterpolationMethod``.

    Raises:
        ConfigurationError: If the method is not recognized
    """
    if isinstance(method, InterpolationMethod):
        return method

    key = str(method).strip().lower()
    try:
        return InterpolationMethod(key)
    except ValueError:
        pass
    if key in METHOD_ALIASES:
        return METHOD_ALIASES[key]

    available = ", ".join(m.value for m in InterpolationMethod)
    raise ConfigurationError(
        f"Unknown interpolation method '{method}'. Available methods: {available}"
    )


def get_interpolator(
    method: Union[str, InterpolationMethod],
    tps_smoothing: float = 0.0,
) -> Interpolator:
    """
    Build the gridding strategy for ``method``.

    Args:
        method: Method name, alias, or InterpolationMethod
        tps_smoothing: Smoothing used by the thin-plate spline

    Returns:
        Interpolator instance

    Raises:
        ConfigurationError: If the method is not recognized

    Example:
        >>> interpolator = get_interpolator("tps")
        >>> field = interpolator.interpolate(samples, 50)
    """
    return _REGISTRY[resolve_method(method)](tps_smoothing)
