"""
Decide whether and how a sample set is gridded before contouring.

``prepare_plot_data`` applies the dispatch policy (density threshold,
minimum sample count, method lookup) and returns the point set that the
contour renderer consumes together with any soft-failure warnings.
"""

import logging
from dataclasses import dataclass
from dataclasses import field as dc_field
from typing import List, Optional, Union

import pandas as pd
import xarray as xr

from ..constants import (
    DEFAULT_GRID_RESOLUTION,
    DENSITY_THRESHOLD,
    MIN_INTERPOLATION_SAMPLES,
)
from ..data.samples import drop_incomplete, validate_samples
from ..exceptions import OverlayWarning
from .methods import InterpolationMethod, get_interpolator

logger = logging.getLogger("contour_overlay.interpolation.gridding")

INSUFFICIENT_SAMPLES = "insufficient-samples"


@dataclass
class PlotData:
    """Point set handed to the renderer.

    Attributes:
        points: DataFrame with lon, lat and value columns
        field: Gridded field the points were flattened from, if any
        method: Name of the interpolation method used, if any
        warnings: Soft failures encountered while preparing the data
    """

    points: pd.DataFrame
    field: Optional[xr.DataArray] = None
    method: Optional[str] = None
    warnings: List[OverlayWarning] = dc_field(default_factory=list)

    @property
    def interpolated(self) -> bool:
        return self.field is not None


def flatten_field(gridded: xr.DataArray, dropna: bool = True) -> pd.DataFrame:
    """
    Flatten a gridded field to lon/lat/value rows.

    Longitude varies slowest: each longitude is repeated once per latitude.

    Args:
        gridded: DataArray with dims ("lon", "lat")
        dropna: Drop nodes without a value (outside the sample hull)

    Returns:
        DataFrame with columns lon, lat, value
    """
    points = (
        gridded.transpose("lon", "lat")
        .to_dataframe(name="value")
        .reset_index()[["lon", "lat", "value"]]
    )
    if dropna:
        points = points.dropna(subset=["value"]).reset_index(drop=True)
    return points


def prepare_plot_data(
    data,
    interpolate: bool = True,
    interp_method: Union[str, InterpolationMethod] = InterpolationMethod.TRIANGULATION,
    interp_grid_res: int = DEFAULT_GRID_RESOLUTION,
    tps_smoothing: float = 0.0,
) -> PlotData:
    """
    Validate samples and optionally grid them for contouring.

    Dense sample sets (at least ``DENSITY_THRESHOLD`` rows) and calls with
    ``interpolate=False`` are passed through unchanged. Fewer than
    ``MIN_INTERPOLATION_SAMPLES`` complete rows (no NaN in any column) fall
    back to the raw samples with a warning.

    Args:
        data: Sample set (see ``validate_samples``)
        interpolate: Whether sparse data should be gridded
        interp_method: Gridding method name or InterpolationMethod
        interp_grid_res: Grid steps per axis
        tps_smoothing: Smoothing for the thin-plate spline method

    Returns:
        PlotData with the points to contour

    Raises:
        SchemaError: If required columns are missing
        ConfigurationError: If the interpolation method is unknown
        InvalidParameterError: If the grid resolution is unusable
        InterpolationError: If the samples cannot be gridded
    """
    samples = validate_samples(data)
    n_samples = len(samples)
    raw = samples[["lon", "lat", "value"]].reset_index(drop=True)

    if not interpolate:
        logger.debug("Interpolation disabled, contouring raw samples")
        return PlotData(points=raw)

    if n_samples >= DENSITY_THRESHOLD:
        logger.info(
            f"{n_samples} samples >= density threshold {DENSITY_THRESHOLD}, "
            "contouring raw samples"
        )
        return PlotData(points=raw)

    complete = drop_incomplete(samples)
    if len(complete) < MIN_INTERPOLATION_SAMPLES:
        message = (
            f"Not enough data points for interpolation ({len(complete)} < "
            f"{MIN_INTERPOLATION_SAMPLES}). Using raw data."
        )
        logger.warning(message)
        return PlotData(
            points=raw,
            warnings=[OverlayWarning(INSUFFICIENT_SAMPLES, message)],
        )

    interpolator = get_interpolator(interp_method, tps_smoothing=tps_smoothing)

    logger.info(
        f"Interpolating {len(complete)} samples with {interpolator.method.value} "
        f"on a {interp_grid_res}x{interp_grid_res} grid"
    )
    gridded = interpolator.interpolate(complete, interp_grid_res)
    points = flatten_field(gridded, dropna=True)
    logger.debug(f"Gridded plot data: {len(points)} rows")

    return PlotData(points=points, field=gridded, method=interpolator.method.value)
