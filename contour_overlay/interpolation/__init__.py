"""
Interpolation of sparse samples onto regular grids for contour_overlay.

Two strategies are available behind one interface:

- ``TriangulationInterpolator``: linear interpolation over a Delaunay
  triangulation, restricted to the convex hull of the samples
- ``ThinPlateSplineInterpolator``: a smooth thin-plate spline surface,
  evaluated everywhere on the grid

``prepare_plot_data`` decides whether gridding happens at all.

Example:
    >>> from contour_overlay.interpolation import prepare_plot_data
    >>> plot_data = prepare_plot_data(samples, interp_method="tps", interp_grid_res=50)
    >>> plot_data.points.head()
"""

from .methods import (
    InterpolationMethod,
    Interpolator,
    ThinPlateSplineInterpolator,
    TriangulationInterpolator,
    get_interpolator,
    resolve_method,
)
from .gridding import INSUFFICIENT_SAMPLES, PlotData, flatten_field, prepare_plot_data

__all__ = [
    "InterpolationMethod",
    "Interpolator",
    "ThinPlateSplineInterpolator",
    "TriangulationInterpolator",
    "get_interpolator",
    "resolve_method",
    "INSUFFICIENT_SAMPLES",
    "PlotData",
    "flatten_field",
    "prepare_plot_data",
]
