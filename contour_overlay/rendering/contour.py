"""
Filled-contour rendering of lat/lon/value point sets.

This module provides ``create_contour_plot``, which validates and optionally
grids a sample set, resolves contour levels and band colors, and draws the
bands on an equal-aspect lon/lat axes. The returned ``ContourPlot`` keeps
everything needed to draw the same bands again on other axes, which is how
the overlay writer produces its chrome-free export.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import matplotlib.colors as mcolors
import matplotlib.patches as mpatches
import matplotlib.tri as mtri
import numpy as np
import pandas as pd

from ..constants import (
    DEFAULT_ALPHA,
    DEFAULT_CONTOUR_BREAKS,
    DEFAULT_GRID_RESOLUTION,
    DEFAULT_PALETTE,
    LEGEND_FONT_SIZE,
    LEGEND_LOCATION,
)
from ..exceptions import InvalidParameterError, OverlayWarning
from ..interpolation import InterpolationMethod, PlotData, prepare_plot_data

logger = logging.getLogger("contour_overlay.rendering.contour")

NO_CONTOURS = "no-contours"


def default_fill_colors(n_bands: int, palette: str = DEFAULT_PALETTE) -> List[str]:
    """Sample ``n_bands`` hex colors evenly across a Matplotlib colormap."""
    cmap = plt.get_cmap(palette)
    if n_bands <= 1:
        return [mcolors.to_hex(cmap(0.0))]
    return [mcolors.to_hex(cmap(x)) for x in np.linspace(0.0, 1.0, n_bands)]


def resolve_levels(
    values: np.ndarray,
    contour_breaks: Union[int, Sequence[float]],
) -> np.ndarray:
    """
    Turn a breaks specification into contour levels.

    Args:
        values: Values being contoured (NaN ignored)
        contour_breaks: Band count for equal-width bands over the value
                        range, or explicit increasing break values

    Returns:
        Array of n_bands + 1 increasing levels

    Raises:
        InvalidParameterError: If the specification is malformed
    """
    if isinstance(contour_breaks, bool):
        raise InvalidParameterError("contour_breaks must be an integer or a sequence of numbers")

    if isinstance(contour_breaks, (int, np.integer)):
        n_bands = int(contour_breaks)
        if n_bands < 1:
            raise InvalidParameterError(f"contour_breaks must be >= 1, got {n_bands}")
        finite = values[np.isfinite(values)]
        if finite.size == 0:
            raise InvalidParameterError("No finite values to contour")
        v_min, v_max = float(finite.min()), float(finite.max())
        if v_min == v_max:
            # Constant field: widen so a single band still has extent.
            v_min, v_max = v_min - 0.5, v_max + 0.5
        return np.linspace(v_min, v_max, n_bands + 1)

    try:
        levels = np.asarray([float(b) for b in contour_breaks])
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            f"contour_breaks must be an integer or a sequence of numbers: {e}"
        ) from e

    if levels.size < 2:
        raise InvalidParameterError("Explicit contour_breaks need at least two values")
    if np.any(np.diff(levels) <= 0):
        raise InvalidParameterError("Explicit contour_breaks must be strictly increasing")
    return levels


def _as_regular_grid(points: pd.DataFrame) -> Optional[Tuple[np.ndarray, np.ndarray, np.ma.MaskedArray]]:
    """Pivot points onto their lon/lat lattice when they form one.

    Returns (lons, lats, values[lat, lon]) or None for scattered points.
    """
    points = points.dropna(subset=["lon", "lat"])
    n_lon = points["lon"].nunique()
    n_lat = points["lat"].nunique()
    if n_lon < 2 or n_lat < 2 or len(points) < 4:
        return None
    if points.duplicated(subset=["lon", "lat"]).any():
        return None
    # Scattered samples have ~one point per distinct lon/lat, filling only
    # a tiny share of the lattice.
    if 2 * len(points) < n_lon * n_lat:
        return None

    table = points.pivot(index="lat", columns="lon", values="value").sort_index().sort_index(axis=1)
    values = np.ma.masked_invalid(table.to_numpy())
    return table.columns.to_numpy(), table.index.to_numpy(), values


class ContourPlot:
    """
    Filled contour bands over the lon/lat plane.

    Holds the plot data and styling, plus the display figure created by
    ``create_contour_plot``. ``draw`` renders the bands onto any axes.

    Attributes:
        points: DataFrame with lon, lat and value columns
        levels: Contour levels (n_bands + 1)
        colors: One fill color per band
        alpha: Band opacity
        title: Display title, or None
        plot_data: PlotData the points came from
        warnings: Soft failures from preparation and rendering
        fig: Display figure (None until ``show_on`` is called)
        ax: Display axes (None until ``show_on`` is called)
    """

    def __init__(
        self,
        plot_data: PlotData,
        levels: np.ndarray,
        colors: List[str],
        alpha: float = DEFAULT_ALPHA,
        title: Optional[str] = None,
    ):
        self.plot_data = plot_data
        self.points = plot_data.points
        self.levels = np.asarray(levels, dtype=float)
        self.colors = list(colors)
        self.alpha = float(alpha)
        self.title = title
        self.warnings: List[OverlayWarning] = list(plot_data.warnings)
        self.fig = None
        self.ax = None

        self._grid = _as_regular_grid(self.points)
        self._triangulation = None
        if self._grid is None:
            self._triangulation = self._triangulate()

    @property
    def n_bands(self) -> int:
        return len(self.levels) - 1

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(west, east, south, north) of the plotted points."""
        return (
            float(self.points["lon"].min()),
            float(self.points["lon"].max()),
            float(self.points["lat"].min()),
            float(self.points["lat"].max()),
        )

    def _triangulate(self) -> Optional[mtri.Triangulation]:
        points = self.points.dropna(subset=["lon", "lat", "value"])
        try:
            return mtri.Triangulation(points["lon"].to_numpy(), points["lat"].to_numpy())
        except (ValueError, RuntimeError) as e:
            message = f"Cannot contour {len(points)} scattered point(s): {e}"
            logger.warning(message)
            self.warnings.append(OverlayWarning(NO_CONTOURS, message))
            return None

    def draw(self, ax: plt.Axes) -> Any:
        """
        Draw the filled bands on ``ax``.

        Args:
            ax: Matplotlib axes in lon/lat data coordinates

        Returns:
            The ContourSet, or None when the points cannot be contoured
        """
        plot_kwargs = {
            "levels": self.levels,
            "colors": self.colors[:self.n_bands],
            "alpha": self.alpha,
            "antialiased": True,
        }

        if self._grid is not None:
            lons, lats, values = self._grid
            return ax.contourf(lons, lats, values, **plot_kwargs)

        if self._triangulation is None:
            return None

        values = self.points.dropna(subset=["lon", "lat", "value"])["value"].to_numpy()
        return ax.tricontourf(self._triangulation, values, **plot_kwargs)

    def legend_handles(self) -> List[mpatches.Patch]:
        """One patch per band, labelled with its value interval."""
        handles = []
        for lo, hi, color in zip(self.levels[:-1], self.levels[1:], self.colors):
            handles.append(mpatches.Patch(
                facecolor=color, alpha=self.alpha, label=f"({lo:.4g}, {hi:.4g}]"
            ))
        return handles

    def show_on(self, ax: plt.Axes) -> Any:
        """Draw the display version (labels, title, legend) on ``ax``."""
        self.ax = ax
        self.fig = ax.figure

        contour_set = self.draw(ax)

        west, east, south, north = self.extent
        if west < east:
            ax.set_xlim(west, east)
        if south < north:
            ax.set_ylim(south, north)
        # Equal degrees on both axes keeps the plot consistent with the LatLonBox.
        ax.set_aspect("equal")
        ax.set_xlabel("lon")
        ax.set_ylabel("lat")

        if self.title is not None:
            ax.set_title(self.title)

        ax.legend(
            handles=self.legend_handles(),
            title="value",
            loc="center left",
            bbox_to_anchor=(1.02, 0.5),
            fontsize=LEGEND_FONT_SIZE,
        )
        return contour_set

    def close(self) -> None:
        """Release the display figure. ``draw`` keeps working afterwards."""
        if self.fig is not None:
            plt.close(self.fig)
        self.fig = None
        self.ax = None

    def add_overlay_legend(self, ax: plt.Axes) -> Any:
        """Legend drawn inside the frame so it does not resize the image."""
        return ax.legend(
            handles=self.legend_handles(),
            loc=LEGEND_LOCATION,
            fontsize=LEGEND_FONT_SIZE,
            framealpha=0.6,
        )


def create_contour_plot(
    data,
    fill_colors: Optional[Sequence[str]] = None,
    contour_breaks: Union[int, Sequence[float]] = DEFAULT_CONTOUR_BREAKS,
    alpha: float = DEFAULT_ALPHA,
    title: Optional[str] = None,
    interpolate: bool = True,
    interp_grid_res: int = DEFAULT_GRID_RESOLUTION,
    interp_method: Union[str, InterpolationMethod] = InterpolationMethod.TRIANGULATION,
    tps_smoothing: float = 0.0,
) -> ContourPlot:
    """
    Create a filled contour plot from lat/lon/value data.

    Args:
        data: Sample set with lat, lon and value columns
        fill_colors: Band colors; default samples viridis once per band
        contour_breaks: Number of equal-width bands or explicit break values
        alpha: Band opacity in [0, 1]
        title: Optional display title (never exported to the overlay)
        interpolate: Grid sparse data before contouring
        interp_grid_res: Grid steps per axis when interpolating
        interp_method: "triangulation" or "thin-plate-spline"
        tps_smoothing: Thin-plate spline smoothing

    Returns:
        ContourPlot with an equal-aspect display figure

    Raises:
        SchemaError: If required columns are missing
        ConfigurationError: If the interpolation method is unknown
        InvalidParameterError: If styling options are invalid

    Example:
        >>> plot = create_contour_plot(samples, contour_breaks=8, title="Ozone")
        >>> plot.fig.savefig("preview.png")
    """
    if not (0.0 <= float(alpha) <= 1.0):
        raise InvalidParameterError(f"alpha must be in the range [0.0, 1.0], got {alpha}")
    if isinstance(fill_colors, str):
        raise InvalidParameterError("fill_colors must be a sequence of colors, not a string")

    plot_data = prepare_plot_data(
        data,
        interpolate=interpolate,
        interp_method=interp_method,
        interp_grid_res=interp_grid_res,
        tps_smoothing=tps_smoothing,
    )

    levels = resolve_levels(plot_data.points["value"].to_numpy(dtype=float), contour_breaks)
    n_bands = len(levels) - 1

    if fill_colors is None:
        colors = default_fill_colors(n_bands)
    else:
        colors = list(fill_colors)
        if len(colors) < n_bands:
            raise InvalidParameterError(
                f"{len(colors)} fill colors given for {n_bands} contour bands"
            )
        for color in colors:
            if not mcolors.is_color_like(color):
                raise InvalidParameterError(f"Invalid fill color: {color!r}")

    logger.info(
        f"Rendering {n_bands} contour bands from {len(plot_data.points)} points "
        f"({'gridded: ' + plot_data.method if plot_data.interpolated else 'raw samples'})"
    )

    plot = ContourPlot(plot_data, levels, colors, alpha=alpha, title=title)

    fig, ax = plt.subplots()
    plot.show_on(ax)

    logger.info("Contour plot rendering complete")
    return plot
