"""
Export a contour plot as a transparent, chrome-free overlay image.

The overlay is drawn on a fresh figure so the display figure of the
``ContourPlot`` is left untouched.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt

from ..constants import (
    DEFAULT_DPI,
    DEFAULT_HEIGHT,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_WIDTH,
    IMAGE_EXTENSION,
)
from ..geo import GeoBounds
from .contour import ContourPlot

logger = logging.getLogger("contour_overlay.rendering.overlay")


def build_overlay_figure(
    plot: ContourPlot,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    include_legend: bool = False,
    bounds: Optional[GeoBounds] = None,
):
    """
    Draw ``plot`` on a new figure with axes, title and background removed.

    Args:
        plot: Rendered ContourPlot
        width: Figure width in inches
        height: Figure height in inches
        include_legend: Keep a band legend inside the frame
        bounds: Pin the frame to these limits so the image edges match the
                LatLonBox written to the KML

    Returns:
        Tuple of (figure, axes)
    """
    fig = plt.figure(figsize=(width, height))
    fig.patch.set_alpha(0.0)

    # Axes fill the whole canvas; no margins.
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.set_axis_off()
    ax.patch.set_alpha(0.0)

    plot.draw(ax)

    if bounds is not None:
        ax.set_xlim(bounds.west, bounds.east)
        ax.set_ylim(bounds.south, bounds.north)
        # The viewer stretches the image onto the LatLonBox, so the frame
        # has to cover exactly the box.
        ax.set_aspect("auto")
    else:
        west, east, south, north = plot.extent
        if west < east:
            ax.set_xlim(west, east)
        if south < north:
            ax.set_ylim(south, north)
        ax.set_aspect("equal")

    if include_legend:
        plot.add_overlay_legend(ax)

    return fig, ax


def save_contour_for_overlay(
    plot: ContourPlot,
    filename: str = DEFAULT_OUTPUT_NAME,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    dpi: int = DEFAULT_DPI,
    include_legend: bool = False,
    bounds: Optional[GeoBounds] = None,
) -> str:
    """
    Save a contour plot as a transparent PNG for a ground overlay.

    The image is exactly ``width * dpi`` by ``height * dpi`` pixels.

    Args:
        plot: ContourPlot from create_contour_plot()
        filename: Base filename without extension
        width: Width of the output image in inches
        height: Height of the output image in inches
        dpi: Resolution of the output image
        include_legend: Whether to include the legend in the export
        bounds: Optional GeoBounds to pin the image frame to

    Returns:
        Path of the saved PNG

    Example:
        >>> png = save_contour_for_overlay(plot, "ozone", width=6, height=6, dpi=150)
        >>> png
        'ozone.png'
    """
    png_filename = f"{filename}{IMAGE_EXTENSION}"
    logger.info(
        f"Saving overlay image to {png_filename} "
        f"({int(round(width * dpi))}x{int(round(height * dpi))} px)"
    )

    parent = Path(png_filename).parent
    parent.mkdir(parents=True, exist_ok=True)

    fig, _ax = build_overlay_figure(
        plot,
        width=width,
        height=height,
        include_legend=include_legend,
        bounds=bounds,
    )
    try:
        fig.savefig(png_filename, dpi=dpi, transparent=True)
    finally:
        plt.close(fig)

    try:
        file_size = os.path.getsize(png_filename)
        logger.info(f"Overlay image saved: {png_filename} ({file_size / 1024:.1f} KB)")
    except OSError:
        logger.info(f"Overlay image saved: {png_filename}")

    return png_filename
