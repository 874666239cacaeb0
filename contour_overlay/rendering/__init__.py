"""
Rendering subsystem for contour_overlay.

This module turns point sets into filled contour bands with Matplotlib and
exports them as transparent overlay images.

Main Classes:
    ContourPlot: Filled contour bands plus the display figure

Main Functions:
    create_contour_plot: Validate, optionally grid, and contour a sample set
    save_contour_for_overlay: Export a chrome-free transparent PNG

Example:
    >>> from contour_overlay.rendering import create_contour_plot, save_contour_for_overlay
    >>>
    >>> plot = create_contour_plot(samples, contour_breaks=[0, 25, 50, 75, 100])
    >>> save_contour_for_overlay(plot, "ozone", width=6, height=6, dpi=150)
    'ozone.png'
"""

from .contour import (
    ContourPlot,
    create_contour_plot,
    default_fill_colors,
    resolve_levels,
)
from .overlay import build_overlay_figure, save_contour_for_overlay

__all__ = [
    "ContourPlot",
    "create_contour_plot",
    "default_fill_colors",
    "resolve_levels",
    "build_overlay_figure",
    "save_contour_for_overlay",
]
