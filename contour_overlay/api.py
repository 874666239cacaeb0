"""
Main API module for the contour_overlay package.

This module provides the user-facing ``create_overlay`` function that runs
the complete workflow in a single call: validate and grid the samples,
render filled contours, export the transparent PNG, write the KML
GroundOverlay, and optionally bundle both into a KMZ.

Example:
    >>> from contour_overlay import create_overlay, make_example_data
    >>>
    >>> result = create_overlay(
    ...     make_example_data(50, seed=0),
    ...     output_name="output/ozone",
    ...     interp_method="thin-plate-spline",
    ... )
    >>> result.archive_path
    'output/ozone.kmz'
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .config import OverlayConfig
from .exceptions import InvalidParameterError, OverlayWarning
from .data.samples import validate_samples
from .geo import GeoBounds, compute_bounds
from .kml import create_contour_kml, create_contour_kmz
from .rendering import ContourPlot, create_contour_plot, save_contour_for_overlay

logger = logging.getLogger(__name__)


@dataclass
class OverlayArtifactSet:
    """Files produced by ``create_overlay``.

    Attributes:
        image_path: Transparent PNG overlay
        descriptor_path: KML GroundOverlay referencing the image
        archive_path: KMZ bundle, or None when archiving was not requested
        plot: The rendered ContourPlot (display figure already closed)
        bounds: LatLonBox written to the KML
        warnings: Soft failures encountered along the way
    """

    image_path: str
    descriptor_path: str
    archive_path: Optional[str] = None
    plot: Optional[ContourPlot] = None
    bounds: Optional[GeoBounds] = None
    warnings: List[OverlayWarning] = field(default_factory=list)

    @property
    def paths(self) -> List[str]:
        """All written artifact paths in creation order."""
        paths = [self.image_path, self.descriptor_path]
        if self.archive_path is not None:
            paths.append(self.archive_path)
        return paths


def _resolve_config(config: Optional[OverlayConfig], options: dict) -> OverlayConfig:
    if config is None:
        config = OverlayConfig()
        logger.debug("Using default configuration")

    unknown = sorted(set(options) - set(OverlayConfig.option_names()))
    if unknown:
        raise InvalidParameterError(
            f"Unknown option(s): {', '.join(unknown)}. "
            f"Available options: {', '.join(OverlayConfig.option_names())}"
        )

    if options:
        config = replace(config, **options)

    config.validate()
    return config


def create_overlay(
    data,
    config: Optional[OverlayConfig] = None,
    **options,
) -> OverlayArtifactSet:
    """
    Create a Google Earth overlay from lat/lon/value data.

    Stages run in a fixed order: contour rendering, PNG export, KML
    descriptor, then the optional KMZ archive. The KML bounds are always
    computed from the original samples, never from the interpolated grid.

    Args:
        data: Sample set with lat, lon and value columns
        config: Optional OverlayConfig; defaults are used when None
        **options: Per-call overrides of any OverlayConfig field
                   (e.g. output_name="overlay1", create_kmz=False)

    Returns:
        OverlayArtifactSet with the written paths, the plot and warnings

    Raises:
        SchemaError: If required columns are missing
        ConfigurationError: If the interpolation method is unknown or KMZ
                            creation is unavailable
        InvalidParameterError: If an option is invalid
        InterpolationError: If the samples cannot be gridded

    Example:
        >>> result = create_overlay(samples, output_name="overlay1")
        >>> result.paths
        ['overlay1.png', 'overlay1.kml', 'overlay1.kmz']
    """
    config = _resolve_config(config, options)
    samples = validate_samples(data)

    logger.info(
        f"Creating overlay '{config.output_name}' from {len(samples)} samples "
        f"(interpolate={config.interpolate}, method={config.interp_method})"
    )

    # Step 1: Render contours
    plot = create_contour_plot(
        samples,
        fill_colors=config.fill_colors,
        contour_breaks=config.contour_breaks,
        alpha=config.alpha,
        title=config.title,
        interpolate=config.interpolate,
        interp_grid_res=config.interp_grid_res,
        interp_method=config.interp_method,
        tps_smoothing=config.tps_smoothing,
    )

    try:
        # Bounds of the original samples frame both the image and the KML
        bounds = compute_bounds(samples, buffer_percent=config.buffer_percent)

        # Step 2: Save PNG
        png_file = save_contour_for_overlay(
            plot,
            filename=config.output_name,
            width=config.width,
            height=config.height,
            dpi=config.dpi,
            include_legend=config.include_legend,
            bounds=bounds,
        )
    finally:
        # Close the display figure so batch runs do not accumulate pyplot figures
        plot.close()

    # Step 3: Write KML
    kml_file = create_contour_kml(
        samples,
        png_filename=png_file,
        output_filename=config.output_name,
        buffer_percent=config.buffer_percent,
        name=config.overlay_name,
        description=config.overlay_description,
    )

    result = OverlayArtifactSet(
        image_path=png_file,
        descriptor_path=kml_file,
        plot=plot,
        bounds=bounds,
        warnings=list(plot.warnings),
    )

    # Step 4: Bundle KMZ
    if config.create_kmz:
        result.archive_path = create_contour_kmz(
            kml_filename=kml_file,
            png_filename=png_file,
            output_filename=config.output_name,
        )

    for warning in result.warnings:
        logger.debug(f"Overlay warning: {warning}")
    logger.info(f"Overlay complete: {', '.join(result.paths)}")

    return result
