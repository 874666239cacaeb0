"""
Configuration management for the contour_overlay package.

This module provides the single configuration value object threaded through
the overlay pipeline: interpolation options, contour styling, image export
size, bounding-box buffer and output naming.
"""

import json
import yaml
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .constants import (
    DEFAULT_ALPHA,
    DEFAULT_BUFFER_PERCENT,
    DEFAULT_CONTOUR_BREAKS,
    DEFAULT_DPI,
    DEFAULT_GRID_RESOLUTION,
    DEFAULT_HEIGHT,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_OVERLAY_DESCRIPTION,
    DEFAULT_OVERLAY_NAME,
    DEFAULT_WIDTH,
    MIN_GRID_RESOLUTION,
)
from .exceptions import InvalidParameterError


@dataclass
class OverlayConfig:
    """Configuration for contour overlay generation.

    Attributes:
        output_name: Base name (optionally with directories) for the
            ``.png``, ``.kml`` and ``.kmz`` artifacts.
        contour_breaks: Number of equal-width bands, or an explicit
            increasing sequence of break values.
        fill_colors: Band fill colors (any Matplotlib color spec). ``None``
            samples the viridis palette, one color per band.
        alpha: Opacity of the filled bands in [0, 1].
        title: Optional display title. Never written to the overlay image.
        buffer_percent: Padding added to each side of the bounding box, as a
            percentage of that axis' span.
        include_legend: Whether the exported image carries a band legend.
        create_kmz: Whether to bundle image and KML into a KMZ archive.
        interpolate: Whether sparse samples are gridded before contouring.
        interp_grid_res: Grid steps per axis when interpolating.
        interp_method: ``"triangulation"`` or ``"thin-plate-spline"``.
        tps_smoothing: Smoothing parameter of the thin-plate spline
            (0 interpolates the samples exactly).
        width: Width of the exported image in inches.
        height: Height of the exported image in inches.
        dpi: Resolution of the exported image (pixels per inch).
        overlay_name: ``<name>`` of the KML GroundOverlay.
        overlay_description: ``<description>`` of the KML GroundOverlay.
    """

    output_name: str = DEFAULT_OUTPUT_NAME
    contour_breaks: Union[int, List[float]] = DEFAULT_CONTOUR_BREAKS
    fill_colors: Optional[List[str]] = None
    alpha: float = DEFAULT_ALPHA
    title: Optional[str] = None
    buffer_percent: float = DEFAULT_BUFFER_PERCENT
    include_legend: bool = False
    create_kmz: bool = True
    interpolate: bool = True
    interp_grid_res: int = DEFAULT_GRID_RESOLUTION
    interp_method: str = "triangulation"
    tps_smoothing: float = 0.0
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    dpi: int = DEFAULT_DPI
    overlay_name: str = DEFAULT_OVERLAY_NAME
    overlay_description: str = DEFAULT_OVERLAY_DESCRIPTION

    def __post_init__(self):
        """Normalize sequence options to plain lists."""
        if isinstance(self.contour_breaks, (tuple, Sequence)) and not isinstance(
            self.contour_breaks, str
        ):
            self.contour_breaks = [float(b) for b in self.contour_breaks]
        if self.fill_colors is not None and not isinstance(self.fill_colors, str):
            self.fill_colors = list(self.fill_colors)

    @classmethod
    def option_names(cls) -> List[str]:
        """Names of all configurable options."""
        return [f.name for f in fields(cls)]

    @classmethod
    def load_from_file(cls, path: Path) -> "OverlayConfig":
        """Load configuration from a YAML or JSON file.

        Args:
            path: Path to configuration file (.yaml, .yml, or .json).

        Returns:
            OverlayConfig instance with loaded settings.

        Raises:
            InvalidParameterError: If file format is not supported, the file
                cannot be parsed, or it names unknown options.
            FileNotFoundError: If file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                if path.suffix in ['.yaml', '.yml']:
                    data = yaml.safe_load(f) or {}
                elif path.suffix == '.json':
                    data = json.load(f)
                else:
                    raise InvalidParameterError(
                        f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json"
                    )
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                raise InvalidParameterError(f"Cannot parse configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise InvalidParameterError(
                f"Configuration file {path} must contain a mapping of options"
            )

        unknown = sorted(set(data) - set(cls.option_names()))
        if unknown:
            raise InvalidParameterError(
                f"Unknown configuration option(s) in {path}: {', '.join(unknown)}"
            )

        return cls(**data)

    def save_to_file(self, path: Path) -> None:
        """Save configuration to a YAML or JSON file.

        Args:
            path: Path where configuration should be saved.

        Raises:
            InvalidParameterError: If file format is not supported.
        """
        path = Path(path)
        if path.suffix not in ['.yaml', '.yml', '.json']:
            raise InvalidParameterError(
                f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json"
            )
        path.parent.mkdir(parents=True, exist_ok=True)

        data = asdict(self)

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix in ['.yaml', '.yml']:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(data, f, indent=2)

    def validate(self) -> bool:
        """Validate configuration parameters.

        The interpolation method name is resolved later, when gridding is
        actually attempted.

        Returns:
            True if configuration is valid.

        Raises:
            InvalidParameterError: If any configuration parameter is invalid.
        """
        if not isinstance(self.output_name, str) or not self.output_name:
            raise InvalidParameterError("output_name must be a non-empty string")

        if not (0.0 <= float(self.alpha) <= 1.0):
            raise InvalidParameterError("alpha must be in the range [0.0, 1.0]")

        if self.buffer_percent < 0:
            raise InvalidParameterError("buffer_percent must be non-negative")

        if self.dpi <= 0:
            raise InvalidParameterError("dpi must be positive")

        if self.width <= 0 or self.height <= 0:
            raise InvalidParameterError("Image dimensions must be positive")

        if self.interpolate and (
            not isinstance(self.interp_grid_res, int)
            or self.interp_grid_res < MIN_GRID_RESOLUTION
        ):
            raise InvalidParameterError(
                f"interp_grid_res must be an integer >= {MIN_GRID_RESOLUTION}"
            )

        if self.tps_smoothing < 0:
            raise InvalidParameterError("tps_smoothing must be non-negative")

        if isinstance(self.contour_breaks, bool):
            raise InvalidParameterError("contour_breaks must be an integer or a list of numbers")
        if isinstance(self.contour_breaks, int) and self.contour_breaks < 1:
            raise InvalidParameterError("contour_breaks must be >= 1")

        return True


def get_default_config() -> OverlayConfig:
    """Get an OverlayConfig instance with default settings."""
    return OverlayConfig()
