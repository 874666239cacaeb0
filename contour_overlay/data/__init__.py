"""
Sample-set handling for contour_overlay.

This module validates lat/lon/value sample sets and provides a generator for
example data.

Example:
    >>> from contour_overlay.data import make_example_data, validate_samples
    >>> samples = validate_samples(make_example_data(50, seed=1))
"""

from .samples import PointSample, drop_incomplete, make_example_data, validate_samples

__all__ = ["PointSample", "drop_incomplete", "make_example_data", "validate_samples"]
