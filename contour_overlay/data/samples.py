"""
Sample-set validation and coercion.

A sample set is a ``pandas.DataFrame`` with ``lat``, ``lon`` and ``value``
columns. Mappings of columns and sequences of records are accepted for
convenience and converted on the way in.
"""

import logging
from typing import Any, NamedTuple, Optional

import numpy as np
import pandas as pd

from ..constants import REQUIRED_COLUMNS
from ..exceptions import InvalidParameterError, SchemaError

logger = logging.getLogger("contour_overlay.data.samples")


class PointSample(NamedTuple):
    """One observation at a geographic location."""

    lat: float
    lon: float
    value: float


def _as_frame(data: Any) -> pd.DataFrame:
    if isinstance(data, pd.DataFrame):
        return data
    if data is None:
        raise InvalidParameterError("data cannot be None")
    if isinstance(data, dict):
        return pd.DataFrame(data)
    rows = list(data)
    if rows and isinstance(rows[0], tuple) and hasattr(rows[0], "_asdict"):
        rows = [row._asdict() for row in rows]
    return pd.DataFrame(rows)


def validate_samples(data: Any) -> pd.DataFrame:
    """
    Coerce ``data`` to a sample DataFrame and check its schema.

    Args:
        data: DataFrame, mapping of column -> values, or a sequence of
              ``PointSample``/dict records

    Returns:
        DataFrame with (at least) float columns lat, lon, value

    Raises:
        SchemaError: If any required column is missing (all are reported)
        InvalidParameterError: If the sample set is empty or a required
                               column holds non-numeric entries

    Example:
        >>> samples = validate_samples([PointSample(30.0, -120.0, 4.2)])
        >>> list(samples.columns)
        ['lat', 'lon', 'value']
    """
    frame = _as_frame(data)

    missing = [col for col in REQUIRED_COLUMNS if col not in frame.columns]
    if missing:
        logger.error(f"Sample set is missing columns: {', '.join(missing)}")
        raise SchemaError(missing)

    if len(frame) == 0:
        raise InvalidParameterError("Sample set is empty")

    frame = frame.copy()
    for col in REQUIRED_COLUMNS:
        try:
            frame[col] = pd.to_numeric(frame[col], errors="raise").astype(float)
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(f"Column '{col}' must be numeric: {e}") from e

    logger.debug(f"Validated sample set: {len(frame)} rows")
    return frame


def drop_incomplete(samples: pd.DataFrame) -> pd.DataFrame:
    """Return only the rows with finite lat, lon and value."""
    complete = samples.dropna(subset=list(REQUIRED_COLUMNS))
    dropped = len(samples) - len(complete)
    if dropped:
        logger.debug(f"Dropped {dropped} incomplete sample row(s)")
    return complete


def make_example_data(n: int = 100, seed: Optional[int] = None) -> pd.DataFrame:
    """
    Generate a random sample set over a 5 x 5 degree box in California.

    Args:
        n: Number of samples
        seed: Seed for the random generator (None for nondeterministic)

    Returns:
        DataFrame with lat in [30, 35], lon in [-120, -115] and
        value in [0, 100]
    """
    rng = np.random.default_rng(seed)
    return pd.DataFrame({
        "lat": rng.uniform(30.0, 35.0, n),
        "lon": rng.uniform(-120.0, -115.0, n),
        "value": rng.uniform(0.0, 100.0, n),
    })
