import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from contour_overlay.data import make_example_data  # noqa: E402


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def sparse_samples() -> pd.DataFrame:
    """40 random samples over the example box."""
    return make_example_data(40, seed=7)


@pytest.fixture
def box_samples() -> pd.DataFrame:
    """Samples whose extent is exactly lon [-120, -115], lat [30, 35]."""
    return pd.DataFrame({
        "lat": [30.0, 30.0, 35.0, 35.0, 32.5, 31.0, 34.0],
        "lon": [-120.0, -115.0, -120.0, -115.0, -117.5, -118.0, -116.0],
        "value": [1.0, 5.0, 9.0, 3.0, 7.0, 2.0, 8.0],
    })
