import xml.etree.ElementTree as ET
import zipfile

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from contour_overlay import OverlayConfig, create_overlay
from contour_overlay.exceptions import (
    ConfigurationError,
    InvalidParameterError,
    SchemaError,
)
from contour_overlay.geo import compute_bounds

NS = {"kml": "http://www.opengis.net/kml/2.2"}

# Small images keep the pipeline tests fast.
FAST = dict(width=2.0, height=2.0, dpi=20, interp_grid_res=20)


def _kml_bounds(path):
    box = ET.parse(path).getroot().find("kml:GroundOverlay/kml:LatLonBox", NS)
    return {child.tag.split("}")[1]: float(child.text) for child in box}


def test_artifact_names(tmp_path, monkeypatch, sparse_samples):
    monkeypatch.chdir(tmp_path)

    result = create_overlay(sparse_samples, output_name="overlay1", **FAST)

    assert result.image_path == "overlay1.png"
    assert result.descriptor_path == "overlay1.kml"
    assert result.archive_path == "overlay1.kmz"
    assert result.paths == ["overlay1.png", "overlay1.kml", "overlay1.kmz"]
    for name in result.paths:
        assert (tmp_path / name).is_file()

    with zipfile.ZipFile(tmp_path / "overlay1.kmz") as archive:
        assert sorted(archive.namelist()) == ["overlay1.kml", "overlay1.png"]

    href = ET.parse(tmp_path / "overlay1.kml").getroot().find(
        "kml:GroundOverlay/kml:Icon/kml:href", NS
    )
    assert href.text == "overlay1.png"


def test_descriptor_written_without_archive(tmp_path, sparse_samples):
    base = str(tmp_path / "overlay2")

    result = create_overlay(sparse_samples, output_name=base, create_kmz=False, **FAST)

    assert result.archive_path is None
    assert result.paths == [base + ".png", base + ".kml"]
    assert not (tmp_path / "overlay2.kmz").exists()


def test_bounds_come_from_original_samples(tmp_path, box_samples):
    result = create_overlay(
        box_samples,
        output_name=str(tmp_path / "tps"),
        interp_method="thin-plate-spline",
        interp_grid_res=7,
        buffer_percent=10,
        width=2.0, height=2.0, dpi=20,
    )

    assert result.plot.plot_data.interpolated
    assert result.bounds == compute_bounds(box_samples, buffer_percent=10)
    box = _kml_bounds(result.descriptor_path)
    assert box["west"] == pytest.approx(-120.5)
    assert box["east"] == pytest.approx(-114.5)
    assert box["south"] == pytest.approx(29.5)
    assert box["north"] == pytest.approx(35.5)
    assert box["rotation"] == 0.0


def test_triangulated_grid_does_not_shift_bounds(tmp_path, sparse_samples):
    result = create_overlay(
        sparse_samples, output_name=str(tmp_path / "tri"), buffer_percent=0,
        create_kmz=False, **FAST
    )

    box = _kml_bounds(result.descriptor_path)
    assert box["west"] == sparse_samples["lon"].min()
    assert box["east"] == sparse_samples["lon"].max()
    assert box["south"] == sparse_samples["lat"].min()
    assert box["north"] == sparse_samples["lat"].max()


def test_three_samples_complete_with_warning(tmp_path):
    data = pd.DataFrame({
        "lat": [30.0, 31.0, 30.5],
        "lon": [-120.0, -119.0, -118.0],
        "value": [1.0, 2.0, 3.0],
    })

    result = create_overlay(data, output_name=str(tmp_path / "few"), **FAST)

    assert [w.code for w in result.warnings] == ["insufficient-samples"]
    assert result.plot.plot_data.field is None
    assert (tmp_path / "few.kmz").is_file()


def test_unknown_method_fails_before_any_output(tmp_path, sparse_samples):
    with pytest.raises(ConfigurationError):
        create_overlay(sparse_samples, output_name=str(tmp_path / "bad"), interp_method="bogus")
    assert list(tmp_path.iterdir()) == []


def test_schema_violation(tmp_path):
    data = pd.DataFrame({"lat": [1.0, 2.0]})
    with pytest.raises(SchemaError) as excinfo:
        create_overlay(data, output_name=str(tmp_path / "x"))
    assert excinfo.value.missing == ["lon", "value"]


def test_config_object_and_overrides(tmp_path, sparse_samples):
    config = OverlayConfig(output_name=str(tmp_path / "from_config"), create_kmz=False, **FAST)

    result = create_overlay(sparse_samples, config, include_legend=True)

    assert result.image_path == str(tmp_path / "from_config.png")
    assert result.archive_path is None
    # The caller's config is not modified by per-call overrides
    assert config.include_legend is False


def test_unknown_option_rejected(sparse_samples):
    with pytest.raises(InvalidParameterError, match="colour"):
        create_overlay(sparse_samples, colour="red")


@pytest.mark.parametrize(
    "options",
    [{"interp_grid_res": 1}, {"buffer_percent": -1}, {"alpha": 2.0}, {"dpi": 0}],
)
def test_invalid_options_rejected(tmp_path, sparse_samples, options):
    with pytest.raises(InvalidParameterError):
        create_overlay(sparse_samples, output_name=str(tmp_path / "x"), **options)


def test_display_figures_are_closed(tmp_path, sparse_samples):
    for i in range(3):
        result = create_overlay(
            sparse_samples, output_name=str(tmp_path / f"batch{i}"), create_kmz=False, **FAST
        )
        assert result.plot.fig is None

    assert plt.get_fignums() == []


def test_single_longitude_rejected_without_open_figures(tmp_path):
    data = pd.DataFrame({
        "lat": [30.0, 31.0, 32.0],
        "lon": [-120.0, -120.0, -120.0],
        "value": [1.0, 2.0, 3.0],
    })

    with pytest.raises(InvalidParameterError, match="zero degrees"):
        create_overlay(data, output_name=str(tmp_path / "line"), interpolate=False, **FAST)

    assert plt.get_fignums() == []
    assert list(tmp_path.iterdir()) == []
