import json

import pytest
import yaml

from contour_overlay.config import OverlayConfig, get_default_config
from contour_overlay.exceptions import InvalidParameterError


def test_defaults():
    config = get_default_config()
    assert config.output_name == "contour_overlay"
    assert config.contour_breaks == 10
    assert config.fill_colors is None
    assert config.alpha == 0.7
    assert config.buffer_percent == 2.0
    assert config.include_legend is False
    assert config.create_kmz is True
    assert config.interpolate is True
    assert config.interp_grid_res == 100
    assert config.interp_method == "triangulation"
    assert (config.width, config.height, config.dpi) == (10.0, 8.0, 300)
    assert config.validate()


def test_sequences_normalized_to_lists():
    config = OverlayConfig(contour_breaks=(0, 5, 10), fill_colors=("red", "blue"))
    assert config.contour_breaks == [0.0, 5.0, 10.0]
    assert config.fill_colors == ["red", "blue"]


@pytest.mark.parametrize("suffix", [".yaml", ".yml", ".json"])
def test_save_and_load(tmp_path, suffix):
    config = OverlayConfig(
        output_name="ozone", contour_breaks=[0, 50, 100], interp_method="tps", dpi=150
    )
    path = tmp_path / f"overlay{suffix}"

    config.save_to_file(path)

    assert OverlayConfig.load_from_file(path) == config


def test_load_partial_yaml(tmp_path):
    path = tmp_path / "partial.yaml"
    path.write_text(yaml.safe_dump({"alpha": 0.4, "create_kmz": False}))

    config = OverlayConfig.load_from_file(path)

    assert config.alpha == 0.4
    assert config.create_kmz is False
    assert config.output_name == "contour_overlay"


def test_load_unknown_option(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"alpha": 0.4, "colour": "red"}))
    with pytest.raises(InvalidParameterError, match="colour"):
        OverlayConfig.load_from_file(path)


def test_unsupported_format(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("alpha = 0.4")
    with pytest.raises(InvalidParameterError):
        OverlayConfig.load_from_file(path)
    with pytest.raises(InvalidParameterError):
        OverlayConfig().save_to_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        OverlayConfig.load_from_file(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "options",
    [
        {"output_name": ""},
        {"alpha": -0.5},
        {"buffer_percent": -1.0},
        {"dpi": 0},
        {"width": 0},
        {"interp_grid_res": 1},
        {"tps_smoothing": -1.0},
        {"contour_breaks": 0},
    ],
)
def test_validate_rejects(options):
    with pytest.raises(InvalidParameterError):
        OverlayConfig(**options).validate()


def test_grid_resolution_unchecked_without_interpolation():
    assert OverlayConfig(interpolate=False, interp_grid_res=0).validate()


@pytest.mark.parametrize(
    "name,content",
    [
        ("broken.yaml", "output_name: [unclosed\n"),
        ("broken.json", '{"alpha": 0.4,'),
        ("list.yaml", "- alpha\n- dpi\n"),
    ],
)
def test_unreadable_config_rejected(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)
    with pytest.raises(InvalidParameterError, match=name):
        OverlayConfig.load_from_file(path)
