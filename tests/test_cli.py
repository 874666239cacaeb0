import zipfile

import pytest

from contour_overlay.cli import build_parser, main, parse_levels
from contour_overlay.config import OverlayConfig
from contour_overlay.data import make_example_data


@pytest.fixture
def samples_csv(tmp_path):
    path = tmp_path / "samples.csv"
    make_example_data(30, seed=11).to_csv(path, index=False)
    return path


FAST_ARGS = ["--width", "2", "--height", "2", "--dpi", "20", "--grid-res", "15"]


def test_create(tmp_path, samples_csv, capsys):
    base = tmp_path / "cli_overlay"

    code = main(["create", str(samples_csv), "--output", str(base), "-q", *FAST_ARGS])

    assert code == 0
    assert (tmp_path / "cli_overlay.png").is_file()
    assert (tmp_path / "cli_overlay.kml").is_file()
    with zipfile.ZipFile(tmp_path / "cli_overlay.kmz") as archive:
        assert len(archive.namelist()) == 2
    out = capsys.readouterr().out
    assert "KMZ: " in out


def test_create_no_kmz_with_levels(tmp_path, samples_csv):
    base = tmp_path / "levels"

    code = main([
        "create", str(samples_csv), "--output", str(base), "-q", "--no-kmz",
        "--levels", "0,25,50,75,100", "--colors", "navy,teal,gold,crimson",
        "--method", "tps", *FAST_ARGS,
    ])

    assert code == 0
    assert (tmp_path / "levels.kml").is_file()
    assert not (tmp_path / "levels.kmz").exists()


def test_create_missing_columns(tmp_path, capsys):
    path = tmp_path / "bad.csv"
    path.write_text("latitude,longitude,value\n1,2,3\n")

    code = main(["create", str(path), "--output", str(tmp_path / "x"), "-q"])

    assert code == 1
    assert "lat, lon" in capsys.readouterr().err


def test_create_missing_input(tmp_path):
    assert main(["create", str(tmp_path / "missing.csv"), "-q"]) == 1


def test_create_uses_config_file(tmp_path, samples_csv):
    config_path = tmp_path / "overlay.yaml"
    OverlayConfig(
        output_name=str(tmp_path / "configured"), create_kmz=False,
        width=2.0, height=2.0, dpi=20, interp_grid_res=10,
    ).save_to_file(config_path)

    code = main(["create", str(samples_csv), "--config", str(config_path), "-q"])

    assert code == 0
    assert (tmp_path / "configured.png").is_file()
    assert not (tmp_path / "configured.kmz").exists()


def test_init_config(tmp_path):
    path = tmp_path / "default.json"
    assert main(["init-config", str(path), "-q"]) == 0
    assert OverlayConfig.load_from_file(path) == OverlayConfig()


def test_breaks_and_levels_are_exclusive(samples_csv):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["create", str(samples_csv), "--breaks", "5", "--levels", "1,2"])


def test_parse_levels():
    assert parse_levels("0, 2.5,10") == [0.0, 2.5, 10.0]


@pytest.mark.parametrize(
    "name,content",
    [
        ("text.csv", "lat,lon,value\n30,-120,1.5\n31,-119,n/a?\n"),
        ("empty.csv", ""),
    ],
)
def test_create_unreadable_input(tmp_path, capsys, name, content):
    path = tmp_path / name
    path.write_text(content)

    code = main(["create", str(path), "--output", str(tmp_path / "x"), "-q"])

    assert code == 1
    assert capsys.readouterr().err.startswith("Error")


def test_create_malformed_config(tmp_path, samples_csv, capsys):
    config_path = tmp_path / "broken.yaml"
    config_path.write_text("alpha: [0.4\n")

    code = main(["create", str(samples_csv), "--config", str(config_path), "-q"])

    assert code == 1
    assert "broken.yaml" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["-v", "--log-file", "run.log", "create", "in.csv"],
        ["create", "in.csv", "-v", "--log-file", "run.log"],
    ],
)
def test_logging_flags_before_or_after_subcommand(argv):
    args = build_parser().parse_args(argv)

    assert args.verbose is True
    assert args.quiet is False
    assert args.log_file == "run.log"
