import matplotlib.image as mpimg
import numpy as np
import pandas as pd
import pytest

from contour_overlay.exceptions import ConfigurationError, InvalidParameterError
from contour_overlay.geo import GeoBounds
from contour_overlay.rendering import (
    ContourPlot,
    build_overlay_figure,
    create_contour_plot,
    default_fill_colors,
    resolve_levels,
    save_contour_for_overlay,
)
from contour_overlay.rendering.contour import NO_CONTOURS


def test_default_plot(sparse_samples):
    plot = create_contour_plot(sparse_samples, interp_grid_res=20)

    assert isinstance(plot, ContourPlot)
    assert plot.n_bands == 10
    assert plot.colors == default_fill_colors(10)
    assert plot.alpha == 0.7
    assert plot.plot_data.interpolated


def test_display_axes_keep_equal_aspect_and_title(sparse_samples):
    plot = create_contour_plot(sparse_samples, title="Ozone", interp_grid_res=20)

    assert plot.ax.get_aspect() == 1.0
    assert plot.ax.get_title() == "Ozone"


def test_default_palette_is_viridis():
    colors = default_fill_colors(10)
    assert len(colors) == 10
    assert colors[0] == "#440154"
    assert colors[-1] == "#fde725"


def test_equal_width_levels_span_values():
    levels = resolve_levels(np.array([0.0, 3.0, 10.0, np.nan]), 5)
    np.testing.assert_allclose(levels, [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])


def test_constant_values_still_give_one_band():
    levels = resolve_levels(np.array([4.0, 4.0]), 1)
    assert levels[0] < 4.0 < levels[-1]


def test_explicit_breaks(sparse_samples):
    plot = create_contour_plot(
        sparse_samples,
        contour_breaks=[0, 25, 50, 75, 100],
        fill_colors=["blue", "cyan", "yellow", "red"],
        interp_grid_res=20,
    )
    np.testing.assert_allclose(plot.levels, [0, 25, 50, 75, 100])
    assert plot.colors == ["blue", "cyan", "yellow", "red"]
    assert len(plot.legend_handles()) == 4
    assert plot.legend_handles()[0].get_label() == "(0, 25]"


@pytest.mark.parametrize("breaks", [[5.0], [0, 10, 5], 0, "ten", True])
def test_bad_breaks_rejected(sparse_samples, breaks):
    with pytest.raises(InvalidParameterError):
        create_contour_plot(sparse_samples, contour_breaks=breaks, interp_grid_res=10)


def test_too_few_colors_rejected(sparse_samples):
    with pytest.raises(InvalidParameterError, match="3 fill colors"):
        create_contour_plot(
            sparse_samples, fill_colors=["red", "green", "blue"], contour_breaks=5,
            interp_grid_res=10,
        )


def test_invalid_color_rejected(sparse_samples):
    with pytest.raises(InvalidParameterError):
        create_contour_plot(
            sparse_samples, fill_colors=["red", "not-a-color"], contour_breaks=2,
            interp_grid_res=10,
        )


@pytest.mark.parametrize("alpha", [-0.1, 1.5])
def test_alpha_out_of_range(sparse_samples, alpha):
    with pytest.raises(InvalidParameterError):
        create_contour_plot(sparse_samples, alpha=alpha)


def test_unknown_method_raises_before_rendering(sparse_samples):
    with pytest.raises(ConfigurationError):
        create_contour_plot(sparse_samples, interp_method="bogus")


def test_raw_scattered_samples_are_contoured(sparse_samples):
    plot = create_contour_plot(sparse_samples, interpolate=False)
    assert plot.fig is not None
    assert plot.warnings == []


def test_uncontourable_points_warn_instead_of_failing():
    data = pd.DataFrame({"lat": [30.0, 31.0], "lon": [-120.0, -119.0], "value": [1.0, 2.0]})

    plot = create_contour_plot(data)

    codes = [w.code for w in plot.warnings]
    assert "insufficient-samples" in codes
    assert NO_CONTOURS in codes


def test_overlay_figure_has_no_chrome(sparse_samples):
    plot = create_contour_plot(sparse_samples, title="Ozone", interp_grid_res=20)

    fig, ax = build_overlay_figure(plot, width=2, height=2)

    assert not ax.axison
    assert ax.get_title() == ""
    assert ax.get_legend() is None
    assert fig.patch.get_alpha() == 0.0
    # Display figure is untouched
    assert plot.ax.get_title() == "Ozone"


def test_overlay_legend_only_on_request(sparse_samples):
    plot = create_contour_plot(sparse_samples, interp_grid_res=20)
    _fig, ax = build_overlay_figure(plot, width=2, height=2, include_legend=True)
    assert ax.get_legend() is not None


def test_overlay_frame_pinned_to_bounds(sparse_samples):
    plot = create_contour_plot(sparse_samples, interp_grid_res=20)
    bounds = GeoBounds(west=-121.0, east=-114.0, south=29.0, north=36.0)

    _fig, ax = build_overlay_figure(plot, width=3, height=2, bounds=bounds)

    assert ax.get_xlim() == (-121.0, -114.0)
    assert ax.get_ylim() == (29.0, 36.0)


def test_saved_image_size_and_transparency(tmp_path, sparse_samples):
    plot = create_contour_plot(sparse_samples, interp_grid_res=20)
    bounds = GeoBounds(west=-125.0, east=-110.0, south=25.0, north=40.0)

    png = save_contour_for_overlay(
        plot, str(tmp_path / "overlay"), width=2, height=1.5, dpi=40, bounds=bounds
    )

    assert png == str(tmp_path / "overlay.png")
    image = mpimg.imread(png)
    assert image.shape == (60, 80, 4)
    # Corners lie outside the data, so they must be see-through
    assert image[0, 0, 3] == 0.0
    assert image[-1, -1, 3] == 0.0
    assert image[:, :, 3].max() > 0.0


def test_save_creates_parent_directories(tmp_path, sparse_samples):
    plot = create_contour_plot(sparse_samples, interp_grid_res=10)
    png = save_contour_for_overlay(plot, str(tmp_path / "a" / "b" / "ov"), width=1, height=1, dpi=20)
    assert (tmp_path / "a" / "b" / "ov.png").is_file()
    assert png.endswith("ov.png")
