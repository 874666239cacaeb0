"""
Basic Overlay Example

This example demonstrates how to turn a sparse lat/lon/value sample set into
a Google Earth overlay using the contour_overlay package. It runs the
one-call workflow and then the same steps by hand with thin-plate-spline
interpolation.

Output: PNG, KML and KMZ files under ./output. Open the KMZ in Google Earth
Pro (File > Open) to see the contours draped over the map.
"""

import logging
from pathlib import Path

from contour_overlay import (
    ContourOverlayError,
    compute_bounds,
    create_contour_kml,
    create_contour_kmz,
    create_contour_plot,
    create_overlay,
    make_example_data,
    save_contour_for_overlay,
)

logger = logging.getLogger("contour_overlay.examples.basic_overlay")

OUTPUT_DIR = Path(__file__).resolve().parents[1] / "output"


def main() -> int:
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    data = make_example_data(100, seed=42)

    # One call: triangulation gridding, 10 viridis bands, KMZ bundle
    try:
        result = create_overlay(data, output_name=str(OUTPUT_DIR / "basic_overlay"))
    except ContourOverlayError as e:
        logger.error(f"Overlay creation failed: {e}")
        return 1

    print("Created:")
    for path in result.paths:
        print(f"  {path}")
    for warning in result.warnings:
        print(f"  warning: {warning.message}")

    # Step by step: thin-plate spline, explicit breaks, legend on the image
    base = str(OUTPUT_DIR / "tps_overlay")
    plot = create_contour_plot(
        data,
        contour_breaks=[0, 20, 40, 60, 80, 100],
        fill_colors=["#2c7bb6", "#abd9e9", "#ffffbf", "#fdae61", "#d7191c"],
        alpha=0.6,
        title="Example values (thin-plate spline)",
        interp_method="thin-plate-spline",
        interp_grid_res=150,
    )
    plot.fig.savefig(str(OUTPUT_DIR / "tps_preview.png"), dpi=100, bbox_inches="tight")

    bounds = compute_bounds(data, buffer_percent=5)
    png = save_contour_for_overlay(plot, base, width=8, height=8, dpi=150,
                                   include_legend=True, bounds=bounds)
    kml = create_contour_kml(data, png, base, buffer_percent=5,
                             name="Example values", description="Thin-plate spline contours")
    kmz = create_contour_kmz(kml, png, base)
    plot.close()

    print(f"  {png}\n  {kml}\n  {kmz}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
