"""\
Example Output Validation Script

This script validates that the contour_overlay example produced reasonable
output.

Checks:
- PNG overlays exist and carry an alpha channel
- KML descriptors parse and contain a GroundOverlay with rotation 0
- KMZ archives hold exactly one KML and one PNG at the archive root

Usage:
  python examples/basic_overlay.py
  python examples/validate_output.py
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path

import matplotlib.image as mpimg

KML_NS = {"kml": "http://www.opengis.net/kml/2.2"}


def _check_png(path: Path) -> tuple[bool, str]:
    if not path.exists():
        return False, f"MISSING: {path}"
    image = mpimg.imread(path)
    if image.ndim != 3 or image.shape[2] != 4:
        return False, f"NO ALPHA: {path} (shape {image.shape})"
    return True, f"OK: {path} ({image.shape[1]}x{image.shape[0]} px)"


def _check_kml(path: Path) -> tuple[bool, str]:
    if not path.exists():
        return False, f"MISSING: {path}"
    root = ET.parse(path).getroot()
    rotation = root.find("kml:GroundOverlay/kml:LatLonBox/kml:rotation", KML_NS)
    if rotation is None or rotation.text != "0":
        return False, f"BAD LATLONBOX: {path}"
    return True, f"OK: {path}"


def _check_kmz(path: Path) -> tuple[bool, str]:
    if not path.exists():
        return False, f"MISSING: {path}"
    with zipfile.ZipFile(path) as archive:
        names = archive.namelist()
    suffixes = sorted(Path(n).suffix for n in names)
    if suffixes != [".kml", ".png"] or any("/" in n for n in names):
        return False, f"BAD ARCHIVE: {path} ({names})"
    return True, f"OK: {path} ({', '.join(names)})"


def main() -> int:
    root = Path(__file__).resolve().parents[1]
    output = root / "output"

    print("Validating contour_overlay example outputs")
    print("=" * 60)

    ok_all = True
    for base in ("basic_overlay", "tps_overlay"):
        print(f"\n{base}:")
        for check, suffix in ((_check_png, ".png"), (_check_kml, ".kml"), (_check_kmz, ".kmz")):
            ok, msg = check(output / f"{base}{suffix}")
            print(f"  {msg}")
            ok_all = ok_all and ok

    print("\nSummary:")
    if ok_all:
        print("  SUCCESS: All expected outputs look reasonable")
        return 0

    print("  FAIL: One or more outputs missing/invalid")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
