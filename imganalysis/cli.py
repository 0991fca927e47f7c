"""Command-line image analysis: texture homogeneity (IDM) and largest-object diameter."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from imganalysis.loader import ImageError, convert_to_grayscale, load_image, resize_image
from imganalysis.morphology import (
    DiameterResult,
    binarize_image_otsu,
    calculate_max_diameter,
    find_contours,
    find_largest_contour,
    visualize_results,
)
from imganalysis.texture import TextureAnalyzer

log = logging.getLogger(__name__)

RULE = "=" * 60
THIN_RULE = "-" * 60


@dataclass
class AnalysisResults:
    image_path: str
    idm_value: float = 0.0
    diameter_result: DiameterResult = field(default_factory=DiameterResult)
    texture_interpretation: str = ""
    size_interpretation: str = ""
    visualization: np.ndarray | None = field(default=None, repr=False, compare=False)


def interpret_idm(idm: float) -> str:
    if idm >= 0.8:
        return "Very homogeneous texture"
    if idm >= 0.6:
        return "Moderately homogeneous texture"
    if idm >= 0.4:
        return "Heterogeneous texture with variations"
    if idm >= 0.2:
        return "Highly heterogeneous texture"
    return "Very complex, chaotic texture"


def interpret_size(diameter: float, area: float) -> str:
    if diameter < 50:
        size = "small size"
    elif diameter < 150:
        size = "medium size"
    else:
        size = "large size"
    return f"Object {size} (diameter: {int(diameter)} pixels)"


def format_results(results: AnalysisResults) -> str:
    d = results.diameter_result
    lines = [
        "",
        RULE,
        "           IMAGE ANALYSIS RESULTS",
        RULE,
        f"File: {results.image_path}",
        THIN_RULE,
        "TEXTURE ANALYSIS (IDM):",
        f"   IDM value: {results.idm_value:.6f}",
        f"   Interpretation: {results.texture_interpretation}",
        "",
        "MORPHOLOGICAL ANALYSIS:",
        f"   Maximum diameter: {d.max_diameter:.2f} pixels",
        f"   Object area: {d.area:.1f} pixels\u00b2",
        f"   Perimeter: {d.perimeter:.1f} pixels",
        f"   Circularity: {d.circularity:.3f}",
        f"   Interpretation: {results.size_interpretation}",
        "",
        "DIAMETER POINTS:",
        f"   Point 1: ({d.point1[0]:.1f}, {d.point1[1]:.1f})",
        f"   Point 2: ({d.point2[0]:.1f}, {d.point2[1]:.1f})",
        RULE,
    ]
    return "\n".join(lines)


def save_results_to_file(results: AnalysisResults, filename: str | Path) -> None:
    """Write the results as KEY=value lines."""
    d = results.diameter_result
    entries = [
        ("IMAGE_PATH", results.image_path),
        ("IDM_VALUE", f"{results.idm_value:.6f}"),
        ("IDM_INTERPRETATION", results.texture_interpretation),
        ("MAX_DIAMETER", f"{d.max_diameter:.2f}"),
        ("OBJECT_AREA", f"{d.area:.1f}"),
        ("PERIMETER", f"{d.perimeter:.1f}"),
        ("CIRCULARITY", f"{d.circularity:.3f}"),
        ("SIZE_INTERPRETATION", results.size_interpretation),
        ("DIAMETER_POINT1_X", f"{d.point1[0]:.3f}"),
        ("DIAMETER_POINT1_Y", f"{d.point1[1]:.3f}"),
        ("DIAMETER_POINT2_X", f"{d.point2[0]:.3f}"),
        ("DIAMETER_POINT2_Y", f"{d.point2[1]:.3f}"),
    ]
    with open(filename, "w", encoding="utf-8") as handle:
        handle.writelines(f"{key}={value}\n" for key, value in entries)
    log.info("Results saved to: %s", filename)


def analyze_image(image_path: str | Path) -> AnalysisResults:
    """Load an image and run texture and morphological analysis on it."""
    results = AnalysisResults(image_path=str(image_path))
    log.info("Starting image analysis: %s", image_path)

    gray = convert_to_grayscale(load_image(image_path))
    resized = resize_image(gray, 512)

    log.info("Texture analysis...")
    results.idm_value = TextureAnalyzer().analyze_multi_directional(resized)
    results.texture_interpretation = interpret_idm(results.idm_value)

    log.info("Morphological analysis...")
    contours = find_contours(binarize_image_otsu(resized))
    if not contours:
        log.info("No objects found in image")
        results.size_interpretation = "No objects detected"
        return results

    contour = contours[find_largest_contour(contours)]
    try:
        results.diameter_result = calculate_max_diameter(contour)
    except ValueError:
        results.diameter_result = DiameterResult(contour_points=len(contour))
    d = results.diameter_result
    results.size_interpretation = interpret_size(d.max_diameter, d.area)
    results.visualization = visualize_results(resized, contour, d)
    return results


def result_filename(image_path: str | Path, directory: str | Path = "../results") -> Path:
    """Path of the results file: ``result_<file name without extension>.txt``."""
    text = str(image_path)
    base = text[max(text.rfind("/"), text.rfind("\\")) + 1:]
    stem = base.rpartition(".")[0] if "." in base else base
    return Path(directory) / f"result_{stem}.txt"


def _ask(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        return ""


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="IDM (Inverse Difference Moment) and maximum diameter image analysis."
    )
    parser.add_argument("image", nargs="?")
    parser.add_argument("--results-dir", default="../results")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    print(RULE)
    print("              IMAGE ANALYSIS                               ")
    print("     IDM (Inverse Difference Moment) + Maximum Diameter    ")
    print(RULE)

    if args.image:
        image_path = args.image
        print(f"\nImage path provided via command line: {image_path}")
    else:
        image_path = _ask("\nEnter image path: ").strip()

    try:
        results = analyze_image(image_path)
    except ImageError as exc:
        print(f"Failed to analyse image: {exc}")
        results = None

    if results and (results.idm_value > 0 or results.diameter_result.max_diameter > 0):
        print(format_results(results))
        choice = _ask("\nSave results to file? (y/n): ").strip()[:1]
        if choice in ("y", "Y"):
            filename = result_filename(image_path, args.results_dir)
            try:
                save_results_to_file(results, filename)
            except OSError:
                print(f"Error creating results file: {filename}")
            else:
                print(f"Results saved to: {filename}")
    else:
        print("\nAnalysis failed. Check image path or file validity.")

    print("\nProgram completed.")
    return 0