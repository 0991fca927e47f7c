from pathlib import Path

import numpy as np
import pytest

from imganalysis.cli import (
    AnalysisResults,
    analyze_image,
    format_results,
    interpret_idm,
    interpret_size,
    main,
    result_filename,
    save_results_to_file,
)
from imganalysis.loader import ImageError, save_image
from imganalysis.morphology import euclidean_distance
from imganalysis.samples import square, uniform_gray


@pytest.mark.parametrize(
    "idm, text",
    [
        (0.8, "Very homogeneous texture"),
        (0.6, "Moderately homogeneous texture"),
        (0.4, "Heterogeneous texture with variations"),
        (0.2, "Highly heterogeneous texture"),
        (0.1, "Very complex, chaotic texture"),
    ],
)
def test_interpret_idm(idm, text):
    assert interpret_idm(idm) == text


def test_interpret_size_categories():
    assert interpret_size(49.9, 0.0).startswith("Object small size")
    assert interpret_size(50, 0.0).startswith("Object medium size")
    assert interpret_size(150, 0.0).startswith("Object large size")
    assert interpret_size(49.9, 0.0).endswith("(diameter: 49 pixels)")


def test_result_filename():
    assert result_filename("a/b/photo.png", "out") == Path("out") / "result_photo.txt"
    assert result_filename("c:\\pics\\scan.v2.jpg", "out") == Path("out") / "result_scan.v2.txt"
    assert result_filename("noext", "out") == Path("out") / "result_noext.txt"


@pytest.fixture
def square_path(tmp_path):
    path = tmp_path / "square.png"
    save_image(square(), path)
    return path


def test_analyze_square(square_path):
    results = analyze_image(square_path)
    d = results.diameter_result
    assert {d.point1, d.point2} == {(50.0, 50.0), (150.0, 150.0)}
    assert d.max_diameter == pytest.approx(euclidean_distance(d.point1, d.point2))
    assert results.texture_interpretation == interpret_idm(results.idm_value)
    assert results.size_interpretation == interpret_size(d.max_diameter, d.area)
    assert results.visualization.shape == (200, 200, 3)


def test_analyze_uniform_image_is_homogeneous(tmp_path):
    path = tmp_path / "uniform.png"
    save_image(uniform_gray(), path)
    results = analyze_image(path)
    assert results.idm_value == pytest.approx(1.0)
    assert results.texture_interpretation == "Very homogeneous texture"


def test_analyze_black_image_has_no_objects(tmp_path):
    path = tmp_path / "black.png"
    save_image(np.zeros((50, 50), dtype=np.uint8), path)
    results = analyze_image(path)
    assert results.size_interpretation == "No objects detected"
    assert results.diameter_result.max_diameter == 0.0


def test_analyze_missing_file_raises(tmp_path):
    with pytest.raises(ImageError):
        analyze_image(tmp_path / "missing.png")


def test_save_results_round_trip(tmp_path, square_path):
    results = analyze_image(square_path)
    out = tmp_path / "result.txt"
    save_results_to_file(results, out)
    pairs = dict(line.split("=", 1) for line in out.read_text(encoding="utf-8").splitlines())
    assert pairs["IMAGE_PATH"] == str(square_path)
    assert float(pairs["IDM_VALUE"]) == pytest.approx(results.idm_value, abs=1e-6)
    assert float(pairs["MAX_DIAMETER"]) == pytest.approx(
        results.diameter_result.max_diameter, abs=0.01
    )
    assert pairs["SIZE_INTERPRETATION"] == results.size_interpretation
    assert float(pairs["DIAMETER_POINT1_X"]) == results.diameter_result.point1[0]


def test_format_results_contents():
    results = AnalysisResults(image_path="img.png", idm_value=0.5, texture_interpretation="x")
    text = format_results(results)
    assert "File: img.png" in text
    assert "IDM value: 0.500000" in text
    assert "Maximum diameter: 0.00 pixels" in text


def test_main_saves_on_yes(tmp_path, square_path, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt="": "y")
    assert main([str(square_path), "--results-dir", str(tmp_path)]) == 0
    assert (tmp_path / "result_square.txt").exists()
    assert "IMAGE ANALYSIS RESULTS" in capsys.readouterr().out


def test_main_reports_failure(tmp_path, capsys):
    assert main([str(tmp_path / "missing.png"), "--results-dir", str(tmp_path)]) == 0
    assert "Analysis failed" in capsys.readouterr().out