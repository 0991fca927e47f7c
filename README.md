# imganalysis

Analyse a single image for two properties:

* **Texture**: the Inverse Difference Moment (IDM) of the gray-level
  co-occurrence matrix (GLCM), averaged over four pixel offsets: horizontal
  `(1, 0)`, vertical `(0, 1)`, diagonal `(1, 1)` and anti-diagonal `(1, -1)`.
  High values mean a homogeneous texture.
* **Shape**: after Otsu binarization, the outer borders of the outermost
  8-connected objects are traced, the one with the largest area is chosen, and
  its maximum diameter (largest distance between two border points), area,
  perimeter and circularity (`4π·area / perimeter²`) are measured.

Images are handled as numpy arrays: colour images are `(height, width, 3)`
`uint8` arrays in RGB order, grayscale images are `(height, width)` `uint8`
arrays.

## Installation

```
pip install .
```

## Command line

Analyse an image, giving its path as an argument (or type it when asked):

```
imganalysis path/to/picture.png
```

The image is converted to grayscale and shrunk so that its longer side is at
most 512 pixels. A report is printed with the IDM value and its
interpretation, the maximum diameter, area, perimeter, circularity, a size
interpretation and the two end points of the diameter. Progress messages are
logged to standard error.

You are then asked whether to save the results. Answering `y` or `Y` writes a
`KEY=value` text file named `result_<image name without extension>.txt` into
the directory given by `--results-dir` (default `../results`). That directory
is not created; if it does not exist an error message is printed instead.

Generate a set of synthetic 200x200 grayscale test images (uniform gray,
white circle, chessboard, square and random noise) as PNG files:

```
imganalysis-samples [directory]
```

The directory defaults to `test_images` and is created if needed.

## Library use

```python
from imganalysis.loader import load_image, convert_to_grayscale, resize_image
from imganalysis.texture import TextureAnalyzer
from imganalysis.morphology import (
    binarize_image_otsu, find_contours, find_largest_contour, calculate_max_diameter,
)

gray = resize_image(convert_to_grayscale(load_image("picture.png")), 512)

idm = TextureAnalyzer(256).analyze_multi_directional(gray)

contours = find_contours(binarize_image_otsu(gray))
largest = contours[find_largest_contour(contours)]
result = calculate_max_diameter(largest)
print(idm, result.max_diameter, result.circularity)
```

Modules:

* `imganalysis.loader`: `load_image`, `convert_to_grayscale`, `resize_image`,
  `validate_image`, `save_image` and `display_image` (a Tk window that closes
  on a key press). Problems are raised as `ImageError`, a `ValueError`.
* `imganalysis.texture`: `TextureAnalyzer` with `build_glcm`,
  `calculate_idm`, `normalized_glcm`, `stats` (a `GLCMStats` record),
  `format_stats`, `analyze_multi_directional` and `clear`.
* `imganalysis.morphology`: `binarize_image`, `otsu_threshold`,
  `binarize_image_otsu`, `find_contours`, `contour_area`, `arc_length`,
  `euclidean_distance`, `calculate_max_diameter` (returns a `DiameterResult`),
  `find_largest_contour` and `visualize_results` (an RGB copy of the image
  with the contour, diameter and labels drawn on it).
* `imganalysis.samples`: `uniform_gray`, `white_circle`, `chessboard`,
  `square`, `noise` and `create_test_images`.
* `imganalysis.cli`: `analyze_image`, which runs the whole pipeline and returns
  an `AnalysisResults` record, plus `interpret_idm`, `interpret_size`,
  `format_results`, `save_results_to_file` and `result_filename`.

`analyze_image` keeps the annotated image in `AnalysisResults.visualization`;
the command does not show or save it.

## Running the tests

```
pip install .[test]
pytest
```