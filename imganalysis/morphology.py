"""Binarisation, outer contour extraction and shape measures of the largest object."""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from imganalysis.loader import ImageError

log = logging.getLogger(__name__)

Point = tuple[int, int]
Contour = list[Point]

# Neighbour offsets (row, col), counter-clockwise starting east.
_DIRS = ((0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1), (1, 0), (1, 1))
_DIR_INDEX = {d: k for k, d in enumerate(_DIRS)}
_FOUR = ((0, 1), (-1, 0), (0, -1), (1, 0))

_FLT_EPSILON = 1.1920929e-07


@dataclass
class DiameterResult:
    max_diameter: float = 0.0
    point1: tuple[float, float] = (0.0, 0.0)
    point2: tuple[float, float] = (0.0, 0.0)
    area: float = 0.0
    perimeter: float = 0.0
    contour_points: int = 0
    circularity: float = 0.0
    extra: dict = field(default_factory=dict, repr=False)


def _require_gray(image: np.ndarray, message: str) -> None:
    if image is None or image.size == 0 or image.ndim != 2 or image.dtype != np.uint8:
        raise ImageError(message)


def binarize_image(gray_image: np.ndarray, threshold: int = 128) -> np.ndarray:
    """Pixels strictly above the threshold become 255, the rest 0."""
    _require_gray(gray_image, "Image must be grayscale")
    binary = np.where(gray_image > threshold, 255, 0).astype(np.uint8)
    log.info("Binarization completed with threshold: %d", threshold)
    return binary


def otsu_threshold(gray_image: np.ndarray) -> int:
    """Threshold that maximises between-class variance of the histogram."""
    _require_gray(gray_image, "Image must be grayscale")
    hist = np.bincount(gray_image.ravel(), minlength=256) / gray_image.size
    mu = float(np.dot(np.arange(256), hist))
    q1 = mu1 = max_sigma = 0.0
    best = 0
    for level, p in enumerate(hist):
        p = float(p)
        q1_prev = q1
        q1 += p
        q2 = 1.0 - q1
        if min(q1, q2) < _FLT_EPSILON or max(q1, q2) > 1.0 - _FLT_EPSILON:
            continue
        mu1 = (mu1 * q1_prev + level * p) / q1
        mu2 = (mu - q1 * mu1) / q2
        sigma = q1 * q2 * (mu1 - mu2) ** 2
        if sigma > max_sigma:
            max_sigma = sigma
            best = level
    return best


def binarize_image_otsu(gray_image: np.ndarray) -> np.ndarray:
    threshold = otsu_threshold(gray_image)
    log.info("Otsu binarization: threshold = %.1f", threshold)
    return np.where(gray_image > threshold, 255, 0).astype(np.uint8)


def _flood(mask: np.ndarray, seeds, offsets, labels: np.ndarray, label: int) -> None:
    rows, cols = mask.shape
    queue = deque(seeds)
    for r, c in seeds:
        labels[r, c] = label
    while queue:
        r, c = queue.popleft()
        for dr, dc in offsets:
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and mask[nr, nc] and labels[nr, nc] == 0:
                labels[nr, nc] = label
                queue.append((nr, nc))


def _trace(fg: np.ndarray, start: Point) -> Contour:
    """Follow the outer border of the component containing ``start`` (padded coords)."""
    sr, sc = start
    first = None
    for k in range(8):
        dr, dc = _DIRS[(4 - k) % 8]
        if fg[sr + dr, sc + dc]:
            first = (sr + dr, sc + dc)
            break
    if first is None:
        return [(sc - 1, sr - 1)]
    points: Contour = []
    prev, cur = first, start
    while True:
        back = _DIR_INDEX[(prev[0] - cur[0], prev[1] - cur[1])]
        for k in range(1, 9):
            dr, dc = _DIRS[(back + k) % 8]
            nxt = (cur[0] + dr, cur[1] + dc)
            if fg[nxt]:
                break
        points.append((cur[1] - 1, cur[0] - 1))
        if nxt == start and cur == first:
            return points
        prev, cur = cur, nxt


def find_contours(binary_image: np.ndarray) -> list[Contour]:
    """Outer borders of the outermost 8-connected objects, as lists of (x, y)."""
    _require_gray(binary_image, "Image must be binary")
    fg = np.pad(binary_image != 0, 1)
    outside = np.zeros(fg.shape, dtype=np.int32)
    _flood(~fg, [(0, 0)], _FOUR, outside, 1)
    out_mask = outside > 0
    near_outside = np.zeros_like(fg)
    near_outside[1:, :] |= out_mask[:-1, :]
    near_outside[:-1, :] |= out_mask[1:, :]
    near_outside[:, 1:] |= out_mask[:, :-1]
    near_outside[:, :-1] |= out_mask[:, 1:]

    labels = np.zeros(fg.shape, dtype=np.int32)
    starts = []
    for r, c in np.argwhere(fg):
        if labels[r, c] == 0:
            label = len(starts) + 1
            _flood(fg, [(int(r), int(c))], _DIRS, labels, label)
            starts.append((int(r), int(c)))
    external = set(np.unique(labels[near_outside & fg]).tolist())
    contours = [
        _trace(fg, start) for label, start in enumerate(starts, 1) if label in external
    ]
    log.info("Found contours: %d", len(contours))
    for index, contour in enumerate(contours):
        log.info("Contour %d: points = %d, area = %.1f", index, len(contour), contour_area(contour))
    return contours


def contour_area(contour) -> float:
    """Unsigned polygon area by the shoelace formula."""
    if len(contour) < 3:
        return 0.0
    pts = np.asarray(contour, dtype=np.float64)
    x, y = pts[:, 0], pts[:, 1]
    return abs(float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))) / 2.0


def arc_length(contour, closed: bool = True) -> float:
    if len(contour) < 2:
        return 0.0
    pts = np.asarray(contour, dtype=np.float64)
    if closed:
        pts = np.vstack([pts, pts[:1]])
    return float(np.hypot(*np.diff(pts, axis=0).T).sum())


def euclidean_distance(p1, p2) -> float:
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def calculate_max_diameter(contour) -> DiameterResult:
    """Largest distance between two contour points, with area, perimeter and circularity."""
    if len(contour) < 2:
        raise ValueError("Contour has less than 2 points")
    pts = np.asarray(contour, dtype=np.float64)
    diff = pts[:, None, :] - pts[None, :, :]
    dist = np.hypot(diff[..., 0], diff[..., 1])
    dist[np.tril_indices(len(pts))] = -1.0
    i, j = np.unravel_index(int(np.argmax(dist)), dist.shape)
    area = contour_area(contour)
    perimeter = arc_length(contour, True)
    circularity = 4.0 * math.pi * area / perimeter**2 if perimeter > 0 else 0.0
    result = DiameterResult(
        max_diameter=float(dist[i, j]),
        point1=(float(pts[i, 0]), float(pts[i, 1])),
        point2=(float(pts[j, 0]), float(pts[j, 1])),
        area=area,
        perimeter=perimeter,
        contour_points=len(contour),
        circularity=circularity,
    )
    log.info("Maximum diameter: %.2f pixels", result.max_diameter)
    return result


def find_largest_contour(contours) -> int:
    """Index of the contour with the largest area; the first wins ties."""
    if not contours:
        raise ValueError("No contours")
    areas = [contour_area(c) for c in contours]
    index = max(range(len(areas)), key=lambda k: (areas[k], -k))
    log.info("Largest contour: index %d, area %.1f", index, areas[index])
    return index


def visualize_results(image: np.ndarray, contour, result: DiameterResult) -> np.ndarray:
    """RGB copy of the image with the contour, diameter and labels drawn on it."""
    if image.ndim == 2 or image.shape[2] == 1:
        base = Image.fromarray(np.ascontiguousarray(image.reshape(image.shape[:2]))).convert("RGB")
    else:
        base = Image.fromarray(np.ascontiguousarray(image))
    draw = ImageDraw.Draw(base)
    pts = [tuple(map(float, p)) for p in contour]
    if len(pts) > 1:
        draw.line(pts + [pts[0]], fill=(0, 255, 0), width=2)
    elif pts:
        draw.point(pts, fill=(0, 255, 0))
    draw.line([result.point1, result.point2], fill=(255, 0, 0), width=3)
    for x, y in (result.point1, result.point2):
        draw.ellipse([x - 5, y - 5, x + 5, y + 5], fill=(0, 0, 255))
    font = ImageFont.load_default()
    draw.text((10, 15), f"Diameter: {int(result.max_diameter)} px", fill=(255, 255, 255), font=font)
    draw.text((10, 45), f"Area: {int(result.area)} px\u00b2", fill=(255, 255, 255), font=font)
    return np.asarray(base, dtype=np.uint8).copy()