"""Grey-level co-occurrence matrix and the inverse difference moment."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from imganalysis.loader import ImageError

log = logging.getLogger(__name__)

DIRECTIONS = ((1, 0), (0, 1), (1, 1), (1, -1))


@dataclass(frozen=True)
class GLCMStats:
    size: int
    total_pairs: int
    non_zero: int
    max_value: int
    fill_ratio: float


class TextureAnalyzer:
    """Builds a GLCM for one pixel offset and computes texture measures from it."""

    def __init__(self, levels: int = 256) -> None:
        self.levels = levels
        self.glcm = np.zeros((levels, levels), dtype=np.int64)
        self.total_pairs = 0

    def build_glcm(self, image: np.ndarray, dx: int, dy: int) -> None:
        """Count pairs of a pixel and its neighbour at offset (dx, dy)."""
        if image is None or image.size == 0 or image.ndim != 2 or image.dtype != np.uint8:
            raise ImageError("Image must be grayscale")
        self.clear()
        rows, cols = image.shape
        y0, y1 = max(0, -dy), rows - max(0, dy)
        x0, x1 = max(0, -dx), cols - max(0, dx)
        if y1 <= y0 or x1 <= x0:
            return
        current = image[y0:y1, x0:x1].astype(np.int64).ravel()
        neighbour = image[y0 + dy:y1 + dy, x0 + dx:x1 + dx].astype(np.int64).ravel()
        keep = (current < self.levels) & (neighbour < self.levels)
        codes = current[keep] * self.levels + neighbour[keep]
        counts = np.bincount(codes, minlength=self.levels * self.levels)
        self.glcm = counts.reshape(self.levels, self.levels)
        self.total_pairs = int(keep.sum())
        log.info("GLCM built: direction (%d,%d), total pairs: %d", dx, dy, self.total_pairs)

    def calculate_idm(self) -> float:
        """Inverse difference moment of the current matrix."""
        if self.total_pairs == 0:
            raise ValueError("GLCM not built or empty")
        i, j = np.indices(self.glcm.shape)
        weights = 1.0 / (1.0 + (i - j) ** 2)
        idm = float(np.sum(self.glcm / self.total_pairs * weights))
        log.info("IDM calculated: %.6f", idm)
        return idm

    def normalized_glcm(self) -> np.ndarray:
        """Matrix of pair probabilities; all zeros if nothing has been counted."""
        if self.total_pairs == 0:
            return np.zeros(self.glcm.shape, dtype=np.float64)
        return self.glcm / self.total_pairs

    def stats(self) -> GLCMStats:
        if self.total_pairs == 0:
            raise ValueError("GLCM not built")
        non_zero = int(np.count_nonzero(self.glcm))
        return GLCMStats(
            size=self.levels,
            total_pairs=self.total_pairs,
            non_zero=non_zero,
            max_value=int(self.glcm.max()),
            fill_ratio=100.0 * non_zero / (self.levels * self.levels),
        )

    def format_stats(self) -> str:
        if self.total_pairs == 0:
            return "GLCM not built"
        s = self.stats()
        return "\n".join(
            [
                "GLCM Statistics:",
                f"Matrix size: {s.size}x{s.size}",
                f"Total pixel pairs: {s.total_pairs}",
                f"Non-zero elements: {s.non_zero}",
                f"Maximum value: {s.max_value}",
                f"Fill ratio: {s.fill_ratio}%",
            ]
        )

    def analyze_multi_directional(self, image: np.ndarray) -> float:
        """Average IDM over horizontal, vertical, diagonal and anti-diagonal offsets."""
        if image is None or image.size == 0:
            return 0.0
        values = []
        for dx, dy in DIRECTIONS:
            self.build_glcm(image, dx, dy)
            if self.total_pairs == 0:
                continue
            idm = self.calculate_idm()
            if idm > 0:
                values.append(idm)
                log.info("Direction (%d,%d): IDM = %.4f", dx, dy, idm)
        average = sum(values) / len(values) if values else 0.0
        log.info("Average IDM: %.4f", average)
        return average

    def clear(self) -> None:
        self.glcm = np.zeros((self.levels, self.levels), dtype=np.int64)
        self.total_pairs = 0