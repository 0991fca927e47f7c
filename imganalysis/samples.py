"""Synthetic grayscale test images: uniform, circle, chessboard, square and noise."""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from imganalysis.loader import save_image

SIZE = 200
CELL = 25


def uniform_gray() -> np.ndarray:
    """A 200x200 image filled with grey level 128."""
    return np.full((SIZE, SIZE), 128, dtype=np.uint8)


def white_circle() -> np.ndarray:
    """A filled white disc of radius 50 centred at (100, 100) on black."""
    y, x = np.ogrid[:SIZE, :SIZE]
    inside = (x - 100) ** 2 + (y - 100) ** 2 <= 50**2
    return np.where(inside, 255, 0).astype(np.uint8)


def chessboard() -> np.ndarray:
    """White 25-pixel cells on the even diagonals; each white cell covers its closing edge too."""
    image = np.zeros((SIZE, SIZE), dtype=np.uint8)
    for row in range(0, SIZE, CELL):
        for col in range(0, SIZE, CELL):
            if (row // CELL + col // CELL) % 2 == 0:
                image[row:row + CELL + 1, col:col + CELL + 1] = 255
    return image


def square() -> np.ndarray:
    """A filled white square with corners (50, 50) and (150, 150), inclusive, on black."""
    image = np.zeros((SIZE, SIZE), dtype=np.uint8)
    image[50:151, 50:151] = 255
    return image


def noise(seed: int | None = None) -> np.ndarray:
    """Uniform random grey levels in [0, 255)."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 255, size=(SIZE, SIZE), dtype=np.uint8)


def create_test_images(directory: str | Path = "test_images") -> list[Path]:
    """Write the five sample images as PNG files into ``directory`` and return their paths."""
    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)
    images = {
        "uniform_gray.png": uniform_gray(),
        "white_circle.png": white_circle(),
        "chessboard.png": chessboard(),
        "square.png": square(),
        "noise.png": noise(),
    }
    paths = []
    for name, image in images.items():
        path = target / name
        save_image(image, path)
        paths.append(path)
    return paths


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create sample images for analysis.")
    parser.add_argument("directory", nargs="?", default="test_images")
    args = parser.parse_args(argv)
    create_test_images(args.directory)
    print(f"Test images created in {args.directory}/ folder")
    return 0