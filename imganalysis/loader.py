"""Loading, converting, resizing, validating and saving images as numpy arrays.

Colour images are ``(height, width, 3)`` ``uint8`` arrays in RGB order;
grayscale images are ``(height, width)`` ``uint8`` arrays.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

log = logging.getLogger(__name__)

MIN_SIDE = 10


class ImageError(ValueError):
    """Raised when an image cannot be loaded, converted, checked or saved."""


def _require_nonempty(image: np.ndarray, what: str) -> None:
    if image is None or image.size == 0:
        raise ImageError(f"Empty image for {what}")


def _to_pil(image: np.ndarray) -> Image.Image:
    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]
    return Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8))


def load_image(filepath: str | Path) -> np.ndarray:
    """Read an image file as an RGB array."""
    try:
        with Image.open(filepath) as img:
            array = np.asarray(img.convert("RGB"), dtype=np.uint8).copy()
    except (OSError, ValueError) as exc:
        raise ImageError(f"Cannot load image {filepath}") from exc
    if array.size == 0:
        raise ImageError(f"Cannot load image {filepath}")
    log.info("Image loaded: %dx%d pixels", array.shape[1], array.shape[0])
    return array


def convert_to_grayscale(image: np.ndarray) -> np.ndarray:
    """Return a single-channel copy of an RGB or grayscale image."""
    _require_nonempty(image, "conversion")
    if image.ndim == 2:
        return image.copy()
    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0].copy()
    if channels == 3:
        rgb = image.astype(np.float64)
        gray = 0.299 * rgb[:, :, 0] + 0.587 * rgb[:, :, 1] + 0.114 * rgb[:, :, 2]
        return np.clip(np.rint(gray), 0, 255).astype(np.uint8)
    raise ImageError(f"Unsupported number of channels: {channels}")


def display_image(image: np.ndarray, window_name: str = "Image") -> None:
    """Show the image in a window and block until a key is pressed or it is closed."""
    _require_nonempty(image, "display")
    import tkinter

    from PIL import ImageTk

    root = tkinter.Tk()
    root.title(window_name)
    photo = ImageTk.PhotoImage(_to_pil(image))
    tkinter.Label(root, image=photo).pack()
    root.bind("<Key>", lambda _event: root.destroy())
    root.mainloop()


def save_image(image: np.ndarray, filepath: str | Path) -> None:
    """Write the image to a file whose format follows from its extension."""
    _require_nonempty(image, "saving")
    try:
        _to_pil(image).save(filepath)
    except (OSError, ValueError, KeyError) as exc:
        raise ImageError(f"Error saving image: {filepath}") from exc
    log.info("Image saved: %s", filepath)


def validate_image(image: np.ndarray) -> None:
    """Raise ImageError unless the image is non-empty, at least 10x10 and 8-bit 1 or 3 channel."""
    if image is None or image.size == 0:
        raise ImageError("Image is empty")
    if image.shape[1] < MIN_SIDE or image.shape[0] < MIN_SIDE:
        raise ImageError("Image too small")
    channels_ok = image.ndim == 2 or (image.ndim == 3 and image.shape[2] in (1, 3))
    if image.dtype != np.uint8 or not channels_ok:
        raise ImageError("Unsupported image type")


def resize_image(image: np.ndarray, max_size: int = 512) -> np.ndarray:
    """Shrink the image so its longer side is at most ``max_size``; smaller images are copied."""
    _require_nonempty(image, "resizing")
    height, width = image.shape[:2]
    current_max = max(width, height)
    if current_max <= max_size:
        return image.copy()
    scale = max_size / current_max
    new_width = int(width * scale)
    new_height = int(height * scale)
    resized = np.asarray(
        _to_pil(image).resize((new_width, new_height), Image.Resampling.BILINEAR),
        dtype=np.uint8,
    )
    if image.ndim == 3 and image.shape[2] == 1:
        resized = resized[:, :, np.newaxis]
    log.info("Image resized: %dx%d -> %dx%d", width, height, new_width, new_height)
    return resized.copy()