"""Downsample a picture onto the pixel grid."""

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from wleddraw.exceptions import ValidationError

logger = logging.getLogger(__name__)

MIN_BRIGHTNESS, MAX_BRIGHTNESS = 0, 200
MIN_CONTRAST, MAX_CONTRAST = -100, 100


def _clamp(name: str, value: float, low: float, high: float) -> float:
    if value < low or value > high:
        clamped = min(high, max(low, value))
        logger.warning(f"{name} {value} out of range [{low}, {high}], using {clamped}")
        return clamped
    return value


def contrast_factor(contrast_percent: float) -> float:
    """Scale factor applied around mid-gray (128) for a contrast in percent."""
    c = contrast_percent / 100.0
    return 259.0 * (c * 255.0 + 255.0) / (255.0 * (259.0 - c * 255.0))


def adjust_pixels(rgb: np.ndarray, brightness: float, contrast: float) -> np.ndarray:
    """
    Apply brightness then contrast to an ``(h, w, 3)`` RGB array.

    Brightness scales each channel by ``brightness / 100``. Contrast pushes
    channels away from (or towards) 128. The result is clamped to [0, 255]
    and rounded to the nearest integer.
    """
    values = rgb.astype(np.float64) * (brightness / 100.0)
    values = contrast_factor(contrast) * (values - 128.0) + 128.0
    return np.rint(np.clip(values, 0.0, 255.0)).astype(np.uint8)


def pixels_to_hex(pixels: np.ndarray) -> list[str]:
    """Row-major '#rrggbb' strings for an ``(h, w, 3)`` uint8 array."""
    return [f"#{r:02x}{g:02x}{b:02x}" for r, g, b in pixels.reshape(-1, 3).tolist()]


class ImageSampler:
    """
    Holds a source picture and renders it at grid resolution.

    Every render starts again from the original image, so adjustments
    never accumulate. Resampling uses nearest neighbour unless another
    Pillow filter is given.

    Example:
        ```python
        sampler = ImageSampler.from_file("logo.png")
        sampler.set_adjustments(brightness=120, contrast=20)
        cells = sampler.render(16, 16)
        ```
    """

    def __init__(
        self,
        image: Image.Image,
        brightness: float = 100,
        contrast: float = 0,
        resample: Image.Resampling = Image.Resampling.NEAREST,
    ):
        self._original = image.convert("RGB")
        self.resample = resample
        self._brightness = 100.0
        self._contrast = 0.0
        self.set_adjustments(brightness, contrast)

    @classmethod
    def from_file(cls, path: Path | str, **kwargs) -> "ImageSampler":
        """
        Load a picture from disk.

        Raises:
            ValidationError: If the file is missing or not an image Pillow can read
        """
        path = Path(path)
        try:
            with Image.open(path) as image:
                image.load()
                sampler = cls(image, **kwargs)
        except FileNotFoundError as e:
            raise ValidationError(
                f"Image not found: {path}",
                technical_message=f"No such file: {path}",
            ) from e
        except (UnidentifiedImageError, OSError) as e:
            raise ValidationError(
                f"Cannot read image: {path.name}",
                technical_message=f"Pillow failed to open {path}: {e}",
                recovery_hint="Use a PNG, JPEG, GIF or BMP file.",
            ) from e
        logger.info(f"Loaded image {path} ({sampler.source_size[0]}x{sampler.source_size[1]})")
        return sampler

    @property
    def source_size(self) -> tuple[int, int]:
        return self._original.size

    @property
    def brightness(self) -> float:
        return self._brightness

    @property
    def contrast(self) -> float:
        return self._contrast

    def set_adjustments(self, brightness: float | None = None, contrast: float | None = None) -> None:
        """Change brightness (0-200 %) and/or contrast (-100-100 %), clamping out-of-range values."""
        if brightness is not None:
            self._brightness = _clamp("Brightness", brightness, MIN_BRIGHTNESS, MAX_BRIGHTNESS)
        if contrast is not None:
            self._contrast = _clamp("Contrast", contrast, MIN_CONTRAST, MAX_CONTRAST)

    def render(self, width: int, height: int) -> list[str]:
        """Colors of the picture scaled to ``width x height``, row-major."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        resized = self._original.resize((width, height), resample=self.resample)
        pixels = adjust_pixels(np.asarray(resized), self._brightness, self._contrast)
        logger.debug(
            f"Sampled image to {width}x{height} "
            f"(brightness={self._brightness}, contrast={self._contrast})"
        )
        return pixels_to_hex(pixels)
