"""Preprocessing Stage - Normalize raster images before OCR.

Fixed, deterministic steps:
1. Decode bytes to a BGR image
2. Downscale so neither side exceeds the maximum dimension
3. Luminance-weighted grayscale (0.299 R + 0.587 G + 0.114 B)
4. Contrast stretch of the observed [min, max] range to [0, 255]
"""

import logging
from typing import Optional

import cv2
import numpy as np

from rxint.config import settings
from rxint.exceptions import PreprocessError

logger = logging.getLogger(__name__)


def decode_image(content: bytes) -> np.ndarray:
    """Decode encoded image bytes (JPEG, PNG, WebP) to a BGR array.

    Raises:
        PreprocessError: If the bytes are not a decodable image.
    """
    buffer = np.frombuffer(content, dtype=np.uint8)
    try:
        image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    except cv2.error as exc:
        raise PreprocessError(f"Failed to decode image: {exc}") from exc

    if image is None or image.size == 0:
        raise PreprocessError("Failed to decode image: unsupported or corrupt data")
    return image


def downscale(image: np.ndarray, max_dimension: int) -> np.ndarray:
    """Shrink an image to fit within max_dimension, preserving aspect ratio."""
    height, width = image.shape[:2]
    if width <= max_dimension and height <= max_dimension:
        return image

    scale = min(max_dimension / width, max_dimension / height)
    new_size = (max(1, round(width * scale)), max(1, round(height * scale)))
    return cv2.resize(image, new_size, interpolation=cv2.INTER_AREA)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert BGR or BGRA to single-channel luminance."""
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def stretch_contrast(gray: np.ndarray) -> np.ndarray:
    """Remap the observed grayscale range to the full [0, 255] range."""
    low = float(gray.min())
    high = float(gray.max())
    span = (high - low) or 1.0

    stretched = (gray.astype(np.float32) - low) * (255.0 / span)
    return np.clip(np.rint(stretched), 0, 255).astype(np.uint8)


class ImagePreprocessor:
    """Normalizes photographs and scans for recognition."""

    def __init__(self, max_dimension: Optional[int] = None):
        """Initialize preprocessor.

        Args:
            max_dimension: Largest allowed width or height (default from settings).
        """
        self.max_dimension = max_dimension or settings.max_image_dimension

    def preprocess(self, image: np.ndarray) -> np.ndarray:
        """Downscale, grayscale and contrast-stretch a decoded image.

        Returns:
            Single-channel uint8 image.
        """
        try:
            resized = downscale(image, self.max_dimension)
            gray = to_grayscale(resized)
            result = stretch_contrast(gray)
        except cv2.error as exc:
            raise PreprocessError(f"Image preprocessing failed: {exc}") from exc

        logger.debug(
            "Preprocessed image %sx%s -> %sx%s",
            image.shape[1], image.shape[0], result.shape[1], result.shape[0],
        )
        return result

    def preprocess_bytes(self, content: bytes) -> np.ndarray:
        """Decode and preprocess encoded image bytes."""
        return self.preprocess(decode_image(content))
