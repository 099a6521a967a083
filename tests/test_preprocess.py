"""Tests for image preprocessing stage."""

import cv2
import numpy as np
import pytest

from rxint.exceptions import PreprocessError
from rxint.pipeline.stage_preprocess import (
    ImagePreprocessor,
    decode_image,
    downscale,
    stretch_contrast,
    to_grayscale,
)


class TestDecodeImage:
    """Tests for byte decoding."""

    def test_decode_png(self, png_bytes, sample_image):
        """PNG bytes decode to the original BGR image."""
        image = decode_image(png_bytes)
        assert image.shape == sample_image.shape
        assert np.array_equal(image, sample_image)

    def test_decode_garbage(self):
        """Undecodable bytes raise PreprocessError."""
        with pytest.raises(PreprocessError):
            decode_image(b"definitely not an image")


class TestDownscale:
    """Tests for dimension limiting."""

    def test_small_image_unchanged(self, sample_image):
        """Images within the limit are returned as is."""
        assert downscale(sample_image, 2000) is sample_image

    def test_wide_image_keeps_aspect_ratio(self):
        """The longer side is scaled to the limit."""
        image = np.zeros((1000, 4000, 3), dtype=np.uint8)
        result = downscale(image, 2000)
        assert result.shape[:2] == (500, 2000)

    def test_tall_image(self):
        """Height is limited too."""
        image = np.zeros((3000, 1500), dtype=np.uint8)
        result = downscale(image, 2000)
        assert result.shape == (2000, 1000)


class TestGrayscaleAndContrast:
    """Tests for grayscale conversion and contrast stretch."""

    def test_grayscale_uses_luminance_weights(self):
        """Pure green is brighter than pure blue in luminance."""
        green = np.zeros((2, 2, 3), dtype=np.uint8)
        green[:, :, 1] = 255
        blue = np.zeros((2, 2, 3), dtype=np.uint8)
        blue[:, :, 0] = 255

        assert to_grayscale(green)[0, 0] > to_grayscale(blue)[0, 0]

    def test_grayscale_passthrough(self):
        """Single-channel input is already grayscale."""
        gray = np.full((5, 5), 100, dtype=np.uint8)
        assert to_grayscale(gray) is gray

    def test_stretch_full_range(self):
        """Observed min maps to 0 and max to 255."""
        gray = np.array([[50, 100], [150, 200]], dtype=np.uint8)
        stretched = stretch_contrast(gray)
        assert stretched.min() == 0
        assert stretched.max() == 255
        assert stretched.dtype == np.uint8

    def test_stretch_uniform_image(self):
        """A flat image does not divide by zero."""
        gray = np.full((4, 4), 128, dtype=np.uint8)
        stretched = stretch_contrast(gray)
        assert np.all(stretched == 0)


class TestImagePreprocessor:
    """Tests for the full preprocessing sequence."""

    def test_preprocess_returns_single_channel(self, sample_image):
        """Output is grayscale uint8 with full contrast."""
        result = ImagePreprocessor(max_dimension=2000).preprocess(sample_image)
        assert result.ndim == 2
        assert result.shape == sample_image.shape[:2]
        assert result.min() == 0
        assert result.max() == 255

    def test_preprocess_bytes_downscales(self):
        """Large encoded images come out within the limit."""
        image = np.full((600, 1200, 3), 255, dtype=np.uint8)
        cv2.line(image, (0, 0), (1199, 599), (0, 0, 0), 5)
        ok, buffer = cv2.imencode(".png", image)
        assert ok

        result = ImagePreprocessor(max_dimension=300).preprocess_bytes(buffer.tobytes())
        assert result.shape == (150, 300)

    def test_preprocess_is_deterministic(self, sample_image):
        """Same input, same output."""
        preprocessor = ImagePreprocessor()
        first = preprocessor.preprocess(sample_image)
        second = preprocessor.preprocess(sample_image)
        assert np.array_equal(first, second)
