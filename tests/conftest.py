"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import cv2
import numpy as np
import pytest

from rxint.knowledge import KnowledgeBase
from rxint.models import ExtractionResult, ExtractionStrategy
from rxint.pipeline.stage_ocr import TesseractOCR


@pytest.fixture
def knowledge_base():
    """Built-in reference data."""
    return KnowledgeBase.from_defaults()


@pytest.fixture
def prescription_text():
    """Typical OCR text of a printed prescription."""
    return (
        "Dr. A. Sharma MBBS\n"
        "Patient: John Doe\n"
        "Date: 12/03/2024\n"
        "Metformin 500mg BD\n"
        "Amlodipine 5mg OD 30 days\n"
        "Signature\n"
    )


@pytest.fixture
def sample_image():
    """White page with dark text-like bars, BGR."""
    image = np.full((300, 400, 3), 230, dtype=np.uint8)
    cv2.rectangle(image, (40, 60), (360, 80), (30, 30, 30), -1)
    cv2.rectangle(image, (40, 120), (300, 140), (30, 30, 30), -1)
    return image


@pytest.fixture
def png_bytes(sample_image):
    """Sample image encoded as PNG."""
    ok, buffer = cv2.imencode(".png", sample_image)
    assert ok
    return buffer.tobytes()


def make_extraction(text: str, confidence: float = 0.9) -> ExtractionResult:
    return ExtractionResult(
        text=text,
        confidence=confidence,
        strategy=ExtractionStrategy.IMAGE_OCR,
        engine="tesseract",
    )


@pytest.fixture
def extraction_factory():
    """Build OCR extraction results from text."""
    return make_extraction


@pytest.fixture
def mock_ocr():
    """OCR engine double that returns fixed text."""
    engine = MagicMock(spec=TesseractOCR)
    engine.recognize.return_value = make_extraction("Metformin 500mg BD\nAmlodipine 5mg OD")
    return engine
