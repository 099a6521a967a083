"""OCR Stage - Recognize text in preprocessed images.

Uses Tesseract (via pytesseract) and produces block-level text with
bounding boxes and confidence scores.

The engine is an explicit resource handle: ``initialize`` once, share it
across analyses, ``terminate`` when done. Recognition calls on one
engine are serialized.
"""

import logging
import threading
from typing import Optional

import cv2
import numpy as np
import pytesseract
from PIL import Image

from rxint.config import settings
from rxint.exceptions import OCRInitError, OCRRecognitionError
from rxint.models import BoundingBox, ExtractionResult, ExtractionStrategy, TextBlock

logger = logging.getLogger(__name__)


def to_pil_image(image: np.ndarray) -> Image.Image:
    """Convert a grayscale or BGR array to a PIL image."""
    if image.ndim == 3:
        return Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))
    return Image.fromarray(image)


def blocks_from_data(data: dict) -> tuple[str, float, list[TextBlock]]:
    """Group Tesseract word data into text blocks.

    Args:
        data: ``pytesseract.image_to_data`` output as a dict.

    Returns:
        Tuple of (full text, mean word confidence 0-1, blocks).
    """
    grouped: dict[int, dict] = {}
    all_confidences = []

    for i in range(len(data["text"])):
        text = str(data["text"][i]).strip()
        conf = float(data["conf"][i])

        # Skip structural rows and empty detections
        if not text or conf < 0:
            continue

        conf_normalized = min(conf / 100.0, 1.0)
        all_confidences.append(conf_normalized)

        x0 = data["left"][i]
        y0 = data["top"][i]
        bbox = BoundingBox(
            x0=x0,
            y0=y0,
            x1=x0 + data["width"][i],
            y1=y0 + data["height"][i],
        )

        block = grouped.setdefault(
            data["block_num"][i],
            {"lines": {}, "confidences": [], "bbox": bbox},
        )
        line_key = (data["par_num"][i], data["line_num"][i])
        block["lines"].setdefault(line_key, []).append(text)
        block["confidences"].append(conf_normalized)
        block["bbox"] = block["bbox"].union(bbox)

    blocks = []
    for block in grouped.values():
        block_text = "\n".join(" ".join(words) for words in block["lines"].values())
        confidences = block["confidences"]
        blocks.append(
            TextBlock(
                text=block_text,
                confidence=sum(confidences) / len(confidences),
                bbox=block["bbox"],
            )
        )

    full_text = "\n".join(b.text for b in blocks)
    avg_confidence = sum(all_confidences) / len(all_confidences) if all_confidences else 0.0
    return full_text, avg_confidence, blocks


class TesseractOCR:
    """OCR engine adapter for Tesseract.

    Usable as a context manager::

        with TesseractOCR() as engine:
            result = engine.recognize(image)
    """

    ENGINE_NAME = "tesseract"

    def __init__(
        self,
        language: Optional[str] = None,
        psm: Optional[int] = None,
        oem: Optional[int] = None,
        config: Optional[str] = None,
    ):
        """Create an engine handle. Nothing is loaded until ``initialize``.

        Args:
            language: Tesseract language code(s), e.g. 'eng', 'eng+hin'.
            psm: Page segmentation mode (6 = assume uniform block of text).
            oem: OCR Engine mode (3 = default, based on what's available).
            config: Additional Tesseract config string.
        """
        self.language = language or settings.ocr_language
        self.psm = psm if psm is not None else settings.ocr_psm
        self.oem = oem if oem is not None else settings.ocr_oem
        self.config = config or ""

        self._lock = threading.Lock()
        self._version: Optional[str] = None

    @property
    def is_initialized(self) -> bool:
        return self._version is not None

    @property
    def version(self) -> Optional[str]:
        return self._version

    def _build_config(self) -> str:
        """Build Tesseract configuration string."""
        config_parts = [
            f"--psm {self.psm}",
            f"--oem {self.oem}",
        ]
        if self.config:
            config_parts.append(self.config)
        return " ".join(config_parts)

    def initialize(self) -> None:
        """Locate the Tesseract binary and check language data. Idempotent.

        Raises:
            OCRInitError: If Tesseract or the language data is unavailable.
        """
        with self._lock:
            if self._version is not None:
                return

            try:
                version = str(pytesseract.get_tesseract_version())
                available = set(pytesseract.get_languages(config=""))
            except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as exc:
                logger.error("OCR engine initialization failed: %s", exc)
                raise OCRInitError(f"Tesseract is not available: {exc}") from exc

            missing = [lang for lang in self.language.split("+") if lang not in available]
            if missing:
                raise OCRInitError(f"Tesseract language data not installed: {', '.join(missing)}")

            self._version = version
            logger.info("OCR engine initialized (tesseract %s, lang=%s)", version, self.language)

    def recognize(self, image: np.ndarray) -> ExtractionResult:
        """Recognize text with block-level boxes and confidence.

        Args:
            image: Grayscale or BGR image as numpy array.

        Raises:
            OCRInitError: If the engine has not been initialized.
            OCRRecognitionError: If Tesseract fails on this image.
        """
        if not self.is_initialized:
            raise OCRInitError("OCR engine not initialized")

        pil_image = to_pil_image(image)

        with self._lock:
            try:
                data = pytesseract.image_to_data(
                    pil_image,
                    lang=self.language,
                    config=self._build_config(),
                    output_type=pytesseract.Output.DICT,
                )
            except (pytesseract.TesseractError, RuntimeError, OSError) as exc:
                logger.error("OCR recognition failed: %s", exc)
                raise OCRRecognitionError(f"Failed to recognize text: {exc}") from exc

        text, confidence, blocks = blocks_from_data(data)
        if not blocks:
            logger.warning("OCR produced no text")
        else:
            logger.info("OCR recognized %d blocks (confidence %.2f)", len(blocks), confidence)

        return ExtractionResult(
            text=text,
            confidence=confidence,
            blocks=blocks,
            strategy=ExtractionStrategy.IMAGE_OCR,
            engine=self.ENGINE_NAME,
            engine_version=self._version,
        )

    def terminate(self) -> None:
        """Release the engine. Safe to call when never initialized."""
        with self._lock:
            if self._version is not None:
                logger.info("OCR engine terminated")
            self._version = None

    def __enter__(self) -> "TesseractOCR":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.terminate()
