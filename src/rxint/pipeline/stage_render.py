"""PDF Stage - Extract text from paginated documents.

Two strategies, tried in order:
1. Direct text-layer read of the first pages (fast, exact for digital PDFs)
2. Render the first page to an image for OCR (scanned PDFs)

Strategy 2 runs when strategy 1 fails or yields too little text.
Uses PyMuPDF (fitz) for both.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import cv2
import fitz  # PyMuPDF
import numpy as np

from rxint.config import settings
from rxint.exceptions import PreprocessError
from rxint.models import BoundingBox, ExtractionResult, ExtractionStrategy, TextBlock

logger = logging.getLogger(__name__)

# PyMuPDF block tuple: (x0, y0, x1, y1, text, block_no, block_type)
TEXT_BLOCK_TYPE = 0


@dataclass
class PDFExtraction:
    """Outcome of PDF processing: either text, or an image that still needs OCR."""

    strategy: ExtractionStrategy
    result: Optional[ExtractionResult] = None
    image: Optional[np.ndarray] = None

    @property
    def needs_ocr(self) -> bool:
        return self.result is None


def pixmap_to_array(pixmap) -> np.ndarray:
    """Convert a PyMuPDF pixmap to a BGR (or grayscale) uint8 array."""
    array = np.frombuffer(pixmap.samples, dtype=np.uint8).reshape(
        pixmap.height, pixmap.width, pixmap.n
    )
    if pixmap.n == 1:
        return array[:, :, 0].copy()
    if pixmap.n == 4:
        return cv2.cvtColor(array, cv2.COLOR_RGBA2BGR)
    return cv2.cvtColor(array, cv2.COLOR_RGB2BGR)


class PDFProcessor:
    """Chooses between text-layer extraction and render-then-OCR."""

    def __init__(
        self,
        max_text_pages: Optional[int] = None,
        min_text_length: Optional[int] = None,
        render_scale: Optional[float] = None,
        text_confidence: Optional[float] = None,
    ):
        """Initialize processor.

        Args:
            max_text_pages: Pages read by the text-layer strategy.
            min_text_length: Minimum trimmed text length for a usable text layer.
            render_scale: Zoom factor used when rendering for OCR.
            text_confidence: Confidence reported for text-layer results.
        """
        self.max_text_pages = max_text_pages or settings.pdf_max_text_pages
        self.min_text_length = min_text_length or settings.pdf_min_text_length
        self.render_scale = render_scale or settings.pdf_render_scale
        self.text_confidence = (
            text_confidence if text_confidence is not None else settings.pdf_text_confidence
        )

    def process(self, content: bytes) -> PDFExtraction:
        """Extract text directly, or render the first page for OCR.

        Raises:
            PreprocessError: If the PDF cannot be opened or rendered.
        """
        pdf_doc = self._open(content)
        try:
            try:
                result = self.extract_text_layer(pdf_doc)
            except (RuntimeError, ValueError) as exc:
                logger.info("Direct text extraction failed, falling back to OCR: %s", exc)
                result = None

            if result is not None and len(result.text.strip()) >= self.min_text_length:
                logger.info("Extracted %d characters from PDF text layer", len(result.text))
                return PDFExtraction(strategy=ExtractionStrategy.PDF_TEXT_LAYER, result=result)

            if result is not None:
                logger.warning(
                    "PDF text layer too short (%d chars), rendering first page for OCR",
                    len(result.text.strip()),
                )

            image = self.render_first_page(pdf_doc)
            return PDFExtraction(strategy=ExtractionStrategy.PDF_RENDER_OCR, image=image)
        finally:
            pdf_doc.close()

    def extract_text_layer(self, pdf_doc: fitz.Document) -> ExtractionResult:
        """Read embedded text blocks from the first pages."""
        page_texts = []
        blocks = []

        for page_index in range(min(len(pdf_doc), self.max_text_pages)):
            page = pdf_doc[page_index]
            page_blocks = []
            for x0, y0, x1, y1, text, _block_no, block_type in page.get_text("blocks"):
                text = text.strip()
                if block_type != TEXT_BLOCK_TYPE or not text:
                    continue
                page_blocks.append(text)
                blocks.append(
                    TextBlock(
                        text=text,
                        confidence=self.text_confidence,
                        # PDF points, not scaled to render pixels
                        bbox=BoundingBox(x0=x0, y0=y0, x1=x1, y1=y1),
                        page_number=page_index + 1,
                    )
                )
            page_texts.append("\n".join(page_blocks))

        return ExtractionResult(
            text="\n".join(page_texts),
            confidence=self.text_confidence,
            blocks=blocks,
            strategy=ExtractionStrategy.PDF_TEXT_LAYER,
            engine="pymupdf",
            engine_version=fitz.VersionBind,
        )

    def render_first_page(self, pdf_doc: fitz.Document) -> np.ndarray:
        """Rasterize page 1 at the render scale."""
        try:
            page = pdf_doc[0]
            matrix = fitz.Matrix(self.render_scale, self.render_scale)
            pixmap = page.get_pixmap(matrix=matrix, alpha=False)
            image = pixmap_to_array(pixmap)
        except (RuntimeError, ValueError, cv2.error) as exc:
            raise PreprocessError(f"Failed to render PDF page: {exc}") from exc

        logger.info("Rendered PDF page 1 at %.1fx (%dx%d)", self.render_scale, image.shape[1], image.shape[0])
        return image

    def _open(self, content: bytes) -> fitz.Document:
        try:
            pdf_doc = fitz.open(stream=content, filetype="pdf")
        except (RuntimeError, ValueError) as exc:
            raise PreprocessError(f"Failed to open PDF: {exc}") from exc

        if len(pdf_doc) == 0:
            pdf_doc.close()
            raise PreprocessError("PDF has no pages")
        return pdf_doc
