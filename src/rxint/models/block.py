"""Recognition output models."""

from typing import Optional

from pydantic import BaseModel, Field

from .base import BoundingBox, ConfidenceLevel, ExtractionStrategy, confidence_to_level


class TextBlock(BaseModel):
    """Spatially bounded region of recognized text.

    Boxes from OCR are in pixels of the preprocessed image. Boxes read from
    a PDF text layer are in PDF points (1/72 inch) of the page, unscaled.
    """

    text: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    bbox: BoundingBox
    page_number: int = Field(default=1, ge=1)

    class Config:
        frozen = True


class ExtractionResult(BaseModel):
    """Text extracted from one document. Immutable once produced."""

    text: str = Field(..., description="Full recognized text, one line per text line")
    confidence: float = Field(..., ge=0.0, le=1.0)
    blocks: tuple[TextBlock, ...] = Field(default_factory=tuple)

    strategy: ExtractionStrategy = Field(default=ExtractionStrategy.IMAGE_OCR)
    engine: Optional[str] = Field(None, description="tesseract, pymupdf, ...")
    engine_version: Optional[str] = None

    @property
    def confidence_level(self) -> ConfidenceLevel:
        return confidence_to_level(self.confidence)

    @property
    def lines(self) -> list[str]:
        """Trimmed, non-empty text lines."""
        return [line.strip() for line in self.text.splitlines() if line.strip()]

    class Config:
        frozen = True
