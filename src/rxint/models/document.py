"""Document input and analysis output models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .base import BaseIRModel, ConfidenceLevel, ReviewStatus, confidence_to_level, utcnow
from .block import ExtractionResult
from .entity import DetectedDisease, OverallConfidence, ParsedMedicationEntry

PDF_MIME_TYPE = "application/pdf"


def normalize_mime_type(declared_type: Optional[str]) -> str:
    """Lowercase a MIME type and drop parameters such as ``; charset=``."""
    if not declared_type:
        return ""
    return declared_type.split(";", 1)[0].strip().lower()


class Document(BaseModel):
    """
    Raw uploaded document.

    Transient: exists only for the duration of one analysis call.
    """

    content: bytes = Field(..., repr=False)
    mime_type: str = Field(..., description="Declared MIME type")
    filename: Optional[str] = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def normalized_mime_type(self) -> str:
        return normalize_mime_type(self.mime_type)

    @property
    def is_pdf(self) -> bool:
        return self.normalized_mime_type == PDF_MIME_TYPE


class AnalysisResult(BaseIRModel):
    """
    Structured output of one prescription analysis.

    Emitted once; after that it belongs to the reviewer.
    """

    prescription_id: Optional[str] = None
    uploaded_at: datetime = Field(default_factory=utcnow)

    extraction: ExtractionResult
    medications: list[ParsedMedicationEntry] = Field(default_factory=list)
    diseases: list[DetectedDisease] = Field(default_factory=list)
    confidence: OverallConfidence

    status: ReviewStatus = Field(default=ReviewStatus.PENDING)
    needs_review: bool = Field(default=False)

    @property
    def confidence_level(self) -> ConfidenceLevel:
        return confidence_to_level(self.confidence.overall)

    @property
    def is_empty(self) -> bool:
        """No medications and no diseases found."""
        return not self.medications and not self.diseases
