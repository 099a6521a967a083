"""Base models and common types for the Prescription Intelligence Pipeline."""

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class ConfidenceLevel(str, Enum):
    """Confidence classification for scores."""

    HIGH = "high"  # >=0.9
    MEDIUM = "medium"  # 0.7-0.9
    LOW = "low"  # 0.5-0.7
    VERY_LOW = "very_low"  # <0.5 - flagged for review


class DetectionSource(str, Enum):
    """Evidence that produced a disease detection."""

    EXPLICIT = "explicit"
    MEDICATION_INFERRED = "medication-inferred"


class MedicationForm(str, Enum):
    """Dosage form named on a prescription line."""

    TABLET = "tablet"
    CAPSULE = "capsule"
    LIQUID = "liquid"
    INJECTION = "injection"
    INHALER = "inhaler"
    OTHER = "other"


class ExtractionStrategy(str, Enum):
    """How the text of a document was obtained."""

    IMAGE_OCR = "image_ocr"
    PDF_TEXT_LAYER = "pdf_text_layer"
    PDF_RENDER_OCR = "pdf_render_ocr"


class ReviewStatus(str, Enum):
    """Human review state of an analysis result."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


def confidence_to_level(confidence: float) -> ConfidenceLevel:
    """Convert a 0-1 confidence score to a confidence level."""
    if confidence >= 0.9:
        return ConfidenceLevel.HIGH
    elif confidence >= 0.7:
        return ConfidenceLevel.MEDIUM
    elif confidence >= 0.5:
        return ConfidenceLevel.LOW
    else:
        return ConfidenceLevel.VERY_LOW


class BoundingBox(BaseModel):
    """Rectangle in source pixel coordinates (PDF points for text-layer blocks)."""

    x0: float = Field(..., description="Left edge")
    y0: float = Field(..., description="Top edge")
    x1: float = Field(..., description="Right edge")
    y1: float = Field(..., description="Bottom edge")

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Smallest box enclosing both boxes."""
        return BoundingBox(
            x0=min(self.x0, other.x0),
            y0=min(self.y0, other.y0),
            x1=max(self.x1, other.x1),
            y1=max(self.y1, other.y1),
        )

    class Config:
        frozen = True


class BaseIRModel(BaseModel):
    """Base class for pipeline output models with identity fields."""

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=utcnow)
