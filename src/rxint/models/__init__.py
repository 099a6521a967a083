"""Data models for the Prescription Intelligence Pipeline.

Pydantic models for the data flowing through the pipeline stages:

- Document -> ExtractionResult (TextBlocks) -> ParsedMedicationEntry
- ParsedMedicationEntry + KB -> DetectedDisease -> OverallConfidence
- All of the above -> AnalysisResult

Knowledge base entities (ChronicDisease, DiseaseKeywordEntry,
MedicationDiseaseMapping) are frozen reference data.
"""

from .base import (
    BaseIRModel,
    BoundingBox,
    ConfidenceLevel,
    DetectionSource,
    ExtractionStrategy,
    MedicationForm,
    ReviewStatus,
    confidence_to_level,
)
from .block import (
    ExtractionResult,
    TextBlock,
)
from .document import (
    AnalysisResult,
    Document,
    normalize_mime_type,
)
from .entity import (
    DetectedDisease,
    OverallConfidence,
    ParsedMedicationEntry,
)
from .knowledge import (
    ChronicDisease,
    DiseaseCategory,
    DiseaseKeywordEntry,
    MedicationDiseaseMapping,
)

__all__ = [
    # Base types
    "BaseIRModel",
    "BoundingBox",
    "ConfidenceLevel",
    "DetectionSource",
    "ExtractionStrategy",
    "MedicationForm",
    "ReviewStatus",
    "confidence_to_level",
    # Recognition
    "ExtractionResult",
    "TextBlock",
    # Document
    "AnalysisResult",
    "Document",
    "normalize_mime_type",
    # Entities
    "DetectedDisease",
    "OverallConfidence",
    "ParsedMedicationEntry",
    # Knowledge base
    "ChronicDisease",
    "DiseaseCategory",
    "DiseaseKeywordEntry",
    "MedicationDiseaseMapping",
]
