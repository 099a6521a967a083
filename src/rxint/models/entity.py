"""Structured entities extracted from a prescription."""

from typing import Optional

from pydantic import BaseModel, Field

from .base import DetectionSource, MedicationForm


class ParsedMedicationEntry(BaseModel):
    """
    Medication line extracted from a prescription.

    Only emitted when the name contains a letter and at least one of
    strength, frequency or instructions is present. ``confirmed`` stays
    False until a human reviews the entry.
    """

    name: str = Field(..., min_length=1)
    strength: str = Field(default="", description="e.g. '500mg'")
    form: Optional[MedicationForm] = Field(None, description="Dosage form, if named on the line")
    frequency: str = Field(default="", description="Raw code or dose pattern, e.g. 'BD', '1-0-1'")
    instructions: Optional[str] = None
    confirmed: bool = False

    source_line: Optional[str] = Field(
        None, description="Line the detail tokens were read from"
    )

    @property
    def normalized_name(self) -> str:
        return self.name.lower()

    @property
    def dosage_form(self) -> MedicationForm:
        """Stated form, tablet when the line names none."""
        return self.form or MedicationForm.TABLET

    @property
    def has_details(self) -> bool:
        return bool(self.strength or self.frequency or self.instructions)


class DetectedDisease(BaseModel):
    """Chronic condition candidate with provenance."""

    disease_id: str
    disease_name: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    matched_terms: set[str] = Field(default_factory=set)
    context: str = Field(default="", description="Triggering excerpt")
    source: DetectionSource
    related_medications: set[str] = Field(default_factory=set)


class OverallConfidence(BaseModel):
    """Aggregate and per-stage confidence scores."""

    overall: float = Field(..., ge=0.0, le=1.0)
    ocr: float = Field(..., ge=0.0, le=1.0)
    disease_detection: float = Field(..., ge=0.0, le=1.0)
    medication_parsing: float = Field(..., ge=0.0, le=1.0)
