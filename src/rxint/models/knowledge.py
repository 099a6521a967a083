"""Knowledge base reference entities. Read-only at runtime."""

from enum import Enum

from pydantic import BaseModel, Field


class DiseaseCategory(str, Enum):
    """Body system a chronic condition belongs to."""

    CARDIOVASCULAR = "cardiovascular"
    RESPIRATORY = "respiratory"
    METABOLIC = "metabolic"
    NEUROLOGICAL = "neurological"
    MUSCULOSKELETAL = "musculoskeletal"
    ENDOCRINE = "endocrine"
    RENAL = "renal"
    OTHER = "other"


class ChronicDisease(BaseModel):
    """Catalog entry for a known chronic condition."""

    id: str
    name: str
    description: str = ""
    category: DiseaseCategory = DiseaseCategory.OTHER
    common_symptoms: tuple[str, ...] = ()
    risk_factors: tuple[str, ...] = ()

    class Config:
        frozen = True


class DiseaseKeywordEntry(BaseModel):
    """Terms that indicate an explicit mention of a disease."""

    keywords: tuple[str, ...] = ()
    abbreviations: tuple[str, ...] = ()
    related_terms: tuple[str, ...] = ()

    class Config:
        frozen = True


class MedicationDiseaseMapping(BaseModel):
    """Likelihood that a generic medication indicates a disease."""

    disease_id: str
    disease_name: str
    likelihood: float = Field(..., ge=0.0, le=1.0)
    medication_class: str

    class Config:
        frozen = True
