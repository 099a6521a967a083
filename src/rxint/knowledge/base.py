"""Knowledge base: disease catalog, keyword map and medication map.

Loaded once per process and read-only afterwards. Queryable by disease id
and by lowercase generic medication name.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from rxint.config import settings
from rxint.exceptions import KnowledgeBaseError
from rxint.models import (
    ChronicDisease,
    DiseaseKeywordEntry,
    MedicationDiseaseMapping,
)

from .diseases import CHRONIC_DISEASES
from .keywords import DISEASE_KEYWORDS
from .medications import MEDICATION_DISEASE_MAP

logger = logging.getLogger(__name__)


class KnowledgeBase:
    """Immutable reference data used for disease inference."""

    def __init__(
        self,
        diseases: list[ChronicDisease],
        keywords: Mapping[str, DiseaseKeywordEntry],
        medications: Mapping[str, list[MedicationDiseaseMapping]],
    ):
        self._diseases = MappingProxyType({d.id: d for d in diseases})
        self._keywords = MappingProxyType(dict(keywords))
        self._medications = MappingProxyType(
            {name.strip().lower(): tuple(rows) for name, rows in medications.items()}
        )
        self._check_references()

    def _check_references(self) -> None:
        unknown = [d for d in self._keywords if d not in self._diseases]
        for rows in self._medications.values():
            unknown.extend(r.disease_id for r in rows if r.disease_id not in self._diseases)
        if unknown:
            raise KnowledgeBaseError(
                f"Unknown disease ids referenced: {sorted(set(unknown))}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KnowledgeBase":
        """Build from plain data with ``diseases``, ``keywords`` and ``medications`` sections.

        Medication rows may be mappings or
        ``(disease_id, disease_name, likelihood, medication_class)`` tuples.
        """
        try:
            diseases = [ChronicDisease(**d) for d in data["diseases"]]
            keywords = {
                disease_id: DiseaseKeywordEntry(**entry)
                for disease_id, entry in data["keywords"].items()
            }
            medications = {
                name: [_mapping_row(row) for row in rows]
                for name, rows in data["medications"].items()
            }
        except KeyError as exc:
            raise KnowledgeBaseError(f"Missing knowledge base section: {exc}") from exc
        except (PydanticValidationError, TypeError, ValueError) as exc:
            raise KnowledgeBaseError(f"Invalid knowledge base entry: {exc}") from exc

        return cls(diseases, keywords, medications)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "KnowledgeBase":
        """Load from a JSON file with the same sections as :meth:`from_dict`."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise KnowledgeBaseError(f"Cannot read knowledge base {path}: {exc}") from exc

        kb = cls.from_dict(data)
        logger.info("Loaded knowledge base from %s (%s)", path, kb.summary())
        return kb

    @classmethod
    def from_defaults(cls) -> "KnowledgeBase":
        """Built-in reference data."""
        return cls.from_dict(
            {
                "diseases": CHRONIC_DISEASES,
                "keywords": DISEASE_KEYWORDS,
                "medications": MEDICATION_DISEASE_MAP,
            }
        )

    # Queries

    @property
    def diseases(self) -> list[ChronicDisease]:
        return list(self._diseases.values())

    def get_disease(self, disease_id: str) -> Optional[ChronicDisease]:
        return self._diseases.get(disease_id)

    def disease_name(self, disease_id: str) -> str:
        """Display name for a disease id, falling back to the id."""
        disease = self._diseases.get(disease_id)
        return disease.name if disease else disease_id

    def diseases_by_category(self, category: str) -> list[ChronicDisease]:
        return [d for d in self._diseases.values() if d.category.value == category]

    def search_diseases(self, query: str) -> list[ChronicDisease]:
        """Case-insensitive substring search over name, description and category."""
        query = query.strip().lower()
        if not query:
            return self.diseases
        return [
            d
            for d in self._diseases.values()
            if query in d.name.lower()
            or query in d.description.lower()
            or query in d.category.value
        ]

    def keyword_entries(self) -> Iterator[tuple[str, DiseaseKeywordEntry]]:
        """(disease_id, keyword entry) pairs in catalog order."""
        return iter(self._keywords.items())

    def medication_mappings(self, medication_name: str) -> tuple[MedicationDiseaseMapping, ...]:
        """Mappings for an exact generic name (case-insensitive)."""
        return self._medications.get(medication_name.strip().lower(), ())

    @property
    def medication_names(self) -> list[str]:
        return list(self._medications)

    def summary(self) -> str:
        return (
            f"{len(self._diseases)} diseases, {len(self._keywords)} keyword entries, "
            f"{len(self._medications)} medications"
        )


def _mapping_row(row: Any) -> MedicationDiseaseMapping:
    if isinstance(row, Mapping):
        return MedicationDiseaseMapping(**row)
    disease_id, disease_name, likelihood, medication_class = row
    return MedicationDiseaseMapping(
        disease_id=disease_id,
        disease_name=disease_name,
        likelihood=likelihood,
        medication_class=medication_class,
    )


@lru_cache(maxsize=1)
def load_knowledge_base(path: Optional[str] = None) -> KnowledgeBase:
    """Process-wide knowledge base, loaded on first call.

    Args:
        path: JSON file to load. Defaults to ``settings.knowledge_base_path``,
            then to the built-in data.
    """
    path = path or settings.knowledge_base_path
    if path:
        return KnowledgeBase.from_json(path)
    return KnowledgeBase.from_defaults()
