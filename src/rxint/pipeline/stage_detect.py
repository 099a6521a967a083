"""Disease Detection Stage - Infer chronic conditions.

Two independent signals, merged per disease:

- Explicit: disease keywords, abbreviations and related terms found in
  the recognized text. Fixed base confidence.
- Medication-inferred: consolidated medication names looked up (exact,
  lowercase) in the medication map. Confidence is the table likelihood.

When both signals hit the same disease the higher confidence is kept,
terms and medications are unioned, and the explicit source wins.
"""

import logging
import re
from functools import lru_cache
from typing import Iterable, Optional

from rxint.config import settings
from rxint.knowledge import KnowledgeBase
from rxint.models import DetectedDisease, DetectionSource, ParsedMedicationEntry

logger = logging.getLogger(__name__)

CONTEXT_CHARS = 50
MAX_CONTEXTS = 3
CONTEXT_SEPARATOR = " ... "


def normalize_text(text: str) -> str:
    """Lowercase, replace punctuation with spaces, collapse whitespace."""
    text = re.sub(r"[^\w\s]", " ", text.lower())
    return re.sub(r"\s+", " ", text).strip()


@lru_cache(maxsize=1024)
def term_pattern(term: str) -> re.Pattern:
    """Whole-word pattern for a normalized term."""
    return re.compile(rf"\b{re.escape(normalize_text(term))}\b")


def extract_context(text: str, term: str, limit: int = MAX_CONTEXTS) -> list[str]:
    """Excerpts of the original text around a term."""
    pattern = re.compile(
        rf".{{0,{CONTEXT_CHARS}}}\b{re.escape(term)}\b.{{0,{CONTEXT_CHARS}}}",
        re.IGNORECASE,
    )
    snippets = []
    for match in pattern.finditer(text):
        snippets.append(match.group(0).strip())
        if len(snippets) >= limit:
            break
    return snippets


def merge_detections(
    existing: DetectedDisease,
    incoming: DetectedDisease,
) -> DetectedDisease:
    """Combine two detections of the same disease."""
    explicit = DetectionSource.EXPLICIT
    if incoming.source == explicit and existing.source != explicit:
        primary = incoming
    else:
        primary = existing

    return primary.model_copy(
        update={
            "confidence": max(existing.confidence, incoming.confidence),
            "matched_terms": existing.matched_terms | incoming.matched_terms,
            "related_medications": existing.related_medications | incoming.related_medications,
        }
    )


def merge_all(*groups: Iterable[DetectedDisease]) -> list[DetectedDisease]:
    """Merge detections to one per disease, sorted by descending confidence."""
    merged: dict[str, DetectedDisease] = {}
    for group in groups:
        for detection in group:
            current = merged.get(detection.disease_id)
            merged[detection.disease_id] = (
                detection if current is None else merge_detections(current, detection)
            )
    return sorted(merged.values(), key=lambda d: d.confidence, reverse=True)


class DiseaseDetector:
    """Matches text and medications against the knowledge base."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        explicit_confidence: Optional[float] = None,
    ):
        """Initialize detector.

        Args:
            knowledge_base: Reference data to match against.
            explicit_confidence: Confidence for keyword hits (default from settings).
        """
        self.knowledge_base = knowledge_base
        self.explicit_confidence = (
            explicit_confidence
            if explicit_confidence is not None
            else settings.explicit_match_confidence
        )

    def detect_explicit(self, text: str) -> list[DetectedDisease]:
        """Find diseases mentioned by name, abbreviation or related term."""
        normalized = normalize_text(text)
        if not normalized:
            return []

        detections = []
        for disease_id, entry in self.knowledge_base.keyword_entries():
            matched: list[tuple[str, str]] = []  # (term as searched, term as reported)
            for term in entry.keywords:
                if term_pattern(term).search(normalized):
                    matched.append((term, term))
            for abbreviation in entry.abbreviations:
                if term_pattern(abbreviation).search(normalized):
                    matched.append((abbreviation, abbreviation.upper()))
            for term in entry.related_terms:
                if term_pattern(term).search(normalized):
                    matched.append((term, term))

            if not matched:
                continue

            contexts = []
            for term, _reported in matched:
                contexts.extend(extract_context(text, term))

            detections.append(
                DetectedDisease(
                    disease_id=disease_id,
                    disease_name=self.knowledge_base.disease_name(disease_id),
                    confidence=self.explicit_confidence,
                    matched_terms={reported for _term, reported in matched},
                    context=CONTEXT_SEPARATOR.join(contexts[:MAX_CONTEXTS]),
                    source=DetectionSource.EXPLICIT,
                )
            )

        return detections

    def detect_from_medications(self, medication_names: Iterable[str]) -> list[DetectedDisease]:
        """One candidate per (medication, mapped disease) pair."""
        detections = []
        for name in medication_names:
            for mapping in self.knowledge_base.medication_mappings(name):
                detections.append(
                    DetectedDisease(
                        disease_id=mapping.disease_id,
                        disease_name=mapping.disease_name,
                        confidence=mapping.likelihood,
                        matched_terms={mapping.medication_class},
                        context=f"Inferred from medication: {name}",
                        source=DetectionSource.MEDICATION_INFERRED,
                        related_medications={name},
                    )
                )
        return detections

    def detect(
        self,
        text: str,
        medications: Iterable[ParsedMedicationEntry] = (),
    ) -> list[DetectedDisease]:
        """Detect diseases from both signals and merge them."""
        explicit = self.detect_explicit(text)
        inferred = self.detect_from_medications(m.name for m in medications)
        diseases = merge_all(explicit, inferred)

        logger.info(
            "Detected %d diseases (%d explicit hits, %d medication hits)",
            len(diseases), len(explicit), len(inferred),
        )
        return diseases
