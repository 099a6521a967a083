"""Confidence Stage - Aggregate stage scores into one result score.

- ocr: extraction confidence
- medication_parsing: share of candidate lines that produced an entry
- disease_detection: mean detection confidence (1.0 when nothing detected)
- overall: unweighted mean of the three
"""

from typing import Sequence

from rxint.models import DetectedDisease, ExtractionResult, OverallConfidence


def clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def disease_detection_score(diseases: Sequence[DetectedDisease]) -> float:
    """Mean confidence of detections. No detections is not a failure."""
    if not diseases:
        return 1.0
    return clamp(sum(d.confidence for d in diseases) / len(diseases))


def medication_parsing_score(parsed_lines: int, candidate_lines: int) -> float:
    """Share of candidate lines that yielded an entry. No candidates is not a failure."""
    if candidate_lines <= 0:
        return 1.0
    return clamp(parsed_lines / candidate_lines)


def aggregate_confidence(
    extraction: ExtractionResult,
    parsed_lines: int,
    candidate_lines: int,
    diseases: Sequence[DetectedDisease],
) -> OverallConfidence:
    """Combine per-stage scores."""
    ocr = clamp(extraction.confidence)
    parsing = medication_parsing_score(parsed_lines, candidate_lines)
    detection = disease_detection_score(diseases)

    return OverallConfidence(
        overall=clamp((ocr + parsing + detection) / 3),
        ocr=ocr,
        disease_detection=detection,
        medication_parsing=parsing,
    )
