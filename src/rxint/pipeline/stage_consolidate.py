"""Consolidation Stage - Merge duplicate medication entries.

Entries are keyed by lowercase name. The first entry for a key is the
canonical one; later entries only fill fields that are still empty.
Output keeps the order of first appearance.
"""

import logging
from typing import Iterable

from rxint.models import ParsedMedicationEntry

logger = logging.getLogger(__name__)

MERGEABLE_FIELDS = ("strength", "form", "frequency", "instructions")


def merge_entries(
    existing: ParsedMedicationEntry,
    incoming: ParsedMedicationEntry,
) -> ParsedMedicationEntry:
    """Fill empty fields of ``existing`` from ``incoming``. Never overwrites."""
    updates = {
        name: getattr(incoming, name)
        for name in MERGEABLE_FIELDS
        if not getattr(existing, name) and getattr(incoming, name)
    }
    if not updates:
        return existing
    return existing.model_copy(update=updates)


def consolidate(entries: Iterable[ParsedMedicationEntry]) -> list[ParsedMedicationEntry]:
    """Deduplicate entries by normalized name, first non-empty value wins."""
    merged: dict[str, ParsedMedicationEntry] = {}
    total = 0

    for entry in entries:
        total += 1
        key = entry.normalized_name
        if key in merged:
            merged[key] = merge_entries(merged[key], entry)
        else:
            merged[key] = entry

    if total != len(merged):
        logger.info("Consolidated %d entries into %d medications", total, len(merged))
    return list(merged.values())
