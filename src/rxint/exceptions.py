"""Exceptions raised by the prescription analysis pipeline."""

from typing import Optional


class RxIntError(Exception):
    """Base exception for all pipeline errors."""


class ValidationError(RxIntError):
    """Document rejected by upload policy before any decoding."""

    def __init__(
        self,
        reason: str,
        declared_type: Optional[str] = None,
        size_bytes: Optional[int] = None,
    ):
        super().__init__(reason)
        self.reason = reason
        self.declared_type = declared_type
        self.size_bytes = size_bytes


class PreprocessError(RxIntError):
    """Document could not be decoded or rendered."""


class OCRError(RxIntError):
    """Base class for OCR engine failures."""


class OCRInitError(OCRError):
    """OCR engine unavailable. Retry initialization before the next attempt."""


class OCRRecognitionError(OCRError):
    """Recognition failed for a single document."""


class KnowledgeBaseError(RxIntError):
    """Knowledge base data is malformed or inconsistent."""


class EmptyResultWarning(UserWarning):
    """Analysis found neither medications nor diseases."""
