"""Validation Stage - Check upload policy before any decoding.

Pure check on the declared MIME type and the byte size. Runs first so
hostile or oversized input never reaches the decoders.
"""

import logging
from typing import Optional

from rxint.config import settings
from rxint.exceptions import ValidationError
from rxint.models import Document, normalize_mime_type

logger = logging.getLogger(__name__)


class DocumentValidator:
    """Allow-list and size policy for uploaded documents."""

    def __init__(
        self,
        allowed_types: Optional[list[str]] = None,
        max_bytes: Optional[int] = None,
    ):
        """Initialize validator.

        Args:
            allowed_types: Accepted MIME types (default from settings).
            max_bytes: Maximum document size in bytes (default from settings).
        """
        self.allowed_types = frozenset(
            normalize_mime_type(t) for t in (allowed_types or settings.allowed_types)
        )
        self.max_bytes = max_bytes or settings.max_upload_bytes

    def rejection_reason(self, content: bytes, declared_type: Optional[str]) -> Optional[str]:
        """Return why a document would be rejected, or None if it is acceptable."""
        mime_type = normalize_mime_type(declared_type)
        if mime_type not in self.allowed_types:
            allowed = ", ".join(sorted(self.allowed_types))
            return f"Unsupported file type '{declared_type}'. Allowed: {allowed}"

        size = len(content)
        if size == 0:
            return "Document is empty"
        if size > self.max_bytes:
            return (
                f"Document is {size / (1024 * 1024):.1f} MB, "
                f"limit is {self.max_bytes / (1024 * 1024):.0f} MB"
            )
        return None

    def validate(self, content: bytes, declared_type: Optional[str]) -> None:
        """Raise ValidationError if the document violates policy."""
        reason = self.rejection_reason(content, declared_type)
        if reason is not None:
            logger.error("Rejected document: %s", reason)
            raise ValidationError(reason, declared_type=declared_type, size_bytes=len(content))

    def validate_document(self, document: Document) -> None:
        self.validate(document.content, document.mime_type)
