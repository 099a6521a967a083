"""Configuration management for the Prescription Intelligence Pipeline."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Upload policy
    allowed_image_types: list[str] = ["image/jpeg", "image/png", "image/webp"]
    allowed_document_types: list[str] = ["application/pdf"]
    max_upload_bytes: int = 10 * 1024 * 1024

    # Image preprocessing
    max_image_dimension: int = 2000

    # PDF handling
    pdf_max_text_pages: int = 5
    pdf_min_text_length: int = 50
    pdf_render_scale: float = 2.0
    pdf_text_confidence: float = 0.95

    # Tesseract
    ocr_language: str = "eng"
    ocr_psm: int = 6
    ocr_oem: int = 3

    # Detection and scoring
    explicit_match_confidence: float = 0.85
    review_threshold: float = 0.5

    # Knowledge base override (JSON); built-in data when unset
    knowledge_base_path: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    @property
    def allowed_types(self) -> list[str]:
        """All accepted MIME types."""
        return [*self.allowed_image_types, *self.allowed_document_types]

    class Config:
        env_prefix = "RXINT_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
