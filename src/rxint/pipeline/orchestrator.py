"""Pipeline orchestration - one document in, one AnalysisResult out.

Data flow:
    bytes -> validate -> preprocess / PDF strategy -> OCR -> parse
          -> consolidate -> detect diseases -> aggregate confidence

The OCR engine is injected and owned by the caller; the pipeline only
initializes it (idempotently) when a document actually needs OCR.
"""

import logging
import warnings
from datetime import datetime
from typing import Optional

from rxint.config import settings
from rxint.exceptions import EmptyResultWarning
from rxint.knowledge import KnowledgeBase, load_knowledge_base
from rxint.models import AnalysisResult, Document, ExtractionResult, ExtractionStrategy
from rxint.pipeline.stage_confidence import aggregate_confidence
from rxint.pipeline.stage_consolidate import consolidate
from rxint.pipeline.stage_detect import DiseaseDetector
from rxint.pipeline.stage_ocr import TesseractOCR
from rxint.pipeline.stage_parse import MedicationLineParser
from rxint.pipeline.stage_preprocess import ImagePreprocessor
from rxint.pipeline.stage_render import PDFProcessor
from rxint.pipeline.stage_validate import DocumentValidator

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Prescription analysis pipeline.

    Stateless between calls apart from the shared OCR engine and the
    read-only knowledge base, so one instance can serve many documents.
    """

    def __init__(
        self,
        ocr_engine: TesseractOCR,
        knowledge_base: Optional[KnowledgeBase] = None,
        validator: Optional[DocumentValidator] = None,
        preprocessor: Optional[ImagePreprocessor] = None,
        pdf_processor: Optional[PDFProcessor] = None,
        parser: Optional[MedicationLineParser] = None,
        detector: Optional[DiseaseDetector] = None,
        review_threshold: Optional[float] = None,
    ):
        """Initialize pipeline.

        Args:
            ocr_engine: Shared OCR engine handle.
            knowledge_base: Reference data (default: process-wide knowledge base).
            validator: Upload policy check.
            preprocessor: Image normalization.
            pdf_processor: PDF strategy selection.
            parser: Medication line parser.
            detector: Disease detector (built from knowledge_base if omitted).
            review_threshold: Overall score below which results are flagged.
        """
        self.ocr_engine = ocr_engine
        self.knowledge_base = knowledge_base or load_knowledge_base()
        self.validator = validator or DocumentValidator()
        self.preprocessor = preprocessor or ImagePreprocessor()
        self.pdf_processor = pdf_processor or PDFProcessor()
        self.parser = parser or MedicationLineParser()
        self.detector = detector or DiseaseDetector(self.knowledge_base)
        self.review_threshold = (
            review_threshold if review_threshold is not None else settings.review_threshold
        )

    def extract(self, document: Document) -> ExtractionResult:
        """Validate a document and extract its text.

        Raises:
            ValidationError: Rejected by upload policy.
            PreprocessError: Undecodable image or PDF.
            OCRInitError: OCR engine unavailable.
            OCRRecognitionError: OCR failed on this document.
        """
        self.validator.validate_document(document)

        if document.is_pdf:
            outcome = self.pdf_processor.process(document.content)
            if not outcome.needs_ocr:
                return outcome.result
            image = self.preprocessor.preprocess(outcome.image)
            return self._recognize(image).model_copy(
                update={"strategy": ExtractionStrategy.PDF_RENDER_OCR}
            )

        image = self.preprocessor.preprocess_bytes(document.content)
        return self._recognize(image)

    def _recognize(self, image) -> ExtractionResult:
        self.ocr_engine.initialize()
        return self.ocr_engine.recognize(image)

    def analyze_extraction(
        self,
        extraction: ExtractionResult,
        prescription_id: Optional[str] = None,
        uploaded_at: Optional[datetime] = None,
    ) -> AnalysisResult:
        """Run the text stages (parse, consolidate, detect, score) on extracted text."""
        report = self.parser.parse(extraction.text)
        medications = consolidate(report.entries)
        diseases = self.detector.detect(extraction.text, medications)
        confidence = aggregate_confidence(
            extraction,
            parsed_lines=report.parsed_lines,
            candidate_lines=report.candidate_lines,
            diseases=diseases,
        )

        result_fields = {}
        if uploaded_at is not None:
            result_fields["uploaded_at"] = uploaded_at

        result = AnalysisResult(
            prescription_id=prescription_id,
            extraction=extraction,
            medications=medications,
            diseases=diseases,
            confidence=confidence,
            needs_review=confidence.overall < self.review_threshold,
            **result_fields,
        )

        if result.is_empty:
            logger.warning("No medications or diseases found")
            warnings.warn(
                "Analysis found no medications and no diseases",
                EmptyResultWarning,
                stacklevel=2,
            )

        logger.info(
            "Analysis complete: %d medications, %d diseases, overall confidence %.2f",
            len(medications), len(diseases), confidence.overall,
        )
        return result

    def analyze(
        self,
        document: Document,
        prescription_id: Optional[str] = None,
        uploaded_at: Optional[datetime] = None,
    ) -> AnalysisResult:
        """Analyze one prescription document end to end."""
        extraction = self.extract(document)
        return self.analyze_extraction(
            extraction,
            prescription_id=prescription_id,
            uploaded_at=uploaded_at,
        )
