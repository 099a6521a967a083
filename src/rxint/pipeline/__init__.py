"""Pipeline stages for prescription analysis.

Stages, in order:
1. stage_validate - MIME type and size policy
2. stage_preprocess - Downscale, grayscale, contrast stretch
3. stage_render - PDF text layer, or first page rendered for OCR
4. stage_ocr - Tesseract recognition with block confidence
5. stage_parse - Heuristic medication line parsing
6. stage_consolidate - Deduplicate entries by name
7. stage_detect - Keyword and medication based disease detection
8. stage_confidence - Aggregate confidence scores

Each stage can be used on its own or through AnalysisPipeline.
"""

from .orchestrator import AnalysisPipeline
from .stage_confidence import aggregate_confidence
from .stage_consolidate import consolidate, merge_entries
from .stage_detect import DiseaseDetector, merge_all, merge_detections
from .stage_ocr import TesseractOCR
from .stage_parse import MedicationLineParser, ParseReport, parse_medications
from .stage_preprocess import ImagePreprocessor, decode_image
from .stage_render import PDFExtraction, PDFProcessor
from .stage_schedule import DoseSchedule, schedule_for_frequency
from .stage_validate import DocumentValidator

__all__ = [
    # Orchestration
    "AnalysisPipeline",
    # Validation
    "DocumentValidator",
    # Preprocessing
    "ImagePreprocessor",
    "decode_image",
    # PDF
    "PDFExtraction",
    "PDFProcessor",
    # OCR
    "TesseractOCR",
    # Parsing
    "MedicationLineParser",
    "ParseReport",
    "parse_medications",
    "DoseSchedule",
    "schedule_for_frequency",
    # Consolidation
    "consolidate",
    "merge_entries",
    # Detection
    "DiseaseDetector",
    "merge_all",
    "merge_detections",
    # Scoring
    "aggregate_confidence",
]
