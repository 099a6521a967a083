"""Tests for PDF extraction stage."""

from unittest.mock import MagicMock, patch

import fitz
import numpy as np
import pytest

from rxint.exceptions import PreprocessError
from rxint.models import ExtractionStrategy
from rxint.pipeline.stage_render import PDFProcessor, pixmap_to_array


def make_pixmap(height=4, width=6, channels=3, value=255):
    """Pixmap double with raw samples."""
    pixmap = MagicMock()
    pixmap.height = height
    pixmap.width = width
    pixmap.n = channels
    pixmap.samples = np.full((height, width, channels), value, dtype=np.uint8).tobytes()
    return pixmap


def make_pdf_doc(page, page_count=1):
    """PDF document double whose every page is ``page``."""
    pdf_doc = MagicMock()
    pdf_doc.__len__.return_value = page_count
    pdf_doc.__getitem__.return_value = page
    return pdf_doc


class TestPixmapToArray:
    """Tests for pixmap conversion."""

    def test_rgb_pixmap(self):
        """RGB samples become a BGR array of the same size."""
        image = pixmap_to_array(make_pixmap(height=4, width=6, channels=3))
        assert image.shape == (4, 6, 3)
        assert image.dtype == np.uint8

    def test_gray_pixmap(self):
        """Single-channel samples become a 2D array."""
        image = pixmap_to_array(make_pixmap(channels=1, value=7))
        assert image.shape == (4, 6)
        assert np.all(image == 7)

    def test_rgba_pixmap(self):
        """Alpha channel is dropped."""
        image = pixmap_to_array(make_pixmap(channels=4))
        assert image.shape == (4, 6, 3)


class TestPDFProcessor:
    """Tests for PDF strategy selection."""

    @pytest.fixture
    def processor(self):
        """Processor with explicit settings."""
        return PDFProcessor(max_text_pages=5, min_text_length=50, render_scale=2.0)

    @pytest.fixture
    def text_page(self):
        """Page with two text blocks and one image block."""
        page = MagicMock()
        page.get_text.return_value = [
            (72.0, 100.0, 300.0, 120.0, "Metformin 500mg BD\n", 0, 0),
            (72.0, 130.0, 300.0, 150.0, "Amlodipine 5mg OD 30 days after meals\n", 1, 0),
            (72.0, 200.0, 200.0, 300.0, "<image: DeviceRGB>", 2, 1),
        ]
        return page

    def test_processor_initialization(self, processor):
        """Processor keeps its settings."""
        assert processor.max_text_pages == 5
        assert processor.min_text_length == 50
        assert processor.render_scale == 2.0
        assert processor.text_confidence == 0.95

    @patch("rxint.pipeline.stage_render.fitz")
    def test_text_layer_used_when_long_enough(self, mock_fitz, processor, text_page):
        """Digital PDFs are read directly without OCR."""
        mock_fitz.VersionBind = "1.24.0"
        pdf_doc = make_pdf_doc(text_page, page_count=1)
        mock_fitz.open.return_value = pdf_doc

        outcome = processor.process(b"%PDF-1.4 test")

        assert outcome.strategy == ExtractionStrategy.PDF_TEXT_LAYER
        assert not outcome.needs_ocr
        result = outcome.result
        assert result.confidence == 0.95
        assert result.engine == "pymupdf"
        assert "Metformin 500mg BD" in result.text
        assert "<image" not in result.text
        assert len(result.blocks) == 2
        assert result.blocks[0].bbox.x0 == 72.0
        assert result.blocks[0].page_number == 1
        pdf_doc.close.assert_called_once()

    @patch("rxint.pipeline.stage_render.fitz")
    def test_text_layer_reads_at_most_max_pages(self, mock_fitz, text_page):
        """Only the first pages are read."""
        mock_fitz.VersionBind = "1.24.0"
        mock_fitz.open.return_value = make_pdf_doc(text_page, page_count=9)

        outcome = PDFProcessor(max_text_pages=2, min_text_length=10).process(b"%PDF")

        assert text_page.get_text.call_count == 2
        assert [b.page_number for b in outcome.result.blocks] == [1, 1, 2, 2]

    @patch("rxint.pipeline.stage_render.fitz")
    def test_short_text_falls_back_to_render(self, mock_fitz, processor):
        """Scanned PDFs with little or no text are rendered for OCR."""
        mock_fitz.VersionBind = "1.24.0"
        page = MagicMock()
        page.get_text.return_value = [(0.0, 0.0, 10.0, 10.0, "Rx", 0, 0)]
        page.get_pixmap.return_value = make_pixmap(height=8, width=5)
        mock_fitz.open.return_value = make_pdf_doc(page)

        outcome = processor.process(b"%PDF")

        assert outcome.strategy == ExtractionStrategy.PDF_RENDER_OCR
        assert outcome.needs_ocr
        assert outcome.image.shape == (8, 5, 3)
        mock_fitz.Matrix.assert_called_once_with(2.0, 2.0)
        page.get_pixmap.assert_called_once_with(matrix=mock_fitz.Matrix.return_value, alpha=False)

    @patch("rxint.pipeline.stage_render.fitz")
    def test_text_extraction_error_falls_back_to_render(self, mock_fitz, processor):
        """A broken text layer is not fatal."""
        page = MagicMock()
        page.get_text.side_effect = RuntimeError("broken content stream")
        page.get_pixmap.return_value = make_pixmap()
        mock_fitz.open.return_value = make_pdf_doc(page)

        outcome = processor.process(b"%PDF")

        assert outcome.needs_ocr
        assert outcome.image is not None

    @patch("rxint.pipeline.stage_render.fitz")
    def test_open_failure(self, mock_fitz, processor):
        """Undecodable PDFs raise PreprocessError."""
        mock_fitz.open.side_effect = RuntimeError("cannot open broken document")

        with pytest.raises(PreprocessError):
            processor.process(b"not a pdf")

    @patch("rxint.pipeline.stage_render.fitz")
    def test_empty_pdf(self, mock_fitz, processor):
        """A PDF without pages is rejected and closed."""
        pdf_doc = make_pdf_doc(MagicMock(), page_count=0)
        mock_fitz.open.return_value = pdf_doc

        with pytest.raises(PreprocessError, match="no pages"):
            processor.process(b"%PDF")
        pdf_doc.close.assert_called_once()

    @patch("rxint.pipeline.stage_render.fitz")
    def test_render_failure(self, mock_fitz, processor):
        """Render errors surface as PreprocessError and the document is closed."""
        page = MagicMock()
        page.get_text.return_value = []
        page.get_pixmap.side_effect = RuntimeError("render failed")
        pdf_doc = make_pdf_doc(page)
        mock_fitz.open.return_value = pdf_doc

        with pytest.raises(PreprocessError):
            processor.process(b"%PDF")
        pdf_doc.close.assert_called_once()


class TestPDFProcessorWithRealDocuments:
    """Tests against PDFs built in memory with PyMuPDF."""

    def test_digital_pdf(self):
        """Embedded text is extracted from the text layer."""
        pdf_doc = fitz.open()
        page = pdf_doc.new_page()
        page.insert_text((72, 100), "Metformin 500mg BD", fontsize=12)
        page.insert_text((72, 130), "Amlodipine 5mg OD for hypertension control", fontsize=12)
        content = pdf_doc.tobytes()
        pdf_doc.close()

        outcome = PDFProcessor(min_text_length=50).process(content)

        assert outcome.strategy == ExtractionStrategy.PDF_TEXT_LAYER
        assert "Metformin 500mg BD" in outcome.result.text
        assert "Amlodipine" in outcome.result.text

    def test_blank_pdf_is_rendered(self):
        """A page with no text is rendered at the configured scale."""
        pdf_doc = fitz.open()
        pdf_doc.new_page(width=100, height=50)
        content = pdf_doc.tobytes()
        pdf_doc.close()

        outcome = PDFProcessor(render_scale=2.0).process(content)

        assert outcome.needs_ocr
        assert outcome.image.shape == (100, 200, 3)

    def test_text_layer_boxes_in_page_points(self):
        """Text-layer boxes stay in page coordinates, not render pixels."""
        pdf_doc = fitz.open()
        page = pdf_doc.new_page(width=595, height=842)
        page.insert_text((72, 100), "Metformin 500mg BD for type 2 diabetes mellitus", fontsize=12)
        content = pdf_doc.tobytes()
        pdf_doc.close()

        outcome = PDFProcessor(min_text_length=10, render_scale=2.0).process(content)

        (block,) = outcome.result.blocks
        assert block.bbox.x0 == pytest.approx(72, abs=1)
        assert block.bbox.y1 < 842
        assert block.page_number == 1
