"""Tests for OCR stage."""

import threading
from unittest.mock import patch

import numpy as np
import pytest
import pytesseract

from rxint.exceptions import OCRInitError, OCRRecognitionError
from rxint.models import ExtractionStrategy
from rxint.pipeline.stage_ocr import TesseractOCR, blocks_from_data, to_pil_image


@pytest.fixture
def tesseract_data():
    """image_to_data output for two blocks, with structural rows."""
    return {
        "text": ["", "Metformin", "500mg", "BD", "", "Amlodipine", "5mg"],
        "conf": [-1, 96, 90, 84, -1, 80, 70],
        "left": [0, 10, 100, 160, 0, 10, 110],
        "top": [0, 20, 20, 22, 0, 60, 60],
        "width": [400, 80, 50, 20, 0, 90, 40],
        "height": [300, 15, 15, 12, 0, 15, 15],
        "block_num": [1, 1, 1, 1, 2, 2, 2],
        "par_num": [0, 1, 1, 1, 0, 1, 1],
        "line_num": [0, 1, 1, 1, 0, 1, 1],
    }


@pytest.fixture
def available_tesseract():
    """Patch pytesseract so the binary appears installed."""
    with patch.object(pytesseract, "get_tesseract_version", return_value="5.3.0"), \
            patch.object(pytesseract, "get_languages", return_value=["eng", "osd"]):
        yield


class TestBlocksFromData:
    """Tests for grouping word data into blocks."""

    def test_groups_words_by_block(self, tesseract_data):
        """Words join into lines and lines into blocks."""
        text, confidence, blocks = blocks_from_data(tesseract_data)

        assert text == "Metformin 500mg BD\nAmlodipine 5mg"
        assert [b.text for b in blocks] == ["Metformin 500mg BD", "Amlodipine 5mg"]
        assert confidence == pytest.approx(0.84)
        assert blocks[0].confidence == pytest.approx(0.9)
        assert blocks[1].confidence == pytest.approx(0.75)

    def test_block_bbox_encloses_words(self, tesseract_data):
        """Block boxes are the union of word boxes."""
        _, _, blocks = blocks_from_data(tesseract_data)

        bbox = blocks[0].bbox
        assert (bbox.x0, bbox.y0, bbox.x1, bbox.y1) == (10, 20, 180, 35)

    def test_multiple_lines_in_block(self):
        """Separate line numbers become separate text lines."""
        data = {
            "text": ["Metformin", "500mg", "Amlodipine"],
            "conf": ["91.5", "88", "75"],
            "left": [10, 100, 10],
            "top": [20, 20, 50],
            "width": [80, 50, 90],
            "height": [15, 15, 15],
            "block_num": [1, 1, 1],
            "par_num": [1, 1, 1],
            "line_num": [1, 1, 2],
        }
        text, _, blocks = blocks_from_data(data)

        assert text == "Metformin 500mg\nAmlodipine"
        assert len(blocks) == 1

    def test_no_words(self):
        """Empty recognition gives empty text and zero confidence."""
        data = {key: [] for key in ("text", "conf", "left", "top", "width", "height",
                                    "block_num", "par_num", "line_num")}
        assert blocks_from_data(data) == ("", 0.0, [])


class TestToPilImage:
    """Tests for array to PIL conversion."""

    def test_grayscale(self):
        assert to_pil_image(np.zeros((10, 20), dtype=np.uint8)).mode == "L"

    def test_color(self):
        assert to_pil_image(np.zeros((10, 20, 3), dtype=np.uint8)).mode == "RGB"


class TestTesseractOCR:
    """Tests for engine lifecycle and recognition."""

    @pytest.fixture
    def engine(self):
        """Engine with default settings."""
        return TesseractOCR(language="eng", psm=6, oem=3)

    def test_engine_initialization(self, engine):
        """Creating the handle loads nothing."""
        assert engine.language == "eng"
        assert engine.psm == 6
        assert not engine.is_initialized
        assert engine.version is None

    def test_build_config(self):
        """Config string includes psm, oem and extras."""
        engine = TesseractOCR(psm=4, oem=1, config="-c preserve_interword_spaces=1")
        assert engine._build_config() == "--psm 4 --oem 1 -c preserve_interword_spaces=1"

    def test_initialize_is_idempotent(self, engine, available_tesseract):
        """Second initialize does not query Tesseract again."""
        engine.initialize()
        engine.initialize()

        assert engine.is_initialized
        assert engine.version == "5.3.0"
        assert pytesseract.get_tesseract_version.call_count == 1

    def test_initialize_without_binary(self, engine):
        """Missing binary raises OCRInitError."""
        with patch.object(
            pytesseract, "get_tesseract_version", side_effect=pytesseract.TesseractNotFoundError()
        ):
            with pytest.raises(OCRInitError):
                engine.initialize()
        assert not engine.is_initialized

    def test_initialize_missing_language(self, available_tesseract):
        """Requested language data must be installed."""
        engine = TesseractOCR(language="eng+hin")
        with pytest.raises(OCRInitError, match="hin"):
            engine.initialize()

    def test_recognize_before_initialize(self, engine):
        """Recognition needs an initialized engine."""
        with pytest.raises(OCRInitError):
            engine.recognize(np.zeros((10, 10), dtype=np.uint8))

    def test_recognize(self, engine, available_tesseract, tesseract_data):
        """Recognition returns text, blocks and engine provenance."""
        engine.initialize()
        with patch.object(pytesseract, "image_to_data", return_value=tesseract_data) as mock_data:
            result = engine.recognize(np.full((50, 50), 255, dtype=np.uint8))

        assert result.text == "Metformin 500mg BD\nAmlodipine 5mg"
        assert result.confidence == pytest.approx(0.84)
        assert len(result.blocks) == 2
        assert result.strategy == ExtractionStrategy.IMAGE_OCR
        assert result.engine == "tesseract"
        assert result.engine_version == "5.3.0"
        assert mock_data.call_args.kwargs["lang"] == "eng"
        assert mock_data.call_args.kwargs["config"] == "--psm 6 --oem 3"

    def test_recognize_failure(self, engine, available_tesseract):
        """Tesseract errors become OCRRecognitionError."""
        engine.initialize()
        with patch.object(
            pytesseract, "image_to_data", side_effect=pytesseract.TesseractError(1, "bad image")
        ):
            with pytest.raises(OCRRecognitionError):
                engine.recognize(np.zeros((10, 10), dtype=np.uint8))

        # The engine stays usable for the next document
        assert engine.is_initialized

    def test_terminate(self, engine, available_tesseract):
        """Terminate releases the handle and is safe to repeat."""
        engine.terminate()
        engine.initialize()
        engine.terminate()
        engine.terminate()

        assert not engine.is_initialized

    def test_context_manager(self, available_tesseract):
        """The engine is initialized inside the block and released after."""
        with TesseractOCR() as engine:
            assert engine.is_initialized
        assert not engine.is_initialized

    def test_concurrent_recognition_is_serialized(self, engine, available_tesseract, tesseract_data):
        """Only one recognition runs at a time on one engine."""
        engine.initialize()
        in_flight = []
        overlaps = []
        guard = threading.Lock()

        def fake_image_to_data(*args, **kwargs):
            with guard:
                in_flight.append(1)
                if len(in_flight) > 1:
                    overlaps.append(True)
            threading.Event().wait(0.01)
            with guard:
                in_flight.pop()
            return tesseract_data

        image = np.zeros((10, 10), dtype=np.uint8)
        with patch.object(pytesseract, "image_to_data", side_effect=fake_image_to_data):
            threads = [threading.Thread(target=engine.recognize, args=(image,)) for _ in range(4)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert overlaps == []
