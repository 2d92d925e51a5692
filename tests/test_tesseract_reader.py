"""Tests for the Tesseract text reader."""

import asyncio

import numpy as np
import pytest

from screenkit.data.models import Image, Region
from screenkit.errors import OcrFailure
from screenkit.ocr.job import Progress, RecognitionJob
from screenkit.ocr.language import Language
from screenkit.ocr.page import BBox, Block, Line, Page, Paragraph, Word
from screenkit.ocr.tesseract_reader import TesseractReader
from screenkit.utils.logger import get_logger


class FakeWorker:
    """Worker double returning already settled jobs."""

    def __init__(self, page: Page = None, error: Exception = None):
        self.page = page
        self.error = error
        self.calls = []
        self.terminated = False

    def recognize(self, image, language=Language.ENG, options=None):
        self.calls.append((image, language, options))
        job = RecognitionJob()
        job.report_progress(Progress("recognizing text", 0.5))
        if self.error is not None:
            job.fail(self.error)
        else:
            job.succeed(self.page)
        return job

    def terminate(self):
        self.terminated = True


def make_image() -> Image:
    return Image.from_array(np.zeros((50, 200, 3), dtype=np.uint8))


def three_word_page() -> Page:
    words = [
        Word("File", 0.91, BBox(0, 0, 30, 12)),
        Word("Edit", 0.87, BBox(40, 0, 70, 12)),
        Word("View", 0.78, BBox(80, 0, 115, 12)),
    ]
    line = Line(bbox=BBox(0, 0, 115, 12), words=words)
    paragraph = Paragraph(bbox=line.bbox, lines=[line])
    return Page(blocks=[Block(bbox=line.bbox, paragraphs=[paragraph])])


def test_read_page_text():
    """Test full-text extraction."""
    log = get_logger()
    log.info("Testing read_page...")

    reader = TesseractReader(FakeWorker(three_word_page()))
    text = asyncio.run(reader.read_page(make_image()))

    assert text == "File Edit View"

    log.info("PASSED: read_page")


def test_read_words_in_order():
    """Test word results keep order, confidence and boxes."""
    log = get_logger()
    log.info("Testing read_words...")

    reader = TesseractReader(FakeWorker(three_word_page()))
    words = asyncio.run(reader.read_words(make_image()))

    assert [w.text for w in words] == ["File", "Edit", "View"]
    assert [w.confidence for w in words] == [0.91, 0.87, 0.78]
    assert words[0].bounding_box == Region(0, 0, 30, 12)
    assert len({w.bounding_box for w in words}) == 3, "Bounding boxes should be distinct"

    log.info("PASSED: read_words")


def test_default_language_is_english():
    """Test that omitting the language uses English."""
    worker = FakeWorker(three_word_page())
    reader = TesseractReader(worker)

    asyncio.run(reader.read_page(make_image()))
    asyncio.run(reader.read_words(make_image(), Language.FRA))

    assert worker.calls[0][1] == Language.ENG
    assert worker.calls[1][1] == Language.FRA


def test_options_passed_to_worker():
    """Test reader options reach every job."""
    worker = FakeWorker(three_word_page())
    reader = TesseractReader(worker, options={"psm": 11})

    asyncio.run(reader.read_page(make_image()))

    assert worker.calls[0][2] == {"psm": 11}


def test_engine_error_raises_ocr_failure():
    """Test that a failed job raises instead of returning an empty result."""
    log = get_logger()
    log.info("Testing OCR failure...")

    reader = TesseractReader(FakeWorker(error=RuntimeError("bad image")))

    with pytest.raises(OcrFailure) as exc_info:
        asyncio.run(reader.read_words(make_image()))
    assert isinstance(exc_info.value.__cause__, RuntimeError)

    with pytest.raises(OcrFailure):
        asyncio.run(reader.read_page(make_image()))

    log.info("PASSED: OCR failure")


def test_ocr_failure_passed_through():
    """Test that OcrFailure from the worker is raised as is."""
    error = OcrFailure("Tesseract worker terminated")
    reader = TesseractReader(FakeWorker(error=error))

    with pytest.raises(OcrFailure) as exc_info:
        asyncio.run(reader.read_page(make_image()))

    assert exc_info.value is error


def test_empty_page():
    """Test an image without text gives empty results."""
    reader = TesseractReader(FakeWorker(Page()))

    assert asyncio.run(reader.read_page(make_image())) == ""
    assert asyncio.run(reader.read_words(make_image())) == []


def test_terminate():
    """Test terminate releases the worker."""
    worker = FakeWorker(Page())
    TesseractReader(worker).terminate()
    assert worker.terminated
