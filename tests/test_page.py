"""Tests for building pages from Tesseract output."""

from screenkit.ocr.page import BBox, Page
from screenkit.data.models import Region
from screenkit.utils.logger import get_logger

COLUMNS = ("level", "block_num", "par_num", "line_num", "left", "top", "width", "height", "conf", "text")


def make_data(rows):
    """Build an image_to_data column dict from row tuples."""
    data = {column: [] for column in COLUMNS}
    for row in rows:
        for column, value in zip(COLUMNS, row):
            data[column].append(value)
    return data


def two_paragraph_data():
    return make_data([
        (1, 0, 0, 0, 0, 0, 400, 200, -1, ""),
        (2, 1, 0, 0, 10, 10, 300, 100, -1, ""),
        (3, 1, 1, 0, 10, 10, 300, 40, -1, ""),
        (4, 1, 1, 1, 10, 10, 300, 20, -1, ""),
        (5, 1, 1, 1, 10, 10, 60, 20, 96, "Hello"),
        (5, 1, 1, 1, 80, 10, 60, 20, 90, "world"),
        (4, 1, 1, 2, 10, 30, 300, 20, -1, ""),
        (5, 1, 1, 2, 10, 30, 40, 20, 80, "again"),
        (5, 1, 1, 2, 60, 30, 10, 20, 95, " "),
        (3, 1, 2, 0, 10, 70, 300, 20, -1, ""),
        (4, 1, 2, 1, 10, 70, 300, 20, -1, ""),
        (5, 1, 2, 1, 10, 70, 50, 20, 70, "Bye"),
    ])


def test_structure_and_text():
    """Test hierarchy and joined text."""
    log = get_logger()
    log.info("Testing page structure...")

    page = Page.from_tesseract_data(two_paragraph_data())

    assert len(page.blocks) == 1
    block = page.blocks[0]
    assert len(block.paragraphs) == 2
    assert len(block.paragraphs[0].lines) == 2

    assert page.text == "Hello world\nagain\n\nBye", f"Unexpected text: {page.text!r}"

    log.info("PASSED: page structure")


def test_words_in_document_order():
    """Test that words keep reading order and drop blanks."""
    page = Page.from_tesseract_data(two_paragraph_data())

    assert [w.text for w in page.words] == ["Hello", "world", "again", "Bye"]
    assert page.words[1].bbox == BBox(80, 10, 140, 30)
    assert page.words[1].bbox.to_region() == Region(80, 10, 60, 20)


def test_confidence_normalized():
    """Test 0-100 scores become 0-1."""
    page = Page.from_tesseract_data(two_paragraph_data())

    confidences = [w.confidence for w in page.words]
    assert confidences == [0.96, 0.90, 0.80, 0.70]
    assert abs(page.confidence - 0.84) < 1e-9
    assert abs(page.blocks[0].paragraphs[0].lines[0].confidence - 0.93) < 1e-9


def test_negative_confidence_is_zero():
    """Test that -1 word scores map to zero."""
    data = make_data([(5, 1, 1, 1, 0, 0, 10, 10, -1, "x")])
    page = Page.from_tesseract_data(data)

    assert page.words[0].confidence == 0.0


def test_missing_parents_created():
    """Test word rows without block/paragraph/line rows."""
    data = make_data([
        (5, 1, 1, 1, 0, 0, 10, 10, 50, "one"),
        (5, 1, 1, 1, 20, 0, 10, 10, 50, "two"),
        (5, 2, 1, 1, 0, 50, 10, 10, 50, "three"),
    ])
    page = Page.from_tesseract_data(data)

    assert len(page.blocks) == 2
    assert page.text == "one two\n\nthree"


def test_empty_page():
    """Test an image with no text."""
    page = Page.from_tesseract_data(make_data([(1, 0, 0, 0, 0, 0, 100, 100, -1, "")]))

    assert page.words == []
    assert page.text == ""
    assert page.confidence == 0.0
