"""Unit tests for the Tesseract worker (no tesseract binary required)."""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import numpy as np

from screenkit.data.models import Image
from screenkit.errors import OcrFailure
from screenkit.ocr.job import JobState
from screenkit.ocr.language import Language
from screenkit.ocr.tesseract_worker import TesseractWorker, to_pil
from screenkit.utils.logger import get_logger

WORD_DATA = {
    "level": [5, 5],
    "block_num": [1, 1],
    "par_num": [1, 1],
    "line_num": [1, 1],
    "left": [0, 50],
    "top": [0, 0],
    "width": [40, 40],
    "height": [20, 20],
    "conf": [91, 88],
    "text": ["Start", "Game"],
}


def make_image() -> Image:
    return Image.from_array(np.full((40, 120, 3), 255, dtype=np.uint8))


def mock_pytesseract(data=None, error=None) -> MagicMock:
    mock = MagicMock()
    mock.get_tesseract_version.return_value = "5.3.0"
    if error is not None:
        mock.image_to_data.side_effect = error
    else:
        mock.image_to_data.return_value = data if data is not None else WORD_DATA
    return mock


def test_recognize_success():
    """Test a job settles with the parsed page."""
    log = get_logger()
    log.info("Testing recognition job...")

    mock = mock_pytesseract()
    with patch("screenkit.ocr.tesseract_worker.pytesseract", mock):
        worker = TesseractWorker(tesseract_cmd="/opt/tesseract")
        job = worker.recognize(make_image())
        outcome = asyncio.run(job.outcome())
        worker.terminate()

    assert outcome.ok, f"Job failed: {outcome.error}"
    assert outcome.page.text == "Start Game"
    assert job.state == JobState.SUCCEEDED
    assert worker.started
    assert mock.pytesseract.tesseract_cmd == "/opt/tesseract"

    kwargs = mock.image_to_data.call_args.kwargs
    assert kwargs["lang"] == "eng"
    assert kwargs["config"] == "--psm 3"

    log.info("PASSED: recognition job")


def test_language_and_options():
    """Test per-job language and option overrides."""
    mock = mock_pytesseract()
    with patch("screenkit.ocr.tesseract_worker.pytesseract", mock):
        worker = TesseractWorker(psm=6, extra_config="--oem 1")
        job = worker.recognize(make_image(), Language.DEU, {"psm": 7})
        asyncio.run(job.outcome())
        worker.terminate()

    kwargs = mock.image_to_data.call_args.kwargs
    assert kwargs["lang"] == "deu"
    assert kwargs["config"] == "--psm 7 --oem 1"


def test_progress_reported_before_outcome():
    """Test progress notifications and final state."""
    mock = mock_pytesseract()
    with patch("screenkit.ocr.tesseract_worker.pytesseract", mock):
        worker = TesseractWorker()
        job = worker.recognize(make_image())
        asyncio.run(job.outcome())
        worker.terminate()

    assert job.latest_progress.status == "recognizing text"
    assert job.latest_progress.progress == 1.0


def test_engine_error_fails_job():
    """Test that engine errors settle the job as failed."""
    log = get_logger()
    log.info("Testing engine error...")

    mock = mock_pytesseract(error=RuntimeError("Failed loading language 'xyz'"))
    with patch("screenkit.ocr.tesseract_worker.pytesseract", mock):
        worker = TesseractWorker()
        job = worker.recognize(make_image())
        outcome = asyncio.run(job.outcome())
        worker.terminate()

    assert not outcome.ok
    assert isinstance(outcome.error, RuntimeError)
    assert job.state == JobState.FAILED

    log.info("PASSED: engine error")


def test_terminate_fails_pending_jobs():
    """Test that terminate() settles every unfinished job."""
    log = get_logger()
    log.info("Testing terminate with pending jobs...")

    release = threading.Event()
    entered = threading.Event()

    def slow_image_to_data(*args, **kwargs):
        entered.set()
        release.wait(5)
        return WORD_DATA

    mock = mock_pytesseract()
    mock.image_to_data.side_effect = slow_image_to_data

    with patch("screenkit.ocr.tesseract_worker.pytesseract", mock):
        worker = TesseractWorker(max_workers=1)
        running = worker.recognize(make_image())
        queued = worker.recognize(make_image())
        assert entered.wait(5), "First job never started"

        worker.terminate()
        release.set()

        running_outcome = asyncio.run(running.outcome())
        queued_outcome = asyncio.run(queued.outcome())

    assert isinstance(running_outcome.error, OcrFailure)
    assert isinstance(queued_outcome.error, OcrFailure)
    assert worker.terminated

    log.info("PASSED: terminate with pending jobs")


def test_recognize_after_terminate():
    """Test that a terminated worker rejects new jobs."""
    worker = TesseractWorker()
    worker.terminate()

    job = worker.recognize(make_image())

    assert job.state == JobState.FAILED
    outcome = asyncio.run(job.outcome())
    assert isinstance(outcome.error, OcrFailure)
    assert not worker.started


def test_tesseract_cmd_resolution():
    """Test binary lookup order."""
    assert TesseractWorker(tesseract_cmd="/x/tesseract")._resolve_tesseract_cmd() == "/x/tesseract"

    with patch("screenkit.ocr.tesseract_worker.shutil.which", return_value="/usr/bin/tesseract"):
        assert TesseractWorker()._resolve_tesseract_cmd() == "/usr/bin/tesseract"

    with patch("screenkit.ocr.tesseract_worker.shutil.which", return_value=None), \
            patch("screenkit.ocr.tesseract_worker.os.path.exists", return_value=False):
        assert TesseractWorker()._resolve_tesseract_cmd() == "tesseract"


def test_to_pil_rgb():
    """Test BGR images are handed to Pillow as RGB."""
    data = np.zeros((2, 2, 3), dtype=np.uint8)
    data[:, :] = (255, 0, 0)  # Blue in BGR
    pil = to_pil(Image.from_array(data))

    assert pil.mode == "RGB"
    assert pil.getpixel((0, 0)) == (0, 0, 255)


def test_recognize_racing_terminate():
    """Test a submit that lands on a pool shut down by terminate()."""
    log = get_logger()
    log.info("Testing recognize racing terminate...")

    worker = TesseractWorker()
    # State seen by recognize() when terminate() runs between its check and submit
    executor = ThreadPoolExecutor(max_workers=1)
    executor.shutdown()
    worker._executor = executor

    job = worker.recognize(make_image())

    assert job.state == JobState.FAILED
    outcome = asyncio.run(job.outcome())
    assert isinstance(outcome.error, OcrFailure)
    assert not worker._pending

    log.info("PASSED: recognize racing terminate")
