"""Pooled Tesseract worker: the OCR engine behind TesseractReader."""

import os
import platform
import shutil
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional, Set

import cv2
import pytesseract
from PIL import Image as PILImage

from screenkit.data.models import Image, PixelFormat
from screenkit.errors import OcrFailure
from screenkit.ocr.job import Progress, RecognitionJob
from screenkit.ocr.language import Language
from screenkit.ocr.page import Page
from screenkit.utils.logger import get_logger

# Conversion to the RGB layout Pillow expects
_TO_RGB = {
    PixelFormat.BGR: cv2.COLOR_BGR2RGB,
    PixelFormat.BGRA: cv2.COLOR_BGRA2RGB,
    PixelFormat.GRAY: cv2.COLOR_GRAY2RGB,
}

# Well-known install locations, checked when tesseract is not on PATH
DEFAULT_TESSERACT_PATHS = {
    "Windows": [
        r"C:\Program Files\Tesseract-OCR\tesseract.exe",
        r"C:\Program Files (x86)\Tesseract-OCR\tesseract.exe",
    ],
    "Darwin": [
        "/usr/local/bin/tesseract",
        "/opt/homebrew/bin/tesseract",
    ],
    "Linux": [
        "/usr/bin/tesseract",
        "/usr/local/bin/tesseract",
    ],
}


def to_pil(image: Image) -> PILImage.Image:
    """Convert an Image to an RGB Pillow image."""
    rgb = cv2.cvtColor(image.data, _TO_RGB[image.pixel_format])
    return PILImage.fromarray(rgb)


class TesseractWorker:
    """
    Runs Tesseract recognitions in a small thread pool.

    The pool and the Tesseract binary lookup are set up lazily on the first
    recognize() call. Each call returns its own RecognitionJob; jobs share
    nothing but the pool. terminate() releases the pool and fails every
    job that has not settled yet.
    """

    def __init__(
        self,
        tesseract_cmd: Optional[str] = None,
        psm: int = 3,
        extra_config: str = "",
        max_workers: int = 1,
    ):
        """
        Initialize worker.

        Args:
            tesseract_cmd: Path to the tesseract binary (auto-detected if None)
            psm: Tesseract page segmentation mode
            extra_config: Additional tesseract command line flags
            max_workers: Number of concurrent recognitions
        """
        self.tesseract_cmd = tesseract_cmd
        self.psm = psm
        self.extra_config = extra_config
        self.max_workers = max_workers
        self.log = get_logger("ocr")

        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._started = False
        self._terminated = False
        self._pending: Set[RecognitionJob] = set()

    @property
    def started(self) -> bool:
        return self._started

    @property
    def terminated(self) -> bool:
        return self._terminated

    def _build_config(self, options: Optional[Dict[str, Any]]) -> str:
        options = options or {}
        parts = [f"--psm {options.get('psm', self.psm)}"]
        extra = options.get("config", self.extra_config)
        if extra:
            parts.append(extra)
        return " ".join(parts)

    def _resolve_tesseract_cmd(self) -> str:
        """Find the tesseract binary: explicit path, PATH, then known locations."""
        if self.tesseract_cmd:
            return self.tesseract_cmd

        on_path = shutil.which("tesseract")
        if on_path:
            return on_path

        for path in DEFAULT_TESSERACT_PATHS.get(platform.system(), []):
            if os.path.exists(path):
                return path

        return "tesseract"

    def _start(self) -> None:
        """Point pytesseract at the binary and check it runs (first use only)."""
        with self._lock:
            if self._started:
                return
            cmd = self._resolve_tesseract_cmd()
            pytesseract.pytesseract.tesseract_cmd = cmd
            version = pytesseract.get_tesseract_version()
            self._started = True
        self.log.info(f"Tesseract {version} ready ({cmd})")

    def recognize(
        self,
        image: Image,
        language: Language = Language.ENG,
        options: Optional[Dict[str, Any]] = None,
    ) -> RecognitionJob:
        """
        Submit a recognition job.

        Args:
            image: Image to recognize
            language: Trained model to use
            options: Per-job overrides ("psm", "config")

        Returns:
            RecognitionJob that settles with a Page or an error
        """
        job = RecognitionJob()

        with self._lock:
            if self._terminated:
                job.fail(OcrFailure("Tesseract worker terminated"))
                return job
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix="tesseract",
                )
            self._pending.add(job)
            executor = self._executor

        self.log.debug(f"Submitting OCR job {job.job_id} ({language.value})")
        try:
            executor.submit(self._run, job, image, language, options)
        except RuntimeError:
            # terminate() shut the pool down after the check above
            with self._lock:
                self._pending.discard(job)
            job.fail(OcrFailure("Tesseract worker terminated"))
        return job

    def _run(
        self,
        job: RecognitionJob,
        image: Image,
        language: Language,
        options: Optional[Dict[str, Any]],
    ) -> None:
        try:
            job.report_progress(Progress("initializing tesseract", 0.0))
            self._start()

            job.report_progress(Progress("recognizing text", 0.0))
            data = pytesseract.image_to_data(
                to_pil(image),
                lang=language.value,
                config=self._build_config(options),
                output_type=pytesseract.Output.DICT,
            )
            page = Page.from_tesseract_data(data)
            job.report_progress(Progress("recognizing text", 1.0))
            job.succeed(page)
        except Exception as e:
            self.log.warning(f"OCR job {job.job_id} failed: {e}")
            job.fail(e)
        finally:
            with self._lock:
                self._pending.discard(job)

    def terminate(self) -> None:
        """Release the pool and fail all unsettled jobs."""
        with self._lock:
            if self._terminated:
                return
            self._terminated = True
            executor = self._executor
            self._executor = None
            pending = list(self._pending)
            self._pending.clear()

        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)

        for job in pending:
            job.fail(OcrFailure("Tesseract worker terminated"))

        self.log.debug(f"Tesseract worker terminated ({len(pending)} pending jobs failed)")
