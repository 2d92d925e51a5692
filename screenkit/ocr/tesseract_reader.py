"""Text reader backed by the Tesseract worker."""

from typing import Any, Dict, List, Optional

from screenkit.data.models import Image, OCRResult
from screenkit.errors import OcrFailure
from screenkit.ocr.job import Progress, RecognitionJob
from screenkit.ocr.language import Language
from screenkit.ocr.page import Page
from screenkit.ocr.text_reader import TextReader
from screenkit.ocr.tesseract_worker import TesseractWorker
from screenkit.utils.logger import get_logger


class TesseractReader(TextReader):
    """
    Reads text and words from images.

    Each call submits its own job to the worker and waits for the job's
    terminal outcome. Progress notifications are only logged. The worker
    belongs to the reader; call terminate() when done with it.
    """

    def __init__(
        self,
        worker: Optional[TesseractWorker] = None,
        options: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize reader.

        Args:
            worker: OCR engine worker (default: a new TesseractWorker)
            options: Options passed to every recognize() call
        """
        self.worker = worker or TesseractWorker()
        self.options = options
        self.log = get_logger("ocr")

    def _log_progress(self, job: RecognitionJob):
        def callback(progress: Progress) -> None:
            self.log.debug(
                f"OCR job {job.job_id}: {progress.status} ({progress.progress:.0%})"
            )
        return callback

    async def _recognize(self, image: Image, language: Language) -> Page:
        job = self.worker.recognize(image, language, self.options)
        job.on_progress(self._log_progress(job))

        outcome = await job.outcome()
        if not outcome.ok:
            error = outcome.error
            if isinstance(error, OcrFailure):
                raise error
            raise OcrFailure(str(error) or type(error).__name__) from error
        return outcome.page

    async def read_page(self, image: Image, language: Language = Language.ENG) -> str:
        """
        Extract the full text of an image.

        Raises:
            OcrFailure: If the engine reported an error
        """
        page = await self._recognize(image, language)
        return page.text

    async def read_words(
        self, image: Image, language: Language = Language.ENG
    ) -> List[OCRResult]:
        """
        Extract every word with its own confidence and bounding box.

        Words are returned in document order (block, paragraph, line, word).

        Raises:
            OcrFailure: If the engine reported an error
        """
        page = await self._recognize(image, language)
        return [
            OCRResult(
                text=word.text,
                confidence=word.confidence,
                bounding_box=word.bbox.to_region(),
            )
            for word in page.words
        ]

    def terminate(self) -> None:
        """Release the worker's resources."""
        self.worker.terminate()
