"""OCR: recognition jobs, Tesseract worker and text reader."""

from .language import Language
from .page import BBox, Block, Line, Page, Paragraph, Word
from .job import JobOutcome, JobState, Progress, RecognitionJob
from .text_reader import TextReader
from .tesseract_worker import TesseractWorker
from .tesseract_reader import TesseractReader

__all__ = [
    "BBox",
    "Block",
    "JobOutcome",
    "JobState",
    "Language",
    "Line",
    "Page",
    "Paragraph",
    "Progress",
    "RecognitionJob",
    "TesseractReader",
    "TesseractWorker",
    "TextReader",
    "Word",
]
