"""Text reader capability interface."""

from abc import ABC, abstractmethod
from typing import List

from screenkit.data.models import Image, OCRResult
from screenkit.ocr.language import Language


class TextReader(ABC):
    """Extracts text from images."""

    @abstractmethod
    async def read_page(self, image: Image, language: Language = Language.ENG) -> str:
        """Return all text found in the image."""

    @abstractmethod
    async def read_words(
        self, image: Image, language: Language = Language.ENG
    ) -> List[OCRResult]:
        """Return every recognized word in document order."""
