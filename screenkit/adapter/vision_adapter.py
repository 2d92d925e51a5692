"""Vision facade: screen capture, template matching, OCR and image saving."""

from dataclasses import dataclass
from typing import List, Optional

from screenkit.data.models import Image, MatchRequest, MatchResult, OCRResult, Region, Settings
from screenkit.errors import EngineFailure, OcrFailure, ScreenkitError, SinkWriteFailure
from screenkit.ocr.language import Language
from screenkit.ocr.tesseract_reader import TesseractReader
from screenkit.ocr.tesseract_worker import TesseractWorker
from screenkit.ocr.text_reader import TextReader
from screenkit.utils.deferred import settle
from screenkit.utils.logger import get_logger
from screenkit.vision.finder import TemplateMatchingFinder
from screenkit.vision.image_writer import ImageWriter
from screenkit.vision.interfaces import DataSink, Finder, ScreenProvider
from screenkit.vision.screen_capture import ScreenCapture
from screenkit.vision.template_matcher import OpenCVMatchingEngine


@dataclass
class VisionAdapterConfig:
    """Collaborator overrides; unset fields use the production implementation."""
    finder: Optional[Finder] = None
    screen: Optional[ScreenProvider] = None
    screen_reader: Optional[TextReader] = None
    data_sink: Optional[DataSink] = None


class VisionAdapter:
    """
    Single entry point for all image based interactions.

    Bundles screen capture, template matching, text recognition and image
    saving so callers depend on one object instead of four collaborators.
    Every operation is a coroutine. Nothing is retried: failures reach the
    caller as ScreenkitError subclasses on await.
    """

    def __init__(
        self,
        config: Optional[VisionAdapterConfig] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize vision adapter.

        Args:
            config: Collaborator overrides (test doubles, custom engines)
            settings: Settings for the default collaborators
        """
        config = config or VisionAdapterConfig()
        settings = settings or Settings()
        self.log = get_logger()

        self.data_sink: DataSink = config.data_sink or ImageWriter()
        self.finder: Finder = config.finder or TemplateMatchingFinder(
            OpenCVMatchingEngine.from_method_name(
                settings.matching_method,
                min_distance=settings.min_distance,
                max_candidates=settings.max_candidates,
            )
        )
        self.screen: ScreenProvider = config.screen or ScreenCapture()

        self._owns_reader = config.screen_reader is None
        self.screen_reader: TextReader = config.screen_reader or TesseractReader(
            TesseractWorker(
                tesseract_cmd=settings.tesseract_cmd,
                psm=settings.ocr_psm,
                extra_config=settings.ocr_extra_config,
                max_workers=settings.ocr_max_workers,
            )
        )

    async def grab_screen(self) -> Image:
        """Capture the current screen."""
        return await self.screen.grab_screen()

    async def grab_screen_region(self, region: Region) -> Image:
        """Capture only the given screen region."""
        return await self.screen.grab_screen_region(region)

    async def find_on_screen_region(self, request: MatchRequest) -> MatchResult:
        """
        Search for a pattern inside (a region of) an image.

        If several occurrences are found, the one with the highest
        confidence is returned. For confidence < 0.99 the search is done
        on grayscale images.

        Raises:
            NoMatchFound: If nothing reaches request.confidence
            EngineFailure: If matching failed, whether the finder raised
                synchronously or while being awaited
        """
        try:
            return await settle(self.finder.find_match, request)
        except ScreenkitError:
            raise
        except Exception as e:
            self.log.warning(f"Finder failed: {e}")
            raise EngineFailure(f"Finder failed: {e}") from e

    async def screen_width(self) -> int:
        """
        Main screen width as reported by the OS.

        On HiDPI displays (e.g. Retina) this may differ from the pixel
        width of captured images.
        """
        return await self.screen.screen_width()

    async def screen_height(self) -> int:
        """
        Main screen height as reported by the OS.

        On HiDPI displays (e.g. Retina) this may differ from the pixel
        height of captured images.
        """
        return await self.screen.screen_height()

    async def screen_size(self) -> Region:
        """
        Main screen as a Region, sized as reported by the OS.

        On HiDPI displays the reported size and the pixel size may differ.
        """
        return await self.screen.screen_size()

    async def save_image(self, image: Image, path: str) -> None:
        """
        Save an image to the given path.

        Raises:
            SinkWriteFailure: If the image could not be written
        """
        try:
            await settle(self.data_sink.store, image, path)
        except ScreenkitError:
            raise
        except Exception as e:
            self.log.warning(f"Saving image to {path} failed: {e}")
            raise SinkWriteFailure(str(path), str(e)) from e

    async def read_text(self, image: Image, language: Language = Language.ENG) -> str:
        """
        Extract the full text of an image.

        Raises:
            OcrFailure: If recognition failed
        """
        try:
            return await settle(self.screen_reader.read_page, image, language)
        except ScreenkitError:
            raise
        except Exception as e:
            raise OcrFailure(str(e) or type(e).__name__) from e

    async def read_words(
        self, image: Image, language: Language = Language.ENG
    ) -> List[OCRResult]:
        """
        Extract the words of an image with confidence and bounding box.

        Raises:
            OcrFailure: If recognition failed
        """
        try:
            return await settle(self.screen_reader.read_words, image, language)
        except ScreenkitError:
            raise
        except Exception as e:
            raise OcrFailure(str(e) or type(e).__name__) from e

    def close(self) -> None:
        """Release the default text reader's OCR worker."""
        if self._owns_reader and isinstance(self.screen_reader, TesseractReader):
            self.screen_reader.terminate()
