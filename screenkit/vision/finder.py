"""Finder: confidence threshold and colour-space policy over a matching engine."""

from typing import Iterable, Optional, Tuple

import cv2

from screenkit.data.models import Image, MatchRequest, MatchResult, PixelFormat, Region
from screenkit.errors import EngineFailure, NoMatchFound, ScreenkitError
from screenkit.utils.deferred import run_blocking
from screenkit.utils.logger import get_logger
from screenkit.vision.interfaces import Finder, MatchingEngine
from screenkit.vision.template_matcher import OpenCVMatchingEngine

# Requests at or above this confidence are matched in colour
COLOR_MATCH_THRESHOLD = 0.99

_TO_GRAY = {
    PixelFormat.BGR: cv2.COLOR_BGR2GRAY,
    PixelFormat.BGRA: cv2.COLOR_BGRA2GRAY,
}

_TO_BGR = {
    PixelFormat.BGRA: cv2.COLOR_BGRA2BGR,
    PixelFormat.GRAY: cv2.COLOR_GRAY2BGR,
}


def to_grayscale(image: Image) -> Image:
    """Return a single-channel version of image."""
    if image.pixel_format == PixelFormat.GRAY:
        return image
    gray = cv2.cvtColor(image.data, _TO_GRAY[image.pixel_format])
    return Image.from_array(gray, PixelFormat.GRAY)


def to_color(image: Image) -> Image:
    """Return a 3-channel BGR version of image (alpha dropped)."""
    if image.pixel_format == PixelFormat.BGR:
        return image
    bgr = cv2.cvtColor(image.data, _TO_BGR[image.pixel_format])
    return Image.from_array(bgr, PixelFormat.BGR)


def crop(image: Image, region: Region) -> Image:
    """Cut region out of image; region must lie inside the image."""
    bounds = Region(0, 0, image.width, image.height)
    if not bounds.contains(region):
        raise EngineFailure(f"Search region {region} outside of haystack {bounds}")
    data = image.data[region.top:region.bottom, region.left:region.right]
    return Image.from_array(data, image.pixel_format)


def select_best(candidates: Iterable[MatchResult]) -> Optional[MatchResult]:
    """Highest confidence wins; on equal scores the first one is kept."""
    best = None
    for candidate in candidates:
        if best is None or candidate.confidence > best.confidence:
            best = candidate
    return best


class TemplateMatchingFinder(Finder):
    """
    Finds the best occurrence of a needle in a haystack.

    For confidence >= 0.99 the search runs on colour images, below that
    needle and haystack are converted to grayscale first. Exactly one
    result is returned, or NoMatchFound is raised. Engine faults surface
    as EngineFailure.
    """

    def __init__(self, engine: Optional[MatchingEngine] = None):
        """
        Initialize finder.

        Args:
            engine: Matching engine (default: OpenCVMatchingEngine)
        """
        self.engine = engine or OpenCVMatchingEngine()
        self.log = get_logger("vision")

    async def find_match(self, request: MatchRequest) -> MatchResult:
        """
        Find the best match for a request.

        The engine runs in a worker thread; the event loop is not blocked.

        Raises:
            NoMatchFound: If no candidate reaches request.confidence
            EngineFailure: If the engine or image conversion failed
        """
        return await run_blocking(self.find_match_sync, request)

    def _prepare(self, request: MatchRequest) -> Tuple[Image, Image]:
        haystack = request.haystack
        if request.search_region is not None:
            haystack = crop(haystack, request.search_region)

        if request.confidence >= COLOR_MATCH_THRESHOLD:
            return to_color(request.needle), to_color(haystack)
        return to_grayscale(request.needle), to_grayscale(haystack)

    def find_match_sync(self, request: MatchRequest) -> MatchResult:
        """Blocking variant of find_match()."""
        try:
            needle, haystack = self._prepare(request)
            candidates = self.engine.find_candidates(haystack, needle, request.confidence)
        except ScreenkitError:
            raise
        except Exception as e:
            raise EngineFailure(f"Matching engine failed: {e}") from e

        best = select_best(candidates)

        if best is None:
            self.log.debug(f"No candidates (required {request.confidence:.2f})")
            raise NoMatchFound(request.confidence)

        if best.confidence < request.confidence:
            self.log.debug(
                f"Best candidate {best.confidence:.3f} below required {request.confidence:.2f}"
            )
            raise NoMatchFound(request.confidence, best.confidence)

        location = best.location
        if request.search_region is not None:
            location = Region(
                location.left + request.search_region.left,
                location.top + request.search_region.top,
                location.width,
                location.height,
            )

        self.log.debug(f"Match at {location} conf={best.confidence:.3f}")
        return MatchResult(confidence=best.confidence, location=location)
