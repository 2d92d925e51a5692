"""Capability interfaces for the collaborators of the facades.

Each interface has one production implementation in this package; tests
substitute their own doubles through VisionAdapterConfig. The text reader
interface lives in screenkit.ocr.text_reader.
"""

from abc import ABC, abstractmethod
from typing import List

from screenkit.data.models import Image, MatchRequest, MatchResult, Region


class ScreenProvider(ABC):
    """Captures the screen and reports its size."""

    @abstractmethod
    async def grab_screen(self) -> Image:
        """Capture the whole main screen."""

    @abstractmethod
    async def grab_screen_region(self, region: Region) -> Image:
        """Capture part of the screen."""

    @abstractmethod
    async def screen_width(self) -> int:
        """Main screen width as reported by the OS."""

    @abstractmethod
    async def screen_height(self) -> int:
        """Main screen height as reported by the OS."""

    @abstractmethod
    async def screen_size(self) -> Region:
        """Main screen as a Region anchored at (0, 0)."""


class MatchingEngine(ABC):
    """Locates candidate occurrences of a needle inside a haystack."""

    @abstractmethod
    def find_candidates(
        self,
        haystack: Image,
        needle: Image,
        min_confidence: float,
    ) -> List[MatchResult]:
        """
        Return zero or more candidates, locations relative to the haystack.

        Candidates below min_confidence may be included; callers apply the
        threshold themselves.
        """


class Finder(ABC):
    """Finds the single best match for a MatchRequest."""

    @abstractmethod
    async def find_match(self, request: MatchRequest) -> MatchResult:
        """Return the best match or raise NoMatchFound."""


class DataSink(ABC):
    """Persists images."""

    @abstractmethod
    async def store(self, image: Image, path: str) -> None:
        """Write the image to path."""
