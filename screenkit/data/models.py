"""Data models for images, regions, match requests and settings."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Point:
    """A position in screen coordinates."""

    x: int
    y: int


@dataclass(frozen=True)
class Region:
    """Axis-aligned rectangle (left, top, width, height)."""

    left: int
    top: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Region size must be non-negative, got {self.width}x{self.height}"
            )

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Point:
        """Get center point of the region."""
        return Point(self.left + self.width // 2, self.top + self.height // 2)

    def contains(self, other: "Region") -> bool:
        """Check whether another region lies entirely inside this one."""
        return (
            other.left >= self.left
            and other.top >= self.top
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Get region as (left, top, width, height)."""
        return (self.left, self.top, self.width, self.height)

    def __str__(self) -> str:
        return f"({self.left}, {self.top}, {self.width}, {self.height})"


class PixelFormat(Enum):
    """Channel layout of an image buffer."""
    GRAY = "gray"
    BGR = "bgr"
    BGRA = "bgra"


_FORMAT_BY_CHANNELS = {
    1: PixelFormat.GRAY,
    3: PixelFormat.BGR,
    4: PixelFormat.BGRA,
}


@dataclass(frozen=True, eq=False)
class Image:
    """
    Immutable pixel buffer.

    Use Image.from_array() to build one from a numpy array; the buffer is
    copied and flagged read-only so an Image can be handed to concurrent
    calls without sharing mutable state.
    """

    data: np.ndarray
    width: int
    height: int
    pixel_format: PixelFormat = PixelFormat.BGR

    @classmethod
    def from_array(
        cls,
        array: np.ndarray,
        pixel_format: Optional[PixelFormat] = None,
    ) -> "Image":
        """
        Build an Image from a numpy array.

        Args:
            array: HxW (grayscale) or HxWxC array
            pixel_format: Explicit format, inferred from channel count if omitted

        Returns:
            Image wrapping a read-only copy of the array
        """
        data = np.array(array, copy=True)
        if data.ndim == 2:
            channels = 1
        elif data.ndim == 3:
            channels = data.shape[2]
        else:
            raise ValueError(f"Unsupported image shape: {data.shape}")

        if pixel_format is None:
            if channels not in _FORMAT_BY_CHANNELS:
                raise ValueError(f"Unsupported channel count: {channels}")
            pixel_format = _FORMAT_BY_CHANNELS[channels]

        data.setflags(write=False)
        return cls(
            data=data,
            width=data.shape[1],
            height=data.shape[0],
            pixel_format=pixel_format,
        )

    @property
    def channels(self) -> int:
        return 1 if self.data.ndim == 2 else self.data.shape[2]

    @property
    def size(self) -> Tuple[int, int]:
        """Get dimensions as (width, height)."""
        return (self.width, self.height)

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height}, {self.pixel_format.value})"


@dataclass(frozen=True, eq=False)
class MatchRequest:
    """
    A read-only request to find a needle image inside a haystack.

    search_region restricts the search to part of the haystack; the
    whole haystack is searched when it is None.
    """

    needle: Image
    haystack: Image
    confidence: float
    search_region: Optional[Region] = None

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"Confidence must be within [0, 1], got {self.confidence}"
            )


@dataclass(frozen=True)
class MatchResult:
    """Best match of a needle: its confidence and bounding box."""

    confidence: float
    location: Region


@dataclass(frozen=True)
class OCRResult:
    """A recognized piece of text with its confidence and bounding box."""

    text: str
    confidence: float
    bounding_box: Region


@dataclass
class Settings:
    """Runtime settings for the default collaborators."""

    # Matching
    matching_method: str = "ccoeff_normed"
    min_distance: int = 10
    max_candidates: int = 100

    # OCR
    tesseract_cmd: Optional[str] = None
    ocr_psm: int = 3
    ocr_max_workers: int = 1
    ocr_extra_config: str = ""  # e.g. "-c tessedit_char_whitelist=0123456789"

    # Input
    mouse_delay_ms: int = 0
    keyboard_delay_ms: int = 0

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = False
