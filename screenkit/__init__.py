"""screenkit: screen capture, template matching, OCR and input behind two facades."""

from .adapter import NativeAdapter, NativeAdapterConfig, VisionAdapter, VisionAdapterConfig
from .data.models import (
    Image,
    MatchRequest,
    MatchResult,
    OCRResult,
    PixelFormat,
    Point,
    Region,
    Settings,
)
from .errors import (
    EngineFailure,
    NativeActionFailure,
    NoMatchFound,
    OcrFailure,
    ScreenkitError,
    SinkWriteFailure,
)
from .input.keys import Button, Key
from .ocr.language import Language

__version__ = "0.1.0"

__all__ = [
    "Button",
    "EngineFailure",
    "Image",
    "Key",
    "Language",
    "MatchRequest",
    "MatchResult",
    "NativeActionFailure",
    "NativeAdapter",
    "NativeAdapterConfig",
    "NoMatchFound",
    "OCRResult",
    "OcrFailure",
    "PixelFormat",
    "Point",
    "Region",
    "ScreenkitError",
    "Settings",
    "SinkWriteFailure",
    "VisionAdapter",
    "VisionAdapterConfig",
]
