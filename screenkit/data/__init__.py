"""Data models and configuration."""

from .models import Image, MatchRequest, MatchResult, OCRResult, PixelFormat, Point, Region, Settings
from .config import ConfigError, ConfigManager

__all__ = [
    "ConfigError",
    "ConfigManager",
    "Image",
    "MatchRequest",
    "MatchResult",
    "OCRResult",
    "PixelFormat",
    "Point",
    "Region",
    "Settings",
]
