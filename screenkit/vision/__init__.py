"""Vision modules for screen capture, template matching and image output."""

from .interfaces import DataSink, Finder, MatchingEngine, ScreenProvider
from .screen_capture import ScreenCapture
from .template_matcher import MATCHING_METHODS, OpenCVMatchingEngine
from .finder import COLOR_MATCH_THRESHOLD, TemplateMatchingFinder
from .image_writer import ImageWriter

__all__ = [
    "COLOR_MATCH_THRESHOLD",
    "DataSink",
    "Finder",
    "ImageWriter",
    "MATCHING_METHODS",
    "MatchingEngine",
    "OpenCVMatchingEngine",
    "ScreenCapture",
    "ScreenProvider",
    "TemplateMatchingFinder",
]
