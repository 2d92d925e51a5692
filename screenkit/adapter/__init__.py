"""Facades bundling the vision and native collaborators."""

from .vision_adapter import VisionAdapter, VisionAdapterConfig
from .native_adapter import NativeAdapter, NativeAdapterConfig

__all__ = [
    "NativeAdapter",
    "NativeAdapterConfig",
    "VisionAdapter",
    "VisionAdapterConfig",
]
