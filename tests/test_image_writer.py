"""Tests for the image writer sink."""

import asyncio

import cv2
import numpy as np
import pytest

from screenkit.data.models import Image
from screenkit.errors import SinkWriteFailure
from screenkit.vision.image_writer import ImageWriter
from screenkit.utils.logger import get_logger


def make_image(channels: int = 3) -> Image:
    data = np.zeros((20, 30, channels), dtype=np.uint8)
    data[5:15, 10:20] = 200
    return Image.from_array(data)


def test_store_png(tmp_path):
    """Test writing and reading back a PNG."""
    log = get_logger()
    log.info("Testing PNG store...")

    path = tmp_path / "shot.png"
    asyncio.run(ImageWriter().store(make_image(), str(path)))

    assert path.exists()
    loaded = cv2.imread(str(path))
    assert loaded.shape == (20, 30, 3)
    assert loaded[10, 15, 0] == 200

    log.info("PASSED: PNG store")


def test_store_bgra_as_jpeg(tmp_path):
    """Test that alpha is dropped for JPEG output."""
    path = tmp_path / "shot.jpg"
    asyncio.run(ImageWriter().store(make_image(4), str(path)))

    assert cv2.imread(str(path)).shape == (20, 30, 3)


def test_unknown_extension_fails(tmp_path):
    """Test an unsupported format raises SinkWriteFailure."""
    with pytest.raises(SinkWriteFailure) as exc_info:
        asyncio.run(ImageWriter().store(make_image(), str(tmp_path / "shot.notaformat")))

    assert exc_info.value.path.endswith("shot.notaformat")


def test_missing_directory_fails(tmp_path):
    """Test an unwritable destination raises SinkWriteFailure."""
    log = get_logger()
    log.info("Testing unwritable destination...")

    path = tmp_path / "missing" / "dir" / "shot.png"

    with pytest.raises(SinkWriteFailure):
        asyncio.run(ImageWriter().store(make_image(), str(path)))

    assert not path.exists()

    log.info("PASSED: unwritable destination")
