"""Image sink writing to disk with OpenCV."""

from pathlib import Path

import cv2

from screenkit.data.models import Image, PixelFormat
from screenkit.errors import SinkWriteFailure
from screenkit.utils.deferred import run_blocking
from screenkit.utils.logger import get_logger
from screenkit.vision.interfaces import DataSink


class ImageWriter(DataSink):
    """Stores images as files; the format follows the path's extension."""

    def __init__(self):
        self.log = get_logger()

    def store_sync(self, image: Image, path: str) -> None:
        """
        Write image to path (blocking).

        Raises:
            SinkWriteFailure: If the file could not be written
        """
        data = image.data
        if image.pixel_format == PixelFormat.BGRA and Path(path).suffix.lower() in (".jpg", ".jpeg"):
            data = cv2.cvtColor(data, cv2.COLOR_BGRA2BGR)

        try:
            written = cv2.imwrite(str(path), data)
        except cv2.error as e:
            raise SinkWriteFailure(str(path), str(e)) from e

        if not written:
            raise SinkWriteFailure(str(path), "cv2.imwrite returned False")

        self.log.debug(f"Saved {image.width}x{image.height} image to {path}")

    async def store(self, image: Image, path: str) -> None:
        await run_blocking(self.store_sync, image, path)
