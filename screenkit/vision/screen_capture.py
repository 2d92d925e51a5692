"""Screen capture provider using mss."""

from typing import Dict, Tuple

import cv2
import numpy as np
from mss import mss

from screenkit.data.models import Image, PixelFormat, Region
from screenkit.utils.deferred import run_blocking
from screenkit.utils.logger import get_logger
from screenkit.vision.interfaces import ScreenProvider


class ScreenCapture(ScreenProvider):
    """
    Screen capture of the main monitor.

    A fresh mss handle is opened per call, inside the worker thread that
    performs it, so concurrent grabs never share capture state.

    Reported sizes are the OS values for the main monitor. On HiDPI
    displays (e.g. Retina) they may differ from the physical pixel size of
    captured images; no correction is applied.
    """

    # mss monitor index of the primary monitor (0 is all monitors combined)
    MAIN_MONITOR = 1

    def __init__(self, monitor_index: int = MAIN_MONITOR):
        """
        Initialize screen capture.

        Args:
            monitor_index: mss monitor index to treat as the screen
        """
        self.monitor_index = monitor_index
        self.log = get_logger("vision")

    def _build_monitor(self, region: Region) -> Dict[str, int]:
        """Build monitor dict for mss capture."""
        return {
            "left": region.left,
            "top": region.top,
            "width": region.width,
            "height": region.height,
        }

    def _main_monitor(self) -> Dict[str, int]:
        with mss() as sct:
            return dict(sct.monitors[self.monitor_index])

    def _grab(self, monitor: Dict[str, int]) -> Image:
        with mss() as sct:
            screenshot = sct.grab(monitor)

        # BGRA -> BGR
        frame = np.array(screenshot)
        frame = cv2.cvtColor(frame, cv2.COLOR_BGRA2BGR)
        return Image.from_array(frame, PixelFormat.BGR)

    def grab_sync(self) -> Image:
        """Capture the main monitor (blocking)."""
        return self._grab(self._main_monitor())

    def grab_region_sync(self, region: Region) -> Image:
        """Capture a screen region (blocking)."""
        return self._grab(self._build_monitor(region))

    def dimensions_sync(self) -> Tuple[int, int]:
        """Get main monitor (width, height) as reported by the OS."""
        monitor = self._main_monitor()
        return (monitor["width"], monitor["height"])

    async def grab_screen(self) -> Image:
        self.log.debug("Grabbing screen")
        return await run_blocking(self.grab_sync)

    async def grab_screen_region(self, region: Region) -> Image:
        self.log.debug(f"Grabbing screen region {region}")
        return await run_blocking(self.grab_region_sync, region)

    async def screen_width(self) -> int:
        width, _ = await run_blocking(self.dimensions_sync)
        return width

    async def screen_height(self) -> int:
        _, height = await run_blocking(self.dimensions_sync)
        return height

    async def screen_size(self) -> Region:
        width, height = await run_blocking(self.dimensions_sync)
        return Region(0, 0, width, height)
