"""Mouse actions using pyautogui."""

import time
from typing import Callable

from screenkit.data.models import Point
from screenkit.errors import NativeActionFailure
from screenkit.input.keys import Button
from screenkit.utils.deferred import run_blocking
from screenkit.utils.logger import get_logger

# pyautogui fails to import on headless/Wayland systems
try:
    import pyautogui
    pyautogui.FAILSAFE = False
    HAS_PYAUTOGUI = True
except Exception:
    pyautogui = None
    HAS_PYAUTOGUI = False


class MouseAction:
    """
    Mouse provider for NativeAdapter.

    Every action runs in a worker thread and sleeps for the configured
    mouse delay afterwards. Backend errors surface as NativeActionFailure.
    """

    def __init__(self, backend=None, delay_ms: int = 0):
        """
        Initialize mouse provider.

        Args:
            backend: Object exposing the pyautogui mouse API (default: pyautogui)
            delay_ms: Pause after each mouse event in milliseconds
        """
        self.backend = backend if backend is not None else pyautogui
        self.delay_ms = delay_ms
        self.log = get_logger("input")

    def set_mouse_delay(self, delay_ms: int) -> None:
        """Set the pause after each mouse event."""
        self.delay_ms = max(0, delay_ms)

    def _perform(self, name: str, action: Callable[[], object]):
        if self.backend is None:
            raise NativeActionFailure(f"No mouse backend available for {name}")
        try:
            result = action()
        except Exception as e:
            raise NativeActionFailure(f"Mouse {name} failed: {e}") from e
        if self.delay_ms:
            time.sleep(self.delay_ms / 1000)
        return result

    async def _run(self, name: str, action: Callable[[], object]):
        return await run_blocking(self._perform, name, action)

    async def set_mouse_position(self, point: Point) -> None:
        self.log.debug(f"Moving mouse to ({point.x}, {point.y})")
        await self._run("move", lambda: self.backend.moveTo(point.x, point.y, _pause=False))

    async def current_mouse_position(self) -> Point:
        position = await self._run("position", lambda: self.backend.position())
        return Point(int(position[0]), int(position[1]))

    async def click(self, button: Button = Button.LEFT) -> None:
        await self._run("click", lambda: self.backend.click(button=button.value, _pause=False))

    async def press_button(self, button: Button) -> None:
        await self._run("press", lambda: self.backend.mouseDown(button=button.value, _pause=False))

    async def release_button(self, button: Button) -> None:
        await self._run("release", lambda: self.backend.mouseUp(button=button.value, _pause=False))

    async def scroll(self, amount: int) -> None:
        """Scroll vertically; positive is up."""
        await self._run("scroll", lambda: self.backend.scroll(amount, _pause=False))

    async def hscroll(self, amount: int) -> None:
        """Scroll horizontally; positive is right."""
        await self._run("hscroll", lambda: self.backend.hscroll(amount, _pause=False))

