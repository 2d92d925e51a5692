"""Native facade: mouse, keyboard and clipboard."""

from dataclasses import dataclass
from typing import Optional

from screenkit.data.models import Point, Settings
from screenkit.input.clipboard import ClipboardAction
from screenkit.input.keyboard import KeyboardAction
from screenkit.input.keys import Button, Key
from screenkit.input.mouse import HAS_PYAUTOGUI, MouseAction
from screenkit.utils.logger import get_logger


@dataclass
class NativeAdapterConfig:
    """Provider overrides; unset fields use the production implementation."""
    clipboard: Optional[ClipboardAction] = None
    keyboard: Optional[KeyboardAction] = None
    mouse: Optional[MouseAction] = None


class NativeAdapter:
    """
    Single entry point for OS level input.

    Pure delegation to the mouse, keyboard and clipboard providers.
    """

    def __init__(
        self,
        config: Optional[NativeAdapterConfig] = None,
        settings: Optional[Settings] = None,
    ):
        config = config or NativeAdapterConfig()
        settings = settings or Settings()
        self.log = get_logger()

        if (config.mouse is None or config.keyboard is None) and not HAS_PYAUTOGUI:
            self.log.warning("pyautogui unavailable - mouse and keyboard actions will fail")

        self.clipboard = config.clipboard or ClipboardAction()
        self.keyboard = config.keyboard or KeyboardAction(delay_ms=settings.keyboard_delay_ms)
        self.mouse = config.mouse or MouseAction(delay_ms=settings.mouse_delay_ms)

    def set_mouse_delay(self, delay_ms: int) -> None:
        """Pause after each mouse event, in milliseconds."""
        self.mouse.set_mouse_delay(delay_ms)

    def set_keyboard_delay(self, delay_ms: int) -> None:
        """Pause after each key event, in milliseconds."""
        self.keyboard.set_keyboard_delay(delay_ms)

    # ========== Mouse ==========

    async def set_mouse_position(self, point: Point) -> None:
        await self.mouse.set_mouse_position(point)

    async def current_mouse_position(self) -> Point:
        return await self.mouse.current_mouse_position()

    async def left_click(self) -> None:
        await self.mouse.click(Button.LEFT)

    async def right_click(self) -> None:
        await self.mouse.click(Button.RIGHT)

    async def middle_click(self) -> None:
        await self.mouse.click(Button.MIDDLE)

    async def press_button(self, button: Button) -> None:
        await self.mouse.press_button(button)

    async def release_button(self, button: Button) -> None:
        await self.mouse.release_button(button)

    async def scroll_up(self, amount: int) -> None:
        await self.mouse.scroll(amount)

    async def scroll_down(self, amount: int) -> None:
        await self.mouse.scroll(-amount)

    async def scroll_left(self, amount: int) -> None:
        await self.mouse.hscroll(-amount)

    async def scroll_right(self, amount: int) -> None:
        await self.mouse.hscroll(amount)

    # ========== Keyboard ==========

    async def type(self, text: str) -> None:
        """Type text character by character."""
        await self.keyboard.type(text)

    async def click(self, *keys: Key) -> None:
        """Press and release a key combination."""
        await self.keyboard.click(*keys)

    async def press_key(self, *keys: Key) -> None:
        await self.keyboard.press_key(*keys)

    async def release_key(self, *keys: Key) -> None:
        await self.keyboard.release_key(*keys)

    # ========== Clipboard ==========

    async def copy(self, text: str) -> None:
        await self.clipboard.copy(text)

    async def paste(self) -> str:
        return await self.clipboard.paste()
