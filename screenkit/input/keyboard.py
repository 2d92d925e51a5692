"""Keyboard actions using pyautogui."""

import time
from typing import Sequence

from screenkit.errors import NativeActionFailure
from screenkit.input.keys import Key
from screenkit.input.mouse import pyautogui
from screenkit.utils.deferred import run_blocking
from screenkit.utils.logger import get_logger


class KeyboardAction:
    """
    Keyboard provider for NativeAdapter.

    Keys are pressed in the given order and released in reverse order,
    so click(Key.LEFT_CONTROL, Key.C) behaves like a human Ctrl+C.
    """

    def __init__(self, backend=None, delay_ms: int = 0):
        """
        Initialize keyboard provider.

        Args:
            backend: Object exposing the pyautogui keyboard API (default: pyautogui)
            delay_ms: Pause after each key event in milliseconds
        """
        self.backend = backend if backend is not None else pyautogui
        self.delay_ms = delay_ms
        self.log = get_logger("input")

    def set_keyboard_delay(self, delay_ms: int) -> None:
        """Set the pause after each key event."""
        self.delay_ms = max(0, delay_ms)

    def _pause(self) -> None:
        if self.delay_ms:
            time.sleep(self.delay_ms / 1000)

    def _check_backend(self, name: str) -> None:
        if self.backend is None:
            raise NativeActionFailure(f"No keyboard backend available for {name}")

    def _type_sync(self, text: str) -> None:
        self._check_backend("type")
        try:
            for char in text:
                self.backend.write(char, _pause=False)
                self._pause()
        except Exception as e:
            raise NativeActionFailure(f"Typing failed: {e}") from e

    def _keys_sync(self, keys: Sequence[Key], down: bool, up: bool) -> None:
        self._check_backend("key event")
        try:
            if down:
                for key in keys:
                    self.backend.keyDown(key.value, _pause=False)
                    self._pause()
            if up:
                for key in reversed(keys):
                    self.backend.keyUp(key.value, _pause=False)
                    self._pause()
        except Exception as e:
            names = "+".join(key.name for key in keys)
            raise NativeActionFailure(f"Key event {names} failed: {e}") from e

    async def type(self, text: str) -> None:
        """Type text one character at a time."""
        self.log.debug(f"Typing {len(text)} characters")
        await run_blocking(self._type_sync, text)

    async def click(self, *keys: Key) -> None:
        """Press and release a key combination."""
        await run_blocking(self._keys_sync, keys, True, True)

    async def press_key(self, *keys: Key) -> None:
        """Press keys without releasing them."""
        await run_blocking(self._keys_sync, keys, True, False)

    async def release_key(self, *keys: Key) -> None:
        """Release previously pressed keys."""
        await run_blocking(self._keys_sync, keys, False, True)
