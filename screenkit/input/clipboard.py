"""Clipboard access using pyperclip."""

import pyperclip

from screenkit.errors import NativeActionFailure
from screenkit.utils.deferred import run_blocking
from screenkit.utils.logger import get_logger


class ClipboardAction:
    """Clipboard provider for NativeAdapter."""

    def __init__(self, backend=None):
        """
        Initialize clipboard provider.

        Args:
            backend: Object exposing copy(text) and paste() (default: pyperclip)
        """
        self.backend = backend if backend is not None else pyperclip
        self.log = get_logger("input")

    def _copy_sync(self, text: str) -> None:
        try:
            self.backend.copy(text)
        except Exception as e:
            raise NativeActionFailure(f"Clipboard copy failed: {e}") from e

    def _paste_sync(self) -> str:
        try:
            return self.backend.paste()
        except Exception as e:
            raise NativeActionFailure(f"Clipboard paste failed: {e}") from e

    async def copy(self, text: str) -> None:
        """Put text on the system clipboard."""
        await run_blocking(self._copy_sync, text)

    async def paste(self) -> str:
        """Read text from the system clipboard."""
        return await run_blocking(self._paste_sync)
