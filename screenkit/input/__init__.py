"""Input providers for mouse, keyboard and clipboard."""

from .keys import Button, Key
from .mouse import HAS_PYAUTOGUI, MouseAction
from .keyboard import KeyboardAction
from .clipboard import ClipboardAction

__all__ = [
    "Button",
    "ClipboardAction",
    "HAS_PYAUTOGUI",
    "Key",
    "KeyboardAction",
    "MouseAction",
]
