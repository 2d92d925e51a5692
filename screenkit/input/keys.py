"""Key and mouse button identifiers for native input."""

from enum import Enum


class Button(Enum):
    """Mouse buttons."""
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


class Key(Enum):
    """Keyboard keys; values are pyautogui key names."""

    # Modifiers
    LEFT_ALT = "altleft"
    RIGHT_ALT = "altright"
    LEFT_CONTROL = "ctrlleft"
    RIGHT_CONTROL = "ctrlright"
    LEFT_SHIFT = "shiftleft"
    RIGHT_SHIFT = "shiftright"
    LEFT_SUPER = "winleft"
    RIGHT_SUPER = "winright"
    LEFT_CMD = "command"
    CAPS_LOCK = "capslock"

    # Editing / whitespace
    ENTER = "enter"
    RETURN = "return"
    TAB = "tab"
    SPACE = "space"
    BACKSPACE = "backspace"
    DELETE = "delete"
    INSERT = "insert"
    ESCAPE = "escape"

    # Navigation
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"

    # Misc
    PRINT = "printscreen"
    PAUSE = "pause"
    MENU = "apps"

    # Function keys
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"

    # Digits
    NUM_0 = "0"
    NUM_1 = "1"
    NUM_2 = "2"
    NUM_3 = "3"
    NUM_4 = "4"
    NUM_5 = "5"
    NUM_6 = "6"
    NUM_7 = "7"
    NUM_8 = "8"
    NUM_9 = "9"

    # Letters
    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    F = "f"
    G = "g"
    H = "h"
    I = "i"
    J = "j"
    K = "k"
    L = "l"
    M = "m"
    N = "n"
    O = "o"
    P = "p"
    Q = "q"
    R = "r"
    S = "s"
    T = "t"
    U = "u"
    V = "v"
    W = "w"
    X = "x"
    Y = "y"
    Z = "z"
