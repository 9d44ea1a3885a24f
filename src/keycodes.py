"""Symbol tables: key names to platform key codes, controller actions to results.

The native interception engine speaks Windows virtual-key codes for keyboard
keys and (result_type, result_value) pairs for controller output. These tables
are the only place names are turned into numbers and back.
"""

from __future__ import annotations

import string
from collections.abc import Mapping


class KeyCodeTable:
    """Bidirectional lookup between key names and key codes.

    The table must be injective: two names sharing a code would make the
    reverse lookup ambiguous, so construction rejects it.
    """

    def __init__(self, codes: Mapping[str, int]):
        self._by_name: dict[str, int] = dict(codes)
        self._by_code: dict[int, str] = {}
        for name, code in self._by_name.items():
            if code in self._by_code:
                raise ValueError(
                    f"Key code {code:#x} assigned to both '{self._by_code[code]}' and '{name}'"
                )
            self._by_code[code] = name

    def name_to_code(self, name: str) -> int | None:
        return self._by_name.get(name)

    def code_to_name(self, code: int) -> str | None:
        return self._by_code.get(code)

    def names(self) -> list[str]:
        return list(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)


class ControllerOutputTable:
    """Lookup between controller action names and (result_type, result_value)."""

    def __init__(self, actions: Mapping[str, tuple[str, int]]):
        self._by_action: dict[str, tuple[str, int]] = dict(actions)
        self._by_result: dict[tuple[str, int], str] = {}
        for action, result in self._by_action.items():
            if result in self._by_result:
                raise ValueError(
                    f"Controller result {result} assigned to both "
                    f"'{self._by_result[result]}' and '{action}'"
                )
            self._by_result[result] = action

    def action_to_result(self, action: str) -> tuple[str, int] | None:
        return self._by_action.get(action)

    def result_to_action(self, result_type: str, result_value: int) -> str | None:
        return self._by_result.get((result_type, result_value))

    def actions(self) -> list[str]:
        return list(self._by_action)

    def result_types(self) -> set[str]:
        return {result_type for result_type, _ in self._by_result}

    def __contains__(self, action: object) -> bool:
        return action in self._by_action

    def __len__(self) -> int:
        return len(self._by_action)


# =============================================================================
# Windows virtual-key codes
# =============================================================================

WINDOWS_VK_CODES: dict[str, int] = {
    "Backspace": 0x08,
    "Tab": 0x09,
    "Enter": 0x0D,
    "Shift": 0x10,
    "Ctrl": 0x11,
    "Alt": 0x12,
    "Pause": 0x13,
    "CapsLock": 0x14,
    "Escape": 0x1B,
    "Space": 0x20,
    "PageUp": 0x21,
    "PageDown": 0x22,
    "End": 0x23,
    "Home": 0x24,
    "Left": 0x25,
    "Up": 0x26,
    "Right": 0x27,
    "Down": 0x28,
    "PrintScreen": 0x2C,
    "Insert": 0x2D,
    "Delete": 0x2E,
    # Digits 0x30-0x39 and letters 0x41-0x5A share their ASCII codes
    **{digit: ord(digit) for digit in string.digits},
    **{letter: ord(letter) for letter in string.ascii_uppercase},
    "LWin": 0x5B,
    "RWin": 0x5C,
    "Menu": 0x5D,
    **{f"Numpad{n}": 0x60 + n for n in range(10)},
    "NumpadMultiply": 0x6A,
    "NumpadAdd": 0x6B,
    "NumpadSubtract": 0x6D,
    "NumpadDecimal": 0x6E,
    "NumpadDivide": 0x6F,
    **{f"F{n}": 0x6F + n for n in range(1, 25)},
    "NumLock": 0x90,
    "ScrollLock": 0x91,
    "LShift": 0xA0,
    "RShift": 0xA1,
    "LCtrl": 0xA2,
    "RCtrl": 0xA3,
    "LAlt": 0xA4,
    "RAlt": 0xA5,
    "Semicolon": 0xBA,
    "Equal": 0xBB,
    "Comma": 0xBC,
    "Minus": 0xBD,
    "Period": 0xBE,
    "Slash": 0xBF,
    "Backquote": 0xC0,
    "BracketLeft": 0xDB,
    "Backslash": 0xDC,
    "BracketRight": 0xDD,
    "Quote": 0xDE,
}

MOD_KEYS = frozenset(
    {"Shift", "Ctrl", "Alt", "LShift", "RShift", "LCtrl", "RCtrl", "LAlt", "RAlt", "LWin", "RWin"}
)


# =============================================================================
# Controller outputs (XInput)
# =============================================================================

STICK_MIN = -32768
STICK_MAX = 32767
TRIGGER_MAX = 255

CONTROLLER_OUTPUTS: dict[str, tuple[str, int]] = {
    "LEFT STICK LEFT": ("thumb_lx", STICK_MIN),
    "LEFT STICK RIGHT": ("thumb_lx", STICK_MAX),
    "LEFT STICK UP": ("thumb_ly", STICK_MAX),
    "LEFT STICK DOWN": ("thumb_ly", STICK_MIN),
    "RIGHT STICK LEFT": ("thumb_rx", STICK_MIN),
    "RIGHT STICK RIGHT": ("thumb_rx", STICK_MAX),
    "RIGHT STICK UP": ("thumb_ry", STICK_MAX),
    "RIGHT STICK DOWN": ("thumb_ry", STICK_MIN),
    "LEFT TRIGGER": ("trigger_l", TRIGGER_MAX),
    "RIGHT TRIGGER": ("trigger_r", TRIGGER_MAX),
    # face_button values are XUSB button bit masks
    "DPAD UP": ("face_button", 0x0001),
    "DPAD DOWN": ("face_button", 0x0002),
    "DPAD LEFT": ("face_button", 0x0004),
    "DPAD RIGHT": ("face_button", 0x0008),
    "START": ("face_button", 0x0010),
    "BACK": ("face_button", 0x0020),
    "LEFT STICK PRESS": ("face_button", 0x0040),
    "RIGHT STICK PRESS": ("face_button", 0x0080),
    "LEFT BUMPER": ("face_button", 0x0100),
    "RIGHT BUMPER": ("face_button", 0x0200),
    "GUIDE": ("face_button", 0x0400),
    "A": ("face_button", 0x1000),
    "B": ("face_button", 0x2000),
    "X": ("face_button", 0x4000),
    "Y": ("face_button", 0x8000),
}


KEY_CODES = KeyCodeTable(WINDOWS_VK_CODES)
CONTROLLER_ACTIONS = ControllerOutputTable(CONTROLLER_OUTPUTS)


# =============================================================================
# Terminal key events
# =============================================================================

# Textual key names that differ from the table names
TERMINAL_KEY_ALIASES: dict[str, str] = {
    "backspace": "Backspace",
    "tab": "Tab",
    "enter": "Enter",
    "escape": "Escape",
    "space": "Space",
    "pageup": "PageUp",
    "pagedown": "PageDown",
    "end": "End",
    "home": "Home",
    "left": "Left",
    "up": "Up",
    "right": "Right",
    "down": "Down",
    "insert": "Insert",
    "delete": "Delete",
    "semicolon": "Semicolon",
    "equals_sign": "Equal",
    "comma": "Comma",
    "minus": "Minus",
    "full_stop": "Period",
    "slash": "Slash",
    "grave_accent": "Backquote",
    "left_square_bracket": "BracketLeft",
    "backslash": "Backslash",
    "right_square_bracket": "BracketRight",
    "apostrophe": "Quote",
}


def resolve_key_event(key: str, table: KeyCodeTable = KEY_CODES) -> str | None:
    """Resolve a terminal key event name (e.g. "ctrl+q", "left") to a table name.

    Modifier prefixes are dropped: terminals only report modifiers together
    with another key, and the bound key is the non-modifier one.
    """
    base = key.rsplit("+", 1)[-1]
    if base in TERMINAL_KEY_ALIASES:
        name = TERMINAL_KEY_ALIASES[base]
    elif len(base) == 1:
        name = base.upper()
    elif base.startswith("f") and base[1:].isdigit():
        name = base.upper()
    else:
        name = base
    return name if name in table else None
