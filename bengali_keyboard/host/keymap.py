"""Windows virtual-key codes and their logical characters.

WHY: Low-level keyboard hooks report virtual-key codes, not characters.
The keyboard only cares about the small set of keys that can spell a
phonetic word, end one, or edit one.

HOW: VirtualKeyResolver maps letters (with shift for upper case), digits,
and a handful of punctuation and control keys. Everything else resolves
to None.

RULES:
- VK_A..VK_Z → "a".."z", or "A".."Z" with shift
- VK_0..VK_9 → "0".."9" (shift is ignored)
- Return → "\\n", Tab → "\\t", Space → " ", Back → BACKSPACE
- OEM period → ".", OEM 1 → ":", OEM minus → "_"
- CTRL_SHORTCUT_KEYS are left to the application when Ctrl is held
"""

from __future__ import annotations

from typing import Dict, Optional

from bengali_keyboard.core.session import BACKSPACE
from bengali_keyboard.host.base import KeyCodeResolver

VK_BACK = 0x08
VK_TAB = 0x09
VK_RETURN = 0x0D
VK_SPACE = 0x20
VK_0 = 0x30
VK_9 = 0x39
VK_A = 0x41
VK_Z = 0x5A
VK_OEM_1 = 0xBA
VK_OEM_MINUS = 0xBD
VK_OEM_PERIOD = 0xBE

# Ctrl+A, C, V, X, Y, Z
CTRL_SHORTCUT_KEYS = frozenset({0x41, 0x43, 0x56, 0x58, 0x59, 0x5A})

_FIXED_KEYS: Dict[int, str] = {
    VK_BACK: BACKSPACE,
    VK_TAB: "\t",
    VK_RETURN: "\n",
    VK_SPACE: " ",
    VK_OEM_1: ":",
    VK_OEM_MINUS: "_",
    VK_OEM_PERIOD: ".",
}


class VirtualKeyResolver(KeyCodeResolver):
    """KeyCodeResolver for Windows virtual-key codes."""

    def resolve(self, code: int, shift: bool = False) -> Optional[str]:
        if VK_A <= code <= VK_Z:
            base = "A" if shift else "a"
            return chr(ord(base) + code - VK_A)
        if VK_0 <= code <= VK_9:
            return chr(ord("0") + code - VK_0)
        return _FIXED_KEYS.get(code)
