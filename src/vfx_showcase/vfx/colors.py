from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RGB:
    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, value: int) -> "RGB":
        v = int(value) & 0xFFFFFF
        return cls(((v >> 16) & 0xFF) / 255.0, ((v >> 8) & 0xFF) / 255.0, (v & 0xFF) / 255.0)


WHITE = RGB(1.0, 1.0, 1.0)


def parse_color(raw: Any, default: RGB = WHITE) -> RGB:
    """
    Accepts what scene JSON tends to contain:
    `"#ff6600"`, `"0xff6600"`, `0xff6600`, `[1.0, 0.4, 0.0]` (or RGBA, alpha ignored).
    Anything else yields `default`.
    """

    if isinstance(raw, RGB):
        return raw
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return RGB.from_hex(raw)
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text.startswith("#"):
            text = text[1:]
        elif text.startswith("0x"):
            text = text[2:]
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) != 6:
            return default
        try:
            return RGB.from_hex(int(text, 16))
        except ValueError:
            return default
    if isinstance(raw, (list, tuple)) and len(raw) in (3, 4):
        try:
            r, g, b = (max(0.0, min(1.0, float(c))) for c in raw[:3])
        except (TypeError, ValueError):
            return default
        return RGB(r, g, b)
    return default
