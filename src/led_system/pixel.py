#!/usr/bin/env python3
"""
Pixel - One position on the strip: color plus per-pixel brightness

Pixels are immutable. Patterns build new ones every frame and overwrite the
buffer positions, so a pixel never carries state from a previous frame.
"""
from dataclasses import dataclass

from .color import Color, BLACK


@dataclass(frozen=True)
class Pixel:
    """Color and brightness of a single LED

    Attributes:
        red, green, blue: Color channels (0-255)
        brightness: Per-pixel brightness (0.0-1.0)
        white: White channel for RGBW strips (0-255, ignored by RGB transports)
    """
    red: int = 0
    green: int = 0
    blue: int = 0
    brightness: float = 0.0
    white: int = 0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "white"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Pixel {name} must be 0-255, got {value}")
        if not 0.0 <= self.brightness <= 1.0:
            raise ValueError(f"Pixel brightness must be 0.0-1.0, got {self.brightness}")

    @classmethod
    def from_color(cls, color: Color, brightness: float = 1.0) -> 'Pixel':
        """Build a pixel from a packed color, clamping brightness into 0-1"""
        brightness = max(0.0, min(1.0, brightness))
        return cls(color.r, color.g, color.b, brightness)

    @property
    def color(self) -> Color:
        return Color(self.red, self.green, self.blue)

    def is_black(self) -> bool:
        """True when the pixel emits no light (no color or zero brightness)"""
        return self.brightness == 0.0 or (
            self.red == 0 and self.green == 0 and self.blue == 0 and self.white == 0
        )

    def __str__(self) -> str:
        return f"Pixel({self.red}, {self.green}, {self.blue}, {self.brightness:.2f})"


OFF = Pixel.from_color(BLACK, 0.0)
