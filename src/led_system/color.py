#!/usr/bin/env python3
"""
Color class - Packed RGB color value

Provides a zero-overhead color class that extends int, so a color can be
compared, hashed and handed to int-based LED libraries directly while still
exposing its RGB components.
"""
from typing import Optional, Tuple


class Color(int):
    """RGB color packed into a 24-bit integer

    Usage:
        color = Color(255, 0, 0)          # Red
        color = Color(0xFF0000)           # Red from packed int
        print(color.r, color.g, color.b)  # Access RGB components
    """

    def __new__(cls, r: int, g: Optional[int] = None, b: Optional[int] = None) -> 'Color':
        """Create color from RGB values or an existing packed int

        Args:
            r: Red component (0-255) OR packed color integer
            g: Green component (0-255) OR None if r is packed color
            b: Blue component (0-255) OR None if r is packed color

        Raises:
            ValueError: If only some RGB components are given or a
                component is outside 0-255
        """
        if g is None and b is None:
            if not 0 <= r <= 0xFFFFFF:
                raise ValueError(f"Packed color must be 0-0xFFFFFF, got {r}")
            return int.__new__(cls, r)
        if g is None or b is None:
            raise ValueError("Must provide either just int value or all three RGB values")
        for name, value in (("red", r), ("green", g), ("blue", b)):
            if not 0 <= value <= 255:
                raise ValueError(f"{name} component must be 0-255, got {value}")
        return int.__new__(cls, (r << 16) | (g << 8) | b)

    @property
    def r(self) -> int:
        """Red component (0-255)"""
        return (self >> 16) & 0xFF

    @property
    def g(self) -> int:
        """Green component (0-255)"""
        return (self >> 8) & 0xFF

    @property
    def b(self) -> int:
        """Blue component (0-255)"""
        return self & 0xFF

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def scaled(self, factor: float) -> 'Color':
        """Return this color with every channel multiplied by factor (clamped to 0-1)"""
        factor = max(0.0, min(1.0, factor))
        return Color(round(self.r * factor), round(self.g * factor), round(self.b * factor))

    def is_black(self) -> bool:
        return int(self) == 0

    def __repr__(self) -> str:
        return f"Color(r={self.r}, g={self.g}, b={self.b})"

    def __str__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
