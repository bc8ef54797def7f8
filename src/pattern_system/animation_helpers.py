"""
Helper utilities for colorways and patterns
"""

from led_system.color import Color


class AnimationHelpers:
    """Static helper methods for colorways and patterns"""

    # Handpicked hues (degrees) for the named solid colors
    RED_HUE = 0
    ORANGE_HUE = 18
    YELLOW_HUE = 40
    GREEN_HUE = 116
    BLUE_HUE = 240
    PURPLE_HUE = 266

    NAMED_HUES = {
        "red": RED_HUE,
        "orange": ORANGE_HUE,
        "yellow": YELLOW_HUE,
        "green": GREEN_HUE,
        "blue": BLUE_HUE,
        "purple": PURPLE_HUE,
    }

    @staticmethod
    def hsv_to_color(h: float, s: float, v: float) -> Color:
        """
        Convert HSV to a packed RGB Color.

        Args:
            h: Hue (0-360 degrees, wrapped)
            s: Saturation (0.0-1.0)
            v: Value/Brightness (0.0-1.0)
        """
        h = h % 360  # Wrap hue
        c = v * s
        x = c * (1 - abs((h / 60) % 2 - 1))
        m = v - c

        if 0 <= h < 60:
            r, g, b = c, x, 0
        elif 60 <= h < 120:
            r, g, b = x, c, 0
        elif 120 <= h < 180:
            r, g, b = 0, c, x
        elif 180 <= h < 240:
            r, g, b = 0, x, c
        elif 240 <= h < 300:
            r, g, b = x, 0, c
        else:  # 300 <= h < 360
            r, g, b = c, 0, x

        return Color(
            AnimationHelpers._to_byte(r + m),
            AnimationHelpers._to_byte(g + m),
            AnimationHelpers._to_byte(b + m),
        )

    @staticmethod
    def lerp_color(start: Color, end: Color, t: float) -> Color:
        """Linear interpolation between two colors, t clamped to 0-1"""
        t = max(0.0, min(1.0, t))
        if t == 0.0:
            return start
        if t == 1.0:
            return end
        return Color(
            round(start.r + (end.r - start.r) * t),
            round(start.g + (end.g - start.g) * t),
            round(start.b + (end.b - start.b) * t),
        )

    @staticmethod
    def triangle_wave(step: int, period: int) -> float:
        """0.0 at step 0, 1.0 at half period, back toward 0.0 at the end of the period"""
        if period <= 1:
            return 0.0
        t = (step % period) / period
        return 1.0 - abs(2.0 * t - 1.0)

    @staticmethod
    def clamp01(value: float) -> float:
        return max(0.0, min(1.0, value))

    @staticmethod
    def _to_byte(channel: float) -> int:
        return max(0, min(255, round(channel * 255)))
