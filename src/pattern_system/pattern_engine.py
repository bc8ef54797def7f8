"""
Pattern Engine - advances a pattern by one frame and writes the pixel buffer
"""

import logging
from typing import List, Optional, Tuple, TYPE_CHECKING

from led_system.errors import ConfigError
from led_system.pixel import Pixel, OFF

from .animation_helpers import AnimationHelpers
from .patterns import Pattern, Chase, Pulse, TheaterChase, Twinkle, KnightRider, Bands

if TYPE_CHECKING:
    from led_system.pixel_buffer import PixelBuffer
    from utils import ClassLogger
    from .colorways import Colorway

Frame = List[Pixel]


class PatternEngine:
    """
    Renders one frame of a pattern into a pixel buffer.

    Every advance() call:
    1. Computes the complete next frame (and any per-pixel pattern state)
       without touching the buffer
    2. Advances the pattern phase by exactly one step, even if step 1 raised
    3. Overwrites every buffer position with the new frame

    A failure while computing the frame therefore leaves the buffer holding
    the previous, consistent frame.
    """

    def __init__(self, logger: Optional['ClassLogger'] = None):
        if logger is None:
            from utils import ClassLogger
            logger = ClassLogger.default("PatternEngine", logging.INFO)
        self.logger = logger
        self.frames_rendered = 0

    def advance(self, buffer: 'PixelBuffer', colorway: 'Colorway', pattern: Pattern) -> None:
        """
        Advance `pattern` by one frame using `colorway` and write the result into `buffer`.

        Raises:
            ConfigError: If the pattern's per-pixel state doesn't match the buffer
            Exception: Whatever the colorway raises; the buffer is left untouched
        """
        total = len(buffer)
        phase = pattern.phase
        try:
            frame, levels = self._render(pattern, colorway, total, phase)
        except Exception as e:
            self.logger.error(f"Rendering {type(pattern).__name__} failed at phase {phase}: {e}", exception=e)
            raise
        finally:
            pattern.phase = (phase + 1) % pattern.period(total)

        buffer.write_frame(frame)
        if levels is not None:
            pattern.levels = levels
        self.frames_rendered += 1

    def _render(self, pattern: Pattern, colorway: 'Colorway', total: int,
                phase: int) -> Tuple[Frame, Optional[List[float]]]:
        if isinstance(pattern, Chase):
            return self._render_chase(pattern, colorway, total, phase), None
        if isinstance(pattern, Pulse):
            return self._render_pulse(pattern, colorway, total, phase), None
        if isinstance(pattern, TheaterChase):
            return self._render_theater_chase(pattern, colorway, total, phase), None
        if isinstance(pattern, Twinkle):
            return self._render_twinkle(pattern, colorway, total, phase)
        if isinstance(pattern, KnightRider):
            return self._render_knight_rider(pattern, colorway, total, phase), None
        if isinstance(pattern, Bands):
            return self._render_bands(pattern, colorway, total, phase), None
        raise ConfigError(f"No renderer for pattern {type(pattern).__name__}")

    @staticmethod
    def _render_chase(pattern: Chase, colorway: 'Colorway', total: int, phase: int) -> Frame:
        frame = [OFF] * total
        start = phase % total
        for offset in range(min(pattern.width, total)):
            i = (start + offset) % total
            frame[i] = Pixel.from_color(colorway.color_at(i, total, phase), 1.0)
        return frame

    @staticmethod
    def _render_pulse(pattern: Pulse, colorway: 'Colorway', total: int, phase: int) -> Frame:
        wave = AnimationHelpers.triangle_wave(phase, pattern.period_frames)
        brightness = AnimationHelpers.clamp01(pattern.floor + (1.0 - pattern.floor) * wave)
        return [Pixel.from_color(colorway.color_at(i, total, phase), brightness) for i in range(total)]

    @staticmethod
    def _render_theater_chase(pattern: TheaterChase, colorway: 'Colorway', total: int, phase: int) -> Frame:
        lit_offset = phase % pattern.spacing
        return [
            Pixel.from_color(colorway.color_at(i, total, phase), 1.0)
            if i % pattern.spacing == lit_offset else OFF
            for i in range(total)
        ]

    @staticmethod
    def _render_twinkle(pattern: Twinkle, colorway: 'Colorway', total: int,
                        phase: int) -> Tuple[Frame, List[float]]:
        if len(pattern.levels) != total:
            raise ConfigError(f"Twinkle was created for {len(pattern.levels)} pixels, strip has {total}")

        frame: Frame = []
        levels: List[float] = []
        for i, level in enumerate(pattern.levels):
            level *= pattern.decay
            if level < Twinkle.CUTOFF:
                level = 0.0
            if pattern.rng.random() < pattern.probability:
                level = pattern.rng.uniform(Twinkle.SPARK_MIN, 1.0)
            levels.append(level)
            if level > 0.0:
                frame.append(Pixel.from_color(colorway.color_at(i, total, phase), level))
            else:
                frame.append(OFF)
        return frame, levels

    @staticmethod
    def _render_knight_rider(pattern: KnightRider, colorway: 'Colorway', total: int, phase: int) -> Frame:
        cycle = pattern.sweep_length(total)
        step = phase % cycle
        # Forward for the first half of the cycle, then back
        position = step if step < total else cycle - step
        tail = pattern.tail_length(total)

        frame = []
        for i in range(total):
            distance = abs(position - i)
            if distance < tail:
                level = 1.0 - distance / tail
                frame.append(Pixel.from_color(colorway.color_at(i, total, phase), level))
            else:
                frame.append(OFF)
        return frame

    @staticmethod
    def _render_bands(pattern: Bands, colorway: 'Colorway', total: int, phase: int) -> Frame:
        if total == 1:
            # A lone pixel sits at the peak of its band
            return [Pixel.from_color(colorway.color_at(0, total, phase), 1.0)]

        num_bands = total // pattern.band_size if total > pattern.band_size else 1
        band_width = max(1, total // (2 * num_bands))

        frame = []
        for i in range(total):
            value = 0.0
            for n in range(num_bands):
                pos_in_band = (i + phase + n * 2 * band_width) % total
                if pos_in_band < band_width:
                    # Ease in from 0 to 1
                    current = (pos_in_band / band_width) ** 2
                elif pos_in_band < 2 * band_width:
                    # Ease back out from 1 to 0
                    current = (1.0 - (pos_in_band - band_width) / band_width) ** 2
                else:
                    current = 0.0
                value = max(value, current)

            if value > 0.0:
                frame.append(Pixel.from_color(colorway.color_at(i, total, phase), value))
            else:
                frame.append(OFF)
        return frame
