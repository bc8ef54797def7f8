"""
Controller - owns the pixel buffer and the transport, runs one frame per call
"""

import logging
import random
import time
from typing import Callable, Dict, Optional, Tuple, Union, TYPE_CHECKING

from led_system.apa102_transport import Apa102Transport
from led_system.config import SpiConfig
from led_system.errors import ConfigError, TransportInitError, TransportWriteError
from led_system.pixel_buffer import PixelBuffer
from utils import ClassLogger

from .pattern_engine import PatternEngine
from .patterns import Pattern, PatternKind, create_pattern
from .presets import Preset, preset_animation

if TYPE_CHECKING:
    from led_system.interfaces import Transport
    from .colorways import Colorway

TransportFactory = Callable[[int], 'Transport']


class Controller:
    """
    Frame orchestrator for one LED strip.

    Responsibilities:
    - Own the pixel buffer (fixed length) and the transport handle
    - Keep the active pattern, so its phase carries over between calls
    - Run exactly one frame per execute_pattern() call: advance, flush, sleep

    There is no internal loop; the caller decides how long to animate and
    may swap colorway or pattern between calls.

    Example:
        controller = Controller(120)
        while True:
            controller.execute_pattern(Rainbow(), PatternKind.CHASE, 20, width=10)
    """

    def __init__(self,
                 pixel_count: int,
                 transport_factory: Optional[TransportFactory] = None,
                 rng: Optional[random.Random] = None,
                 logger: Optional[ClassLogger] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 spi_config: Optional[SpiConfig] = None):
        """
        Initialize the controller and open the transport.

        Args:
            pixel_count: Number of LEDs on the strip (at least 1)
            transport_factory: Callable opening a Transport for a pixel count;
                defaults to APA102 over SPI on the platform-default pins
            rng: Random generator used by random patterns and colorways
            logger: ClassLogger for this controller
            sleep: Blocking delay primitive taking seconds
            spi_config: SPI settings for the default transport

        Raises:
            ConfigError: If pixel_count is not positive (checked before any hardware access)
            TransportInitError: If the transport cannot be opened
        """
        self.logger = logger or ClassLogger.default("Controller", logging.INFO)

        if isinstance(pixel_count, bool) or not isinstance(pixel_count, int) or pixel_count <= 0:
            self.logger.error(f"Invalid pixel count: {pixel_count!r}")
            raise ConfigError(f"Pixel count must be a positive integer, got {pixel_count!r}")

        self.buffer = PixelBuffer(pixel_count)
        self.rng = rng or random.Random()
        self.engine = PatternEngine(self.logger.create_class_logger("PatternEngine", self.logger.level))
        self._sleep = sleep

        self._pattern: Optional[Pattern] = None
        self._pattern_key: Optional[Tuple] = None
        self._presets: Dict[Preset, Tuple] = {}
        self.frame_count = 0
        self.write_failures = 0

        if transport_factory is None:
            spi = spi_config or SpiConfig()
            transport_factory = lambda count: Apa102Transport.open(spi, count)
        try:
            self.transport: 'Transport' = transport_factory(pixel_count)
        except TransportInitError as e:
            self.logger.error(f"Failed to open transport: {e}")
            raise

        self.logger.info(f"Controller initialized: {pixel_count} pixels via {self.transport.name}")

    @property
    def pixel_count(self) -> int:
        return len(self.buffer)

    @property
    def pattern(self) -> Optional[Pattern]:
        """The active pattern (None before the first frame)"""
        return self._pattern

    def execute_pattern(self, colorway: 'Colorway', pattern_kind: Union[PatternKind, str, Pattern],
                        delay_ms: int, **params) -> None:
        """
        Run one frame: advance the pattern, flush to hardware, sleep.

        The pattern is (re)created when the kind or parameters differ from the
        active one; otherwise the active pattern continues from its phase.
        A Pattern instance may be passed instead of a kind to control its
        parameters and starting phase directly.

        Args:
            colorway: Palette to color the pattern with
            pattern_kind: PatternKind, its string value, or a Pattern instance
            delay_ms: Delay after the flush in milliseconds (0 = no delay)
            **params: Pattern parameters (e.g. width=5)

        Raises:
            ConfigError: For a negative delay or invalid pattern parameters
            TransportWriteError: If the flush failed; buffer and phase stay valid
        """
        if delay_ms < 0:
            raise ConfigError(f"Frame delay must be non-negative, got {delay_ms}")

        pattern = self._select_pattern(pattern_kind, params)
        self.engine.advance(self.buffer, colorway, pattern)
        self.frame_count += 1

        self.flush()

        if delay_ms > 0:
            self._sleep(delay_ms / 1000.0)

    def execute_preset(self, preset: Union[Preset, str], delay_ms: int) -> None:
        """Run one frame of a preset (pattern with its own colorway)"""
        preset = Preset.parse(preset)
        if preset not in self._presets:
            self._presets[preset] = preset_animation(preset, self.rng)
        colorway, kind, params = self._presets[preset]
        self.execute_pattern(colorway, kind, delay_ms, **params)

    def flush(self) -> None:
        """
        Commit the current buffer to the transport. Safe to retry after a failure.

        Raises:
            TransportWriteError: If the transport rejected the frame
        """
        try:
            self.transport.write_frame(self.buffer.snapshot())
        except TransportWriteError as e:
            self.write_failures += 1
            self.logger.warning(f"Frame {self.frame_count} not written: {e}")
            raise

    def clear(self) -> None:
        """Blank the strip"""
        self.buffer.clear()
        self.flush()

    def close(self) -> None:
        """Blank the strip and release the transport"""
        try:
            self.clear()
        finally:
            self.transport.close()
            self.logger.info(f"Controller closed after {self.frame_count} frames")

    def _select_pattern(self, pattern_kind: Union[PatternKind, str, Pattern], params: dict) -> Pattern:
        if isinstance(pattern_kind, Pattern):
            if params:
                raise ConfigError("Pattern parameters can't be combined with a Pattern instance")
            if pattern_kind is not self._pattern:
                self._activate(pattern_kind, ("instance", id(pattern_kind)))
            return pattern_kind

        kind = PatternKind.parse(pattern_kind)
        key = (kind, tuple(sorted(params.items())))
        if key != self._pattern_key:
            self._activate(create_pattern(kind, self.pixel_count, self.rng, **params), key)
        return self._pattern

    def _activate(self, pattern: Pattern, key: Tuple) -> None:
        self._pattern = pattern
        self._pattern_key = key
        self.logger.info(f"Pattern set: {pattern!r}")
