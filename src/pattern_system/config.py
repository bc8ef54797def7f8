"""
Animation run configuration
"""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from led_system.color import Color
from led_system.config import SpiConfig, PixelStripConfig
from led_system.errors import ConfigError

from .colorways import Colorway, Rainbow, Fire, Solid, Gradient, CHRISTMAS_TRADITIONAL
from .patterns import PatternKind, create_pattern
from .presets import Preset

COLORWAYS = ("rainbow", "fire", "solid", "gradient", "christmas")
TRANSPORTS = ("apa102", "ws281x", "mock")


def parse_color(text: str) -> Color:
    """Parse 'R,G,B' (0-255 each) or '#RRGGBB'"""
    text = text.strip()
    try:
        if text.startswith("#") and len(text) == 7:
            return Color(int(text[1:], 16))
        parts = [int(p) for p in text.split(",")]
    except ValueError:
        raise ConfigError(f"Invalid color {text!r}, expected R,G,B or #RRGGBB") from None
    if len(parts) != 3:
        raise ConfigError(f"Invalid color {text!r}, expected R,G,B or #RRGGBB")
    try:
        return Color(*parts)
    except ValueError as e:
        raise ConfigError(f"Invalid color {text!r}: {e}") from None


def parse_stops(text: str) -> Tuple[Tuple[float, Color], ...]:
    """Parse gradient stops written as 'POS:R,G,B;POS:R,G,B', e.g. '0:255,0,0;1:0,0,255'"""
    stops = []
    for chunk in filter(None, (c.strip() for c in text.split(";"))):
        position, sep, color = chunk.partition(":")
        if not sep:
            raise ConfigError(f"Invalid gradient stop {chunk!r}, expected POS:R,G,B")
        try:
            position = float(position)
        except ValueError:
            raise ConfigError(f"Invalid gradient stop position in {chunk!r}") from None
        stops.append((position, parse_color(color)))
    return tuple(stops)


@dataclass
class AnimationConfig:
    """Static choice of strip, colorway, pattern and frame delay for one run"""

    pixel_count: int

    # Palette
    colorway: str = "rainbow"
    color: str = "red"          # Named hue, 'white', R,G,B or #RRGGBB for the solid colorway
    stops: str = ""             # Gradient stops, see parse_stops()
    rainbow_speed: int = 2      # Degrees per frame

    # Pattern (ignored when a preset is chosen)
    pattern: str = "chase"
    pattern_params: Dict[str, Any] = field(default_factory=dict)
    preset: Optional[str] = None

    # Timing
    delay_ms: int = 20
    frames: int = 0             # 0 = run until interrupted

    # Hardware
    transport: str = "apa102"
    spi: SpiConfig = field(default_factory=SpiConfig)
    strip: PixelStripConfig = field(default_factory=PixelStripConfig)

    seed: Optional[int] = None
    max_write_failures: int = 10
    stats_interval_ms: int = 60000

    @property
    def target_fps(self) -> Optional[float]:
        """Upper bound on frame rate implied by the delay (None when unthrottled)"""
        if self.delay_ms == 0:
            return None
        return 1000.0 / self.delay_ms

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)

    def validate(self) -> None:
        """Basic validation of configuration"""
        if self.pixel_count <= 0:
            raise ConfigError(f"Pixel count must be positive, got {self.pixel_count}")
        if self.delay_ms < 0:
            raise ConfigError(f"Frame delay must be non-negative, got {self.delay_ms}")
        if self.frames < 0:
            raise ConfigError(f"Frame limit must be non-negative, got {self.frames}")
        if self.max_write_failures < 1:
            raise ConfigError(f"Write failure budget must be at least 1, got {self.max_write_failures}")
        if self.transport not in TRANSPORTS:
            raise ConfigError(f"Unknown transport {self.transport!r}, expected one of {TRANSPORTS}")
        if self.transport == "apa102":
            self.spi.validate()
        elif self.transport == "ws281x":
            self.strip.validate()

        if self.preset is not None:
            Preset.parse(self.preset)
            return

        # Build once so bad colorway/pattern settings fail before the hardware is opened
        self.build_colorway(random.Random(0))
        create_pattern(self.pattern, self.pixel_count, random.Random(0), **self.pattern_params)

    def build_colorway(self, rng: random.Random) -> Colorway:
        name = self.colorway.lower()
        if name == "rainbow":
            return Rainbow(speed=self.rainbow_speed)
        if name == "fire":
            return Fire.from_rng(rng)
        if name == "solid":
            if "," in self.color or self.color.startswith("#"):
                return Solid(parse_color(self.color))
            return Solid.from_name(self.color)
        if name == "gradient":
            return Gradient(parse_stops(self.stops))
        if name == "christmas":
            return CHRISTMAS_TRADITIONAL
        raise ConfigError(f"Unknown colorway {self.colorway!r}, expected one of {COLORWAYS}")

    @property
    def pattern_kind(self) -> PatternKind:
        return PatternKind.parse(self.pattern)
