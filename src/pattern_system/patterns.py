"""
Pattern variants - the stateful half of an animation

Each pattern is a small dataclass carrying only its own parameters plus the
phase counter. The phase is the only state that survives from one frame to
the next (Twinkle additionally keeps one brightness level per pixel).
Rendering lives in PatternEngine, which dispatches on the variant.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union

from led_system.errors import ConfigError

# Phase bound for every pattern but Chase; a multiple of 360 so Rainbow never jumps
PHASE_WRAP = 360 * 2 ** 24


class PatternKind(Enum):
    """Tag identifying a pattern variant"""
    CHASE = "chase"
    PULSE = "pulse"
    THEATER_CHASE = "theater-chase"
    TWINKLE = "twinkle"
    KNIGHT_RIDER = "knight-rider"
    BANDS = "bands"

    @classmethod
    def parse(cls, value: Union['PatternKind', str]) -> 'PatternKind':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower().replace("_", "-"))
        except ValueError:
            names = ", ".join(k.value for k in cls)
            raise ConfigError(f"Unknown pattern {value!r}, expected one of: {names}") from None


@dataclass
class Pattern:
    """Base for all pattern variants"""
    kind: ClassVar[PatternKind]
    phase: int = field(default=0, init=False)

    def period(self, pixel_count: int) -> int:
        """Number of phase steps after which the phase counter wraps to 0"""
        return PHASE_WRAP

    def reset(self) -> None:
        self.phase = 0


@dataclass
class Chase(Pattern):
    """A window of `width` lit pixels moving one position per frame, wrapping around"""
    kind: ClassVar[PatternKind] = PatternKind.CHASE
    width: int = 1

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ConfigError(f"Chase width must be at least 1, got {self.width}")

    def period(self, pixel_count: int) -> int:
        return pixel_count


@dataclass
class Pulse(Pattern):
    """Whole strip breathing between `floor` and full brightness over `period_frames` frames"""
    kind: ClassVar[PatternKind] = PatternKind.PULSE
    period_frames: int = 100
    floor: float = 0.15

    def __post_init__(self) -> None:
        if self.period_frames < 1:
            raise ConfigError(f"Pulse period must be at least 1 frame, got {self.period_frames}")
        if not 0.0 <= self.floor <= 1.0:
            raise ConfigError(f"Pulse floor must be within 0.0-1.0, got {self.floor}")


@dataclass
class TheaterChase(Pattern):
    """Every `spacing`-th pixel lit, stepping one position per frame"""
    kind: ClassVar[PatternKind] = PatternKind.THEATER_CHASE
    spacing: int = 3

    def __post_init__(self) -> None:
        if self.spacing < 1:
            raise ConfigError(f"Theater chase spacing must be at least 1, got {self.spacing}")


@dataclass
class Twinkle(Pattern):
    """
    Random pixels spark and fade out.

    `levels` holds one brightness per pixel and is allocated together with
    the pattern, so neither the buffer nor the colorway carries decay state.
    """
    kind: ClassVar[PatternKind] = PatternKind.TWINKLE
    pixel_count: int = 0
    probability: float = 0.05
    decay: float = 0.75
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
    levels: List[float] = field(default_factory=list, init=False, repr=False)

    # Levels below this snap to off
    CUTOFF: ClassVar[float] = 0.02
    SPARK_MIN: ClassVar[float] = 0.5

    def __post_init__(self) -> None:
        if self.pixel_count < 1:
            raise ConfigError(f"Twinkle needs the strip length, got {self.pixel_count}")
        if not 0.0 <= self.probability <= 1.0:
            raise ConfigError(f"Twinkle probability must be within 0.0-1.0, got {self.probability}")
        if not 0.0 <= self.decay < 1.0:
            raise ConfigError(f"Twinkle decay must be within 0.0-1.0 (exclusive), got {self.decay}")
        self.levels = [0.0] * self.pixel_count

    def reset(self) -> None:
        super().reset()
        self.levels = [0.0] * self.pixel_count


@dataclass
class KnightRider(Pattern):
    """Scanner bouncing end to end with a fading tail"""
    kind: ClassVar[PatternKind] = PatternKind.KNIGHT_RIDER
    tail_fraction: float = 0.4

    def __post_init__(self) -> None:
        if not 0.0 < self.tail_fraction <= 1.0:
            raise ConfigError(f"Tail fraction must be within (0.0, 1.0], got {self.tail_fraction}")

    def tail_length(self, pixel_count: int) -> int:
        return max(1, int(pixel_count * self.tail_fraction))

    def sweep_length(self, pixel_count: int) -> int:
        """Frames for one full there-and-back sweep"""
        return 2 * (pixel_count - 1) if pixel_count > 1 else 1


@dataclass
class Bands(Pattern):
    """Soft-edged bands of color scrolling along the strip, one per `band_size` pixels"""
    kind: ClassVar[PatternKind] = PatternKind.BANDS
    band_size: int = 30

    def __post_init__(self) -> None:
        if self.band_size < 1:
            raise ConfigError(f"Band size must be at least 1, got {self.band_size}")


PATTERN_TYPES = {
    cls.kind: cls for cls in (Chase, Pulse, TheaterChase, Twinkle, KnightRider, Bands)
}


def create_pattern(kind: Union[PatternKind, str], pixel_count: int,
                   rng: Optional[random.Random] = None, **params) -> Pattern:
    """
    Build a pattern variant with its parameters.

    Args:
        kind: Pattern kind (enum member or its string value)
        pixel_count: Strip length, used to size per-pixel pattern state
        rng: Random generator for patterns that need one (Twinkle)
        **params: Kind specific parameters (e.g. width=3, period_frames=50)

    Raises:
        ConfigError: For an unknown kind or invalid parameters
    """
    kind = PatternKind.parse(kind)
    pattern_cls = PATTERN_TYPES[kind]
    if pattern_cls is Twinkle:
        params = dict(params, pixel_count=pixel_count, rng=rng or random.Random())
    try:
        return pattern_cls(**params)
    except TypeError as e:
        raise ConfigError(f"Invalid parameters for {kind.value}: {e}") from e
