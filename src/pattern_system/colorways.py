"""
Colorways - pure palette functions mapping (pixel index, phase) to a color

A colorway never holds mutable state. The same colorway can be queried for
any index at any phase in any order and always answers the same, so it can
be shared between frames and swapped freely between pattern runs.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from led_system.color import Color, WHITE
from led_system.errors import ConfigError

from .animation_helpers import AnimationHelpers

ColorLike = Union[Color, Tuple[int, int, int]]


def _as_color(value: ColorLike) -> Color:
    if isinstance(value, Color):
        return value
    return Color(*value)


def _check_total(total: int) -> None:
    if total <= 0:
        raise ValueError(f"Colorway queried with an empty strip (total={total})")


class Colorway(ABC):
    """Abstract base for all colorway variants"""

    @abstractmethod
    def color_at(self, index: int, total: int, phase: int) -> Color:
        """
        Color of pixel `index` on a strip of `total` pixels at animation `phase`.

        Raises:
            ValueError: If total is not positive
        """
        pass

    @property
    def name(self) -> str:
        return self.__class__.__name__


@dataclass(frozen=True)
class Rainbow(Colorway):
    """Full spectrum spread over the strip, rotating `speed` degrees per phase step"""
    speed: int = 1

    def color_at(self, index: int, total: int, phase: int) -> Color:
        _check_total(total)
        # Integer modulo keeps the 360-phase period exact
        offset = (phase * self.speed) % 360
        hue = (index * 360 / total + offset) % 360
        return AnimationHelpers.hsv_to_color(hue, 1.0, 1.0)


@dataclass(frozen=True)
class Solid(Colorway):
    """Same color everywhere, at every phase"""
    color: Color = WHITE

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", _as_color(self.color))

    @classmethod
    def from_hue(cls, hue: float) -> 'Solid':
        return cls(AnimationHelpers.hsv_to_color(hue, 1.0, 1.0))

    @classmethod
    def from_name(cls, name: str) -> 'Solid':
        """One of the named hues (red, orange, yellow, green, blue, purple) or white"""
        key = name.lower()
        if key == "white":
            return cls(WHITE)
        if key not in AnimationHelpers.NAMED_HUES:
            raise ConfigError(f"Unknown color name {name!r}")
        return cls.from_hue(AnimationHelpers.NAMED_HUES[key])

    def color_at(self, index: int, total: int, phase: int) -> Color:
        return self.color


@dataclass(frozen=True)
class Gradient(Colorway):
    """
    Linear RGB gradient through a list of (position, color) stops.

    Positions are in 0.0-1.0 and must be sorted. A pixel's normalized position
    runs from 0.0 (first pixel) to 1.0 (last pixel); positions outside the
    stop range clamp to the nearest end stop. With `scroll` set, the gradient
    moves `scroll` pixels per phase step and wraps around the strip.
    """
    stops: Tuple[Tuple[float, Color], ...] = ()
    scroll: int = 0

    def __post_init__(self) -> None:
        stops = tuple((float(position), _as_color(color)) for position, color in self.stops)
        if not stops:
            raise ConfigError("Gradient needs at least one stop")
        previous = 0.0
        for position, _ in stops:
            if not 0.0 <= position <= 1.0:
                raise ConfigError(f"Gradient stop position must be within 0.0-1.0, got {position}")
            if position < previous:
                raise ConfigError(f"Gradient stops must be sorted by position ({position} after {previous})")
            previous = position
        object.__setattr__(self, "stops", stops)

    @classmethod
    def from_colors(cls, colors: Sequence[ColorLike], scroll: int = 0) -> 'Gradient':
        """Evenly spaced stops for a list of colors"""
        if len(colors) == 1:
            return cls(((0.0, _as_color(colors[0])),), scroll)
        last = len(colors) - 1
        return cls(tuple((i / last, _as_color(c)) for i, c in enumerate(colors)), scroll)

    def color_at_position(self, position: float) -> Color:
        """Interpolated color at a normalized position"""
        first_position, first_color = self.stops[0]
        if position <= first_position:
            return first_color

        for (p0, c0), (p1, c1) in zip(self.stops, self.stops[1:]):
            if position <= p1:
                if p1 == p0:
                    return c1
                return AnimationHelpers.lerp_color(c0, c1, (position - p0) / (p1 - p0))

        return self.stops[-1][1]

    def color_at(self, index: int, total: int, phase: int) -> Color:
        _check_total(total)
        if total == 1:
            return self.color_at_position(0.0)
        shifted = (index + phase * self.scroll) % total
        return self.color_at_position(shifted / (total - 1))


# Deep red through orange to a near-white core
FIRE_GRADIENT = Gradient((
    (0.0, Color(120, 0, 0)),
    (0.45, Color(230, 40, 0)),
    (0.8, Color(255, 130, 10)),
    (1.0, Color(255, 220, 150)),
))


@dataclass(frozen=True)
class Fire(Colorway):
    """
    Fireplace palette: warm gradient sampled at a random heat per pixel and
    phase, dimmed by a random factor in [1 - jitter, 1].

    The randomness is derived from (seed, index, phase), so the same query
    always gives the same color. Use `Fire.from_rng()` to take the seed from an
    injected generator.
    """
    seed: int = 0
    jitter: float = 0.5

    def __post_init__(self) -> None:
        if not 0.0 <= self.jitter <= 1.0:
            raise ConfigError(f"Fire jitter must be within 0.0-1.0, got {self.jitter}")

    @classmethod
    def from_rng(cls, rng: random.Random, jitter: float = 0.5) -> 'Fire':
        return cls(seed=rng.getrandbits(32), jitter=jitter)

    def color_at(self, index: int, total: int, phase: int) -> Color:
        _check_total(total)
        rng = random.Random(f"{self.seed}:{index}:{phase}")
        # Squaring biases the heat toward the red end
        heat = rng.random() ** 2
        level = 1.0 - self.jitter * rng.random()
        # Scaling every channel by the same factor keeps the hue
        return FIRE_GRADIENT.color_at_position(heat).scaled(level)


@dataclass(frozen=True)
class Palette(Colorway):
    """Repeats a fixed list of colors along the strip"""
    colors: Tuple[Color, ...] = (WHITE,)

    def __post_init__(self) -> None:
        colors = tuple(_as_color(c) for c in self.colors)
        if not colors:
            raise ConfigError("Palette needs at least one color")
        object.__setattr__(self, "colors", colors)

    def color_at(self, index: int, total: int, phase: int) -> Color:
        _check_total(total)
        return self.colors[index % len(self.colors)]


# White plus red, green, blue and purple bulbs
CHRISTMAS_TRADITIONAL = Palette((
    WHITE,
    AnimationHelpers.hsv_to_color(0, 1.0, 1.0),
    AnimationHelpers.hsv_to_color(120, 1.0, 1.0),
    AnimationHelpers.hsv_to_color(240, 1.0, 1.0),
    AnimationHelpers.hsv_to_color(270, 1.0, 1.0),
))
