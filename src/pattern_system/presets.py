"""
Presets - pattern runs tied to their own colorway
"""

import random
from enum import Enum
from typing import Any, Dict, Tuple, Union

from led_system.errors import ConfigError

from .colorways import Colorway, Fire, CHRISTMAS_TRADITIONAL
from .patterns import PatternKind


class Preset(Enum):
    """Colorway + pattern combinations that only make sense together"""
    # Reminiscent of a crackling fireplace
    FIREPLACE = "fireplace"
    # Twinkling multi-colored bulbs, like a traditionally lit Christmas tree
    CHRISTMAS_TRADITIONAL = "christmas"

    @classmethod
    def parse(cls, value: Union['Preset', str]) -> 'Preset':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ConfigError(f"Unknown preset {value!r}, expected one of: {names}") from None


def preset_animation(preset: Preset, rng: random.Random) -> Tuple[Colorway, PatternKind, Dict[str, Any]]:
    """Colorway, pattern kind and pattern parameters for a preset"""
    if preset is Preset.FIREPLACE:
        return Fire.from_rng(rng), PatternKind.TWINKLE, {"probability": 0.1, "decay": 0.85}
    if preset is Preset.CHRISTMAS_TRADITIONAL:
        return CHRISTMAS_TRADITIONAL, PatternKind.TWINKLE, {"probability": 0.04, "decay": 0.95}
    raise ConfigError(f"Unsupported preset {preset!r}")
