"""
Pattern System - colorways, patterns and the frame controller

This module provides the animation core: pure colorways that map a pixel
position and phase to a color, stateful patterns that decide which pixels
light up and how bright, the engine that renders one frame into a pixel
buffer, and the controller that flushes frames to a transport.
"""

from .colorways import Colorway, Rainbow, Fire, Solid, Gradient, Palette, FIRE_GRADIENT, CHRISTMAS_TRADITIONAL
from .patterns import (
    Pattern, PatternKind, Chase, Pulse, TheaterChase, Twinkle, KnightRider, Bands,
    PHASE_WRAP, create_pattern,
)
from .pattern_engine import PatternEngine
from .presets import Preset, preset_animation
from .controller import Controller
from .animation_helpers import AnimationHelpers
from .config import AnimationConfig, parse_color, parse_stops

__all__ = [
    # Colorways
    "Colorway",
    "Rainbow",
    "Fire",
    "Solid",
    "Gradient",
    "Palette",
    "FIRE_GRADIENT",
    "CHRISTMAS_TRADITIONAL",
    # Patterns
    "Pattern",
    "PatternKind",
    "Chase",
    "Pulse",
    "TheaterChase",
    "Twinkle",
    "KnightRider",
    "Bands",
    "PHASE_WRAP",
    "create_pattern",
    # Engine and controller
    "PatternEngine",
    "Preset",
    "preset_animation",
    "Controller",
    "AnimationHelpers",
    # Configuration
    "AnimationConfig",
    "parse_color",
    "parse_stops",
]
