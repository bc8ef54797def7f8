import random

import pytest

from led_system import Color, PixelBuffer
from led_system.errors import ConfigError
from pattern_system import (
    Bands, Chase, Colorway, KnightRider, PHASE_WRAP, PatternEngine, PatternKind, Pulse, Rainbow, Solid,
    TheaterChase, Twinkle, create_pattern,
)

from conftest import lit


def run(pattern, colorway, pixel_count, frames):
    """Advance `frames` times, returning a snapshot after every frame"""
    engine = PatternEngine()
    buffer = PixelBuffer(pixel_count)
    snapshots = []
    for _ in range(frames):
        engine.advance(buffer, colorway, pattern)
        snapshots.append(buffer.snapshot())
    return snapshots


class ExplodingColorway(Colorway):
    """Raises for every query at one phase"""

    def __init__(self, bad_phase):
        self.bad_phase = bad_phase

    def color_at(self, index, total, phase):
        if phase == self.bad_phase:
            raise RuntimeError("palette exploded")
        return Color(255, 255, 255)


def test_chase_walks_the_strip():
    frames = run(Chase(width=1), Rainbow(), 3, 4)
    assert [lit(f) for f in frames] == [[0], [1], [2], [0]]


@pytest.mark.parametrize("pixel_count", range(1, 9))
@pytest.mark.parametrize("width", [1, 2, 5, 20])
def test_chase_window(pixel_count, width):
    pattern = Chase(width=width)
    for phase in range(2 * pixel_count + 1):
        frame = run(pattern, Rainbow(), pixel_count, 1)[0]
        expected = sorted({(phase + k) % pixel_count for k in range(min(width, pixel_count))})
        assert lit(frame) == expected
        assert all(frame[i].brightness == 1.0 for i in expected)


def test_chase_phase_wraps_at_strip_length():
    pattern = Chase()
    run(pattern, Rainbow(), 4, 4)
    assert pattern.phase == 0


def test_theater_chase_repeats_every_spacing_frames():
    pattern = TheaterChase(spacing=3)
    frames = run(pattern, Rainbow(), 7, 4)
    assert [lit(f) for f in frames] == [[0, 3, 6], [1, 4], [2, 5], [0, 3, 6]]
    assert pattern.phase == 4


def test_rainbow_keeps_rotating_under_theater_chase():
    frames = run(TheaterChase(), Rainbow(speed=5), 6, 31)
    hues = {frames[n][0].color for n in (0, 3, 6, 30)}
    assert len(hues) == 4


def test_rainbow_does_not_reset_with_pulse_period():
    frames = run(Pulse(period_frames=10), Rainbow(speed=6), 4, 11)
    assert frames[10][0].brightness == frames[0][0].brightness
    assert frames[10][0].color != frames[0][0].color


@pytest.mark.parametrize("pattern", [Pulse(), TheaterChase(), KnightRider(), Bands(band_size=2)])
def test_phase_wraps_at_large_bound(pattern):
    assert PHASE_WRAP % 360 == 0
    pattern.phase = PHASE_WRAP - 1
    run(pattern, Rainbow(), 4, 1)
    assert pattern.phase == 0


@pytest.mark.parametrize("period", [1, 2, 5, 12])
@pytest.mark.parametrize("floor", [0.0, 0.15, 1.0])
def test_pulse_brightness_bounds(period, floor):
    for frame in run(Pulse(period_frames=period, floor=floor), Rainbow(), 4, 2 * period + 1):
        for pixel in frame:
            assert floor <= pixel.brightness <= 1.0


def test_pulse_keeps_colorway_color():
    frames = run(Pulse(period_frames=10), Solid((10, 20, 30)), 5, 10)
    for frame in frames:
        assert {(p.red, p.green, p.blue) for p in frame} == {(10, 20, 30)}
    brightness = [frame[0].brightness for frame in frames]
    assert brightness[0] == pytest.approx(0.15)
    assert brightness[5] == pytest.approx(1.0)
    assert len(set(brightness)) > 1


def test_twinkle_is_reproducible_with_seed():
    first = run(Twinkle(pixel_count=20, probability=0.2, rng=random.Random(5)), Rainbow(), 20, 15)
    second = run(Twinkle(pixel_count=20, probability=0.2, rng=random.Random(5)), Rainbow(), 20, 15)
    assert first == second


def test_twinkle_sparks_then_decays():
    pattern = Twinkle(pixel_count=8, probability=1.0, decay=0.5, rng=random.Random(1))
    engine = PatternEngine()
    buffer = PixelBuffer(8)

    engine.advance(buffer, Rainbow(), pattern)
    sparks = list(pattern.levels)
    assert len(sparks) == 8
    assert all(0.5 <= level <= 1.0 for level in sparks)
    assert [p.brightness for p in buffer] == sparks

    pattern.probability = 0.0
    engine.advance(buffer, Rainbow(), pattern)
    assert pattern.levels == pytest.approx([level * 0.5 for level in sparks])

    for _ in range(10):
        engine.advance(buffer, Rainbow(), pattern)
    assert buffer.lit_indices() == []
    assert pattern.levels == [0.0] * 8


def test_twinkle_sized_for_another_strip_is_rejected():
    pattern = Twinkle(pixel_count=4)
    with pytest.raises(ConfigError):
        run(pattern, Rainbow(), 6, 1)


def test_knight_rider_bounces():
    pattern = KnightRider(tail_fraction=0.4)
    frames = run(pattern, Rainbow(), 5, 9)
    heads = [max(range(5), key=lambda i: f[i].brightness) for f in frames]
    assert heads == [0, 1, 2, 3, 4, 3, 2, 1, 0]

    # Tail of 2 pixels: head at full brightness, neighbour at half
    assert [p.brightness for p in frames[0]] == [1.0, 0.5, 0.0, 0.0, 0.0]


def test_knight_rider_single_pixel():
    frames = run(KnightRider(), Rainbow(), 1, 3)
    assert all(lit(f) == [0] for f in frames)


def test_bands_repeat_after_strip_length():
    pattern = Bands(band_size=30)
    frames = run(pattern, Solid((0, 0, 255)), 60, 61)
    assert frames[0] == frames[60]
    assert frames[0] != frames[1]
    for frame in frames:
        assert lit(frame)
        assert all(0.0 <= p.brightness <= 1.0 for p in frame)


def test_bands_single_pixel_is_lit():
    frames = run(Bands(), Solid((0, 0, 255)), 1, 5)
    assert all(f[0].brightness == 1.0 for f in frames)


def test_failed_frame_leaves_buffer_and_advances_phase():
    pattern = Chase(width=2)
    colorway = ExplodingColorway(bad_phase=1)
    engine = PatternEngine()
    buffer = PixelBuffer(5)

    engine.advance(buffer, colorway, pattern)
    before = buffer.snapshot()

    with pytest.raises(RuntimeError):
        engine.advance(buffer, colorway, pattern)
    assert buffer.snapshot() == before
    assert pattern.phase == 2
    assert engine.frames_rendered == 1

    engine.advance(buffer, colorway, pattern)
    assert buffer.lit_indices() == [2, 3]


def test_create_pattern():
    assert isinstance(create_pattern("knight_rider", 10), KnightRider)
    assert create_pattern(PatternKind.CHASE, 10, width=3).width == 3
    twinkle = create_pattern("twinkle", 12, random.Random(0))
    assert len(twinkle.levels) == 12


@pytest.mark.parametrize("kind, params", [
    ("wobble", {}),
    ("chase", {"width": 0}),
    ("chase", {"speed": 2}),
    ("pulse", {"period_frames": 0}),
    ("twinkle", {"decay": 1.0}),
    ("knight-rider", {"tail_fraction": 0.0}),
])
def test_create_pattern_rejects_bad_input(kind, params):
    with pytest.raises(ConfigError):
        create_pattern(kind, 10, **params)
