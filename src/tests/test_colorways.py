import random

import pytest

from led_system import Color, WHITE
from led_system.errors import ConfigError
from pattern_system import (
    AnimationHelpers, Rainbow, Fire, Solid, Gradient, Palette, CHRISTMAS_TRADITIONAL,
)

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)


def test_hsv_primaries():
    assert AnimationHelpers.hsv_to_color(0, 1.0, 1.0) == RED
    assert AnimationHelpers.hsv_to_color(120, 1.0, 1.0) == GREEN
    assert AnimationHelpers.hsv_to_color(240, 1.0, 1.0) == BLUE
    assert AnimationHelpers.hsv_to_color(360, 1.0, 1.0) == RED


def test_rainbow_starts_red():
    assert Rainbow().color_at(0, 10, 0) == RED


@pytest.mark.parametrize("speed", [1, 3, 7])
@pytest.mark.parametrize("total", [1, 7, 60])
def test_rainbow_repeats_every_360_phases(speed, total):
    rainbow = Rainbow(speed=speed)
    for index in range(total):
        for phase in range(0, 720, 37):
            assert rainbow.color_at(index, total, phase) == rainbow.color_at(index, total, phase + 360)


@pytest.mark.parametrize("colorway", [Rainbow(), Fire(seed=1), Gradient.from_colors([RED, BLUE]),
                                      Palette((RED,)), Solid(RED)])
def test_single_pixel_strip(colorway):
    assert isinstance(colorway.color_at(0, 1, 5), Color)


@pytest.mark.parametrize("colorway", [Rainbow(), Fire(seed=1), Gradient.from_colors([RED, BLUE]),
                                      Palette((RED,))])
def test_empty_strip_is_rejected(colorway):
    with pytest.raises(ValueError):
        colorway.color_at(0, 0, 0)


def test_solid_ignores_position_and_phase():
    solid = Solid((10, 20, 30))
    assert {solid.color_at(i, 5, p) for i in range(5) for p in range(20)} == {Color(10, 20, 30)}


def test_solid_named_colors():
    assert Solid.from_name("blue").color == BLUE
    assert Solid.from_name("Red").color == RED
    assert Solid.from_name("white").color == WHITE
    with pytest.raises(ConfigError):
        Solid.from_name("chartreuse")


def test_gradient_hits_stops_exactly():
    gradient = Gradient(((0.0, RED), (0.5, GREEN), (1.0, BLUE)))
    assert gradient.color_at_position(0.0) == RED
    assert gradient.color_at_position(0.5) == GREEN
    assert gradient.color_at_position(1.0) == BLUE
    # Pixel 2 of 5 sits at position 0.5
    assert gradient.color_at(2, 5, 0) == GREEN
    assert gradient.color_at(4, 5, 0) == BLUE


def test_gradient_clamps_outside_stop_range():
    gradient = Gradient(((0.2, RED), (0.8, BLUE)))
    assert gradient.color_at_position(0.0) == RED
    assert gradient.color_at_position(1.0) == BLUE
    assert gradient.color_at_position(0.5) == Color(128, 0, 128)


def test_gradient_scroll_shifts_with_phase():
    gradient = Gradient.from_colors([RED, BLUE], scroll=1)
    assert gradient.color_at(0, 5, 1) == gradient.color_at(1, 5, 0)
    assert gradient.color_at(4, 5, 1) == gradient.color_at(0, 5, 0)


@pytest.mark.parametrize("stops", [
    (),
    ((0.5, RED), (0.2, BLUE)),
    ((0.0, RED), (1.5, BLUE)),
])
def test_gradient_rejects_bad_stops(stops):
    with pytest.raises(ConfigError):
        Gradient(stops)


def test_fire_is_deterministic_per_seed():
    first = Fire(seed=42)
    second = Fire(seed=42)
    colors = [first.color_at(i, 30, p) for i in range(30) for p in range(5)]
    assert colors == [second.color_at(i, 30, p) for i in range(30) for p in range(5)]

    # Querying out of order doesn't change the answer
    assert first.color_at(3, 30, 4) == colors[3 * 5 + 4]

    other = Fire(seed=43)
    assert colors != [other.color_at(i, 30, p) for i in range(30) for p in range(5)]


def test_fire_from_rng_uses_injected_generator():
    assert Fire.from_rng(random.Random(1)) == Fire.from_rng(random.Random(1))


def test_fire_stays_warm():
    fire = Fire(seed=3)
    for index in range(50):
        color = fire.color_at(index, 50, 11)
        assert color.r >= color.g >= color.b
        assert color.r > 0


def test_fire_rejects_bad_jitter():
    with pytest.raises(ConfigError):
        Fire(jitter=1.5)


def test_palette_repeats_along_strip():
    palette = Palette((RED, GREEN, BLUE))
    assert [palette.color_at(i, 7, 0) for i in range(7)] == [RED, GREEN, BLUE, RED, GREEN, BLUE, RED]
    assert CHRISTMAS_TRADITIONAL.color_at(0, 10, 0) == WHITE
    assert CHRISTMAS_TRADITIONAL.color_at(5, 10, 0) == WHITE
