#!/usr/bin/env python3
"""
PixelStrip Transport - rpi_ws281x wrapper implementing Transport

Drives WS281x / SK6812 (RGBW) strips for setups without a clocked APA102
strip. These chips have no per-LED brightness field, so per-pixel brightness
is applied by scaling the color channels. This is the only file that depends
on rpi_ws281x.
"""
from typing import Sequence

from .config import PixelStripConfig
from .errors import TransportInitError, TransportWriteError
from .interfaces import Transport
from .pixel import Pixel

# Import rpi_ws281x at module level within adapter
try:
    from rpi_ws281x import PixelStrip, ws
except ImportError:
    # Handle gracefully for development on non-Pi systems
    PixelStrip = None
    ws = None


def pack_pixel(pixel: Pixel) -> int:
    """Pack a pixel into the rpi_ws281x 0xWWRRGGBB integer, brightness applied"""
    level = pixel.brightness
    r = round(pixel.red * level)
    g = round(pixel.green * level)
    b = round(pixel.blue * level)
    w = round(pixel.white * level)
    return (w << 24) | (r << 16) | (g << 8) | b


class PixelStripTransport(Transport):
    """Adapter that wraps rpi_ws281x PixelStrip to implement Transport"""

    def __init__(self, strip, config: PixelStripConfig, pixel_count: int) -> None:
        """
        Args:
            strip: A started rpi_ws281x PixelStrip (or compatible object)
            config: Strip configuration used to create it
            pixel_count: Number of LEDs on the strip
        """
        self._strip = strip
        self.config = config
        self.pixel_count = pixel_count

    @classmethod
    def open(cls, config: PixelStripConfig, pixel_count: int) -> 'PixelStripTransport':
        """Create and start the PixelStrip with all standard parameters

        Raises:
            TransportInitError: If rpi_ws281x is not available or begin() fails
        """
        config.validate()
        if PixelStrip is None:
            raise TransportInitError("rpi_ws281x not available - run on Raspberry Pi")

        strip_type = ws.SK6812_STRIP_RGBW if config.rgbw else ws.WS2811_STRIP_GRB
        strip = PixelStrip(pixel_count, config.gpio_pin, config.freq_hz, config.dma,
                           config.invert, config.brightness, config.channel,
                           strip_type=strip_type)
        try:
            strip.begin()
        except RuntimeError as e:
            raise TransportInitError(f"PixelStrip on GPIO {config.gpio_pin} failed to start: {e}") from e
        return cls(strip, config, pixel_count)

    def write_frame(self, pixels: Sequence[Pixel]) -> None:
        if len(pixels) != self.pixel_count:
            raise TransportWriteError(f"Frame has {len(pixels)} pixels, strip has {self.pixel_count}")
        for i, pixel in enumerate(pixels):
            self._strip.setPixelColor(i, pack_pixel(pixel))
        try:
            # This operation typically takes ~10ms per strip to complete
            self._strip.show()
        except RuntimeError as e:
            raise TransportWriteError(f"PixelStrip show() failed: {e}") from e

    def close(self) -> None:
        # rpi_ws281x releases DMA/PWM resources in its finalizer
        self._strip = None
