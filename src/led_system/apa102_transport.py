#!/usr/bin/env python3
"""
APA102 Transport - spidev driver for clocked (APA102 / DotStar) strips

Encodes a pixel frame into the APA102 wire format and shifts it out over the
Linux SPI device. This is the only file that depends on spidev.

Frame layout:
    start frame    4 x 0x00
    per LED        0xE0 | brightness(5 bit), then three color bytes
    end frame      max(4, ceil(N / 16)) x 0xFF
"""
from typing import Sequence

from .config import SpiConfig
from .errors import TransportInitError, TransportWriteError
from .interfaces import Transport
from .pixel import Pixel

try:
    import spidev
except ImportError:
    # Handle gracefully for development on non-Pi systems
    spidev = None

START_FRAME = bytes(4)
LED_FRAME_MARKER = 0xE0
MAX_BRIGHTNESS = 31


def brightness_to_5bit(brightness: float) -> int:
    """Map a 0.0-1.0 brightness onto the APA102 global brightness field (0-31)"""
    return max(0, min(MAX_BRIGHTNESS, round(brightness * MAX_BRIGHTNESS)))


def end_frame_length(pixel_count: int) -> int:
    """Number of 0xFF bytes needed to clock data through every LED"""
    return max(4, (pixel_count + 15) // 16)


def encode_frame(pixels: Sequence[Pixel], color_order: str = "BGR") -> bytes:
    """Build the complete byte stream for one frame"""
    order = color_order.upper()
    data = bytearray(START_FRAME)
    for pixel in pixels:
        channels = {"R": pixel.red, "G": pixel.green, "B": pixel.blue}
        data.append(LED_FRAME_MARKER | brightness_to_5bit(pixel.brightness))
        data.extend(channels[c] for c in order)
    data.extend(b"\xff" * end_frame_length(len(pixels)))
    return bytes(data)


class Apa102Transport(Transport):
    """Transport that writes APA102 frames to /dev/spidevB.D"""

    def __init__(self, spi, config: SpiConfig, pixel_count: int) -> None:
        """
        Args:
            spi: An opened spidev.SpiDev (or compatible object with writebytes2/close)
            config: SPI configuration used to open the device
            pixel_count: Number of LEDs on the strip
        """
        self._spi = spi
        self.config = config
        self.pixel_count = pixel_count

    @classmethod
    def open(cls, config: SpiConfig, pixel_count: int) -> 'Apa102Transport':
        """Open the SPI device

        Raises:
            TransportInitError: If spidev is missing or the device can't be opened
        """
        config.validate()
        if spidev is None:
            raise TransportInitError("spidev not available - run on Raspberry Pi with SPI enabled")
        spi = spidev.SpiDev()
        try:
            spi.open(config.bus, config.device)
            spi.max_speed_hz = config.speed_hz
            spi.mode = 0
        except OSError as e:
            spi.close()
            raise TransportInitError(
                f"Cannot open SPI device {config.device_path} "
                f"(enable SPI with raspi-config): {e}"
            ) from e
        return cls(spi, config, pixel_count)

    def write_frame(self, pixels: Sequence[Pixel]) -> None:
        if len(pixels) != self.pixel_count:
            raise TransportWriteError(f"Frame has {len(pixels)} pixels, strip has {self.pixel_count}")
        payload = encode_frame(pixels, self.config.color_order)
        try:
            # writebytes2 chunks large buffers itself, unlike xfer2's 4096 byte limit
            self._spi.writebytes2(payload)
        except OSError as e:
            raise TransportWriteError(f"SPI write to {self.config.device_path} failed: {e}") from e

    def close(self) -> None:
        self._spi.close()
