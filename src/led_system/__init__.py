#!/usr/bin/env python3
"""
LED System - Library independent LED strip output

This package holds the pixel-level data model and the transports that commit
frames to hardware. The main components are:

- Color: Zero-overhead RGB color class that extends int
- Pixel: Immutable color + brightness for one LED
- PixelBuffer: Fixed-length frame owned by the controller
- Transport: Abstract interface for committing frames
- Apa102Transport: spidev implementation for APA102 strips
- PixelStripTransport: rpi_ws281x implementation for WS281x/SK6812 strips
- MockTransport: in-memory implementation for tests and dry runs

Usage:
    from led_system import PixelBuffer, Pixel, Color, Apa102Transport, SpiConfig

    buffer = PixelBuffer(120)
    buffer[0] = Pixel.from_color(Color(255, 0, 0), brightness=0.5)

    transport = Apa102Transport.open(SpiConfig(), len(buffer))
    transport.write_frame(buffer.snapshot())
"""

from .color import Color, BLACK, WHITE
from .pixel import Pixel, OFF
from .pixel_buffer import PixelBuffer
from .errors import EasyBlinkError, ConfigError, TransportInitError, TransportWriteError
from .config import SpiConfig, PixelStripConfig
from .interfaces import Transport
from .apa102_transport import Apa102Transport
from .pixel_strip_adapter import PixelStripTransport
from .mock_transport import MockTransport

__all__ = [
    'Color', 'BLACK', 'WHITE',
    'Pixel', 'OFF',
    'PixelBuffer',
    'EasyBlinkError', 'ConfigError', 'TransportInitError', 'TransportWriteError',
    'SpiConfig', 'PixelStripConfig',
    'Transport', 'Apa102Transport', 'PixelStripTransport', 'MockTransport',
]
