#!/usr/bin/env python3
"""
Transport Interface - Abstract base class for committing frames to hardware

Defines the contract between the animation core and an LED strip driver.
The core never talks to SPI/PWM directly; it hands a complete, ordered pixel
frame to a Transport and lets the implementation encode and send it.
"""
from abc import ABC, abstractmethod
from typing import Any, Sequence

from .pixel import Pixel


class Transport(ABC):
    """Abstract interface for LED strip transports

    Implementations can wrap different LED libraries (spidev for APA102,
    rpi_ws281x for WS281x/SK6812, an in-memory recorder for testing) while
    providing a consistent interface.

    Lifecycle:
        transport = SomeTransport.open(config, 120)  # TransportInitError on failure
        transport.write_frame(buffer.snapshot())  # TransportWriteError on failure
        transport.close()
    """

    @classmethod
    @abstractmethod
    def open(cls, config: Any, pixel_count: int) -> 'Transport':
        """Open the hardware and return a ready transport.

        Args:
            config: Implementation specific pin/bus configuration
            pixel_count: Number of pixels on the strip

        Raises:
            TransportInitError: If the hardware cannot be opened
        """
        pass

    @abstractmethod
    def write_frame(self, pixels: Sequence[Pixel]) -> None:
        """Send brightness and color for every pixel, in strip order.

        The frame is committed atomically from the caller's perspective.

        Raises:
            TransportWriteError: If the frame could not be sent
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the hardware resources"""
        pass

    @property
    def name(self) -> str:
        return self.__class__.__name__
