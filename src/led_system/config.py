"""
Hardware configuration for the LED transports
"""

from dataclasses import dataclass

from .errors import ConfigError

# APA102 color byte orders accepted by Apa102Transport
COLOR_ORDERS = ("RGB", "RBG", "GRB", "GBR", "BRG", "BGR")


@dataclass
class SpiConfig:
    """SPI bus configuration for APA102 (clocked) strips

    Defaults match the Raspberry Pi hardware SPI0 pins:
    clock on GPIO 11 (physical pin 23), data on GPIO 10 (physical pin 19).
    """
    bus: int = 0
    device: int = 0
    speed_hz: int = 8_000_000
    clock_gpio: int = 11
    data_gpio: int = 10
    color_order: str = "BGR"

    @property
    def device_path(self) -> str:
        return f"/dev/spidev{self.bus}.{self.device}"

    def validate(self) -> None:
        if self.bus < 0 or self.device < 0:
            raise ConfigError(f"SPI bus/device must be non-negative, got {self.bus}.{self.device}")
        if self.speed_hz <= 0:
            raise ConfigError(f"SPI speed must be positive, got {self.speed_hz}")
        if self.color_order.upper() not in COLOR_ORDERS:
            raise ConfigError(f"Unknown color order {self.color_order!r}, expected one of {COLOR_ORDERS}")


@dataclass
class PixelStripConfig:
    """Configuration for a WS281x/SK6812 strip driven by rpi_ws281x"""
    gpio_pin: int = 18
    freq_hz: int = 800000
    dma: int = 10
    invert: bool = False
    brightness: int = 255  # 0-255, applied on top of per-pixel brightness
    channel: int = 0
    rgbw: bool = False

    def validate(self) -> None:
        if not (2 <= self.gpio_pin <= 27):  # Valid RPi GPIO range
            raise ConfigError(f"LED strip GPIO pin {self.gpio_pin} out of valid range (2-27)")
        if not (0 <= self.brightness <= 255):
            raise ConfigError(f"LED brightness must be 0-255, got {self.brightness}")
        if self.channel not in (0, 1):
            raise ConfigError(f"PWM channel must be 0 or 1, got {self.channel}")
