from types import SimpleNamespace

import pytest

from led_system import apa102_transport, Apa102Transport, MockTransport, Pixel, PixelStripConfig, PixelStripTransport, SpiConfig
from led_system.apa102_transport import brightness_to_5bit, encode_frame, end_frame_length
from led_system.errors import ConfigError, TransportInitError, TransportWriteError
from led_system.pixel_strip_adapter import pack_pixel


class FakeSpi:
    """Stands in for spidev.SpiDev"""

    def __init__(self, fail=False):
        self.fail = fail
        self.writes = []
        self.closed = False

    def writebytes2(self, data):
        if self.fail:
            raise OSError(121, "Remote I/O error")
        self.writes.append(bytes(data))

    def close(self):
        self.closed = True


class FakeStrip:
    """Stands in for rpi_ws281x.PixelStrip"""

    def __init__(self, fail=False):
        self.fail = fail
        self.colors = {}
        self.shows = 0

    def setPixelColor(self, n, color):
        self.colors[n] = color

    def show(self):
        if self.fail:
            raise RuntimeError("ws2811_render failed with code -13")
        self.shows += 1


def test_brightness_mapping():
    assert brightness_to_5bit(0.0) == 0
    assert brightness_to_5bit(1.0) == 31
    assert brightness_to_5bit(0.5) == 16


@pytest.mark.parametrize("pixel_count, expected", [(0, 4), (1, 4), (64, 4), (65, 5), (100, 7), (300, 19)])
def test_end_frame_length(pixel_count, expected):
    assert end_frame_length(pixel_count) == expected


def test_encode_frame_layout():
    pixels = [Pixel(1, 2, 3, 1.0), Pixel(4, 5, 6, 0.0)]
    assert encode_frame(pixels) == (
        b"\x00\x00\x00\x00"
        + bytes([0xFF, 3, 2, 1])
        + bytes([0xE0, 6, 5, 4])
        + b"\xff\xff\xff\xff"
    )
    assert encode_frame(pixels, "RGB")[4:8] == bytes([0xFF, 1, 2, 3])


def test_apa102_writes_encoded_frame():
    spi = FakeSpi()
    transport = Apa102Transport(spi, SpiConfig(color_order="GRB"), 2)
    pixels = (Pixel(10, 20, 30, 1.0), Pixel(0, 0, 0, 0.0))
    transport.write_frame(pixels)
    assert spi.writes == [encode_frame(pixels, "GRB")]

    transport.close()
    assert spi.closed


def test_apa102_write_errors():
    transport = Apa102Transport(FakeSpi(fail=True), SpiConfig(), 1)
    with pytest.raises(TransportWriteError):
        transport.write_frame([Pixel(1, 1, 1, 1.0)])

    transport = Apa102Transport(FakeSpi(), SpiConfig(), 3)
    with pytest.raises(TransportWriteError):
        transport.write_frame([Pixel(1, 1, 1, 1.0)])


@pytest.mark.parametrize("config", [
    SpiConfig(speed_hz=0),
    SpiConfig(bus=-1),
    SpiConfig(color_order="XYZ"),
])
def test_apa102_open_validates_config(config):
    with pytest.raises(ConfigError):
        Apa102Transport.open(config, 10)


def test_pack_pixel_applies_brightness():
    assert pack_pixel(Pixel(255, 128, 0, 0.5)) == (128 << 16) | (64 << 8)
    assert pack_pixel(Pixel(0, 0, 0, 1.0, white=200)) == 200 << 24
    assert pack_pixel(Pixel(255, 255, 255, 0.0)) == 0


def test_pixel_strip_writes_and_shows():
    strip = FakeStrip()
    transport = PixelStripTransport(strip, PixelStripConfig(), 2)
    transport.write_frame([Pixel(255, 0, 0, 1.0), Pixel(0, 0, 255, 1.0)])
    assert strip.colors == {0: 0xFF0000, 1: 0x0000FF}
    assert strip.shows == 1


def test_pixel_strip_show_failure():
    transport = PixelStripTransport(FakeStrip(fail=True), PixelStripConfig(), 1)
    with pytest.raises(TransportWriteError):
        transport.write_frame([Pixel(255, 0, 0, 1.0)])


@pytest.mark.parametrize("config", [PixelStripConfig(gpio_pin=40), PixelStripConfig(channel=2)])
def test_pixel_strip_config_validation(config):
    with pytest.raises(ConfigError):
        config.validate()


def test_mock_transport_records_frames():
    transport = MockTransport.open({"fail_writes": 1}, 2)
    frame = (Pixel(1, 2, 3, 1.0), Pixel(0, 0, 0, 0.0))

    with pytest.raises(TransportWriteError):
        transport.write_frame(frame)
    transport.write_frame(frame)
    assert transport.frames == [frame]
    assert transport.write_attempts == 2

    transport.close()
    with pytest.raises(TransportWriteError):
        transport.write_frame(frame)


class FlakySpiDev(FakeSpi):
    """Opens fine, then rejects the clock speed"""
    instances = []

    def __init__(self):
        super().__init__()
        FlakySpiDev.instances.append(self)

    def open(self, bus, device):
        self.opened = (bus, device)

    @property
    def max_speed_hz(self):
        return 0

    @max_speed_hz.setter
    def max_speed_hz(self, value):
        raise OSError(22, "Invalid argument")


def test_apa102_open_releases_device_on_setup_failure(monkeypatch):
    monkeypatch.setattr(apa102_transport, "spidev", SimpleNamespace(SpiDev=FlakySpiDev))
    FlakySpiDev.instances.clear()

    with pytest.raises(TransportInitError):
        Apa102Transport.open(SpiConfig(), 10)

    spi, = FlakySpiDev.instances
    assert spi.opened == (0, 0)
    assert spi.closed
