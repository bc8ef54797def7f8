"""
Error types shared by the LED and pattern systems
"""


class EasyBlinkError(Exception):
    """Base class for all easyblink errors"""


class ConfigError(EasyBlinkError, ValueError):
    """Invalid static configuration (strip length, gradient stops, pattern parameters...)"""


class TransportInitError(EasyBlinkError, RuntimeError):
    """Hardware transport could not be opened (e.g. SPI not enabled)"""


class TransportWriteError(EasyBlinkError, IOError):
    """Committing a frame to the hardware failed; the in-memory frame is still valid"""
