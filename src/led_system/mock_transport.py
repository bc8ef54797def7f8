"""
Mock Transport - In-memory implementation for running without LED hardware
"""

from typing import List, Optional, Sequence, Tuple

from .errors import TransportInitError, TransportWriteError
from .interfaces import Transport
from .pixel import Pixel


class MockTransport(Transport):
    """
    Transport that records frames instead of sending them.

    Used by the test suite and by the CLI dry-run mode. Failures can be
    injected to exercise the controller's error handling.
    """

    def __init__(self, pixel_count: int, fail_writes: int = 0, logger=None):
        """
        Args:
            pixel_count: Number of pixels on the simulated strip
            fail_writes: Number of upcoming write_frame() calls that should fail
            logger: Optional ClassLogger for per-frame debug output
        """
        self.pixel_count = pixel_count
        self.fail_writes = fail_writes
        self.logger = logger
        self.frames: List[Tuple[Pixel, ...]] = []
        self.write_attempts = 0
        self.closed = False

    @classmethod
    def open(cls, config: Optional[dict], pixel_count: int) -> 'MockTransport':
        """Create a mock transport; config may contain 'fail_open', 'fail_writes' and 'logger'"""
        config = config or {}
        if config.get("fail_open"):
            raise TransportInitError("Mock: simulated hardware unavailable")
        return cls(pixel_count, fail_writes=config.get("fail_writes", 0), logger=config.get("logger"))

    def write_frame(self, pixels: Sequence[Pixel]) -> None:
        self.write_attempts += 1
        if self.closed:
            raise TransportWriteError("Mock: transport is closed")
        if self.fail_writes > 0:
            self.fail_writes -= 1
            raise TransportWriteError("Mock: simulated bus error")
        if len(pixels) != self.pixel_count:
            raise TransportWriteError(f"Frame has {len(pixels)} pixels, strip has {self.pixel_count}")
        self.frames.append(tuple(pixels))
        if self.logger:
            lit = sum(1 for p in pixels if not p.is_black())
            self.logger.debug(f"Mock: frame {len(self.frames)} committed ({lit}/{len(pixels)} lit)")

    def close(self) -> None:
        self.closed = True

    @property
    def last_frame(self) -> Optional[Tuple[Pixel, ...]]:
        return self.frames[-1] if self.frames else None
