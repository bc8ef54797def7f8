#!/usr/bin/env python3
"""
Pixel Buffer - Fixed-length in-memory frame for one LED strip

The buffer is the only mutable pixel state. Its length is set once at
construction and never changes; patterns overwrite positions, transports
read a snapshot of the whole sequence.
"""
from typing import Iterator, List, Sequence, Tuple, Union

from .errors import ConfigError
from .pixel import Pixel, OFF


class PixelBuffer:
    """Ordered, fixed-length sequence of pixels supporting slice notation

    Supported Operations:
        buffer[5] = Pixel(255, 0, 0, 1.0)          # Single pixel
        buffer[0:10] = Pixel(0, 255, 0, 0.5)       # Slice to same pixel
        buffer[0:3] = [pixel1, pixel2, pixel3]     # Slice to different pixels
        buffer[:] = OFF                            # Clear all

        pixel = buffer[5]                          # Get single pixel
        pixels = buffer[0:10]                      # Get slice of pixels

    Invalid Operations:
        buffer[5] = [pixel1, pixel2]               # Position + list (TypeError)
    """

    def __init__(self, pixel_count: int) -> None:
        """
        Args:
            pixel_count: Number of pixels in the strip (must be positive)

        Raises:
            ConfigError: If pixel_count is not positive
        """
        if pixel_count <= 0:
            raise ConfigError(f"Pixel buffer length must be positive, got {pixel_count}")
        self._pixels: List[Pixel] = [OFF] * pixel_count

    def __len__(self) -> int:
        return len(self._pixels)

    def __iter__(self) -> Iterator[Pixel]:
        return iter(tuple(self._pixels))

    def __getitem__(self, pos: Union[int, slice]) -> Union[Pixel, List[Pixel]]:
        return self._pixels[pos]

    def __setitem__(self, pos: Union[int, slice], value: Union[Pixel, Sequence[Pixel]]) -> None:
        """Set pixel(s) without ever changing the buffer length

        Raises:
            TypeError: If assigning a list to a single position or a non-Pixel value
            ValueError: If a pixel list length doesn't match the slice length
        """
        if isinstance(pos, slice):
            indices = range(*pos.indices(len(self._pixels)))
            if isinstance(value, Pixel):
                for i in indices:
                    self._pixels[i] = value
                return
            values = list(value)
            if len(values) != len(indices):
                raise ValueError(f"Pixel list length ({len(values)}) must match slice length ({len(indices)})")
            for i, pixel in zip(indices, values):
                self._pixels[i] = self._check(pixel)
        else:
            if not isinstance(value, Pixel):
                raise TypeError("Cannot assign list of pixels to single position")
            self._pixels[pos] = value

    @staticmethod
    def _check(pixel: Pixel) -> Pixel:
        if not isinstance(pixel, Pixel):
            raise TypeError(f"Expected Pixel, got {type(pixel).__name__}")
        return pixel

    def write_frame(self, frame: Sequence[Pixel]) -> None:
        """Overwrite every position with a complete frame"""
        self[:] = frame

    def clear(self) -> None:
        self[:] = OFF

    def snapshot(self) -> Tuple[Pixel, ...]:
        """Immutable copy of the current frame, in strip order"""
        return tuple(self._pixels)

    def lit_indices(self) -> List[int]:
        """Positions currently emitting light"""
        return [i for i, pixel in enumerate(self._pixels) if not pixel.is_black()]
