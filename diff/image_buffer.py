"""
RGBA pixel buffer used by the comparison engine
Keeps the row-major, interleaved 4-bytes-per-pixel layout that image codecs use
"""

from typing import NamedTuple, Tuple, Union

import numpy as np


class Pixel(NamedTuple):
    """One RGBA pixel, each channel in 0..255"""
    r: int
    g: int
    b: int
    a: int

    def __str__(self) -> str:
        return f"R={self.r} G={self.g} B={self.b} A={self.a}"


class ImageBuffer:
    """
    Width x height grid of RGBA pixels

    The pixels are held in a numpy array of shape (height, width, 4) and dtype
    uint8, which is byte-for-byte the flat row-major RGBA layout.
    """

    CHANNELS = 4

    def __init__(self, width: int, height: int, pixels: np.ndarray = None):
        """
        Create a buffer

        Args:
            width: Image width in pixels
            height: Image height in pixels
            pixels: Optional (height, width, 4) uint8 array, zero-filled if None
        """
        if width < 0 or height < 0:
            raise ValueError(f"Invalid image size: {width}x{height}")

        if pixels is None:
            pixels = np.zeros((height, width, self.CHANNELS), dtype=np.uint8)
        else:
            pixels = np.asarray(pixels)
            if pixels.dtype != np.uint8:
                if pixels.size and (pixels.min() < 0 or pixels.max() > 255):
                    raise ValueError(
                        f"Channel values out of range: {pixels.min()}..{pixels.max()}"
                    )
            pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
            if pixels.shape != (height, width, self.CHANNELS):
                raise ValueError(
                    f"Pixel array shape {pixels.shape} does not match "
                    f"{width}x{height} RGBA"
                )

        self.width = width
        self.height = height
        self.pixels = pixels

    @classmethod
    def blank(cls, width: int, height: int, color: Tuple[int, int, int, int] = (0, 0, 0, 0)) -> 'ImageBuffer':
        """Create a buffer filled with a single color"""
        buffer = cls(width, height)
        buffer.pixels[:, :] = color
        return buffer

    @classmethod
    def from_bytes(cls, width: int, height: int, data: Union[bytes, bytearray, memoryview]) -> 'ImageBuffer':
        """
        Wrap a flat RGBA byte string

        Args:
            width: Image width in pixels
            height: Image height in pixels
            data: width * height * 4 bytes in row-major order

        Returns:
            ImageBuffer holding a copy of the data
        """
        expected = width * height * cls.CHANNELS
        if len(data) != expected:
            raise ValueError(
                f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}"
            )
        pixels = np.frombuffer(bytes(data), dtype=np.uint8).reshape((height, width, cls.CHANNELS))
        return cls(width, height, pixels.copy())

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def _check_bounds(self, x: int, y: int):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")

    def pixel_at(self, x: int, y: int) -> Pixel:
        """Return the pixel at column x, row y"""
        self._check_bounds(x, y)
        r, g, b, a = self.pixels[y, x]
        return Pixel(int(r), int(g), int(b), int(a))

    def set_pixel(self, x: int, y: int, pixel: Tuple[int, int, int, int]):
        self._check_bounds(x, y)
        for value in pixel:
            if not 0 <= value <= 255:
                raise ValueError(f"Channel value out of range: {value}")
        self.pixels[y, x] = pixel

    def copy(self) -> 'ImageBuffer':
        return ImageBuffer(self.width, self.height, self.pixels.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, ImageBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.pixels, other.pixels)

    def __repr__(self) -> str:
        return f"ImageBuffer({self.width}x{self.height})"
