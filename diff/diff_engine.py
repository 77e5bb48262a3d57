"""
Pixel Diff Engine
Compares two equal-size RGBA images and renders a highlight/wash-out diff image
"""

import os
import math
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np

from .errors import AllocationFailure, DimensionMismatch
from .image_buffer import ImageBuffer, Pixel

DEFAULT_WASH_OUT_RATIO = 0.5
HIGHLIGHT_COLOR = (255, 0, 0, 255)


class DiffConfig:
    """Configuration for diff generation"""

    def __init__(self, wash_out_ratio: Optional[float] = None):
        if wash_out_ratio is None:
            wash_out_ratio = float(os.getenv('DIFF_WASH_OUT_RATIO', str(DEFAULT_WASH_OUT_RATIO)))
        if not 0.0 <= wash_out_ratio <= 1.0:
            raise ValueError(f"Wash-out ratio must be between 0 and 1, got {wash_out_ratio}")

        # How far unchanged pixels are blended toward white
        self.wash_out_ratio = wash_out_ratio
        # Color written for every differing pixel
        self.highlight_color = HIGHLIGHT_COLOR


def pixel_distance(a: Pixel, b: Pixel) -> float:
    """
    Euclidean distance over the R, G and B channels

    Alpha is not part of the distance, so two pixels that only differ in
    alpha have distance 0.
    """
    dr = float(abs(int(a.r) - int(b.r)))
    dg = float(abs(int(a.g) - int(b.g)))
    db = float(abs(int(a.b) - int(b.b)))
    return math.sqrt(dr * dr + dg * dg + db * db)


def max_channel_diff(a: Pixel, b: Pixel) -> int:
    """Largest absolute difference across R, G, B and A"""
    return max(abs(int(ca) - int(cb)) for ca, cb in zip(a, b))


def wash_out(p: Pixel, ratio: float = DEFAULT_WASH_OUT_RATIO) -> Pixel:
    """Blend R, G, B toward white by ratio, truncating. Alpha is kept."""
    return Pixel(
        p.r + int((255 - p.r) * ratio),
        p.g + int((255 - p.g) * ratio),
        p.b + int((255 - p.b) * ratio),
        p.a,
    )


def pixel_distances(pixels_a: np.ndarray, pixels_b: np.ndarray) -> np.ndarray:
    """
    Per-pixel RGB distance for two (height, width, 4) uint8 arrays

    Returns:
        float64 array of shape (height, width)
    """
    delta = np.abs(pixels_a[..., :3].astype(np.float64) - pixels_b[..., :3].astype(np.float64))
    return np.sqrt(np.sum(delta * delta, axis=-1))


def wash_out_pixels(pixels: np.ndarray, ratio: float = DEFAULT_WASH_OUT_RATIO) -> np.ndarray:
    """Array form of wash_out, returns a new uint8 array"""
    result = pixels.copy()
    rgb = pixels[..., :3].astype(np.float64)
    result[..., :3] = (rgb + np.trunc((255.0 - rgb) * ratio)).astype(np.uint8)
    return result


@dataclass(frozen=True)
class DiffRecord:
    """The pixel pair with the largest RGB distance"""
    x: int = 0
    y: int = 0
    magnitude: float = 0.0
    largest_channel_diff: int = 0
    pixel_a: Pixel = field(default_factory=lambda: Pixel(0, 0, 0, 0))
    pixel_b: Pixel = field(default_factory=lambda: Pixel(0, 0, 0, 0))

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class ComparisonResult:
    output: ImageBuffer
    different_pixels: int
    largest_diff: DiffRecord

    @property
    def total_pixels(self) -> int:
        return self.output.width * self.output.height

    @property
    def mismatch_pct(self) -> float:
        if self.total_pixels == 0:
            return 0.0
        return round((self.different_pixels / self.total_pixels) * 100, 3)

    def to_dict(self) -> Dict:
        return {
            'width': self.output.width,
            'height': self.output.height,
            'diff_pixels_changed': self.different_pixels,
            'diff_mismatch_pct': self.mismatch_pct,
            'max_channel_diff': self.largest_diff.largest_channel_diff,
            'largest_diff_position': list(self.largest_diff.position),
            'largest_diff_magnitude': self.largest_diff.magnitude,
        }


class PixelComparator:
    """Compares two RGBA buffers pixel by pixel"""

    def __init__(self, config: Optional[DiffConfig] = None):
        """
        Initialize the comparator

        Args:
            config: Configuration object, uses defaults if None
        """
        self.config = config or DiffConfig()
        self.logger = logging.getLogger(__name__)

    def compare(self, image_a: ImageBuffer, image_b: ImageBuffer) -> ComparisonResult:
        """
        Compare two images of identical size

        Every pixel whose RGB distance is non-zero is counted and painted with
        the highlight color; every other pixel is the washed-out pixel of
        image_a. The largest difference is the first maximum in raster order.

        Args:
            image_a: First image
            image_b: Second image

        Returns:
            ComparisonResult with the diff image, count and largest difference

        Raises:
            DimensionMismatch: if the sizes differ
            AllocationFailure: if the diff image cannot be allocated
        """
        if image_a.size != image_b.size:
            raise DimensionMismatch(image_a.size, image_b.size)

        width, height = image_a.size
        self.logger.debug(f"Comparing {width}x{height} images "
                          f"(wash-out ratio {self.config.wash_out_ratio})")

        try:
            distances = pixel_distances(image_a.pixels, image_b.pixels)
            changed = distances > 0
            output = wash_out_pixels(image_a.pixels, self.config.wash_out_ratio)
        except MemoryError as e:
            raise AllocationFailure(f"Cannot allocate diff image of {width}x{height}") from e

        output[changed] = self.config.highlight_color
        different_pixels = int(np.count_nonzero(changed))

        largest_diff = DiffRecord()
        if different_pixels > 0:
            # argmax returns the first occurrence, which keeps the earliest pixel on ties
            index = int(np.argmax(distances))
            y, x = divmod(index, width)
            pixel_a = image_a.pixel_at(x, y)
            pixel_b = image_b.pixel_at(x, y)
            largest_diff = DiffRecord(
                x=x,
                y=y,
                magnitude=float(distances[y, x]),
                largest_channel_diff=max_channel_diff(pixel_a, pixel_b),
                pixel_a=pixel_a,
                pixel_b=pixel_b,
            )

        self.logger.debug(f"Found {different_pixels} differing pixels, "
                          f"largest difference {largest_diff.magnitude:.3f} at {largest_diff.position}")

        return ComparisonResult(
            output=ImageBuffer(width, height, output),
            different_pixels=different_pixels,
            largest_diff=largest_diff,
        )
