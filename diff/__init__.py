"""
Pixel-by-pixel image comparison module
"""

from .diff_engine import (
    ComparisonResult,
    DiffConfig,
    DiffRecord,
    PixelComparator,
    max_channel_diff,
    pixel_distance,
    wash_out,
)
from .errors import (
    AllocationFailure,
    ArgumentError,
    DecodeError,
    DimensionMismatch,
    EncodeError,
    ImageCompareError,
)
from .image_buffer import ImageBuffer, Pixel
from .image_io import load_image, save_image
from .report import format_report

__all__ = [
    'ComparisonResult', 'DiffConfig', 'DiffRecord', 'PixelComparator',
    'max_channel_diff', 'pixel_distance', 'wash_out',
    'AllocationFailure', 'ArgumentError', 'DecodeError', 'DimensionMismatch',
    'EncodeError', 'ImageCompareError',
    'ImageBuffer', 'Pixel', 'load_image', 'save_image', 'format_report',
]
