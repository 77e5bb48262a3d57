"""
Error types raised by the image comparison engine and its I/O collaborators
"""

from typing import Tuple


class ImageCompareError(Exception):
    """Base class for all comparison failures"""


class ArgumentError(ImageCompareError):
    """Wrong command line usage"""


class DecodeError(ImageCompareError):
    """An input image could not be read or decoded"""

    def __init__(self, path, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"Could not load image: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EncodeError(ImageCompareError):
    """The diff image could not be written"""

    def __init__(self, path, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"Could not write image: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DimensionMismatch(ImageCompareError):
    """The two input images do not share width and height"""

    def __init__(self, size_a: Tuple[int, int], size_b: Tuple[int, int]):
        self.size_a = tuple(size_a)
        self.size_b = tuple(size_b)
        super().__init__(
            f"Images have different dimensions: "
            f"{self.size_a[0]}x{self.size_a[1]} vs {self.size_b[0]}x{self.size_b[1]}"
        )


class AllocationFailure(ImageCompareError):
    """Not enough memory for the diff image"""
