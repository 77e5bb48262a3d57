"""
Console report for a comparison result
"""

from typing import List

from .diff_engine import ComparisonResult


def format_report(result: ComparisonResult) -> List[str]:
    largest = result.largest_diff
    lines = [
        f"Number of different pixels: {result.different_pixels}. "
        f"Max channel diff: {largest.largest_channel_diff}"
    ]
    if result.different_pixels > 0:
        lines.append(f"Largest difference at position ({largest.x}, {largest.y}):")
        lines.append(f"Image A pixel: {largest.pixel_a}")
        lines.append(f"Image B pixel: {largest.pixel_b}")
    return lines
