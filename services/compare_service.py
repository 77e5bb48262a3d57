"""
Compare Service
Handles the file workflow: load both images -> compare -> write the diff image
"""

import logging
from pathlib import Path
from typing import Optional

from diff.diff_engine import ComparisonResult, DiffConfig, PixelComparator
from diff.errors import EncodeError
from diff.image_io import load_image, save_image


class CompareOutcome:
    """Result of a file comparison, including whether the diff image was written"""

    def __init__(self, result: ComparisonResult, output_path: Path,
                 write_error: Optional[EncodeError] = None):
        self.result = result
        self.output_path = output_path
        self.write_error = write_error

    @property
    def saved(self) -> bool:
        return self.write_error is None


class CompareService:
    def __init__(self, config: Optional[DiffConfig] = None, output_format: Optional[str] = None):
        """
        Initialize the compare service

        Args:
            config: Diff configuration, uses defaults if None
            output_format: Format for output paths without a known extension
        """
        self.logger = logging.getLogger(__name__)
        self.comparator = PixelComparator(config)
        self.output_format = output_format

    def compare_files(self, path_a, path_b, output_path) -> CompareOutcome:
        """
        Compare two image files and write the diff image

        Decode failures, dimension mismatches and allocation failures are
        raised. A failure to write the diff image is logged and returned on
        the outcome so the statistics remain available.

        Args:
            path_a: First image path
            path_b: Second image path
            output_path: Where to write the diff image

        Returns:
            CompareOutcome with the comparison result and write status
        """
        output_path = Path(output_path)
        self.logger.info(f"Comparing {path_a} with {path_b}")

        image_a = load_image(path_a)
        image_b = load_image(path_b)

        result = self.comparator.compare(image_a, image_b)

        write_error = None
        try:
            save_image(result.output, output_path, self.output_format)
        except EncodeError as e:
            self.logger.warning(f"Diff image not written: {e}")
            write_error = e
        else:
            self.logger.info(f"Diff image written to {output_path}")

        self.logger.info(f"Comparison finished: {result.different_pixels} of "
                         f"{result.total_pixels} pixels differ ({result.mismatch_pct}%)")

        return CompareOutcome(result, output_path, write_error)
