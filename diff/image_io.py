"""
Image decode/encode helpers backed by Pillow
"""

import logging
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from .errors import DecodeError, EncodeError
from .image_buffer import ImageBuffer

logger = logging.getLogger(__name__)

# Formats that store RGBA without loss
LOSSLESS_FORMATS = {'PNG', 'TGA', 'TIFF'}
DEFAULT_OUTPUT_FORMAT = 'TGA'

# 16-bit grayscale sources (Pillow opens 16-bit PNGs as I;16 or I)
WIDE_GRAYSCALE_MODES = {'I;16', 'I;16B', 'I;16L', 'I;16N', 'I'}


def _reduce_to_8bit(img: Image.Image) -> Image.Image:
    """Keep the high byte of each 16-bit sample, as 8-bit decoders do"""
    samples = np.asarray(img).astype(np.int64)
    samples = np.clip(samples, 0, 0xFFFF) >> 8
    return Image.fromarray(samples.astype(np.uint8))


def load_image(path) -> ImageBuffer:
    """
    Decode an image file into an RGBA buffer

    Grayscale, palette and RGB sources are expanded to RGBA.

    Args:
        path: Image file path

    Returns:
        ImageBuffer with the decoded pixels

    Raises:
        DecodeError: if the file is missing, unreadable or corrupt
    """
    try:
        with Image.open(path) as img:
            img.load()
            source_mode = img.mode
            if source_mode in WIDE_GRAYSCALE_MODES:
                with _reduce_to_8bit(img) as gray:
                    rgba = gray.convert('RGBA')
            elif source_mode != 'RGBA':
                rgba = img.convert('RGBA')
            else:
                rgba = img.copy()
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(path, str(e)) from e

    width, height = rgba.size
    pixels = np.asarray(rgba, dtype=np.uint8).reshape((height, width, ImageBuffer.CHANNELS))
    rgba.close()

    logger.debug(f"Loaded {path}: {width}x{height} ({source_mode} -> RGBA)")
    return ImageBuffer(width, height, pixels)


def resolve_format(path, default_format: Optional[str] = None) -> str:
    """
    Pick the output format from the file extension

    Args:
        path: Output file path
        default_format: Format used when the extension is unknown

    Returns:
        Pillow format name
    """
    suffix = Path(path).suffix.lower()
    image_format = Image.registered_extensions().get(suffix)
    if image_format is None:
        image_format = (default_format or DEFAULT_OUTPUT_FORMAT).upper()
    return image_format


def save_image(buffer: ImageBuffer, path, default_format: Optional[str] = None):
    """
    Encode an RGBA buffer to a lossless image file

    Args:
        buffer: Pixels to write
        path: Output file path
        default_format: Format used when the extension is unknown (TGA if None)

    Raises:
        EncodeError: if the format is lossy or the file cannot be written
    """
    image_format = resolve_format(path, default_format)
    if image_format not in LOSSLESS_FORMATS:
        raise EncodeError(path, f"{image_format} cannot store RGBA losslessly")

    try:
        img = Image.frombytes('RGBA', buffer.size, buffer.to_bytes())
        img.save(path, image_format)
    except (OSError, ValueError) as e:
        raise EncodeError(path, str(e)) from e

    logger.debug(f"Saved {buffer.width}x{buffer.height} diff image to {path} ({image_format})")
