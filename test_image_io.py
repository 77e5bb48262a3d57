#!/usr/bin/env python3
"""
Unit tests for the Pillow backed image decode/encode helpers
"""

import os
import sys
import shutil
import tempfile
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from diff.errors import DecodeError, EncodeError
from diff.image_buffer import ImageBuffer, Pixel
from diff.image_io import load_image, resolve_format, save_image


class TestImageIO(unittest.TestCase):
    """Test cases for load_image and save_image"""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

        self.buffer = ImageBuffer(3, 2)
        self.buffer.set_pixel(0, 0, (255, 0, 0, 255))
        self.buffer.set_pixel(1, 0, (0, 255, 0, 128))
        self.buffer.set_pixel(2, 0, (0, 0, 255, 0))
        self.buffer.set_pixel(0, 1, (10, 20, 30, 40))
        self.buffer.set_pixel(1, 1, (255, 255, 255, 255))
        self.buffer.set_pixel(2, 1, (1, 2, 3, 4))

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_lossless_formats_keep_all_channels(self):
        for name in ('diff.png', 'diff.tga', 'diff.tiff'):
            with self.subTest(name=name):
                path = self.test_dir / name
                save_image(self.buffer, path)
                self.assertEqual(load_image(path), self.buffer)

    def test_unknown_extension_uses_default_format(self):
        path = self.test_dir / 'diff_output'
        save_image(self.buffer, path)

        with Image.open(path) as img:
            self.assertEqual(img.format, 'TGA')
        self.assertEqual(load_image(path), self.buffer)

    def test_default_format_override(self):
        self.assertEqual(resolve_format('diff.out', 'png'), 'PNG')
        self.assertEqual(resolve_format('diff.png', 'TGA'), 'PNG')
        self.assertEqual(resolve_format('diff'), 'TGA')

    def test_lossy_format_rejected(self):
        path = self.test_dir / 'diff.jpg'
        with self.assertRaises(EncodeError) as ctx:
            save_image(self.buffer, path)
        self.assertEqual(ctx.exception.path, str(path))
        self.assertFalse(path.exists())

    def test_write_failure(self):
        path = self.test_dir / 'missing' / 'diff.png'
        with self.assertRaises(EncodeError) as ctx:
            save_image(self.buffer, path)
        self.assertEqual(ctx.exception.path, str(path))

    def test_grayscale_expanded_to_rgba(self):
        path = self.test_dir / 'gray.png'
        Image.new('L', (2, 2), 77).save(path)

        buffer = load_image(path)

        self.assertEqual(buffer.size, (2, 2))
        self.assertEqual(buffer.pixel_at(1, 1), Pixel(77, 77, 77, 255))

    def test_16bit_grayscale_scaled_to_8bit(self):
        path_a = self.test_dir / 'gray16_a.png'
        path_b = self.test_dir / 'gray16_b.png'
        Image.fromarray(np.full((2, 2), 30000, dtype=np.uint16)).save(path_a)
        Image.fromarray(np.full((2, 2), 60000, dtype=np.uint16)).save(path_b)

        buffer_a = load_image(path_a)
        buffer_b = load_image(path_b)

        # High byte of each sample: 30000 >> 8 == 117, 60000 >> 8 == 234
        self.assertEqual(buffer_a.pixel_at(0, 0), Pixel(117, 117, 117, 255))
        self.assertEqual(buffer_b.pixel_at(1, 1), Pixel(234, 234, 234, 255))
        self.assertNotEqual(buffer_a, buffer_b)

    def test_rgb_expanded_to_rgba(self):
        path = self.test_dir / 'rgb.png'
        Image.new('RGB', (4, 1), (10, 20, 30)).save(path)

        buffer = load_image(path)

        self.assertEqual(buffer.size, (4, 1))
        self.assertEqual(buffer.pixel_at(3, 0), Pixel(10, 20, 30, 255))

    def test_missing_file(self):
        path = self.test_dir / 'nope.png'
        with self.assertRaises(DecodeError) as ctx:
            load_image(path)
        self.assertEqual(ctx.exception.path, str(path))

    def test_corrupt_file(self):
        path = self.test_dir / 'corrupt.png'
        path.write_bytes(b'this is not an image')
        with self.assertRaises(DecodeError):
            load_image(path)


if __name__ == '__main__':
    unittest.main()
