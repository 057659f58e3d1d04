"""
Tests for the blur pre-filter.
"""

import unittest

import numpy as np

from linoprint.core.buffer import PixelBuffer
from linoprint.image.prefilter import apply_blur


def checker():
    pixels = np.zeros((16, 16, 4), dtype=np.uint8)
    pixels[::2, ::2, :3] = 255
    pixels[1::2, 1::2, :3] = 255
    pixels[..., 3] = 180
    return PixelBuffer(pixels)


class TestApplyBlur(unittest.TestCase):
    """Test apply_blur."""

    def test_zero_radius_is_identity(self):
        source = checker()
        self.assertIs(apply_blur(source, 0), source)

    def test_negative_radius(self):
        with self.assertRaises(ValueError):
            apply_blur(checker(), -1)

    def test_blur_smooths(self):
        """Test that a checkerboard is pulled towards mid gray."""
        result = apply_blur(checker(), 2.0)
        center = result.rgb[4:12, 4:12].astype(int)
        self.assertTrue(np.all(center > 60))
        self.assertTrue(np.all(center < 195))

    def test_alpha_and_size_kept(self):
        result = apply_blur(checker(), 1.5)
        self.assertEqual(result.size, (16, 16))
        self.assertTrue(np.all(result.alpha == 180))

    def test_source_untouched(self):
        source = checker()
        before = source.to_bytes()
        apply_blur(source, 3.0)
        self.assertEqual(source.to_bytes(), before)


if __name__ == '__main__':
    unittest.main()
