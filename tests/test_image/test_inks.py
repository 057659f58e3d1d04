"""
Tests for ink compositing.
"""

import unittest

from linoprint.core.settings import BlendPolicy
from linoprint.image.inks import build_bucket_colors, multiply_blend, stacked_color

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


class TestMultiplyBlend(unittest.TestCase):
    """Test the multiply ink model."""

    def test_over_white(self):
        """Test that one ink over white paper shows the ink itself."""
        self.assertEqual(multiply_blend(WHITE, (128, 64, 0)), (128, 64, 0))

    def test_twice(self):
        """Test that printing the same ink twice compounds."""
        once = multiply_blend(WHITE, (128, 64, 0))
        self.assertEqual(multiply_blend(once, (128, 64, 0)), (64, 16, 0))

    def test_floor(self):
        """Test that channels are floored, not rounded."""
        # 200 * 200 / 255 = 156.86
        self.assertEqual(multiply_blend((200, 200, 200), (200, 200, 200)), (156, 156, 156))


class TestStackedColor(unittest.TestCase):
    """Test colours of stacked inks."""

    def setUp(self):
        self.inks = [(250, 204, 21), (239, 68, 68), (23, 23, 23)]

    def test_no_ink_is_paper(self):
        """Test that zero inks shows the paper."""
        for policy in BlendPolicy:
            self.assertEqual(stacked_color(WHITE, self.inks, 0, policy), WHITE)

    def test_opaque_shows_last_ink(self):
        """Test that the opaque policy shows only the last ink applied."""
        self.assertEqual(stacked_color(WHITE, self.inks, 2, BlendPolicy.OPAQUE), (239, 68, 68))

    def test_multiply_compounds(self):
        """Test that the multiply policy compounds inks lightest first."""
        expected = multiply_blend(multiply_blend(WHITE, self.inks[0]), self.inks[1])
        self.assertEqual(stacked_color(WHITE, self.inks, 2, BlendPolicy.MULTIPLY), expected)


class TestBucketColors(unittest.TestCase):
    """Test the per-bucket colour table."""

    def test_opaque_single_black_ink(self):
        """Test paper and darkest bucket with one black ink."""
        table = build_bucket_colors(WHITE, [BLACK], 2, BlendPolicy.OPAQUE)
        self.assertEqual(tuple(int(c) for c in table[1]), WHITE)
        self.assertEqual(tuple(int(c) for c in table[0]), BLACK)

    def test_table_shape(self):
        """Test that the table has one row per bucket."""
        inks = [(250, 204, 21), (239, 68, 68), (23, 23, 23)]
        table = build_bucket_colors(WHITE, inks, 4, BlendPolicy.MULTIPLY)
        self.assertEqual(table.shape, (4, 3))

    def test_multiply_table(self):
        """Test every bucket of a multiply table."""
        inks = [(200, 100, 50), (100, 200, 150)]
        table = build_bucket_colors(WHITE, inks, 3, BlendPolicy.MULTIPLY)
        self.assertEqual(tuple(int(c) for c in table[2]), WHITE)
        self.assertEqual(tuple(int(c) for c in table[1]), (200, 100, 50))
        self.assertEqual(tuple(int(c) for c in table[0]), (78, 78, 29))

    def test_opaque_table(self):
        """Test every bucket of an opaque table."""
        inks = [(200, 100, 50), (100, 200, 150)]
        table = build_bucket_colors((240, 230, 220), inks, 3, BlendPolicy.OPAQUE)
        self.assertEqual(tuple(int(c) for c in table[2]), (240, 230, 220))
        self.assertEqual(tuple(int(c) for c in table[1]), (200, 100, 50))
        self.assertEqual(tuple(int(c) for c in table[0]), (100, 200, 150))

    def test_read_only(self):
        """Test that the table cannot be modified."""
        table = build_bucket_colors(WHITE, [BLACK], 2, BlendPolicy.MULTIPLY)
        with self.assertRaises(ValueError):
            table[0, 0] = 12

    def test_ink_count_mismatch(self):
        """Test that a wrong number of inks is rejected."""
        with self.assertRaises(ValueError):
            build_bucket_colors(WHITE, [BLACK], 3, BlendPolicy.MULTIPLY)


if __name__ == '__main__':
    unittest.main()
