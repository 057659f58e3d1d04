"""
Tests for print settings, defaults and validation.
"""

import unittest

from linoprint.core.settings import (
    BlendPolicy, CutStrategy, PrintSettings, ViewMode,
    default_inks, default_thresholds, hex_to_rgb, resize_inks, rgb_to_hex, to_rgb,
    to_threshold
)


class TestDefaults(unittest.TestCase):
    """Test default values."""

    def test_default_settings(self):
        settings = PrintSettings()
        self.assertEqual(settings.layer_count, 3)
        self.assertEqual(settings.thresholds, [85, 170])
        self.assertEqual(settings.paper_color, (255, 255, 255))
        self.assertEqual(settings.blend_policy, BlendPolicy.MULTIPLY)
        self.assertEqual(settings.cut_strategy, CutStrategy.STACK)
        self.assertEqual(settings.view_mode, ViewMode.COMPOSITE)
        self.assertFalse(settings.inverted)
        self.assertFalse(settings.color_mode)
        self.assertEqual(settings.ink_colors, [(250, 204, 21), (239, 68, 68)])
        self.assertEqual(settings.validate(), (True, ""))

    def test_default_thresholds(self):
        self.assertEqual(default_thresholds(2), [128])
        self.assertEqual(default_thresholds(4), [64, 128, 191])
        self.assertEqual(default_thresholds(5), [51, 102, 153, 204])

    def test_default_inks(self):
        self.assertEqual(len(default_inks(5)), 4)
        self.assertEqual(default_inks(5)[3], (0, 0, 0))
        self.assertEqual(len(default_inks(2)), 1)

    def test_resize_inks_pads_by_index(self):
        """Test that new ink slots come from the padding palette by index."""
        inks = resize_inks([(1, 1, 1)], 4)
        self.assertEqual(inks, [(1, 1, 1), hex_to_rgb('#ef4444'), hex_to_rgb('#1e40af')])

    def test_resize_inks_beyond_palette(self):
        inks = resize_inks([], 7)
        self.assertEqual(len(inks), 6)
        self.assertEqual(inks[4:], [(0, 0, 0), (0, 0, 0)])

    def test_resize_inks_truncates(self):
        self.assertEqual(resize_inks([(1, 1, 1), (2, 2, 2), (3, 3, 3)], 3),
                         [(1, 1, 1), (2, 2, 2)])


class TestColors(unittest.TestCase):
    """Test colour parsing."""

    def test_hex_round_trip(self):
        self.assertEqual(hex_to_rgb('#1e40af'), (30, 64, 175))
        self.assertEqual(hex_to_rgb('1E40AF'), (30, 64, 175))
        self.assertEqual(rgb_to_hex((30, 64, 175)), '#1e40af')

    def test_invalid_hex(self):
        with self.assertRaises(ValueError):
            hex_to_rgb('#12345')

    def test_to_rgb(self):
        self.assertEqual(to_rgb([1, 2, 3]), (1, 2, 3))
        self.assertEqual(to_rgb('#ffffff'), (255, 255, 255))
        with self.assertRaises(ValueError):
            to_rgb((256, 0, 0))
        with self.assertRaises(ValueError):
            to_rgb((1, 2))

    def test_string_colors_in_settings(self):
        settings = PrintSettings(paper_color='#fffaf0', ink_colors=['#000000', '#ffffff'])
        self.assertEqual(settings.paper_color, (255, 250, 240))
        self.assertEqual(settings.ink_colors[1], (255, 255, 255))

    def test_enum_values_accepted(self):
        settings = PrintSettings(cut_strategy='zone', blend_policy='opaque', view_mode='cut_guide')
        self.assertEqual(settings.cut_strategy, CutStrategy.ZONE)
        self.assertEqual(settings.blend_policy, BlendPolicy.OPAQUE)
        self.assertEqual(settings.view_mode, ViewMode.CUT_GUIDE)


class TestValidation(unittest.TestCase):
    """Test settings validation."""

    def assertInvalid(self, settings, fragment):
        is_valid, error = settings.validate()
        self.assertFalse(is_valid)
        self.assertIn(fragment, error.lower())
        with self.assertRaises(ValueError):
            settings.ensure_valid()

    def test_layer_count_too_small(self):
        self.assertInvalid(PrintSettings(layer_count=1, thresholds=[], ink_colors=[]), "layer count")

    def test_threshold_count(self):
        self.assertInvalid(PrintSettings(thresholds=[10]), "thresholds")

    def test_threshold_range(self):
        self.assertInvalid(PrintSettings(thresholds=[10, 300]), "threshold")

    def test_ink_count(self):
        self.assertInvalid(PrintSettings(ink_colors=[(0, 0, 0)]), "ink")

    def test_selected_step(self):
        self.assertInvalid(PrintSettings(selected_step=2), "step")
        self.assertInvalid(PrintSettings(selected_step=-1), "step")

    def test_negative_blur(self):
        self.assertInvalid(PrintSettings(blur_amount=-1.0), "blur")

    def test_fractional_threshold(self):
        """Test that fractional cut points are rejected rather than truncated."""
        with self.assertRaises(ValueError):
            PrintSettings(thresholds=[85.7, 170])

    def test_to_threshold(self):
        self.assertEqual(to_threshold(85), 85)
        self.assertEqual(to_threshold(85.0), 85)
        for value in (85.5, "85", None, True):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    to_threshold(value)

    def test_sorted_copy(self):
        """Test that sorting does not reorder the stored thresholds."""
        settings = PrintSettings(thresholds=[170, 85])
        self.assertEqual(settings.sorted_thresholds, [85, 170])
        self.assertEqual(settings.thresholds, [170, 85])


class TestLayerCountChange(unittest.TestCase):
    """Test resizing settings to a new layer count."""

    def test_grow(self):
        settings = PrintSettings(ink_colors=['#111111', '#222222']).with_layer_count(5)
        self.assertEqual(settings.thresholds, [51, 102, 153, 204])
        self.assertEqual(settings.ink_colors[:2], [(17, 17, 17), (34, 34, 34)])
        self.assertEqual(len(settings.ink_colors), 4)
        self.assertTrue(settings.validate()[0])

    def test_shrink_resets_step(self):
        settings = PrintSettings().with_layer_count(5).replace(selected_step=3)
        smaller = settings.with_layer_count(3)
        self.assertEqual(smaller.selected_step, 0)
        self.assertEqual(len(smaller.ink_colors), 2)

    def test_keeps_step_in_range(self):
        settings = PrintSettings().with_layer_count(5).replace(selected_step=1)
        self.assertEqual(settings.with_layer_count(4).selected_step, 1)

    def test_original_untouched(self):
        settings = PrintSettings()
        settings.with_layer_count(6)
        self.assertEqual(settings.layer_count, 3)

    def test_too_small(self):
        with self.assertRaises(ValueError):
            PrintSettings().with_layer_count(1)


if __name__ == '__main__':
    unittest.main()
