import unittest
from xrandr_utils.errors import ValidationError
from xrandr_utils.mapping import MapFlags, MapFormatter


PAIRS = [("eDP-1", "a"), ("HDMI-1", " "), ("DP-1", "b"), ("DP-2", "a")]


class TestMapFormatter(unittest.TestCase):
    def test_default_emits_everything(self):
        self.assertEqual(
            MapFormatter().render(PAIRS),
            ["eDP-1=a", "HDMI-1= ", "DP-1=b", "DP-2=a"],
        )

    def test_filtered_skips_blank_values(self):
        formatter = MapFormatter(MapFlags(filtered=True))
        self.assertIsNone(formatter.format("K", "  \t"))
        self.assertIsNone(formatter.format("K", ""))
        self.assertEqual(formatter.render(PAIRS), ["eDP-1=a", "DP-1=b", "DP-2=a"])

    def test_keys(self):
        self.assertEqual(
            MapFormatter(MapFlags(keys=True)).render(PAIRS),
            ["eDP-1", "HDMI-1", "DP-1", "DP-2"],
        )
        self.assertEqual(
            MapFormatter(MapFlags(keys=True, filtered=True)).render(PAIRS),
            ["eDP-1", "DP-1", "DP-2"],
        )

    def test_values_deduplicated_in_first_occurrence_order(self):
        formatter = MapFormatter(MapFlags(values=True))
        self.assertEqual(formatter.render([("x", "a"), ("y", "b"), ("z", "a")]), ["a", "b"])

    def test_values_skip_blank_without_filtered(self):
        self.assertEqual(MapFormatter(MapFlags(values=True)).render(PAIRS), ["a", "b"])

    def test_seen_values_scoped_to_formatter(self):
        flags = MapFlags(values=True)
        self.assertEqual(MapFormatter(flags).render([("x", "a")]), ["a"])
        self.assertEqual(MapFormatter(flags).render([("y", "a")]), ["a"])

    def test_keys_and_values_rejected(self):
        with self.assertRaises(ValidationError):
            MapFlags(keys=True, values=True)


if __name__ == "__main__":
    unittest.main()
