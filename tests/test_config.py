"""
Tests for tracker configuration.

Run with:
    python -m pytest tests/test_config.py -v
"""

import os
import unittest
from unittest import mock

from orbitscene.config import TrackerConfig


class TestTrackerConfig(unittest.TestCase):

    def test_defaults(self):
        config = TrackerConfig()
        self.assertEqual(config.max_tracked, 50)
        self.assertEqual(config.century_pivot, 57)
        self.assertEqual(config.body_radius_km, 6371.0)
        self.assertEqual(config.sidereal_day_s, 86164.0)
        self.assertEqual(
            config.catalog_query_url(),
            "https://celestrak.org/NORAD/elements/gp.php?GROUP=starlink&FORMAT=tle",
        )

    def test_invalid_values_rejected(self):
        for kwargs in ({"max_tracked": -1}, {"body_radius_km": 0}, {"sidereal_day_s": -5},
                       {"refresh_interval_s": 0}):
            with self.subTest(**kwargs):
                with self.assertRaises(ValueError):
                    TrackerConfig(**kwargs)

    def test_with_overrides_skips_none(self):
        config = TrackerConfig().with_overrides(group="stations", max_tracked=None)
        self.assertEqual(config.group, "stations")
        self.assertEqual(config.max_tracked, 50)

    @mock.patch.dict(os.environ, {
        "ORBITSCENE_GROUP": "gps-ops",
        "ORBITSCENE_MAX_TRACKED": "12",
        "ORBITSCENE_CENTURY_PIVOT": "60",
        "ORBITSCENE_REFRESH_S": "2.5",
    })
    def test_from_env(self):
        config = TrackerConfig.from_env()
        self.assertEqual(config.group, "gps-ops")
        self.assertEqual(config.max_tracked, 12)
        self.assertEqual(config.century_pivot, 60)
        self.assertEqual(config.refresh_interval_s, 2.5)
        self.assertIsNone(config.earth_texture)

    @mock.patch.dict(os.environ, {"ORBITSCENE_MAX_TRACKED": "many"})
    def test_from_env_bad_number(self):
        with self.assertRaises(ValueError):
            TrackerConfig.from_env()


if __name__ == "__main__":
    unittest.main()
