"""
Tests for the catalog snapshot script.

Run with:
    python -m pytest tests/test_track_catalog.py -v
"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

import requests

from orbitscene.animation.frame import advance_frame
from scripts.track_catalog import main
from tle_samples import catalog_text


class TestTrackCatalog(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write_catalog(self, text):
        path = os.path.join(self.tmp.name, "catalog.tle")
        with open(path, "w") as f:
            f.write(text)
        return path

    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_local_file_snapshot(self):
        path = self.write_catalog(catalog_text(3, names=["ISS", "CSS", "HST"]))
        code, text = self.run_main(["--file", path, "--limit", "2"])
        self.assertEqual(code, 0)
        self.assertIn("ISS", text)
        self.assertIn("CSS", text)
        self.assertNotIn("HST", text)

    def test_header_shows_propagated_instant(self):
        path = self.write_catalog(catalog_text(1))
        with mock.patch("scripts.track_catalog.advance_frame", wraps=advance_frame) as frame:
            code, text = self.run_main(["--file", path])
        self.assertEqual(code, 0)
        now = frame.call_args[0][1]
        self.assertIn(f"at {now:%Y-%m-%d %H:%M:%S} UTC", text)

    @mock.patch("scripts.track_catalog.load_tracked_objects")
    def test_fetch_failure_exit_code(self, load):
        load.side_effect = requests.ConnectionError("unreachable")
        self.assertEqual(main(["--group", "stations"]), 1)

    def test_malformed_catalog_exit_code(self):
        text = catalog_text(1, line_ending="\n").replace("23259.57580000", "xx259.57580000")
        path = self.write_catalog(text)
        with self.assertLogs("scripts.track_catalog", level="ERROR"):
            self.assertEqual(main(["--file", path]), 1)

    def test_missing_file_exit_code(self):
        missing = os.path.join(self.tmp.name, "nope.tle")
        self.assertEqual(main(["--file", missing]), 1)

    def test_invalid_limit_exit_code(self):
        path = self.write_catalog(catalog_text(1))
        self.assertEqual(main(["--file", path, "--limit", "-1"]), 1)


if __name__ == "__main__":
    unittest.main()
