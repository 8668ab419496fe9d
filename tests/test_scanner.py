# -*- coding: utf-8 -*-
"""Tests for frameseq.scanner."""

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from frameseq.errors import DirectoryUnavailable, PatternCompileError
from frameseq.scanner import discover_by_pattern, flatten_to_filenames, scan_directory


class _TempDirTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        import shutil
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _touch(self, relpath, size=0):
        full = os.path.join(self.tmpdir, relpath)
        os.makedirs(os.path.dirname(full), exist_ok=True)
        Path(full).write_bytes(b"x" * size)
        return full

    def _path(self, name):
        return self.tmpdir + "/" + name


class TestDiscoverByPattern(_TempDirTestCase):
    def test_frames_in_order(self):
        for i in (3, 1, 2):
            self._touch(f"plate.{i:04d}.exr")
        self._touch("plate.0004.dpx")
        self._touch("other.0001.exr")

        found = discover_by_pattern(self._path("plate.####.exr"))
        self.assertEqual(list(found), [1, 2, 3])
        self.assertEqual(found[2], {0: self._path("plate.0002.exr")})

    def test_views(self):
        for name in ("plate_l.0001.exr", "plate_r.0001.exr", "plate_l.0002.exr", "plate_view2.0002.exr"):
            self._touch(name)

        found = discover_by_pattern(self._path("plate_%v.####.exr"))
        self.assertEqual(found, {
            1: {0: self._path("plate_l.0001.exr"), 1: self._path("plate_r.0001.exr")},
            2: {0: self._path("plate_l.0002.exr"), 2: self._path("plate_view2.0002.exr")},
        })

    def test_no_match(self):
        self._touch("plate.0001.exr")
        self.assertEqual(discover_by_pattern(self._path("shot.####.exr")), {})

    def test_subdirectories_ignored(self):
        self._touch("plate.0001.exr")
        os.makedirs(self._path("plate.0002.exr"))
        self.assertEqual(list(discover_by_pattern(self._path("plate.####.exr"))), [1])

    def test_first_listed_file_wins(self):
        lister = MagicMock(return_value=["PLATE.0001.exr", "plate.0001.exr"])
        with self.assertLogs("frameseq.scanner", level="WARNING"):
            found = discover_by_pattern("/shots/plate.####.exr", lister=lister)
        lister.assert_called_once_with("/shots/")
        self.assertEqual(found, {1: {0: "/shots/PLATE.0001.exr"}})

    def test_case_sensitive(self):
        lister = MagicMock(return_value=["PLATE.0001.exr", "plate.0002.exr"])
        found = discover_by_pattern("/shots/plate.####.exr", lister=lister, case_sensitive=True)
        self.assertEqual(list(found), [2])

    def test_unknown_printf_form_is_literal(self):
        lister = MagicMock(return_value=["shot%2x_001.exr", "shot_002.exr"])
        found = discover_by_pattern("/d/shot%2x_###.exr", lister=lister)
        self.assertEqual(found, {1: {0: "/d/shot%2x_001.exr"}})

    def test_pattern_without_extension(self):
        lister = MagicMock(return_value=["plate.0001", "plate.0002", "plate.0003.exr"])
        found = discover_by_pattern("/d/plate.####", lister=lister)
        self.assertEqual(flatten_to_filenames(found), ["/d/plate.0001", "/d/plate.0002"])

    def test_empty_pattern(self):
        with self.assertRaises(ValueError):
            discover_by_pattern("")

    def test_malformed_pattern(self):
        with self.assertRaises(PatternCompileError):
            discover_by_pattern(self._path("plate.%0%04d.exr"))

    def test_missing_directory(self):
        with self.assertRaises(DirectoryUnavailable):
            discover_by_pattern(self._path("missing/plate.####.exr"))


class TestFlattenToFilenames(unittest.TestCase):
    def setUp(self):
        self.sequence = {
            2: {1: "b_r", 0: "b_l"},
            1: {0: "a_l", 1: "a_r"},
        }

    def test_all_views(self):
        self.assertEqual(flatten_to_filenames(self.sequence), ["a_l", "a_r", "b_l", "b_r"])

    def test_one_view(self):
        self.assertEqual(flatten_to_filenames(self.sequence, only_view=1), ["a_r", "b_r"])
        self.assertEqual(flatten_to_filenames(self.sequence, only_view=5), [])

    def test_empty(self):
        self.assertEqual(flatten_to_filenames({}), [])


class TestScanDirectory(_TempDirTestCase):
    def test_groups_sequences(self):
        for i in range(1, 4):
            self._touch(f"plate.{i:04d}.exr")
        self._touch("shot_010.dpx")
        self._touch("shot_011.dpx")
        self._touch("readme.txt")
        self._touch("sub/plate.0004.exr")

        sequences = scan_directory(self.tmpdir)
        described = [s.generate_user_friendly_sequence_pattern() for s in sequences]
        self.assertEqual(described, ["plate.####.exr 1-3", "readme.txt", "shot_###.dpx 10-11"])
        self.assertEqual(sequences[0].path, self.tmpdir + "/")

    def test_trailing_separator_kept(self):
        self._touch("a_1.png")
        sequences = scan_directory(self.tmpdir + "/")
        self.assertEqual(sequences[0].files, [self._path("a_1.png")])

    def test_interleaved_sequences(self):
        lister = MagicMock(return_value=["a_1.png", "b_1.png", "a_2.png", "b_2.png", "a_3.png"])
        sequences = scan_directory("/shots", lister=lister)
        lister.assert_called_once_with("/shots/")
        self.assertEqual([len(s) for s in sequences], [3, 2])

    def test_sizes(self):
        self._touch("plate.0001.exr", size=10)
        self._touch("plate.0002.exr", size=32)
        sequences = scan_directory(self.tmpdir, size_estimation=True)
        self.assertEqual(sequences[0].estimated_total_size, 42)

    def test_empty_directory(self):
        self.assertEqual(scan_directory(self.tmpdir), [])

    def test_missing_directory(self):
        with self.assertRaises(DirectoryUnavailable):
            scan_directory(self._path("missing"))


if __name__ == "__main__":
    unittest.main()
