# -*- coding: utf-8 -*-
"""Tests for frameseq.filename."""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from frameseq.filename import Text, Number, decompose, compare


class TestDecompose(unittest.TestCase):
    def test_simple(self):
        d = decompose("shot001.png")
        self.assertEqual(d.tokens, (Text("shot"), Number("001")))
        self.assertEqual(d.extension, "png")
        self.assertEqual(d.leading_zeros, 2)
        self.assertEqual(d.path, "")
        self.assertEqual(d.name, "shot001.png")

    def test_path_split(self):
        d = decompose("/Users/Lala/Pictures/mySequence001.jpg")
        self.assertEqual(d.path, "/Users/Lala/Pictures/")
        self.assertEqual(d.name, "mySequence001.jpg")
        self.assertEqual(d.absolute, "/Users/Lala/Pictures/mySequence001.jpg")

    def test_backslash_path(self):
        d = decompose("C:\\plates\\sh010.0101.dpx")
        self.assertEqual(d.path, "C:\\plates\\")
        self.assertEqual(d.numbers, ["010", "0101"])

    def test_several_numbers(self):
        d = decompose("my80sequence001.jpg")
        self.assertEqual(
            d.tokens,
            (Text("my"), Number("80"), Text("sequence"), Number("001")),
        )
        self.assertEqual(d.number_count, 2)
        self.assertEqual(d.number_at(0), "80")
        self.assertEqual(d.number_at(1), "001")
        self.assertIsNone(d.number_at(2))
        self.assertIsNone(d.number_at(-1))

    def test_text_and_number_summaries(self):
        d = decompose("/pics/my80sequence001.jpg")
        self.assertEqual(d.texts, ["my", "sequence"])
        self.assertFalse(d.has_single_number)
        self.assertFalse(d.is_only_digits)

        d = decompose("/pics/0001.exr")
        self.assertEqual(d.texts, [])
        self.assertTrue(d.has_single_number)
        self.assertTrue(d.is_only_digits)

        self.assertTrue(decompose("shot001.png").has_single_number)
        self.assertFalse(decompose("0001_a.exr").is_only_digits)
        self.assertFalse(decompose("readme.txt").has_single_number)

    def test_leading_zeros_of_last_number(self):
        self.assertEqual(decompose("a0001_b12.exr").leading_zeros, 0)
        self.assertEqual(decompose("a12_b0001.exr").leading_zeros, 3)
        self.assertEqual(decompose("frame000.exr").leading_zeros, 2)
        self.assertEqual(decompose("readme.txt").leading_zeros, 0)

    def test_no_extension(self):
        d = decompose("frame_0042")
        self.assertEqual(d.extension, "")
        self.assertEqual(d.tokens, (Text("frame_"), Number("0042")))

    def test_starts_with_number(self):
        d = decompose("0042_plate.exr")
        self.assertEqual(d.tokens, (Number("0042"), Text("_plate")))

    def test_dots_inside_name(self):
        d = decompose("plate.v02.0010.exr")
        self.assertEqual(d.extension, "exr")
        self.assertEqual(d.tokens, (Text("plate.v"), Number("02"), Text("."), Number("0010")))

    def test_tokens_rebuild_name(self):
        names = [
            "shot001.png",
            "plate.v02.0010.exr",
            "frame_0042",
            "trailing.",
            ".hidden",
            "x",
            "123",
            "a1b2c3d4.tar.gz",
        ]
        for name in names:
            d = decompose(name)
            self.assertEqual("".join(t.text for t in d.tokens) + d.suffix, name)
            self.assertEqual(d.stem + d.suffix, d.name)

    def test_empty_rejected(self):
        with self.assertRaises(ValueError):
            decompose("")

    def test_file_pattern(self):
        d = decompose("/pics/my80sequence001.jpg")
        self.assertEqual(d.file_pattern(), "my##0sequence###1.jpg")

    def test_pattern_with_frame_at(self):
        d = decompose("/pics/a001_b002.png")
        self.assertEqual(d.pattern_with_frame_at(1, 3), "/pics/a001_b###.png")
        self.assertEqual(d.pattern_with_frame_at(0, 2), "/pics/a##_b002.png")


class TestCompare(unittest.TestCase):
    def _compare(self, a, b):
        return compare(decompose(a), decompose(b))

    def test_last_number_varies(self):
        self.assertEqual(self._compare("a001_b002.png", "a001_b003.png"), 1)

    def test_first_number_varies(self):
        self.assertEqual(self._compare("a001_b002.png", "a002_b002.png"), 0)

    def test_two_numbers_vary(self):
        self.assertIsNone(self._compare("a001_b002.png", "a002_b003.png"))

    def test_identical(self):
        self.assertIsNone(self._compare("a001.png", "a001.png"))

    def test_text_differs(self):
        self.assertIsNone(self._compare("clip_010.tif", "other_011.tif"))

    def test_text_case_matters(self):
        self.assertIsNone(self._compare("clip_010.tif", "Clip_011.tif"))

    def test_extension_differs(self):
        self.assertIsNone(self._compare("clip_010.tif", "clip_011.exr"))

    def test_shape_differs(self):
        self.assertIsNone(self._compare("clip_010.tif", "clip_010_2.tif"))
        self.assertIsNone(self._compare("clip010.tif", "clip_010.tif"))

    def test_unpadded_longer_number(self):
        self.assertEqual(self._compare("clip5.tif", "clip100.tif"), 0)
        self.assertEqual(self._compare("clip100.tif", "clip5.tif"), 0)

    def test_padded_longer_number(self):
        self.assertIsNone(self._compare("clip5.tif", "clip0100.tif"))
        self.assertIsNone(self._compare("clip0100.tif", "clip5.tif"))

    def test_padded_shorter_number(self):
        self.assertIsNone(self._compare("f_05.exr", "f_100.exr"))
        self.assertIsNone(self._compare("f_100.exr", "f_05.exr"))
        self.assertIsNone(self._compare("clip_099.tif", "clip_1000.tif"))
        self.assertEqual(self._compare("f_0.exr", "f_10.exr"), 0)

    def test_same_value_different_padding(self):
        self.assertIsNone(self._compare("clip_010.tif", "clip_10.tif"))

    def test_padded_crossing_width(self):
        self.assertEqual(self._compare("clip_999.tif", "clip_1000.tif"), 0)

    def test_mismatching_fixed_number(self):
        """A number that could not vary rejects even if another one varies."""
        self.assertIsNone(self._compare("v01_f010.exr", "v1_f011.exr"))


if __name__ == "__main__":
    unittest.main()
