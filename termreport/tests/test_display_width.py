"""Tests for termreport.display_width."""

import os
from unittest import mock

import pytest

from termreport.display_width import (
    SAMPLE_CHARACTERS,
    ambiguous_width,
    char_width,
    display_width,
    inspect_sample,
    inspect_samples,
)


class TestSampleCharacters:

    def test_five_samples(self):
        assert len(SAMPLE_CHARACTERS) == 5

    def test_one_code_point_each(self):
        assert all(len(sample) == 1 for sample in SAMPLE_CHARACTERS)

    def test_includes_supplementary_plane(self):
        assert any(ord(sample) > 0xFFFF for sample in SAMPLE_CHARACTERS)


class TestAmbiguousWidth:

    def test_default_is_narrow(self):
        assert ambiguous_width({}) == 1

    def test_wide_setting(self):
        assert ambiguous_width({"TERMREPORT_AMBIGUOUS_WIDTH": "2"}) == 2

    @pytest.mark.parametrize("raw", ["3", "wide", ""])
    def test_other_values_are_narrow(self, raw):
        assert ambiguous_width({"TERMREPORT_AMBIGUOUS_WIDTH": raw}) == 1

    def test_reads_process_environment(self):
        with mock.patch.dict(os.environ, {"TERMREPORT_AMBIGUOUS_WIDTH": "2"}):
            assert ambiguous_width() == 2


class TestCharWidth:

    def test_ascii(self):
        assert char_width("A") == 1

    def test_emoji_is_wide(self):
        assert char_width("\U0001F600") == 2

    def test_cjk_is_wide(self):
        assert char_width("中") == 2

    def test_combining_mark_is_zero(self):
        assert char_width("\u0301") == 0

    def test_control_is_zero(self):
        assert char_width("\x07") == 0

    def test_box_drawing_follows_policy(self):
        assert char_width("─", ambiguous=1) == 1
        assert char_width("─", ambiguous=2) == 2

    def test_box_drawing_env_policy(self):
        with mock.patch.dict(os.environ, {"TERMREPORT_AMBIGUOUS_WIDTH": "2"}):
            assert char_width("─") == 2


class TestDisplayWidth:

    def test_mixed_string(self):
        # "e" + combining acute is one column
        assert display_width("ab\U0001F600e\u0301", ambiguous=1) == 5

    def test_empty(self):
        assert display_width("") == 0


class TestInspectSample:

    def test_ascii_sample(self):
        row = inspect_sample("A")
        assert row.codepoint == 0x41
        assert row.byte_length == 1
        assert row.width == 1
        assert row.cells == 1
        assert row.label == "U+0041"

    def test_accented_latin(self):
        row = inspect_sample("é", ambiguous=1)
        assert row.codepoint == 0xE9
        assert row.byte_length == 2
        assert row.width == 1

    def test_box_drawing_bytes(self):
        assert inspect_sample("─").byte_length == 3

    def test_supplementary_plane(self):
        row = inspect_sample("\U00010348")
        assert row.codepoint == 0x10348
        assert row.byte_length == 4
        assert row.width == 1
        assert row.label == "U+10348"

    def test_emoji_sample(self):
        row = inspect_sample("\U0001F600")
        assert row.byte_length == 4
        assert row.width == 2
        assert row.cells == 2

    def test_only_leading_code_point_measured(self):
        row = inspect_sample("A\U0001F600")
        assert row.codepoint == 0x41
        assert row.width == 1

    def test_empty_sample_rejected(self):
        with pytest.raises(ValueError):
            inspect_sample("")

    def test_inspect_all_samples(self):
        rows = inspect_samples(ambiguous=1)
        assert [row.sample for row in rows] == list(SAMPLE_CHARACTERS)
        assert [row.width for row in rows] == [1, 1, 1, 1, 2]
