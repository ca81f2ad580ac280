"""Unit tests for text normalization utilities."""

from __future__ import annotations

import pytest

from src.utils.text_normalizer import clean_markup, normalize_text


# ======================================================================
# normalize_text
# ======================================================================


class TestNormalizeText:
    """Tests for the normalize_text function."""

    def test_empty_input_returns_empty(self) -> None:
        assert normalize_text("") == ""

    def test_whitespace_only_returns_empty(self) -> None:
        assert normalize_text(" \t\n\r\n  ") == ""

    def test_collapses_spaces_and_tabs(self) -> None:
        assert normalize_text("Hello \t   world") == "Hello world"

    def test_crlf_blank_lines_collapse_to_one_empty_line(self) -> None:
        assert normalize_text("a \r\n\r\n\r\n b") == "a\n\nb"

    def test_lone_carriage_return_becomes_newline(self) -> None:
        assert normalize_text("line one\rline two") == "line one\nline two"

    def test_removes_control_characters(self) -> None:
        assert normalize_text("ab\x00c\x07d\x1fe") == "abcde"

    def test_keeps_single_blank_line(self) -> None:
        assert normalize_text("para one\n\npara two") == "para one\n\npara two"

    def test_caps_long_blank_runs(self) -> None:
        assert normalize_text("top\n\n\n\n\n\nbottom") == "top\n\nbottom"

    def test_trims_ends(self) -> None:
        assert normalize_text("\n\n  padded  \n\n") == "padded"

    @pytest.mark.parametrize(
        "raw",
        [
            "a \r\n\r\n\r\n b",
            "  tabs\t\tand   spaces \n \n \n end ",
            "ctrl\x0bchars\x0c here\r\r\rdone",
            "already clean\n\ntext",
            "next\x85line\x85\x85\x85after",
            "no\xa0break\xa0\xa0space",
            "ideographic\u3000\u3000space\u3000",
            "sep\x1cfile\x1dgroup\x1erecord\x1funit",
            " \n \n  \n\t\n mixed \n \n ",
            "\r\n \x85 \xa0\u3000\n\x1c\n\n\n",
            "",
            "   \n\t\x00  ",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        once = normalize_text(raw)
        assert normalize_text(once) == once


# ======================================================================
# clean_markup
# ======================================================================


class TestCleanMarkup:
    """Tests for the clean_markup function."""

    def test_strips_tags_and_flattens(self) -> None:
        html = "<h1>Title</h1>\n<p>First   paragraph</p><p>Second</p>"
        assert clean_markup(html) == "Title First paragraph Second"

    def test_decodes_common_entities(self) -> None:
        html = "<p>Fish &amp; chips&nbsp;&lt;3 &quot;yes&quot; it&#39;s</p>"
        assert clean_markup(html) == "Fish & chips <3 \"yes\" it's"

    def test_entities_decoded_once(self) -> None:
        assert clean_markup("&amp;lt;") == "&lt;"

    def test_tags_only_returns_empty(self) -> None:
        assert clean_markup("<p></p><br/>") == ""

    def test_blank_input_returns_empty(self) -> None:
        assert clean_markup("   ") == ""
