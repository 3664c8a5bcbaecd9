"""Tests for page spec parsing."""

import pytest

from docrender.utils.pages import parse_page_spec


class TestParsePageSpec:
    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("", [1, 2, 3, 4, 5]),
            ("  ", [1, 2, 3, 4, 5]),
            ("3", [3]),
            ("2:4", [2, 3, 4]),
            ("2:", [2, 3, 4, 5]),
            (":2", [1, 2]),
            ("4:4", [4]),
            ("5,1,3", [5, 1, 3]),
            ("1, 2", [1, 2]),
        ],
    )
    def test_valid(self, spec, expected):
        assert parse_page_spec(spec, 5) == expected

    @pytest.mark.parametrize(
        "spec,match",
        [
            ("1:2:3", "Invalid range syntax"),
            ("4:2", r"Start page \(4\) must be <= end page \(2\)"),
            ("2:9", r"End page \(9\) exceeds document page count \(5\)"),
            ("0:2", "Invalid start page"),
            ("a:2", "Invalid start page"),
            ("1:b", "Invalid end page"),
            ("x", "Invalid page number"),
            ("1,,2", "Invalid page number"),
            ("6", r"Page 6 out of range \(1-5\)"),
            ("0", r"Page 0 out of range"),
            ("1,7", r"Page 7 out of range"),
        ],
    )
    def test_invalid(self, spec, match):
        with pytest.raises(ValueError, match=match):
            parse_page_spec(spec, 5)
