"""Tests for decimal and hexadecimal character references."""

from __future__ import annotations

import unittest

from turbounescape import REPLACEMENT_CHAR, decode_attribute, decode_general


def both(source):
    general = decode_general(source)
    assert decode_attribute(source) == general
    return general


class TestWellFormedNumeric(unittest.TestCase):
    def test_hex_case_variants(self) -> None:
        assert both(b"&#x7a;") == "z"
        assert both(b"&#x7A;") == "z"
        assert both(b"&#X7a;") == "z"
        assert both(b"&#X7A;") == "z"

    def test_leading_zeros(self) -> None:
        assert both(b"&#x07a;") == "z"
        assert both(b"&#x007a;") == "z"
        assert both(b"&#0122;") == "z"
        assert both(b"&#00122;") == "z"
        assert both(b"&#x" + b"0" * 50 + b"7a;") == "z"

    def test_decimal(self) -> None:
        assert both(b"&#122;") == "z"

    def test_astral_and_bmp(self) -> None:
        assert both(b"&#x21D2;") == "⇒"
        assert both(b"&#x1F600;") == "\U0001f600"
        assert both(b"&#x10ffff;") == "\U0010ffff"

    def test_equals_after_numeric_in_attribute(self) -> None:
        assert decode_attribute(b"&#122=") == "z="


class TestMissingSemicolon(unittest.TestCase):
    def test_bare_hex(self) -> None:
        assert both(b"&#x7Az") == "zz"
        assert both(b"&#x7A") == "z"

    def test_bare_decimal(self) -> None:
        assert both(b"&#122z") == "zz"
        assert both(b"&#122") == "z"

    def test_bare_space(self) -> None:
        assert both(b"&#x20") == " "


class TestMalformedNumeric(unittest.TestCase):
    def test_hex_digits_without_x(self) -> None:
        assert both(b"&#a0;") == "&#a0;"

    def test_invalid_hex(self) -> None:
        assert both(b"&#xZ;") == "&#xZ;"
        assert both(b"&#XZ;") == "&#XZ;"

    def test_no_digits(self) -> None:
        assert both(b"&#;") == "&#;"
        assert both(b"&#x;") == "&#x;"
        assert both(b"&#") == "&#"
        assert both(b"&#x") == "&#x"
        assert both(b"&#X") == "&#X"

    def test_no_digits_then_text(self) -> None:
        assert both(b"&#-1;") == "&#-1;"
        assert both(b"&# x") == "&# x"


class TestCorrections(unittest.TestCase):
    def test_controls_pass_through(self) -> None:
        assert both(b"&#x1;") == "\x01"
        assert both(b"&#1;") == "\x01"
        assert both(b"&#13;") == "\r"
        assert both(b"&#xd;") == "\r"
        assert both(b"&#9;") == "\t"
        assert both(b"&#x7f;") == "\x7f"

    def test_unmapped_c1_controls_pass_through(self) -> None:
        assert both(b"&#x81;") == "\x81"
        assert both(b"&#x8D;") == "\x8d"
        assert both(b"&#x8F;") == "\x8f"
        assert both(b"&#x90;") == "\x90"
        assert both(b"&#x9D;") == "\x9d"

    def test_noncharacters_pass_through(self) -> None:
        assert both(b"&#xFDD0;") == "\ufdd0"
        assert both(b"&#xFFFE;") == "\ufffe"

    def test_null(self) -> None:
        assert both(b"&#0;") == REPLACEMENT_CHAR
        assert both(b"&#x0;") == REPLACEMENT_CHAR
        assert both(b"&#x0000") == REPLACEMENT_CHAR

    def test_surrogates(self) -> None:
        assert both(b"&#xD800;") == REPLACEMENT_CHAR
        assert both(b"&#xDFFF;") == REPLACEMENT_CHAR
        assert both(b"&#55296;") == REPLACEMENT_CHAR
        assert both(b"&#xD7FF;") == "\ud7ff"
        assert both(b"&#xE000;") == "\ue000"

    def test_above_max_code_point(self) -> None:
        assert both(b"&#x110000;") == REPLACEMENT_CHAR
        assert both(b"&#x110001;") == REPLACEMENT_CHAR
        assert both(b"&#x110001") == REPLACEMENT_CHAR
        assert both(b"&#1114112;") == REPLACEMENT_CHAR

    def test_overflow(self) -> None:
        assert both(b"&#x1100000000;") == REPLACEMENT_CHAR
        assert both(b"&#x1100000000") == REPLACEMENT_CHAR
        assert both(b"&#x110000000000000000000000000000000000000;") == REPLACEMENT_CHAR
        assert both(b"&#x110000000000000000000000000000000000000") == REPLACEMENT_CHAR
        assert both(b"&#99999999999;") == REPLACEMENT_CHAR
        assert both(b"&#" + b"9" * 5000 + b";") == REPLACEMENT_CHAR

    def test_overflow_keeps_following_text(self) -> None:
        assert both(b"a&#xFFFFFFFFF;b") == "a" + REPLACEMENT_CHAR + "b"

    def test_u32_boundary(self) -> None:
        assert both(b"&#xFFFFFFFF;") == REPLACEMENT_CHAR
        assert both(b"&#4294967295;") == REPLACEMENT_CHAR
        assert both(b"&#4294967296;") == REPLACEMENT_CHAR

    def test_bullet(self) -> None:
        assert both(b"&#x95;") == "•"
        assert both(b"&#149;") == "•"
        assert both(b"&#x2022;") == "•"
        assert both("&#x95;&#149;&#x2022;•".encode("utf-8")) == "••••"

    def test_windows_1252_remaps(self) -> None:
        assert both(b"&#x80;") == "€"
        assert both(b"&#128;") == "€"
        assert both(b"&#x99;") == "™"
        assert both(b"&#x9F;") == "Ÿ"
        assert both(b"&#x93;quoted&#x94;") == "“quoted”"


if __name__ == "__main__":
    unittest.main()
