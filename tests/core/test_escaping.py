"""Tests for JSON, XML and table escaping rules."""

import json
import math

import pytest

from structfmt.core.escaping import (
    escape_json_str,
    escape_table_str,
    escape_xml_str,
    format_float,
    strip_xml_invalid,
    xml_name,
)


class TestEscapeJson:
    """Test escape_json_str."""

    def test_plain_text_unchanged(self):
        assert escape_json_str("osd.0 up") == "osd.0 up"

    def test_quote_and_backslash(self):
        assert escape_json_str('a"b\\c') == 'a\\"b\\\\c'

    def test_short_escapes(self):
        assert escape_json_str("a\nb\tc\rd") == "a\\nb\\tc\\rd"

    def test_other_control_characters(self):
        assert escape_json_str("\x01\x1f\x7f") == "\\u0001\\u001f\\u007f"

    @pytest.mark.parametrize("text", [
        'quote " here',
        "back\\slash",
        "bell\x07 and newline\n",
        "unicode ünïcødé ✓",
    ])
    def test_parses_back_to_original(self, text):
        """Escaped text inside quotes is a valid JSON string literal."""
        assert json.loads('"' + escape_json_str(text) + '"') == text


class TestEscapeXml:
    """Test escape_xml_str and strip_xml_invalid."""

    def test_reserved_characters(self):
        assert escape_xml_str("<a href=\"x\">&'") == "&lt;a href=&quot;x&quot;&gt;&amp;&apos;"

    def test_safe_text_unchanged(self):
        """Escaping text without reserved characters is a no-op."""
        text = "pool rbd size 3"
        assert escape_xml_str(text) == text
        assert escape_xml_str(escape_xml_str(text)) == text

    def test_no_bare_ampersand(self):
        escaped = escape_xml_str("a & b && c")
        assert escaped.count("&") == escaped.count("&amp;")

    def test_control_characters_stripped(self):
        assert strip_xml_invalid("a\x00b\x08c\x1fd") == "abcd"

    def test_tab_newline_carriage_return_kept(self):
        assert strip_xml_invalid("a\tb\nc\rd") == "a\tb\nc\rd"

    def test_stripping_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            escape_xml_str("bad\x01")
        assert "not allowed in XML" in caplog.text


class TestXmlName:
    """Test xml_name."""

    @pytest.mark.parametrize("name", ["osd", "_x", "pool-1", "a.b", "\u00e9tat"])
    def test_valid_names_unchanged(self, name):
        assert xml_name(name) == name

    @pytest.mark.parametrize("name,expected", [
        ("10.0.0.1", "_10.0.0.1"),
        ("a&b", "a_b"),
        ('x"y', "x_y"),
        ("ns:key", "ns_key"),
        ("two words", "two_words"),
        ("-flag", "_-flag"),
        ("", "_"),
    ])
    def test_invalid_names_repaired(self, name, expected):
        assert xml_name(name) == expected


class TestEscapeTable:
    """Test escape_table_str."""

    def test_plain_text_unchanged(self):
        assert escape_table_str("osd.0 up (a=\"b\")") == "osd.0 up (a=\"b\")"

    def test_line_breaks_and_tabs(self):
        assert escape_table_str("a\nb\r\tc") == "a\\nb\\r\\tc"

    def test_backslash_doubled(self):
        assert escape_table_str("c:\\new") == "c:\\\\new"


class TestFormatFloat:
    """Test format_float."""

    def test_round_trips(self):
        assert float(format_float(0.1)) == 0.1
        assert format_float(2.5) == "2.5"

    def test_integral_float_keeps_point(self):
        assert format_float(3.0) == "3.0"

    def test_non_finite(self):
        assert format_float(math.nan) == "nan"
        assert format_float(math.inf) == "inf"
        assert format_float(-math.inf) == "-inf"
