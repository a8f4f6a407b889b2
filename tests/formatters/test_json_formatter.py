"""Tests for the JSON formatter."""

import json
import math

import pytest

from structfmt.config.settings import FormatterConfig
from structfmt.dumper import dump_value
from structfmt.formatters import JSONFormatter, OutputFormat


@pytest.fixture
def compact():
    return JSONFormatter()


@pytest.fixture
def pretty():
    return JSONFormatter(pretty=True)


SAMPLE = {
    "fsid": "a7f64266-0894-4f1e-a635-d0aeaca0e993",
    "health": {"status": "HEALTH_OK", "checks": []},
    "osds": [
        {"id": 0, "up": True, "weight": 1.0, "addrs": ["10.0.0.1:6800", "10.0.0.1:6801"]},
        {"id": 1, "up": False, "weight": 0.5, "addrs": []},
    ],
    "note": None,
}


class TestJSONFormatter:
    """Test JSON rendering."""

    def test_format_type(self, compact, pretty):
        assert compact.format_type == OutputFormat.JSON
        assert pretty.format_type == OutputFormat.JSON_PRETTY

    def test_simple_object(self, compact):
        compact.open_object_section("item")
        compact.dump_string("name", "a")
        compact.dump_int("id", 1)
        compact.close_section()
        assert compact.getvalue() == '{"name":"a","id":1}'

    def test_array_members_are_bare_values(self, compact):
        compact.open_object_section("")
        compact.open_array_section("ids")
        compact.dump_int("", 1)
        compact.dump_unsigned("", 2)
        compact.close_section()
        compact.dump_bool("ok", True)
        compact.close_section()
        assert compact.getvalue() == '{"ids":[1,2],"ok":true}'

    def test_nested_objects_in_array(self, compact):
        compact.open_array_section("osds")
        for osd_id in (0, 1):
            compact.open_object_section("osd")
            compact.dump_int("id", osd_id)
            compact.close_section()
        compact.close_section()
        assert compact.getvalue() == '[{"id":0},{"id":1}]'

    def test_pretty_layout(self, pretty):
        pretty.open_object_section("")
        pretty.dump_int("a", 1)
        pretty.open_array_section("b")
        pretty.dump_int("", 1)
        pretty.dump_int("", 2)
        pretty.close_section()
        pretty.close_section()
        assert pretty.getvalue() == (
            '{\n'
            '    "a": 1,\n'
            '    "b": [\n'
            '        1,\n'
            '        2\n'
            '    ]\n'
            '}\n'
        )

    def test_pretty_empty_sections(self, pretty):
        pretty.open_object_section("")
        pretty.open_array_section("none")
        pretty.close_section()
        pretty.close_section()
        assert pretty.getvalue() == '{\n    "none": []\n}\n'

    def test_pretty_indent_from_config(self, monkeypatch):
        monkeypatch.setattr(FormatterConfig, "json_indent", 2)
        f = JSONFormatter(pretty=True)
        f.open_object_section("")
        f.dump_int("a", 1)
        f.close_section()
        assert f.getvalue() == '{\n  "a": 1\n}\n'

    def test_string_escaping(self, compact):
        text = 'say "hi"\\\n\x01 ✓'
        compact.open_object_section("")
        compact.dump_string("s", text)
        compact.close_section()
        assert json.loads(compact.getvalue()) == {"s": text}

    def test_keys_are_escaped(self, compact):
        compact.open_object_section("")
        compact.dump_int('odd"key', 1)
        compact.close_section()
        assert json.loads(compact.getvalue()) == {'odd"key': 1}

    def test_floats(self, compact):
        compact.open_array_section("")
        compact.dump_float("", 0.1)
        compact.dump_float("", 3.0)
        compact.dump_float("", math.nan)
        compact.dump_float("", -math.inf)
        compact.close_section()
        assert compact.getvalue() == "[0.1,3.0,null,null]"

    def test_dump_format_variants(self, compact):
        compact.open_object_section("")
        compact.dump_format("who", "%s.%d", "osd", 3)
        compact.dump_format_ns("ns", "http://example.com/", "%s", "x")
        compact.dump_format_unquoted("num", "%d", 42)
        compact.close_section()
        assert compact.getvalue() == '{"who":"osd.3","ns":"x","num":42}'

    def test_dump_stream(self, compact):
        compact.open_object_section("")
        stream = compact.dump_stream("msg")
        stream.write("a\tb")
        compact.dump_int("n", 2)
        compact.close_section()
        assert compact.getvalue() == '{"msg":"a\\tb","n":2}'

    def test_consecutive_streams(self, compact):
        compact.open_array_section("")
        compact.dump_stream("").write("one")
        compact.dump_stream("").write("two")
        compact.close_section()
        assert compact.getvalue() == '["one","two"]'

    def test_top_level_scalar(self, compact):
        compact.dump_string("ignored", "value")
        assert compact.getvalue() == '"value"'

    def test_write_raw_data(self, compact):
        compact.open_object_section("")
        compact.dump_int("a", 1)
        compact.write_raw_data(',"raw":[1,2]')
        compact.close_section()
        assert json.loads(compact.getvalue()) == {"a": 1, "raw": [1, 2]}

    def test_get_len_tracks_buffer(self, compact):
        compact.open_object_section("")
        compact.dump_int("a", 1)
        assert compact.get_len() == len('{"a":1')


class TestJSONRoundTrip:
    """Output parses back to the same tree."""

    def test_compact_round_trip(self, compact):
        dump_value(compact, "cluster", SAMPLE)
        assert json.loads(compact.getvalue()) == SAMPLE

    def test_pretty_round_trip(self, pretty):
        dump_value(pretty, "cluster", SAMPLE)
        assert json.loads(pretty.getvalue()) == SAMPLE

    def test_pretty_and_compact_differ_only_in_whitespace(self, compact, pretty):
        dump_value(compact, "cluster", SAMPLE)
        dump_value(pretty, "cluster", SAMPLE)
        assert json.loads(compact.getvalue()) == json.loads(pretty.getvalue())
        assert len(pretty.getvalue()) > len(compact.getvalue())
