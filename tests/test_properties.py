"""Tests for the .properties text parser."""

import io

import pytest

from envfiles.exceptions import PropertiesParseError
from envfiles.properties import load_properties, loads_properties


class TestSeparators:
    """Key/value separation rules."""

    @pytest.mark.parametrize(
        "line",
        ["key=value", "key = value", "key:value", "key : value", "key value", "  key\t=  value"],
    )
    def test_separator_forms(self, line):
        assert loads_properties(line) == {"key": "value"}

    def test_only_first_separator_splits(self):
        assert loads_properties("url=http://host:8080/a=b") == {"url": "http://host:8080/a=b"}

    def test_trailing_whitespace_in_value_is_kept(self):
        assert loads_properties("key=value  ") == {"key": "value  "}

    def test_key_without_value(self):
        assert loads_properties("lonely\nempty=") == {"lonely": "", "empty": ""}

    def test_escaped_separator_in_key(self):
        assert loads_properties(r"a\=b\:c\ d=1") == {"a=b:c d": "1"}


class TestComments:
    """Comment and blank line handling."""

    def test_hash_and_bang_comments(self):
        text = "# comment\n! also comment\n   # indented comment\nA=1\n\n   \nB=2\n"
        assert loads_properties(text) == {"A": "1", "B": "2"}

    def test_hash_inside_value_is_literal(self):
        assert loads_properties("A=1 # not a comment") == {"A": "1 # not a comment"}

    def test_empty_document(self):
        assert loads_properties("") == {}


class TestContinuation:
    """Backslash line continuation."""

    def test_continuation_joins_lines(self):
        text = "PATHS=/a:\\\n      /b:\\\n      /c\nNEXT=1\n"
        assert loads_properties(text) == {"PATHS": "/a:/b:/c", "NEXT": "1"}

    def test_escaped_backslash_does_not_continue(self):
        assert loads_properties("DIR=C:\\\\\nB=2") == {"DIR": "C:\\", "B": "2"}

    def test_continued_comment_like_line_is_value(self):
        assert loads_properties("A=x\\\n# y\n") == {"A": "x# y"}

    def test_comment_lines_do_not_continue(self):
        assert loads_properties("# note \\\nA=1") == {"A": "1"}

    @pytest.mark.parametrize("text", ["A=1\nB=unterminated\\", "A=1\nB=unterminated\\\n"])
    def test_unterminated_continuation_is_an_error(self, text):
        with pytest.raises(PropertiesParseError) as exc_info:
            loads_properties(text, source="broken.properties")
        assert exc_info.value.details["source"] == "broken.properties"
        assert exc_info.value.line == 2

    def test_mixed_line_endings(self):
        assert loads_properties("A=1\r\nB=2\rC=3\n") == {"A": "1", "B": "2", "C": "3"}


class TestEscapes:
    """Escape sequences."""

    def test_control_escapes(self):
        assert loads_properties(r"A=tab\there\nnl\rcr\fff") == {"A": "tab\there\nnl\rcr\fff"}

    def test_unicode_escape(self):
        assert loads_properties(r"GREETING=caf\u00e9") == {"GREETING": "café"}

    def test_surrogate_pair_escape_is_one_code_point(self):
        value = loads_properties(r"EMOJI=\uD83D\uDE00")["EMOJI"]
        assert value == "\U0001F600"
        assert value.encode("utf-8") == b"\xf0\x9f\x98\x80"

    def test_lone_surrogate_escape_is_kept(self):
        assert loads_properties(r"A=\uD83D") == {"A": "\ud83d"}

    def test_unknown_escape_drops_backslash(self):
        assert loads_properties(r"A=\q\#") == {"A": "q#"}

    @pytest.mark.parametrize("text", [r"A=\u12", r"A=\u12zz", "A=\\u"])
    def test_malformed_unicode_escape(self, text):
        with pytest.raises(PropertiesParseError) as exc_info:
            loads_properties(text)
        assert exc_info.value.code == "PROPERTIES_PARSE_ERROR"
        assert exc_info.value.line == 1


class TestDocument:
    """Whole-document behaviour."""

    def test_duplicate_keys_last_wins(self):
        assert loads_properties("A=1\nA=2") == {"A": "2"}

    def test_round_trip_of_simple_pairs(self):
        assert loads_properties("A=1\nB=2\n") == {"A": "1", "B": "2"}

    def test_load_from_stream_leaves_it_open(self):
        stream = io.StringIO("A=1\n")
        assert load_properties(stream) == {"A": "1"}
        assert not stream.closed
