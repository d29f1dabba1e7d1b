"""Tests for logmerge/parser.py"""

import unittest

from logmerge.errors import TimestampParseFailure
from logmerge.parser import (
    LINE_PATTERN,
    Record,
    build_record,
    compile_line_pattern,
    match_line,
    parse_timestamp,
)

JAN_1_2024 = 1704067200


def _line(ts="01/Jan/2024:00:00:00 +0000", ident="AAABBBCCC", slug="cpu-usage"):
    return f'10.0.0.1 - - [{ts}] "GET /observabilityapp/d/{ident}/{slug} HTTP/1.1" 200 512'


class TestLinePattern(unittest.TestCase):
    """Verify the compiled regex finds the request inside a combined log line."""

    def test_matches_combined_format(self):
        self.assertIsNotNone(LINE_PATTERN.search(_line()))

    def test_no_match_on_empty(self):
        self.assertIsNone(LINE_PATTERN.search(""))

    def test_no_match_on_other_route(self):
        line = '10.0.0.1 - - [01/Jan/2024:00:00:00 +0000] "GET /api/health HTTP/1.1" 200 2'
        self.assertIsNone(LINE_PATTERN.search(line))

    def test_no_match_on_post(self):
        line = _line().replace('"GET', '"POST')
        self.assertIsNone(LINE_PATTERN.search(line))

    def test_prefix_is_literal(self):
        pattern = compile_line_pattern("/a.b/")
        self.assertIsNone(match_line('[x] "GET /aXb/123456789/s', pattern))
        self.assertEqual(match_line('[x] "GET /a.b/123456789/s', pattern), ("x", "123456789", "s"))


class TestMatchLine(unittest.TestCase):
    def test_captures_groups(self):
        self.assertEqual(
            match_line(_line()),
            ("01/Jan/2024:00:00:00 +0000", "AAABBBCCC", "cpu-usage"),
        )

    def test_slug_stops_at_query_string(self):
        captures = match_line(_line(slug="cpu-usage?orgId=1&refresh=5s"))
        self.assertEqual(captures[2], "cpu-usage")

    def test_slug_stops_at_space(self):
        captures = match_line(_line(slug="memory"))
        self.assertEqual(captures[2], "memory")

    def test_slug_may_contain_slashes(self):
        captures = match_line(_line(slug="team/overview"))
        self.assertEqual(captures[2], "team/overview")

    def test_missing_slug_captures_overlong_identifier(self):
        line = '10.0.0.1 - - [01/Jan/2024:00:00:00 +0000] "GET /observabilityapp/d/AAABBBCCC HTTP/1.1" 200 5'
        ts, ident, slug = match_line(line)
        self.assertEqual(ident, "AAABBBCCC HTTP")
        self.assertIsNone(build_record(ts, ident, slug))

    def test_request_without_http_version_keeps_closing_quote(self):
        line = '[01/Jan/2024:00:00:00 +0000] "GET /observabilityapp/d/AAABBBCCC/foo"'
        self.assertEqual(
            match_line(line),
            ("01/Jan/2024:00:00:00 +0000", "AAABBBCCC", 'foo"'),
        )

    def test_returns_none_for_garbage(self):
        self.assertIsNone(match_line("not a log line at all"))

    def test_custom_pattern(self):
        pattern = compile_line_pattern("/grafana/d/")
        line = '[01/Jan/2024:00:00:00 +0000] "GET /grafana/d/XYZXYZXYZ/home HTTP/1.1"'
        self.assertEqual(match_line(line, pattern)[1], "XYZXYZXYZ")
        self.assertIsNone(match_line(_line(), pattern))


class TestParseTimestamp(unittest.TestCase):
    def test_utc(self):
        self.assertEqual(parse_timestamp("01/Jan/2024:00:00:00 +0000"), JAN_1_2024)

    def test_offset_applied(self):
        # 13:55:36 at -0700 is 20:55:36 UTC
        self.assertEqual(parse_timestamp("10/Oct/2000:13:55:36 -0700"), 971211336)

    def test_positive_offset(self):
        self.assertEqual(parse_timestamp("01/Jan/2024:02:00:00 +0200"), JAN_1_2024)

    def test_bad_month_raises(self):
        with self.assertRaises(TimestampParseFailure) as ctx:
            parse_timestamp("01/Foo/2024:00:00:00 +0000")
        self.assertEqual(ctx.exception.timestamp, "01/Foo/2024:00:00:00 +0000")

    def test_missing_offset_raises(self):
        with self.assertRaises(TimestampParseFailure):
            parse_timestamp("01/Jan/2024:00:00:00")

    def test_iso_format_raises(self):
        with self.assertRaises(TimestampParseFailure):
            parse_timestamp("2024-01-01T00:00:00Z")


class TestBuildRecord(unittest.TestCase):
    def test_valid_record(self):
        record = build_record("01/Jan/2024:00:00:10 +0000", "AAABBBCCC", "cpu")
        self.assertEqual(record, Record(timestamp=JAN_1_2024 + 10, identifier="AAABBBCCC", slug="cpu"))

    def test_short_identifier_skipped(self):
        with self.assertLogs("logmerge.parser", level="WARNING") as logs:
            self.assertIsNone(build_record("01/Jan/2024:00:00:00 +0000", "SHORT", "cpu"))
        self.assertIn("Invalid record: SHORT", logs.output[0])

    def test_long_identifier_skipped(self):
        self.assertIsNone(build_record("01/Jan/2024:00:00:00 +0000", "ABCDEFGHIJ", "cpu"))

    def test_bad_timestamp_is_fatal(self):
        with self.assertRaises(TimestampParseFailure):
            build_record("garbage", "AAABBBCCC", "cpu")

    def test_identifier_checked_before_timestamp(self):
        self.assertIsNone(build_record("garbage", "SHORT", "cpu"))

    def test_custom_identifier_length(self):
        record = build_record("01/Jan/2024:00:00:00 +0000", "abc", "cpu", identifier_length=3)
        self.assertEqual(record.identifier, "abc")


class TestRecordFrozen(unittest.TestCase):
    def test_cannot_mutate_timestamp(self):
        record = Record(timestamp=1, identifier="AAABBBCCC", slug="cpu")
        with self.assertRaises(AttributeError):
            record.timestamp = 2


if __name__ == "__main__":
    unittest.main()
