"""
Unit tests for diff creation, report formatting and JSON layout.
"""

import datetime

import pytest

from snapcheck.core.exceptions import SnapshotParseError
from snapcheck.snapshot.canonical import parse_json, pretty_json
from snapcheck.snapshot.diff import build_report, create_diff, split_lines


@pytest.mark.unit
class TestSplitLines:
    def test_trailing_newline_yields_empty_line(self):
        assert split_lines("a\nb\n") == ["a", "b", ""]

    def test_mixed_line_breaks(self):
        assert split_lines("a\r\nb\rc") == ["a", "b", "c"]

    def test_empty_text(self):
        assert split_lines("") == [""]


@pytest.mark.unit
class TestCreateDiff:
    def test_single_line_change(self):
        assert create_diff("Some text", "Some other text") == "-Some text\n+Some other text"

    def test_identical_texts(self):
        assert create_diff("same\n", "same\n") == ""

    def test_header_is_dropped(self):
        diff = create_diff("a\nb\n", "a\nc\n")
        assert not diff.startswith("---")
        assert "@@" not in diff.splitlines()[0]

    def test_context_lines_kept(self):
        diff = create_diff('{\n  "a": 1\n}\n', '{\n  "a": 2\n}\n')
        assert diff == ' {\n-  "a": 1\n+  "a": 2\n }\n '

    def test_context_limited_to_ten_lines(self):
        original = "\n".join(str(i) for i in range(30))
        new = original.replace("15", "fifteen")

        lines = create_diff(original, new).split("\n")

        assert lines[0] == " 5"
        assert lines[-1] == " 25"

    def test_trailing_newline_change_is_visible(self):
        diff = create_diff("a\n", "a")
        assert "-" in diff


@pytest.mark.unit
class TestBuildReport:
    def test_report_without_extra(self):
        report = build_report("String.txt", "-Some text\n+Some other text")

        assert report == (
            "#####################################################################\n"
            "\n"
            "Snapshot [String.txt] failed - recreate all snapshots by setting environment "
            "variable REGENERATE_SNAPSHOTS to true\n"
            "Example: REGENERATE_SNAPSHOTS=true pytest\n"
            "Only recreate failed snapshots by setting environment variable "
            "REGENERATE_FAILED_SNAPSHOTS to true instead\n"
            "Example: REGENERATE_FAILED_SNAPSHOTS=true pytest\n"
            "\n"
            "Diff:\n"
            "\n"
            "-Some text\n"
            "+Some other text\n"
            "\n"
            "#####################################################################\n"
        )

    def test_extra_block_precedes_diff(self):
        report = build_report("x.json", "-1\n+2", extra="Error(s):\nsomething\n")
        assert "Error(s):\nsomething\n\n\nDiff:\n\n-1\n+2\n" in report

    def test_example_command(self):
        report = build_report("x.txt", "", example_command="make test")
        assert "Example: REGENERATE_SNAPSHOTS=true make test\n" in report
        assert "Example: REGENERATE_FAILED_SNAPSHOTS=true make test\n" in report


@pytest.mark.unit
class TestCanonicalJson:
    def test_pretty_layout(self):
        assert pretty_json({"a": [1, 2]}) == '{\n  "a": [\n    1,\n    2\n  ]\n}\n'

    def test_key_order_preserved(self):
        assert pretty_json({"b": 1, "a": 2}).index('"b"') < pretty_json({"b": 1, "a": 2}).index('"a"')

    def test_non_ascii_kept_literal(self):
        assert pretty_json({"name": "Ærlig"}) == '{\n  "name": "Ærlig"\n}\n'

    def test_datetime_uses_isoformat(self):
        value = {"at": datetime.datetime(2021, 4, 8, 14, 30)}
        assert '"at": "2021-04-08T14:30:00"' in pretty_json(value)

    def test_unserializable_value(self):
        with pytest.raises(TypeError):
            pretty_json({"x": object()})

    def test_parse_bytes(self):
        assert parse_json(b'{"a": 1}') == {"a": 1}

    def test_parse_rejects_nan(self):
        with pytest.raises(SnapshotParseError):
            parse_json('{"a": NaN}')

    @pytest.mark.parametrize("text", ['{"a": 1e400}', "[-1e400]"])
    def test_parse_rejects_out_of_range_number(self, text):
        with pytest.raises(SnapshotParseError, match="out of range"):
            parse_json(text)

    def test_parse_keeps_large_finite_number(self):
        assert parse_json('{"a": 1.5e300}') == {"a": 1.5e300}

    def test_pretty_rejects_nan(self):
        with pytest.raises(SnapshotParseError):
            pretty_json({"a": float("nan")})

    def test_parse_error_position(self):
        with pytest.raises(SnapshotParseError) as exc_info:
            parse_json('{\n  "a": \n}')
        assert exc_info.value.line == 3
