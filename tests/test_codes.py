"""Tests for code (annotation) file parsing.

Detection and parsing are imported through the module so pytest does not
collect `test_code_file` as a test function.
"""

import pytest

from interview_ingest import codes
from interview_ingest.codes import (
    MAX_TURN_RANGE,
    TimeCodeEntry,
    TimeCodes,
    TurnCodeEntry,
    TurnCodes,
    UnrecognizedFormatError,
)


class TestFormatLabel:
    @pytest.mark.parametrize(
        "headers, label",
        [
            (["code", "turn"], "Turn-based"),
            (["turn", "code", "note"], "Turn-based"),
            (["code", "turn_start", "turn_end"], "Turn range"),
            (["start", "end", "code"], "Time-based"),
            (["start", "end"], "Time-based"),
            (["code", "turn_start"], "Unknown"),
            (["speaker", "content"], "Unknown"),
            ([], "Unknown"),
        ],
    )
    def test_labels(self, headers, label):
        assert codes.get_code_format_label(headers) == label


class TestDetection:
    """test_code_file needs a matching header set and one valid row."""

    def test_turn_based(self, turn_code_rows):
        assert codes.test_code_file(turn_code_rows)

    def test_all_rows_invalid(self):
        rows = [{"code": "", "turn": 1}, {"code": "x", "turn": 0}, {"code": "y", "turn": "abc"}]
        assert not codes.test_code_file(rows)

    def test_headers_only(self):
        assert not codes.test_code_file([], ["code", "turn"])

    def test_incomplete_headers(self):
        assert not codes.test_code_file([{"code": "x", "turn_start": 1}])

    def test_unrelated_table(self):
        assert not codes.test_code_file([{"speaker": "A", "content": "hi"}])

    def test_turn_range_needs_valid_range(self):
        rows = [{"code": "x", "turn_start": 5, "turn_end": 2}]
        assert not codes.test_code_file(rows)
        rows.append({"code": "x", "turn_start": 1, "turn_end": 2})
        assert codes.test_code_file(rows)

    def test_time_based_without_code_column(self):
        assert codes.test_code_file([{"start": "0:10", "end": "0:20"}])

    def test_time_based_with_empty_codes(self):
        rows = [{"start": 0, "end": 1, "code": " "}]
        assert not codes.test_code_file(rows, ["start", "end", "code"])


class TestCodeNames:
    def test_first_seen_order(self, turn_code_rows):
        names = codes.extract_code_names(turn_code_rows, ["code", "turn"], "codes.csv")
        assert names == ["question", "answer"]

    def test_skips_empty(self):
        rows = [{"code": "a"}, {"code": ""}, {"code": None}, {"code": "b"}]
        assert codes.extract_code_names(rows, ["code", "turn"], "x.csv") == ["a", "b"]

    def test_filename_fallback(self):
        names = codes.extract_code_names([{"start": 0, "end": 1}], ["start", "end"], "Time_Based-Codes.csv")
        assert names == ["time based codes"]

    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("laughter.csv", "laughter"),
            ("  Applause .CSV", "applause"),
            ("dir/sub/Cross Talk.ods", "cross talk"),
            ("archive.tar.gz", "archive.tar"),
            ("noext", "noext"),
            (".csv", "code"),
            ("__.csv", "code"),
            ("", "code"),
        ],
    )
    def test_code_name_from_filename(self, filename, expected):
        assert codes.code_name_from_filename(filename) == expected


class TestTurnBased:
    def test_groups_dedups_and_sorts(self, turn_code_rows):
        parsed = codes.parse_code_file(turn_code_rows, "codes.csv")
        assert isinstance(parsed, TurnCodes)
        assert parsed.kind == "turn"
        assert parsed.entries == [
            TurnCodeEntry(code="question", turns=(1, 3)),
            TurnCodeEntry(code="answer", turns=(2, 4)),
        ]

    def test_duplicate_rows_collapse(self):
        rows = [{"code": "x", "turn": 2}, {"code": "x", "turn": 2}]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert parsed.entries == [TurnCodeEntry(code="x", turns=(2,))]

    def test_invalid_rows_are_skipped(self):
        rows = [
            {"code": "x", "turn": 0},
            {"code": "x", "turn": -3},
            {"code": "x", "turn": 2.5},
            {"code": "x", "turn": "two"},
            {"code": "x", "turn": None},
            {"code": "   ", "turn": 1},
            {"code": "x", "turn": 3.0},
            {"code": "x", "turn": True},
        ]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert parsed.entries == [TurnCodeEntry(code="x", turns=(3,))]
        assert parsed.skipped_rows == 7

    def test_internal_whitespace_is_kept(self):
        parsed = codes.parse_code_file([{"code": "  open  question ", "turn": 1}], "f.csv")
        assert parsed.entries[0].code == "open  question"


class TestTurnRange:
    def test_expands_inclusive_range(self):
        rows = [{"code": "x", "turn_start": 1, "turn_end": 3}]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert parsed.kind == "turn"
        assert parsed.entries == [TurnCodeEntry(code="x", turns=(1, 2, 3))]

    def test_inverted_range_is_dropped(self):
        rows = [{"code": "x", "turn_start": 5, "turn_end": 2}, {"code": "y", "turn_start": 1, "turn_end": 1}]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert parsed.entries == [TurnCodeEntry(code="y", turns=(1,))]
        assert parsed.skipped_rows == 1

    def test_overlapping_ranges_merge(self):
        rows = [
            {"code": "x", "turn_start": 1, "turn_end": 4},
            {"code": "x", "turn_start": 3, "turn_end": 6},
            {"code": "x", "turn_start": 10, "turn_end": 10},
        ]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert parsed.entries[0].turns == (1, 2, 3, 4, 5, 6, 10)

    def test_range_at_ceiling_is_kept(self):
        rows = [{"code": "x", "turn_start": 1, "turn_end": MAX_TURN_RANGE}]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert len(parsed.entries[0].turns) == MAX_TURN_RANGE

    def test_range_over_ceiling_is_dropped(self):
        rows = [
            {"code": "huge", "turn_start": 1, "turn_end": MAX_TURN_RANGE + 1},
            {"code": "absurd", "turn_start": 1, "turn_end": 1_000_000_000},
        ]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert parsed.entries == []
        assert parsed.skipped_rows == 2

    def test_string_bounds(self):
        rows = [{"code": "x", "turn_start": "2", "turn_end": " 3 "}]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert parsed.entries[0].turns == (2, 3)


class TestTimeBased:
    def test_mixed_formats(self):
        rows = [
            {"code": "a", "start": 5, "end": "10"},
            {"code": "b", "start": "1:00", "end": "01:01:00"},
        ]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert isinstance(parsed, TimeCodes)
        assert parsed.kind == "time"
        assert parsed.entries == [
            TimeCodeEntry(code="a", start_time=5, end_time=10),
            TimeCodeEntry(code="b", start_time=60, end_time=3660),
        ]

    def test_missing_bound_is_dropped(self):
        rows = [
            {"code": "a", "start": 1, "end": None},
            {"code": "a", "start": "", "end": 2},
            {"code": "a", "start": "soon", "end": 2},
        ]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert parsed.entries == []
        assert parsed.skipped_rows == 3

    def test_zero_duration_is_kept(self):
        parsed = codes.parse_code_file([{"code": "a", "start": 4, "end": 4}], "f.csv")
        assert parsed.entries == [TimeCodeEntry(code="a", start_time=4, end_time=4)]

    def test_overlaps_across_codes_survive(self):
        rows = [{"code": "a", "start": 0, "end": 10}, {"code": "b", "start": 5, "end": 15}]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert [e.code for e in parsed.entries] == ["a", "b"]

    def test_identical_rows_are_not_deduplicated(self):
        rows = [{"code": "a", "start": 0, "end": 1}, {"code": "a", "start": 0, "end": 1}]
        assert len(codes.parse_code_file(rows, "f.csv").entries) == 2

    def test_negative_and_inverted_times_are_rejected(self):
        rows = [
            {"code": "neg", "start": -5, "end": 3},
            {"code": "inv", "start": 9, "end": 3},
            {"code": "ok", "start": 0, "end": 3},
        ]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert [e.code for e in parsed.entries] == ["ok"]

    def test_filename_code_without_code_column(self):
        rows = [{"start": 0, "end": 2}, {"start": 3, "end": 4}]
        parsed = codes.parse_code_file(rows, "Laughter.csv")
        assert [e.code for e in parsed.entries] == ["laughter", "laughter"]

    def test_detection_agrees_with_parsing_for_nameless_file(self):
        rows = [{"start": 0, "end": 5}]
        assert codes.test_code_file(rows)
        parsed = codes.parse_code_file(rows, ".csv")
        assert parsed.entries == [TimeCodeEntry(code=codes.DEFAULT_CODE_NAME, start_time=0, end_time=5)]
        assert parsed.skipped_rows == 0

    def test_rows_with_empty_code_are_skipped(self):
        rows = [{"code": "", "start": 0, "end": 2}, {"code": "a", "start": 0, "end": 2}]
        parsed = codes.parse_code_file(rows, "f.csv")
        assert [e.code for e in parsed.entries] == ["a"]


class TestUnrecognizedFormat:
    def test_raises(self):
        with pytest.raises(UnrecognizedFormatError) as excinfo:
            codes.parse_code_file([{"code": "x", "turn_start": 1}], "f.csv")
        assert excinfo.value.headers == ["code", "turn_start"]
        assert "code, turn_start" in str(excinfo.value)

    def test_explicit_headers_take_precedence(self):
        with pytest.raises(UnrecognizedFormatError):
            codes.parse_code_file([{"code": "x", "turn": 1}], "f.csv", headers=["code"])
