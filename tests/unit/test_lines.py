from rmsforms.toolkit.lines import (
    get_string_from_form_lines,
    index_of,
    lines_between,
    split_lines,
    value_after,
)
from rmsforms.toolkit.version import after_prefix, exact_token, version_token


class TestSplitLines:
    def test_splits_on_every_terminator(self) -> None:
        assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_empty_input(self) -> None:
        assert split_lines("") == []
        assert split_lines(None) == []


class TestGetStringFromFormLines:
    def test_returns_remainder_after_delimiter(self) -> None:
        lines = ["Name: Jane", "  Status: OK"]
        assert get_string_from_form_lines(lines, "Status", ":") == " OK"

    def test_default_delimiter_is_equals(self) -> None:
        assert get_string_from_form_lines(["key=a=b"], "key") == "a=b"

    def test_matching_line_without_delimiter_is_none(self) -> None:
        assert get_string_from_form_lines(["Status OK"], "Status", ":") is None

    def test_no_matching_line_is_none(self) -> None:
        assert get_string_from_form_lines(["Band: 40m"], "Status", ":") is None


class TestLineHelpers:
    def test_value_after_trims_remainder(self) -> None:
        assert value_after(["Date Time  2024-01-02 "], "Date Time ") == "2024-01-02"

    def test_value_after_missing_is_none(self) -> None:
        assert value_after(["x"], "y") is None

    def test_index_of_matches_trimmed_lines(self) -> None:
        assert index_of(["a", "  Comments:", "b"], "Comments:") == 1
        assert index_of(["a"], "Comments:") == -1

    def test_lines_between_stops_before_end(self) -> None:
        lines = ["x", "Comments:", "one", "two", "-----", "after"]
        assert lines_between(lines, "Comments:", "-----") == ["one", "two"]

    def test_lines_between_runs_to_end_without_end_marker(self) -> None:
        assert lines_between(["Comments:", "one", "two"], "Comments:") == ["one", "two"]

    def test_lines_between_can_keep_start_remainder(self) -> None:
        lines = ["Comments: first", "second"]
        assert lines_between(lines, "Comments:", include_start=True) == ["first", "second"]

    def test_lines_between_missing_start(self) -> None:
        assert lines_between(["a"], "Comments:") == []


class TestVersionTokens:
    def test_version_token_defaults_to_last(self) -> None:
        assert version_token("Winlink Check-in 5.0.10") == "5.0.10"

    def test_version_token_by_index_tolerates_double_spaces(self) -> None:
        assert version_token("ICS 213  v2.1", 2) == "v2.1"

    def test_version_token_out_of_range_returns_raw(self) -> None:
        assert version_token(" v1 ", 3) == "v1"

    def test_version_token_empty(self) -> None:
        assert version_token("") == ""
        assert version_token(None) == ""

    def test_exact_token_requires_count(self) -> None:
        assert exact_token("Field Situation Report v 26", 4, 5) == "26"
        assert exact_token("Field Situation 26", 4, 5) == "Field Situation 26"

    def test_after_prefix(self) -> None:
        assert after_prefix("RR WebEOC WA 1.3", "RR WebEOC WA ") == "1.3"
        assert after_prefix(" other 2 ", "RR WebEOC WA ") == "other 2"
        assert after_prefix("", "RR") == ""
