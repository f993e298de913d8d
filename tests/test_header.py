"""Tests for header parsing and time parsing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from mypresent.exceptions import UnexpectedEOFError, UnexpectedHeaderLineError
from mypresent.lines import Lines
from mypresent.parser import parse_header, parse_time


class TestParseTime:
    """Tests for parse_time function."""

    def test_parses_time_and_date(self) -> None:
        """A time with a date parses to that instant in UTC."""
        assert parse_time("9:00 12 Feb 2015") == datetime(2015, 2, 12, 9, 0, tzinfo=timezone.utc)

    def test_parses_two_digit_hour(self) -> None:
        """Hours may have two digits."""
        assert parse_time("15:04 2 Jan 2006") == datetime(2006, 1, 2, 15, 4, tzinfo=timezone.utc)

    def test_date_only_is_placed_at_eleven_utc(self) -> None:
        """A bare date is normalized to 11:00 UTC."""
        assert parse_time("12 Feb 2015") == datetime(2015, 2, 12, 11, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("text", ["not a date", "2015-02-12", "12 Feb", ""])
    def test_returns_none_for_other_text(self, text: str) -> None:
        """Text in neither format is not a time."""
        assert parse_time(text) is None

    @pytest.mark.parametrize(
        "text",
        [
            "12  Feb 2015",
            "12 Feb  2015",
            "9:0 12 Feb 2015",
            "9:00  12 Feb 2015",
            " 2 Jan 2006",
            "12 February 2015",
            "12 Feb 2015 ",
        ],
    )
    def test_rejects_loose_spacing_and_widths(self, text: str) -> None:
        """Fields must be separated by single spaces and minutes need two digits."""
        assert parse_time(text) is None

    @pytest.mark.parametrize("text", ["31 Feb 2015", "25:00 12 Feb 2015", "9:60 12 Feb 2015", "0 Feb 2015"])
    def test_rejects_impossible_dates_and_times(self, text: str) -> None:
        assert parse_time(text) is None

    @pytest.mark.parametrize("month", ["feb", "FEB", "Feb"])
    def test_month_names_are_english_in_any_case(self, month: str) -> None:
        """Month names come from a fixed English table, independent of locale."""
        assert parse_time(f"12 {month} 2015") == datetime(2015, 2, 12, 11, 0, tzinfo=timezone.utc)

    def test_single_digit_day_and_leading_zero(self) -> None:
        assert parse_time("02 Jan 2006") == parse_time("2 Jan 2006")


class TestParseHeader:
    """Tests for parse_header function."""

    def test_title_only(self) -> None:
        """A lone title leaves every other field empty."""
        header = parse_header(Lines(["Title"]))

        assert header.title == "Title"
        assert header.subtitle == ""
        assert header.time is None
        assert header.title_notes == []
        assert header.cover == ""

    def test_title_is_first_non_empty_line(self) -> None:
        """Leading blank lines and comments are skipped."""
        header = parse_header(Lines(["", "# comment", "", "Title"]))

        assert header.title == "Title"

    def test_full_header(self) -> None:
        """Subtitle, time, cover and notes are recognized in any order."""
        header = parse_header(
            Lines(
                [
                    "Title",
                    ": note one",
                    "Subtitle here",
                    ".cover images/cover.png",
                    "9:00 12 Feb 2015",
                    ": note two",
                    "",
                    "ignored",
                ]
            )
        )

        assert header.subtitle == "Subtitle here"
        assert header.cover == "images/cover.png"
        assert header.time == datetime(2015, 2, 12, 9, 0, tzinfo=timezone.utc)
        assert header.title_notes == ["note one", "note two"]

    def test_header_stops_at_blank_line(self) -> None:
        """The first blank line ends the header and is consumed."""
        lines = Lines(["Title", "Sub", "", "after"])

        parse_header(lines)

        assert lines.next() == "after"

    def test_non_time_text_becomes_subtitle(self) -> None:
        """A line that is not a time is a subtitle, not an error."""
        header = parse_header(Lines(["Title", "not a date"]))

        assert header.subtitle == "not a date"
        assert header.time is None

    def test_loosely_spaced_date_becomes_subtitle(self) -> None:
        """A date with a doubled space is not a time, so it is the subtitle."""
        header = parse_header(Lines(["Title", "12  Feb 2015"]))

        assert header.subtitle == "12  Feb 2015"
        assert header.time is None

    def test_second_cover_replaces_first(self, caplog: pytest.LogCaptureFixture) -> None:
        """The last cover line wins and a warning is logged."""
        header = parse_header(Lines(["Title", ".cover a.png", ".cover b.png"]), "doc.slide")

        assert header.cover == "b.png"
        assert "cover already set" in caplog.text

    def test_empty_input_raises(self) -> None:
        """Input without a title is an unexpected EOF."""
        with pytest.raises(UnexpectedEOFError, match="expected title"):
            parse_header(Lines(["", "# only a comment", ""]))

    def test_second_subtitle_raises(self) -> None:
        """A second free-text line is rejected with its position."""
        with pytest.raises(UnexpectedHeaderLineError) as exc_info:
            parse_header(Lines(["Title", "Sub", "Another"]), "doc.slide")

        assert exc_info.value.text == "Another"
        assert exc_info.value.line_number == 3
        assert str(exc_info.value) == "doc.slide:3: unexpected header line: 'Another'"
