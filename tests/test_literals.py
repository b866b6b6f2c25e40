"""Tests for parsing and formatting temporal literals."""

from datetime import datetime, timezone

import pytest
from dateutil.relativedelta import relativedelta

from sta_temporal.exceptions import (
    ArithmeticOverflow,
    MalformedInterval,
    MalformedLiteral,
    ParseError,
)
from sta_temporal.temporal.literals import (
    format_duration,
    format_instant,
    format_interval,
    parse_duration,
    parse_instant,
    parse_interval,
    parse_iso_duration,
    parse_literal,
)
from sta_temporal.temporal.values import Duration, Instant, Interval

SEVEN = Instant(datetime(2016, 1, 1, 7, tzinfo=timezone.utc))
EIGHT = Instant(datetime(2016, 1, 1, 8, tzinfo=timezone.utc))


class TestParseInstant:
    @pytest.mark.parametrize(
        "text",
        [
            "2016-01-01T07:00:00.000Z",
            "2016-01-01T07:00:00Z",
            "2016-01-01T07:00Z",
            "2016-01-01T09:00:00+02:00",
            "2016-01-01T02:00:00-05:00",
            "2016-01-01 07:00:00Z",
        ],
    )
    def test_accepted_forms(self, text) -> None:
        assert parse_instant(text) == SEVEN

    def test_fraction_is_truncated_to_milliseconds(self) -> None:
        instant = parse_instant("2016-01-01T07:00:00.123456Z")
        assert instant.value.microsecond == 123000

    @pytest.mark.parametrize(
        "text",
        [
            "2016-01-01T07:00:00",
            "2016-13-01T07:00:00Z",
            "2016-02-30T07:00:00Z",
            "2016-01-01",
            "yesterday",
            "",
        ],
    )
    def test_rejected_forms(self, text) -> None:
        with pytest.raises(MalformedLiteral):
            parse_instant(text)

    def test_out_of_range_in_utc(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            parse_instant("9999-12-31T23:59:59-01:00")

    def test_error_names_the_token(self) -> None:
        with pytest.raises(ParseError) as excinfo:
            parse_instant("2016-01-01T07:00:00")
        assert excinfo.value.token == "2016-01-01T07:00:00"
        assert "2016-01-01T07:00:00" in str(excinfo.value)


class TestParseInterval:
    def test_interval(self) -> None:
        interval = parse_interval("2016-01-01T07:00:00Z/2016-01-01T08:00:00Z")
        assert interval == Interval(SEVEN, EIGHT)

    def test_zero_length(self) -> None:
        interval = parse_interval("2016-01-01T07:00:00Z/2016-01-01T07:00:00Z")
        assert interval.is_degenerate

    def test_start_after_end(self) -> None:
        with pytest.raises(MalformedInterval):
            parse_interval("2016-01-01T08:00:00Z/2016-01-01T07:00:00Z")

    @pytest.mark.parametrize(
        "text",
        [
            "2016-01-01T07:00:00Z",
            "2016-01-01T07:00:00Z/",
            "2016-01-01T07:00:00Z/2016-01-01T08:00:00Z/2016-01-01T09:00:00Z",
            "2016-01-01T07:00:00Z/2016-01-01T08:00:00",
        ],
    )
    def test_malformed(self, text) -> None:
        with pytest.raises(MalformedLiteral):
            parse_interval(text)


class TestParseDuration:
    @pytest.mark.parametrize(
        "text, delta",
        [
            ("P1D", relativedelta(days=1)),
            ("PT1H30M", relativedelta(hours=1, minutes=30)),
            ("-PT1H30M", relativedelta(hours=-1, minutes=-30)),
            ("P1W", relativedelta(days=7)),
            ("P1Y2M", relativedelta(years=1, months=2)),
            ("PT1.5S", relativedelta(seconds=1, microseconds=500000)),
            ("+P2D", relativedelta(days=2)),
        ],
    )
    def test_iso_durations(self, text, delta) -> None:
        assert parse_iso_duration(text) == Duration(delta)

    @pytest.mark.parametrize("text", ["P", "PT", "P1DT", "1D", "P1H", "PT1D", ""])
    def test_malformed_iso_durations(self, text) -> None:
        with pytest.raises(MalformedLiteral):
            parse_iso_duration(text)

    def test_wrapped_literal(self) -> None:
        assert parse_duration("duration'P1D'") == Duration(relativedelta(days=1))

    @pytest.mark.parametrize(
        "text", ["P1D", "duration'P'", "duration'P1D", "duration\"P1D\""]
    )
    def test_malformed_literal(self, text) -> None:
        with pytest.raises(MalformedLiteral):
            parse_duration(text)


class TestParseLiteral:
    def test_dispatches_on_form(self) -> None:
        assert parse_literal("2016-01-01T07:00:00Z") == SEVEN
        assert parse_literal(
            "2016-01-01T07:00:00Z/2016-01-01T08:00:00Z"
        ) == Interval(SEVEN, EIGHT)
        assert parse_literal("duration'PT1H'") == Duration(relativedelta(hours=1))

    def test_unknown_form(self) -> None:
        with pytest.raises(MalformedLiteral):
            parse_literal("tomorrow")


class TestFormat:
    def test_instant(self) -> None:
        assert format_instant(SEVEN) == "2016-01-01T07:00:00.000Z"

    def test_interval(self) -> None:
        assert (
            format_interval(Interval(SEVEN, EIGHT))
            == "2016-01-01T07:00:00.000Z/2016-01-01T08:00:00.000Z"
        )

    @pytest.mark.parametrize(
        "delta, text",
        [
            (relativedelta(days=1, hours=2), "P1DT2H"),
            (relativedelta(minutes=-30), "-PT30M"),
            (relativedelta(), "PT0S"),
            (relativedelta(weeks=1), "P7D"),
            (relativedelta(seconds=1, microseconds=500000), "PT1.5S"),
            (relativedelta(years=1, months=2), "P1Y2M"),
        ],
    )
    def test_duration(self, delta, text) -> None:
        assert format_duration(Duration(delta)) == text

    def test_duration_literal(self) -> None:
        duration = Duration(relativedelta(days=1))
        assert format_duration(duration, literal=True) == "duration'P1D'"


class TestRoundTrip:
    @pytest.mark.parametrize(
        "text",
        [
            "2016-01-01T07:00:00.000Z",
            "2016-01-01T09:30:00+02:00",
            "2016-01-01T07:00:00.123456Z",
        ],
    )
    def test_instant(self, text) -> None:
        instant = parse_instant(text)
        assert parse_instant(format_instant(instant)) == instant

    def test_interval(self) -> None:
        interval = parse_interval("2016-01-01T07:00:00+01:00/2016-01-01T08:00:00Z")
        assert parse_interval(format_interval(interval)) == interval

    @pytest.mark.parametrize(
        "text", ["P1D", "-PT1H30M", "P1Y2M3DT4H5M6.7S", "PT0.001S"]
    )
    def test_duration(self, text) -> None:
        duration = parse_iso_duration(text)
        assert parse_iso_duration(format_duration(duration)) == duration

    @pytest.mark.parametrize(
        "delta",
        [
            relativedelta(hours=25),
            relativedelta(minutes=-90),
            relativedelta(weeks=2, days=3),
            relativedelta(years=-1, months=-13),
            relativedelta(seconds=61, microseconds=250000),
        ],
    )
    def test_constructed_duration(self, delta) -> None:
        duration = Duration(delta)
        assert parse_iso_duration(format_duration(duration)) == duration

    @pytest.mark.parametrize(
        "delta", [relativedelta(days=1, hours=-2), relativedelta(year=2016)]
    )
    def test_unrepresentable_duration_cannot_be_built(self, delta) -> None:
        with pytest.raises(MalformedLiteral):
            format_duration(Duration(delta))
