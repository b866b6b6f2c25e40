# Copyright 2025 SUPSI
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Module: temporal literals

This module parses the textual forms of instants, intervals and durations
used in SensorThings filters, and renders values back to text.
"""

import re
from functools import lru_cache

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from .. import LITERAL_CACHE_SIZE
from ..exceptions import ArithmeticOverflow, MalformedLiteral
from .values import Duration, Instant, Interval

INSTANT_GRAMMAR = "an ISO-8601 timestamp with a UTC offset"
INTERVAL_GRAMMAR = "two ISO-8601 timestamps joined by '/'"
DURATION_GRAMMAR = "duration'<ISO-8601 duration>'"

DATETIME_PATTERN = (
    r"[1-9]\d{3}-(?:0\d|1[0-2])-(?:[0-2]\d|3[01])"
    r"(?:\s+|T)"
    r"(?:[01]\d|2[0-3]):[0-5]\d(?::[0-5]\d(?:\.\d{1,12})?)?"
    r"(?:Z|[+-](?:[01]\d|2[0-3]):?[0-5]\d)?"
)

INSTANT_RE = re.compile(
    r"[1-9]\d{3}-(?:0\d|1[0-2])-(?:[0-2]\d|3[01])"
    r"(?P<sep>\s+|T)"
    r"(?P<time>(?:[01]\d|2[0-3]):[0-5]\d(?::[0-5]\d(?:\.\d{1,12})?)?)"
    r"(?P<offset>Z|[+-](?:[01]\d|2[0-3]):?[0-5]\d)"
)

DURATION_RE = re.compile(
    r"(?P<sign>[-+])?P"
    r"(?:(?P<years>\d+)Y)?"
    r"(?:(?P<months>\d+)M)?"
    r"(?:(?P<weeks>\d+)W)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T"
    r"(?:(?P<hours>\d+)H)?"
    r"(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+)(?:\.(?P<fraction>\d+))?S)?"
    r")?"
)

DURATION_LITERAL_RE = re.compile(r"duration'(?P<body>[^']*)'")


@lru_cache(maxsize=LITERAL_CACHE_SIZE)
def parse_instant(text: str) -> Instant:
    """
    Parse an ISO-8601 timestamp.

    Args:
        text (str): The timestamp, e.g. ``2016-01-01T07:00:00.000Z``.

    Returns:
        Instant: The parsed instant, normalised to UTC.

    Raises:
        MalformedLiteral: If the text is not a timestamp with an offset.
        ArithmeticOverflow: If the timestamp leaves the representable
            range once normalised to UTC.
    """
    token = text.strip()
    match = INSTANT_RE.fullmatch(token)
    if not match:
        raise MalformedLiteral(text, INSTANT_GRAMMAR)
    if match.group("sep") != "T":
        token = token.replace(match.group("sep"), "T", 1)
    try:
        value = isoparse(token)
    except (ValueError, OverflowError):
        raise MalformedLiteral(text, INSTANT_GRAMMAR)
    try:
        return Instant(value)
    except OverflowError as e:
        raise ArithmeticOverflow(f"{text} is out of range in UTC: {e}")


@lru_cache(maxsize=LITERAL_CACHE_SIZE)
def parse_interval(text: str) -> Interval:
    """
    Parse a ``start/end`` interval literal.

    Raises:
        MalformedLiteral: If either side is not a timestamp.
        MalformedInterval: If start lies after end.
    """
    parts = text.strip().split("/")
    if len(parts) != 2:
        raise MalformedLiteral(text, INTERVAL_GRAMMAR)
    try:
        start, end = parse_instant(parts[0]), parse_instant(parts[1])
    except MalformedLiteral:
        raise MalformedLiteral(text, INTERVAL_GRAMMAR)
    return Interval(start, end)


@lru_cache(maxsize=LITERAL_CACHE_SIZE)
def parse_iso_duration(text: str) -> Duration:
    """
    Parse a bare ISO-8601 duration such as ``P1D`` or ``-PT1H30M``.

    Years and months stay calendar units, so ``P1M`` added to January 31st
    lands on the last day of February.
    """
    token = text.strip()
    match = DURATION_RE.fullmatch(token)
    if (
        not match
        or token.endswith("T")
        or not any(
            match.group(name)
            for name in (
                "years",
                "months",
                "weeks",
                "days",
                "hours",
                "minutes",
                "seconds",
            )
        )
    ):
        raise MalformedLiteral(text, "an ISO-8601 duration")

    fraction = match.group("fraction") or "0"
    delta = relativedelta(
        years=int(match.group("years") or 0),
        months=int(match.group("months") or 0),
        weeks=int(match.group("weeks") or 0),
        days=int(match.group("days") or 0),
        hours=int(match.group("hours") or 0),
        minutes=int(match.group("minutes") or 0),
        seconds=int(match.group("seconds") or 0),
        microseconds=int(fraction[:6].ljust(6, "0")),
    )
    if match.group("sign") == "-":
        delta = -delta
    return Duration(delta)


def parse_duration(text: str) -> Duration:
    """
    Parse a ``duration'<ISO-8601 duration>'`` literal.

    Raises:
        MalformedLiteral: If the wrapper or the duration body is malformed.
    """
    match = DURATION_LITERAL_RE.fullmatch(text.strip())
    if not match:
        raise MalformedLiteral(text, DURATION_GRAMMAR)
    try:
        return parse_iso_duration(match.group("body"))
    except MalformedLiteral:
        raise MalformedLiteral(text, DURATION_GRAMMAR)


def parse_literal(text: str) -> Instant | Interval | Duration:
    """
    Parse any of the three temporal literal forms.

    Args:
        text (str): An instant, a ``start/end`` interval or a
            ``duration'...'`` literal.

    Returns:
        The typed value.
    """
    token = text.strip()
    if token.startswith("duration'"):
        return parse_duration(token)
    if "/" in token:
        return parse_interval(token)
    try:
        return parse_instant(token)
    except MalformedLiteral:
        raise MalformedLiteral(
            text, f"{INSTANT_GRAMMAR}, {INTERVAL_GRAMMAR} or {DURATION_GRAMMAR}"
        )


def format_instant(instant: Instant) -> str:
    return instant.isoformat()


def format_interval(interval: Interval) -> str:
    return interval.isoformat()


def format_duration(duration: Duration, literal: bool = False) -> str:
    """
    Render a duration in ISO-8601 form.

    Args:
        duration (Duration): The duration to render.
        literal (bool): Wrap the text as ``duration'...'``.

    Returns:
        str: e.g. ``P1DT2H`` or ``-PT30M``.
    """
    delta = duration.delta.normalized()
    values = [
        delta.years,
        delta.months,
        delta.days,
        delta.hours,
        delta.minutes,
        delta.seconds,
        delta.microseconds,
    ]
    sign = ""
    if any(v < 0 for v in values) and not any(v > 0 for v in values):
        sign = "-"
        values = [-v for v in values]
    years, months, days, hours, minutes, seconds, microseconds = values

    text = "P"
    text += f"{years}Y" if years else ""
    text += f"{months}M" if months else ""
    text += f"{days}D" if days else ""
    time = ""
    time += f"{hours}H" if hours else ""
    time += f"{minutes}M" if minutes else ""
    if seconds or microseconds:
        time += str(seconds)
        if microseconds:
            time += "." + f"{microseconds:06d}".rstrip("0")
        time += "S"
    if time:
        text += "T" + time
    if text == "P":
        text = "PT0S"
    text = sign + text

    if literal:
        return f"duration'{text}'"
    return text
