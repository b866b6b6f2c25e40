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
Module: temporal values

This module provides the immutable value types used by temporal filters:
instants, intervals and durations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Tuple, Union

from dateutil.relativedelta import relativedelta

from ..exceptions import MalformedInterval, MalformedLiteral


@dataclass(frozen=True, order=True)
class Instant:
    """
    A point on the UTC timeline with millisecond precision.

    Args:
        value (datetime): An aware datetime. It is converted to UTC and
            truncated to whole milliseconds.
    """

    value: datetime

    def __post_init__(self):
        if self.value.tzinfo is None:
            raise MalformedLiteral(
                self.value.isoformat(), "a timestamp with a UTC offset"
            )
        value = self.value.astimezone(timezone.utc)
        value = value.replace(microsecond=value.microsecond // 1000 * 1000)
        object.__setattr__(self, "value", value)

    def __add__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return Instant(self.value + other.delta)

    def __sub__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return Instant(self.value - other.delta)

    def isoformat(self) -> str:
        return self.value.isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        )

    def __str__(self):
        return self.isoformat()


@dataclass(frozen=True)
class Interval:
    """
    A span between two instants, ``start <= end``.

    A zero-length interval is allowed. It keeps the interval type but is
    evaluated as a single point by comparators and relations.

    Raises:
        MalformedInterval: If start lies after end.
    """

    start: Instant
    end: Instant

    def __post_init__(self):
        if self.start > self.end:
            raise MalformedInterval(self.start, self.end)

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end

    def __add__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return Interval(self.start + other, self.end + other)

    def __sub__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return Interval(self.start - other, self.end - other)

    def isoformat(self) -> str:
        return f"{self.start.isoformat()}/{self.end.isoformat()}"

    def __str__(self):
        return self.isoformat()


RELATIVE_FIELDS = (
    "years",
    "months",
    "days",
    "hours",
    "minutes",
    "seconds",
    "microseconds",
)
ABSOLUTE_FIELDS = (
    "year",
    "month",
    "day",
    "weekday",
    "hour",
    "minute",
    "second",
    "microsecond",
)


@dataclass(frozen=True)
class Duration:
    """
    A signed calendar and clock span.

    Durations only shift instants and intervals, they are never compared.

    Raises:
        MalformedLiteral: If the components do not share one sign, or the
            delta sets absolute fields (``year=``, ``weekday=``, ...) that an
            ISO-8601 duration cannot express.
    """

    delta: relativedelta = field(default_factory=relativedelta)

    def __post_init__(self):
        delta = self.delta
        if any(
            getattr(delta, name) is not None for name in ABSOLUTE_FIELDS
        ) or delta.leapdays:
            raise MalformedLiteral(repr(delta), "a relative duration")
        values = [getattr(delta, name) for name in RELATIVE_FIELDS]
        if any(v > 0 for v in values) and any(v < 0 for v in values):
            raise MalformedLiteral(
                repr(delta), "a duration whose components share one sign"
            )

    def __neg__(self):
        return Duration(-self.delta)

    def __str__(self):
        from .literals import format_duration

        return format_duration(self)


Operand = Union[Instant, Interval]


def bounds(operand: Operand) -> Tuple[datetime, datetime]:
    """
    Return the start and end of an operand. An instant is its own start
    and end.
    """
    if isinstance(operand, Interval):
        return operand.start.value, operand.end.value
    return operand.value, operand.value


def is_point(operand: Operand) -> bool:
    """True for instants and zero-length intervals."""
    return isinstance(operand, Instant) or operand.is_degenerate


def is_operand(value) -> bool:
    return isinstance(value, (Instant, Interval))
