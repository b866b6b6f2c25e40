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
Module: temporal relations

Allen style relations ``before after meets during overlaps starts finishes``.

Each relation returns ``True``, ``False`` or an :class:`Invalid` outcome when
it is not defined for the kinds of its operands. Intervals are half open and
instants or zero-length intervals are points, as in the comparators.
"""

from typing import Callable, Optional

from .comparators import lt
from .values import Interval, Operand, bounds, is_point


class Invalid:
    """
    Outcome of a relation that is not defined for its operands.

    It has no truth value: it must be reported to the caller, never read
    as ``False``.

    Args:
        reason (str): Why the relation is not defined.
    """

    __slots__ = ("reason",)

    def __init__(self, reason: str):
        self.reason = reason

    def __bool__(self):
        raise TypeError(f"Invalid outcome has no truth value: {self.reason}")

    def __eq__(self, other):
        return isinstance(other, Invalid) and other.reason == self.reason

    def __hash__(self):
        return hash(("Invalid", self.reason))

    def __repr__(self):
        return f"Invalid({self.reason!r})"


class Relation:
    """
    A named relation between two operands.

    Args:
        name (str): The filter function name.
        predicate (Callable): The test on two operands.
        interval_second (bool): The second operand must be an Interval.
    """

    def __init__(
        self,
        name: str,
        predicate: Callable[[Operand, Operand], bool],
        interval_second: bool = False,
    ):
        self.name = name
        self.predicate = predicate
        self.interval_second = interval_second

    def check(self, a, b) -> Optional[Invalid]:
        """
        Return an Invalid outcome if the operand kinds are not supported.
        An absent (None) operand is never invalid by itself.
        """
        if (
            self.interval_second
            and b is not None
            and not isinstance(b, Interval)
        ):
            return Invalid(
                f"{self.name} requires an interval as second argument, "
                f"got {type(b).__name__.lower()}"
            )
        return None

    def __call__(self, a: Operand, b: Operand) -> bool | Invalid:
        invalid = self.check(a, b)
        if invalid is not None:
            return invalid
        return self.predicate(a, b)

    def __repr__(self):
        return f"Relation({self.name})"


def _before(a: Operand, b: Operand) -> bool:
    return lt(a, b)


def _after(a: Operand, b: Operand) -> bool:
    return lt(b, a)


def _meets(a: Operand, b: Operand) -> bool:
    a_start, a_end = bounds(a)
    b_start, b_end = bounds(b)
    return a_end == b_start or b_end == a_start


def _during(a: Operand, b: Interval) -> bool:
    a_start, a_end = bounds(a)
    b_start, b_end = bounds(b)
    if is_point(a):
        return b_start <= a_start < b_end
    return b_start <= a_start and a_end <= b_end


def _overlaps(a: Operand, b: Operand) -> bool:
    a_start, a_end = bounds(a)
    b_start, b_end = bounds(b)
    if is_point(a) and is_point(b):
        return a_start == b_start
    if is_point(a):
        return b_start <= a_start < b_end
    if is_point(b):
        return a_start <= b_start < a_end
    return a_start < b_end and b_start < a_end


def _starts(a: Operand, b: Operand) -> bool:
    return bounds(a)[0] == bounds(b)[0]


def _finishes(a: Operand, b: Operand) -> bool:
    return bounds(a)[1] == bounds(b)[1]


before = Relation("before", _before)
after = Relation("after", _after)
meets = Relation("meets", _meets)
during = Relation("during", _during, interval_second=True)
overlaps = Relation("overlaps", _overlaps)
starts = Relation("starts", _starts)
finishes = Relation("finishes", _finishes)

RELATIONS = {
    relation.name: relation
    for relation in (before, after, meets, during, overlaps, starts, finishes)
}
