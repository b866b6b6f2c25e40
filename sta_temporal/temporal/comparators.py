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
Module: temporal comparators

Relational operators ``lt gt le ge eq ne`` between instants and intervals.

Intervals are half open: the end instant is not part of the interval, so an
interval ending at 08:00 lies entirely before 08:00. Instants and zero-length
intervals are single points and compare strictly.
"""

from .values import Operand, bounds, is_point


def lt(a: Operand, b: Operand) -> bool:
    a_end = bounds(a)[1]
    b_start = bounds(b)[0]
    if is_point(a):
        return a_end < b_start
    return a_end <= b_start


def gt(a: Operand, b: Operand) -> bool:
    return lt(b, a)


def le(a: Operand, b: Operand) -> bool:
    # For an interval against an instant this gives the same result as lt.
    a_start, a_end = bounds(a)
    b_start, b_end = bounds(b)
    return a_start <= b_start and a_end <= b_end


def ge(a: Operand, b: Operand) -> bool:
    return le(b, a)


def eq(a: Operand, b: Operand) -> bool:
    return bounds(a) == bounds(b)


def ne(a: Operand, b: Operand) -> bool:
    return not eq(a, b)


COMPARATORS = {
    "lt": lt,
    "gt": gt,
    "le": le,
    "ge": ge,
    "eq": eq,
    "ne": ne,
}
