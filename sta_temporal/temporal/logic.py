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
Module: predicate composition

Boolean connectives over predicate outcomes. An outcome is ``True``,
``False``, ``None`` when a referenced property is absent, or
:class:`~sta_temporal.temporal.relations.Invalid`. Absent values follow
three valued logic, the same way a database treats NULL. An Invalid child
that gets evaluated makes the whole expression Invalid.
"""

from typing import Callable, Union

from .relations import Invalid

Outcome = Union[bool, None, Invalid]


def outcome(value) -> Outcome:
    """Check that a value can take part in a boolean expression."""
    if value is None or isinstance(value, (bool, Invalid)):
        return value
    return Invalid(f"{value} is not a boolean expression")


def conjunction(left: Outcome, right: Callable[[], Outcome]) -> Outcome:
    """
    ``left and right``. The right side is only evaluated when ``left`` does
    not already decide the result.
    """
    left = outcome(left)
    if isinstance(left, Invalid) or left is False:
        return left
    right = outcome(right())
    if isinstance(right, Invalid) or right is False:
        return right
    if left is None or right is None:
        return None
    return True


def disjunction(left: Outcome, right: Callable[[], Outcome]) -> Outcome:
    """``left or right`` with the same short-circuit rule as conjunction."""
    left = outcome(left)
    if isinstance(left, Invalid) or left is True:
        return left
    right = outcome(right())
    if isinstance(right, Invalid) or right is True:
        return right
    if left is None or right is None:
        return None
    return False


def negation(value: Outcome) -> Outcome:
    value = outcome(value)
    if value is None or isinstance(value, Invalid):
        return value
    return not value
