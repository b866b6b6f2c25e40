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

import operator
from typing import Callable

from ..exceptions import ArithmeticOverflow, InvalidRelation
from .values import Duration, Operand, is_operand

OPERATORS = {
    "add": operator.add,
    "sub": operator.sub,
}


def apply(
    operand: Operand, op: Callable | str, duration: Duration
) -> Operand:
    """
    Shift an instant, or both ends of an interval, by a duration.

    Args:
        operand (Instant | Interval): The value to shift.
        op: ``operator.add`` / ``operator.sub`` or the filter tokens
            ``"add"`` / ``"sub"``.
        duration (Duration): The shift.

    Returns:
        A value of the same kind as ``operand``.

    Raises:
        ArithmeticOverflow: If the result leaves the representable range.
        InvalidRelation: If the operands are not an instant or interval and
            a duration.
    """
    if isinstance(op, str):
        try:
            op = OPERATORS[op]
        except KeyError:
            raise InvalidRelation(f"Unsupported arithmetic operator: {op}")
    if op not in OPERATORS.values():
        raise InvalidRelation(f"Unsupported arithmetic operator: {op}")
    if not is_operand(operand) or not isinstance(duration, Duration):
        raise InvalidRelation(
            f"Cannot apply {op.__name__} to {type(operand).__name__} "
            f"and {type(duration).__name__}"
        )
    try:
        return op(operand, duration)
    except (OverflowError, ValueError) as e:
        raise ArithmeticOverflow(
            f"Shifting {operand} by {duration} is out of range: {e}"
        )
