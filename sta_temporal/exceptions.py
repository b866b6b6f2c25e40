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
Module: exceptions

Errors raised while parsing and evaluating temporal filters. They extend the
odata_query exception tree so a caller can catch ``ODataException`` for every
filter problem, including the field and function errors raised by
odata_query itself.
"""

from odata_query.exceptions import ODataException


class FilterError(ODataException):
    """Base class for temporal filter errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class MalformedLiteral(FilterError):
    """
    A literal could not be parsed.

    Args:
        token (str): The offending literal text.
        expected (str): Description of the accepted grammar.
    """

    def __init__(self, token: str, expected: str):
        super().__init__(f"Malformed literal {token!r}: expected {expected}")
        self.token = token
        self.expected = expected


ParseError = MalformedLiteral


class MalformedInterval(FilterError):
    """An interval whose start lies after its end."""

    def __init__(self, start, end):
        super().__init__(f"Malformed interval: start {start} is after end {end}")
        self.start = start
        self.end = end


class InvalidRelation(FilterError):
    """A relation or operator used with operands it is not defined for."""


class ArithmeticOverflow(FilterError):
    """A duration shift left the representable time range."""


class FilterSyntaxError(FilterError):
    """
    The filter text is not a well formed expression.

    Args:
        message (str): What went wrong.
        position (int, optional): Offset in the filter text, if known.
    """

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)
        self.position = position
