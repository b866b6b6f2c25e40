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
Lexer for SensorThings temporal filter expressions.
"""

import re
import urllib.parse

from ...exceptions import FilterSyntaxError
from ...temporal.literals import DATETIME_PATTERN

# Define the token types, tried in order
TOKEN_TYPES = {
    "DURATION": r"duration'[^']*'",
    "INTERVAL": DATETIME_PATTERN + r"\/" + DATETIME_PATTERN,
    "DATETIME": DATETIME_PATTERN,
    "NULL": r"\bnull\b",
    "BOOL": r"\btrue\b|\bfalse\b",
    "OR": r"\bor\b",
    "AND": r"\band\b",
    "NOT": r"\bnot\b",
    "COMPARISON_OPERATOR": r"\b(?:eq|ne|lt|le|gt|ge)\b",
    "ARITHMETIC_OPERATOR": r"\b(?:add|sub)\b",
    "IDENTIFIER": r"[_a-zA-Z@]\w{0,127}",
    "VALUE_SEPARATOR": r",",
    "LEFT_PAREN": r"\(",
    "RIGHT_PAREN": r"\)",
    "WHITESPACE": r"\s+",
}

COMPILED_TOKEN_TYPES = {
    token_type: re.compile(pattern)
    for token_type, pattern in TOKEN_TYPES.items()
}


class Token:
    """A class representing a token."""

    def __init__(self, type, value, position=0):
        """
        Initialize a new Token object.

        Args:
            type (str): The type of the token.
            value (str): The value of the token.
            position (int): Offset of the token in the filter text.
        """
        self.type = type
        self.value = value
        self.position = position

    def __str__(self):
        """
        Return a string representation of the token.

        Returns:
            str: The string representation of the token.
        """
        return f"Token({self.type}, {self.value})"


class Lexer:
    """A class for tokenizing SensorThings filter expressions."""

    def __init__(self, text):
        """
        Initialize a new Lexer object.

        Args:
            text (str): The filter text, optionally URL encoded.
        """
        self.text = urllib.parse.unquote(text)
        self.tokens = self.tokenize()

    def tokenize(self):
        """
        Tokenize the input text.

        Returns:
            list: A list of Token objects, whitespace excluded.

        Raises:
            FilterSyntaxError: If no token matches at some position.
        """
        tokens = []
        position = 0

        while position < len(self.text):
            match = None

            for token_type, regex in COMPILED_TOKEN_TYPES.items():
                match = regex.match(self.text, position)

                if match:
                    value = match.group(0)
                    if token_type != "WHITESPACE":
                        tokens.append(Token(token_type, value, position))
                    position = match.end(0)
                    break

            if not match:
                raise FilterSyntaxError(
                    f"Invalid character {self.text[position]!r}", position
                )

        return tokens

    def __str__(self):
        """
        Return a string representation of the lexer.

        Returns:
            str: The string representation of the lexer.
        """
        return "\n".join(str(token) for token in self.tokens)
