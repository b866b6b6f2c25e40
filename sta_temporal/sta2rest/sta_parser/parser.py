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
Parser for SensorThings temporal filter expressions.

Grammar, lowest precedence first::

    expression := and_expr ("or" and_expr)*
    and_expr   := not_expr ("and" not_expr)*
    not_expr   := "not" not_expr | comparison
    comparison := additive (COMPARISON_OPERATOR additive)?
    additive   := primary (ARITHMETIC_OPERATOR primary)*
    primary    := "(" expression ")" | call | literal | identifier
    call       := IDENTIFIER "(" expression ("," expression)* ")"
"""

from odata_query import ast
from odata_query import exceptions as ex

from ...exceptions import FilterSyntaxError
from ...settings import FUNCTION_ARITY
from ...temporal.literals import parse_duration, parse_instant, parse_interval
from . import ast as sta_ast
from .lexer import Lexer

COMPARATORS = {
    "eq": ast.Eq,
    "ne": ast.NotEq,
    "lt": ast.Lt,
    "le": ast.LtE,
    "gt": ast.Gt,
    "ge": ast.GtE,
}

ARITHMETIC = {
    "add": ast.Add,
    "sub": ast.Sub,
}


class Parser:
    """A recursive descent parser turning filter tokens into an AST."""

    def __init__(self, tokens):
        """
        Initialize a new Parser object.

        Args:
            tokens (list): Tokens produced by the Lexer.
        """
        self.tokens = tokens
        self.current = 0

    def peek(self):
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return None

    def check(self, token_type):
        token = self.peek()
        return token is not None and token.type == token_type

    def advance(self):
        token = self.peek()
        self.current += 1
        return token

    def expect(self, token_type):
        token = self.peek()
        if token is None:
            raise FilterSyntaxError(f"Expected {token_type}, got end of filter")
        if token.type != token_type:
            raise FilterSyntaxError(
                f"Expected {token_type}, got {token.value!r}", token.position
            )
        return self.advance()

    def parse(self):
        """
        Parse the whole token list.

        Returns:
            odata_query.ast._Node: The root of the filter tree.

        Raises:
            FilterSyntaxError: On an unexpected token or a missing token.
            MalformedLiteral: On an unparsable date, interval or duration.
            MalformedInterval: On an interval literal whose start is after
                its end.
        """
        if not self.tokens:
            raise FilterSyntaxError("Empty filter")
        node = self.parse_expression()
        token = self.peek()
        if token is not None:
            raise FilterSyntaxError(
                f"Unexpected token {token.value!r}", token.position
            )
        return node

    def parse_expression(self):
        node = self.parse_and()
        while self.check("OR"):
            self.advance()
            node = ast.BoolOp(ast.Or(), node, self.parse_and())
        return node

    def parse_and(self):
        node = self.parse_not()
        while self.check("AND"):
            self.advance()
            node = ast.BoolOp(ast.And(), node, self.parse_not())
        return node

    def parse_not(self):
        if self.check("NOT"):
            self.advance()
            return ast.UnaryOp(ast.Not(), self.parse_not())
        return self.parse_comparison()

    def parse_comparison(self):
        node = self.parse_additive()
        if self.check("COMPARISON_OPERATOR"):
            comparator = COMPARATORS[self.advance().value]()
            node = ast.Compare(comparator, node, self.parse_additive())
        return node

    def parse_additive(self):
        node = self.parse_primary()
        while self.check("ARITHMETIC_OPERATOR"):
            op = ARITHMETIC[self.advance().value]()
            node = ast.BinOp(op, node, self.parse_primary())
        return node

    def parse_primary(self):
        token = self.peek()
        if token is None:
            raise FilterSyntaxError("Unexpected end of filter")

        if token.type == "LEFT_PAREN":
            self.advance()
            node = self.parse_expression()
            self.expect("RIGHT_PAREN")
            return node

        if token.type == "IDENTIFIER":
            self.advance()
            if self.check("LEFT_PAREN"):
                return self.parse_call(token)
            return ast.Identifier(token.value)

        self.advance()
        if token.type == "DATETIME":
            parse_instant(token.value)
            return ast.DateTime(token.value)
        if token.type == "INTERVAL":
            parse_interval(token.value)
            return sta_ast.Interval(token.value)
        if token.type == "DURATION":
            parse_duration(token.value)
            return ast.Duration(token.value[len("duration'") : -1])
        if token.type == "NULL":
            return ast.Null()
        if token.type == "BOOL":
            return ast.Boolean(token.value)

        raise FilterSyntaxError(
            f"Unexpected token {token.value!r}", token.position
        )

    def parse_call(self, name_token):
        name = name_token.value.lower()
        if name not in FUNCTION_ARITY:
            raise ex.UnsupportedFunctionException(name_token.value)

        self.expect("LEFT_PAREN")
        args = [self.parse_expression()]
        while self.check("VALUE_SEPARATOR"):
            self.advance()
            args.append(self.parse_expression())
        self.expect("RIGHT_PAREN")

        if len(args) != FUNCTION_ARITY[name]:
            raise FilterSyntaxError(
                f"{name} expects {FUNCTION_ARITY[name]} arguments, "
                f"got {len(args)}",
                name_token.position,
            )
        return ast.Call(ast.Identifier(name), args)


def parse_filter(text):
    """
    Tokenize and parse a filter expression.

    Args:
        text (str): The ``$filter`` value.

    Returns:
        odata_query.ast._Node: The filter tree.
    """
    return Parser(Lexer(text).tokens).parse()
