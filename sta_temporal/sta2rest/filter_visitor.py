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
Module: STA2REST filter visitor

This module provides a visitor that evaluates a temporal filter AST against
the resolved temporal properties of one candidate entity.
"""

import operator
from typing import Any, Callable, Mapping, Optional, Union

from odata_query import ast
from odata_query import exceptions as ex
from odata_query import visitor

from ..exceptions import FilterError
from ..temporal import arithmetic, comparators, logic
from ..temporal.literals import (
    parse_instant,
    parse_interval,
    parse_iso_duration,
)
from ..temporal.relations import RELATIONS, Invalid, Relation
from ..temporal.values import Duration, Instant, Interval, Operand, is_operand
from .sta_parser import ast as sta_ast

Properties = Union[Operand, None, Mapping[str, Optional[Operand]]]


def kind_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__.lower()


class FilterVisitor(visitor.NodeVisitor):
    """
    Visitor evaluating the filter AST.

    Args:
        properties: Either a mapping from property name to its resolved
            value (None when absent), or a single value bound to every
            property referenced by the filter.
    """

    def __init__(self, properties: Properties):
        self.properties = properties

    def generic_visit(self, node: Any) -> Any:
        raise FilterError(
            f"Unsupported filter element: {type(node).__name__}"
        )

    ####################################################################################
    # Literals and properties
    ####################################################################################

    def visit_Identifier(self, node: ast.Identifier) -> Optional[Operand]:
        if not isinstance(self.properties, Mapping):
            return self.properties
        try:
            return self.properties[node.name]
        except KeyError:
            raise ex.InvalidFieldException(node.name)

    def visit_DateTime(self, node: ast.DateTime) -> Instant:
        return parse_instant(node.val)

    def visit_Interval(self, node: sta_ast.Interval) -> Interval:
        return parse_interval(node.val)

    def visit_Duration(self, node: ast.Duration) -> Duration:
        return parse_iso_duration(node.val)

    def visit_Null(self, node: ast.Null) -> None:
        return None

    def visit_Boolean(self, node: ast.Boolean) -> bool:
        return node.val.lower() == "true"

    ####################################################################################
    # Comparison Operators
    ####################################################################################

    def visit_Eq(self, node: ast.Eq) -> Callable[[Operand, Operand], bool]:
        return comparators.eq

    def visit_NotEq(
        self, node: ast.NotEq
    ) -> Callable[[Operand, Operand], bool]:
        return comparators.ne

    def visit_Gt(self, node: ast.Gt) -> Callable[[Operand, Operand], bool]:
        return comparators.gt

    def visit_Lt(self, node: ast.Lt) -> Callable[[Operand, Operand], bool]:
        return comparators.lt

    def visit_GtE(self, node: ast.GtE) -> Callable[[Operand, Operand], bool]:
        return comparators.ge

    def visit_LtE(self, node: ast.LtE) -> Callable[[Operand, Operand], bool]:
        return comparators.le

    ####################################################################################
    # Logical Operators
    ####################################################################################

    def visit_And(self, node: ast.And) -> Callable:
        return logic.conjunction

    def visit_Or(self, node: ast.Or) -> Callable:
        return logic.disjunction

    def visit_Not(self, node: ast.Not) -> Callable:
        return logic.negation

    ####################################################################################
    # Arithmetic Operators
    ####################################################################################

    def visit_Add(self, node: ast.Add) -> Callable[[Any, Any], Any]:
        return operator.add

    def visit_Sub(self, node: ast.Sub) -> Callable[[Any, Any], Any]:
        return operator.sub

    def visit_BinOp(self, node: ast.BinOp) -> Any:
        left = self.visit(node.left)
        right = self.visit(node.right)
        op = self.visit(node.op)

        for value in (left, right):
            if isinstance(value, Invalid):
                return value

        # duration add operand is the same shift as operand add duration
        if (
            op is operator.add
            and isinstance(left, Duration)
            and (is_operand(right) or right is None)
        ):
            left, right = right, left

        if not isinstance(right, Duration) or not (
            is_operand(left) or left is None
        ):
            return Invalid(
                f"Cannot {op.__name__} {kind_name(left)} and "
                f"{kind_name(right)}"
            )
        if left is None:
            return None
        return arithmetic.apply(left, op, right)

    ####################################################################################
    # Boolean expressions
    ####################################################################################

    def visit_BoolOp(self, node: ast.BoolOp) -> logic.Outcome:
        op = self.visit(node.op)
        return op(self.visit(node.left), lambda: self.visit(node.right))

    def visit_UnaryOp(self, node: ast.UnaryOp) -> logic.Outcome:
        op = self.visit(node.op)
        return op(self.visit(node.operand))

    def visit_Compare(self, node: ast.Compare) -> logic.Outcome:
        left = self.visit(node.left)
        right = self.visit(node.right)
        op = self.visit(node.comparator)

        for value in (left, right):
            if isinstance(value, Invalid):
                return value

        if isinstance(node.left, ast.Null) or isinstance(node.right, ast.Null):
            if op is comparators.eq:
                return left is None and right is None
            if op is comparators.ne:
                return not (left is None and right is None)
            return None

        for value in (left, right):
            if value is not None and not is_operand(value):
                return Invalid(
                    f"{op.__name__} is not defined for {kind_name(left)} "
                    f"and {kind_name(right)}"
                )
        if left is None or right is None:
            return None
        return op(left, right)

    ####################################################################################
    # Temporal Functions
    ####################################################################################

    def visit_Call(self, node: ast.Call) -> logic.Outcome:
        try:
            handler = getattr(self, "func_" + node.func.name.lower())
        except AttributeError:
            raise ex.UnsupportedFunctionException(node.func.name)

        return handler(*node.args)

    def _relate(
        self, relation: Relation, first: ast._Node, second: ast._Node
    ) -> logic.Outcome:
        a = self.visit(first)
        b = self.visit(second)

        for value in (a, b):
            if isinstance(value, Invalid):
                return value
            if value is not None and not is_operand(value):
                return Invalid(
                    f"{relation.name} is not defined for {kind_name(a)} "
                    f"and {kind_name(b)}"
                )

        invalid = relation.check(a, b)
        if invalid is not None:
            return invalid
        if a is None or b is None:
            return None
        return relation(a, b)

    def func_before(self, first: ast._Node, second: ast._Node):
        return self._relate(RELATIONS["before"], first, second)

    def func_after(self, first: ast._Node, second: ast._Node):
        return self._relate(RELATIONS["after"], first, second)

    def func_meets(self, first: ast._Node, second: ast._Node):
        return self._relate(RELATIONS["meets"], first, second)

    def func_during(self, first: ast._Node, second: ast._Node):
        return self._relate(RELATIONS["during"], first, second)

    def func_overlaps(self, first: ast._Node, second: ast._Node):
        return self._relate(RELATIONS["overlaps"], first, second)

    def func_starts(self, first: ast._Node, second: ast._Node):
        return self._relate(RELATIONS["starts"], first, second)

    def func_finishes(self, first: ast._Node, second: ast._Node):
        return self._relate(RELATIONS["finishes"], first, second)
