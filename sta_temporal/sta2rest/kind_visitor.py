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
Module: STA2REST kind visitor

Checks a filter against the declared property kinds of an entity set before
any entity is evaluated, so that a filter which can never be evaluated is
rejected as a whole instead of per entity.
"""

from typing import Any

from odata_query import ast
from odata_query import exceptions as ex
from odata_query import visitor

from ..exceptions import FilterError, InvalidRelation
from ..settings import ENTITY_MAPPING, INSTANT, INTERVAL, temporalProperties
from ..temporal.relations import RELATIONS
from .sta_parser import ast as sta_ast

DURATION = "duration"
BOOLEAN = "boolean"
NULL = "null"

OPERANDS = (INSTANT, INTERVAL)


class KindVisitor(visitor.NodeVisitor):
    """
    Infer the kind of every sub-expression of a filter.

    Args:
        entity_type (str): The entity set, e.g. ``Observations``.
    """

    def __init__(self, entity_type: str):
        try:
            self.kinds = temporalProperties[
                ENTITY_MAPPING.get(entity_type, entity_type)
            ]
        except KeyError:
            raise FilterError(f"Unknown entity set: {entity_type}")

    def generic_visit(self, node: Any) -> Any:
        raise FilterError(
            f"Unsupported filter element: {type(node).__name__}"
        )

    def visit_Identifier(self, node: ast.Identifier) -> str:
        try:
            return self.kinds[node.name]
        except KeyError:
            raise ex.InvalidFieldException(node.name)

    def visit_DateTime(self, node: ast.DateTime) -> str:
        return INSTANT

    def visit_Interval(self, node: sta_ast.Interval) -> str:
        return INTERVAL

    def visit_Duration(self, node: ast.Duration) -> str:
        return DURATION

    def visit_Null(self, node: ast.Null) -> str:
        return NULL

    def visit_Boolean(self, node: ast.Boolean) -> str:
        return BOOLEAN

    def visit_BinOp(self, node: ast.BinOp) -> str:
        left = self.visit(node.left)
        right = self.visit(node.right)
        name = type(node.op).__name__.lower()

        if left in OPERANDS and right == DURATION:
            return left
        if isinstance(node.op, ast.Add) and left == DURATION and right in OPERANDS:
            return right
        raise InvalidRelation(f"Cannot {name} {left} and {right}")

    def _boolean(self, node: ast._Node) -> None:
        kind = self.visit(node)
        if kind != BOOLEAN:
            raise InvalidRelation(f"{kind} is not a boolean expression")

    def visit_BoolOp(self, node: ast.BoolOp) -> str:
        self._boolean(node.left)
        self._boolean(node.right)
        return BOOLEAN

    def visit_UnaryOp(self, node: ast.UnaryOp) -> str:
        self._boolean(node.operand)
        return BOOLEAN

    def visit_Compare(self, node: ast.Compare) -> str:
        left = self.visit(node.left)
        right = self.visit(node.right)
        for kind in (left, right):
            if kind not in OPERANDS + (NULL,):
                raise InvalidRelation(
                    f"{type(node.comparator).__name__} is not defined for "
                    f"{left} and {right}"
                )
        return BOOLEAN

    def visit_Call(self, node: ast.Call) -> str:
        name = node.func.name.lower()
        try:
            relation = RELATIONS[name]
        except KeyError:
            raise ex.UnsupportedFunctionException(node.func.name)

        kinds = [self.visit(arg) for arg in node.args]
        for kind in kinds:
            if kind not in OPERANDS:
                raise InvalidRelation(
                    f"{name} is not defined for {kinds[0]} and {kinds[1]}"
                )
        if relation.interval_second and kinds[1] != INTERVAL:
            raise InvalidRelation(
                f"{name} requires an interval as second argument, "
                f"got {kinds[1]}"
            )
        return BOOLEAN


def check_filter(node, entity_type: str) -> None:
    """
    Validate a filter tree for an entity set.

    Raises:
        InvalidRelation: If an operator or relation can never be evaluated
            for the kinds involved.
        odata_query.exceptions.InvalidFieldException: On an unknown property.
    """
    if KindVisitor(entity_type).visit(node) != BOOLEAN:
        raise InvalidRelation("The filter is not a boolean expression")
