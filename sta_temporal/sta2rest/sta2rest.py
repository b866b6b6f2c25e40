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
Module: STA2REST

This module provides the entry points used by a query pipeline to apply a
SensorThings temporal ``$filter`` to candidate entities.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from .. import DEBUG, FILTER_WORKERS
from ..exceptions import InvalidRelation
from ..settings import ENTITY_MAPPING
from ..temporal.relations import Invalid
from ..utils.utils import resolve_properties
from .filter_visitor import FilterVisitor
from .kind_visitor import check_filter
from .sta_parser.parser import parse_filter

logger = logging.getLogger(__name__)


class STA2REST:
    """
    This class provides utility functions to parse SensorThings temporal
    filters and evaluate them against entities.
    """

    ENTITY_MAPPING = ENTITY_MAPPING

    @staticmethod
    def convert_entity(entity: str) -> str:
        """
        Converts an entity name to its entity set name.

        Args:
            entity (str): The entity name, e.g. ``Observation``.

        Returns:
            str: The entity set name, e.g. ``Observations``.
        """
        return STA2REST.ENTITY_MAPPING.get(entity, entity)

    @staticmethod
    def parse_filter(filter):
        """
        Parses a filter expression.

        Args:
            filter (str): The ``$filter`` text.

        Returns:
            The filter tree.
        """
        return parse_filter(filter)

    @staticmethod
    def evaluate(expression, properties) -> bool:
        """
        Evaluates a filter for one entity.

        Args:
            expression: The filter text or a tree returned by parse_filter.
            properties: The resolved value of the filtered property, or a
                mapping from property name to resolved value.

        Returns:
            bool: True if the entity is selected. A filter that depends on
            an absent property selects nothing.

        Raises:
            InvalidRelation: If a relation is not defined for the operands,
                e.g. ``during`` with an instant as second argument.
            MalformedLiteral, MalformedInterval, ArithmeticOverflow,
            FilterSyntaxError: See sta_temporal.exceptions.
        """
        if isinstance(expression, str):
            expression = parse_filter(expression)

        result = FilterVisitor(properties).visit(expression)
        if isinstance(result, Invalid):
            raise InvalidRelation(result.reason)
        if result is None:
            return False
        if not isinstance(result, bool):
            raise InvalidRelation(f"{result} is not a boolean expression")
        return result

    @staticmethod
    def filter_entities(
        filter,
        entities,
        entity_type="Observations",
        max_workers=FILTER_WORKERS,
    ) -> list:
        """
        Applies a filter to a collection of entities.

        The filter is parsed and checked against the entity set once. Every
        entity is evaluated, in parallel when ``max_workers`` is greater than
        one, and the selected entities are returned in input order.

        Args:
            filter (str): The ``$filter`` text.
            entities (list[dict]): Entities as returned by a SensorThings
                service.
            entity_type (str): The entity set of the entities.
            max_workers (int): Number of worker threads.

        Returns:
            list[dict]: The selected entities.

        Raises:
            FilterError: If the filter is rejected, or the first error raised
                while evaluating an entity.
        """
        entity_type = STA2REST.convert_entity(entity_type)
        node = parse_filter(filter)
        check_filter(node, entity_type)

        def evaluate(entity):
            return STA2REST.evaluate(
                node, resolve_properties(entity, entity_type)
            )

        entities = list(entities)
        if max_workers > 1 and len(entities) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                selected = list(executor.map(evaluate, entities))
        else:
            selected = [evaluate(entity) for entity in entities]

        result = [
            entity for entity, keep in zip(entities, selected) if keep
        ]
        if DEBUG:
            logger.debug(
                "Filter %r selected %d of %d %s",
                filter,
                len(result),
                len(entities),
                entity_type,
            )
        return result


evaluate = STA2REST.evaluate
