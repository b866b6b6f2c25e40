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

from datetime import datetime

from ..exceptions import FilterError
from ..settings import ENTITY_MAPPING, INTERVAL, temporalProperties
from ..temporal.literals import parse_instant, parse_interval
from ..temporal.values import Instant, Interval


def handle_datetime_field(value, kind):
    """
    Converts a temporal field value to an Instant or Interval.

    Args:
        value: An ISO string, a ``start/end`` string, a datetime, an
            Instant, an Interval or None.
        kind (str): The declared kind of the property.

    Returns:
        Instant | Interval | None: The operand. Instants of an
        interval-typed property become zero-length intervals.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if "/" in value:
            value = parse_interval(value)
        else:
            value = parse_instant(value)
    elif isinstance(value, datetime):
        value = Instant(value)
    elif not isinstance(value, (Instant, Interval)):
        raise FilterError(f"Not a temporal value: {value!r}")

    if kind == INTERVAL and isinstance(value, Instant):
        value = Interval(value, value)
    return value


def resolve_properties(entity, entity_type="Observations"):
    """
    Resolves the temporal properties of an entity.

    Args:
        entity (dict): The entity as returned by a SensorThings service.
        entity_type (str): The entity set the entity belongs to.

    Returns:
        dict: Property name to Instant, Interval or None, for every temporal
        property of the entity set.
    """
    try:
        kinds = temporalProperties[
            ENTITY_MAPPING.get(entity_type, entity_type)
        ]
    except KeyError:
        raise FilterError(f"Unknown entity set: {entity_type}")
    return {
        key: handle_datetime_field(entity.get(key), kind)
        for key, kind in kinds.items()
    }
