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
AST nodes for temporal filters.

Filters are represented with the odata_query node types. OData has no
``start/end`` interval literal, so it is added here.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """An interval literal, e.g. ``2016-01-01T07:00Z/2016-01-01T08:00Z``."""

    val: str
