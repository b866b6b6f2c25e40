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

INSTANT = "instant"
INTERVAL = "interval"

# Declared kind of each temporal property. Interval-typed properties are
# stored as ranges, so an instant value is promoted to a zero-length interval.
temporalProperties = {
    "Observations": {
        "phenomenonTime": INTERVAL,
        "resultTime": INSTANT,
        "validTime": INTERVAL,
    },
    "Datastreams": {
        "phenomenonTime": INTERVAL,
        "resultTime": INTERVAL,
    },
}

ENTITY_MAPPING = {
    "Observation": "Observations",
    "Observations": "Observations",
    "Datastream": "Datastreams",
    "Datastreams": "Datastreams",
}

# Functions accepted in a temporal filter, with their argument count.
FUNCTION_ARITY = {
    "before": 2,
    "after": 2,
    "meets": 2,
    "during": 2,
    "overlaps": 2,
    "starts": 2,
    "finishes": 2,
}
