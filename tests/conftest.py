"""Shared pytest fixtures for the temporal filter tests."""

import pytest

from sta_temporal.sta2rest.sta2rest import STA2REST

T600 = "2016-01-01T06:00:00.000Z"
T659 = "2016-01-01T06:59:00.000Z"
T700 = "2016-01-01T07:00:00.000Z"
T701 = "2016-01-01T07:01:00.000Z"
T759 = "2016-01-01T07:59:00.000Z"
T800 = "2016-01-01T08:00:00.000Z"
T801 = "2016-01-01T08:01:00.000Z"
T900 = "2016-01-01T09:00:00.000Z"

INSTANTS = [T600, T659, T700, T701, T759, T800, T801, T900]

INTERVALS = [
    (T600, T659),  # 8
    (T600, T700),  # 9
    (T600, T701),  # 10
    (T700, T800),  # 11
    (T701, T759),  # 12
    (T759, T900),  # 13
    (T800, T900),  # 14
    (T801, T900),  # 15
    (T659, T801),  # 16
    (T700, T759),  # 17
    (T700, T801),  # 18
    (T659, T800),  # 19
    (T701, T800),  # 20
]


def build_observations():
    """
    Observations 0-7 have an instant phenomenonTime and the same resultTime.
    Observations 8-20 have an interval phenomenonTime, the same validTime and
    no resultTime.
    """
    observations = []
    for instant in INSTANTS:
        observations.append(
            {
                "@iot.id": len(observations),
                "phenomenonTime": instant,
                "resultTime": instant,
                "validTime": None,
            }
        )
    for start, end in INTERVALS:
        observations.append(
            {
                "@iot.id": len(observations),
                "phenomenonTime": f"{start}/{end}",
                "resultTime": None,
                "validTime": f"{start}/{end}",
            }
        )
    return observations


@pytest.fixture(scope="session")
def observations():
    return tuple(build_observations())


@pytest.fixture
def select(observations):
    """Run a filter over the observations and return the selected ids."""

    def _select(filter, max_workers=1):
        selected = STA2REST.filter_entities(
            filter, observations, max_workers=max_workers
        )
        return frozenset(o["@iot.id"] for o in selected)

    return _select
