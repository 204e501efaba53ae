"""Aircraft records and the factory that mints them."""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import Callable

from survivorship.domain.types import AircraftType, Severity


@dataclass(frozen=True)
class DamagePoint:
    x: float
    y: float
    severity: Severity


@dataclass()
class Aircraft:
    id: str
    type: AircraftType
    mission_id: str
    survived: bool = False
    damage: list[DamagePoint] = field(default_factory=list)
    return_time: float | None = None


class AircraftFactory:
    """Creates aircraft and applies the only mutations they support.

    Ids come from a counter owned by the factory instance, so two factories
    never share numbering state.
    """

    def __init__(self, *, prefix: str = "aircraft", clock: Callable[[], float] = time.monotonic) -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)
        self._clock = clock

    def create(self, aircraft_type: AircraftType, mission_id: str) -> Aircraft:
        return Aircraft(
            id=f"{self._prefix}-{next(self._counter)}",
            type=AircraftType(aircraft_type),
            mission_id=mission_id,
        )

    @staticmethod
    def add_damage(aircraft: Aircraft, x: float, y: float, severity: Severity) -> None:
        aircraft.damage.append(DamagePoint(x=x, y=y, severity=Severity(severity)))

    def mark_returned(self, aircraft: Aircraft) -> None:
        aircraft.survived = True
        aircraft.return_time = self._clock()
