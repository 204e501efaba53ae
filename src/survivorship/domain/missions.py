"""Mission records."""

from __future__ import annotations

from dataclasses import dataclass

from survivorship.domain.aircraft import Aircraft
from survivorship.domain.types import MissionStatus, MissionType


@dataclass()
class Mission:
    id: str
    type: MissionType
    difficulty: float
    aircraft_count: int
    status: MissionStatus = MissionStatus.PENDING


@dataclass(frozen=True)
class MissionResult:
    mission: Mission
    survivors: list[Aircraft]
    casualties: list[Aircraft]
    duration: float

    @property
    def total(self) -> int:
        return len(self.survivors) + len(self.casualties)
