from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from survivorship.domain.types import MissionType, Priority


@dataclass(frozen=True)
class LaunchMission:
    mission_type: MissionType = MissionType.BOMBING
    difficulty: float = 1
    aircraft_count: int = 10


@dataclass(frozen=True)
class PlaceArmor:
    x: float
    y: float
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class RemoveArmor:
    index: int


@dataclass(frozen=True)
class ClearArmor:
    pass


@dataclass(frozen=True)
class ResetCampaign:
    pass


Action = Union[LaunchMission, PlaceArmor, RemoveArmor, ClearArmor, ResetCampaign]
