"""Common types and enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AircraftType(str, Enum):
    FIGHTER = "fighter"
    BOMBER = "bomber"
    TRANSPORT = "transport"


class Severity(str, Enum):
    """Damage severity, lightest first."""

    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class MissionType(str, Enum):
    RECONNAISSANCE = "reconnaissance"
    BOMBING = "bombing"
    ESCORT = "escort"


class MissionStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}


@dataclass(frozen=True)
class Position:
    x: float
    y: float
