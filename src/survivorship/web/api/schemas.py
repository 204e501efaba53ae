from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Each survivor takes up to difficulty + 1 hits.
MAX_DIFFICULTY = 10


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_by_name=True)


class DamagePoint(CamelModel):
    x: float
    y: float
    severity: str


class Aircraft(CamelModel):
    id: str
    type: str
    mission_id: str = Field(..., alias="missionId")
    survived: bool
    damage: List[DamagePoint]
    return_time: Optional[float] = Field(None, alias="returnTime")


class Mission(CamelModel):
    id: str
    type: str
    difficulty: float
    aircraft_count: int = Field(..., alias="aircraftCount")
    status: str


class MissionResult(CamelModel):
    mission: Mission
    survivors: List[Aircraft]
    casualties: List[Aircraft]
    duration: float


class ArmorPlacement(CamelModel):
    x: float
    y: float
    priority: str


class Analysis(CamelModel):
    recommendations: List[ArmorPlacement]
    confidence: float
    reasoning: str


class Stats(CamelModel):
    returned: int
    lost: int
    survival_rate: float = Field(..., alias="survivalRate")


class CriticalZone(CamelModel):
    id: str
    name: str
    x: float
    y: float


class CampaignStateResponse(CamelModel):
    seed: int
    mission_count: int = Field(..., alias="missionCount")
    armor: List[ArmorPlacement]
    protected_zones: List[CriticalZone] = Field(..., alias="protectedZones")
    stats: Stats
    last_result: Optional[MissionResult] = Field(None, alias="lastResult")


class ApiResponse(CamelModel):
    ok: bool
    message: Optional[str] = None
    message_kind: Optional[str] = Field(None, alias="messageKind")
    state: Optional[CampaignStateResponse] = None


class ArmorRequest(CamelModel):
    x: float = Field(..., ge=0)
    y: float = Field(..., ge=0)
    priority: str = "medium"


class MissionRequest(CamelModel):
    mission_type: str = Field("bombing", alias="missionType")
    difficulty: float = Field(1, ge=0, le=MAX_DIFFICULTY, allow_inf_nan=False)
    aircraft_count: int = Field(10, alias="aircraftCount", ge=1, le=500)
