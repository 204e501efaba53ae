from __future__ import annotations

import itertools
import logging
import math
import time
from random import Random
from typing import Callable, Iterable, Sequence

from survivorship.domain.aircraft import Aircraft, AircraftFactory
from survivorship.domain.missions import Mission, MissionResult
from survivorship.domain.types import AircraftType, MissionStatus, MissionType, Position, Severity
from survivorship.rules.ruleset import CriticalZone, Ruleset

logger = logging.getLogger(__name__)

class NotFoundError(LookupError):
    """Raised when a mission id is not in the active registry."""


def armor_points(armor: Iterable) -> list[Position]:
    """Normalize placements, positions or (x, y) pairs into positions."""
    points: list[Position] = []
    for item in armor:
        if hasattr(item, "x") and hasattr(item, "y"):
            points.append(Position(x=float(item.x), y=float(item.y)))
        else:
            x, y = item
            points.append(Position(x=float(x), y=float(y)))
    return points


class MissionSimulator:
    """Creates missions and resolves every aircraft's fate in one pass.

    All randomness comes from the injected ``rng`` (or a per-call override),
    so a fixed seed reproduces outcomes and damage positions exactly.
    """

    def __init__(
        self,
        rules: Ruleset,
        rng: Random | None = None,
        *,
        factory: AircraftFactory | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.rules = rules
        self.rng = rng if rng is not None else Random()
        self.factory = factory if factory is not None else AircraftFactory(clock=clock)
        self._clock = clock
        self._mission_counter = itertools.count(1)
        self._active: dict[str, Mission] = {}

    def create_mission(self, mission_type: MissionType, difficulty: float, aircraft_count: int) -> Mission:
        if not math.isfinite(difficulty) or difficulty < 0:
            raise ValueError("difficulty must be a finite number >= 0")
        if aircraft_count < 1:
            raise ValueError("aircraft_count must be >= 1")
        mission = Mission(
            id=f"mission-{next(self._mission_counter)}",
            type=MissionType(mission_type),
            difficulty=difficulty,
            aircraft_count=int(aircraft_count),
        )
        self._active[mission.id] = mission
        logger.debug(
            "Created %s (%s, difficulty=%s, aircraft=%d)", mission.id, mission.type.value, difficulty, aircraft_count
        )
        return mission

    def active_missions(self) -> list[Mission]:
        return list(self._active.values())

    def execute_mission(self, mission_id: str, armor: Iterable, *, rng: Random | None = None) -> MissionResult:
        mission = self._active.get(mission_id)
        if mission is None:
            raise NotFoundError(f"Mission {mission_id} not found")
        rng = rng if rng is not None else self.rng
        points = armor_points(armor)

        mission.status = MissionStatus.ACTIVE
        started = self._clock()

        aircraft = self._generate_aircraft(mission, rng)
        survivors: list[Aircraft] = []
        casualties: list[Aircraft] = []
        for plane in aircraft:
            chance = self.survival_chance(plane, mission, points)
            if rng.random() < chance:
                self._add_random_damage(plane, self._damage_count(rng, mission.difficulty + 1), rng)
                self.factory.mark_returned(plane)
                survivors.append(plane)
            else:
                self._add_fatal_damage(plane, points, rng)
                casualties.append(plane)

        mission.status = MissionStatus.COMPLETED
        duration = self._clock() - started
        del self._active[mission_id]

        logger.info(
            "%s complete: %d returned, %d lost (armor at %d points)",
            mission.id,
            len(survivors),
            len(casualties),
            len(points),
        )
        return MissionResult(mission=mission, survivors=survivors, casualties=casualties, duration=duration)

    async def execute_mission_async(
        self, mission_id: str, armor: Iterable, *, rng: Random | None = None
    ) -> MissionResult:
        return self.execute_mission(mission_id, armor, rng=rng)

    def protected_zones(self, armor: Iterable) -> list[CriticalZone]:
        points = armor_points(armor)
        tolerance = self.rules.survival.armor_tolerance
        return [zone for zone in self.rules.critical_zones if _is_covered(zone, points, tolerance)]

    def survival_chance(self, aircraft: Aircraft, mission: Mission, armor: Iterable) -> float:
        model = self.rules.survival
        chance = model.base
        chance += model.type_modifiers.get(aircraft.type, 0.0)
        chance -= mission.difficulty * model.difficulty_penalty

        armor_bonus = sum(zone.importance * model.armor_factor for zone in self.protected_zones(armor))
        return min(model.max_chance, max(model.min_chance, chance + armor_bonus))

    def _generate_aircraft(self, mission: Mission, rng: Random) -> list[Aircraft]:
        types = list(AircraftType)
        return [self.factory.create(rng.choice(types), mission.id) for _ in range(mission.aircraft_count)]

    @staticmethod
    def _damage_count(rng: Random, spread: float) -> int:
        return int(rng.random() * spread) + 1

    def _add_random_damage(self, aircraft: Aircraft, count: int, rng: Random) -> None:
        damage = self.rules.damage
        for _ in range(count):
            x = rng.random() * damage.body_width
            y = rng.random() * damage.body_height
            severity = damage.severity_for(rng.random())
            self.factory.add_damage(aircraft, x, y, severity)

    def _add_fatal_damage(self, aircraft: Aircraft, points: Sequence[Position], rng: Random) -> None:
        # The fatal hit lands on the first uncovered zone in list order.
        tolerance = self.rules.survival.armor_tolerance
        for zone in self.rules.critical_zones:
            if not _is_covered(zone, points, tolerance):
                self.factory.add_damage(aircraft, zone.x, zone.y, Severity.HEAVY)
                break
        extra = self._damage_count(rng, self.rules.damage.casualty_extra_spread)
        self._add_random_damage(aircraft, extra, rng)


def _is_covered(zone: CriticalZone, points: Sequence[Position], tolerance: float) -> bool:
    return any(zone.covers(point.x, point.y, tolerance) for point in points)
