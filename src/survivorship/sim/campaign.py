"""Campaign state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random

from survivorship.domain.analysis import ArmorPlacement
from survivorship.domain.missions import MissionResult
from survivorship.domain.types import MissionType, Priority
from survivorship.rules.ruleset import Ruleset
from survivorship.sim.rng import derive_seed
from survivorship.systems.bias import BiasAnalyzer
from survivorship.systems.missions import MissionSimulator


@dataclass()
class Campaign:
    seed: int
    rules: Ruleset
    simulator: MissionSimulator
    analyzer: BiasAnalyzer

    armor: list[ArmorPlacement] = field(default_factory=list)
    mission_count: int = 0
    last_result: MissionResult | None = None

    @staticmethod
    def new(seed: int = 1, rules: Ruleset | None = None) -> "Campaign":
        rules = rules or Ruleset.default()
        return Campaign(
            seed=seed,
            rules=rules,
            simulator=MissionSimulator(rules, Random(seed)),
            analyzer=BiasAnalyzer(rules),
        )

    def mission_rng(self, mission_seq: int) -> Random:
        return Random(derive_seed(self.seed, mission_seq=mission_seq, stream="missions", purpose="execute"))

    def add_armor(self, x: float, y: float, priority: Priority = Priority.MEDIUM) -> ArmorPlacement:
        placement = ArmorPlacement(x=float(x), y=float(y), priority=Priority(priority))
        self.armor.append(placement)
        return placement

    def remove_armor(self, index: int) -> ArmorPlacement:
        if not 0 <= index < len(self.armor):
            raise ValueError(f"No armor placement at index {index}")
        return self.armor.pop(index)

    def clear_armor(self) -> None:
        self.armor.clear()

    def launch_mission(
        self,
        mission_type: MissionType = MissionType.BOMBING,
        difficulty: float = 1,
        aircraft_count: int = 10,
    ) -> MissionResult:
        mission = self.simulator.create_mission(mission_type, difficulty, aircraft_count)
        next_seq = self.mission_count + 1
        result = self.simulator.execute_mission(mission.id, self.armor, rng=self.mission_rng(next_seq))

        for aircraft in result.survivors:
            self.analyzer.record_returned(aircraft)
        for aircraft in result.casualties:
            self.analyzer.record_lost(aircraft)

        self.mission_count = next_seq
        self.last_result = result
        return result

    def reset(self) -> None:
        self.analyzer.reset()
        self.armor.clear()
        self.mission_count = 0
        self.last_result = None
