"""Data-driven rules for the survival model and the damage analyses."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from survivorship.domain.types import AircraftType, Priority, Severity

DEFAULT_RULES_PATH = Path(__file__).resolve().parents[1] / "data" / "rules.json"


class RulesError(ValueError):
    """Error loading or validating rules."""


@dataclass(frozen=True)
class CriticalZone:
    """A structurally vital spot on the airframe."""

    id: str
    name: str
    x: float
    y: float
    importance: float
    priority: Priority

    def covers(self, x: float, y: float, tolerance: float) -> bool:
        return abs(x - self.x) < tolerance and abs(y - self.y) < tolerance


@dataclass(frozen=True)
class SurvivalModel:
    base: float
    type_modifiers: dict[AircraftType, float]
    difficulty_penalty: float
    armor_factor: float
    min_chance: float
    max_chance: float
    armor_tolerance: float


@dataclass(frozen=True)
class DamageModel:
    body_width: float
    body_height: float
    # Cumulative upper bounds for a uniform roll, lightest first.
    severity_thresholds: tuple[tuple[Severity, float], ...]
    casualty_extra_spread: int

    def severity_for(self, roll: float) -> Severity:
        for severity, upper in self.severity_thresholds:
            if roll < upper:
                return severity
        return self.severity_thresholds[-1][0]


@dataclass(frozen=True)
class AnalysisConfig:
    cell_size: float
    severity_weights: dict[Severity, int]
    high_threshold: float
    medium_threshold: float
    biased_confidence_per_aircraft: float
    biased_confidence_cap: float
    correct_confidence_per_aircraft: float
    correct_confidence_cap: float

    def priority_for(self, weight: float) -> Priority:
        if weight > self.high_threshold:
            return Priority.HIGH
        if weight > self.medium_threshold:
            return Priority.MEDIUM
        return Priority.LOW


@dataclass(frozen=True)
class Ruleset:
    survival: SurvivalModel
    damage: DamageModel
    critical_zones: tuple[CriticalZone, ...]
    analysis: AnalysisConfig

    @staticmethod
    def load(path: Path) -> "Ruleset":
        data = _load_json(Path(path))
        return Ruleset(
            survival=_load_survival(path, _section(path, data, "survival")),
            damage=_load_damage(path, _section(path, data, "damage")),
            critical_zones=_load_zones(path, data.get("critical_zones")),
            analysis=_load_analysis(path, _section(path, data, "analysis")),
        )

    @staticmethod
    def default() -> "Ruleset":
        return Ruleset.load(DEFAULT_RULES_PATH)


def _load_json(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise RulesError(f"Rules file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise RulesError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise RulesError(f"{path}: top level must be an object")
    return data


def _section(path: Path, data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key)
    if not isinstance(section, dict):
        raise RulesError(f"{path}: missing '{key}' section")
    return section


def _number(path: Path, data: dict[str, Any], section: str, key: str, default: float) -> float:
    value = data.get(key, default)
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise RulesError(f"{path}: {section}.{key} must be a number (got {value!r})") from exc
    if not math.isfinite(number):
        raise RulesError(f"{path}: {section}.{key} must be finite")
    return number


def _load_survival(path: Path, data: dict[str, Any]) -> SurvivalModel:
    raw_modifiers = data.get("type_modifiers", {})
    if not isinstance(raw_modifiers, dict):
        raise RulesError(f"{path}: survival.type_modifiers must be object")
    try:
        modifiers = {AircraftType(k): float(v) for k, v in raw_modifiers.items()}
    except (TypeError, ValueError) as exc:
        raise RulesError(f"{path}: survival.type_modifiers: {exc}") from exc

    min_chance = _number(path, data, "survival", "min_chance", 0.05)
    max_chance = _number(path, data, "survival", "max_chance", 0.95)
    if not 0.0 < min_chance <= max_chance < 1.0:
        raise RulesError(f"{path}: survival chance bounds must satisfy 0 < min <= max < 1")

    return SurvivalModel(
        base=_number(path, data, "survival", "base", 0.3),
        type_modifiers=modifiers,
        difficulty_penalty=_number(path, data, "survival", "difficulty_penalty", 0.15),
        armor_factor=_number(path, data, "survival", "armor_factor", 0.5),
        min_chance=min_chance,
        max_chance=max_chance,
        armor_tolerance=_number(path, data, "survival", "armor_tolerance", 20),
    )


def _load_damage(path: Path, data: dict[str, Any]) -> DamageModel:
    raw_thresholds = data.get("severity_thresholds")
    if not isinstance(raw_thresholds, dict) or not raw_thresholds:
        raise RulesError(f"{path}: damage.severity_thresholds must be a non-empty object")
    try:
        thresholds = tuple(
            sorted(((Severity(k), float(v)) for k, v in raw_thresholds.items()), key=lambda item: item[1])
        )
    except (TypeError, ValueError) as exc:
        raise RulesError(f"{path}: damage.severity_thresholds: {exc}") from exc
    if not math.isclose(thresholds[-1][1], 1.0):
        raise RulesError(f"{path}: damage.severity_thresholds must end at 1.0")

    spread_value = _number(path, data, "damage", "casualty_extra_spread", 2)
    if not spread_value.is_integer():
        raise RulesError(f"{path}: damage.casualty_extra_spread must be a whole number")
    spread = int(spread_value)
    if spread < 1:
        raise RulesError(f"{path}: damage.casualty_extra_spread must be >= 1")

    return DamageModel(
        body_width=_number(path, data, "damage", "body_width", 300),
        body_height=_number(path, data, "damage", "body_height", 200),
        severity_thresholds=thresholds,
        casualty_extra_spread=spread,
    )


def _load_zones(path: Path, raw: Any) -> tuple[CriticalZone, ...]:
    if not isinstance(raw, list) or not raw:
        raise RulesError(f"{path}: 'critical_zones' must be a non-empty array")
    zones: list[CriticalZone] = []
    for item in raw:
        if not isinstance(item, dict):
            raise RulesError(f"{path}: critical zone entry must be object")
        zone_id = item.get("id")
        if not isinstance(zone_id, str):
            raise RulesError(f"{path}: critical_zone.id must be string")
        try:
            zone = CriticalZone(
                id=zone_id,
                name=str(item.get("name", zone_id)),
                x=float(item["x"]),
                y=float(item["y"]),
                importance=float(item.get("importance", 0.0)),
                priority=Priority(item.get("priority", "medium")),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RulesError(f"{path}: critical zone '{zone_id}' is invalid: {exc!r}") from exc
        zones.append(zone)
    total = sum(zone.importance for zone in zones)
    if not math.isclose(total, 1.0, abs_tol=1e-6):
        raise RulesError(f"{path}: critical zone importances must sum to 1.0 (got {total:.3f})")
    return tuple(zones)


def _load_analysis(path: Path, data: dict[str, Any]) -> AnalysisConfig:
    raw_weights = data.get("severity_weights", {})
    if not isinstance(raw_weights, dict):
        raise RulesError(f"{path}: analysis.severity_weights must be object")
    try:
        weights = {Severity(k): int(v) for k, v in raw_weights.items()}
    except (TypeError, ValueError) as exc:
        raise RulesError(f"{path}: analysis.severity_weights: {exc}") from exc
    missing = [s.value for s in Severity if s not in weights]
    if missing:
        raise RulesError(f"{path}: analysis.severity_weights missing {', '.join(missing)}")

    cell_size = _number(path, data, "analysis", "cell_size", 10)
    if cell_size <= 0:
        raise RulesError(f"{path}: analysis.cell_size must be positive")

    return AnalysisConfig(
        cell_size=cell_size,
        severity_weights=weights,
        high_threshold=_number(path, data, "analysis", "high_threshold", 5),
        medium_threshold=_number(path, data, "analysis", "medium_threshold", 2),
        biased_confidence_per_aircraft=_number(path, data, "analysis", "biased_confidence_per_aircraft", 0.1),
        biased_confidence_cap=_number(path, data, "analysis", "biased_confidence_cap", 0.95),
        correct_confidence_per_aircraft=_number(path, data, "analysis", "correct_confidence_per_aircraft", 0.05),
        correct_confidence_cap=_number(path, data, "analysis", "correct_confidence_cap", 0.99),
    )
