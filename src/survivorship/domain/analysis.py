"""Analysis outputs."""

from __future__ import annotations

from dataclasses import dataclass

from survivorship.domain.types import Priority


@dataclass(frozen=True)
class ArmorPlacement:
    x: float
    y: float
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class BiasAnalysis:
    recommendations: list[ArmorPlacement]
    confidence: float
    reasoning: str


@dataclass(frozen=True)
class AnalysisStats:
    returned: int
    lost: int
    survival_rate: float
