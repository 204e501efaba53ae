from __future__ import annotations

import logging
import math
from typing import Iterable

from survivorship.domain.aircraft import Aircraft
from survivorship.domain.analysis import AnalysisStats, ArmorPlacement, BiasAnalysis
from survivorship.rules.ruleset import Ruleset

logger = logging.getLogger(__name__)

NO_DATA_REASONING = "No data available yet. Send more aircraft!"
NO_FAILURE_DATA_REASONING = "Insufficient failure data for proper analysis"
CORRECT_REASONING = "Based on analysis of failed missions, these areas are critical for survival"

# Each template names the sample as returned/successful aircraft only.
_CONFIDENT_REASONING = (
    "Based on {returned} successful missions, we've identified {areas} key areas for armor enhancement.",
    "With {returned} returned aircraft analyzed, the pattern is unmistakable. Armor these {areas} damaged areas!",
    "The evidence is right here: {returned} aircraft returned from successful missions with damage in {areas} areas.",
)

Cell = tuple[int, int]


class BiasAnalyzer:
    """Accumulates returned and lost aircraft and contrasts two armor analyses."""

    def __init__(self, rules: Ruleset) -> None:
        self.rules = rules
        self._returned: list[Aircraft] = []
        self._lost: list[Aircraft] = []

    def record_returned(self, aircraft: Aircraft) -> None:
        self._returned.append(aircraft)

    def record_lost(self, aircraft: Aircraft) -> None:
        self._lost.append(aircraft)

    def returned_aircraft(self) -> list[Aircraft]:
        return list(self._returned)

    def lost_aircraft(self) -> list[Aircraft]:
        return list(self._lost)

    def biased_analysis(self) -> BiasAnalysis:
        if not self._returned:
            return BiasAnalysis(recommendations=[], confidence=0.0, reasoning=NO_DATA_REASONING)

        config = self.rules.analysis
        recommendations = self._heatmap_recommendations(self.damage_heatmap(self._returned))
        confidence = min(config.biased_confidence_cap, len(self._returned) * config.biased_confidence_per_aircraft)
        return BiasAnalysis(
            recommendations=recommendations,
            confidence=confidence,
            reasoning=self._confident_reasoning(len(recommendations)),
        )

    def correct_analysis(self) -> BiasAnalysis:
        if not self._lost:
            return BiasAnalysis(recommendations=[], confidence=0.0, reasoning=NO_FAILURE_DATA_REASONING)

        config = self.rules.analysis
        # Ground truth: the recorded damage on lost aircraft is deliberately ignored.
        recommendations = [
            ArmorPlacement(x=zone.x, y=zone.y, priority=zone.priority) for zone in self.rules.critical_zones
        ]
        confidence = min(config.correct_confidence_cap, len(self._lost) * config.correct_confidence_per_aircraft)
        return BiasAnalysis(recommendations=recommendations, confidence=confidence, reasoning=CORRECT_REASONING)

    def stats(self) -> AnalysisStats:
        returned = len(self._returned)
        lost = len(self._lost)
        total = returned + lost
        return AnalysisStats(
            returned=returned,
            lost=lost,
            survival_rate=returned / total if total else 0.0,
        )

    def reset(self) -> None:
        logger.debug("Resetting analyzer (%d returned, %d lost)", len(self._returned), len(self._lost))
        self._returned = []
        self._lost = []

    def damage_heatmap(self, aircraft: Iterable[Aircraft]) -> dict[Cell, int]:
        """Severity-weighted damage per grid cell, in first-encounter order."""
        config = self.rules.analysis
        heatmap: dict[Cell, int] = {}
        for plane in aircraft:
            for hit in plane.damage:
                cell = (math.floor(hit.x / config.cell_size), math.floor(hit.y / config.cell_size))
                heatmap[cell] = heatmap.get(cell, 0) + config.severity_weights[hit.severity]
        return heatmap

    def _heatmap_recommendations(self, heatmap: dict[Cell, int]) -> list[ArmorPlacement]:
        config = self.rules.analysis
        half = config.cell_size / 2
        recommendations = [
            ArmorPlacement(
                x=cx * config.cell_size + half,
                y=cy * config.cell_size + half,
                priority=config.priority_for(weight),
            )
            for (cx, cy), weight in heatmap.items()
        ]
        # sorted() is stable, so equal priorities keep heatmap order.
        return sorted(recommendations, key=lambda placement: placement.priority.rank, reverse=True)

    def _confident_reasoning(self, areas: int) -> str:
        returned = len(self._returned)
        template = _CONFIDENT_REASONING[returned % len(_CONFIDENT_REASONING)]
        return template.format(returned=returned, areas=areas)
