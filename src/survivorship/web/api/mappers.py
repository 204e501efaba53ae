from __future__ import annotations

from survivorship.domain.aircraft import Aircraft
from survivorship.domain.analysis import AnalysisStats, ArmorPlacement, BiasAnalysis
from survivorship.domain.missions import Mission, MissionResult
from survivorship.sim.campaign import Campaign
from survivorship.web.api import schemas


def build_state_response(campaign: Campaign) -> schemas.CampaignStateResponse:
    return schemas.CampaignStateResponse(
        seed=campaign.seed,
        mission_count=campaign.mission_count,
        armor=[_placement(p) for p in campaign.armor],
        protected_zones=[
            schemas.CriticalZone(id=zone.id, name=zone.name, x=zone.x, y=zone.y)
            for zone in campaign.simulator.protected_zones(campaign.armor)
        ],
        stats=build_stats(campaign.analyzer.stats()),
        last_result=_mission_result(campaign.last_result) if campaign.last_result else None,
    )


def build_analysis(analysis: BiasAnalysis) -> schemas.Analysis:
    return schemas.Analysis(
        recommendations=[_placement(p) for p in analysis.recommendations],
        confidence=analysis.confidence,
        reasoning=analysis.reasoning,
    )


def build_stats(stats: AnalysisStats) -> schemas.Stats:
    return schemas.Stats(returned=stats.returned, lost=stats.lost, survival_rate=stats.survival_rate)


def _placement(placement: ArmorPlacement) -> schemas.ArmorPlacement:
    return schemas.ArmorPlacement(x=placement.x, y=placement.y, priority=placement.priority.value)


def _mission(mission: Mission) -> schemas.Mission:
    return schemas.Mission(
        id=mission.id,
        type=mission.type.value,
        difficulty=mission.difficulty,
        aircraft_count=mission.aircraft_count,
        status=mission.status.value,
    )


def _aircraft(aircraft: Aircraft) -> schemas.Aircraft:
    return schemas.Aircraft(
        id=aircraft.id,
        type=aircraft.type.value,
        mission_id=aircraft.mission_id,
        survived=aircraft.survived,
        damage=[schemas.DamagePoint(x=d.x, y=d.y, severity=d.severity.value) for d in aircraft.damage],
        return_time=aircraft.return_time,
    )


def _mission_result(result: MissionResult) -> schemas.MissionResult:
    return schemas.MissionResult(
        mission=_mission(result.mission),
        survivors=[_aircraft(a) for a in result.survivors],
        casualties=[_aircraft(a) for a in result.casualties],
        duration=result.duration,
    )
