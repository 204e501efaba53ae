from __future__ import annotations

import pytest

from survivorship.domain.actions import ClearArmor, LaunchMission, PlaceArmor, RemoveArmor, ResetCampaign
from survivorship.domain.types import MissionType, Priority
from survivorship.sim.campaign import Campaign
from survivorship.sim.reducer import apply_action
from tests.helpers.factories import make_rules


def _make_campaign(seed: int = 7) -> Campaign:
    return Campaign.new(seed=seed, rules=make_rules())


def _play(campaign: Campaign, missions: int = 3):
    outcomes = []
    for _ in range(missions):
        result = campaign.launch_mission(MissionType.BOMBING, 2, 10)
        planes = result.survivors + result.casualties
        outcomes.append([(p.survived, p.type, [(d.x, d.y, d.severity) for d in p.damage]) for p in planes])
    return outcomes


def test_launch_feeds_analyzer() -> None:
    campaign = _make_campaign()
    result = campaign.launch_mission(MissionType.BOMBING, 1, 15)

    stats = campaign.analyzer.stats()
    assert stats.returned == len(result.survivors)
    assert stats.lost == len(result.casualties)
    assert stats.returned + stats.lost == 15
    assert campaign.mission_count == 1
    assert campaign.last_result is result
    assert campaign.analyzer.returned_aircraft() == result.survivors
    assert campaign.analyzer.lost_aircraft() == result.casualties


def test_same_seed_replays_campaign() -> None:
    first = _make_campaign(seed=42)
    second = _make_campaign(seed=42)
    first.add_armor(150, 100)
    second.add_armor(150, 100)

    assert _play(first) == _play(second)
    assert first.analyzer.biased_analysis() == second.analyzer.biased_analysis()


def test_missions_draw_from_distinct_streams() -> None:
    campaign = _make_campaign(seed=5)
    assert campaign.mission_rng(1).random() != campaign.mission_rng(2).random()


def test_armor_loadout_management() -> None:
    campaign = _make_campaign()
    campaign.add_armor(150, 100, Priority.HIGH)
    campaign.add_armor(10, 10)

    assert [(p.x, p.y, p.priority) for p in campaign.armor] == [
        (150.0, 100.0, Priority.HIGH),
        (10.0, 10.0, Priority.MEDIUM),
    ]
    removed = campaign.remove_armor(0)
    assert (removed.x, removed.y) == (150.0, 100.0)
    with pytest.raises(ValueError):
        campaign.remove_armor(3)

    campaign.clear_armor()
    assert campaign.armor == []


def test_reset_clears_campaign() -> None:
    campaign = _make_campaign()
    campaign.add_armor(150, 100)
    campaign.launch_mission()

    campaign.reset()

    assert campaign.armor == []
    assert campaign.mission_count == 0
    assert campaign.last_result is None
    assert campaign.analyzer.stats().returned == 0
    assert campaign.analyzer.stats().lost == 0
    assert campaign.analyzer.biased_analysis().confidence == 0


def test_reducer_launch_and_armor_actions() -> None:
    campaign = _make_campaign()

    placed = apply_action(campaign, PlaceArmor(x=200, y=120, priority=Priority.HIGH))
    assert placed.ok
    assert len(campaign.armor) == 1

    launched = apply_action(campaign, LaunchMission(difficulty=1, aircraft_count=8))
    assert launched.ok
    assert launched.result is not None
    assert launched.result.total == 8
    assert launched.message.startswith(launched.result.mission.id)

    assert apply_action(campaign, RemoveArmor(index=0)).ok
    assert apply_action(campaign, ClearArmor()).ok
    assert apply_action(campaign, ResetCampaign()).ok
    assert campaign.mission_count == 0


@pytest.mark.parametrize(
    "action",
    [
        LaunchMission(aircraft_count=0),
        LaunchMission(difficulty=-1),
        LaunchMission(mission_type="carrier_strike"),
        PlaceArmor(x=1, y=1, priority="urgent"),
        RemoveArmor(index=4),
    ],
)
def test_reducer_reports_failures(action) -> None:
    campaign = _make_campaign()
    result = apply_action(campaign, action)

    assert result.ok is False
    assert result.message_kind == "error"
    assert result.message
    assert campaign.mission_count == 0
    assert campaign.simulator.active_missions() == []


def test_reducer_rejects_unknown_actions() -> None:
    result = apply_action(_make_campaign(), object())
    assert result.ok is False
    assert result.message == "Unknown action"
