from __future__ import annotations

from dataclasses import dataclass

from survivorship.domain.actions import Action, ClearArmor, LaunchMission, PlaceArmor, RemoveArmor, ResetCampaign
from survivorship.domain.missions import MissionResult
from survivorship.sim.campaign import Campaign
from survivorship.systems.missions import NotFoundError


@dataclass()
class ActionResult:
    ok: bool
    message: str | None
    message_kind: str | None
    campaign: Campaign
    result: MissionResult | None = None


def apply_action(campaign: Campaign, action: Action) -> ActionResult:
    def ok(message: str | None, kind: str = "info", result: MissionResult | None = None) -> ActionResult:
        return ActionResult(ok=True, message=message, message_kind=kind, campaign=campaign, result=result)

    def fail(message: str) -> ActionResult:
        return ActionResult(ok=False, message=message, message_kind="error", campaign=campaign)

    if isinstance(action, LaunchMission):
        try:
            result = campaign.launch_mission(action.mission_type, action.difficulty, action.aircraft_count)
        except (ValueError, NotFoundError) as exc:
            return fail(str(exc))
        returned = len(result.survivors)
        lost = len(result.casualties)
        kind = "accent" if returned else "warning"
        return ok(f"{result.mission.id}: {returned} returned, {lost} lost", kind, result)

    if isinstance(action, PlaceArmor):
        try:
            campaign.add_armor(action.x, action.y, action.priority)
        except ValueError as exc:
            return fail(str(exc))
        return ok("Armor placed", "accent")

    if isinstance(action, RemoveArmor):
        try:
            campaign.remove_armor(action.index)
        except ValueError as exc:
            return fail(str(exc))
        return ok("Armor removed", "info")

    if isinstance(action, ClearArmor):
        campaign.clear_armor()
        return ok("Armor cleared", "info")

    if isinstance(action, ResetCampaign):
        campaign.reset()
        return ok("Campaign reset", "info")

    return fail("Unknown action")
