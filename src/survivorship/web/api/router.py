from __future__ import annotations

from fastapi import APIRouter, Request, Response

from survivorship.domain.actions import ClearArmor, LaunchMission, PlaceArmor, RemoveArmor, ResetCampaign
from survivorship.sim.reducer import ActionResult, apply_action
from survivorship.web.api import mappers, schemas
from survivorship.web.session import get_or_create_session

router = APIRouter(prefix="/api")


def _from_result(result: ActionResult) -> schemas.ApiResponse:
    return schemas.ApiResponse(
        ok=result.ok,
        message=result.message,
        message_kind=result.message_kind,
        state=mappers.build_state_response(result.campaign),
    )


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/state", response_model=schemas.CampaignStateResponse)
async def get_state(request: Request, response: Response):
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    async with session.lock:
        data = mappers.build_state_response(session.campaign)
    response.set_cookie("session_id", session_id, httponly=True)
    return data


@router.get("/stats", response_model=schemas.Stats)
async def get_stats(request: Request, response: Response):
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    async with session.lock:
        data = mappers.build_stats(session.campaign.analyzer.stats())
    response.set_cookie("session_id", session_id, httponly=True)
    return data


@router.get("/analysis/biased", response_model=schemas.Analysis)
async def get_biased_analysis(request: Request, response: Response):
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    async with session.lock:
        data = mappers.build_analysis(session.campaign.analyzer.biased_analysis())
    response.set_cookie("session_id", session_id, httponly=True)
    return data


@router.get("/analysis/correct", response_model=schemas.Analysis)
async def get_correct_analysis(request: Request, response: Response):
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    async with session.lock:
        data = mappers.build_analysis(session.campaign.analyzer.correct_analysis())
    response.set_cookie("session_id", session_id, httponly=True)
    return data


@router.post("/armor", response_model=schemas.ApiResponse)
async def place_armor(payload: schemas.ArmorRequest, request: Request, response: Response):
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    response.set_cookie("session_id", session_id, httponly=True)
    async with session.lock:
        result = apply_action(session.campaign, PlaceArmor(x=payload.x, y=payload.y, priority=payload.priority))
        return _from_result(result)


@router.delete("/armor/{index}", response_model=schemas.ApiResponse)
async def remove_armor(index: int, request: Request, response: Response):
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    response.set_cookie("session_id", session_id, httponly=True)
    async with session.lock:
        result = apply_action(session.campaign, RemoveArmor(index=index))
        return _from_result(result)


@router.delete("/armor", response_model=schemas.ApiResponse)
async def clear_armor(request: Request, response: Response):
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    response.set_cookie("session_id", session_id, httponly=True)
    async with session.lock:
        result = apply_action(session.campaign, ClearArmor())
        return _from_result(result)


@router.post("/missions", response_model=schemas.ApiResponse)
async def launch_mission(payload: schemas.MissionRequest, request: Request, response: Response):
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    response.set_cookie("session_id", session_id, httponly=True)
    async with session.lock:
        result = apply_action(
            session.campaign,
            LaunchMission(
                mission_type=payload.mission_type,
                difficulty=payload.difficulty,
                aircraft_count=payload.aircraft_count,
            ),
        )
        return _from_result(result)


@router.post("/reset", response_model=schemas.ApiResponse)
async def reset_campaign(request: Request, response: Response):
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    response.set_cookie("session_id", session_id, httponly=True)
    async with session.lock:
        result = apply_action(session.campaign, ResetCampaign())
        return _from_result(result)
