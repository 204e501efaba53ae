from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field

from survivorship.rules.ruleset import Ruleset
from survivorship.sim.campaign import Campaign


@dataclass
class WebSession:
    campaign: Campaign
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


_sessions: dict[str, WebSession] = {}
_rules: Ruleset | None = None


def _load_rules() -> Ruleset:
    global _rules
    if _rules is None:
        _rules = Ruleset.default()
    return _rules


def _new_seed() -> int:
    return uuid.uuid4().int & 0xFFFFFFFF


def get_or_create_session(session_id: str | None) -> tuple[str, WebSession]:
    if session_id and session_id in _sessions:
        return session_id, _sessions[session_id]

    new_id = str(uuid.uuid4())
    session = WebSession(campaign=Campaign.new(seed=_new_seed(), rules=_load_rules()))
    _sessions[new_id] = session
    return new_id, session
