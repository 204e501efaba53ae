from __future__ import annotations

from fastapi.testclient import TestClient

from survivorship.web.main import create_app


def _client() -> TestClient:
    return TestClient(create_app())


def test_health():
    res = _client().get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_get_state_contract_smoke():
    res = _client().get("/api/state")
    assert res.status_code == 200
    data = res.json()

    assert isinstance(data.get("seed"), int)
    assert data["missionCount"] == 0
    assert data["armor"] == []
    assert data["protectedZones"] == []
    assert data["stats"] == {"returned": 0, "lost": 0, "survivalRate": 0.0}
    assert data["lastResult"] is None
    assert "session_id" in res.cookies


def test_empty_analyses():
    client = _client()
    biased = client.get("/api/analysis/biased").json()
    correct = client.get("/api/analysis/correct").json()

    assert biased["recommendations"] == []
    assert biased["confidence"] == 0
    assert "No data" in biased["reasoning"]
    assert correct["recommendations"] == []
    assert correct["confidence"] == 0


def test_mission_flow_keeps_session_state():
    client = _client()

    placed = client.post("/api/armor", json={"x": 150, "y": 100, "priority": "high"}).json()
    assert placed["ok"] is True
    assert placed["state"]["armor"] == [{"x": 150.0, "y": 100.0, "priority": "high"}]
    assert [zone["id"] for zone in placed["state"]["protectedZones"]] == ["engine"]

    res = client.post("/api/missions", json={"missionType": "bombing", "difficulty": 10, "aircraftCount": 50})
    assert res.status_code == 200
    launched = res.json()
    assert launched["ok"] is True
    state = launched["state"]
    assert state["missionCount"] == 1
    assert state["stats"]["returned"] + state["stats"]["lost"] == 50
    last = state["lastResult"]
    assert last["mission"]["status"] == "completed"
    assert last["mission"]["aircraftCount"] == 50
    assert len(last["survivors"]) + len(last["casualties"]) == 50
    assert all(plane["survived"] is False for plane in last["casualties"])
    assert state["stats"]["lost"] > 0

    correct = client.get("/api/analysis/correct").json()
    assert [(r["x"], r["y"], r["priority"]) for r in correct["recommendations"]] == [
        (150.0, 100.0, "high"),
        (200.0, 120.0, "high"),
        (180.0, 80.0, "medium"),
        (120.0, 110.0, "medium"),
    ]
    assert 0 < correct["confidence"] <= 0.99

    stats = client.get("/api/stats").json()
    assert stats["returned"] == state["stats"]["returned"]
    assert stats["lost"] == state["stats"]["lost"]


def test_action_failures_are_reported_not_raised():
    client = _client()

    bad_type = client.post("/api/missions", json={"missionType": "carrier_strike"}).json()
    assert bad_type["ok"] is False
    assert bad_type["messageKind"] == "error"

    bad_index = client.delete("/api/armor/9").json()
    assert bad_index["ok"] is False

    bad_priority = client.post("/api/armor", json={"x": 1, "y": 1, "priority": "urgent"}).json()
    assert bad_priority["ok"] is False


def test_request_validation():
    client = _client()
    assert client.post("/api/missions", json={"aircraftCount": 0}).status_code == 422
    assert client.post("/api/missions", json={"difficulty": -1}).status_code == 422


def test_reset_and_clear():
    client = _client()
    client.post("/api/armor", json={"x": 200, "y": 120})
    client.post("/api/missions", json={"aircraftCount": 5})

    cleared = client.delete("/api/armor").json()
    assert cleared["ok"] is True
    assert cleared["state"]["armor"] == []

    reset = client.post("/api/reset").json()
    assert reset["ok"] is True
    assert reset["state"]["missionCount"] == 0
    assert reset["state"]["stats"] == {"returned": 0, "lost": 0, "survivalRate": 0.0}
    assert reset["state"]["lastResult"] is None


def test_difficulty_must_be_finite_and_bounded():
    client = _client()
    for difficulty in ("inf", "nan", "Infinity", 1e7, 10.5):
        res = client.post("/api/missions", json={"difficulty": difficulty, "aircraftCount": 500})
        assert res.status_code == 422, difficulty
    assert client.post("/api/missions", json={"difficulty": 10, "aircraftCount": 5}).status_code == 200
    assert client.get("/api/state").json()["missionCount"] == 1
