"""Tests for the /api endpoints (sync TestClient + one async client flow)."""

import json

import httpx
from fastapi.testclient import TestClient

from backend.app import create_app


# ── health / balance ─────────────────────────────────────


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_balance_defaults(client):
    data = client.get("/api/balance").json()
    assert data["pool_scaling"] == {"base_count": 6, "increase_by": 1, "frequency": 3, "max_cap": 12}
    assert data["pill_progression"]["rules"]["LIFE"]["unlock_round"] == 99


def test_balance_file_applies(tmp_path):
    path = tmp_path / "balance.json"
    path.write_text(json.dumps({"pool_scaling": {"base_count": 9, "max_cap": 9}}))
    client = TestClient(create_app(path))
    assert client.get("/api/pool/size", params={"round": 30}).json()["size"] == 9


# ── progression ──────────────────────────────────────────


def test_pill_chances_round_four(client):
    data = client.get("/api/progression/pills", params={"round": 4}).json()
    assert data["FATAL"] > 0
    assert data["LIFE"] == 0
    assert abs(sum(data.values()) - 100) <= 0.1


def test_shape_chances_round_one(client):
    data = client.get("/api/progression/shapes", params={"round": 1}).json()
    assert {k for k, v in data.items() if v > 0} == {"capsule", "round"}


# ── pool ─────────────────────────────────────────────────


def test_pool_size(client):
    assert client.get("/api/pool/size", params={"round": 4}).json() == {"round": 4, "size": 7}


def test_pool_distribution_defaults_to_pool_size(client):
    data = client.get("/api/pool/distribution", params={"round": 4}).json()
    assert data["count"] == 7
    assert sum(data["types"].values()) == 7
    assert sum(data["shapes"].values()) == 7
    assert data["types"]["FATAL"] == 0
    assert data["types"]["SAFE"] == 3


def test_pool_distribution_custom_count(client):
    data = client.get("/api/pool/distribution", params={"round": 2, "count": 25}).json()
    assert sum(data["types"].values()) == 25


def test_pool_distribution_negative_count(client):
    assert client.get("/api/pool/distribution", params={"count": -1}).status_code == 422


def test_pool_counts_are_capped(client):
    assert client.post("/api/pool", json={"count": 1_000_000_000}).status_code == 422
    assert client.get("/api/pool/distribution", params={"count": 1001}).status_code == 422
    assert len(client.post("/api/pool", json={"count": 1000, "seed": 1}).json()["pills"]) == 1000


def test_generate_pool(client):
    data = client.post("/api/pool", json={"round": 4, "seed": 3}).json()
    assert len(data["pills"]) == 7
    assert sum(data["type_counts"].values()) == 7
    assert data["type_counts"]["HEAL"] == 1
    assert all(p["is_revealed"] is False for p in data["pills"])


def test_generate_pool_seeded_is_reproducible(client):
    a = client.post("/api/pool", json={"round": 6, "seed": 11}).json()
    b = client.post("/api/pool", json={"round": 6, "seed": 11}).json()
    assert a == b


# ── quests ───────────────────────────────────────────────


def test_generate_quest(client):
    data = client.post("/api/quests", json={
        "round": 1, "shape_counts": {"round": 3, "flower": 3, "skull": 0}, "seed": 1,
    }).json()
    assert sorted(data["sequence"]) == ["flower", "round"]
    assert data["progress"] == 0
    assert data["completed"] is False


def test_generate_quest_unknown_shape(client):
    resp = client.post("/api/quests", json={"shape_counts": {"hexagon": 3}})
    assert resp.status_code == 422


def test_advance_quest_completes(client):
    quest = {"id": "q", "sequence": ["round", "flower"], "progress": 1, "completed": False}
    data = client.post("/api/quests/advance", json={"quest": quest, "shape": "flower"}).json()
    assert data["quest"]["progress"] == 2
    assert data["quest"]["completed"] is True
    assert data["just_completed"] is True
    assert data["was_reset"] is False


def test_advance_quest_resets(client):
    quest = {"id": "q", "sequence": ["round", "flower"], "progress": 1, "completed": False}
    data = client.post("/api/quests/advance", json={"quest": quest, "shape": "skull"}).json()
    assert data["quest"]["progress"] == 0
    assert data["was_reset"] is True


def test_advance_inconsistent_quest_rejected(client):
    quest = {"id": "q", "sequence": ["round"], "progress": 1, "completed": False}
    resp = client.post("/api/quests/advance", json={"quest": quest, "shape": "round"})
    assert resp.status_code == 422


# ── turns ────────────────────────────────────────────────


def test_next_turn(client):
    body = {"current": "p1", "player_order": ["p1", "p2", "p3", "p4"], "alive": ["p1", "p4"]}
    assert client.post("/api/turns/next", json=body).json() == {"next": "p4"}


def test_next_turn_empty_order(client):
    resp = client.post("/api/turns/next", json={"current": "p1", "player_order": []})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "playerOrder cannot be empty"


def test_next_turn_nobody_alive(client):
    body = {"current": "p1", "player_order": ["p1", "p2"], "alive": []}
    resp = client.post("/api/turns/next", json=body)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No active players remaining"


def test_targets(client):
    body = {"current": "p2", "players": ["p1", "p2", "p3"], "alive": ["p2", "p3"]}
    assert client.post("/api/turns/targets", json=body).json() == {"targets": ["p3"]}


def test_status(client):
    assert client.post("/api/turns/status", json={"alive": ["p3"]}).json() == {
        "can_continue": False, "winner": "p3",
    }
    assert client.post("/api/turns/status", json={"alive": ["p1", "p2"]}).json() == {
        "can_continue": True, "winner": None,
    }
    assert client.post("/api/turns/status", json={"alive": []}).json() == {
        "can_continue": False, "winner": None,
    }


# ── async flow ───────────────────────────────────────────


async def test_round_flow_async():
    """Round start → pool → quest → consume matching shapes → quest completes."""
    app = create_app()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        pool = (await ac.post("/api/pool", json={"round": 5, "seed": 21})).json()
        quest = (await ac.post("/api/quests", json={
            "round": 5, "shape_counts": pool["shape_counts"], "seed": 21,
        })).json()
        assert quest["sequence"]
        assert set(quest["sequence"]) <= {s for s, n in pool["shape_counts"].items() if n > 0}

        result = None
        for shape in quest["sequence"]:
            resp = await ac.post("/api/quests/advance", json={"quest": quest, "shape": shape})
            result = resp.json()
            quest = result["quest"]
        assert result["just_completed"] is True
        assert quest["completed"] is True
