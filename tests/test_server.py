"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from brass.engine.battlefield import BattleLoop, Battlefield
from brass.server.main import create_app
from brass.utils.template_loader import TemplateCache

FIGHTER = """
size_class = 1
fuel_capacity = 10
fuel_use = 1
max_hull = 100
shield_capacity = 0
shield_recovery = 0
cargo_capacity = 0
smallest_target = 0
attack_damage = 20
"""


@pytest.fixture
def battlefield(tmp_path):
    (tmp_path / "fighter.ship").write_text(FIGHTER)
    (tmp_path / "broken.ship").write_text("max_hull = ")
    return Battlefield(TemplateCache(tmp_path))


@pytest.fixture
def client(battlefield):
    with TestClient(create_app(battlefield)) as client:
        yield client


def test_api_root(client):
    """Test the health check."""
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json() == {
        "service": "Brass Combat",
        "status": "operational",
        "round": 0,
        "ships": 0,
    }


def test_spawn_ships(client):
    """Test spawning ships through the API."""
    response = client.post(
        "/api/battle/ships", json={"typeName": "fighter", "faction": "red fleet", "quantity": 5}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["faction"] == "Red Fleet"
    assert body["quantity"] == 5
    assert body["state"]["fleets"][0]["ships"] == 5


def test_spawn_unknown_template(client):
    """Test spawning a template that does not exist is 404."""
    response = client.post("/api/battle/ships", json={"typeName": "ghost", "faction": "red"})
    assert response.status_code == 404
    assert "ghost" in response.json()["detail"]


def test_spawn_broken_template(client):
    """Test spawning a template that cannot be parsed is 404."""
    response = client.post("/api/battle/ships", json={"typeName": "broken", "faction": "red"})
    assert response.status_code == 404


def test_spawn_blank_faction(client):
    """Test a blank faction name is 400."""
    response = client.post("/api/battle/ships", json={"typeName": "fighter", "faction": "   "})
    assert response.status_code == 400


def test_spawn_invalid_quantity(client):
    """Test request validation rejects a zero quantity."""
    response = client.post(
        "/api/battle/ships", json={"typeName": "fighter", "faction": "red", "quantity": 0}
    )
    assert response.status_code == 422


def test_battle_state(client):
    """Test reading the battlefield."""
    client.post("/api/battle/ships", json={"typeName": "fighter", "faction": "red"})
    response = client.get("/api/battle")
    assert response.status_code == 200
    body = response.json()
    assert body["round"] == 0
    assert body["winner"] is None
    assert body["fleets"][0]["groups"][0]["template"] == "fighter"


def test_run_rounds(client):
    """Test running rounds returns one report per round."""
    client.post("/api/battle/ships", json={"typeName": "fighter", "faction": "red", "quantity": 10})
    client.post("/api/battle/ships", json={"typeName": "fighter", "faction": "blue", "quantity": 1})
    response = client.post("/api/battle/rounds", json={"rounds": 2})
    assert response.status_code == 200
    body = response.json()
    assert len(body["reports"]) == 2
    first = body["reports"][0]
    assert first["round"] == 1
    assert body["reports"][1]["round"] == 2
    assert first["winner"] == "Red"
    assert first["eliminated"] == ["Blue"]
    assert first["events"][0] == {
        "attacker": "Red",
        "defender": "Blue",
        "damageDealt": 100,
        "defenderLosses": 1,
    }
    assert body["state"]["round"] == 2
    assert body["state"]["winner"] == "Red"


def test_run_rounds_limit(client):
    """Test the number of rounds per request is bounded."""
    response = client.post("/api/battle/rounds", json={"rounds": 10_000})
    assert response.status_code == 422


def test_kill_ships(client):
    """Test clearing the battlefield."""
    client.post("/api/battle/ships", json={"typeName": "fighter", "faction": "red", "quantity": 3})
    response = client.delete("/api/battle/ships")
    assert response.status_code == 200
    assert response.json() == {"removed": 3}
    assert client.get("/api/battle").json()["fleets"] == []


def test_templates(client):
    """Test listing loaded and available templates."""
    client.post("/api/battle/ships", json={"typeName": "fighter", "faction": "red"})
    response = client.get("/api/templates")
    assert response.status_code == 200
    assert response.json() == {"loaded": ["fighter"], "available": ["broken", "fighter"]}


def test_loop_runs_with_app(battlefield):
    """Test a round loop passed to the app starts and stops with it."""
    loop = BattleLoop(battlefield, tick_delay=0.01)
    with TestClient(create_app(battlefield, loop)):
        assert loop.is_alive()
    assert loop.stopped
    assert not loop.is_alive()
