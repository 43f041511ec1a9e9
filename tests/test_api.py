import pytest
from fastapi.testclient import TestClient

import main


class FixedDistanceModel:
    def predict(self, features):
        return {"distance": 42.0, "bounces": 2.0}


@pytest.fixture
def client():
    return TestClient(main.app)


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Quiz Shot API"
    health = client.get("/health").json()
    assert health["status"] == "healthy"


def test_presets(client):
    presets = client.get("/presets").json()
    assert set(presets) == {"classic", "quiz", "bounce_limited", "fixed_friction"}
    assert presets["bounce_limited"]["kind"] == "bounce_limit"


def test_launch(client):
    response = client.post("/launch", json={"power": 15, "angle": 45})
    assert response.status_code == 200
    state = response.json()
    assert state["position"] == {"x": 0.5, "y": 0.15}
    assert state["velocity"]["x"] == pytest.approx(15.9099, abs=1e-3)
    assert len(state["trail"]) == 1
    assert state["stopped"] is False


def test_step_round_trip(client):
    params = {"power": 15, "angle": 45}
    state = client.post("/launch", json=params).json()

    response = client.post("/step", json={"state": state, "params": params})
    assert response.status_code == 200
    stepped = response.json()
    assert stepped["position"]["x"] == pytest.approx(0.5 + 15.9099 / 60, abs=1e-4)

    many = client.post("/step", json={"state": state, "params": params, "steps": 5000}).json()
    assert many["stopped"] is True
    assert many["velocity"] == {"x": 0.0, "y": 0.0}


def test_simulate_with_preset(client):
    response = client.post("/simulate", json={
        "params": {"power": 20, "loft": 40, "wind": 0},
        "preset": "fixed_friction",
    })
    assert response.status_code == 200
    summary = response.json()
    assert summary["outcome"] == "stopped"
    assert summary["distance"] > 10
    assert summary["height"] == 0
    assert len(summary["trail"]) > 2


def test_simulate_capped(client):
    response = client.post("/simulate", json={
        "params": {"power": 20, "angle": 45},
        "max_iterations": 50,
    })
    assert response.json()["outcome"] == "capped"
    assert response.json()["steps"] == 50


def test_simulate_unknown_preset(client):
    response = client.post("/simulate", json={"params": {"power": 10}, "preset": "ice"})
    assert response.status_code == 422


def test_invalid_ground_kind(client):
    response = client.post("/launch", json={"power": 10, "ground": {"kind": "sticky"}})
    assert response.status_code == 422


def test_rewards(client):
    body = {"correct_answers": 3, "seed": 5}
    first = client.post("/rewards", json=body).json()
    assert first == client.post("/rewards", json=body).json()
    gained = (first["power"] - 10) + (first["loft"] - 20) + first["wind"]
    assert 12 <= gained <= 24

    base = {"power": 1, "loft": 2, "wind": 3}
    assert client.post("/rewards", json={"correct_answers": 0, "base": base}).json() == base


def test_predict_without_model(client, monkeypatch):
    monkeypatch.setattr(main, "distance_model", None)
    response = client.post("/predict", json={"power": 10})
    assert response.status_code == 503


def test_predict_with_model(client, monkeypatch):
    monkeypatch.setattr(main, "distance_model", FixedDistanceModel())
    response = client.post("/predict", json={"power": 10})
    assert response.status_code == 200
    assert response.json() == {"distance": 42.0, "bounces": 2.0}
