"""Tests for the FastAPI simulation endpoints."""

import pytest
from fastapi.testclient import TestClient

from backend.app_factory import AppContext, create_app


@pytest.fixture
def client(small_config):
    app = create_app(config=small_config, seed=1)
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "state": "running"}

    def test_context_attached_to_app(self, small_config):
        app = create_app(config=small_config, seed=1)
        assert isinstance(app.state.context, AppContext)
        assert app.state.context.manager.population_size == 6


class TestState:
    def test_initial_state(self, client):
        data = client.get("/api/state").json()
        assert data["generation"] == 0
        assert data["tick"] == 0
        assert data["population"] == 6
        assert len(data["creatures"]) == 6
        assert len(data["foods"]) == 5
        assert data["last_report"] is None

    def test_tick_advances(self, client):
        data = client.post("/api/tick", params={"steps": 5}).json()
        assert data["tick"] == 5

    def test_tick_across_generation_boundary(self, client):
        data = client.post("/api/tick", params={"steps": 20}).json()
        assert data["generation"] == 1
        assert data["last_report"]["generation"] == 0

        history = client.get("/api/history").json()
        assert len(history) == 1
        assert history[0]["population"] == 6

    @pytest.mark.parametrize("steps", [0, 1001])
    def test_tick_rejects_out_of_range_steps(self, client, steps):
        response = client.post("/api/tick", params={"steps": steps})
        assert response.status_code == 422


class TestReset:
    def test_reset_with_overrides(self, client):
        client.post("/api/tick", params={"steps": 3})
        response = client.post(
            "/api/reset", json={"config": {"evolution": {"population_size": 4}}, "seed": 3}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["tick"] == 0
        assert data["population"] == 4
        # Other groups keep the current settings
        assert data["world_width"] == 200

    def test_reset_without_body_fields(self, client):
        response = client.post("/api/reset", json={})
        assert response.status_code == 200
        assert response.json()["population"] == 6

    @pytest.mark.parametrize(
        "overrides",
        [
            {"evolution": {"population_size": 0}},
            {"weather": {"rain": 1}},
            {"world": {"depth": 1}},
            {"evolution": {"population_size": "abc"}},
            {"evolution": {"population_size": 2.5}},
            {"brain": {"network_shape": 5}},
            {"brain": {"network_shape": [5, "x", 4]}},
            {"brain": {"dropout": 1.5}},
            {"world": {"width": None}},
        ],
    )
    def test_invalid_reset_rejected(self, client, overrides):
        response = client.post("/api/reset", json={"config": overrides})
        assert response.status_code == 422
        assert client.get("/api/state").json()["population"] == 6


class TestModel:
    def test_get_model(self, client):
        data = client.get("/api/model").json()
        assert data["generation"] == 0
        assert len(data["model"]["layers"]) == 3

    def test_put_model_round_trip(self, client):
        exported = client.get("/api/model").json()
        response = client.put("/api/model", json={"model": exported["model"]})
        assert response.status_code == 200
        assert response.json() == {"success": True, "creatures_updated": 6}

    @pytest.mark.parametrize(
        "model",
        [
            {"layers": []},
            {"network_shape": ["x"], "layers": []},
            {"network_shape": 5, "layers": []},
            {"layers": [{"n_inputs": "a", "weights": [], "biases": []}] * 3},
        ],
    )
    def test_put_mismatched_model_rejected(self, client, model):
        before = client.get("/api/model").json()["model"]
        response = client.put("/api/model", json={"model": model})
        assert response.status_code == 422
        assert client.get("/api/model").json()["model"] == before


class TestLogging:
    def test_explicit_level_applies_to_simulation_loggers(self):
        import logging

        from backend.logging_config import configure_logging

        logger = configure_logging("debug")
        try:
            assert logger.name == "evosim.backend"
            assert logging.getLogger("evosim").level == logging.DEBUG
            assert logging.getLogger("uvicorn").level == logging.DEBUG
        finally:
            configure_logging("info")

    def test_level_from_environment(self, monkeypatch):
        import logging

        from backend.logging_config import configure_logging

        monkeypatch.setenv("EVOSIM_LOG_LEVEL", "warning")
        try:
            configure_logging()
            assert logging.getLogger("evosim").level == logging.WARNING
        finally:
            configure_logging("info")
