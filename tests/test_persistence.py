"""Tests for saving and loading brain models."""

import json

import pytest

from evosim.exceptions import PersistenceError
from evosim.neural_network import NeuralNetwork
from evosim.persistence import MODEL_FORMAT_VERSION, load_model, load_model_file, save_model


@pytest.fixture
def model(seeded_rng):
    net = NeuralNetwork([5, 8, 4], rng=seeded_rng)
    net.mutate(1.0, 1.0)
    return net.get_model()


class TestPersistence:
    def test_save_then_load_restores_brain(self, tmp_path, model):
        path = save_model(tmp_path / "models" / "best.json", model, metadata={"generation": 3})
        assert path.exists()

        payload = load_model_file(path)
        assert payload["format_version"] == MODEL_FORMAT_VERSION
        assert payload["metadata"] == {"generation": 3}

        net = NeuralNetwork([5, 8, 4])
        net.set_model(load_model(path))
        assert net.get_model() == model

    def test_no_temp_file_left_behind(self, tmp_path, model):
        save_model(tmp_path / "best.json", model)
        assert [p.name for p in tmp_path.iterdir()] == ["best.json"]

    def test_bare_model_file_accepted(self, tmp_path, model):
        path = tmp_path / "bare.json"
        path.write_text(json.dumps(model), encoding="utf-8")
        assert load_model(path) == model

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(PersistenceError):
            load_model(tmp_path / "missing.json")

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceError):
            load_model(path)

    def test_unsupported_version_raises(self, tmp_path, model):
        path = tmp_path / "future.json"
        path.write_text(json.dumps({"format_version": 99, "model": model}), encoding="utf-8")
        with pytest.raises(PersistenceError):
            load_model(path)

    def test_unserializable_model_raises(self, tmp_path):
        with pytest.raises(PersistenceError):
            save_model(tmp_path / "bad.json", {"layers": object()})
