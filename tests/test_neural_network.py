"""Tests for evosim.neural_network."""

import math
import random

import pytest

from evosim.exceptions import ConfigurationError, DimensionMismatch, ModelShapeMismatch
from evosim.neural_network import Activation, Layer, Matrix, NeuralNetwork, activate


def _single_layer_model(weights, biases):
    return {"layers": [{"weights": weights, "biases": biases}]}


class TestMatrix:
    def test_row_major_indexing(self):
        matrix = Matrix(2, 3)
        matrix.set(1, 2, 5.0)
        assert matrix.values[5] == 5.0
        assert matrix.get(1, 2) == 5.0
        assert len(matrix) == 6

    def test_out_of_range_raises(self):
        with pytest.raises(IndexError):
            Matrix(2, 2).get(2, 0)

    def test_clone_is_independent(self):
        matrix = Matrix(1, 2)
        copy = matrix.clone()
        copy.set(0, 0, 1.0)
        assert matrix.get(0, 0) == 0.0


class TestActivation:
    def test_parse_accepts_underscores(self):
        assert Activation.parse("leaky_relu") is Activation.LEAKY_RELU
        assert Activation.parse("leaky-relu") is Activation.LEAKY_RELU

    def test_parse_unknown_raises(self):
        with pytest.raises(ConfigurationError):
            Activation.parse("softmax")

    def test_values(self):
        assert activate(Activation.RELU, -3.0) == 0.0
        assert activate(Activation.RELU, 2.0) == 2.0
        assert activate(Activation.LEAKY_RELU, -1.0, alpha=0.01) == pytest.approx(-0.01)
        assert activate(Activation.SIGMOID, 0.0) == 0.5
        assert activate(Activation.TANH, 1.0) == pytest.approx(math.tanh(1.0))
        assert activate(Activation.ELU, -1.0, alpha=1.0) == pytest.approx(math.exp(-1) - 1)

    def test_sigmoid_does_not_overflow(self):
        assert activate(Activation.SIGMOID, -1000.0) == pytest.approx(0.0)
        assert activate(Activation.SIGMOID, 1000.0) == pytest.approx(1.0)


class TestLayer:
    def test_forward_is_weights_times_inputs_plus_bias(self):
        layer = Layer(2, 1)
        layer.weights.values = [2.0, 3.0]
        layer.biases = [1.0]
        assert layer.forward([1.0, 1.0]) == [6.0]

    def test_forward_rejects_wrong_input_length(self):
        with pytest.raises(DimensionMismatch):
            Layer(3, 2).forward([1.0, 2.0])

    def test_dropout_rate_must_be_below_one(self):
        with pytest.raises(ConfigurationError):
            Layer(2, 2, dropout_rate=1.0)

    def test_zero_dropout_keeps_nodes(self):
        layer = Layer(1, 3, dropout_rate=0.0)
        layer.nodes = [1.0, 2.0, 3.0]
        assert layer.apply_dropout() == [1.0, 2.0, 3.0]

    def test_inverted_dropout_zeroes_and_rescales(self):
        layer = Layer(1, 400, dropout_rate=0.5, rng=random.Random(42))
        layer.nodes = [1.0] * 400
        nodes = layer.apply_dropout()
        assert set(nodes) <= {0.0, 2.0}
        dropped = nodes.count(0.0)
        assert 140 < dropped < 260


class TestNeuralNetwork:
    def test_zero_network_outputs_zeros(self):
        """A [3,4,2] network with zero parameters maps [1,1,1] to exactly [0,0]."""
        net = NeuralNetwork([3, 4, 2], activation="relu")
        assert net.infer([1, 1, 1]) == [0.0, 0.0]

    def test_layer_count_and_sizes(self):
        net = NeuralNetwork([5, 16, 16, 4])
        assert len(net.layers) == 3
        assert [(l.n_inputs, l.n_nodes) for l in net.layers] == [(5, 16), (16, 16), (16, 4)]
        assert net.layers[-1].activation is Activation.LINEAR
        assert len(net.infer([0.1, 0.2, 0.3, 0.4, 0.5])) == 4

    def test_shape_too_short_raises(self):
        with pytest.raises(ConfigurationError):
            NeuralNetwork([5])

    def test_wrong_input_length_raises(self):
        net = NeuralNetwork([5, 4])
        with pytest.raises(DimensionMismatch):
            net.infer([1.0, 2.0])

    def test_hidden_relu_clamps_but_output_is_linear(self):
        net = NeuralNetwork([1, 1, 1], activation="relu")
        net.set_model({"layers": [
            {"weights": [-1.0], "biases": [0.0]},
            {"weights": [1.0], "biases": [0.0]},
        ]})
        assert net.infer([2.0]) == [0.0]

        net.set_model({"layers": [
            {"weights": [1.0], "biases": [0.0]},
            {"weights": [-1.0], "biases": [0.0]},
        ]})
        assert net.infer([2.0]) == [-2.0]

    def test_output_layer_never_uses_dropout(self):
        net = NeuralNetwork([2, 3, 2], dropout=0.9, rng=random.Random(1))
        assert net.layers[0].dropout_rate == 0.9
        assert net.layers[-1].dropout_rate == 0.0

        net.set_model({"layers": [
            {"weights": [0.0] * 6, "biases": [0.0] * 3},
            {"weights": [0.0] * 6, "biases": [1.5, -2.0]},
        ]})
        for _ in range(20):
            assert net.infer([1.0, 1.0]) == [1.5, -2.0]

    def test_per_layer_activations(self):
        net = NeuralNetwork([2, 3, 3, 1], activation=["tanh", "sigmoid"])
        assert net.activations == [Activation.TANH, Activation.SIGMOID]

    def test_per_layer_activation_count_must_match(self):
        with pytest.raises(ConfigurationError):
            NeuralNetwork([2, 3, 3, 1], activation=["tanh"])

    def test_inference_is_deterministic(self):
        net = NeuralNetwork([5, 8, 4], rng=random.Random(1))
        net.mutate(1.0, 1.0)
        inputs = [0.2, 0.0, 1.0, 3, 55.0]
        assert net.infer(inputs) == net.infer(inputs)

    def test_zero_rate_mutation_is_a_no_op(self):
        net = NeuralNetwork([5, 8, 4], rng=random.Random(1))
        before = net.get_model()
        assert net.mutate(0.0, 10.0) == 0
        assert net.get_model() == before

    def test_full_rate_mutation_stays_within_scale(self):
        net = NeuralNetwork([5, 8, 4], rng=random.Random(1))
        before = net.get_model()
        changed = net.mutate(1.0, 0.5)
        assert changed == net.parameter_count()
        after = net.get_model()
        for old_layer, new_layer in zip(before["layers"], after["layers"]):
            for old, new in zip(old_layer["weights"], new_layer["weights"]):
                assert abs(new - old) <= 0.5

    def test_clone_is_independent_both_ways(self):
        parent = NeuralNetwork([5, 8, 4], rng=random.Random(3))
        parent.mutate(1.0, 1.0)
        child = parent.clone()
        assert child.get_model() == parent.get_model()

        snapshot = parent.get_model()
        child.mutate(1.0, 1.0)
        assert parent.get_model() == snapshot

        child_snapshot = child.get_model()
        parent.mutate(1.0, 1.0)
        assert child.get_model() == child_snapshot

    def test_model_round_trip(self):
        source = NeuralNetwork([5, 16, 16, 4], rng=random.Random(9))
        source.mutate(0.5, 1.0)
        target = NeuralNetwork([5, 16, 16, 4])
        target.set_model(source.get_model())
        assert target.get_model() == source.get_model()
        inputs = [1.0, 0.5, 0.0, 2, 40.0]
        assert target.infer(inputs) == source.infer(inputs)

    def test_set_model_accepts_bare_layer_list(self):
        net = NeuralNetwork([2, 1])
        net.set_model([{"weights": [1.0, 1.0], "biases": [0.5]}])
        assert net.infer([1.0, 2.0]) == [3.5]

    def test_mismatched_model_leaves_network_untouched(self):
        net = NeuralNetwork([2, 2, 1])
        net.set_model({"layers": [
            {"weights": [1.0, 1.0, 1.0, 1.0], "biases": [0.0, 0.0]},
            {"weights": [1.0, 1.0], "biases": [0.0]},
        ]})
        before = net.get_model()

        bad = {"layers": [
            {"weights": [2.0, 2.0, 2.0, 2.0], "biases": [0.0, 0.0]},
            {"weights": [2.0], "biases": [0.0]},
        ]}
        with pytest.raises(ModelShapeMismatch):
            net.set_model(bad)
        assert net.get_model() == before

    def test_mismatched_network_shape_raises(self):
        net = NeuralNetwork([5, 4])
        other = NeuralNetwork([5, 8, 4])
        with pytest.raises(ModelShapeMismatch):
            net.set_model(other.get_model())

    def test_non_numeric_parameters_raise(self):
        net = NeuralNetwork([1, 1])
        with pytest.raises(ModelShapeMismatch):
            net.set_model(_single_layer_model(["x"], [0.0]))

    @pytest.mark.parametrize(
        "model",
        [
            {"network_shape": ["x"], "layers": []},
            {"network_shape": 5, "layers": []},
            {"layers": [{"n_inputs": "a", "weights": [1.0], "biases": [0.0]}]},
            {"layers": [{"n_nodes": None, "weights": [1.0], "biases": [0.0]}]},
        ],
    )
    def test_malformed_shape_labels_raise_shape_mismatch(self, model):
        net = NeuralNetwork([1, 1])
        with pytest.raises(ModelShapeMismatch):
            net.set_model(model)
        assert net.get_model()["layers"][0]["weights"] == [0.0]
