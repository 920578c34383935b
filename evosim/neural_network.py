"""Neural network brain system for creatures.

A small dense feedforward network built from plain Python lists. Brains are
never trained with gradients: they are cloned and randomly perturbed between
generations, and the environment decides which variations survive.

Architecture (default, see evosim.config.brain):
    Input (5) -> Hidden (16, relu) -> Hidden (16, relu) -> Output (4, linear)
"""

import logging
import math
import random
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from evosim.config.brain import (
    ACTIVATION_ALPHA,
    DEFAULT_MUTATION_RATE,
    DEFAULT_MUTATION_SCALE,
    HIDDEN_ACTIVATION,
    HIDDEN_DROPOUT,
)
from evosim.exceptions import ConfigurationError, DimensionMismatch, ModelShapeMismatch

logger = logging.getLogger(__name__)


class Matrix:
    """Dense 2D float buffer stored row-major in a flat list."""

    __slots__ = ("rows", "cols", "values")

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise ConfigurationError(f"Matrix dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.values: List[float] = [0.0] * (rows * cols)

    def index(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"({row}, {col}) outside {self.rows}x{self.cols} matrix")
        return row * self.cols + col

    def get(self, row: int, col: int) -> float:
        return self.values[self.index(row, col)]

    def set(self, row: int, col: int, value: float) -> None:
        self.values[self.index(row, col)] = float(value)

    def clone(self) -> "Matrix":
        copy = Matrix(self.rows, self.cols)
        copy.values = list(self.values)
        return copy

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"Matrix({self.rows}x{self.cols})"


class Activation(Enum):
    """Activation functions a layer can apply to its nodes."""

    LINEAR = "linear"
    RELU = "relu"
    LEAKY_RELU = "leaky-relu"
    ELU = "elu"
    SIGMOID = "sigmoid"
    TANH = "tanh"

    @classmethod
    def parse(cls, value: Union[str, "Activation"]) -> "Activation":
        """Accept an Activation or its name (``"leaky_relu"`` is tolerated)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower().replace("_", "-"))
        except ValueError:
            names = ", ".join(member.value for member in cls)
            raise ConfigurationError(
                f"Unknown activation {value!r}; expected one of: {names}"
            ) from None


def activate(kind: Activation, x: float, alpha: float = ACTIVATION_ALPHA) -> float:
    """Apply activation ``kind`` to a single value.

    The sigmoid and elu branches only exponentiate non-positive numbers so
    large magnitudes cannot overflow.
    """
    if kind is Activation.LINEAR:
        return x
    if kind is Activation.RELU:
        return x if x > 0 else 0.0
    if kind is Activation.LEAKY_RELU:
        return x if x > 0 else alpha * x
    if kind is Activation.ELU:
        return x if x >= 0 else alpha * (math.exp(x) - 1)
    if kind is Activation.SIGMOID:
        if x >= 0:
            return 1.0 / (1.0 + math.exp(-x))
        z = math.exp(x)
        return z / (1.0 + z)
    if kind is Activation.TANH:
        return math.tanh(x)
    raise ConfigurationError(f"Unsupported activation: {kind!r}")


class Layer:
    """One affine transform plus activation and optional dropout.

    Attributes:
        n_inputs: Width of the vector fed to ``forward``
        n_nodes: Number of output nodes
        weights: n_nodes x n_inputs weight matrix
        biases: One bias per node
        nodes: Current node values (stale until ``forward`` runs)
        activation: Activation applied by ``activate``
        dropout_rate: Probability of zeroing a node in ``apply_dropout``
        alpha: Leak/scale parameter for leaky-relu and elu
    """

    def __init__(
        self,
        n_inputs: int,
        n_nodes: int,
        activation: Union[str, Activation] = HIDDEN_ACTIVATION,
        dropout_rate: float = 0.0,
        alpha: float = ACTIVATION_ALPHA,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not 0 <= dropout_rate < 1:
            raise ConfigurationError(f"Dropout rate must be in [0, 1), got {dropout_rate}")
        self.n_inputs = n_inputs
        self.n_nodes = n_nodes
        self.weights = Matrix(n_nodes, n_inputs)
        self.biases: List[float] = [0.0] * n_nodes
        self.nodes: List[float] = [0.0] * n_nodes
        self.activation = Activation.parse(activation)
        self.dropout_rate = float(dropout_rate)
        self.alpha = float(alpha)
        self.rng = rng

    def forward(self, inputs: Sequence[float]) -> List[float]:
        """Compute ``nodes = weights * inputs + biases``."""
        if len(inputs) != self.n_inputs:
            raise DimensionMismatch(self.n_inputs, len(inputs), where="layer input")

        weights = self.weights.values
        cols = self.n_inputs
        nodes = []
        for i in range(self.n_nodes):
            row = i * cols
            total = 0.0
            for j in range(cols):
                total += weights[row + j] * inputs[j]
            nodes.append(total + self.biases[i])
        self.nodes = nodes
        return nodes

    def activate(self) -> List[float]:
        """Apply the configured activation to every node in place."""
        kind = self.activation
        alpha = self.alpha
        self.nodes = [activate(kind, node, alpha) for node in self.nodes]
        return self.nodes

    def apply_dropout(self) -> List[float]:
        """Zero each node with probability ``dropout_rate`` (inverted dropout)."""
        if self.dropout_rate > 0:
            rng = self.rng or random
            scale = 1.0 / (1.0 - self.dropout_rate)
            self.nodes = [
                0.0 if rng.random() < self.dropout_rate else node * scale
                for node in self.nodes
            ]
        return self.nodes

    def parameter_count(self) -> int:
        return len(self.weights) + len(self.biases)

    def clone(self) -> "Layer":
        copy = Layer(
            self.n_inputs,
            self.n_nodes,
            activation=self.activation,
            dropout_rate=self.dropout_rate,
            alpha=self.alpha,
            rng=self.rng,
        )
        copy.weights = self.weights.clone()
        copy.biases = list(self.biases)
        return copy


def _per_hidden_layer(value: Any, hidden_layers: int, name: str) -> List[Any]:
    """Expand a single option into one value per hidden layer."""
    if isinstance(value, (str, Activation, int, float)):
        return [value] * hidden_layers
    values = list(value)
    if len(values) != hidden_layers:
        raise ConfigurationError(
            f"Expected {hidden_layers} {name} values (one per hidden layer), got {len(values)}"
        )
    return values


class NeuralNetwork:
    """Ordered stack of layers forming a feedforward network.

    ``network_shape`` lists the width of every layer boundary, so a shape of
    length L produces L - 1 layers. The final layer is always linear and never
    uses dropout; hidden layers take ``activation``/``dropout`` either as a
    single value or one value per hidden layer.

    Example:
        brain = NeuralNetwork([5, 16, 16, 4], activation="tanh")
        brain.mutate(0.2, 0.5)
        up, down, left, right = brain.infer([0.0, 0.3, 1.0, 2, 87.5])
    """

    def __init__(
        self,
        network_shape: Sequence[int],
        activation: Union[str, Activation, Sequence[Union[str, Activation]]] = HIDDEN_ACTIVATION,
        dropout: Union[float, Sequence[float]] = HIDDEN_DROPOUT,
        alpha: float = ACTIVATION_ALPHA,
        rng: Optional[random.Random] = None,
    ) -> None:
        shape = [int(width) for width in network_shape]
        if len(shape) < 2:
            raise ConfigurationError(
                f"network_shape needs at least 2 widths, got {list(network_shape)}"
            )
        if any(width < 1 for width in shape):
            raise ConfigurationError(f"Layer widths must be positive, got {shape}")

        hidden_layers = len(shape) - 2
        self.network_shape = shape
        self.activations = [
            Activation.parse(a) for a in _per_hidden_layer(activation, hidden_layers, "activation")
        ]
        self.dropouts = [float(d) for d in _per_hidden_layer(dropout, hidden_layers, "dropout")]
        self.alpha = alpha
        self.rng = rng

        self.layers: List[Layer] = []
        for i in range(len(shape) - 1):
            is_output = i == len(shape) - 2
            self.layers.append(
                Layer(
                    shape[i],
                    shape[i + 1],
                    activation=Activation.LINEAR if is_output else self.activations[i],
                    dropout_rate=0.0 if is_output else self.dropouts[i],
                    alpha=alpha,
                    rng=rng,
                )
            )

    @property
    def input_size(self) -> int:
        return self.network_shape[0]

    @property
    def output_size(self) -> int:
        return self.network_shape[-1]

    def infer(self, inputs: Sequence[float]) -> List[float]:
        """Run ``inputs`` through every layer and return the output vector."""
        if len(inputs) != self.input_size:
            raise DimensionMismatch(self.input_size, len(inputs), where="network input")

        values: Sequence[float] = inputs
        last = len(self.layers) - 1
        for i, layer in enumerate(self.layers):
            layer.forward(values)
            if i != last:
                layer.activate()
                layer.apply_dropout()
            values = layer.nodes
        return list(values)

    def clone(self) -> "NeuralNetwork":
        """Return an independent network with identical parameters."""
        copy = NeuralNetwork(
            self.network_shape,
            activation=self.activations,
            dropout=self.dropouts,
            alpha=self.alpha,
            rng=self.rng,
        )
        copy.layers = [layer.clone() for layer in self.layers]
        return copy

    def mutate(
        self,
        mutation_rate: float = DEFAULT_MUTATION_RATE,
        mutation_scale: float = DEFAULT_MUTATION_SCALE,
    ) -> int:
        """Perturb parameters in place.

        Every weight and bias is independently nudged, with probability
        ``mutation_rate``, by a value drawn uniformly from
        ``[-mutation_scale, +mutation_scale]``.

        Returns:
            Number of parameters changed
        """
        rng = self.rng or random
        mutated = 0
        for layer in self.layers:
            weights = layer.weights.values
            for i in range(len(weights)):
                if rng.random() < mutation_rate:
                    weights[i] += mutation_scale * (rng.random() * 2 - 1)
                    mutated += 1
            biases = layer.biases
            for i in range(len(biases)):
                if rng.random() < mutation_rate:
                    biases[i] += mutation_scale * (rng.random() * 2 - 1)
                    mutated += 1
        return mutated

    def parameter_count(self) -> int:
        return sum(layer.parameter_count() for layer in self.layers)

    def get_model(self) -> Dict[str, Any]:
        """Serialize weights and biases, labeled with the layer shapes."""
        return {
            "network_shape": list(self.network_shape),
            "layers": [
                {
                    "n_inputs": layer.n_inputs,
                    "n_nodes": layer.n_nodes,
                    "weights": list(layer.weights.values),
                    "biases": list(layer.biases),
                }
                for layer in self.layers
            ],
        }

    def set_model(self, model: Union[Dict[str, Any], Sequence[Dict[str, Any]]]) -> None:
        """Load parameters produced by ``get_model``.

        Also accepts a bare list of ``{"weights": [...], "biases": [...]}``
        layer dicts. The whole model is validated before anything is written,
        so a mismatching model leaves the network untouched.

        Raises:
            ModelShapeMismatch: If the model does not fit this network
        """
        if isinstance(model, dict):
            shape = model.get("network_shape")
            if shape is not None:
                try:
                    widths = [int(w) for w in shape]
                except (TypeError, ValueError) as exc:
                    raise ModelShapeMismatch(f"Model shape {shape!r} is not a list of widths") from exc
                if widths != self.network_shape:
                    raise ModelShapeMismatch(
                        f"Model shape {widths} does not match network shape {self.network_shape}"
                    )
            layers = model.get("layers")
        else:
            layers = model

        if not isinstance(layers, (list, tuple)):
            raise ModelShapeMismatch("Model has no layer list")
        if len(layers) != len(self.layers):
            raise ModelShapeMismatch(
                f"Model has {len(layers)} layers, network has {len(self.layers)}"
            )

        staged = []
        for index, (layer, data) in enumerate(zip(self.layers, layers)):
            staged.append(self._validate_layer_model(index, layer, data))

        for layer, (weights, biases) in zip(self.layers, staged):
            layer.weights.values = weights
            layer.biases = biases
        logger.debug("Loaded model into network %s", self.network_shape)

    @staticmethod
    def _validate_layer_model(index: int, layer: Layer, data: Any):
        if not isinstance(data, dict) or "weights" not in data or "biases" not in data:
            raise ModelShapeMismatch(f"Layer {index} must provide 'weights' and 'biases'")
        for key, expected in (("n_inputs", layer.n_inputs), ("n_nodes", layer.n_nodes)):
            if key not in data:
                continue
            try:
                declared = int(data[key])
            except (TypeError, ValueError) as exc:
                raise ModelShapeMismatch(f"Layer {index} {key} is not an integer") from exc
            if declared != expected:
                raise ModelShapeMismatch(
                    f"Layer {index} {key} is {declared}, network expects {expected}"
                )
        try:
            weights = [float(value) for value in data["weights"]]
            biases = [float(value) for value in data["biases"]]
        except (TypeError, ValueError) as exc:
            raise ModelShapeMismatch(f"Layer {index} holds non-numeric parameters") from exc
        if len(weights) != len(layer.weights):
            raise ModelShapeMismatch(
                f"Layer {index} has {len(weights)} weights, expected "
                f"{layer.n_nodes}x{layer.n_inputs}={len(layer.weights)}"
            )
        if len(biases) != layer.n_nodes:
            raise ModelShapeMismatch(
                f"Layer {index} has {len(biases)} biases, expected {layer.n_nodes}"
            )
        return weights, biases

    def __repr__(self) -> str:
        hidden = ",".join(a.value for a in self.activations) or "-"
        return f"NeuralNetwork(shape={self.network_shape}, hidden={hidden})"
