"""Evosim exception hierarchy.

Centralised base classes so callers can catch simulation failures narrowly
instead of reaching for ``except Exception``.
"""


class EvoSimError(Exception):
    """Root of all evosim domain exceptions."""


class ConfigurationError(EvoSimError, ValueError):
    """Invalid or missing configuration."""


class NetworkError(EvoSimError):
    """Errors raised by the neural network (shapes, models)."""


class DimensionMismatch(NetworkError, ValueError):
    """A vector's length does not match the width a layer expects."""

    def __init__(self, expected: int, received: int, where: str = "layer") -> None:
        self.expected = expected
        self.received = received
        self.where = where
        super().__init__(
            f"Wrong number of values for {where}: got {received}, expected {expected}"
        )


class ModelShapeMismatch(NetworkError, ValueError):
    """A serialized model does not fit the network it is loaded into."""


class EvolutionError(EvoSimError):
    """Errors during selection or reproduction."""


class NoEligibleParents(EvolutionError):
    """No creature qualified for reproduction at a generation boundary."""

    def __init__(self, generation: int, population_size: int) -> None:
        self.generation = generation
        self.population_size = population_size
        super().__init__(
            f"Generation {generation}: none of {population_size} creatures "
            f"is eligible for reproduction"
        )


class PersistenceError(EvoSimError):
    """Errors during model save / load."""
