"""Lifecycle states of a GenerationManager."""

from enum import Enum


class SimulationState(Enum):
    """States of the generation state machine.

    INITIALIZING -> RUNNING -> SELECTING -> REPRODUCING -> RUNNING -> ... -> FINISHED
    """

    INITIALIZING = "initializing"
    RUNNING = "running"
    SELECTING = "selecting"
    REPRODUCING = "reproducing"
    FINISHED = "finished"

    @property
    def is_terminal(self) -> bool:
        return self is SimulationState.FINISHED
