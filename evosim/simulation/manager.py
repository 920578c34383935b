"""Population / generation manager - owns the world and drives the run.

The manager is the only owner of the creature and food lists. Each call to
``tick()`` advances the world by one frame; after ``generation_length`` ticks
it scores the population, selects parents and swaps in a freshly built next
generation.

State machine:
    INITIALIZING -> RUNNING -> SELECTING -> REPRODUCING -> RUNNING -> ... -> FINISHED

Creatures are always processed in list order, and every random decision
comes from ``self.rng``, so two managers built with the same seed produce
identical runs.
"""

import logging
import random
import statistics
from typing import Any, Dict, List, Optional, Sequence, Tuple

from evosim.color import random_color
from evosim.config.simulation_config import SimulationConfig
from evosim.entities.base import Body
from evosim.entities.creature import Creature
from evosim.entities.food import Food
from evosim.evolution.fitness import calculate_fitness
from evosim.evolution.selection import (
    ScoredCreature,
    children_per_parent,
    is_eligible,
    select_parents,
)
from evosim.exceptions import NoEligibleParents
from evosim.neural_network import NeuralNetwork
from evosim.simulation.snapshot import (
    CreatureState,
    FoodState,
    GenerationReport,
    WorldSnapshot,
)
from evosim.simulation.state import SimulationState

logger = logging.getLogger(__name__)


class GenerationManager:
    """Holds the live population and food and runs generations.

    Attributes:
        config: Validated simulation configuration
        rng: Shared random source for every stochastic decision
        state: Current SimulationState
        creatures: Live creatures of the current generation
        foods: Food batch (indices are stable for the whole run)
        generation: Number of completed generations
        tick_count: Ticks elapsed in the current generation
        total_ticks: Ticks elapsed since the last reset
        history: One GenerationReport per completed generation
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Initialize the manager and its first generation.

        Args:
            config: Simulation configuration (defaults if None)
            rng: Shared random number generator for deterministic runs
            seed: Optional seed (used if rng is not provided)
        """
        self.config = (config or SimulationConfig()).validate()
        self.seed = seed
        self.rng: random.Random = rng if rng is not None else random.Random(seed)

        self.state = SimulationState.INITIALIZING
        self.creatures: List[Creature] = []
        self.foods: List[Food] = []
        self.generation = 0
        self.tick_count = 0
        self.total_ticks = 0
        self.history: List[GenerationReport] = []

        self.reset()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def world_width(self) -> float:
        return self.config.world.width

    @property
    def world_height(self) -> float:
        return self.config.world.height

    @property
    def generation_length(self) -> int:
        return self.config.evolution.generation_length

    @property
    def population_size(self) -> int:
        return self.config.evolution.population_size

    @property
    def is_finished(self) -> bool:
        return self.state.is_terminal

    @property
    def last_report(self) -> Optional[GenerationReport]:
        return self.history[-1] if self.history else None

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Start over with a random, freshly mutated population."""
        self.state = SimulationState.INITIALIZING
        self.generation = 0
        self.tick_count = 0
        self.total_ticks = 0
        self.history = []

        self.creatures = self._random_population()
        self.foods = self._create_food()
        self.state = SimulationState.RUNNING

        logger.info(
            "Simulation initialized: %d creatures, %d food, world %sx%s, seed=%s",
            len(self.creatures),
            len(self.foods),
            self.world_width,
            self.world_height,
            self.seed,
        )

    def _random_population(self) -> List[Creature]:
        """Create ``population_size`` new creatures, each mutated once."""
        population = []
        for _ in range(self.population_size):
            x, y = self._spawn_position()
            creature = self._new_creature(x, y, random_color(self.rng))
            creature.mutate()
            population.append(creature)
        return population

    def _new_creature(self, x: float, y: float, color: str) -> Creature:
        cfg = self.config
        return Creature(
            x,
            y,
            self.world_width,
            self.world_height,
            color,
            config=cfg.creature,
            evolution=cfg.evolution,
            brain_config=cfg.brain,
            rng=self.rng,
        )

    def _create_food(self) -> List[Food]:
        food_cfg = self.config.food
        fraction = food_cfg.spawn_fraction_for(self.generation)
        return [
            Food(
                self.world_width,
                self.world_height,
                size=food_cfg.size,
                collision_radius_factor=food_cfg.collision_radius_factor,
                spawn_x_fraction=fraction,
                rng=self.rng,
            )
            for _ in range(food_cfg.count)
        ]

    def _spawn_position(self) -> Tuple[float, float]:
        """Random creature spawn point inside the spawn region, off the walls."""
        size = self.config.creature.size
        max_x = max(size, self.world_width * self.config.creature.spawn_x_fraction - size)
        max_y = max(size, self.world_height - size)
        return (
            size + self.rng.random() * (max_x - size),
            size + self.rng.random() * (max_y - size),
        )

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def obstacles(self) -> List[Body]:
        """Everything a creature can sense or collide with, in fixed order."""
        return [*self.creatures, *self.foods]

    def tick(self) -> WorldSnapshot:
        """Advance the simulation by one frame.

        Returns:
            Snapshot of the world after the tick
        """
        if self.state is SimulationState.FINISHED:
            return self.snapshot()

        if not self.creatures:
            logger.info("Population extinct at generation %d", self.generation)
            self.state = SimulationState.FINISHED
            return self.snapshot()

        obstacles = self.obstacles()
        for creature in self.creatures:
            creature.update(obstacles)

        self.tick_count += 1
        self.total_ticks += 1

        if self.tick_count >= self.generation_length:
            self.end_generation()

        return self.snapshot()

    def run_generation(self) -> Optional[GenerationReport]:
        """Tick until the current generation ends (or the run finishes)."""
        start = self.generation
        while not self.is_finished and self.generation == start:
            self.tick()
        return self.last_report if self.generation != start else None

    def run(self, generations: int) -> List[GenerationReport]:
        """Run up to ``generations`` complete generations."""
        reports = []
        for _ in range(generations):
            report = self.run_generation()
            if report is None:
                break
            reports.append(report)
        return reports

    # ------------------------------------------------------------------
    # Generation boundary
    # ------------------------------------------------------------------

    def end_generation(self) -> GenerationReport:
        """Select, reproduce and swap in the next generation."""
        evolution = self.config.evolution
        self.state = SimulationState.SELECTING

        fitnesses = [calculate_fitness(c, evolution) for c in self.creatures]
        eligible = sum(1 for c in self.creatures if is_eligible(c, evolution))
        parents: List[ScoredCreature] = []
        per_parent = 0
        reseeded = False

        try:
            parents = select_parents(self.creatures, evolution, generation=self.generation)
        except NoEligibleParents as exc:
            logger.warning("%s; reseeding a random population", exc)
            next_creatures = self._random_population()
            reseeded = True
        else:
            self.state = SimulationState.REPRODUCING
            per_parent = children_per_parent(self.population_size, len(parents))
            next_creatures = self._reproduce(parents, per_parent)

        report = GenerationReport(
            generation=self.generation,
            population=len(self.creatures),
            eligible=eligible,
            parents=len(parents),
            children_per_parent=per_parent,
            next_population=len(next_creatures),
            best_fitness=max(fitnesses) if fitnesses else 0.0,
            mean_fitness=statistics.fmean(fitnesses) if fitnesses else 0.0,
            total_food_eaten=sum(c.food_eaten for c in self.creatures),
            reseeded=reseeded,
        )
        self.history.append(report)

        # Swap in the fully built generation
        self.creatures = next_creatures
        self.generation += 1
        self.tick_count = 0
        self._regenerate_food()

        max_generations = evolution.max_generations
        if max_generations is not None and self.generation >= max_generations:
            self.state = SimulationState.FINISHED
        else:
            self.state = SimulationState.RUNNING

        logger.info(
            "Generation %d: best=%.2f mean=%.2f eligible=%d parents=%d next=%d%s",
            report.generation,
            report.best_fitness,
            report.mean_fitness,
            report.eligible,
            report.parents,
            report.next_population,
            " (reseeded)" if reseeded else "",
        )
        return report

    def _reproduce(self, parents: Sequence[ScoredCreature], per_parent: int) -> List[Creature]:
        children = []
        for parent in parents:
            for _ in range(per_parent):
                x, y = self._spawn_position()
                children.append(parent.creature.clone(x, y))
        return children

    def _regenerate_food(self) -> None:
        fraction = self.config.food.spawn_fraction_for(self.generation)
        for food in self.foods:
            food.respawn(fraction)

    # ------------------------------------------------------------------
    # Models
    # ------------------------------------------------------------------

    def best_creature(self) -> Optional[Creature]:
        """Highest-fitness creature of the current population."""
        if not self.creatures:
            return None
        evolution = self.config.evolution
        return max(self.creatures, key=lambda c: calculate_fitness(c, evolution))

    def export_best_model(self) -> Optional[Dict[str, Any]]:
        """Serialized brain of the best creature plus run metadata."""
        best = self.best_creature()
        if best is None:
            return None
        return {
            "generation": self.generation,
            "fitness": calculate_fitness(best, self.config.evolution),
            "model": best.brain.get_model(),
        }

    def load_model_into_population(self, model: Dict[str, Any]) -> int:
        """Load one brain model into every creature.

        The model is validated against a scratch network first, so a
        mismatching model leaves the whole population untouched.

        Raises:
            ModelShapeMismatch: If the model does not fit the configured brain

        Returns:
            Number of creatures updated
        """
        brain_cfg = self.config.brain
        probe = NeuralNetwork(
            brain_cfg.network_shape,
            activation=brain_cfg.activation,
            dropout=brain_cfg.dropout,
            alpha=brain_cfg.alpha,
        )
        probe.set_model(model)
        for creature in self.creatures:
            creature.brain.set_model(model)
        logger.info("Loaded model into %d creatures", len(self.creatures))
        return len(self.creatures)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def snapshot(self) -> WorldSnapshot:
        """Copy of the observable world state."""
        return WorldSnapshot(
            generation=self.generation,
            tick=self.tick_count,
            generation_length=self.generation_length,
            state=self.state.value,
            world_width=self.world_width,
            world_height=self.world_height,
            creatures=[CreatureState(**c.to_state()) for c in self.creatures],
            foods=[FoodState(**f.to_state()) for f in self.foods],
            last_report=self.last_report,
        )

    def get_stats(self) -> Dict[str, Any]:
        return {
            "generation": self.generation,
            "tick": self.tick_count,
            "total_ticks": self.total_ticks,
            "state": self.state.value,
            "population": len(self.creatures),
            "food_available": sum(1 for f in self.foods if f.is_available),
            "history": [report.to_dict() for report in self.history],
        }
