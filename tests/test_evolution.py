"""Tests for fitness, mutation parameters and parent selection."""

import pytest

from evosim.config.simulation_config import EvolutionConfig
from evosim.evolution import (
    calculate_fitness,
    children_per_parent,
    creature_mutation_parameters,
    is_eligible,
    rank_eligible,
    select_parents,
)
from evosim.exceptions import EvolutionError, NoEligibleParents


def _place(creature, x, food_eaten=0, energy=None, collisions=0):
    creature.pos.update(x, creature.pos.y)
    creature.food_eaten = food_eaten
    creature.collisions = collisions
    if energy is not None:
        creature.energy = energy
    return creature


class TestFitness:
    def test_weighted_sum(self, make_creature):
        creature = _place(make_creature(0, 500), 512, food_eaten=2, energy=50, collisions=3)
        # 100 * 0.5 + 20 * 0.5 + 25 * 2 - 2 * 3
        assert calculate_fitness(creature) == pytest.approx(104.0)

    def test_custom_weights(self, make_creature):
        config = EvolutionConfig(
            fitness_weight_progress=0,
            fitness_weight_energy=0,
            fitness_weight_food=1,
            fitness_penalty_collision=0,
        )
        creature = _place(make_creature(0, 500), 900, food_eaten=4)
        assert calculate_fitness(creature, config) == 4


class TestMutationParameters:
    def test_full_energy_no_food(self):
        rate, scale = creature_mutation_parameters(100, 100, 0)
        assert rate == pytest.approx(0.05)
        assert scale == pytest.approx(0.1)

    def test_starved_creature_mutates_more(self):
        rate, scale = creature_mutation_parameters(0, 100, 5)
        assert rate == pytest.approx(0.15)
        assert scale == pytest.approx(0.6)

    def test_rate_clamped(self):
        config = EvolutionConfig(mutation_rate_base=0.95, mutation_rate_energy_factor=1.0)
        rate, _ = creature_mutation_parameters(0, 100, 0, config)
        assert rate == 1.0


class TestSelection:
    def test_eligibility_needs_goal_and_food(self, make_creature):
        assert is_eligible(_place(make_creature(0, 500), 600, food_eaten=1))
        assert not is_eligible(_place(make_creature(0, 500), 600, food_eaten=0))
        assert not is_eligible(_place(make_creature(0, 500), 512, food_eaten=3))

    def test_rank_is_best_first_and_skips_ineligible(self, make_creature):
        low = _place(make_creature(0, 500), 600, food_eaten=1)
        high = _place(make_creature(0, 500), 600, food_eaten=3)
        outside = _place(make_creature(0, 500), 100, food_eaten=9)
        ranked = rank_eligible([low, outside, high])
        assert [entry.creature for entry in ranked] == [high, low]

    def test_ties_keep_population_order(self, make_creature):
        first = _place(make_creature(0, 500), 600, food_eaten=1)
        second = _place(make_creature(0, 500), 600, food_eaten=1)
        ranked = rank_eligible([first, second])
        assert [entry.creature for entry in ranked] == [first, second]

    def test_select_top_half_rounded_up(self, make_creature):
        creatures = [_place(make_creature(0, 500), 600, food_eaten=n) for n in range(1, 6)]
        parents = select_parents(creatures)
        assert [p.creature.food_eaten for p in parents] == [5, 4, 3]

    def test_no_eligible_parents_raises(self, make_creature):
        creatures = [make_creature(10, 10) for _ in range(3)]
        with pytest.raises(NoEligibleParents) as excinfo:
            select_parents(creatures, generation=7)
        assert excinfo.value.generation == 7

    def test_children_per_parent_rounds_up(self):
        assert children_per_parent(50, 3) == 17
        assert children_per_parent(6, 3) == 2
        with pytest.raises(EvolutionError):
            children_per_parent(50, 0)
