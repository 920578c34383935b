"""Tests for evosim.entities.food."""

from evosim.config.food import DESPAWNED_POSITION
from evosim.entities import EntityKind, Food


class TestFood:
    def test_spawns_inside_spawn_region(self, seeded_rng):
        food = Food(200, 100, spawn_x_fraction=0.25, rng=seeded_rng)
        for _ in range(200):
            food.respawn()
            assert 0 <= food.pos.x < 50
            assert 0 <= food.pos.y < 100

    def test_kind_and_collision_radius(self, seeded_rng):
        food = Food(200, 200, size=5, collision_radius_factor=0.5, rng=seeded_rng)
        assert food.kind is EntityKind.FOOD
        assert food.is_food and not food.is_creature
        assert food.collision_radius == 2.5

    def test_despawn_parks_food_off_world(self, seeded_rng):
        food = Food(200, 200, rng=seeded_rng)
        food.despawn()
        assert not food.is_available
        assert (food.pos.x, food.pos.y) == DESPAWNED_POSITION
        assert food.times_eaten == 1

    def test_respawn_makes_food_available_again(self, seeded_rng):
        food = Food(200, 200, rng=seeded_rng)
        food.despawn()
        food.respawn(0.1)
        assert food.is_available
        assert food.spawn_x_fraction == 0.1
        assert 0 <= food.pos.x < 20

    def test_to_state(self, seeded_rng):
        food = Food(200, 200, rng=seeded_rng)
        state = food.to_state()
        assert state["available"] is True
        assert state["size"] == food.size
