"""Pygame viewer for a running GenerationManager.

The viewer only reads WorldSnapshot objects; it never touches creatures or
food directly.
"""

import logging
import math
from typing import Optional, Tuple

import pygame

from evosim.color import hex_to_rgb
from evosim.simulation.manager import GenerationManager
from evosim.simulation.snapshot import CreatureState, WorldSnapshot

logger = logging.getLogger(__name__)

MAX_WINDOW_SIZE = 800
BACKGROUND_COLOR = (18, 22, 30)
GOAL_ZONE_COLOR = (28, 40, 34)
FOOD_COLOR = (110, 200, 90)
HEADING_COLOR = (240, 240, 240)
TEXT_COLOR = (220, 220, 220)


class SimulationViewer:
    """Draws snapshots onto a pygame surface.

    Attributes:
        screen: Pygame surface to render to
        font: Font for the stats line
        scale: World units to pixels
    """

    def __init__(self, screen: pygame.Surface, font: pygame.font.Font, scale: float) -> None:
        self.screen = screen
        self.font = font
        self.scale = scale

    def _to_screen(self, x: float, y: float) -> Tuple[int, int]:
        return int(x * self.scale), int(y * self.scale)

    def draw(self, snapshot: WorldSnapshot, goal_x_fraction: float) -> None:
        self.screen.fill(BACKGROUND_COLOR)

        goal_left = int(snapshot.world_width * goal_x_fraction * self.scale)
        pygame.draw.rect(
            self.screen,
            GOAL_ZONE_COLOR,
            (goal_left, 0, self.screen.get_width() - goal_left, self.screen.get_height()),
        )

        for food in snapshot.foods:
            if not food.available:
                continue
            radius = max(1, int(food.size * self.scale))
            pygame.draw.circle(self.screen, FOOD_COLOR, self._to_screen(food.x, food.y), radius)

        for creature in snapshot.creatures:
            self.draw_creature(creature)

        self.draw_stats(snapshot)

    def draw_creature(self, creature: CreatureState) -> None:
        """Draw the body and a small heading triangle."""
        center = self._to_screen(creature.x, creature.y)
        radius = max(2, int(creature.size * self.scale))
        pygame.draw.circle(self.screen, hex_to_rgb(creature.color), center, radius)

        # angle 0 faces up (negative y)
        heading = creature.angle - math.pi / 2
        tip = (
            center[0] + math.cos(heading) * radius * 1.6,
            center[1] + math.sin(heading) * radius * 1.6,
        )
        left = (
            center[0] + math.cos(heading + 2.5) * radius * 0.8,
            center[1] + math.sin(heading + 2.5) * radius * 0.8,
        )
        right = (
            center[0] + math.cos(heading - 2.5) * radius * 0.8,
            center[1] + math.sin(heading - 2.5) * radius * 0.8,
        )
        pygame.draw.polygon(self.screen, HEADING_COLOR, (tip, left, right))

    def draw_stats(self, snapshot: WorldSnapshot) -> None:
        text = (
            f"Gen {snapshot.generation}  tick {snapshot.tick}/{snapshot.generation_length}  "
            f"pop {snapshot.population}  {snapshot.state}"
        )
        report = snapshot.last_report
        if report is not None:
            text += f"  best {report.best_fitness:.1f}  mean {report.mean_fitness:.1f}"
        self.screen.blit(self.font.render(text, True, TEXT_COLOR), (8, 8))


def run_viewer(
    manager: GenerationManager, fps: int = 60, max_generations: Optional[int] = None
) -> None:
    """Open a window and tick ``manager`` once per frame until closed.

    Args:
        manager: The simulation to drive
        fps: Frame rate cap
        max_generations: Close after this many completed generations
    """
    pygame.init()
    try:
        longest = max(manager.world_width, manager.world_height)
        scale = min(1.0, MAX_WINDOW_SIZE / longest)
        size = (int(manager.world_width * scale), int(manager.world_height * scale))
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Creature Evolution")
        viewer = SimulationViewer(screen, pygame.font.SysFont(None, 22), scale)
        clock = pygame.time.Clock()
        paused = False
        goal = manager.config.evolution.goal_x_fraction

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused

            snapshot = manager.snapshot() if paused else manager.tick()
            viewer.draw(snapshot, goal)
            pygame.display.flip()
            clock.tick(fps)

            if manager.is_finished:
                running = False
            if max_generations is not None and manager.generation >= max_generations:
                running = False
    finally:
        pygame.quit()
    logger.info("Viewer closed at generation %d", manager.generation)
