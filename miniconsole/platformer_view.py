"""Draws a platformer world onto a pygame surface."""

from __future__ import annotations

import pygame

from miniconsole.hud import HudLine
from miniconsole.platformer import COLS, ROWS, TILE_SIZE

# The top strip is kept for the HUD so it never hides the player.
WORLD_VIEWPORT = (0.0, 0.07, 1.0, 0.93)

BACKGROUND = (24, 30, 44)
TILE_COLOR = (90, 105, 125)
COIN_COLOR = (245, 220, 90)
GOAL_COLOR = (120, 240, 150)
SPIKE_COLOR = (255, 120, 120)
SHOT_COLOR = (255, 130, 120)
PLAYER_COLOR = (130, 210, 255)

COIN_RADIUS = 6.0


def _rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
    return pygame.Rect(round(x), round(y), max(0, round(w)), max(0, round(h)))


class PlatformerView:
    """Renders tiles, coins, goal, spikes, hazard shots and the player, with a HUD line on top."""

    def __init__(self) -> None:
        self.hud = HudLine(18, (225, 235, 245))

    def draw(self, surface: pygame.Surface, world) -> None:
        canvas = pygame.Surface((round(world.WIDTH), round(world.HEIGHT)))
        canvas.fill(BACKGROUND)

        half = TILE_SIZE * 0.5
        for y, row in enumerate(world.tiles[:ROWS]):
            for x, tile in enumerate(row[:COLS]):
                left = x * TILE_SIZE
                top = y * TILE_SIZE
                if tile == "#":
                    pygame.draw.rect(canvas, TILE_COLOR, _rect(left, top, TILE_SIZE - 1, TILE_SIZE - 1))
                elif tile == "C":
                    pygame.draw.circle(canvas, COIN_COLOR, (round(left + half), round(top + half)), COIN_RADIUS)
                elif tile == "G":
                    pygame.draw.rect(canvas, GOAL_COLOR, _rect(left + 7.0, top + 3.0, 18.0, 26.0))
                elif tile == "X":
                    pygame.draw.rect(canvas, SPIKE_COLOR, _rect(left + 4.0, top + 18.0, 24.0, 10.0))

        for shot in world.hazard_shots:
            if shot.alive:
                pygame.draw.circle(canvas, SHOT_COLOR, (round(shot.pos.x), round(shot.pos.y)), shot.radius)

        pos = world.player_pos
        size = world.player_size
        pygame.draw.rect(canvas, PLAYER_COLOR, _rect(pos.x, pos.y, size.x, size.y))

        sw, sh = surface.get_size()
        left, top, width, height = WORLD_VIEWPORT
        target = _rect(left * sw, top * sh, width * sw, height * sh)
        image = canvas if target.size == canvas.get_size() else pygame.transform.scale(canvas, target.size)
        surface.blit(image, target.topleft)

        self.hud.draw(surface, 40, (14, 10), surface.get_width() - 36)