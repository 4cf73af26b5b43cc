"""Draws a Pac-Man world onto a pygame surface."""

from __future__ import annotations

import pygame

from miniconsole.hud import HudLine
from miniconsole.pacman import COLS, ROWS, TILE_SIZE, Ghost, GhostMode, GhostType

# Where the maze is shown, as fractions (left, top, width, height) of the surface.
WORLD_VIEWPORT = (0.15, 0.11, 0.7, 0.78)
# The framed plate behind the maze, as fractions of the surface.
FRAME_VIEWPORT = (0.13, 0.09, 0.74, 0.82)

FRAME_FILL = (9, 11, 18, 205)
FRAME_OUTLINE = (70, 88, 132, 175)
BACKGROUND = (10, 10, 20)
WALL_COLOR = (30, 65, 210)
PELLET_COLOR = (250, 230, 150)
PAC_COLOR = (255, 230, 70)
FRIGHTENED_COLOR = (70, 90, 255)
BLINKY_COLOR = (255, 80, 80)
PINKY_COLOR = (255, 120, 210)
INKY_COLOR = (100, 240, 255)
CLYDE_COLOR = (255, 180, 80)

PELLET_RADIUS = 2.8
POWER_PELLET_RADIUS = 5.0
PAC_RADIUS = 12.0
GHOST_RADIUS = 11.0

_GHOST_COLORS = {
    GhostType.BLINKY: BLINKY_COLOR,
    GhostType.PINKY: PINKY_COLOR,
    GhostType.INKY: INKY_COLOR,
    GhostType.CLYDE: CLYDE_COLOR,
}


def ghost_color(ghost: Ghost) -> tuple[int, int, int]:
    """Body colour of a ghost: blue while frightened, otherwise its own colour."""
    if ghost.mode is GhostMode.FRIGHTENED:
        return FRIGHTENED_COLOR
    return _GHOST_COLORS.get(ghost.type, CLYDE_COLOR)


def _rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
    return pygame.Rect(round(x), round(y), max(0, round(w)), max(0, round(h)))


def _fraction_rect(size: tuple[int, int], fractions: tuple[float, float, float, float]) -> pygame.Rect:
    sw, sh = size
    left, top, width, height = fractions
    return _rect(left * sw, top * sh, width * sw, height * sh)


def _translucent_rect(surface: pygame.Surface, rect: pygame.Rect, fill, outline) -> None:
    layer = pygame.Surface((rect.width + 2, rect.height + 2), pygame.SRCALPHA)
    pygame.draw.rect(layer, outline, layer.get_rect(), 1)
    layer.fill(fill, pygame.Rect(1, 1, rect.width, rect.height))
    surface.blit(layer, (rect.x - 1, rect.y - 1))


class PacmanView:
    """Renders the maze, pellets, Pac-Man and ghosts inside a frame, with a HUD line on top."""

    def __init__(self) -> None:
        self.hud = HudLine(16, (220, 230, 240))

    def draw(self, surface: pygame.Surface, world) -> None:
        _translucent_rect(surface, _fraction_rect(surface.get_size(), FRAME_VIEWPORT), FRAME_FILL, FRAME_OUTLINE)

        canvas = pygame.Surface((round(world.WIDTH), round(world.HEIGHT)))
        canvas.fill(BACKGROUND)

        half = TILE_SIZE * 0.5
        for y, row in enumerate(world.grid[:ROWS]):
            for x, tile in enumerate(row[:COLS]):
                left = x * TILE_SIZE
                top = y * TILE_SIZE
                if tile == "#":
                    pygame.draw.rect(canvas, WALL_COLOR, _rect(left, top, TILE_SIZE - 1, TILE_SIZE - 1))
                elif tile in ".o":
                    radius = POWER_PELLET_RADIUS if tile == "o" else PELLET_RADIUS
                    pygame.draw.circle(canvas, PELLET_COLOR, (round(left + half), round(top + half)), radius)

        pac = world.pacman
        pygame.draw.circle(canvas, PAC_COLOR, (round(pac.pos[0]), round(pac.pos[1])), PAC_RADIUS)

        for ghost in world.ghosts:
            pygame.draw.circle(
                canvas, ghost_color(ghost), (round(ghost.pos[0]), round(ghost.pos[1])), GHOST_RADIUS
            )

        target = _fraction_rect(surface.get_size(), WORLD_VIEWPORT)
        image = canvas if target.size == canvas.get_size() else pygame.transform.scale(canvas, target.size)
        surface.blit(image, target.topleft)

        self.hud.draw(surface, 34, (10, 10), surface.get_width() - 34)