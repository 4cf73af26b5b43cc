"""Draws a shooter world onto a pygame surface."""

from __future__ import annotations

import pygame

from miniconsole.breakout_view import letterbox_viewport
from miniconsole.hud import HudLine

BACKGROUND = (20, 22, 32)
PLAYER_COLOR = (120, 220, 255)
PLAYER_BLINK_COLOR = (70, 120, 160)
BULLET_COLOR = (255, 230, 140)
ENEMY_COLOR = (255, 110, 110)
ENEMY_OUTLINE = (160, 40, 40)


def _rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
    return pygame.Rect(round(x), round(y), round(w), round(h))


def _player_color(invulnerability_left: float) -> tuple[int, int, int]:
    if invulnerability_left > 0.0 and int(invulnerability_left * 12.0) % 2:
        return PLAYER_BLINK_COLOR
    return PLAYER_COLOR


class ShooterView:
    """Renders player, bullets and enemies, letterboxed, with a HUD line on top."""

    def __init__(self) -> None:
        self.hud = HudLine(18, (220, 230, 240))

    def draw(self, surface: pygame.Surface, world) -> None:
        canvas = pygame.Surface((round(world.WIDTH), round(world.HEIGHT)))
        canvas.fill(BACKGROUND)

        player = world.player_pos
        pygame.draw.circle(
            canvas,
            _player_color(world.invulnerability_left),
            (round(player.x), round(player.y)),
            round(world.player_radius),
        )

        for bullet in world.bullets:
            if bullet.alive:
                pygame.draw.rect(canvas, BULLET_COLOR, _rect(bullet.pos.x - 2.0, bullet.pos.y - 12.0, 4.0, 12.0))

        for enemy in world.enemies:
            if not enemy.alive:
                continue
            centre = (round(enemy.pos.x), round(enemy.pos.y))
            radius = round(enemy.radius)
            pygame.draw.circle(canvas, ENEMY_OUTLINE, centre, radius + 1)
            pygame.draw.circle(canvas, ENEMY_COLOR, centre, radius)

        left, top, width, height = letterbox_viewport(surface.get_size(), canvas.get_size())
        sw, sh = surface.get_size()
        target = _rect(left * sw, top * sh, width * sw, height * sh)
        image = canvas if target.size == canvas.get_size() else pygame.transform.scale(canvas, target.size)
        surface.blit(image, target.topleft)

        self.hud.draw(surface, 36, (14, 10), surface.get_width() - 36)