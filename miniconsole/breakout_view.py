"""Draws a Breakout world onto a pygame surface."""

from __future__ import annotations

import pygame

from miniconsole.breakout import PowerUpType
from miniconsole.hud import HudLine

BACKGROUND = (26, 28, 36)
PADDLE_COLOR = (240, 240, 245)
BALL_COLOR = (255, 210, 120)
WIDE_PADDLE_COLOR = (150, 120, 255)
BIG_BALL_COLOR = (120, 245, 230)

# Top to bottom: red, orange, yellow, green, blue.
_BRICK_PALETTE = (
    (225, 80, 80),
    (240, 150, 70),
    (235, 215, 90),
    (90, 205, 120),
    (95, 150, 240),
)


def brick_color_for_row(row: int) -> tuple[int, int, int]:
    """Fill colour for bricks on the given row; rows past either end use the end colour."""
    return _BRICK_PALETTE[max(0, min(len(_BRICK_PALETTE) - 1, row))]


def letterbox_viewport(
    window_size: tuple[float, float], world_size: tuple[float, float]
) -> tuple[float, float, float, float]:
    """Centred viewport, as fractions (left, top, width, height), that keeps the world's aspect."""
    win_w, win_h = window_size
    world_w, world_h = world_size
    win_ratio = win_w / win_h
    world_ratio = world_w / world_h
    if win_ratio > world_ratio:
        width = world_ratio / win_ratio
        return (1.0 - width) * 0.5, 0.0, width, 1.0
    if win_ratio < world_ratio:
        height = win_ratio / world_ratio
        return 0.0, (1.0 - height) * 0.5, 1.0, height
    return 0.0, 0.0, 1.0, 1.0


def _rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
    return pygame.Rect(round(x), round(y), round(w), round(h))


def _present(surface: pygame.Surface, canvas: pygame.Surface) -> None:
    left, top, width, height = letterbox_viewport(surface.get_size(), canvas.get_size())
    sw, sh = surface.get_size()
    target = _rect(left * sw, top * sh, width * sw, height * sh)
    image = canvas if target.size == canvas.get_size() else pygame.transform.scale(canvas, target.size)
    surface.blit(image, target.topleft)


class BreakoutView:
    """Renders bricks, paddle, ball and power-ups, letterboxed, with a HUD line on top."""

    def __init__(self) -> None:
        self.hud = HudLine(18, (220, 220, 230))

    def draw(self, surface: pygame.Surface, world) -> None:
        canvas = pygame.Surface((round(world.WIDTH), round(world.HEIGHT)))
        canvas.fill(BACKGROUND)

        for brick in world.bricks:
            if not brick.alive:
                continue
            fill = brick_color_for_row(brick.row)
            outline = tuple(c // 2 for c in fill)
            pygame.draw.rect(canvas, outline, _rect(brick.x, brick.y, brick.w, brick.h))
            pygame.draw.rect(canvas, fill, _rect(brick.x + 1.0, brick.y + 1.0, brick.w - 2.0, brick.h - 2.0))

        paddle = world.paddle_center
        half = world.paddle_half_extents
        pygame.draw.rect(canvas, PADDLE_COLOR, _rect(paddle.x - half.x, paddle.y - half.y, half.x * 2, half.y * 2))

        ball = world.ball_center
        pygame.draw.circle(canvas, BALL_COLOR, (round(ball.x), round(ball.y)), round(world.ball_radius))

        for power_up in world.power_ups:
            if not power_up.alive:
                continue
            color = WIDE_PADDLE_COLOR if power_up.type is PowerUpType.WIDE_PADDLE else BIG_BALL_COLOR
            pygame.draw.rect(canvas, color, _rect(power_up.pos.x - 8.0, power_up.pos.y - 8.0, 16.0, 16.0))

        _present(surface, canvas)
        self.hud.draw(surface, 36, (16, 12), surface.get_width() - 36)