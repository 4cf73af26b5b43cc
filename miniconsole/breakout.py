"""Breakout game model: paddle, ball, bricks, power-ups and level progression."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from miniconsole.vec2 import Vec2

WIDTH = 480.0
HEIGHT = 640.0

LEVEL_FILES = ("breakout_level1.txt", "breakout_level2.txt", "breakout_level3.txt")
BRICK_CHARS = frozenset("#X1B")

FALLBACK_LAYOUTS: tuple[tuple[str, ...], ...] = (
    (
        "##########",
        "##########",
        "##########",
        "##########",
        "##########",
    ),
    (
        "##.####.##",
        "##########",
        ".########.",
        "##########",
        "##.####.##",
    ),
    (
        "#.#.##.#.#",
        ".########.",
        "##########",
        ".########.",
        "#.#.##.#.#",
    ),
)

_MARGIN_X = 24.0
_MARGIN_Y = 80.0
_BRICK_GAP = 6.0
_BRICK_HEIGHT = 22.0

_PADDLE_HALF_H = 10.0
_PADDLE_SPEED = 320.0
_PADDLE_HALF_W_BASE = 70.0
_PADDLE_HALF_W_BOOST = 105.0
_WIDE_PADDLE_DURATION = 8.0

_BALL_RADIUS_BASE = 7.0
_BALL_RADIUS_BOOST = 12.0
_BIG_BALL_DURATION = 7.0

_LAUNCH_VX = 160.0
_LAUNCH_VY = -220.0
_SUBSTEPS = 2


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _circle_intersects_box(c: Vec2, r: float, x: float, y: float, w: float, h: float) -> bool:
    dx = c.x - _clamp(c.x, x, x + w)
    dy = c.y - _clamp(c.y, y, y + h)
    return dx * dx + dy * dy < r * r


class PowerUpType(Enum):
    BIG_BALL = "big_ball"
    WIDE_PADDLE = "wide_paddle"


@dataclass
class Brick:
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0
    row: int = 0
    alive: bool = True


@dataclass
class PowerUp:
    type: PowerUpType = PowerUpType.BIG_BALL
    pos: Vec2 = field(default_factory=Vec2)
    vel: Vec2 = field(default_factory=Vec2)
    alive: bool = True


def _read_layout(path: Path) -> list[str]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return []
    return [line for line in text.splitlines() if line]


class BreakoutWorld:
    """Gameplay-only Breakout model; rendering lives elsewhere."""

    WIDTH = WIDTH
    HEIGHT = HEIGHT

    def __init__(self, level_dir: str | Path = "levels") -> None:
        self.level_dir = Path(level_dir)
        self.paddle_dir = 0.0
        self._layouts = self._load_layouts()
        self._current_level = 0
        self._bricks: list[Brick] = []
        self._power_ups: list[PowerUp] = []
        self._paddle = Vec2(WIDTH * 0.5, HEIGHT - 40.0)
        self._paddle_half_w = _PADDLE_HALF_W_BASE
        self._wide_paddle_left = 0.0
        self._ball = Vec2()
        self._ball_vel = Vec2()
        self._ball_radius = _BALL_RADIUS_BASE
        self._big_ball_left = 0.0
        self._ball_stuck = True
        self._lives = 3
        self._score = 0
        self._bricks_cleared = False
        self._build_bricks()
        self.reset_round(True)

    # -- state accessors -------------------------------------------------

    @property
    def lives(self) -> int:
        return self._lives

    @property
    def score(self) -> int:
        return self._score

    @property
    def game_over(self) -> bool:
        return self._lives <= 0

    @property
    def cleared(self) -> bool:
        return self._bricks_cleared

    @property
    def level_index(self) -> int:
        """One-based index of the current level."""
        return self._current_level + 1

    @property
    def level_count(self) -> int:
        return len(self._layouts)

    @property
    def paddle_center(self) -> Vec2:
        return Vec2(self._paddle.x, self._paddle.y)

    @property
    def paddle_half_extents(self) -> Vec2:
        return Vec2(self._paddle_half_w, _PADDLE_HALF_H)

    @property
    def ball_center(self) -> Vec2:
        return Vec2(self._ball.x, self._ball.y)

    @property
    def ball_radius(self) -> float:
        return self._ball_radius

    @property
    def ball_velocity(self) -> Vec2:
        return Vec2(self._ball_vel.x, self._ball_vel.y)

    @property
    def ball_stuck_to_paddle(self) -> bool:
        return self._ball_stuck

    @property
    def bricks(self) -> list[Brick]:
        return list(self._bricks)

    @property
    def power_ups(self) -> list[PowerUp]:
        return list(self._power_ups)

    @property
    def wide_paddle_time_left(self) -> float:
        return self._wide_paddle_left

    @property
    def big_ball_time_left(self) -> float:
        return self._big_ball_left

    # -- game flow --------------------------------------------------------

    def reset_round(self, full_reset: bool) -> None:
        """Put the ball back on the paddle; a full reset restarts the game."""
        if full_reset:
            self._lives = 3
            self._score = 0
            self._bricks_cleared = False
            self._current_level = 0
            self._build_bricks()
        self._clear_boosts()
        self._paddle = Vec2(WIDTH * 0.5, HEIGHT - 40.0)
        self._stick_ball()

    def try_launch_ball(self) -> None:
        """Release the ball if it is resting on the paddle."""
        if not self._ball_stuck:
            return
        self._ball_stuck = False
        if self._ball_vel.length_sq() < 1.0:
            self._ball_vel = Vec2(_LAUNCH_VX, _LAUNCH_VY)

    def fixed_update(self, dt: float) -> None:
        if self.game_over or self.cleared:
            return

        if self._wide_paddle_left > 0.0:
            self._wide_paddle_left = max(0.0, self._wide_paddle_left - dt)
        if self._big_ball_left > 0.0:
            self._big_ball_left = max(0.0, self._big_ball_left - dt)
        self._paddle_half_w = _PADDLE_HALF_W_BOOST if self._wide_paddle_left > 0.0 else _PADDLE_HALF_W_BASE
        self._ball_radius = _BALL_RADIUS_BOOST if self._big_ball_left > 0.0 else _BALL_RADIUS_BASE

        self._paddle.x = _clamp(
            self._paddle.x + self.paddle_dir * _PADDLE_SPEED * dt,
            self._paddle_half_w,
            WIDTH - self._paddle_half_w,
        )

        if self._ball_stuck:
            self._place_ball_on_paddle()
            return

        self._update_power_ups(dt)
        self._integrate_ball(dt)

    # -- internals --------------------------------------------------------

    def _load_layouts(self) -> list[list[str]]:
        layouts = [lines for lines in (_read_layout(self.level_dir / name) for name in LEVEL_FILES) if lines]
        if layouts:
            return layouts
        return [list(layout) for layout in FALLBACK_LAYOUTS]

    def _build_bricks(self) -> None:
        self._bricks = []
        if not self._layouts:
            return
        if not 0 <= self._current_level < len(self._layouts):
            self._current_level = 0
        layout = self._layouts[self._current_level]
        cols = max((len(line) for line in layout), default=0)
        if not layout or cols <= 0:
            return
        brick_w = (WIDTH - _MARGIN_X * 2.0 - _BRICK_GAP * (cols - 1)) / cols
        for row, line in enumerate(layout):
            for col, ch in enumerate(line):
                if ch not in BRICK_CHARS:
                    continue
                self._bricks.append(
                    Brick(
                        x=_MARGIN_X + col * (brick_w + _BRICK_GAP),
                        y=_MARGIN_Y + row * (_BRICK_HEIGHT + _BRICK_GAP),
                        w=brick_w,
                        h=_BRICK_HEIGHT,
                        row=row,
                    )
                )
        self._bricks_cleared = not self._bricks

    def _clear_boosts(self) -> None:
        self._power_ups = []
        self._wide_paddle_left = 0.0
        self._big_ball_left = 0.0
        self._paddle_half_w = _PADDLE_HALF_W_BASE
        self._ball_radius = _BALL_RADIUS_BASE

    def _place_ball_on_paddle(self) -> None:
        self._ball = Vec2(self._paddle.x, self._paddle.y - _PADDLE_HALF_H - self._ball_radius - 1.0)

    def _stick_ball(self) -> None:
        self._ball_stuck = True
        self._ball_vel = Vec2(_LAUNCH_VX, _LAUNCH_VY)
        self._place_ball_on_paddle()

    def _integrate_ball(self, dt: float) -> None:
        h = dt / _SUBSTEPS
        for _ in range(_SUBSTEPS):
            self._ball = self._ball + self._ball_vel * h
            self._resolve_walls()

            if self._resolve_paddle():
                continue

            for brick in self._bricks:
                if brick.alive and self._resolve_brick(brick):
                    brick.alive = False
                    self._score += 10
                    self._maybe_spawn_power_up(brick)
                    break

            if self._ball.y - self._ball_radius > HEIGHT:
                self._lives -= 1
                if not self.game_over:
                    self._stick_ball()
                return

        self._bricks_cleared = all(not b.alive for b in self._bricks)
        if self._bricks_cleared:
            self._advance_level_or_win()

    def _resolve_walls(self) -> None:
        r = self._ball_radius
        if self._ball.x - r < 0.0:
            self._ball.x = r
            self._ball_vel.x *= -1.0
        elif self._ball.x + r > WIDTH:
            self._ball.x = WIDTH - r
            self._ball_vel.x *= -1.0
        if self._ball.y - r < 0.0:
            self._ball.y = r
            self._ball_vel.y *= -1.0

    def _paddle_box(self) -> tuple[float, float, float, float]:
        return (
            self._paddle.x - self._paddle_half_w,
            self._paddle.y - _PADDLE_HALF_H,
            self._paddle_half_w * 2.0,
            _PADDLE_HALF_H * 2.0,
        )

    def _resolve_paddle(self) -> bool:
        px, py, pw, ph = self._paddle_box()
        if not _circle_intersects_box(self._ball, self._ball_radius, px, py, pw, ph):
            return False
        self._ball.y = py - self._ball_radius - 0.5
        hit = _clamp((self._ball.x - self._paddle.x) / self._paddle_half_w, -1.0, 1.0)
        angle = hit * 0.85
        speed = max(220.0, self._ball_vel.length())
        vy = -abs(math.cos(angle)) * speed
        if vy > -40.0:
            vy = -220.0
        self._ball_vel = Vec2(speed * math.sin(angle * 1.2), vy)
        return True

    def _resolve_brick(self, brick: Brick) -> bool:
        r = self._ball_radius
        if not _circle_intersects_box(self._ball, r, brick.x, brick.y, brick.w, brick.h):
            return False
        left, right = brick.x, brick.x + brick.w
        top, bottom = brick.y, brick.y + brick.h
        pen_l = max(0.0, (self._ball.x + r) - left)
        pen_r = max(0.0, right - (self._ball.x - r))
        pen_t = max(0.0, (self._ball.y + r) - top)
        pen_b = max(0.0, bottom - (self._ball.y - r))
        smallest = min(pen_l, pen_r, pen_t, pen_b)
        if smallest == pen_l:
            self._ball.x = left - r
            self._ball_vel.x *= -1.0
        elif smallest == pen_r:
            self._ball.x = right + r
            self._ball_vel.x *= -1.0
        elif smallest == pen_t:
            self._ball.y = top - r
            self._ball_vel.y *= -1.0
        else:
            self._ball.y = bottom + r
            self._ball_vel.y *= -1.0
        return True

    def _update_power_ups(self, dt: float) -> None:
        px, py, pw, ph = self._paddle_box()
        for p in self._power_ups:
            if not p.alive:
                continue
            p.pos = p.pos + p.vel * dt
            if p.pos.y > HEIGHT + 30.0:
                p.alive = False
                continue
            if px <= p.pos.x <= px + pw and py <= p.pos.y <= py + ph:
                p.alive = False
                if p.type is PowerUpType.WIDE_PADDLE:
                    self._wide_paddle_left = _WIDE_PADDLE_DURATION
                else:
                    self._big_ball_left = _BIG_BALL_DURATION
        self._power_ups = [p for p in self._power_ups if p.alive]

    def _maybe_spawn_power_up(self, brick: Brick) -> None:
        token = (brick.row * 31 + self._score + self._lives * 13) % 12
        if token not in (2, 7):
            return
        self._power_ups.append(
            PowerUp(
                type=PowerUpType.WIDE_PADDLE if token == 2 else PowerUpType.BIG_BALL,
                pos=Vec2(brick.x + brick.w * 0.5, brick.y + brick.h * 0.5),
                vel=Vec2(0.0, 120.0),
            )
        )

    def _advance_level_or_win(self) -> None:
        if self._current_level + 1 >= len(self._layouts):
            self._bricks_cleared = True
            return
        self._current_level += 1
        self._build_bricks()
        self._clear_boosts()
        self._stick_ball()