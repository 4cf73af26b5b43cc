"""Top-down shooter model: pooled bullets and enemies that seek the player."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from miniconsole.vec2 import Vec2

WIDTH = 480.0
HEIGHT = 640.0
MAX_BULLETS = 96

_PLAYER_RADIUS = 14.0
_PLAYER_SPEED = 260.0
_FIRE_INTERVAL = 0.14
_SPAWN_INTERVAL = 1.1
_MAX_ALIVE_ENEMIES = 14
_INVULN_DURATION = 1.25
_BULLET_RADIUS = 4.0


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _circles_overlap(a: Vec2, ra: float, b: Vec2, rb: float) -> bool:
    dx = a.x - b.x
    dy = a.y - b.y
    r = ra + rb
    return dx * dx + dy * dy <= r * r


@dataclass
class BulletSlot:
    alive: bool = False
    pos: Vec2 = field(default_factory=Vec2)
    vel: Vec2 = field(default_factory=Vec2)


@dataclass
class Enemy:
    pos: Vec2 = field(default_factory=Vec2)
    speed: float = 70.0
    radius: float = 14.0
    alive: bool = True


class ShooterWorld:
    """Gameplay-only shooter model; rendering lives elsewhere."""

    WIDTH = WIDTH
    HEIGHT = HEIGHT
    MAX_BULLETS = MAX_BULLETS

    def __init__(self) -> None:
        self.fire_held = False
        self._bullets = [BulletSlot() for _ in range(MAX_BULLETS)]
        self._enemies: list[Enemy] = []
        self.reset()

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
    def player_pos(self) -> Vec2:
        return Vec2(self._player.x, self._player.y)

    @property
    def player_radius(self) -> float:
        return _PLAYER_RADIUS

    @property
    def move_input(self) -> Vec2:
        return Vec2(self._move.x, self._move.y)

    @property
    def bullets(self) -> list[BulletSlot]:
        return list(self._bullets)

    @property
    def enemies(self) -> list[Enemy]:
        return list(self._enemies)

    @property
    def invulnerability_left(self) -> float:
        return self._invuln_left

    # -- game flow --------------------------------------------------------

    def reset(self) -> None:
        self._player = Vec2(WIDTH * 0.5, HEIGHT - 70.0)
        self._move = Vec2()
        self.fire_held = False
        self._fire_cooldown = 0.0
        self._spawn_timer = 0.35
        self._lives = 3
        self._score = 0
        self._invuln_left = 0.0
        self._enemies = []
        for bullet in self._bullets:
            bullet.alive = False

    def set_move_input(self, x: float, y: float) -> None:
        """Set the movement direction; it is normalised, and tiny input counts as none."""
        direction = Vec2(x, y)
        size = direction.length()
        self._move = direction * (1.0 / size) if size > 1e-4 else Vec2()

    def fixed_update(self, dt: float) -> None:
        if self.game_over:
            return
        self._invuln_left = max(0.0, self._invuln_left - dt)
        self._player = Vec2(
            _clamp(self._player.x + self._move.x * _PLAYER_SPEED * dt, _PLAYER_RADIUS, WIDTH - _PLAYER_RADIUS),
            _clamp(self._player.y + self._move.y * _PLAYER_SPEED * dt, _PLAYER_RADIUS, HEIGHT - _PLAYER_RADIUS),
        )
        self._try_spawn_enemy(dt)
        self._try_fire(dt)
        self._integrate_bullets(dt)
        self._integrate_enemies(dt)
        self._resolve_bullet_hits()
        self._resolve_player_hits()
        self._enemies = [e for e in self._enemies if e.alive]

    # -- internals --------------------------------------------------------

    def _try_spawn_enemy(self, dt: float) -> None:
        if self.game_over:
            return
        self._spawn_timer -= dt
        if self._spawn_timer > 0.0:
            return
        self._spawn_timer = _SPAWN_INTERVAL
        if sum(1 for e in self._enemies if e.alive) >= _MAX_ALIVE_ENEMIES:
            return
        n = len(self._enemies)
        self._enemies.append(
            Enemy(
                pos=Vec2(40.0 + math.fmod(n * 47.11, WIDTH - 80.0), 48.0),
                speed=65.0 + (n % 5) * 8.0,
                radius=13.0 + (n % 3),
            )
        )

    def _try_fire(self, dt: float) -> None:
        if self.game_over or not self.fire_held:
            return
        self._fire_cooldown -= dt
        if self._fire_cooldown > 0.0:
            return
        self._fire_cooldown = _FIRE_INTERVAL
        slot = next((b for b in self._bullets if not b.alive), None)
        if slot is None:
            return
        slot.alive = True
        slot.pos = self._player + Vec2(0.0, -_PLAYER_RADIUS - 4.0)
        slot.vel = Vec2(0.0, -520.0)

    def _integrate_bullets(self, dt: float) -> None:
        for b in self._bullets:
            if not b.alive:
                continue
            b.pos = b.pos + b.vel * dt
            if b.pos.y < -20.0 or b.pos.x < -20.0 or b.pos.x > WIDTH + 20.0:
                b.alive = False

    def _integrate_enemies(self, dt: float) -> None:
        for e in self._enemies:
            if not e.alive:
                continue
            to_player = self._player - e.pos
            size = to_player.length()
            heading = to_player * (1.0 / size) if size > 1e-4 else Vec2(0.0, 1.0)
            moved = e.pos + heading * (e.speed * dt)
            e.pos = Vec2(
                _clamp(moved.x, e.radius, WIDTH - e.radius),
                _clamp(moved.y, e.radius, HEIGHT - e.radius),
            )

    def _resolve_bullet_hits(self) -> None:
        for b in self._bullets:
            if not b.alive:
                continue
            for e in self._enemies:
                if e.alive and _circles_overlap(b.pos, _BULLET_RADIUS, e.pos, e.radius):
                    b.alive = False
                    e.alive = False
                    self._score += 25
                    break

    def _resolve_player_hits(self) -> None:
        if self._invuln_left > 0.0 or self.game_over:
            return
        for e in self._enemies:
            if not e.alive or not _circles_overlap(self._player, _PLAYER_RADIUS, e.pos, e.radius):
                continue
            self._lives -= 1
            self._invuln_left = _INVULN_DURATION
            # Clear nearby threats so one contact does not drain several lives.
            for other in self._enemies:
                if other.alive and _circles_overlap(self._player, _PLAYER_RADIUS * 3.0, other.pos, other.radius):
                    other.alive = False
            return