from dataclasses import dataclass, field

import pygame

from miniconsole.shooter import ShooterWorld
from miniconsole.shooter_view import ShooterView
from miniconsole.vec2 import Vec2


@dataclass
class _FakeWorld:
    WIDTH: float = 480.0
    HEIGHT: float = 640.0
    player_pos: Vec2 = field(default_factory=lambda: Vec2(240.0, 400.0))
    player_radius: float = 14.0
    invulnerability_left: float = 0.0
    bullets: list = field(default_factory=list)
    enemies: list = field(default_factory=list)


def _render(world, size=(480, 640)):
    surface = pygame.Surface(size)
    ShooterView().draw(surface, world)
    return surface


def test_player_drawn_at_its_position():
    world = ShooterWorld()
    surface = _render(world)
    pos = world.player_pos
    assert tuple(surface.get_at((round(pos.x), round(pos.y))))[:3] == (120, 220, 255)
    assert tuple(surface.get_at((240, 300)))[:3] == (20, 22, 32)


def test_fired_bullet_is_drawn():
    world = ShooterWorld()
    world.fire_held = True
    world.fixed_update(1.0 / 60.0)
    live = [b for b in world.bullets if b.alive]
    assert len(live) == 1
    surface = _render(world)
    bullet = live[0]
    assert tuple(surface.get_at((round(bullet.pos.x), round(bullet.pos.y) - 6)))[:3] == (255, 230, 140)


def test_spawned_enemy_is_drawn():
    world = ShooterWorld()
    for _ in range(30):
        world.fixed_update(1.0 / 60.0)
    assert len(world.enemies) == 1
    enemy = world.enemies[0]
    surface = _render(world)
    assert tuple(surface.get_at((round(enemy.pos.x), round(enemy.pos.y))))[:3] == (255, 110, 110)


def test_invulnerable_player_blinks():
    dim = _render(_FakeWorld(invulnerability_left=0.1))
    bright = _render(_FakeWorld(invulnerability_left=1.0))
    assert tuple(dim.get_at((240, 400)))[:3] == (70, 120, 160)
    assert tuple(bright.get_at((240, 400)))[:3] == (120, 220, 255)


def test_tall_window_leaves_bars_untouched():
    sentinel = (1, 2, 3)
    surface = pygame.Surface((480, 1000))
    surface.fill(sentinel)
    ShooterView().draw(surface, _FakeWorld())
    assert tuple(surface.get_at((240, 995)))[:3] == sentinel
    assert tuple(surface.get_at((240, 500)))[:3] == (20, 22, 32)