"""Platformer game model: tile levels, jump physics, coins, spikes and hard-mode attacks."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from miniconsole.difficulty import GameDifficulty
from miniconsole.vec2 import Vec2

WIDTH = 480.0
HEIGHT = 640.0
TILE_SIZE = 32
COLS = 15
ROWS = 20

LEVEL_FILES = ("platformer_level1.txt", "platformer_level2.txt", "platformer_level3.txt")

FALLBACK_LEVELS: tuple[tuple[str, ...], ...] = (
    (
        "...............",
        "...............",
        "...............",
        "...............",
        "...C...........",
        "######.........",
        "...............",
        "........C......",
        "......#####....",
        "...............",
        "..........C....",
        "....#####......",
        "...............",
        "...........###.",
        "...............",
        "..C............",
        "######.........",
        ".............G.",
        "S..............",
        "###############",
    ),
    (
        "...............",
        ".............G.",
        ".......###.....",
        ".....C.........",
        "....###....X...",
        "..........###..",
        "..###........#.",
        "......X........",
        "....#####...C..",
        ".X..............",
        "...###....###...",
        ".........X......",
        ".....###........",
        "..C.........###.",
        "........X.......",
        ".####...........",
        ".......####.....",
        ".....X..........",
        "S...............",
        "###############.",
    ),
    (
        ".........G.....",
        "...###.....###.",
        ".......X.......",
        "..###.....###..",
        "...............",
        ".C...###.......",
        ".......X...###.",
        "..###.......C..",
        "......###......",
        ".X...........X.",
        "...###...###...",
        "...............",
        ".###.......###.",
        ".....X.........",
        "..C......C.....",
        "....###........",
        "........###....",
        ".X...........X.",
        "S..............",
        "###############",
    ),
)

# Extra tiles placed on each level in hard mode: (x, y, tile).
HARD_MUTATIONS: dict[int, tuple[tuple[int, int, str], ...]] = {
    0: ((5, 15, "X"), (9, 12, "X"), (6, 10, "#"), (8, 8, "#")),
    1: ((7, 15, "X"), (10, 12, "X"), (6, 7, "X"), (11, 9, "#")),
    2: ((4, 16, "X"), (10, 14, "X"), (8, 10, "X"), (12, 6, "#")),
}

ATTACK_LANES = (4, 7, 10, 12, 14, 16)

_DEFAULT_SPAWN = (48.0, 32.0)
_PLAYER_W = 24.0
_PLAYER_H = 28.0
_SHOT_SPEED = 230.0
_SHOT_RADIUS = 8.0


@dataclass(frozen=True)
class _Tuning:
    gravity: float
    fall_gravity_multiplier: float
    max_fall_speed: float
    move_speed: float
    move_accel: float
    idle_friction: float
    jump_speed: float
    coyote_time: float
    jump_buffer_time: float
    attack_interval: float


_NORMAL_TUNING = _Tuning(1200.0, 1.7, 800.0, 210.0, 1600.0, 0.82, 540.0, 0.1, 0.12, 99.0)
_HARD_TUNING = _Tuning(1320.0, 1.95, 860.0, 205.0, 1500.0, 0.84, 525.0, 0.075, 0.085, 1.55)


@dataclass
class HazardShot:
    pos: Vec2 = field(default_factory=Vec2)
    vel: Vec2 = field(default_factory=Vec2)
    radius: float = _SHOT_RADIUS
    alive: bool = True


def _cell(v: float) -> int:
    return math.floor(v / TILE_SIZE)


def _read_level(path: Path) -> list[str] | None:
    """Read a level file, padding or trimming it to the grid size; None if unreadable."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return None
    lines = [line[:COLS].ljust(COLS, ".") for line in text.splitlines() if line]
    lines = lines[:ROWS]
    lines.extend("." * COLS for _ in range(ROWS - len(lines)))
    return lines


class PlatformerWorld:
    """Gameplay-only platformer model; rendering lives elsewhere.

    A change to ``difficulty`` takes effect on the next ``reset``.
    """

    WIDTH = WIDTH
    HEIGHT = HEIGHT
    TILE_SIZE = TILE_SIZE
    COLS = COLS
    ROWS = ROWS

    def __init__(
        self,
        level_dir: str | Path = "levels",
        difficulty: GameDifficulty = GameDifficulty.NORMAL,
    ) -> None:
        self.level_dir = Path(level_dir)
        self.difficulty = difficulty
        self.move_input = 0.0
        self._levels = self._load_levels()
        self.reset()

    # -- state accessors -------------------------------------------------

    @property
    def score(self) -> int:
        return self._score

    @property
    def lives(self) -> int:
        return self._lives

    @property
    def game_over(self) -> bool:
        return self._lives <= 0

    @property
    def victory(self) -> bool:
        return self._victory

    @property
    def level_index(self) -> int:
        """One-based index of the current level."""
        return self._current_level + 1

    @property
    def level_count(self) -> int:
        return len(self._levels)

    @property
    def tiles(self) -> list[str]:
        return ["".join(row) for row in self._tiles]

    @property
    def player_pos(self) -> Vec2:
        return Vec2(self._pos.x, self._pos.y)

    @property
    def player_size(self) -> Vec2:
        return Vec2(_PLAYER_W, _PLAYER_H)

    @property
    def player_velocity(self) -> Vec2:
        return Vec2(self._vel.x, self._vel.y)

    @property
    def spawn_pos(self) -> Vec2:
        return Vec2(self._spawn.x, self._spawn.y)

    @property
    def on_ground(self) -> bool:
        return self._on_ground

    @property
    def hazard_shots(self) -> list[HazardShot]:
        return list(self._shots)

    # -- game flow --------------------------------------------------------

    def reset(self) -> None:
        """Restart from the first level with the current difficulty."""
        self._tuning = _HARD_TUNING if self._hard else _NORMAL_TUNING
        if not self._levels:
            self._levels = [list(level) for level in FALLBACK_LEVELS]
        self._load_level(0)
        self._pos = Vec2(self._spawn.x, self._spawn.y)
        self._vel = Vec2()
        self.move_input = 0.0
        self._jump_cut_requested = False
        self._on_ground = False
        self._shots: list[HazardShot] = []
        self._attack_timer = self._tuning.attack_interval * 0.55
        self._attack_index = 0
        self._coyote_left = 0.0
        self._jump_buffer_left = 0.0
        self._score = 0
        self._lives = 2 if self._hard else 3
        self._victory = False

    def queue_jump(self) -> None:
        """Ask for a jump; it stays buffered for a short time."""
        self._jump_buffer_left = self._tuning.jump_buffer_time

    def release_jump(self) -> None:
        """Cut an ongoing upward jump short."""
        self._jump_cut_requested = True

    def fixed_update(self, dt: float) -> None:
        if self.game_over or self.victory:
            return
        t = self._tuning

        self._jump_buffer_left = max(0.0, self._jump_buffer_left - dt)
        self._coyote_left = t.coyote_time if self._on_ground else max(0.0, self._coyote_left - dt)

        if abs(self.move_input) > 0.01:
            vx = self._vel.x + self.move_input * t.move_accel * dt
            self._vel.x = max(-t.move_speed, min(t.move_speed, vx))
        else:
            self._vel.x *= t.idle_friction ** (dt * 60.0)
            if abs(self._vel.x) < 3.0:
                self._vel.x = 0.0

        gravity = t.gravity * t.fall_gravity_multiplier if self._vel.y > 0.0 else t.gravity
        self._vel.y = min(self._vel.y + gravity * dt, t.max_fall_speed)

        if self._jump_buffer_left > 0.0 and (self._on_ground or self._coyote_left > 0.0):
            self._vel.y = -t.jump_speed
            self._on_ground = False
            self._coyote_left = 0.0
            self._jump_buffer_left = 0.0
        if self._jump_cut_requested and self._vel.y < 0.0:
            self._vel.y *= 0.4
        self._jump_cut_requested = False

        self._move_horizontally(dt)
        self._move_vertically(dt)

        self._collect_coin()
        self._update_hard_attacks(dt)
        if self._touches_hazard() or self._touches_shots():
            self._respawn_or_lose_life()
            return
        if self._touches_goal():
            self._score += 100
            self._advance_level_or_win()
            return
        if self._pos.y > HEIGHT + 80.0:
            self._respawn_or_lose_life()

    # -- internals --------------------------------------------------------

    @property
    def _hard(self) -> bool:
        return self.difficulty is GameDifficulty.HARD

    def _load_levels(self) -> list[list[str]]:
        levels = [lvl for lvl in (_read_level(self.level_dir / name) for name in LEVEL_FILES) if lvl]
        return levels or [list(level) for level in FALLBACK_LEVELS]

    def _load_level(self, index: int) -> None:
        self._current_level = max(0, min(index, len(self._levels) - 1))
        self._tiles = [list(row) for row in self._levels[self._current_level]]
        self._spawn = Vec2(*_DEFAULT_SPAWN)
        for y in range(ROWS):
            for x in range(COLS):
                if self._tiles[y][x] == "S":
                    self._spawn = Vec2(x * float(TILE_SIZE) + 4.0, y * float(TILE_SIZE) + 2.0)
                    self._tiles[y][x] = "."
        if self._hard:
            for x, y, tile in HARD_MUTATIONS.get(self._current_level, ()):
                if 0 <= x < COLS and 0 <= y < ROWS and self._tiles[y][x] != "G":
                    self._tiles[y][x] = tile
        self._shots = []
        self._attack_timer = self._tuning.attack_interval * 0.55
        self._attack_index = 0

    def _is_solid(self, cx: int, cy: int) -> bool:
        if cx < 0 or cx >= COLS:
            return True
        if cy < 0:
            return False
        if cy >= ROWS:
            return True
        return self._tiles[cy][cx] == "#"

    def _is_hazard(self, cx: int, cy: int) -> bool:
        if not (0 <= cx < COLS and 0 <= cy < ROWS):
            return False
        return self._tiles[cy][cx] == "X"

    @staticmethod
    def _cells_under(x: float, y: float, w: float, h: float):
        for cy in range(_cell(y), _cell(y + h - 1.0) + 1):
            for cx in range(_cell(x), _cell(x + w - 1.0) + 1):
                yield cx, cy

    def _overlaps_solid(self, x: float, y: float) -> bool:
        return any(self._is_solid(cx, cy) for cx, cy in self._cells_under(x, y, _PLAYER_W, _PLAYER_H))

    def _move_horizontally(self, dt: float) -> None:
        next_x = self._pos.x + self._vel.x * dt
        if not self._overlaps_solid(next_x, self._pos.y):
            self._pos.x = next_x
        elif self._vel.x > 0.0:
            self._pos.x = _cell(next_x + _PLAYER_W - 1.0) * float(TILE_SIZE) - _PLAYER_W
        elif self._vel.x < 0.0:
            self._pos.x = (_cell(next_x) + 1) * float(TILE_SIZE)

    def _move_vertically(self, dt: float) -> None:
        self._on_ground = False
        next_y = self._pos.y + self._vel.y * dt
        if not self._overlaps_solid(self._pos.x, next_y):
            self._pos.y = next_y
        elif self._vel.y > 0.0:
            self._pos.y = _cell(next_y + _PLAYER_H - 1.0) * float(TILE_SIZE) - _PLAYER_H
            self._vel.y = 0.0
            self._on_ground = True
        elif self._vel.y < 0.0:
            self._pos.y = (_cell(next_y) + 1) * float(TILE_SIZE)
            self._vel.y = 0.0

    def _collect_coin(self) -> None:
        tx = max(0, min(COLS - 1, _cell(self._pos.x + _PLAYER_W * 0.5)))
        ty = max(0, min(ROWS - 1, _cell(self._pos.y + _PLAYER_H * 0.5)))
        if self._tiles[ty][tx] == "C":
            self._tiles[ty][tx] = "."
            self._score += 10

    def _touches_goal(self) -> bool:
        return any(
            0 <= cx < COLS and 0 <= cy < ROWS and self._tiles[cy][cx] == "G"
            for cx, cy in self._cells_under(self._pos.x, self._pos.y, _PLAYER_W, _PLAYER_H)
        )

    def _touches_hazard(self) -> bool:
        return any(
            self._is_hazard(cx, cy)
            for cx, cy in self._cells_under(self._pos.x, self._pos.y, _PLAYER_W, _PLAYER_H)
        )

    def _touches_shots(self) -> bool:
        left, right = self._pos.x, self._pos.x + _PLAYER_W
        top, bottom = self._pos.y, self._pos.y + _PLAYER_H
        for shot in self._shots:
            if not shot.alive:
                continue
            dx = shot.pos.x - max(left, min(right, shot.pos.x))
            dy = shot.pos.y - max(top, min(bottom, shot.pos.y))
            if dx * dx + dy * dy <= shot.radius * shot.radius:
                return True
        return False

    def _respawn_or_lose_life(self) -> None:
        self._lives -= 1
        if self._lives <= 0:
            return
        self._pos = Vec2(self._spawn.x, self._spawn.y)
        self._vel = Vec2()
        self._on_ground = False
        self._shots = []
        self._attack_timer = self._tuning.attack_interval * 0.8
        self._coyote_left = 0.0
        self._jump_buffer_left = 0.0

    def _advance_level_or_win(self) -> None:
        if self._current_level + 1 >= len(self._levels):
            self._victory = True
            return
        self._load_level(self._current_level + 1)
        self._pos = Vec2(self._spawn.x, self._spawn.y)
        self._vel = Vec2()
        self.move_input = 0.0
        self._jump_cut_requested = False
        self._on_ground = False
        self._coyote_left = 0.0
        self._jump_buffer_left = 0.0
        self._score += 60

    def _spawn_hard_attack(self) -> None:
        lane = ATTACK_LANES[self._attack_index % len(ATTACK_LANES)]
        from_left = self._attack_index % 2 == 0
        self._attack_index += 1
        y = lane * float(TILE_SIZE) + TILE_SIZE * 0.5
        if from_left:
            shot = HazardShot(pos=Vec2(-12.0, y), vel=Vec2(_SHOT_SPEED, 0.0))
        else:
            shot = HazardShot(pos=Vec2(WIDTH + 12.0, y), vel=Vec2(-_SHOT_SPEED, 0.0))
        self._shots.append(shot)

    def _update_hard_attacks(self, dt: float) -> None:
        if not self._hard:
            return
        self._attack_timer -= dt
        if self._attack_timer <= 0.0:
            self._attack_timer = self._tuning.attack_interval
            self._spawn_hard_attack()
        for shot in self._shots:
            if not shot.alive:
                continue
            shot.pos = shot.pos + shot.vel * dt
            if not (-24.0 <= shot.pos.x <= WIDTH + 24.0 and -24.0 <= shot.pos.y <= HEIGHT + 24.0):
                shot.alive = False
        self._shots = [s for s in self._shots if s.alive]