"""Pac-Man game model: maze, pellets, ghost modes and ghost targeting."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field, replace
from enum import Enum

COLS = 15
ROWS = 15
TILE_SIZE = 32
WIDTH = float(COLS * TILE_SIZE)
HEIGHT = float(ROWS * TILE_SIZE)

Tile = tuple[int, int]

BASE_GRID: tuple[str, ...] = (
    "###############",
    "#o...........o#",
    "#.###.###.###.#",
    "#.............#",
    "#.###.#.#.###.#",
    "#.....#.#.....#",
    "###.#.#.#.#.###",
    "#...#.....#...#",
    "#.#.##...##.#.#",
    "#...#.....#...#",
    "###.#.#.#.#.###",
    "#.....#.#.....#",
    "#.###.###.###.#",
    "#o...........o#",
    "###############",
)

MODE_DURATIONS = (7.0, 20.0, 7.0, 20.0, 5.0, 20.0, 5.0)
FINAL_MODE_TIME = 9999.0

HOUSE_TILE: Tile = (7, 7)
PAC_START: Tile = (7, 11)

_PAC_SPEED = 98.0
_FRIGHTENED_TIME = 6.0
_COLLIDE_DIST = 14.0
_TILE_CENTER_TOLERANCE = 0.12


class GhostMode(Enum):
    """Ghost behaviour; the value is the display name."""

    SCATTER = "Scatter"
    CHASE = "Chase"
    FRIGHTENED = "Frightened"
    EATEN = "Eaten"

    @property
    def label(self) -> str:
        return self.value


class GhostType(Enum):
    BLINKY = "blinky"
    PINKY = "pinky"
    INKY = "inky"
    CLYDE = "clyde"


class Direction(Enum):
    """Movement direction; the value is the tile step (dx, dy)."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    NONE = (0, 0)

    @property
    def vector(self) -> Tile:
        return self.value

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.NONE: Direction.NONE,
}

_GHOST_SCAN_ORDER = (Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT)


def _step(tile: Tile, direction: Direction, times: int = 1) -> Tile:
    dx, dy = direction.vector
    return tile[0] + dx * times, tile[1] + dy * times


def tile_center(tile: Tile) -> tuple[float, float]:
    """Pixel position of the centre of a tile."""
    return tile[0] * TILE_SIZE + TILE_SIZE * 0.5, tile[1] * TILE_SIZE + TILE_SIZE * 0.5


def tile_from_pos(x: float, y: float) -> Tile:
    """Tile containing a pixel position, clamped to the maze."""
    tx = math.floor(x / TILE_SIZE)
    ty = math.floor(y / TILE_SIZE)
    return max(0, min(COLS - 1, tx)), max(0, min(ROWS - 1, ty))


def _is_tile_center(x: float, y: float) -> bool:
    tx = (x - TILE_SIZE * 0.5) / TILE_SIZE
    ty = (y - TILE_SIZE * 0.5) / TILE_SIZE
    return abs(tx - round(tx)) < _TILE_CENTER_TOLERANCE and abs(ty - round(ty)) < _TILE_CENTER_TOLERANCE


def _tile_distance(a: Tile, b: Tile) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return math.sqrt(dx * dx + dy * dy)


@dataclass
class Ghost:
    tile: Tile = (0, 0)
    target_tile: Tile = (0, 0)
    scatter_corner: Tile = (0, 0)
    direction: Direction = Direction.NONE
    mode: GhostMode = GhostMode.SCATTER
    type: GhostType = GhostType.BLINKY
    speed: float = 100.0
    frightened_timer: float = 0.0
    pos: tuple[float, float] = (0.0, 0.0)


@dataclass
class Pac:
    tile: Tile = (0, 0)
    direction: Direction = Direction.LEFT
    desired: Direction = Direction.LEFT
    pos: tuple[float, float] = field(default=(0.0, 0.0))


class PacmanWorld:
    """Gameplay-only Pac-Man model; rendering lives elsewhere."""

    COLS = COLS
    ROWS = ROWS
    TILE_SIZE = TILE_SIZE
    WIDTH = WIDTH
    HEIGHT = HEIGHT

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._grid: list[list[str]] = []
        self._pac = Pac()
        self._ghosts: list[Ghost] = []
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
        return self._pellets_remaining <= 0

    @property
    def pellets_remaining(self) -> int:
        return self._pellets_remaining

    @property
    def global_mode(self) -> GhostMode:
        return self._global_mode

    @property
    def grid(self) -> list[str]:
        return ["".join(row) for row in self._grid]

    @property
    def pacman(self) -> Pac:
        return replace(self._pac)

    @property
    def ghosts(self) -> list[Ghost]:
        return [replace(g) for g in self._ghosts]

    # -- game flow --------------------------------------------------------

    def reset(self) -> None:
        """Restart the game with a full maze and three lives."""
        self._grid = [list(row) for row in BASE_GRID]
        self._score = 0
        self._lives = 3
        self._pellets_remaining = sum(1 for row in self._grid for c in row if c in ".o")
        self._global_mode = GhostMode.SCATTER
        self._mode_step = 0
        self._mode_timer = MODE_DURATIONS[0]
        self._reset_round_positions()
        px, py = self._pac.tile
        if self._grid[py][px] == ".":
            self._grid[py][px] = " "
            self._pellets_remaining -= 1

    def steer(self, direction: Direction) -> None:
        """Set the direction Pac-Man turns to when it next can."""
        self._pac.desired = direction

    def fixed_update(self, dt: float) -> None:
        if self.game_over or self.victory:
            return
        self._update_mode_timer(dt)
        self._update_pacman(dt)
        self._update_ghosts(dt)
        self._handle_collisions()

    # -- internals --------------------------------------------------------

    def _is_wall(self, tile: Tile) -> bool:
        x, y = tile
        if not (0 <= x < COLS and 0 <= y < ROWS):
            return True
        return self._grid[y][x] == "#"

    def _reset_round_positions(self) -> None:
        self._pac = Pac(
            tile=PAC_START,
            direction=Direction.LEFT,
            desired=Direction.LEFT,
            pos=tile_center(PAC_START),
        )
        specs = (
            ((7, 7), (COLS - 2, 1), Direction.LEFT, GhostType.BLINKY, 82.0),
            ((6, 7), (1, 1), Direction.RIGHT, GhostType.PINKY, 80.0),
            ((8, 7), (COLS - 2, ROWS - 2), Direction.LEFT, GhostType.INKY, 79.0),
            ((7, 8), (1, ROWS - 2), Direction.UP, GhostType.CLYDE, 78.0),
        )
        self._ghosts = [
            Ghost(
                tile=tile,
                target_tile=(0, 0),
                scatter_corner=corner,
                direction=direction,
                mode=self._global_mode,
                type=kind,
                speed=speed,
                frightened_timer=0.0,
                pos=tile_center(tile),
            )
            for tile, corner, direction, kind, speed in specs
        ]

    def _switch_global_mode(self) -> None:
        self._global_mode = GhostMode.CHASE if self._global_mode is GhostMode.SCATTER else GhostMode.SCATTER
        for g in self._ghosts:
            if g.mode not in (GhostMode.FRIGHTENED, GhostMode.EATEN):
                g.mode = self._global_mode
                g.direction = g.direction.opposite

    def _update_mode_timer(self, dt: float) -> None:
        if any(g.mode is GhostMode.FRIGHTENED for g in self._ghosts):
            return
        self._mode_timer -= dt
        if self._mode_timer > 0.0:
            return
        self._switch_global_mode()
        last = len(MODE_DURATIONS) - 1
        if self._mode_step < last:
            self._mode_step += 1
        self._mode_timer = MODE_DURATIONS[self._mode_step]
        if self._mode_step >= last:
            self._mode_timer = FINAL_MODE_TIME

    def _consume_pellet(self) -> None:
        x, y = self._pac.tile
        tile = self._grid[y][x]
        if tile == ".":
            self._grid[y][x] = " "
            self._score += 10
            self._pellets_remaining -= 1
        elif tile == "o":
            self._grid[y][x] = " "
            self._score += 50
            self._pellets_remaining -= 1
            self._trigger_frightened()

    def _trigger_frightened(self) -> None:
        for g in self._ghosts:
            if g.mode is GhostMode.EATEN:
                continue
            g.mode = GhostMode.FRIGHTENED
            g.frightened_timer = _FRIGHTENED_TIME
            g.direction = g.direction.opposite

    def _update_pacman(self, dt: float) -> None:
        pac = self._pac
        if _is_tile_center(*pac.pos):
            pac.tile = tile_from_pos(*pac.pos)
            if pac.desired is not Direction.NONE and not self._is_wall(_step(pac.tile, pac.desired)):
                pac.direction = pac.desired
            if pac.direction is not Direction.NONE and self._is_wall(_step(pac.tile, pac.direction)):
                pac.direction = Direction.NONE
        dx, dy = pac.direction.vector
        pac.pos = (pac.pos[0] + dx * _PAC_SPEED * dt, pac.pos[1] + dy * _PAC_SPEED * dt)
        pac.tile = tile_from_pos(*pac.pos)
        self._consume_pellet()

    def _compute_target(self, g: Ghost, blinky_tile: Tile) -> Tile:
        if g.mode is GhostMode.SCATTER:
            return g.scatter_corner
        if g.mode is GhostMode.EATEN:
            return HOUSE_TILE
        if g.mode is GhostMode.FRIGHTENED:
            return g.tile
        pac_tile = self._pac.tile
        if g.type is GhostType.PINKY:
            return _step(pac_tile, self._pac.direction, 4)
        if g.type is GhostType.INKY:
            pivot = _step(pac_tile, self._pac.direction, 2)
            return 2 * pivot[0] - blinky_tile[0], 2 * pivot[1] - blinky_tile[1]
        if g.type is GhostType.CLYDE:
            return pac_tile if _tile_distance(g.tile, pac_tile) > 8.0 else g.scatter_corner
        return pac_tile

    def _choose_ghost_direction(self, g: Ghost, frightened_random: bool) -> Direction:
        back = g.direction.opposite
        valid = [d for d in _GHOST_SCAN_ORDER if d is not back and not self._is_wall(_step(g.tile, d))]
        if not valid:
            return back
        if frightened_random:
            return self._rng.choice(valid)
        best = valid[0]
        best_dist = math.inf
        for d in valid:
            dist = _tile_distance(_step(g.tile, d), g.target_tile)
            if dist < best_dist:
                best_dist = dist
                best = d
        return best

    def _update_single_ghost(self, g: Ghost, blinky_tile: Tile, dt: float) -> None:
        if g.mode is GhostMode.FRIGHTENED:
            g.frightened_timer -= dt
            if g.frightened_timer <= 0.0:
                g.mode = self._global_mode
        if g.mode is GhostMode.EATEN and g.tile == HOUSE_TILE:
            g.mode = self._global_mode

        if g.mode is GhostMode.FRIGHTENED:
            g.speed = 60.0
        elif g.mode is GhostMode.EATEN:
            g.speed = 150.0
        else:
            g.speed = 84.0 if g.type is GhostType.BLINKY else 80.0

        if _is_tile_center(*g.pos):
            g.tile = tile_from_pos(*g.pos)
            g.target_tile = self._compute_target(g, blinky_tile)
            options = sum(1 for d in _GHOST_SCAN_ORDER if not self._is_wall(_step(g.tile, d)))
            blocked_forward = self._is_wall(_step(g.tile, g.direction))
            if options >= 3 or blocked_forward or g.direction is Direction.NONE:
                g.direction = self._choose_ghost_direction(g, g.mode is GhostMode.FRIGHTENED)

        dx, dy = g.direction.vector
        g.pos = (g.pos[0] + dx * g.speed * dt, g.pos[1] + dy * g.speed * dt)
        g.tile = tile_from_pos(*g.pos)

    def _update_ghosts(self, dt: float) -> None:
        if not self._ghosts:
            return
        blinky_tile = self._ghosts[0].tile
        for g in self._ghosts:
            self._update_single_ghost(g, blinky_tile, dt)

    def _handle_collisions(self) -> None:
        px, py = self._pac.pos
        for g in self._ghosts:
            dx = g.pos[0] - px
            dy = g.pos[1] - py
            if dx * dx + dy * dy > _COLLIDE_DIST * _COLLIDE_DIST:
                continue
            if g.mode is GhostMode.FRIGHTENED:
                self._score += 200
                g.mode = GhostMode.EATEN
                g.pos = tile_center(HOUSE_TILE)
                g.tile = HOUSE_TILE
                g.direction = Direction.UP
                continue
            if g.mode is GhostMode.EATEN:
                continue
            self._lives -= 1
            if self._lives <= 0:
                return
            self._reset_round_positions()
            return