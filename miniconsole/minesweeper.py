"""Minesweeper game model: board, reveal flood fill, flags, chords and best times."""

from __future__ import annotations

import random
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Difficulty(Enum):
    """Board presets as (columns, rows, mines)."""

    BEGINNER = ("beginner", 9, 9, 10)
    INTERMEDIATE = ("intermediate", 16, 16, 40)
    EXPERT = ("expert", 30, 16, 99)

    def __init__(self, key: str, cols: int, rows: int, mines: int) -> None:
        self.key = key
        self.cols = cols
        self.rows = rows
        self.mines = mines


class Status(Enum):
    PLAYING = "playing"
    WIN = "win"
    LOSE = "lose"


@dataclass
class Cell:
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adj_mines: int = 0


class MinesweeperWorld:
    """Minesweeper game state. Mines are placed on the first reveal, away from it."""

    def __init__(
        self,
        times_path: str | Path = "minesweeper_times.txt",
        rng: random.Random | None = None,
    ) -> None:
        self.times_path = Path(times_path)
        self._rng = rng if rng is not None else random.Random()
        self._difficulty = Difficulty.BEGINNER
        self._best: dict[Difficulty, int] = {d: 0 for d in Difficulty}
        self._load_best_times()
        self.reset()

    # -- state accessors -------------------------------------------------

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def status(self) -> Status:
        return self._status

    @property
    def rows(self) -> int:
        return self._difficulty.rows

    @property
    def cols(self) -> int:
        return self._difficulty.cols

    @property
    def mine_count(self) -> int:
        return self._difficulty.mines

    @property
    def flagged_count(self) -> int:
        return self._flagged_count

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def remaining_safe_cells(self) -> int:
        return self._remaining_safe

    @property
    def first_click_pending(self) -> bool:
        return self._first_click_pending

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed

    def best_time(self, difficulty: Difficulty) -> int:
        """Best winning time in whole seconds for a preset, 0 if none."""
        return self._best[difficulty]

    def cell(self, x: int, y: int) -> Cell:
        """The cell at (x, y); an empty cell when out of bounds."""
        if not self._in_bounds(x, y):
            return Cell()
        return self._cells[self._index(x, y)]

    # -- game flow --------------------------------------------------------

    def set_difficulty(self, preset: Difficulty) -> None:
        self._difficulty = preset
        self.reset()

    def reset(self) -> None:
        self._status = Status.PLAYING
        self._flagged_count = 0
        self._revealed_count = 0
        self._remaining_safe = self.rows * self.cols - self.mine_count
        self._first_click_pending = True
        self._elapsed = 0.0
        self._cells = [Cell() for _ in range(self.rows * self.cols)]

    def fixed_update(self, dt: float) -> None:
        if self._status is Status.PLAYING and not self._first_click_pending:
            self._elapsed += dt

    def reveal(self, x: int, y: int) -> None:
        """Reveal a cell, flooding outward from cells with no adjacent mines."""
        if not self._in_bounds(x, y) or self._status is not Status.PLAYING:
            return
        start = self._cells[self._index(x, y)]
        if start.is_flagged or start.is_revealed:
            return
        if self._first_click_pending:
            self._place_mines(x, y)
            self._first_click_pending = False
        if start.is_mine:
            start.is_revealed = True
            self._status = Status.LOSE
            for c in self._cells:
                if c.is_mine:
                    c.is_revealed = True
            return

        queue = deque([(x, y)])
        while queue:
            cx, cy = queue.popleft()
            c = self._cells[self._index(cx, cy)]
            if c.is_revealed or c.is_flagged or c.is_mine:
                continue
            c.is_revealed = True
            self._revealed_count += 1
            self._remaining_safe -= 1
            if c.adj_mines != 0:
                continue
            for nx, ny in self._neighbors(cx, cy):
                n = self._cells[self._index(nx, ny)]
                if not (n.is_revealed or n.is_mine or n.is_flagged):
                    queue.append((nx, ny))
        self._check_win()

    def toggle_flag(self, x: int, y: int) -> None:
        if not self._in_bounds(x, y) or self._status is not Status.PLAYING:
            return
        c = self._cells[self._index(x, y)]
        if c.is_revealed:
            return
        c.is_flagged = not c.is_flagged
        self._flagged_count += 1 if c.is_flagged else -1

    def chord_reveal(self, x: int, y: int) -> None:
        """Reveal hidden neighbours of a number whose flag count matches it."""
        if not self._in_bounds(x, y) or self._status is not Status.PLAYING:
            return
        center = self._cells[self._index(x, y)]
        if not center.is_revealed or center.adj_mines <= 0:
            return
        flagged = 0
        hidden: list[tuple[int, int]] = []
        for nx, ny in self._neighbors(x, y):
            n = self._cells[self._index(nx, ny)]
            if n.is_flagged:
                flagged += 1
            elif not n.is_revealed:
                hidden.append((nx, ny))
        if flagged != center.adj_mines:
            return
        for nx, ny in hidden:
            self.reveal(nx, ny)
            if self._status is Status.LOSE:
                return

    # -- internals --------------------------------------------------------

    def _index(self, x: int, y: int) -> int:
        return y * self.cols + x

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def _neighbors(self, x: int, y: int) -> Iterator[tuple[int, int]]:
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if self._in_bounds(nx, ny):
                    yield nx, ny

    def _place_mines(self, safe_x: int, safe_y: int) -> None:
        candidates = [
            i
            for i in range(self.rows * self.cols)
            if not (abs(i % self.cols - safe_x) <= 1 and abs(i // self.cols - safe_y) <= 1)
        ]
        self._rng.shuffle(candidates)
        for idx in candidates[: self.mine_count]:
            self._cells[idx].is_mine = True
        self._compute_adjacent_counts()

    def _compute_adjacent_counts(self) -> None:
        for y in range(self.rows):
            for x in range(self.cols):
                c = self._cells[self._index(x, y)]
                if c.is_mine:
                    c.adj_mines = 0
                    continue
                c.adj_mines = sum(
                    1 for nx, ny in self._neighbors(x, y) if self._cells[self._index(nx, ny)].is_mine
                )

    def _check_win(self) -> None:
        if self._remaining_safe > 0 or self._status is not Status.PLAYING:
            return
        self._status = Status.WIN
        elapsed = int(self._elapsed + 0.5)
        best = self._best[self._difficulty]
        if best == 0 or elapsed < best:
            self._best[self._difficulty] = elapsed
            self._save_best_times()

    def _load_best_times(self) -> None:
        self._best = {d: 0 for d in Difficulty}
        try:
            tokens = self.times_path.read_text(encoding="utf-8").split()
        except OSError:
            return
        by_key = {d.key: d for d in Difficulty}
        for key, value_text in zip(tokens[::2], tokens[1::2]):
            try:
                value = int(value_text)
            except ValueError:
                break
            if key in by_key:
                self._best[by_key[key]] = value

    def _save_best_times(self) -> None:
        content = "".join(f"{d.key} {self._best[d]}\n" for d in Difficulty)
        try:
            self.times_path.write_text(content, encoding="utf-8")
        except OSError:
            return