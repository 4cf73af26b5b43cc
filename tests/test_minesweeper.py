import random

import pytest

from miniconsole.minesweeper import Cell, Difficulty, MinesweeperWorld, Status


class _NoShuffle:
    """Deterministic stand-in for random.Random: leaves candidate order alone."""

    def shuffle(self, items):
        pass


@pytest.fixture
def times(tmp_path):
    return tmp_path / "times.txt"


@pytest.fixture
def world(times):
    return MinesweeperWorld(times, random.Random(1234))


@pytest.fixture
def fixed(times):
    # Mines end up at row 0 (x 0..8) and (0, 1) when the first click is at (8, 8).
    w = MinesweeperWorld(times, _NoShuffle())
    w.reveal(8, 8)
    return w


def _all_cells(w):
    return [(x, y, w.cell(x, y)) for y in range(w.rows) for x in range(w.cols)]


def test_initial_state(world):
    assert world.difficulty is Difficulty.BEGINNER
    assert (world.cols, world.rows, world.mine_count) == (9, 9, 10)
    assert world.status is Status.PLAYING
    assert world.first_click_pending is True
    assert world.remaining_safe_cells == 81 - 10


@pytest.mark.parametrize(
    "preset,dims",
    [(Difficulty.INTERMEDIATE, (16, 16, 40)), (Difficulty.EXPERT, (30, 16, 99))],
)
def test_set_difficulty(world, preset, dims):
    world.set_difficulty(preset)
    assert (world.cols, world.rows, world.mine_count) == dims
    assert world.remaining_safe_cells == dims[0] * dims[1] - dims[2]


def test_first_reveal_is_safe_area(world):
    world.reveal(4, 4)
    assert world.status is Status.PLAYING
    mines = [(x, y) for x, y, c in _all_cells(world) if c.is_mine]
    assert len(mines) == world.mine_count
    assert all(not (abs(x - 4) <= 1 and abs(y - 4) <= 1) for x, y in mines)


def test_adjacent_counts_are_consistent(world):
    world.reveal(0, 0)
    for x, y, c in _all_cells(world):
        if c.is_mine:
            continue
        expected = sum(
            1
            for dx in (-1, 0, 1)
            for dy in (-1, 0, 1)
            if (dx or dy) and world.cell(x + dx, y + dy).is_mine
        )
        assert c.adj_mines == expected


def test_revealed_count_tracks_remaining(world):
    world.reveal(4, 4)
    revealed = sum(1 for _, _, c in _all_cells(world) if c.is_revealed)
    assert world.revealed_count == revealed
    assert world.remaining_safe_cells == 81 - 10 - revealed


def test_out_of_bounds_cell_is_empty(world):
    assert world.cell(-1, 0) == Cell()
    assert world.cell(9, 9) == Cell()


def test_out_of_bounds_reveal_ignored(world):
    world.reveal(100, 100)
    assert world.first_click_pending is True


def test_flag_toggle_and_blocks_reveal(world):
    world.toggle_flag(2, 2)
    assert world.flagged_count == 1
    assert world.cell(2, 2).is_flagged
    world.reveal(2, 2)
    assert world.first_click_pending is True
    world.toggle_flag(2, 2)
    assert world.flagged_count == 0


def test_cannot_flag_revealed_cell(fixed):
    fixed.toggle_flag(8, 8)
    assert fixed.flagged_count == 0
    assert not fixed.cell(8, 8).is_flagged


def test_timer_starts_after_first_click(world):
    world.fixed_update(5.0)
    assert world.elapsed_seconds == 0.0
    world.reveal(4, 4)
    world.fixed_update(0.5)
    assert world.elapsed_seconds == pytest.approx(0.5)


def test_fixed_board_layout(fixed):
    mines = sorted((x, y) for x, y, c in _all_cells(fixed) if c.is_mine)
    assert mines == sorted([(x, 0) for x in range(9)] + [(0, 1)])


def test_reveal_mine_loses_and_shows_field(fixed):
    fixed.reveal(0, 1)
    assert fixed.status is Status.LOSE
    assert all(c.is_revealed for _, _, c in _all_cells(fixed) if c.is_mine)
    fixed.toggle_flag(5, 1)
    assert fixed.flagged_count == 0


def test_win_records_best_time(fixed, times):
    fixed.fixed_update(2.4)
    for x, y, c in _all_cells(fixed):
        if not c.is_mine:
            fixed.reveal(x, y)
    assert fixed.status is Status.WIN
    assert fixed.remaining_safe_cells == 0
    assert fixed.best_time(Difficulty.BEGINNER) == 2
    assert times.read_text(encoding="utf-8") == "beginner 2\nintermediate 0\nexpert 0\n"


def test_best_times_loaded_from_file(times):
    times.write_text("beginner 12\nintermediate 0\nexpert 300\n", encoding="utf-8")
    w = MinesweeperWorld(times, random.Random(0))
    assert w.best_time(Difficulty.BEGINNER) == 12
    assert w.best_time(Difficulty.INTERMEDIATE) == 0
    assert w.best_time(Difficulty.EXPERT) == 300


def test_slower_win_keeps_best(times):
    times.write_text("beginner 1\nintermediate 0\nexpert 0\n", encoding="utf-8")
    w = MinesweeperWorld(times, _NoShuffle())
    w.reveal(8, 8)
    w.fixed_update(30.0)
    for x, y, c in _all_cells(w):
        if not c.is_mine:
            w.reveal(x, y)
    assert w.status is Status.WIN
    assert w.best_time(Difficulty.BEGINNER) == 1


def test_chord_reveals_hidden_neighbours(fixed):
    center = fixed.cell(1, 2)
    assert center.is_revealed and center.adj_mines == 1
    fixed.toggle_flag(0, 1)
    fixed.chord_reveal(1, 2)
    assert fixed.status is Status.PLAYING
    assert fixed.cell(1, 1).is_revealed
    assert fixed.cell(2, 1).is_revealed


def test_chord_without_matching_flags_does_nothing(fixed):
    before = fixed.revealed_count
    fixed.chord_reveal(1, 2)
    assert fixed.revealed_count == before
    assert not fixed.cell(1, 1).is_revealed


def test_reset_clears_board(fixed):
    fixed.reset()
    assert fixed.first_click_pending is True
    assert all(c == Cell() for _, _, c in _all_cells(fixed))