import pytest

from miniconsole.difficulty import GameDifficulty
from miniconsole.platformer import PlatformerWorld

DT = 1.0 / 60.0


def _level(marks, floor=True):
    rows = [["."] * PlatformerWorld.COLS for _ in range(PlatformerWorld.ROWS)]
    if floor:
        rows[-1] = ["#"] * PlatformerWorld.COLS
    for (x, y), ch in marks.items():
        rows[y][x] = ch
    return "\n".join("".join(r) for r in rows) + "\n"


def _world(tmp_path, *levels, difficulty=GameDifficulty.NORMAL):
    for i, text in enumerate(levels, 1):
        (tmp_path / f"platformer_level{i}.txt").write_text(text)
    return PlatformerWorld(tmp_path, difficulty)


def _run(world, steps):
    for _ in range(steps):
        world.fixed_update(DT)


def test_fallback_levels_used_when_no_files(tmp_path):
    world = PlatformerWorld(tmp_path)
    assert world.level_count == 3
    assert world.level_index == 1
    assert world.lives == 3
    assert world.score == 0
    assert len(world.tiles) == PlatformerWorld.ROWS
    assert "S" not in "".join(world.tiles)


def test_hard_mode_has_two_lives_and_mutated_layout(tmp_path):
    normal = PlatformerWorld(tmp_path)
    hard = PlatformerWorld(tmp_path, GameDifficulty.HARD)
    assert hard.lives == 2
    assert normal.tiles[15][5] == "."
    assert hard.tiles[15][5] == "X"


def test_difficulty_change_applies_on_reset(tmp_path):
    world = PlatformerWorld(tmp_path)
    world.difficulty = GameDifficulty.HARD
    assert world.lives == 3
    world.reset()
    assert world.lives == 2


def test_short_level_file_is_padded(tmp_path):
    world = _world(tmp_path, "#\n")
    assert world.level_count == 1
    assert len(world.tiles) == PlatformerWorld.ROWS
    assert world.tiles[0] == "#" + "." * (PlatformerWorld.COLS - 1)
    assert all(row == "." * PlatformerWorld.COLS for row in world.tiles[1:])


def test_default_spawn_without_marker(tmp_path):
    world = _world(tmp_path, "...\n")
    assert world.player_pos.x == pytest.approx(48.0)
    assert world.player_pos.y == pytest.approx(32.0)


def test_player_lands_on_floor(tmp_path):
    world = _world(tmp_path, _level({(0, 18): "S"}))
    _run(world, 120)
    assert world.on_ground
    bottom = world.player_pos.y + world.player_size.y
    assert bottom == pytest.approx((PlatformerWorld.ROWS - 1) * PlatformerWorld.TILE_SIZE)
    assert world.player_velocity.y == 0.0


def test_jump_moves_player_up(tmp_path):
    world = _world(tmp_path, _level({(0, 18): "S"}))
    _run(world, 60)
    start_y = world.player_pos.y
    world.queue_jump()
    world.fixed_update(DT)
    assert world.player_velocity.y < 0.0
    assert world.player_pos.y < start_y
    assert not world.on_ground


def test_release_jump_shortens_jump(tmp_path):
    def peak(cut):
        world = _world(tmp_path, _level({(0, 18): "S"}))
        _run(world, 60)
        world.queue_jump()
        world.fixed_update(DT)
        if cut:
            world.release_jump()
        lowest = world.player_pos.y
        for _ in range(60):
            world.fixed_update(DT)
            lowest = min(lowest, world.player_pos.y)
        return lowest

    assert peak(cut=True) > peak(cut=False)


def test_right_wall_stops_player(tmp_path):
    world = _world(tmp_path, _level({(0, 18): "S"}))
    world.move_input = 1.0
    _run(world, 300)
    right = world.player_pos.x + world.player_size.x
    assert right == pytest.approx(PlatformerWorld.WIDTH)


def test_coin_is_collected(tmp_path):
    world = _world(tmp_path, _level({(0, 17): "S", (0, 18): "C"}))
    assert world.tiles[18][0] == "C"
    _run(world, 120)
    assert world.score == 10
    assert world.tiles[18][0] == "."


def test_reset_restores_coins(tmp_path):
    world = _world(tmp_path, _level({(0, 17): "S", (0, 18): "C"}))
    _run(world, 120)
    world.reset()
    assert world.tiles[18][0] == "C"
    assert world.score == 0


def test_goal_on_last_level_wins(tmp_path):
    world = _world(tmp_path, _level({(0, 18): "S", (2, 18): "G"}))
    world.move_input = 1.0
    _run(world, 120)
    assert world.victory
    assert world.score == 100
    before = world.player_pos
    world.fixed_update(DT)
    assert world.player_pos == before


def test_goal_advances_to_next_level(tmp_path):
    world = _world(
        tmp_path,
        _level({(0, 18): "S", (2, 18): "G"}),
        _level({(5, 18): "S"}),
    )
    world.move_input = 1.0
    for _ in range(120):
        world.fixed_update(DT)
        if world.level_index == 2:
            break
    assert world.level_index == 2
    assert not world.victory
    assert world.score == 100 + 60
    assert world.player_pos == world.spawn_pos
    assert world.move_input == 0.0


def test_spike_costs_a_life_and_respawns(tmp_path):
    world = _world(tmp_path, _level({(0, 17): "S", (0, 18): "X"}))
    spawn = world.player_pos
    for _ in range(120):
        world.fixed_update(DT)
        if world.lives < 3:
            break
    assert world.lives == 2
    assert world.player_pos == spawn
    assert world.player_velocity == world.player_size * 0.0


def test_repeated_spikes_end_game(tmp_path):
    world = _world(tmp_path, _level({(0, 17): "S", (0, 18): "X"}))
    _run(world, 600)
    assert world.game_over
    assert world.lives == 0
    before = world.player_pos
    world.fixed_update(DT)
    assert world.player_pos == before
    assert world.lives == 0


def test_hard_mode_spawns_shots(tmp_path):
    world = _world(tmp_path, _level({(0, 18): "S"}), difficulty=GameDifficulty.HARD)
    assert world.hazard_shots == []
    _run(world, 60)
    shots = world.hazard_shots
    assert len(shots) == 1
    shot = shots[0]
    assert shot.vel.x > 0.0
    assert shot.radius == 8.0
    tile = PlatformerWorld.TILE_SIZE
    assert shot.pos.y == pytest.approx(4 * tile + tile / 2)


def test_normal_mode_has_no_shots(tmp_path):
    world = _world(tmp_path, _level({(0, 18): "S"}))
    _run(world, 600)
    assert world.hazard_shots == []
    assert world.lives == 3