import pytest

from miniconsole.breakout import WIDTH, BreakoutWorld
from miniconsole.vec2 import Vec2

STEP = 1.0 / 60.0


def write_levels(directory, *layouts):
    for index, lines in enumerate(layouts, start=1):
        (directory / f"breakout_level{index}.txt").write_text("\n".join(lines) + "\n", encoding="utf-8")


@pytest.fixture
def world(tmp_path):
    return BreakoutWorld(tmp_path)


def test_fallback_layouts_used_without_files(world):
    assert world.level_count == 3
    assert world.level_index == 1
    assert world.lives == 3
    assert world.score == 0
    assert not world.cleared
    assert not world.game_over
    assert world.bricks
    assert all(b.alive for b in world.bricks)


def test_custom_layout_reads_brick_chars_and_skips_blank_lines(tmp_path):
    write_levels(tmp_path, ["X.1B", "", "#"])
    world = BreakoutWorld(tmp_path)
    bricks = world.bricks
    assert world.level_count == 1
    assert [b.row for b in bricks] == [0, 0, 0, 1]
    assert bricks[0].x == 24.0
    assert bricks[0].y == 80.0
    assert bricks[1].x < bricks[2].x
    assert bricks[3].x == bricks[0].x
    assert bricks[3].y > bricks[0].y
    assert len({b.w for b in bricks}) == 1


def test_layout_without_bricks_is_cleared_and_frozen(tmp_path):
    write_levels(tmp_path, ["...."])
    world = BreakoutWorld(tmp_path)
    assert world.cleared
    before = world.paddle_center
    world.paddle_dir = 1.0
    world.fixed_update(STEP)
    assert world.paddle_center == before


def test_ball_rides_on_paddle_until_launched(world):
    world.paddle_dir = 1.0
    for _ in range(30):
        world.fixed_update(STEP)
    assert world.ball_stuck_to_paddle
    assert world.ball_center.x == world.paddle_center.x
    assert world.ball_center.y < world.paddle_center.y


def test_paddle_is_clamped_to_the_walls(world):
    world.paddle_dir = 1.0
    for _ in range(300):
        world.fixed_update(STEP)
    assert world.paddle_center.x == pytest.approx(WIDTH - world.paddle_half_extents.x)
    world.paddle_dir = -1.0
    for _ in range(300):
        world.fixed_update(STEP)
    assert world.paddle_center.x == pytest.approx(world.paddle_half_extents.x)


def test_launch_sends_ball_upwards(world):
    start = world.ball_center
    world.try_launch_ball()
    assert world.ball_velocity == Vec2(160.0, -220.0)
    world.fixed_update(STEP)
    assert not world.ball_stuck_to_paddle
    assert world.ball_center.y < start.y
    assert world.ball_center.x > start.x


def test_missing_the_ball_costs_a_life(tmp_path):
    write_levels(tmp_path, ["#.........."])
    world = BreakoutWorld(tmp_path)
    world.paddle_dir = 1.0
    world.try_launch_ball()
    for _ in range(480):
        world.fixed_update(STEP)
    assert world.lives == 2
    assert world.ball_stuck_to_paddle
    assert world.ball_center.x == world.paddle_center.x

    world.reset_round(True)
    assert world.lives == 3
    assert world.score == 0


def test_score_counts_destroyed_bricks(world):
    initial = len(world.bricks)
    for _ in range(3000):
        if world.game_over or world.level_index != 1:
            break
        world.try_launch_ball()
        dx = world.ball_center.x - world.paddle_center.x
        world.paddle_dir = 0.0 if abs(dx) < 4.0 else (1.0 if dx > 0 else -1.0)
        world.fixed_update(STEP)
        if world.level_index == 1:
            destroyed = sum(1 for b in world.bricks if not b.alive)
            assert world.score == 10 * destroyed
        assert world.lives <= 3
    assert world.score > 0
    assert len(world.bricks) <= initial or world.level_index > 1