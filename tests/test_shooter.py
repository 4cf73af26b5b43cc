import pytest

from miniconsole.shooter import HEIGHT, MAX_BULLETS, WIDTH, ShooterWorld
from miniconsole.vec2 import Vec2

STEP = 1.0 / 60.0


@pytest.fixture
def world():
    return ShooterWorld()


def test_initial_state(world):
    assert world.lives == 3
    assert world.score == 0
    assert not world.game_over
    assert world.player_pos == Vec2(WIDTH * 0.5, HEIGHT - 70.0)
    assert len(world.bullets) == MAX_BULLETS
    assert not any(b.alive for b in world.bullets)
    assert world.enemies == []


def test_move_input_is_normalised(world):
    world.set_move_input(3.0, 4.0)
    assert world.move_input.length() == pytest.approx(1.0)
    world.set_move_input(0.0, 0.0)
    assert world.move_input == Vec2(0.0, 0.0)


def test_diagonal_moves_same_distance_as_straight():
    straight = ShooterWorld()
    diagonal = ShooterWorld()
    straight.set_move_input(-1.0, 0.0)
    diagonal.set_move_input(-1.0, -1.0)
    start = straight.player_pos
    straight.fixed_update(0.1)
    diagonal.fixed_update(0.1)
    assert (straight.player_pos - start).length() == pytest.approx((diagonal.player_pos - start).length())


def test_player_is_clamped_inside_the_arena(world):
    world.set_move_input(1.0, 0.0)
    for _ in range(200):
        world.fixed_update(STEP)
    assert world.player_pos.x == pytest.approx(WIDTH - world.player_radius)
    world.set_move_input(0.0, 1.0)
    for _ in range(200):
        world.fixed_update(STEP)
    assert world.player_pos.y == pytest.approx(HEIGHT - world.player_radius)


def test_firing_uses_a_bullet_slot(world):
    world.fire_held = True
    world.fixed_update(STEP)
    alive = [b for b in world.bullets if b.alive]
    assert len(alive) == 1
    assert alive[0].pos.x == world.player_pos.x
    assert alive[0].pos.y < world.player_pos.y
    assert alive[0].vel == Vec2(0.0, -520.0)


def test_no_fire_without_trigger(world):
    for _ in range(30):
        world.fixed_update(STEP)
    assert not any(b.alive for b in world.bullets)


def test_enemy_spawns_at_top(world):
    world.fixed_update(0.4)
    enemies = world.enemies
    assert len(enemies) == 1
    assert enemies[0].alive
    assert enemies[0].pos.y > 0.0
    assert enemies[0].pos.y < world.player_pos.y


def test_shooting_enemies_scores(world):
    world.fire_held = True
    for _ in range(600):
        world.fixed_update(STEP)
        assert sum(1 for b in world.bullets if b.alive) <= MAX_BULLETS
    assert world.score > 0
    assert world.score % 25 == 0


def test_contact_costs_a_life_then_grants_invulnerability(world):
    for _ in range(3000):
        world.fixed_update(STEP)
        if world.lives < 3:
            break
    assert world.lives == 2
    assert world.invulnerability_left > 0.0
    for _ in range(10):
        world.fixed_update(STEP)
    assert world.lives == 2


def test_game_over_freezes_the_world(world):
    for _ in range(20000):
        if world.game_over:
            break
        world.fixed_update(STEP)
    assert world.game_over
    assert world.lives <= 0
    score = world.score
    pos = world.player_pos
    count = len(world.enemies)
    world.set_move_input(1.0, 0.0)
    world.fixed_update(STEP)
    assert world.score == score
    assert world.player_pos == pos
    assert len(world.enemies) == count

    world.reset()
    assert world.lives == 3
    assert not world.game_over