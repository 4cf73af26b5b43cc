# miniconsole

A small collection of arcade games built around a simple split: each game has
a *world* that holds all the rules and state and advances in fixed time steps,
and a *view* that draws that world onto a pygame surface.

## Games

| Game        | World                                      | View                                           |
|-------------|--------------------------------------------|------------------------------------------------|
| Breakout    | `miniconsole.breakout.BreakoutWorld`       | `miniconsole.breakout_view.BreakoutView`       |
| Minesweeper | `miniconsole.minesweeper.MinesweeperWorld` | `miniconsole.minesweeper_view.MinesweeperView` |
| Shooter     | `miniconsole.shooter.ShooterWorld`         | `miniconsole.shooter_view.ShooterView`         |
| Maze chase  | `miniconsole.pacman.PacmanWorld`           | `miniconsole.pacman_view.PacmanView`           |
| Platformer  | `miniconsole.platformer.PlatformerWorld`   | `miniconsole.platformer_view.PlatformerView`   |

The worlds contain no drawing code, so they can be driven and tested without
a window. Each world is advanced with `fixed_update(dt)` and reports its state
through read-only properties such as `score`, `lives` and `game_over`.

Input is given to the worlds like this:

- Breakout: set `world.paddle_dir` to -1, 0 or 1; call `world.try_launch_ball()`
  to release the ball from the paddle; `world.reset_round(True)` restarts.
- Shooter: `world.set_move_input(x, y)` (normalised for you) and
  `world.fire_held = True/False`.
- Maze chase: `world.steer(Direction.UP)` and so on, with `Direction` from
  `miniconsole.pacman`; Pac-Man turns as soon as the way is open.
- Platformer: `world.move_input` in -1..1, `world.queue_jump()` on press and
  `world.release_jump()` on release for a shorter jump. Pass
  `difficulty=GameDifficulty.HARD` to get tougher physics, extra spikes,
  incoming shots and two lives; a changed `world.difficulty` applies on the
  next `reset()`.
- Minesweeper: `reveal(x, y)`, `toggle_flag(x, y)`, `chord_reveal(x, y)` and
  `set_difficulty(Difficulty.EXPERT)`.

## Shared pieces

- `miniconsole.vec2.Vec2`: a small 2D vector with `+`, `-`, scaling by a
  number, `length()`, `length_sq()`, `normalized()`, and `dot(a, b)`.
- `miniconsole.clock.GameClock`: a fixed-step accumulator. Feed it the real
  time that passed and it tells you how many fixed updates to run. It never
  returns more than six steps per frame, dropping the excess instead of
  falling further behind.
- `miniconsole.difficulty.GameDifficulty`: `NORMAL` or `HARD`; `toggled()`
  gives the other one and `label` its display name.
- `miniconsole.highscores.HighScoreBoard`: keeps the five best scores in a
  plain text file, one `game|score|timestamp` line each.
- `miniconsole.hud`: `load_font`, `fit_font_size` and `HudLine`, the one-line
  status bar every view draws at the top. Set a view's `hud.text` to change it.

## A fixed-step loop

```python
from miniconsole.clock import GameClock
from miniconsole.shooter import ShooterWorld

clock = GameClock(1 / 60)
world = ShooterWorld()
world.set_move_input(1.0, 0.0)

steps = clock.consume_real_delta(0.05)  # 0.05 s of real time passed
for _ in range(steps):
    world.fixed_update(1 / 60)
```

## Drawing with pygame

```python
import pygame

from miniconsole.breakout import BreakoutWorld
from miniconsole.breakout_view import BreakoutView
from miniconsole.clock import GameClock

pygame.init()
screen = pygame.display.set_mode((960, 720))
world, view, clock = BreakoutWorld(), BreakoutView(), GameClock(1 / 60)
timer = pygame.time.Clock()

running = True
while running:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            running = False
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
            world.try_launch_ball()
    keys = pygame.key.get_pressed()
    world.paddle_dir = keys[pygame.K_RIGHT] - keys[pygame.K_LEFT]

    for _ in range(clock.consume_real_delta(timer.tick(60) / 1000)):
        world.fixed_update(1 / 60)

    view.hud.text = f"Score {world.score}  Lives {world.lives}"
    screen.fill((18, 18, 24))
    view.draw(screen, world)
    pygame.display.flip()
```

Breakout and the shooter are drawn letterboxed to keep their aspect ratio,
the maze inside a framed area, and the platformer below the HUD strip. The
Minesweeper view fills the whole surface and takes the board origin, cell
size and an optional hovered cell: `view.draw(screen, world, 40, 60, 32, (3, 4))`.

## High scores

```python
from miniconsole.highscores import HighScoreBoard

board = HighScoreBoard("highscores.txt")
board.load()
if board.submit("Breakout", 420):
    print("New high score!")
print(board.top_score())
```

`submit` ignores scores of zero or less and scores that would not make the
top five; an accepted score is written to the file straight away. A missing
or unwritable file is not an error.

## Minesweeper

```python
import random
from miniconsole.minesweeper import MinesweeperWorld

world = MinesweeperWorld("minesweeper_times.txt", random.Random(7))
world.reveal(4, 4)       # the first reveal is always safe
world.toggle_flag(0, 0)
world.chord_reveal(4, 4)
```

Mines are placed on the first reveal, never on or next to the revealed cell.
The timer runs from that reveal, and on a win the best time for the current
difficulty is kept in the given file.

## Levels

Breakout and the platformer read their layouts from text files in the
directory given as `level_dir` (default `levels`): `breakout_level1.txt` to
`breakout_level3.txt` and `platformer_level1.txt` to `platformer_level3.txt`.
When none are found, built-in layouts are used.

## What is not included

There is no launcher: the package installs no command and opens no window on
its own, and has no game-selection menu or high-score screen. Write a pygame
loop like the one above to play a game, and use `HighScoreBoard` yourself to
record and show scores.