"""Fixed-step simulation clock with an accumulator."""

from __future__ import annotations

MAX_STEPS_PER_FRAME = 6


class GameClock:
    """Turns real elapsed time into a count of fixed simulation steps.

    Leftover time is carried between frames. If a frame would need more than
    ``MAX_STEPS_PER_FRAME`` steps, the excess time is dropped.
    """

    def __init__(self, fixed_step: float) -> None:
        self.fixed_step = fixed_step
        self._accumulator = 0.0

    def consume_real_delta(self, real_delta: float) -> int:
        """Add ``real_delta`` seconds and return how many fixed steps to run."""
        self._accumulator += real_delta
        steps = 0
        while self._accumulator >= self.fixed_step:
            self._accumulator -= self.fixed_step
            steps += 1
            if steps >= MAX_STEPS_PER_FRAME:
                self._accumulator = 0.0
                break
        return steps