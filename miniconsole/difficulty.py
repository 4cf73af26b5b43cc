"""Global difficulty setting shared by the games."""

from __future__ import annotations

from enum import Enum


class GameDifficulty(Enum):
    """Difficulty level; the value is the display name."""

    NORMAL = "Normal"
    HARD = "Hard"

    @property
    def label(self) -> str:
        """Name shown to the player."""
        return self.value

    def toggled(self) -> GameDifficulty:
        """The other difficulty."""
        return GameDifficulty.NORMAL if self is GameDifficulty.HARD else GameDifficulty.HARD