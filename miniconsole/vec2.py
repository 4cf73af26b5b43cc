"""A small two-dimensional vector type used by the game worlds."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Vec2:
    """A 2D vector with float components."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> Vec2:
        return Vec2(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def length_sq(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_sq())

    def normalized(self) -> Vec2:
        """Unit vector in the same direction, or the zero vector if too short."""
        size = self.length()
        if size < 1e-6:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / size, self.y / size)


def dot(a: Vec2, b: Vec2) -> float:
    """Dot product of two vectors."""
    return a.x * b.x + a.y * b.y