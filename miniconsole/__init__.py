"""Arcade game worlds (Breakout, Minesweeper, shooter, maze chase, platformer) with pygame views."""

__version__ = "0.1.0"