"""Idle horde-mode RPG simulation core."""

__version__ = "1.0.0"
