"""Presentation adapters that read and drive the simulation core."""
