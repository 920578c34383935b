"""Pygame viewer for the creature simulation."""
