"""Subsystems of the sector layout library."""
