"""Gridiron: expansion team overlay for 32-team franchise leagues."""
