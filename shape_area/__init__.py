"""Closed shape union and exhaustive area computation."""
