"""TDEE and macro target calculator with optional AI coaching."""

__version__ = "2.0.0"
