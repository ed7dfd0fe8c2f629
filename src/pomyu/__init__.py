"""Pomyu work/break timer."""

__version__ = "0.1.0"
