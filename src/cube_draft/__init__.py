"""Cube draft toolkit: pack synergy analysis, deck assembly and power rating."""

__version__ = "0.1.0"
