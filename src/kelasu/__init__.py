"""Kelasu: rules engine and match service for a two-player 10x10 board game."""

__version__ = "0.1.0"
