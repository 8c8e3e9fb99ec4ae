"""Rookie: chess rules engine with legal move generation, game state and notation."""

__version__ = "0.1.0"
