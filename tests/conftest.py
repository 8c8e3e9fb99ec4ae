"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from rookie.core.notation import STARTING_FEN, position_from_fen
from rookie.core.position import Position
from rookie.game.controller import GameController
from rookie.game.state import GameState


@pytest.fixture
def start_position() -> Position:
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def game() -> GameState:
    return GameState()


@pytest.fixture
def controller() -> GameController:
    return GameController()
