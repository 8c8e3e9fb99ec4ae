"""Tests for RulesConfig."""

import dataclasses

import pytest

from rookie.core.config import RulesConfig


class TestRulesConfig:
    def test_standard_enables_everything(self) -> None:
        config = RulesConfig.standard()
        assert config == RulesConfig()
        assert all(getattr(config, f.name) for f in dataclasses.fields(config))

    def test_with_overrides(self) -> None:
        base = RulesConfig.standard()
        changed = base.with_overrides(castling=False, fifty_move_rule=False)
        assert not changed.castling
        assert not changed.fifty_move_rule
        assert changed.en_passant
        assert base.castling and base.fifty_move_rule

    def test_with_overrides_unknown_field(self) -> None:
        with pytest.raises(TypeError):
            RulesConfig().with_overrides(king_of_the_hill=True)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            RulesConfig().castling = False  # type: ignore[misc]
