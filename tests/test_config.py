"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from rogue_rummy.config import Config, RulesConfig, ScoringConfig, load_config
from rogue_rummy.models.card import DEFAULT_CARD_VALUES, Rank


class TestDefaults:
    """Tests for built-in defaults."""

    def test_no_path(self):
        """Test None gives the default config."""
        config = load_config(None)

        assert config.game.players == ["Alice", "Bob", "Charlie", "Dana"]
        assert config.game.num_rounds == 5
        assert config.rules.cards_per_player == 7
        assert config.rules.max_reshuffles == 2

    def test_missing_file(self, tmp_path):
        """Test a missing file falls back to defaults."""
        config = load_config(tmp_path / "nope.yaml")
        assert config == Config()

    def test_scoring_constants(self):
        """Test the scoring defaults."""
        scoring = ScoringConfig()

        assert (scoring.set_mod, scoring.run_mod, scoring.pair_mod) == (3.0, 2.0, 2.0)
        assert scoring.lay_mod == 1.5
        assert scoring.win_bonus == 30
        assert scoring.catchup_bonus_per_deficit == 0.005

    def test_card_values(self):
        """Test the default rank values."""
        values = RulesConfig().card_values

        assert values == DEFAULT_CARD_VALUES
        assert values[Rank.ACE] == 11
        assert values[Rank.KING] == 10


class TestLoadYaml:
    """Tests for YAML files."""

    def test_overrides(self, tmp_path):
        """Test values from the file replace defaults."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "game:\n"
            "  players: [Ann, Ben]\n"
            "  num_rounds: 3\n"
            "  seed: 42\n"
            "scoring:\n"
            "  win_bonus: 50\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        config = load_config(path)

        assert config.game.players == ["Ann", "Ben"]
        assert config.game.num_rounds == 3
        assert config.game.seed == 42
        assert config.scoring.win_bonus == 50
        assert config.scoring.set_mod == 3.0
        assert config.logging.level == "DEBUG"

    def test_empty_file(self, tmp_path):
        """Test an empty file gives defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_partial_card_values(self, tmp_path):
        """Test ranks missing from card_values keep their defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("rules:\n  card_values:\n    \"A\": 1\n")
        values = load_config(path).rules.card_values

        assert values[Rank.ACE] == 1
        assert values[Rank.KING] == 10
        assert len(values) == 13

    def test_invalid_value(self, tmp_path):
        """Test a wrongly typed value is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("game:\n  num_rounds: many\n")

        with pytest.raises(ValidationError):
            load_config(path)
