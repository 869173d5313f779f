"""Tests for the command-line simulator."""

import json
import random
import sys
from pathlib import Path

from rogue_rummy.config import Config, GameConfig
from rogue_rummy.game.engine import ActionResult, GameEngine
from rogue_rummy.main import describe_turn, generate_log_filename, main, play_game
from rogue_rummy.models.card import parse_card
from rogue_rummy.strategy import SimpleStrategy
from rogue_rummy.utils.logger import GameDisplay


class TestGenerateLogFilename:
    """Tests for generate_log_filename()."""

    def test_sorted_names(self):
        """Test player names are sorted into the filename."""
        path = Path(generate_log_filename("logs", ["Bob", "Alice"]))

        assert path.parent == Path("logs")
        assert path.name.endswith("_Alice_Bob.jsonl")


class TestDescribeTurn:
    """Tests for describe_turn()."""

    def test_descriptions(self):
        """Test each way a turn can end."""
        assert describe_turn(ActionResult(success=False, stalemate=True)) == "stalemate"
        assert describe_turn(ActionResult(success=True, player_won=True)) == "went out"
        assert (
            describe_turn(ActionResult(success=True, card=parse_card("Qh")))
            == "discarded Qh"
        )


class TestPlayGame:
    """Tests for play_game()."""

    def test_one_round(self, capsys):
        """Test a one-round game prints results and returns standings."""
        config = Config(game=GameConfig(players=["Alice", "Bob", "Charlie"], num_rounds=1))
        engine = GameEngine(config, rng=random.Random(11))
        strategies = {p.name: SimpleStrategy(engine.rng) for p in engine.players}

        standings = play_game(engine, strategies, GameDisplay(show_hands=True))

        assert engine.is_game_over()
        assert sorted(name for name, _ in standings) == ["Alice", "Bob", "Charlie"]
        assert [total for _, total in standings] == sorted(
            (total for _, total in standings), reverse=True
        )
        out = capsys.readouterr().out
        assert "ROUND 1/1" in out
        assert "FINAL RESULTS" in out

    def test_upgrades_between_rounds(self):
        """Test every player picks an upgrade between rounds but not after the last."""
        config = Config(game=GameConfig(players=["Alice", "Bob"], num_rounds=2))
        engine = GameEngine(config, rng=random.Random(5))
        strategies = {p.name: SimpleStrategy(engine.rng) for p in engine.players}

        play_game(engine, strategies, GameDisplay())

        assert all(len(p.upgrades) == 1 for p in engine.players)


class TestMain:
    """Tests for the CLI entry point."""

    def test_main_runs(self, monkeypatch, capsys):
        """Test a seeded run exits cleanly."""
        monkeypatch.setattr(sys, "argv", ["rogue-rummy", "-r", "1", "-s", "3"])

        assert main() == 0
        out = capsys.readouterr().out
        assert "Seed: 3" in out
        assert "FINAL RESULTS" in out

    def test_game_log(self, monkeypatch, tmp_path):
        """Test --game-log writes a JSONL file into the directory."""
        monkeypatch.setattr(
            sys,
            "argv",
            ["rogue-rummy", "-r", "1", "-s", "3", "--game-log", str(tmp_path)],
        )

        assert main() == 0
        files = list(tmp_path.glob("*.jsonl"))
        assert len(files) == 1

        with open(files[0], encoding="utf-8") as f:
            types = [json.loads(line)["type"] for line in f]
        assert types[0] == "session_start"
        assert types[-1] == "game_end"
