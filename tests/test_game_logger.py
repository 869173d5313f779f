"""Tests for the JSONL game logger."""

import json
import random

from rogue_rummy.config import Config, GameConfig
from rogue_rummy.game.engine import GameEngine
from rogue_rummy.logging import GameLogConfig, GameLogger, format_cards, format_meld
from rogue_rummy.models.card import parse_card, parse_card_list
from rogue_rummy.models.deck import Deck
from rogue_rummy.models.game_state import RoundState
from rogue_rummy.models.meld import parse_meld
from rogue_rummy.models.upgrade import UpgradeId


def read_events(path):
    with open(path, encoding="utf-8") as f:
        return [json.loads(line) for line in f]


class TestFormatters:
    """Tests for log formatters."""

    def test_format_cards(self):
        """Test comma-joined card notation."""
        assert format_cards(parse_card_list("8s-8h-10d")) == "8s,8h,10d"
        assert format_cards([]) == ""

    def test_format_meld(self):
        """Test meld owner, kind and notation."""
        meld = parse_meld("3h-[4h]-5h", owner="Bob")
        assert format_meld(meld) == {"owner": "Bob", "type": "run", "cards": "3h-[4h]-5h"}


class TestGameLogger:
    """Tests for GameLogger."""

    def test_disabled_writes_nothing(self, tmp_path):
        """Test a disabled logger creates no file."""
        path = tmp_path / "game.jsonl"
        with GameLogger(GameLogConfig(enabled=False, output_path=str(path))) as log:
            log.log_reshuffle(1, 1, 10)

        assert not path.exists()

    def test_creates_parent_dirs(self, tmp_path):
        """Test the output directory is created on open."""
        path = tmp_path / "logs" / "game.jsonl"
        with GameLogger(GameLogConfig(enabled=True, output_path=str(path))) as log:
            log.log_reshuffle(1, 2, 30)

        assert read_events(path) == [
            {"type": "reshuffle", "round": 1, "count": 2, "stock": 30}
        ]

    def test_round_events(self, tmp_path):
        """Test a short round produces one event per step."""
        path = tmp_path / "game.jsonl"
        config = Config(game=GameConfig(players=["Alice", "Bob"], num_rounds=1, seed=7))

        with GameLogger(GameLogConfig(enabled=True, output_path=str(path))) as log:
            engine = GameEngine(config, rng=random.Random(7), game_logger=log)
            log.log_session_start(engine.players, seed=7)
            engine.apply_upgrade(engine.players[1], UpgradeId.GEMINI)

            engine.start_new_round()
            engine.players[0].round.hand = parse_card_list("9s-9h-9c")
            engine.players[1].round.hand = parse_card_list("2h-3h")
            engine.state.round = RoundState(
                stock=Deck(parse_card_list("Kc")), discard_pile=[]
            )

            engine.draw_from_stock()
            engine.create_meld(parse_card_list("9s-9h-9c"))
            engine.discard(parse_card("Kc"))

        events = read_events(path)
        assert [e["type"] for e in events] == [
            "session_start",
            "upgrade",
            "round_start",
            "action",
            "action",
            "action",
            "round_end",
            "game_end",
        ]

        session, upgrade, round_start, draw, meld, discard, round_end, game_end = events
        assert session["players"] == ["Alice", "Bob"]
        assert session["seed"] == 7
        assert upgrade == {"type": "upgrade", "round": 1, "player": "Bob", "upgrade": "gemini"}
        assert round_start["upgrades"] == {"Alice": [], "Bob": ["gemini"]}
        assert round_start["stock"] == 52 - 2 * 7 - 1

        assert draw["action"] == "draw_stock"
        assert draw["cards"] == "Kc"
        assert meld["score"] == 81
        assert meld["meld"] == {"owner": "Alice", "type": "set", "cards": "9s-9h-9c"}
        assert discard["hand"] == ""

        assert round_end["winner"] == "Alice"
        assert round_end["scores"] == {"Alice": 168, "Bob": 0}
        assert round_end["totals"] == {"Alice": 168, "Bob": 0}
        assert round_end["bonus_details"]["Alice"]["flat_bonuses"][0]["name"] == "Win Bonus"

        assert game_end["rounds"] == 1
        assert game_end["ranking"] == ["Alice", "Bob"]

    def test_appends_to_existing_file(self, tmp_path):
        """Test reopening the same file keeps earlier events."""
        path = tmp_path / "game.jsonl"
        config = GameLogConfig(enabled=True, output_path=str(path))

        with GameLogger(config) as log:
            log.log_reshuffle(1, 1, 10)
        with GameLogger(config) as log:
            log.log_reshuffle(2, 1, 12)

        assert [e["round"] for e in read_events(path)] == [1, 2]
