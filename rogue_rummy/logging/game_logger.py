"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from rogue_rummy.models.card import Card
from rogue_rummy.models.game_state import RoundRecord
from rogue_rummy.models.meld import Meld
from rogue_rummy.models.player import Player

from .formatters import format_card, format_cards, format_hands, format_meld


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for detailed game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, players: list[Player], seed: int | None = None) -> None:
        """Log session start with player information.

        Args:
            players: Players in seat order.
            seed: RNG seed, if the game was seeded.
        """
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "players": [p.name for p in players],
            "seed": seed,
        })

    def log_round_start(
        self,
        round_num: int,
        players: list[Player],
        discard_top: Card | None,
        stock_size: int,
    ) -> None:
        """Log round start with dealt hands.

        Args:
            round_num: Round number.
            players: Players with their dealt hands.
            discard_top: Card seeding the discard pile.
            stock_size: Cards left in the stock after dealing.
        """
        self._write({
            "type": "round_start",
            "round": round_num,
            "hands": format_hands(players),
            "discard": format_card(discard_top) if discard_top else "",
            "stock": stock_size,
            "upgrades": {p.name: [u.value for u in p.upgrades] for p in players},
        })

    def log_action(
        self,
        round_num: int,
        player: Player,
        action: str,
        cards: list[Card],
        meld: Meld | None = None,
        score: int = 0,
    ) -> None:
        """Log a single player command.

        Args:
            round_num: Round number.
            player: Player who acted (state after the action).
            action: "draw_stock", "draw_discard", "meld", "layoff" or "discard".
            cards: Cards involved in the action.
            meld: Meld created or extended, if any.
            score: Points the action scored.
        """
        record: dict[str, Any] = {
            "type": "action",
            "round": round_num,
            "player": player.name,
            "action": action,
            "cards": format_cards(cards),
            "score": score,
            "points": player.points,
            "hand": format_cards(player.hand),
        }
        if meld is not None:
            record["meld"] = format_meld(meld)
        self._write(record)

    def log_reshuffle(self, round_num: int, count: int, stock_size: int) -> None:
        """Log the discard pile being shuffled back into the stock.

        Args:
            round_num: Round number.
            count: Reshuffles so far this round.
            stock_size: Stock size after the reshuffle.
        """
        self._write({
            "type": "reshuffle",
            "round": round_num,
            "count": count,
            "stock": stock_size,
        })

    def log_round_end(self, record: RoundRecord, totals: dict[str, int]) -> None:
        """Log round settlement.

        Args:
            record: History record of the settled round.
            totals: Running totals after the round.
        """
        event: dict[str, Any] = {"type": "round_end"}
        event.update(record.model_dump(mode="json"))
        event["totals"] = totals
        self._write(event)

    def log_upgrade(
        self,
        round_num: int,
        player: Player,
        upgrade_id: str,
        offered: list[str] | None = None,
    ) -> None:
        """Log an upgrade pick.

        Args:
            round_num: Round the upgrade was picked after.
            player: Player receiving the upgrade.
            upgrade_id: Upgrade picked.
            offered: Upgrade ids that were on offer.
        """
        record: dict[str, Any] = {
            "type": "upgrade",
            "round": round_num,
            "player": player.name,
            "upgrade": upgrade_id,
        }
        if offered:
            record["offered"] = offered
        self._write(record)

    def log_game_end(self, rounds_played: int, standings: list[tuple[str, int]]) -> None:
        """Log game end with final standings.

        Args:
            rounds_played: Number of completed rounds.
            standings: (name, total) pairs, best first.
        """
        self._write({
            "type": "game_end",
            "rounds": rounds_played,
            "standings": [{"player": n, "total": t} for n, t in standings],
            "ranking": [n for n, _ in standings],
        })
