"""Tests for meld classification, layoffs and notation."""

import pytest

from rogue_rummy.models.card import parse_card, parse_card_list
from rogue_rummy.models.meld import Meld, MeldType, classify, parse_meld


def cards(text):
    return parse_card_list(text)


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("9s-9h-9c", MeldType.SET),
            ("9s-9h-9c-9d", MeldType.SET),
            ("4d-5d-6d", MeldType.RUN),
            ("6d-4d-5d", MeldType.RUN),
            ("As-2s-3s", MeldType.RUN),
            ("3s-3h-7d", MeldType.INVALID),
            ("Qh-Kh-Ah", MeldType.INVALID),
            ("4d-5d-7d", MeldType.INVALID),
            ("4d-5h-6d", MeldType.INVALID),
            ("9s-9h", MeldType.INVALID),
        ],
    )
    def test_classify(self, text, expected):
        """Test set/run/invalid classification without pairs."""
        assert classify(cards(text)) == expected

    def test_pair_requires_capability(self):
        """Test that two same-rank cards are only a pair when allowed."""
        assert classify(cards("9h-9s")) == MeldType.INVALID
        assert classify(cards("9h-9s"), allow_pairs=True) == MeldType.PAIR
        assert classify(cards("9h-8s"), allow_pairs=True) == MeldType.INVALID

    def test_set_needs_distinct_suits(self):
        """Test that a set cannot repeat a suit."""
        second_deck = parse_card("9s").model_copy(update={"deck_index": 1})
        duplicate = [parse_card("9s"), parse_card("9h"), second_deck]
        assert classify(duplicate) == MeldType.INVALID

    def test_empty(self):
        """Test that no cards is invalid."""
        assert classify([]) == MeldType.INVALID


class TestLayoff:
    """Tests for Meld.can_layoff() and add_card()."""

    def test_run_extends_at_ends(self):
        """Test a run accepts cards one past either end."""
        run = Meld(cards("4d-5d-6d"), "Alice")

        assert run.can_layoff(parse_card("3d"))
        assert run.can_layoff(parse_card("7d"))
        assert not run.can_layoff(parse_card("8d"))
        assert not run.can_layoff(parse_card("4h"))
        assert not run.can_layoff(parse_card("5d"))

    def test_run_at_rank_limits(self):
        """Test that Ace is low only and nothing follows King."""
        low = Meld(cards("As-2s-3s"), "Alice")
        high = Meld(cards("Js-Qs-Ks"), "Alice")

        assert low.can_layoff(parse_card("4s"))
        assert not low.can_layoff(parse_card("Ks"))
        assert high.can_layoff(parse_card("10s"))
        assert not high.can_layoff(parse_card("As"))

    def test_set_accepts_rank(self):
        """Test a set accepts only its rank."""
        meld = Meld(cards("9s-9h-9c"), "Bob")

        assert meld.can_layoff(parse_card("9d"))
        assert not meld.can_layoff(parse_card("8d"))

    def test_set_has_no_size_cap(self):
        """Test that a second deck's copy can still be laid off on a full set."""
        meld = Meld(cards("9s-9h-9c-9d"), "Bob")
        extra = parse_card("9s").model_copy(update={"deck_index": 1})

        assert meld.can_layoff(extra)

    def test_pair_accepts_rank(self):
        """Test a pair accepts cards of its rank."""
        pair = Meld(cards("5s-5h"), "Alice", meld_type=MeldType.PAIR)

        assert pair.can_layoff(parse_card("5d"))
        assert not pair.can_layoff(parse_card("6d"))

    def test_add_card_sorts_and_tags(self):
        """Test layoff cards are tagged and the meld re-sorted."""
        run = Meld(cards("4d-5d-6d"), "Alice")
        low = parse_card("3d")
        run.add_card(low)

        assert [str(c) for c in run.cards] == ["3d", "4d", "5d", "6d"]
        assert run.is_layoff_card(low)
        assert not run.is_layoff_card(parse_card("4d"))
        assert run.meld_type == MeldType.RUN

    def test_set_sorted_by_suit(self):
        """Test sets display in s-h-c-d order."""
        meld = Meld(cards("9d-9c-9s"), "Bob")
        meld.add_card(parse_card("9h"))

        assert str(meld) == "9s-[9h]-9c-9d"


class TestMeld:
    """Tests for Meld helpers and notation."""

    def test_value(self):
        """Test meld value sums card values."""
        assert Meld(cards("9s-9h-9c"), "Alice").value() == 27
        assert Meld(cards("Js-Qs-Ks"), "Alice").value() == 30

    def test_string(self):
        """Test meld notation brackets layoff cards."""
        run = Meld(cards("4h-5h"), "Alice", meld_type=MeldType.RUN)
        run.add_card(parse_card("3h"))
        assert str(run) == "[3h]-4h-5h"

    @pytest.mark.parametrize("text", ["3h-[4h]-5h", "9s-9h-9c", "[3d]-4d-5d-6d-[7d]"])
    def test_parse_round_trip(self, text):
        """Test parse_meld() reproduces order and layoff tags."""
        meld = parse_meld(text, "Alice")
        assert str(meld) == text

    def test_parse_meld_type(self):
        """Test parse_meld() classifies from the original cards."""
        assert parse_meld("3h-[4h]-5h", "Alice").meld_type == MeldType.RUN
        assert parse_meld("9s-[9h]-9c-9d", "Alice").meld_type == MeldType.SET
        assert parse_meld("5s-5h", "Alice").meld_type == MeldType.PAIR

    def test_parse_pair_with_layoff(self):
        """Test a pair that took a layoff is still read back as a pair."""
        pair = Meld(cards("9s-9h"), owner="Bob", meld_type=MeldType.PAIR)
        pair.add_card(parse_card("9c"))

        parsed = parse_meld(str(pair), "Bob")

        assert str(pair) == "9s-9h-[9c]"
        assert parsed.meld_type == MeldType.PAIR
        assert parsed.is_layoff_card(parse_card("9c"))

    def test_parse_invalid_card(self):
        """Test parse_meld() rejects bad card notation."""
        with pytest.raises(ValueError):
            parse_meld("3h-4x-5h", "Alice")
