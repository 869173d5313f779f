"""Tests for the meld finder."""

from rogue_rummy.game.finder import (
    LayoffTarget,
    find_all_potential_melds,
    find_all_runs,
    find_all_sets,
    find_valid_layoffs,
)
from rogue_rummy.models.card import parse_card, parse_card_list
from rogue_rummy.models.meld import Meld, MeldType


def cards(text):
    return parse_card_list(text)


class TestFindRuns:
    """Tests for find_all_runs()."""

    def test_single_run(self):
        """Test finding one run among loose cards."""
        runs = find_all_runs(cards("4d-Kc-5d-2s-6d"))

        assert len(runs) == 1
        assert str(runs[0]) == "4d-5d-6d"
        assert runs[0].meld_type == MeldType.RUN

    def test_long_run_not_split(self):
        """Test a run of 5 is reported once."""
        runs = find_all_runs(cards("3h-4h-5h-6h-7h"))

        assert len(runs) == 1
        assert len(runs[0]) == 5

    def test_broken_sequence(self):
        """Test a gap splits a suit into separate runs."""
        runs = find_all_runs(cards("As-2s-3s-5s-6s-7s"))

        assert [str(r) for r in runs] == ["As-2s-3s", "5s-6s-7s"]

    def test_short_sequences_ignored(self):
        """Test sequences shorter than 3 are not runs."""
        assert find_all_runs(cards("4d-5d-7d-8d")) == []

    def test_no_wraparound(self):
        """Test Q-K-A is not a run."""
        assert find_all_runs(cards("Qc-Kc-Ac")) == []

    def test_runs_in_several_suits(self):
        """Test runs are found per suit."""
        runs = find_all_runs(cards("2s-3s-4s-9d-10d-Jd"))

        assert [str(r) for r in runs] == ["2s-3s-4s", "9d-10d-Jd"]


class TestFindSets:
    """Tests for find_all_sets()."""

    def test_set_of_three(self):
        """Test finding a set of 3."""
        sets = find_all_sets(cards("9s-9h-2c-9d"))

        assert len(sets) == 1
        assert sets[0].meld_type == MeldType.SET
        assert len(sets[0]) == 3

    def test_set_of_four_not_split(self):
        """Test four of a rank yields one set of 4."""
        sets = find_all_sets(cards("Ks-Kh-Kc-Kd"))

        assert len(sets) == 1
        assert len(sets[0]) == 4

    def test_pairs_are_not_sets(self):
        """Test two of a rank is not reported."""
        assert find_all_sets(cards("5s-5h-6c-6d")) == []


class TestFindPotentialMelds:
    """Tests for find_all_potential_melds()."""

    def test_runs_then_sets(self):
        """Test runs are listed before sets."""
        melds = find_all_potential_melds(cards("7s-7h-7c-2d-3d-4d"))

        assert [m.meld_type for m in melds] == [MeldType.RUN, MeldType.SET]

    def test_hand_not_mutated(self):
        """Test the search leaves the hand untouched."""
        hand = cards("7s-7h-7c-2d-3d-4d")
        before = list(hand)
        find_all_potential_melds(hand)

        assert hand == before

    def test_empty_hand(self):
        """Test searching an empty hand."""
        assert find_all_potential_melds([]) == []

    def test_configured_sizes(self):
        """Test min_size and max_set_size are honoured."""
        hand = cards("4d-5d-6d-9s-9h-9c-9d-Kh")

        default = find_all_potential_melds(hand)
        longer = find_all_potential_melds(hand, min_size=4)
        small_sets = find_all_potential_melds(hand, max_set_size=3)

        assert [str(m) for m in default] == ["4d-5d-6d", "9s-9h-9c-9d"]
        assert [str(m) for m in longer] == ["9s-9h-9c-9d"]
        assert [str(m) for m in small_sets] == ["4d-5d-6d"]


class TestFindValidLayoffs:
    """Tests for find_valid_layoffs()."""

    def test_targets(self):
        """Test every eligible meld is reported with its owner."""
        melds = [
            Meld(cards("4d-5d-6d"), "Alice"),
            Meld(cards("9s-9h-9c"), "Bob"),
            Meld(cards("7s-7h-7c"), "Charlie"),
        ]

        assert find_valid_layoffs(parse_card("7d"), melds) == [
            LayoffTarget(meld_index=0, owner="Alice"),
            LayoffTarget(meld_index=2, owner="Charlie"),
        ]
        assert find_valid_layoffs(parse_card("9d"), melds) == [
            LayoffTarget(meld_index=1, owner="Bob"),
        ]
        assert find_valid_layoffs(parse_card("Kd"), melds) == []
