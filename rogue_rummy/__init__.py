"""Rogue Rummy: rummy rules and scoring with roguelike upgrades."""

__version__ = "0.1.0"
