"""Strategy module for automated players."""

from rogue_rummy.strategy.base import DrawSource, Strategy
from rogue_rummy.strategy.simple import SimpleStrategy

__all__ = ["DrawSource", "Strategy", "SimpleStrategy"]
