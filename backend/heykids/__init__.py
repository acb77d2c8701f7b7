"""Watchlist, watched-history, scheduling and memories for family movie nights."""

__version__ = "0.1.0"
