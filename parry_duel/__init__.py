"""Parry Duel: a single turn-based encounter decided by timing."""

__version__ = "0.1.0"
