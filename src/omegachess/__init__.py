"""Omega chess: rules engine and navigable game history for a chess variant."""

__version__ = "0.1.0"
