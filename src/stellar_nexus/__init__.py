"""Stellar Nexus game-rules engine."""

__version__ = "0.1.0"
