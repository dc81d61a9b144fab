"""Utility helpers shared across the Stellar Nexus package."""
