"""Replenishment planning engine for multi-brand Amazon FBA sellers."""

__version__ = "1.0.0"
