"""Foresight - elaborates one topic into enriched future-scenario documents."""

__version__ = "0.1.0"
