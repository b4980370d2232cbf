"""Tweak Menu: a feature-toggle menu with JSON-backed settings."""

__version__ = "0.1.0"
