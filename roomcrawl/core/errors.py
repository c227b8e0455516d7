from __future__ import annotations


class ConfigurationError(ValueError):
    """Content or configuration that cannot produce a playable game."""
