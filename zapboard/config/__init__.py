"""
Configuration management for Zapboard.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for ingestion and analytics configuration.
"""

from zapboard.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
