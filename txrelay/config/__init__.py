"""Configuration package: settings and constants."""

from txrelay.config.settings import Settings, get_settings


__all__ = ["Settings", "get_settings"]
