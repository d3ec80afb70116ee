"""Configuration for filterkit."""

from filterkit.config.settings import LoaderSettings, LoggingSettings, Settings, get_settings, reload_settings

__all__ = ["LoaderSettings", "LoggingSettings", "Settings", "get_settings", "reload_settings"]
