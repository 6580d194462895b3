"""Configuration package for runtime settings and startup validation."""

from .settings import SettingsLoadError, UpdaterSettings, config_load_settings

__all__ = ["SettingsLoadError", "UpdaterSettings", "config_load_settings"]
