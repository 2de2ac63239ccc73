"""Configuration package — settings and logging setup."""

from jsonmend.config.settings import IndentStyle, Settings, get_settings

__all__ = ["IndentStyle", "Settings", "get_settings"]
