"""
User settings package for Podkeeper.

This package provides:
- A strict YAML settings source built on pydantic-settings
- The typed ``UserSettings`` model for the overridable flags
- Persistence of single flags for the ``config set`` command
"""

from .settings_sources import YamlConfigSettingsSource
from .user_settings import UserSettings, write_user_setting

__all__ = [
    "YamlConfigSettingsSource",
    "UserSettings",
    "write_user_setting",
]
