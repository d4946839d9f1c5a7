"""
User settings model for Podkeeper.

Users can override the built-in defaults in ``~/.cocoapods/config.yaml``
(or ``$CP_REPOS_DIR/config.yaml``), for example::

    ---
    skip_repo_update: true
    new_version_message: false

Only the flags declared on ``UserSettings`` have any effect. Other keys are
kept on the model as extras so callers can report them, but they never
change behaviour.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from loguru import logger
from pydantic import Field, PrivateAttr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError
from .settings_sources import YamlConfigSettingsSource


class UserSettings(BaseSettings):
    """
    Flags a user may set in the settings file.

    Every field is optional; ``None`` means the file did not set it and the
    built-in default applies.
    """

    model_config = SettingsConfigDict(
        extra='ignore',
        validate_default=True,
        env_file=None,
    )

    verbose: Optional[bool] = Field(
        default=None,
        description="Provide detailed output about the performed actions"
    )

    silent: Optional[bool] = Field(
        default=None,
        description="Produce no output"
    )

    skip_repo_update: Optional[bool] = Field(
        default=None,
        description="Skip the spec repos update during installation"
    )

    aggressive_cache: Optional[bool] = Field(
        default=None,
        description="Let the downloader use more aggressive caching options"
    )

    clean: Optional[bool] = Field(
        default=None,
        description="Clean the sandbox after the installation"
    )

    integrate_targets: Optional[bool] = Field(
        default=None,
        description="Integrate the user targets instead of only creating the Pods project"
    )

    new_version_message: Optional[bool] = Field(
        default=None,
        description="Print a message when a new version is available"
    )

    # Keys the file set that are not flags; pydantic-settings reserves some
    # underscore names for itself, so these never reach the constructor.
    _unknown: Dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # The YAML file is read explicitly by ``load``; the process environment
        # must not leak into the flags.
        return (init_settings,)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "UserSettings":
        """
        Load and validate the settings file at ``path``.

        Args:
            path: Settings file location; a missing file yields empty settings

        Returns:
            Validated settings

        Raises:
            ParsingError: If the file is not valid YAML
            ConfigurationError: If a known flag has a value of the wrong type
        """
        data = YamlConfigSettingsSource(cls, path)()
        settings = cls.from_mapping(data, source=path)

        unknown = settings.unknown_keys()
        if unknown:
            logger.warning(f"Ignoring unknown settings in {path}: {', '.join(unknown)}")

        return settings

    @classmethod
    def from_mapping(cls, data: Dict[str, Any], source: Union[str, Path, None] = None) -> "UserSettings":
        """Validate a raw key/value mapping into settings."""
        known = {key: value for key, value in data.items() if key in cls.model_fields}
        try:
            settings = cls.model_validate(known)
        except ValidationError as e:
            error = e.errors()[0]
            key = ".".join(str(part) for part in error["loc"])
            reason = error["msg"]
            if source is not None:
                reason = f"{reason} (in {source})"
            raise ConfigurationError(
                config_key=key,
                config_value=error.get("input"),
                reason=reason,
                cause=e,
            ) from e

        settings._unknown = {
            key: value for key, value in data.items() if key not in cls.model_fields
        }
        return settings

    @classmethod
    def flag_names(cls) -> List[str]:
        return list(cls.model_fields)

    def known_values(self) -> Dict[str, bool]:
        """Flags the file explicitly set, by name."""
        return {
            name: getattr(self, name)
            for name in self.flag_names()
            if getattr(self, name) is not None
        }

    def unknown_keys(self) -> List[str]:
        return sorted(self._unknown)

    def extra_values(self) -> Dict[str, Any]:
        return dict(self._unknown)


def write_user_setting(path: Union[str, Path], key: str, value: Any) -> UserSettings:
    """
    Persist one flag into the settings file, keeping everything else in it.

    Args:
        path: Settings file location (created along with its parent directory)
        key: Flag name; must be one of ``UserSettings.flag_names()``
        value: New value, validated as a boolean

    Returns:
        The settings as written

    Raises:
        ConfigurationError: If the key is unknown or the value is not a boolean,
            or the existing file holds something other than a mapping
        ParsingError: If the existing file is not valid YAML
    """
    path = Path(path)
    if key not in UserSettings.model_fields:
        raise ConfigurationError(
            config_key=key,
            config_value=value,
            reason=f"unknown setting, expected one of: {', '.join(UserSettings.flag_names())}",
        )

    source = YamlConfigSettingsSource(UserSettings, path)
    if source.ignored_document:
        raise ConfigurationError(
            config_key=key,
            config_value=value,
            reason=f"{path} does not hold a mapping of settings, refusing to overwrite it",
        )

    data = source()
    data[key] = value
    settings = UserSettings.from_mapping(data, source=path)
    data[key] = getattr(settings, key)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved {key}={data[key]} to {path}")
    return settings
