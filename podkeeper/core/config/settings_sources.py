"""
Settings sources for Podkeeper user settings.

This module provides a Pydantic settings source that reads the user settings
YAML file (``~/.cocoapods/config.yaml`` by default). Unlike the builtin
sources it is strict about content: a file that exists but is not valid YAML
is reported as a ``ParsingError`` instead of being skipped.
"""

from pathlib import Path
from typing import Any, Dict, Tuple, Type, Union

import yaml
from loguru import logger
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from ..exceptions import ParsingError


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """
    Configuration source for a single YAML settings file.

    A missing file, an empty file and a document whose top level is not a
    mapping all yield no data.
    """

    def __init__(
        self,
        settings_cls: Type[BaseSettings],
        config_file: Union[str, Path]
    ):
        """
        Initialize the YAML settings source.

        Args:
            settings_cls: The settings class
            config_file: Path to the YAML file
        """
        super().__init__(settings_cls)
        self.config_file = Path(config_file)
        # True when the file holds YAML whose top level is not a mapping
        self.ignored_document = False
        self._data = self._load_file()

    def _load_file(self) -> Dict[str, Any]:
        if not self.config_file.exists():
            logger.debug(f"No settings file at {self.config_file}")
            return {}

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParsingError(
                file_path=str(self.config_file),
                operation="load_settings",
                reason=str(e),
                cause=e,
            ) from e

        if not isinstance(data, dict):
            if data is not None:
                self.ignored_document = True
                logger.warning(f"Ignoring settings file {self.config_file}: top level is not a mapping")
            return {}

        logger.debug(f"Loaded settings from {self.config_file}")
        # YAML allows non-string keys (``1: foo``); settings are addressed by name
        return {str(key): value for key, value in data.items()}

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> Tuple[Any, str, bool]:
        """Get field value from configuration data."""
        if field_name in self._data:
            return self._data[field_name], field_name, True
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        """Return the loaded configuration data."""
        return dict(self._data)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(config_file={str(self.config_file)!r})'
