"""Process-wide configuration for Podkeeper.

This module provides:
- The built-in defaults for the feature flags
- Overrides from the user settings file (``~/.cocoapods/config.yaml``)
- Resolution of the installation root, Podfile, Podfile.lock and sandbox
- A lazily created global instance with an explicit reset for tests

Every path and derived object is computed on first access and cached until
it is explicitly overwritten. Assigning ``None`` clears a single cache so the
next read recomputes it.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from .core.config import UserSettings
from .lockfile import Lockfile
from .podfile import Podfile
from .sandbox import Sandbox
from .ui import OutputFormatter


DEFAULTS: Dict[str, bool] = {
    'verbose': False,
    'silent': False,
    'skip_repo_update': False,
    'aggressive_cache': False,

    'clean': True,
    'integrate_targets': True,
    'new_version_message': True,
}

# Ordered by priority; the first two allow to specify an OS X UTI
PODFILE_NAMES = (
    'CocoaPods.podfile.yaml',
    'CocoaPods.podfile',
    'Podfile',
)

LOCKFILE_NAME = 'Podfile.lock'
SANDBOX_DIR_NAME = 'Pods'
USER_SETTINGS_FILENAME = 'config.yaml'

REPOS_DIR_ENV = 'CP_REPOS_DIR'
AGGRESSIVE_CACHE_ENV = 'CP_AGGRESSIVE_CACHE'
DEFAULT_REPOS_DIR = '~/.cocoapods'


def podfile_path_in_dir(directory: Path) -> Optional[Path]:
    """Return the highest-priority Podfile in ``directory``, if any exists."""
    for filename in PODFILE_NAMES:
        candidate = directory / filename
        if candidate.exists():
            return candidate
    return None


class Config:
    """
    Feature flags and resolved paths for the running process.

    Flags start from ``DEFAULTS`` and are overridden by the user settings
    file when it exists. ``verbose`` and ``aggressive_cache`` are computed
    on read:

    * ``verbose`` is always False while ``silent`` is set.
    * ``aggressive_cache`` is True when set explicitly, otherwise unless the
      ``CP_AGGRESSIVE_CACHE`` environment variable is exactly ``FALSE``.
    """

    def __init__(self, output: Optional[OutputFormatter] = None):
        """
        Initialize the configuration.

        Args:
            output: Where user-facing notices go (stdout by default)

        Raises:
            ParsingError: If the user settings file is not valid YAML
            ConfigurationError: If the user settings file holds invalid values
        """
        self._output = output

        self._repos_dir: Optional[Path] = None
        self._installation_root: Optional[Path] = None
        self._sandbox_root: Optional[Path] = None
        self._sandbox: Optional[Sandbox] = None
        self._podfile_path: Optional[Path] = None
        self._podfile: Optional[Podfile] = None
        self._lockfile_path: Optional[Path] = None
        self._lockfile: Optional[Lockfile] = None

        self.extra_settings: Dict[str, Any] = {}

        self.configure_with(DEFAULTS)

        settings_file = self.user_settings_file
        if settings_file.exists():
            user_settings = UserSettings.load(settings_file)
            self.configure_with(user_settings.known_values())
            self.extra_settings = user_settings.extra_values()

    def configure_with(self, values_by_key: Optional[Dict[str, Any]]) -> None:
        """
        Set known flags from a mapping.

        Keys that do not name a flag are kept in ``extra_settings`` and have
        no effect.
        """
        if not values_by_key:
            return
        for key, value in values_by_key.items():
            if key in DEFAULTS:
                setattr(self, key, value)
            else:
                self.extra_settings[key] = value

    def __repr__(self) -> str:
        return (
            f"Config("
            f"verbose={self.verbose}, "
            f"silent={self.silent}, "
            f"repos_dir={self.repos_dir}, "
            f"installation_root={self._installation_root})"
        )

    # -- UI ---------------------------------------------------------------

    @property
    def verbose(self) -> bool:
        """Whether to provide detailed output about the performed actions."""
        return bool(self._verbose) and not self.silent

    @verbose.setter
    def verbose(self, value: bool) -> None:
        self._verbose = value

    @property
    def output(self) -> OutputFormatter:
        if self._output is not None:
            return self._output
        return OutputFormatter(verbose=self.verbose, silent=self.silent)

    # -- Installation -----------------------------------------------------

    @property
    def aggressive_cache(self) -> bool:
        """
        Whether the downloader should use more aggressive caching options.

        The aggressive cache has lead to issues if a tag is updated to point
        to another commit.
        """
        return bool(self._aggressive_cache) or os.environ.get(AGGRESSIVE_CACHE_ENV) != 'FALSE'

    @aggressive_cache.setter
    def aggressive_cache(self, value: bool) -> None:
        self._aggressive_cache = value

    # -- Paths ------------------------------------------------------------

    @property
    def repos_dir(self) -> Path:
        """Directory where the spec repositories are stored."""
        if self._repos_dir is None:
            raw = os.environ.get(REPOS_DIR_ENV) or DEFAULT_REPOS_DIR
            self._repos_dir = Path(raw).expanduser().absolute()
        return self._repos_dir

    @repos_dir.setter
    def repos_dir(self, value: Optional[Path]) -> None:
        self._repos_dir = Path(value) if value is not None else None

    @property
    def user_settings_file(self) -> Path:
        return self.repos_dir / USER_SETTINGS_FILENAME

    @property
    def installation_root(self) -> Path:
        """
        Root of the installation, where the Podfile is located.

        Walks up from the working directory to the filesystem root looking
        for a Podfile. Falls back to the working directory when none is
        found.
        """
        if self._installation_root is None:
            self._installation_root = self._find_installation_root()
        return self._installation_root

    @installation_root.setter
    def installation_root(self, value: Optional[Path]) -> None:
        self._installation_root = Path(value) if value is not None else None

    project_root = installation_root

    def _find_installation_root(self) -> Path:
        working_dir = Path.cwd()
        current = working_dir
        while True:
            podfile_path = podfile_path_in_dir(current)
            if podfile_path is not None:
                if self._podfile_path is None:
                    self._podfile_path = podfile_path
                if current != working_dir:
                    self.output.puts(f"[in {current}]")
                logger.debug(f"Installation root: {current} ({podfile_path.name})")
                return current
            if current.parent == current:
                break
            current = current.parent

        logger.debug(f"No Podfile found above {working_dir}, using it as installation root")
        return working_dir

    @property
    def sandbox_root(self) -> Path:
        if self._sandbox_root is None:
            self._sandbox_root = self.installation_root / SANDBOX_DIR_NAME
        return self._sandbox_root

    @sandbox_root.setter
    def sandbox_root(self, value: Optional[Path]) -> None:
        self._sandbox_root = Path(value) if value is not None else None

    project_pods_root = sandbox_root

    @property
    def sandbox(self) -> Sandbox:
        if self._sandbox is None:
            self._sandbox = Sandbox(self.sandbox_root)
        return self._sandbox

    @sandbox.setter
    def sandbox(self, value: Optional[Sandbox]) -> None:
        self._sandbox = value

    @property
    def podfile_path(self) -> Optional[Path]:
        """
        Path of the Podfile, or None if the installation root has none.

        The Podfile can be named ``CocoaPods.podfile.yaml``,
        ``CocoaPods.podfile`` or ``Podfile``, in that order of preference.
        """
        if self._podfile_path is None:
            self._podfile_path = podfile_path_in_dir(self.installation_root)
        return self._podfile_path

    @podfile_path.setter
    def podfile_path(self, value: Optional[Path]) -> None:
        self._podfile_path = Path(value) if value is not None else None

    @property
    def podfile(self) -> Optional[Podfile]:
        """The Podfile for the current execution, or None if there is none."""
        if self._podfile is None and self.podfile_path is not None:
            self._podfile = Podfile.from_file(self.podfile_path)
        return self._podfile

    @podfile.setter
    def podfile(self, value: Optional[Podfile]) -> None:
        self._podfile = value

    @property
    def lockfile_path(self) -> Path:
        if self._lockfile_path is None:
            self._lockfile_path = self.installation_root / LOCKFILE_NAME
        return self._lockfile_path

    @lockfile_path.setter
    def lockfile_path(self, value: Optional[Path]) -> None:
        self._lockfile_path = Path(value) if value is not None else None

    @property
    def lockfile(self) -> Optional[Lockfile]:
        """The Podfile.lock for the current execution, or None if there is none."""
        if self._lockfile is None:
            self._lockfile = Lockfile.from_file(self.lockfile_path)
        return self._lockfile

    @lockfile.setter
    def lockfile(self, value: Optional[Lockfile]) -> None:
        self._lockfile = value

    def to_dict(self) -> Dict[str, Any]:
        """
        Effective flags and resolved paths, for display.

        Returns:
            Configuration as dictionary
        """
        podfile_path = self.podfile_path
        return {
            'verbose': self.verbose,
            'silent': self.silent,
            'skip_repo_update': self.skip_repo_update,
            'aggressive_cache': self.aggressive_cache,
            'clean': self.clean,
            'integrate_targets': self.integrate_targets,
            'new_version_message': self.new_version_message,
            'repos_dir': str(self.repos_dir),
            'user_settings_file': str(self.user_settings_file),
            'installation_root': str(self.installation_root),
            'sandbox_root': str(self.sandbox_root),
            'podfile_path': str(podfile_path) if podfile_path else None,
            'lockfile_path': str(self.lockfile_path),
        }


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, creating it if needed.

    Returns:
        Global Config instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def set_config(config: Optional[Config]) -> None:
    """
    Set the global configuration instance.

    Args:
        config: Instance to use; None recreates it on the next access
    """
    global _config_instance
    _config_instance = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    set_config(None)


class ConfigMixin:
    """Gives collaborators access to the global configuration."""

    @property
    def config(self) -> Config:
        return get_config()
