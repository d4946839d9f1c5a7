"""Lockfile Domain Model - The resolved versions of the last installation.

``Podfile.lock`` is a YAML document::

    PODS:
      - AFNetworking (1.3.3)
      - RestKit (0.20.1):
        - RestKit/Core (= 0.20.1)
    DEPENDENCIES:
      - AFNetworking (~> 1.0)
      - RestKit
    SPEC CHECKSUMS:
      AFNetworking: cf8e418e16f0c9c7e5c3150d019a3c679d015018
    COCOAPODS: 0.22.0

The same format is used for the sandbox manifest (``Pods/Manifest.lock``).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from loguru import logger

from .core.exceptions import ParsingError
from .podfile import Dependency


@dataclass(frozen=True)
class Lockfile:
    """Parsed lockfile.

    Attributes:
        path: File the lockfile was read from
        pods: Installed pod versions by name
        dependencies: The Podfile dependencies the lock was computed for
        checksums: Specification checksums by pod name
        cocoapods_version: Version of the tool that wrote the file
    """

    path: Path
    pods: Dict[str, Optional[str]] = field(default_factory=dict, hash=False)
    dependencies: Tuple[Dependency, ...] = ()
    checksums: Dict[str, str] = field(default_factory=dict, hash=False)
    cocoapods_version: Optional[str] = None

    @classmethod
    def from_file(cls, path: Path) -> Optional["Lockfile"]:
        """Read a lockfile.

        Args:
            path: Lockfile location

        Returns:
            Parsed lockfile, or None if the file does not exist

        Raises:
            ParsingError: If the file is not valid YAML or not a mapping
        """
        path = Path(path)
        if not path.exists():
            logger.debug(f"No lockfile at {path}")
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParsingError(str(path), "load_lockfile", str(e), cause=e) from e
        except OSError as e:
            raise ParsingError(str(path), "load_lockfile", f"Cannot read file: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise ParsingError(str(path), "load_lockfile", "Top level must be a mapping")

        lockfile = cls.from_dict(path, data)
        logger.debug(f"Loaded lockfile {path} with {len(lockfile.pods)} pods")
        return lockfile

    @classmethod
    def from_dict(cls, path: Path, data: Dict[str, Any]) -> "Lockfile":
        try:
            pods = dict(_pod_entry(entry) for entry in data.get("PODS") or ())
            dependencies = tuple(
                Dependency.from_string(str(entry)) for entry in data.get("DEPENDENCIES") or ()
            )
        except (ValueError, TypeError) as e:
            raise ParsingError(str(path), "load_lockfile", str(e), cause=e) from e

        checksums = data.get("SPEC CHECKSUMS") or {}
        if not isinstance(checksums, dict):
            raise ParsingError(str(path), "load_lockfile", "'SPEC CHECKSUMS' must be a mapping")

        version = data.get("COCOAPODS")
        return cls(
            path=Path(path),
            pods=pods,
            dependencies=dependencies,
            checksums={str(name): str(value) for name, value in checksums.items()},
            cocoapods_version=str(version) if version is not None else None,
        )

    def pod_names(self) -> List[str]:
        return list(self.pods)

    def version(self, name: str) -> Optional[str]:
        """Installed version of ``name``, or None if it is not locked."""
        return self.pods.get(name)

    def checksum(self, name: str) -> Optional[str]:
        return self.checksums.get(name)


def _pod_entry(entry: Any) -> Tuple[str, Optional[str]]:
    # Pods with dependencies of their own are single-entry mappings
    if isinstance(entry, dict):
        if len(entry) != 1:
            raise ValueError(f"Invalid pod entry: {entry!r}")
        entry = next(iter(entry))
    dependency = Dependency.from_string(str(entry))
    version = dependency.requirements[0] if dependency.requirements else None
    return dependency.name, version
