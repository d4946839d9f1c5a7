"""The on-disk working area where resolved pods are installed."""

from pathlib import Path
from typing import Optional, Union

from .lockfile import Lockfile


class Sandbox:
    """Layout of a project's ``Pods`` directory.

    The sandbox only resolves locations; nothing is created on disk.
    """

    PROJECT_NAME = "Pods.xcodeproj"
    MANIFEST_NAME = "Manifest.lock"
    HEADERS_DIR_NAME = "Headers"

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"Sandbox(root={str(self.root)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Sandbox) and other.root == self.root

    def __hash__(self) -> int:
        return hash(self.root)

    @property
    def project_path(self) -> Path:
        return self.root / self.PROJECT_NAME

    @property
    def manifest_path(self) -> Path:
        return self.root / self.MANIFEST_NAME

    @property
    def headers_root(self) -> Path:
        return self.root / self.HEADERS_DIR_NAME

    @property
    def manifest(self) -> Optional[Lockfile]:
        """Lockfile describing what is currently installed in the sandbox."""
        return Lockfile.from_file(self.manifest_path)

    def pod_dir(self, name: str) -> Path:
        """Directory of a pod; subspecs share their root spec's directory."""
        return self.root / name.split("/", 1)[0]

    def exists(self) -> bool:
        return self.root.is_dir()
