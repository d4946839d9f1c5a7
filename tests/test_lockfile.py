"""Tests for lockfile parsing and the sandbox layout."""

from pathlib import Path

import pytest

from podkeeper.core.exceptions import ParsingError
from podkeeper.lockfile import Lockfile
from podkeeper.podfile import Dependency
from podkeeper.sandbox import Sandbox

from tests.conftest import create_test_file


LOCKFILE = """\
PODS:
  - AFNetworking (1.3.3)
  - JSONKit (1.5pre)
  - RestKit (0.20.1):
    - RestKit/Core (= 0.20.1)
  - RestKit/Core (0.20.1)
DEPENDENCIES:
  - AFNetworking (~> 1.0)
  - JSONKit
  - RestKit
SPEC CHECKSUMS:
  AFNetworking: cf8e418e16f0c9c7e5c3150d019a3c679d015018
COCOAPODS: 0.22.0
"""


@pytest.fixture
def lockfile(tmp_path) -> Lockfile:
    return Lockfile.from_file(create_test_file(tmp_path, "Podfile.lock", LOCKFILE))


class TestLockfile:
    """Reading ``Podfile.lock``."""

    def test_pods(self, lockfile):
        assert lockfile.pod_names() == ["AFNetworking", "JSONKit", "RestKit", "RestKit/Core"]
        assert lockfile.version("RestKit") == "0.20.1"
        assert lockfile.version("JSONKit") == "1.5pre"
        assert lockfile.version("Unknown") is None

    def test_dependencies(self, lockfile):
        assert lockfile.dependencies == (
            Dependency("AFNetworking", ("~> 1.0",)),
            Dependency("JSONKit"),
            Dependency("RestKit"),
        )

    def test_checksums_and_version(self, lockfile):
        assert lockfile.checksum("AFNetworking") == "cf8e418e16f0c9c7e5c3150d019a3c679d015018"
        assert lockfile.checksum("JSONKit") is None
        assert lockfile.cocoapods_version == "0.22.0"

    def test_missing_file(self, tmp_path):
        assert Lockfile.from_file(tmp_path / "Podfile.lock") is None

    def test_malformed_yaml(self, tmp_path):
        path = create_test_file(tmp_path, "Podfile.lock", "PODS: [unclosed\n")
        with pytest.raises(ParsingError) as exc_info:
            Lockfile.from_file(path)
        assert exc_info.value.file_path == str(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = create_test_file(tmp_path, "Podfile.lock", "- JSONKit (1.5pre)\n")
        with pytest.raises(ParsingError, match="mapping"):
            Lockfile.from_file(path)

    def test_empty_sections(self, tmp_path):
        lockfile = Lockfile.from_file(create_test_file(tmp_path, "Podfile.lock", "COCOAPODS: 0.22.0\n"))
        assert lockfile.pods == {}
        assert lockfile.dependencies == ()


class TestSandbox:
    """Layout of the ``Pods`` directory."""

    def test_paths(self, tmp_path):
        sandbox = Sandbox(tmp_path / "Pods")

        assert sandbox.root == tmp_path / "Pods"
        assert sandbox.project_path == tmp_path / "Pods" / "Pods.xcodeproj"
        assert sandbox.manifest_path == tmp_path / "Pods" / "Manifest.lock"
        assert sandbox.headers_root == tmp_path / "Pods" / "Headers"

    def test_pod_dir_uses_root_spec(self, tmp_path):
        sandbox = Sandbox(tmp_path)
        assert sandbox.pod_dir("RestKit/Core") == tmp_path / "RestKit"

    def test_manifest(self, tmp_path):
        sandbox = Sandbox(str(tmp_path / "Pods"))
        assert sandbox.manifest is None
        assert not sandbox.exists()

        create_test_file(tmp_path / "Pods", "Manifest.lock", LOCKFILE)

        assert sandbox.exists()
        assert sandbox.manifest.version("AFNetworking") == "1.3.3"

    def test_equality(self, tmp_path):
        assert Sandbox(tmp_path) == Sandbox(Path(str(tmp_path)))
        assert Sandbox(tmp_path) != Sandbox(tmp_path / "other")
