"""Shared fixtures for Podkeeper tests."""

from pathlib import Path

import pytest

from podkeeper.config import reset_config


@pytest.fixture(autouse=True)
def repos_dir(tmp_path, monkeypatch) -> Path:
    """Point the repos dir at a temporary location and reset the global config."""
    repos = tmp_path / "repos"
    monkeypatch.setenv("CP_REPOS_DIR", str(repos))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("CP_AGGRESSIVE_CACHE", raising=False)
    reset_config()
    yield repos
    reset_config()


@pytest.fixture
def project_dir(tmp_path, monkeypatch) -> Path:
    """Create an empty project directory and make it the working directory."""
    project = (tmp_path / "project").resolve()
    project.mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def settings_file(repos_dir) -> Path:
    repos_dir.mkdir(parents=True, exist_ok=True)
    return repos_dir / "config.yaml"


# Test utilities
def create_test_file(directory: Path, filename: str, content: str = "") -> Path:
    """Create a test file with given content."""
    file_path = directory / filename
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content)
    return file_path
