"""
Pytest Configuration and Fixtures
Shared fixtures for all tests.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_bytes() -> bytes:
    """25 distinct-ish bytes: two full 10-byte chunks plus a 5-byte tail."""
    return b"0123456789abcdefghijKLMNO"


@pytest.fixture
def sample_pkg(temp_dir: Path, sample_bytes: bytes) -> Path:
    """Create a small fake pkg file."""
    filepath = temp_dir / "sample.pkg"
    filepath.write_bytes(sample_bytes)
    return filepath


@pytest.fixture
def empty_pkg(temp_dir: Path) -> Path:
    """Create a zero-byte pkg file."""
    filepath = temp_dir / "empty.pkg"
    filepath.write_bytes(b"")
    return filepath


@pytest.fixture
def random_pkg(temp_dir: Path) -> Path:
    """Create a pkg with ~100KB of random content."""
    filepath = temp_dir / "random.pkg"
    filepath.write_bytes(os.urandom(100 * 1024 + 17))
    return filepath


@pytest.fixture
def sample_config() -> dict:
    """Sample appmanifest YAML configuration."""
    return {
        "url": "https://pkgs.example.com/${APPMANIFEST_TEST_PKG}",
        "md5size": 10,
        "format": "xml",
        "log_level": "info",
    }


@pytest.fixture
def sample_config_file(temp_dir: Path, sample_config: dict) -> Path:
    """Create a sample config YAML file."""
    import yaml

    filepath = temp_dir / "appmanifest.yaml"
    with open(filepath, "w") as f:
        yaml.dump(sample_config, f)
    return filepath


@pytest.fixture(autouse=True)
def clean_appmanifest_env(monkeypatch):
    """Keep APPMANIFEST_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("APPMANIFEST_"):
            monkeypatch.delenv(key, raising=False)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
