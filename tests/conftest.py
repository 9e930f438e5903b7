"""
Pytest configuration and fixtures for nakedfs tests.
"""

import logging
import os
import sys
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from nakedfs.Config import ConfigManager
from nakedfs.FileSystemGate import NakedLocalFileSystem
from nakedfs.FileSystemGate.models import FileSystemContext
from nakedfs.FileSystemGate.operations import POSIX_ATTRIBUTES_AVAILABLE
from nakedfs.FileSystemGate.paths import FsPath


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_folder(temp_dir: Path) -> Path:
    """Create a folder holding foo.txt, bar.txt and an empty foobar/ directory."""
    folder = temp_dir / "sample_folder"
    folder.mkdir(parents=True, exist_ok=True)

    (folder / "foo.txt").write_bytes(b"foo")
    (folder / "bar.txt").write_bytes(b"bar")
    (folder / "foobar").mkdir()

    return folder


@pytest.fixture
def config(temp_dir: Path) -> ConfigManager:
    """A ConfigManager that ignores any .env file outside the test."""
    return ConfigManager(env_file=temp_dir / "missing.env")


@pytest.fixture
def context(temp_dir: Path) -> FileSystemContext:
    """Filesystem settings rooted at the temporary directory."""
    uri = FsPath.parse("file:///")
    working_directory = FsPath.from_native(temp_dir)
    return FileSystemContext(
        uri=uri,
        working_directory=working_directory.make_qualified(uri, working_directory),
        block_size=4096,
        is_windows=False,
        posix_attributes=POSIX_ATTRIBUTES_AVAILABLE,
    )


@pytest.fixture
def filesystem(temp_dir: Path, config: ConfigManager) -> NakedLocalFileSystem:
    """A filesystem whose working directory is the temporary directory."""
    return NakedLocalFileSystem(config=config, working_directory=temp_dir)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep NAKEDFS_* variables from leaking into or out of a test."""
    for key in list(os.environ):
        if key.startswith("NAKEDFS_"):
            monkeypatch.delenv(key)
    before = set(os.environ)
    yield
    # load_dotenv writes straight to os.environ, bypassing monkeypatch
    for key in list(os.environ):
        if key.startswith("NAKEDFS_") and key not in before:
            del os.environ[key]


@pytest.fixture(autouse=True)
def restore_log_level():
    """Undo level changes made to the nakedfs logger during a test."""
    root = logging.getLogger("nakedfs")
    level = root.level
    yield
    root.setLevel(level)


@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset module-level state between tests."""
    yield

    import nakedfs.Config as config_module
    config_module._manager = None


# Skip markers for platform capabilities
requires_posix = pytest.mark.skipif(
    not POSIX_ATTRIBUTES_AVAILABLE,
    reason="POSIX attribute view not available on this platform"
)
