"""
Pytest configuration and fixtures for ccsync tests.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def _symlinks_supported() -> bool:
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "target"
        target.write_text("x")
        try:
            (Path(tmpdir) / "link").symlink_to(target)
        except (OSError, NotImplementedError):
            return False
    return True


SYMLINKS_SUPPORTED = _symlinks_supported()

@pytest.fixture
def make_symlink() -> Callable[..., Path]:
    """Create a symlink, skipping the test where symlinks are unavailable."""

    def _make(link: Path, target: Path | str, target_is_directory: bool = False) -> Path:
        if not SYMLINKS_SUPPORTED:
            pytest.skip("Symlinks not supported on this platform")
        link.parent.mkdir(parents=True, exist_ok=True)
        link.symlink_to(target, target_is_directory=target_is_directory)
        return link

    return _make


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_environment(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep config discovery and logging state away from the real user environment."""
    from ccsync.core import logging as ccsync_logging

    work = temp_dir / "work"
    work.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "xdg"))
    monkeypatch.chdir(work)
    monkeypatch.setattr(ccsync_logging, "_configured", False)
    yield


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Write a file, creating parent directories."""

    def _write(path: Path, content: str | bytes = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def set_mtime() -> Callable[[Path, float], None]:
    """Set a file's modification time to a fixed epoch second."""

    def _set(path: Path, seconds: float) -> None:
        os.utime(path, (seconds, seconds))

    return _set


@pytest.fixture
def global_root(temp_dir: Path) -> Path:
    root = temp_dir / "global"
    root.mkdir()
    return root


@pytest.fixture
def local_root(temp_dir: Path) -> Path:
    root = temp_dir / "local"
    root.mkdir()
    return root


@pytest.fixture
def sample_config() -> "SyncConfig":
    """Default configuration with logging confined to the console."""
    from ccsync.core.config import LoggingConfig, SyncConfig

    return SyncConfig(logging=LoggingConfig(file_enabled=False))


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
