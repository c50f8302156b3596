"""Shared fixtures for the trash tests."""

import pytest
from PySide6.QtCore import QCoreApplication

from vfs_trash.config import TrashConfig
from vfs_trash.trash_manager import TrashManager


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """One Qt application for the whole run; timers need its event loop."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def reset_default_manager():
    """Never leak the shared manager from one test into the next."""
    yield
    manager = TrashManager._default
    if manager is not None:
        manager.shutdown()
    TrashManager._default = None
    TrashManager._default_refs = 0


@pytest.fixture
def trash_root(tmp_path):
    """An empty trash root with files/ and info/."""
    root = tmp_path / "Trash"
    (root / "files").mkdir(parents=True)
    (root / "info").mkdir()
    return root


@pytest.fixture
def config(trash_root):
    """Configuration pointing the home trash at `trash_root`."""
    return TrashConfig(home_directory=str(trash_root), create_home=False)
