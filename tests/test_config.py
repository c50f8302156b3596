"""Tests for TrashConfig persistence."""

import os

from PySide6.QtCore import QSettings

from vfs_trash.config import DEFAULT_RESCAN_INTERVAL_MS, TrashConfig, default_home_directory


def ini_settings(path) -> QSettings:
    return QSettings(str(path), QSettings.Format.IniFormat)


def test_defaults() -> None:
    config = TrashConfig()

    assert config.home_directory == default_home_directory()
    assert os.path.basename(config.home_directory) == "Trash"
    assert config.rescan_interval_ms == DEFAULT_RESCAN_INTERVAL_MS == 5000
    assert config.extra_directories == []
    assert config.create_home is True


def test_empty_settings_give_defaults(tmp_path) -> None:
    config = TrashConfig.load(ini_settings(tmp_path / "empty.ini"))

    assert config == TrashConfig()


def test_load_from_ini(tmp_path) -> None:
    path = tmp_path / "trash.ini"
    path.write_text(
        "[Trash]\n"
        "HomeDirectory=/srv/home-trash\n"
        "RescanIntervalMs=250\n"
        "ExtraDirectories=/media/a/.Trash-1000, /media/b/.Trash-1000\n"
        "CreateHome=false\n"
    )

    config = TrashConfig.load(ini_settings(path))

    assert config.home_directory == "/srv/home-trash"
    assert config.rescan_interval_ms == 250
    assert config.extra_directories == ["/media/a/.Trash-1000", "/media/b/.Trash-1000"]
    assert config.create_home is False


def test_single_extra_directory(tmp_path) -> None:
    path = tmp_path / "trash.ini"
    path.write_text("[Trash]\nExtraDirectories=/media/a/.Trash-1000\n")

    config = TrashConfig.load(ini_settings(path))

    assert config.extra_directories == ["/media/a/.Trash-1000"]


def test_unusable_interval_falls_back(tmp_path) -> None:
    for value in ("0", "-10", "soon"):
        path = tmp_path / f"trash-{value}.ini"
        path.write_text(f"[Trash]\nRescanIntervalMs={value}\n")

        config = TrashConfig.load(ini_settings(path))

        assert config.rescan_interval_ms == DEFAULT_RESCAN_INTERVAL_MS


def test_save_then_load(tmp_path) -> None:
    path = tmp_path / "trash.ini"
    original = TrashConfig(
        home_directory="/srv/home-trash",
        rescan_interval_ms=750,
        extra_directories=["/media/a/.Trash-1000", "/media/b/.Trash-1000"],
        create_home=False,
    )

    original.save(ini_settings(path))
    loaded = TrashConfig.load(ini_settings(path))

    assert loaded == original
