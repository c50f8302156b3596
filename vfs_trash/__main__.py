#!/usr/bin/env python3
"""
Command line view of the trash.

    python -m vfs_trash                     list every trash and its files
    python -m vfs_trash --resolve URI       show where a trash URI points
    python -m vfs_trash --watch             log changes until interrupted
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from PySide6.QtCore import QCoreApplication

from vfs_trash.config import TrashConfig
from vfs_trash.errors import TrashError
from vfs_trash.trash import Trash
from vfs_trash.trash_manager import TrashManager

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vfs-trash",
        description="Inspect the freedesktop trash directories."
    )
    parser.add_argument("--resolve", metavar="URI", help="Resolve a trash:/// URI and exit")
    parser.add_argument("--watch", action="store_true", help="Keep running and log trash changes")
    parser.add_argument(
        "--trash-dir", action="append", default=[], metavar="DIR",
        help="Additional trash root to track (repeatable)"
    )
    parser.add_argument("--home", metavar="DIR", help="Use DIR as the home trash")
    parser.add_argument("--interval-ms", type=int, help="Rescan interval in milliseconds")
    parser.add_argument(
        "--save-config", action="store_true",
        help="Store the effective home, interval and trash directories as the new defaults"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(args)


def build_config(args: argparse.Namespace) -> TrashConfig:
    """Stored configuration with command line overrides applied."""
    config = TrashConfig.load()
    if args.home:
        config.home_directory = args.home
        config.create_home = False
    if args.interval_ms and args.interval_ms > 0:
        config.rescan_interval_ms = args.interval_ms
    config.extra_directories = list(config.extra_directories) + list(args.trash_dir)
    return config


def print_listing(manager: TrashManager) -> None:
    for trash in manager.get_trashes():
        files = trash.get_files()
        print(f"[{trash.get_id()}] {trash.root_directory} ({len(files)} files)")
        for name in files:
            info = trash.get_info(name)
            if info is None:
                print(f"    {trash.get_uri(name)}")
            else:
                print(f"    {trash.get_uri(name)}  {info.original_path}  ({info.deletion_date})")


def print_resolution(manager: TrashManager, uri: str) -> None:
    trash, relative_path = manager.resolve_identifier(uri)
    print(f"trash:         {trash.get_id()} ({trash.root_directory})")
    print(f"relative path: {relative_path or '(none)'}")
    print(f"path:          {manager.resolve_path(uri)}")


def watch(app: QCoreApplication, manager: TrashManager) -> int:
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    log = logging.getLogger("vfs_trash.watch")

    def connect(trash: Trash) -> None:
        tid = trash.get_id()
        trash.filesAdded.connect(lambda names: log.info("[%d] added: %s", tid, ", ".join(names)))
        trash.filesRemoved.connect(lambda names: log.info("[%d] removed: %s", tid, ", ".join(names)))

    for trash in manager.get_trashes():
        connect(trash)
    manager.emptyChanged.connect(lambda empty: log.info("Trash is %s", "empty" if empty else "full"))

    log.info("Watching %d trash(es), press Ctrl+C to stop", len(manager.get_trashes()))
    return app.exec()


def main(cli_args: Optional[List[str]] = None) -> int:
    args = parse_args(cli_args)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])

    config = build_config(args)
    try:
        manager = TrashManager.get_default(config)
    except TrashError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.save_config:
        config.save()
        logging.getLogger(__name__).info("Saved configuration")

    with manager:
        if args.resolve:
            try:
                print_resolution(manager, args.resolve)
            except TrashError as e:
                print(f"error: {e}", file=sys.stderr)
                return 2
            return 0

        print_listing(manager)
        if args.watch:
            return watch(app, manager)

    return 0


if __name__ == "__main__":
    sys.exit(main())
