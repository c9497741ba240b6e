"""Command-line launcher for the story library tools.

Usage:
    python run.py path
    python run.py create
    python run.py lock | unlock
    python run.py reveal
    python run.py backup --max-backups 5
    python run.py watch
    python run.py load-json prefs.json
    python run.py save-json prefs.json '{"theme": "dark"}'
    python run.py --config config/config.json --log-level DEBUG backup
"""

import argparse
import json
import logging
import os
import signal
import sys
import threading

from story_library.config.settings import apply_environment, load_config

logger = logging.getLogger("story_library")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Twine story library tools",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to config.json (default: config/config.json)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config)",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("path", help="Print the story directory path")
    sub.add_parser("create", help="Create the story directory")
    sub.add_parser("lock", help="Make the story directory read-only")
    sub.add_parser("unlock", help="Make the story directory writable")
    sub.add_parser("reveal", help="Open the story directory in the file browser")

    backup = sub.add_parser("backup", help="Back up the story directory")
    backup.add_argument(
        "--max-backups",
        type=int,
        default=None,
        help="Number of backups to keep (default: from config)",
    )

    sub.add_parser("watch", help="Back up periodically until interrupted")

    load = sub.add_parser("load-json", help="Print a JSON file from the app data folder")
    load.add_argument("filename")

    save = sub.add_parser("save-json", help="Write a JSON file to the app data folder")
    save.add_argument("filename")
    save.add_argument("data", help="JSON document to store")
    return parser


def run_watch(story_dir, config):
    from story_library.monitor.backup_scheduler import BackupScheduler

    backup_cfg = config["backup"]
    scheduler = BackupScheduler(
        story_dir,
        interval_seconds=backup_cfg["interval_minutes"] * 60,
        max_backups=backup_cfg["max_backups"],
        only_when_changed=backup_cfg["only_when_changed"],
        backup_on_start=backup_cfg["on_start"],
    )
    stop_event = threading.Event()

    def handle_signal(signum, frame):
        logger.info("Received signal %s, shutting down...", signum)
        stop_event.set()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    story_dir.create()
    scheduler.start()
    try:
        while not stop_event.is_set():
            stop_event.wait(timeout=1.0)
    finally:
        scheduler.stop()


def run_command(args, config) -> int:
    from story_library.storage import json_file
    from story_library.story.story_directory import StoryDirectory

    story_dir = StoryDirectory()

    if args.command == "path":
        print(story_dir.path())
    elif args.command == "create":
        story_dir.create()
    elif args.command == "lock":
        story_dir.lock()
    elif args.command == "unlock":
        story_dir.unlock()
    elif args.command == "reveal":
        story_dir.reveal()
    elif args.command == "backup":
        max_backups = args.max_backups
        if max_backups is None:
            max_backups = config["backup"]["max_backups"]
        print(story_dir.backup(max_backups))
    elif args.command == "watch":
        run_watch(story_dir, config)
    elif args.command == "load-json":
        print(json.dumps(json_file.load(args.filename), indent=2))
    elif args.command == "save-json":
        json_file.save(args.filename, json.loads(args.data))
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, json.JSONDecodeError) as exc:
        parser.error(f"Could not load config: {exc}")

    level = args.log_level or config["logging"]["level"]
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    apply_environment(config)

    try:
        return run_command(args, config)
    except (OSError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
