#!/usr/bin/env python3
"""Tracker CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from tracker.lib.config import TrackerConfig, load_config
from tracker.lib.logs import setup_logging
from tracker.storage import (
    JSONFileDatabase,
    ProjectsDatabase,
    StateFormatError,
    StorageIOError,
)
from tracker.commands import epic as cmd_epic_module
from tracker.commands import story as cmd_story_module
from tracker.commands import show as cmd_show_module
from tracker.commands import run as cmd_run_module

logger = logging.getLogger(__name__)


def get_config(args) -> TrackerConfig:
    """Load config from --config or tracker.env, then apply --db."""
    config = load_config(Path(args.config) if args.config else None)
    if args.db:
        config.db_path = Path(args.db)
    return config


def get_db(args) -> ProjectsDatabase:
    return ProjectsDatabase(JSONFileDatabase(args.config_obj.db_path))


def cmd_init(args):
    """Create an empty database file if none exists."""
    path = args.config_obj.db_path
    existed = path.exists()
    JSONFileDatabase.init(path)
    if existed:
        print(f"Database already exists: {path}")
    else:
        print(f"Created database: {path}")
    return 0


def cmd_run(args):
    JSONFileDatabase.init(args.config_obj.db_path)
    return cmd_run_module.cmd_run(args, get_db(args))


def cmd_list(args):
    return cmd_show_module.cmd_list(args, get_db(args))


def cmd_show(args):
    return cmd_show_module.cmd_show(args, get_db(args))


def cmd_epic_create(args):
    return cmd_epic_module.cmd_epic_create(args, get_db(args))


def cmd_epic_delete(args):
    return cmd_epic_module.cmd_epic_delete(args, get_db(args))


def cmd_epic_status(args):
    return cmd_epic_module.cmd_epic_status(args, get_db(args))


def cmd_story_create(args):
    return cmd_story_module.cmd_story_create(args, get_db(args))


def cmd_story_delete(args):
    return cmd_story_module.cmd_story_delete(args, get_db(args))


def cmd_story_status(args):
    return cmd_story_module.cmd_story_status(args, get_db(args))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='tracker', description='Local epic/story tracker')
    parser.add_argument('--config', '-c', help='Path to tracker.env (default: ./tracker.env if present)')
    parser.add_argument('--db', help='Database file (overrides DB_PATH)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log debug output')
    parser.set_defaults(func=cmd_run)
    subparsers = parser.add_subparsers(dest='command')

    # tracker run
    p_run = subparsers.add_parser('run', help='Interactive mode (default)')
    p_run.set_defaults(func=cmd_run)

    # tracker init
    p_init = subparsers.add_parser('init', help='Create an empty database')
    p_init.set_defaults(func=cmd_init)

    # tracker list
    p_list = subparsers.add_parser('list', help='List epics')
    p_list.set_defaults(func=cmd_list)

    # tracker show
    p_show = subparsers.add_parser('show', help='Show an epic or one of its stories')
    p_show.add_argument('epic_id', type=int, help='Epic ID')
    p_show.add_argument('story_id', type=int, nargs='?', help='Story ID within the epic')
    p_show.set_defaults(func=cmd_show)

    # tracker epic
    p_epic = subparsers.add_parser('epic', help='Manage epics')
    p_epic.set_defaults(func=cmd_list)
    epic_sub = p_epic.add_subparsers(dest='epic_cmd')

    p_epic_create = epic_sub.add_parser('create', help='Create an epic')
    p_epic_create.add_argument('name', help='Epic name')
    p_epic_create.add_argument('--description', '-d', help='Epic description')
    p_epic_create.set_defaults(func=cmd_epic_create)

    p_epic_delete = epic_sub.add_parser('delete', help='Delete an epic and all its stories')
    p_epic_delete.add_argument('id', type=int, help='Epic ID')
    p_epic_delete.add_argument('--yes', '-y', action='store_true', help='Skip confirmation')
    p_epic_delete.set_defaults(func=cmd_epic_delete)

    p_epic_status = epic_sub.add_parser('status', help='Set epic status')
    p_epic_status.add_argument('id', type=int, help='Epic ID')
    p_epic_status.add_argument('status', help='open, in-progress, resolved, closed (or 1-4)')
    p_epic_status.set_defaults(func=cmd_epic_status)

    # tracker story
    p_story = subparsers.add_parser('story', help='Manage stories')
    story_sub = p_story.add_subparsers(dest='story_cmd', required=True)

    p_story_create = story_sub.add_parser('create', help='Create a story in an epic')
    p_story_create.add_argument('epic_id', type=int, help='Epic ID')
    p_story_create.add_argument('name', help='Story name')
    p_story_create.add_argument('--description', '-d', help='Story description')
    p_story_create.set_defaults(func=cmd_story_create)

    p_story_delete = story_sub.add_parser('delete', help='Delete a story from an epic')
    p_story_delete.add_argument('epic_id', type=int, help='Epic ID')
    p_story_delete.add_argument('id', type=int, help='Story ID')
    p_story_delete.add_argument('--yes', '-y', action='store_true', help='Skip confirmation')
    p_story_delete.set_defaults(func=cmd_story_delete)

    p_story_status = story_sub.add_parser('status', help='Set story status')
    p_story_status.add_argument('id', type=int, help='Story ID')
    p_story_status.add_argument('status', help='open, in-progress, resolved, closed (or 1-4)')
    p_story_status.set_defaults(func=cmd_story_status)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.config_obj = get_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(
        "DEBUG" if args.verbose else args.config_obj.log_level,
        args.config_obj.log_file,
    )

    try:
        return args.func(args)
    except (StorageIOError, StateFormatError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
