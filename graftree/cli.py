"""git-graftree command line interface."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import (
    ConfigError,
    GraftreeConfig,
    cli_overrides,
    get_graftree_config,
    get_local_config_path,
    save_config,
)
from .graft import graft
from .models import GraftSummary, MaterializeStatus
from .worktree_manager import WorktreeManager, is_git_repository

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="git-graftree",
        description="Create a git worktree and copy/symlink untracked files into it",
    )
    parser.add_argument("branch", nargs="?", help="Branch name for the worktree")
    parser.add_argument(
        "-s",
        "--symlink",
        action="store_true",
        help="Create symbolic links instead of copying files",
    )
    parser.add_argument("-p", "--path", help="Path where to create the worktree")
    parser.add_argument("--no-track", action="store_true", help="Do not track the branch")
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Force creation even if worktree directory exists",
    )
    parser.add_argument(
        "--include",
        nargs="+",
        metavar="PATTERN",
        help="Paths or globs to materialize (replaces configured include list)",
    )
    parser.add_argument(
        "--exclude",
        nargs="+",
        metavar="PATTERN",
        help="Patterns to skip (replaces configured exclude list)",
    )
    parser.add_argument(
        "--no-exclude-update",
        action="store_true",
        help="Do not add materialized paths to .git/info/exclude",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help=f"Write a default {get_local_config_path('.').name} in the current directory",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_summary(summary: GraftSummary, ignore_file: Optional[Path] = None) -> None:
    """Print a human-readable summary of a graft run."""
    for result in summary.results:
        if result.status == MaterializeStatus.FAILED:
            print(f"  ✗ {result.path}: {result.reason}")
        elif result.status == MaterializeStatus.SKIPPED_MISSING:
            print(f"  - {result.path} (not found)")
        elif result.status == MaterializeStatus.SKIPPED_EXISTS:
            print(f"  = {result.path} (already exists)")
        else:
            print(f"  ✓ {result.path} ({result.status.value})")

    print(
        f"{len(summary.succeeded)} materialized, {len(summary.skipped)} skipped, "
        f"{len(summary.failed)} failed"
    )
    if summary.ignore_patterns_added:
        target = ignore_file if ignore_file is not None else "the ignore list"
        print(f"Added {len(summary.ignore_patterns_added)} pattern(s) to {target}")


def init_config(source_root: Path) -> int:
    """Write the default local configuration file."""
    config_path = get_local_config_path(source_root)
    if config_path.exists():
        print(f"Error: {config_path} already exists", file=sys.stderr)
        return 1
    save_config(GraftreeConfig(), config_path)
    print(f"Wrote {config_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for git-graftree."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    source_root = Path.cwd()

    if args.init_config:
        return init_config(source_root)

    if not args.branch:
        parser.print_usage(sys.stderr)
        print("Error: branch is required", file=sys.stderr)
        return 2

    if not is_git_repository(source_root):
        print("Error: not inside a git repository", file=sys.stderr)
        return 1

    try:
        config = get_graftree_config(
            source_root,
            overrides=cli_overrides(args.symlink, args.include, args.exclude),
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    manager = WorktreeManager(source_root)
    try:
        worktree_path = manager.create_worktree(
            args.branch, path=args.path, no_track=args.no_track, force=args.force
        )
        ignore_file = None if args.no_exclude_update else manager.get_exclude_file()
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        summary = graft(config, source_root, worktree_path, ignore_file)
    except OSError as e:
        logger.error(f"Failed to update ignore list: {e}")
        print(f"Error: failed to update ignore list: {e}", file=sys.stderr)
        return 1

    print(f"Worktree ready at {worktree_path}")
    print_summary(summary, ignore_file)
    return 1 if summary.has_failures else 0


if __name__ == "__main__":
    sys.exit(main())
