"""Materialize configured paths into a worktree and hide them from git."""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import GraftreeConfig
from .exclude import merge_ignore_list
from .materializer import materialize
from .models import GraftSummary
from .patterns import expand_patterns, filter_paths

logger = logging.getLogger(__name__)


def graft(
    config: GraftreeConfig,
    source_root: Union[Path, str],
    worktree_path: Union[Path, str],
    ignore_file: Optional[Union[Path, str]] = None,
) -> GraftSummary:
    """Run the expand, filter, materialize and ignore-list pipeline.

    Each path is materialized independently; a failure is recorded in the
    summary and the remaining paths are still processed. The ignore list is
    updated once, after every path has been attempted.

    Args:
        config: Resolved settings (mode, include and exclude patterns).
        source_root: Checkout the patterns are resolved against.
        worktree_path: Destination worktree.
        ignore_file: Ignore list to append to. ``None`` skips the update.

    Returns:
        GraftSummary with one result per filtered path.

    Raises:
        OSError: If the ignore list cannot be updated.
    """
    source_root = Path(source_root)
    worktree_path = Path(worktree_path)

    expanded = expand_patterns(config.include, source_root)
    paths = filter_paths(expanded, config.exclude)
    logger.info(
        f"Materializing {len(paths)} path(s) into {worktree_path} "
        f"({len(expanded) - len(paths)} excluded, mode={config.mode})"
    )

    summary = GraftSummary()
    for path in paths:
        summary.results.append(materialize(path, source_root, worktree_path, config.use_symlinks))

    if ignore_file is not None:
        summary.ignore_patterns_added = merge_ignore_list(summary.attempted_paths, ignore_file)

    return summary
