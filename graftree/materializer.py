"""Copy or symlink files and directory trees into a worktree.

Materialization never overwrites anything: a destination file, directory or
symlink that already exists is left untouched, which makes repeated runs
against the same worktree idempotent. Directories are merged into, so entries
added to the source since the last run are filled in on the next one.

Symlinks found in the source are leaves. In copy mode the link itself is
reproduced; in symlink mode the new link points at the source link's
absolute path. Source symlinks are never traversed, even when they point at
a directory.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Tuple, Union

from .models import MaterializeResult, MaterializeStatus

logger = logging.getLogger(__name__)


def _absolute(path: Union[Path, str]) -> Path:
    """Make a path absolute without resolving symlinks."""
    return Path(os.path.abspath(path))


def _occupied(target: Path) -> bool:
    """True if target exists as anything other than a real directory."""
    return os.path.lexists(target) and (target.is_symlink() or not target.is_dir())


def _place_file(source: Path, target: Path, use_symlinks: bool) -> bool:
    """Materialize a single file or symlink.

    Returns:
        True if something was written, False if the target already existed.
    """
    if os.path.lexists(target):
        logger.debug(f"Skipping {target}: already exists")
        return False

    target.parent.mkdir(parents=True, exist_ok=True)

    if use_symlinks:
        target.symlink_to(source)
    else:
        shutil.copy2(source, target, follow_symlinks=False)
    return True


def _place_directory(source: Path, target: Path, use_symlinks: bool) -> int:
    """Materialize a directory tree depth-first with an explicit stack.

    Returns:
        Number of directories, files and links created.
    """
    if not source.is_dir() or source.is_symlink():
        raise NotADirectoryError(f"{source} is not a directory")

    written = 0
    stack: List[Tuple[Path, Path]] = [(source, target)]

    while stack:
        src_dir, dst_dir = stack.pop()
        if not dst_dir.is_dir():
            dst_dir.mkdir(parents=True, exist_ok=True)
            written += 1

        with os.scandir(src_dir) as it:
            entries = sorted(it, key=lambda e: e.name)

        subdirs = []
        for entry in entries:
            src_entry = src_dir / entry.name
            dst_entry = dst_dir / entry.name
            if entry.is_dir(follow_symlinks=False):
                if _occupied(dst_entry):
                    logger.debug(f"Skipping {dst_entry}: exists and is not a directory")
                    continue
                subdirs.append((src_entry, dst_entry))
            elif entry.is_file(follow_symlinks=False) or entry.is_symlink():
                if _place_file(src_entry, dst_entry, use_symlinks):
                    written += 1
            else:
                logger.debug(f"Skipping special file {src_entry}")

        # Reversed so the first subdirectory is completed first
        stack.extend(reversed(subdirs))

    return written


def materialize(
    path: str,
    source_root: Union[Path, str],
    target_root: Union[Path, str],
    use_symlinks: bool = False,
) -> MaterializeResult:
    """Reproduce ``source_root/path`` at ``target_root/path``.

    Args:
        path: Relative path of a file or directory under ``source_root``.
        source_root: Root of the original checkout.
        target_root: Root of the worktree.
        use_symlinks: Link to the absolute source path instead of copying.

    Returns:
        MaterializeResult describing what happened. Filesystem errors are
        reported as a ``failed`` result rather than raised.
    """
    source = _absolute(Path(source_root) / path)
    target = _absolute(Path(target_root) / path)
    done = MaterializeStatus.LINKED if use_symlinks else MaterializeStatus.COPIED

    if not os.path.exists(source):
        logger.debug(f"Source {source} does not exist, skipping")
        return MaterializeResult(path=path, status=MaterializeStatus.SKIPPED_MISSING)

    try:
        if source.is_dir() and not source.is_symlink():
            if _occupied(target):
                return MaterializeResult(path=path, status=MaterializeStatus.SKIPPED_EXISTS)
            written = _place_directory(source, target, use_symlinks)
        else:
            written = 1 if _place_file(source, target, use_symlinks) else 0
    except OSError as e:
        logger.warning(f"Failed to materialize {path}: {e}")
        return MaterializeResult(path=path, status=MaterializeStatus.FAILED, reason=str(e))

    if written == 0:
        return MaterializeResult(path=path, status=MaterializeStatus.SKIPPED_EXISTS)

    logger.info(f"{done.value.capitalize()} {path} ({written} entries)")
    return MaterializeResult(path=path, status=done, written=written)
