"""Append materialized paths to git's local ignore list (``info/exclude``).

The exclude file is only ever appended to. Existing lines, comments and
blank lines are preserved as they are, and a pattern that is already listed
(outside of a comment) is never added twice.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Set, Union

logger = logging.getLogger(__name__)

MARKER = "# Added by git-graftree"


def read_known_patterns(ignore_file: Union[Path, str]) -> Set[str]:
    """Load the non-comment, non-blank patterns of an ignore list."""
    ignore_file = Path(ignore_file)
    if not ignore_file.exists():
        return set()

    with open(ignore_file, "r", encoding="utf-8", errors="replace") as f:
        lines = [line.strip() for line in f.read().split("\n")]

    return {line for line in lines if line and not line.startswith("#")}


def merge_ignore_list(patterns: Iterable[str], ignore_file: Union[Path, str]) -> List[str]:
    """Append patterns missing from an ignore list.

    Args:
        patterns: Relative paths to hide from git.
        ignore_file: Path of the ignore list, usually ``.git/info/exclude``.

    Returns:
        The patterns that were appended, in input order. Empty when nothing
        needed to be written, in which case the file is not touched.

    Raises:
        OSError: If the directory or file cannot be created or appended to.
    """
    ignore_file = Path(ignore_file)
    ignore_file.parent.mkdir(parents=True, exist_ok=True)

    known = read_known_patterns(ignore_file)

    new_patterns: List[str] = []
    for pattern in patterns:
        pattern = pattern.strip()
        if not pattern or pattern in known or pattern in new_patterns:
            continue
        new_patterns.append(pattern)

    if not new_patterns:
        logger.info(f"All patterns already exist in {ignore_file}")
        return []

    block = "\n".join(["", MARKER, *new_patterns, ""])
    with open(ignore_file, "a", encoding="utf-8") as f:
        f.write(block)

    logger.info(f"Added {len(new_patterns)} pattern(s) to {ignore_file}")
    return new_patterns
