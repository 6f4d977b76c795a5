"""Pattern expansion and exclusion filtering."""

import glob
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Union

logger = logging.getLogger(__name__)

GLOB_CHARS = ("*", "?", "[")


class PatternError(ValueError):
    """Raised when an exclusion pattern cannot be compiled."""


def is_glob_pattern(pattern: str) -> bool:
    """Check if a pattern needs glob expansion."""
    return any(char in pattern for char in GLOB_CHARS)


def _normalize(match: str) -> str:
    """Convert a glob match to a POSIX relative path without trailing separators."""
    normalized = Path(match).as_posix()
    return normalized.rstrip("/") or normalized


def expand_patterns(patterns: Iterable[str], base_dir: Union[Path, str]) -> List[str]:
    """Expand literal paths and glob patterns into unique relative paths.

    Literal patterns are passed through without checking that they exist;
    the materializer skips missing sources later. Glob patterns only yield
    paths that exist under ``base_dir``.

    Args:
        patterns: Literal relative paths or glob expressions, in order.
        base_dir: Directory the patterns are relative to.

    Returns:
        De-duplicated relative paths, in first-seen order.
    """
    expanded: List[str] = []
    seen = set()

    for pattern in patterns:
        if not is_glob_pattern(pattern):
            candidates = [pattern]
        else:
            matches = glob.glob(pattern, root_dir=str(base_dir), recursive=True)
            candidates = sorted(_normalize(m) for m in matches)
            logger.debug(f"Pattern {pattern!r} matched {len(candidates)} path(s)")

        for candidate in candidates:
            if candidate and candidate not in seen:
                seen.add(candidate)
                expanded.append(candidate)

    return expanded


@lru_cache(maxsize=None)
def _compile_wildcard(pattern: str) -> "re.Pattern[str]":
    # Only "*" is translated; everything else is handed to re as-is.
    try:
        return re.compile(pattern.replace("*", ".*"))
    except re.error as e:
        raise PatternError(f"Invalid exclude pattern {pattern!r}: {e}") from e


def validate_exclude_patterns(exclude_patterns: Iterable[str]) -> None:
    """Raise PatternError if any wildcard exclusion pattern does not compile."""
    for pattern in exclude_patterns:
        if "*" in pattern:
            _compile_wildcard(pattern)


def is_excluded(path: str, exclude_patterns: Iterable[str]) -> bool:
    """Check if a relative path matches any exclusion pattern.

    Patterns without ``*`` match the path itself or any path segment run
    (``node_modules`` excludes ``node_modules/x.js`` and ``a/node_modules``).
    Patterns with ``*`` are unanchored regex searches where ``*`` means ``.*``.
    """
    for pattern in exclude_patterns:
        if "*" in pattern:
            if _compile_wildcard(pattern).search(path):
                return True
        elif (
            path == pattern
            or path.endswith(f"/{pattern}")
            or f"/{pattern}/" in path
            or path.startswith(f"{pattern}/")
        ):
            return True
    return False


def filter_paths(paths: Iterable[str], exclude_patterns: Iterable[str]) -> List[str]:
    """Return the paths that match no exclusion pattern, keeping input order."""
    exclude_patterns = list(exclude_patterns)
    kept = []
    for path in paths:
        if is_excluded(path, exclude_patterns):
            logger.debug(f"Excluding {path}")
            continue
        kept.append(path)
    return kept
