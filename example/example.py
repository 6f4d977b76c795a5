"""Example usage of graftree library functions."""

import tempfile
from pathlib import Path

from graftree import GraftreeConfig, expand_patterns, filter_paths, graft, is_excluded

with tempfile.TemporaryDirectory() as tmpdir:
    source = Path(tmpdir) / "project"
    worktree = Path(tmpdir) / "feature"
    (source / "certs").mkdir(parents=True)
    worktree.mkdir()
    (source / ".env").write_text("SECRET=1\n")
    (source / "certs" / "dev.pem").write_text("-----BEGIN-----\n")
    (source / "certs" / "old.pem.bak").write_text("stale\n")

    # Expand globs relative to the source checkout
    paths = expand_patterns([".env", "certs/*"], source)
    print(f"Expanded: {paths}")  # ['.env', 'certs/dev.pem', 'certs/old.pem.bak']

    # Drop anything matching an exclusion
    print(f"Is 'certs/old.pem.bak' excluded? {is_excluded('certs/old.pem.bak', ['*.bak'])}")
    print(f"Filtered: {filter_paths(paths, ['*.bak'])}")  # ['.env', 'certs/dev.pem']

    # Run the whole pipeline, appending to a throwaway ignore list
    config = GraftreeConfig(mode="symlink", include=[".env", "certs"], exclude=["*.bak"])
    summary = graft(config, source, worktree, Path(tmpdir) / "exclude")
    for result in summary.results:
        print(f"{result.path}: {result.status.value} ({result.written} entries)")
    print(f"Ignore patterns added: {summary.ignore_patterns_added}")
