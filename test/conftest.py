"""pytest setup for graftree.

Tests under ``test/unit/`` touch neither git nor the filesystem outside
``tmp_path``; tests under ``test/integration/`` run real ``git`` against
throwaway repositories. Everything else sits in between and mocks git.
"""

import sys
from pathlib import Path

import pytest

# fixtures/ is imported as a top-level package
test_dir = Path(__file__).parent
if str(test_dir) not in sys.path:
    sys.path.insert(0, str(test_dir))

from fixtures.git_fixtures import (  # noqa: E402
    isolated_graftree_env,
    local_git_repo,
    source_tree,
)


def pytest_configure(config):
    """Register the unit and integration markers."""
    config.addinivalue_line("markers", "unit: pattern and model logic, no git")
    config.addinivalue_line("markers", "integration: runs git worktree against a temp repo")


def pytest_collection_modifyitems(config, items):
    """Mark tests by the directory they live in, so ``-m unit`` works."""
    for item in items:
        folder = Path(str(item.fspath)).parent.name
        if folder == "unit":
            item.add_marker(pytest.mark.unit)
        elif folder == "integration":
            item.add_marker(pytest.mark.integration)


__all__ = ["isolated_graftree_env", "local_git_repo", "source_tree"]
