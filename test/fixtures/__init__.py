"""Test fixtures for graftree tests."""

# Note: Fixtures are imported directly from modules in conftest.py
# This __init__.py enables the fixtures package to be imported

__all__ = [
    "isolated_graftree_env",
    "source_tree",
    "local_git_repo",
]
