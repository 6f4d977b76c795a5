"""Git worktree operations for graftree.

Worktrees are created as siblings of the source checkout by default:

    ~/src/
    ├── myproject/            # Source checkout (where graftree runs)
    │   └── .git/
    │       └── info/exclude  # Shared ignore list for every worktree
    └── feature-auth/         # Worktree for branch 'feature/auth'

The ignore list is resolved through ``git rev-parse --git-common-dir`` so the
same ``info/exclude`` is used whether graftree runs from the main checkout or
from inside another linked worktree.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


def sanitize_branch_name(branch: str) -> str:
    """Sanitize branch name for filesystem use."""
    # Replace slashes with hyphens
    sanitized = branch.replace("/", "-")
    # Remove other problematic characters
    sanitized = re.sub(r"[^a-zA-Z0-9\-_.]", "_", sanitized)
    # Remove leading/trailing dots and hyphens
    sanitized = sanitized.strip(".-")
    return sanitized


def is_git_repository(path: Union[Path, str]) -> bool:
    """Check if a directory is inside a git work tree."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=path,
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0 and result.stdout.strip() == "true"
    except (OSError, subprocess.SubprocessError):
        return False


class WorktreeManager:
    """Creates git worktrees for a source checkout."""

    def __init__(self, source_root: Union[Path, str]):
        """Initialize worktree manager."""
        self.source_root = Path(source_root).absolute()

    def get_worktree_path(self, branch: str) -> Path:
        """Get the default local path for a branch's worktree."""
        return self.source_root.parent / sanitize_branch_name(branch)

    def create_worktree(
        self,
        branch: str,
        path: Optional[Union[Path, str]] = None,
        no_track: bool = False,
        force: bool = False,
    ) -> Path:
        """Create a new git worktree for a branch.

        Args:
            branch: Branch to check out in the worktree.
            path: Where to create the worktree. Defaults to a sibling of the
                source checkout named after the branch.
            no_track: Pass ``--no-track`` to git.
            force: Pass ``--force`` to git.

        Returns:
            Absolute path of the new worktree.

        Raises:
            RuntimeError: If git fails to create the worktree.
        """
        if path is None:
            worktree_path = self.get_worktree_path(branch)
        else:
            worktree_path = Path(path).expanduser()
            if not worktree_path.is_absolute():
                worktree_path = self.source_root / worktree_path
        worktree_path = worktree_path.absolute()

        args: List[str] = ["git", "worktree", "add"]
        if force:
            args.append("--force")
        if no_track:
            args.append("--no-track")
        args.extend([str(worktree_path), branch])

        logger.info(f"Creating worktree at {worktree_path} for branch {branch}")

        try:
            result = subprocess.run(
                args,
                cwd=self.source_root,
                capture_output=True,
                text=True,
                check=True,
            )
            logger.debug(f"Worktree creation output: {result.stdout}")
        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to create worktree: {e.stderr}")
            raise RuntimeError(f"Failed to create worktree: {e.stderr.strip()}") from e
        except OSError as e:
            logger.error(f"Failed to run git: {e}")
            raise RuntimeError(f"Failed to create worktree: {e}") from e

        logger.info(f"Successfully created worktree for {branch}")
        return worktree_path

    def get_git_common_dir(self) -> Path:
        """Get the git directory shared by all worktrees of the repository.

        Raises:
            RuntimeError: If the source root is not inside a git repository.
        """
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--path-format=absolute", "--git-common-dir"],
                cwd=self.source_root,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise RuntimeError(f"Failed to locate git directory: {e.stderr.strip()}") from e

        git_dir = Path(result.stdout.strip())
        if not git_dir.is_absolute():
            git_dir = (self.source_root / git_dir).resolve()
        return git_dir

    def get_exclude_file(self) -> Path:
        """Get the repository's local ignore list."""
        return self.get_git_common_dir() / "info" / "exclude"
