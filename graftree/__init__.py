"""Create git worktrees and graft untracked files into them."""

__version__ = "0.1.0"

from .config import GraftreeConfig, get_graftree_config  # noqa: E402
from .exclude import merge_ignore_list  # noqa: E402
from .graft import graft  # noqa: E402
from .materializer import materialize  # noqa: E402
from .models import GraftSummary, MaterializeResult, MaterializeStatus  # noqa: E402
from .patterns import expand_patterns, filter_paths, is_excluded  # noqa: E402
from .worktree_manager import WorktreeManager, is_git_repository  # noqa: E402

__all__ = [
    "GraftreeConfig",
    "get_graftree_config",
    "merge_ignore_list",
    "graft",
    "materialize",
    "GraftSummary",
    "MaterializeResult",
    "MaterializeStatus",
    "expand_patterns",
    "filter_paths",
    "is_excluded",
    "WorktreeManager",
    "is_git_repository",
]
