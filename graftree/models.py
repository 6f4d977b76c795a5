"""Data models for the materialization pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class MaterializeStatus(str, Enum):
    """Outcome of materializing one expanded path."""

    COPIED = "copied"
    LINKED = "linked"
    SKIPPED_EXISTS = "skipped_exists"
    SKIPPED_MISSING = "skipped_missing"
    FAILED = "failed"


@dataclass
class MaterializeResult:
    """Represents the result of materializing a single relative path."""

    path: str
    status: MaterializeStatus
    reason: Optional[str] = None
    written: int = 0  # Entries created under the target

    @property
    def ok(self) -> bool:
        """True unless the materialization failed."""
        return self.status != MaterializeStatus.FAILED

    @property
    def attempted(self) -> bool:
        """True if the source existed, i.e. the path belongs in the ignore list."""
        return self.status != MaterializeStatus.SKIPPED_MISSING


@dataclass
class GraftSummary:
    """Collected results of one graft run."""

    results: List[MaterializeResult] = field(default_factory=list)
    ignore_patterns_added: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> List[MaterializeResult]:
        """Paths that were copied or linked."""
        return [
            r
            for r in self.results
            if r.status in (MaterializeStatus.COPIED, MaterializeStatus.LINKED)
        ]

    @property
    def skipped(self) -> List[MaterializeResult]:
        """Paths that were already present or missing at the source."""
        return [
            r
            for r in self.results
            if r.status in (MaterializeStatus.SKIPPED_EXISTS, MaterializeStatus.SKIPPED_MISSING)
        ]

    @property
    def failed(self) -> List[MaterializeResult]:
        """Paths that could not be materialized."""
        return [r for r in self.results if r.status == MaterializeStatus.FAILED]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    @property
    def attempted_paths(self) -> List[str]:
        """Relative paths whose source existed when materialization ran."""
        return [r.path for r in self.results if r.attempted]
