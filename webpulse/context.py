"""Run-scoped state shared by the aggregator and the workspace resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Set

from .config import AnalysisConfig
from .models import DependencyCache


@dataclass
class AnalysisContext:
    """Everything one analysis run owns besides the ProjectRecord itself.

    A fresh context is created per run, so no dependency statistics leak
    between runs.
    """

    config: AnalysisConfig
    cache: DependencyCache = field(default_factory=DependencyCache)
    recorded_manifests: Set[Path] = field(default_factory=set)

    def cache_for(self, manifest: Path) -> Optional[DependencyCache]:
        """Return the cache the first time ``manifest`` is seen, None afterwards."""
        key = Path(manifest).resolve()
        if key in self.recorded_manifests:
            return None
        self.recorded_manifests.add(key)
        return self.cache


__all__ = ["AnalysisContext"]
