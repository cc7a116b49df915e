"""Statistics collected while mapping dependencies and building graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .schema import DependencyKind

TOTAL_BUCKET = "total"


@dataclass
class KindCounter:
    """Outcome counters for one dependency kind."""

    count: int = 0
    missing: int = 0
    invalid: int = 0
    circular: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "count": self.count,
            "missing": self.missing,
            "invalid": self.invalid,
            "circular": self.circular,
        }


@dataclass
class MappingStats:
    """Per-kind dependency mapping statistics.

    Known kinds have fixed buckets that always appear in the output. Any
    other kind string gets its own bucket under ``other`` the first time it
    is seen. ``total`` aggregates every bucket.
    """

    known: Dict[DependencyKind, KindCounter] = field(
        default_factory=lambda: {kind: KindCounter() for kind in DependencyKind}
    )
    other: Dict[str, KindCounter] = field(default_factory=dict)
    total: KindCounter = field(default_factory=KindCounter)

    def bucket(self, kind: str) -> KindCounter:
        """Return the counter for ``kind``, creating an ``other`` bucket if needed."""
        known_kind = DependencyKind.parse(kind)
        if known_kind is not None:
            return self.known[known_kind]
        if kind not in self.other:
            self.other[kind] = KindCounter()
        return self.other[kind]

    def record(self, kind: str, outcome: str) -> None:
        """Increment ``outcome`` (count/missing/invalid/circular) for ``kind``."""
        counter = self.bucket(kind)
        setattr(counter, outcome, getattr(counter, outcome) + 1)
        setattr(self.total, outcome, getattr(self.total, outcome) + 1)

    def get(self, kind: str) -> Optional[KindCounter]:
        if kind == TOTAL_BUCKET:
            return self.total
        known_kind = DependencyKind.parse(kind)
        if known_kind is not None:
            return self.known[known_kind]
        return self.other.get(kind)

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        """Flatten to ``{<kind>: {...}, ..., "total": {...}}``."""
        data = {kind.value: counter.to_dict() for kind, counter in self.known.items()}
        for kind, counter in self.other.items():
            data[kind] = counter.to_dict()
        data[TOTAL_BUCKET] = self.total.to_dict()
        return data


@dataclass
class BuildStats:
    """Summary of one graph build."""

    node_count: int = 0
    edge_count: int = 0
    build_time: float = 0.0
    dependencies: MappingStats = field(default_factory=MappingStats)
    duplicate_nodes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodeCount": self.node_count,
            "edgeCount": self.edge_count,
            "buildTime": self.build_time,
            "dependencies": self.dependencies.to_dict(),
            "duplicateNodes": list(self.duplicate_nodes),
        }
