from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple


class RefKind(str, Enum):
    HEAD = "HEAD"
    BRANCH = "branch"
    REMOTE = "remote"
    TAG = "tag"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "RefKind":
        """Maps a raw kind string to a RefKind, falling back to OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


# Badge order used when a commit carries several refs
REF_KIND_ORDER = {
    RefKind.HEAD: 0,
    RefKind.BRANCH: 1,
    RefKind.REMOTE: 2,
    RefKind.TAG: 3,
    RefKind.OTHER: 4,
}


@dataclass(frozen=True)
class Ref:
    name: str
    kind: RefKind = RefKind.OTHER

    def __post_init__(self):
        if not isinstance(self.kind, RefKind):
            object.__setattr__(self, "kind", RefKind.parse(self.kind))


@dataclass(frozen=True)
class Commit:
    oid: str
    parents: Tuple[str, ...] = ()
    refs: Tuple[Ref, ...] = ()
    author_time: int = 0
    author_name: str = ""
    author_email: str = ""
    summary: str = ""

    def __post_init__(self):
        # Callers may pass lists
        object.__setattr__(self, "parents", tuple(self.parents))
        object.__setattr__(self, "refs", tuple(self.refs))

    @property
    def primary_parent(self) -> Optional[str]:
        return self.parents[0] if self.parents else None

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def is_head(self) -> bool:
        return any(ref.kind == RefKind.HEAD for ref in self.refs)

    @property
    def is_interesting(self) -> bool:
        """Commits kept by the topology view: anything with a ref, plus roots."""
        return bool(self.refs) or self.is_root

    def sorted_refs(self) -> List[Ref]:
        return sorted(self.refs, key=lambda ref: REF_KIND_ORDER[ref.kind])


@dataclass(frozen=True)
class SimplifiedEdge:
    source: str
    target: str
    distance: int = 1

    @property
    def elided(self) -> int:
        """Number of commits hidden between source and target."""
        return self.distance - 1


@dataclass(frozen=True)
class NodePosition:
    oid: str
    x: float
    y: float
    hit_radius: float


@dataclass(frozen=True)
class Connector:
    source: str
    target: str
    source_row: int
    target_row: int
    source_column: int
    target_column: int
    primary: bool = True
    dashed: bool = False
    current_branch: bool = False

    @property
    def straight(self) -> bool:
        return self.source_column == self.target_column


@dataclass(frozen=True)
class NodeLabel:
    text: str
    extra_refs: int = 0


@dataclass(frozen=True)
class HistoryLayout:
    rows: Dict[str, int] = field(default_factory=dict)
    columns: Dict[str, int] = field(default_factory=dict)
    positions: List[NodePosition] = field(default_factory=list)
    connectors: List[Connector] = field(default_factory=list)
    current_branch: FrozenSet[str] = frozenset()
    # Refs per commit in badge order, only for commits that carry refs
    badges: Dict[str, List[Ref]] = field(default_factory=dict)
    width: float = 0.0
    height: float = 0.0

    @property
    def column_count(self) -> int:
        return max(self.columns.values(), default=-1) + 1


@dataclass(frozen=True)
class TopologyLayout:
    interesting: List[Commit] = field(default_factory=list)
    edges: List[SimplifiedEdge] = field(default_factory=list)
    rows: Dict[str, int] = field(default_factory=dict)
    columns: Dict[str, int] = field(default_factory=dict)
    positions: List[NodePosition] = field(default_factory=list)
    connectors: List[Connector] = field(default_factory=list)
    labels: Dict[str, NodeLabel] = field(default_factory=dict)
    width: float = 0.0
    height: float = 0.0

    @property
    def column_count(self) -> int:
        return max(self.columns.values(), default=-1) + 1
