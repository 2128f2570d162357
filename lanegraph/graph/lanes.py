import logging
from typing import Callable, Dict, List, Optional, Sequence

from lanegraph.graph.models import Commit

logger = logging.getLogger(__name__)

# Ordered lane targets for one commit. Index 0 is the lane continuation,
# the rest are merge sources. None marks a target that must not be booked.
TargetsFn = Callable[[Commit], Sequence[Optional[str]]]


class LaneAllocator:
    def __init__(self):
        # slots[i] holds the id expected next in column i, or None when free
        self.slots: List[Optional[str]] = []
        self.columns: Dict[str, int] = {}

    def _free_slot(self) -> int:
        try:
            return self.slots.index(None)
        except ValueError:
            self.slots.append(None)
            return len(self.slots) - 1

    def place(self, oid: str, targets: Sequence[Optional[str]]) -> int:
        """Assigns a column to ``oid`` and books lanes for its targets."""
        # 1. Continue a lane some earlier child reserved for us
        try:
            column = self.slots.index(oid)
            # The expectation is consumed; the lane can now be redirected
            self.slots[column] = None
        except ValueError:
            # Nobody expected this commit, so it is a new branch tip
            column = self._free_slot()

        self.columns[oid] = column

        # 2. Propagate lanes to the targets
        for index, target in enumerate(targets):
            if target is None:
                continue
            if index == 0:
                # Primary target inherits the lane. When the lane is already
                # booked the booking is dropped and another lane picks it up.
                if self.slots[column] is None:
                    self.slots[column] = target
            elif target not in self.slots:
                self.slots[self._free_slot()] = target

        return column


def assign_columns(commits: Sequence[Commit], targets_of: TargetsFn) -> Dict[str, int]:
    """Greedy column assignment over a children-before-parents sequence.

    Commits are visited in order. A commit reuses the column of the child that
    booked it; otherwise it opens the leftmost free column. Non-topological
    input never fails, it only produces a less tidy layout.
    """
    allocator = LaneAllocator()
    for commit in commits:
        allocator.place(commit.oid, targets_of(commit))

    logger.debug(f"Assigned {len(allocator.columns)} commits to {len(allocator.slots)} lanes")
    return allocator.columns


def known_parents(rows: Dict[str, int]) -> TargetsFn:
    """Targets are the commit's parents, with parents outside ``rows`` masked out."""
    def targets(commit: Commit) -> List[Optional[str]]:
        return [parent if parent in rows else None for parent in commit.parents]
    return targets
