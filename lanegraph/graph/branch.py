from typing import Optional, Sequence, Set

from lanegraph.graph.models import Commit


def find_head(commits: Sequence[Commit]) -> Optional[str]:
    """Returns the id of the first commit carrying a HEAD ref."""
    for commit in commits:
        if commit.is_head:
            return commit.oid
    return None


def branch_membership(commits: Sequence[Commit], head_oid: Optional[str]) -> Set[str]:
    """Commits reachable from ``head_oid`` through primary parents only.

    The walk stops at a root, at a parent outside ``commits`` (shallow
    boundary) or when an id comes around a second time.
    """
    if head_oid is None:
        return set()

    by_oid = {commit.oid: commit for commit in commits}
    members: Set[str] = set()

    current = by_oid.get(head_oid)
    while current is not None and current.oid not in members:
        members.add(current.oid)
        parent = current.primary_parent
        current = by_oid.get(parent) if parent is not None else None

    return members
