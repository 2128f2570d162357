import logging
from collections import defaultdict
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from lanegraph.graph.models import Commit, SimplifiedEdge

logger = logging.getLogger(__name__)


def _is_kept(commit: Commit, keep_merges: bool) -> bool:
    return commit.is_interesting or (keep_merges and commit.is_merge)


def nearest_kept_ancestor(
    source: str,
    parent: str,
    by_oid: Mapping[str, Commit],
    keep_merges: bool = False,
) -> Optional[SimplifiedEdge]:
    """Walks the primary-parent chain from ``parent`` to the first kept commit.

    Returns None when the chain leaves the loaded commits or loops back on
    itself.
    """
    runner = parent
    distance = 1
    seen: Set[str] = set()

    while runner not in seen:
        seen.add(runner)

        ancestor = by_oid.get(runner)
        if ancestor is None:
            return None

        if _is_kept(ancestor, keep_merges):
            return SimplifiedEdge(source=source, target=runner, distance=distance)

        if ancestor.primary_parent is None:
            return None
        runner = ancestor.primary_parent
        distance += 1

    logger.debug(f"Cycle in primary-parent chain below {source[:7]}, dropping edge")
    return None


def simplify_ancestry(
    commits: Sequence[Commit],
    keep_merges: bool = False,
) -> Tuple[List[Commit], List[SimplifiedEdge]]:
    """Reduces ``commits`` to the interesting subset and bridges the gaps.

    Every parent link of an interesting commit is followed down its
    primary-parent chain until another interesting commit is reached. The
    resulting edges record how many hops were collapsed. Merge sources that
    are not themselves interesting are only reachable through their own
    primary chain.

    With ``keep_merges`` each source links to a given ancestor once, even
    when several of its parent chains reach it. When nothing qualifies (a
    shallow slice without refs or roots) every commit is kept and linked to
    its loaded parents directly.
    """
    by_oid = {commit.oid: commit for commit in commits}
    kept = [commit for commit in commits if _is_kept(commit, keep_merges)]

    if not kept and commits:
        logger.debug(f"No interesting commits among {len(commits)}, keeping all of them")
        return list(commits), [
            SimplifiedEdge(source=commit.oid, target=parent, distance=1)
            for commit in commits
            for parent in commit.parents
            if parent in by_oid
        ]

    edges: List[SimplifiedEdge] = []
    for commit in kept:
        targets: Set[str] = set()
        for parent in commit.parents:
            edge = nearest_kept_ancestor(commit.oid, parent, by_oid, keep_merges)
            if edge is None:
                continue
            if keep_merges and edge.target in targets:
                continue
            targets.add(edge.target)
            edges.append(edge)

    logger.debug(f"Simplified {len(commits)} commits to {len(kept)} nodes and {len(edges)} edges")
    return kept, edges


def group_by_source(edges: Sequence[SimplifiedEdge]) -> Dict[str, List[str]]:
    """Edge targets per source, in emission order."""
    grouped: Dict[str, List[str]] = defaultdict(list)
    for edge in edges:
        grouped[edge.source].append(edge.target)
    return grouped
