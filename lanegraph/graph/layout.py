"""Entry points turning an ordered commit list into drawable layouts.

Both policies are pure: the same commits in the same order always produce
the same columns and positions, so a re-render never moves a node.
"""
import logging
from typing import Dict, List, Sequence

from lanegraph.graph.branch import branch_membership, find_head
from lanegraph.graph.geometry import (
    COMMIT_RADIUS,
    HISTORY_CELLS,
    MERGE_RADIUS,
    TOPOLOGY_CELLS,
    TOPOLOGY_RADIUS,
    CellSize,
)
from lanegraph.graph.lanes import assign_columns, known_parents
from lanegraph.graph.models import (
    Commit,
    Connector,
    HistoryLayout,
    NodeLabel,
    NodePosition,
    TopologyLayout,
)
from lanegraph.graph.rows import index_rows
from lanegraph.graph.simplify import group_by_source, simplify_ancestry

logger = logging.getLogger(__name__)

MAX_LABEL_LENGTH = 20


def node_label(commit: Commit) -> NodeLabel:
    """Text shown inside a topology node plus the count of refs not shown."""
    if commit.refs:
        text = commit.refs[0].name
    elif commit.is_merge:
        text = "Merge"
    else:
        text = commit.oid[:7]

    if len(text) > MAX_LABEL_LENGTH:
        text = text[:MAX_LABEL_LENGTH - 3] + "..."

    return NodeLabel(text=text, extra_refs=max(len(commit.refs) - 1, 0))


def layout_history(commits: Sequence[Commit], cells: CellSize = HISTORY_CELLS) -> HistoryLayout:
    """Lays out every commit, one row each, in the order given."""
    rows = index_rows(commits)
    columns = assign_columns(commits, known_parents(rows))
    current = branch_membership(commits, find_head(commits))

    positions: List[NodePosition] = []
    connectors: List[Connector] = []

    for row, commit in enumerate(commits):
        column = columns[commit.oid]
        x, y = cells.to_point(row, column)
        radius = MERGE_RADIUS if commit.is_merge else COMMIT_RADIUS
        positions.append(NodePosition(oid=commit.oid, x=x, y=y, hit_radius=radius))

        for index, parent in enumerate(commit.parents):
            parent_row = rows.get(parent)
            if parent_row is None:
                continue
            primary = index == 0
            connectors.append(Connector(
                source=commit.oid,
                target=parent,
                source_row=row,
                target_row=parent_row,
                source_column=column,
                target_column=columns[parent],
                primary=primary,
                dashed=abs(parent_row - row) > 1,
                current_branch=primary and commit.oid in current and parent in current,
            ))

    width, height = cells.extent(len(commits), max(columns.values(), default=0) + 1)
    logger.debug(f"History layout: {len(commits)} rows, {len(set(columns.values()))} columns")

    return HistoryLayout(
        rows=rows,
        columns=columns,
        positions=positions,
        connectors=connectors,
        current_branch=frozenset(current),
        badges={c.oid: c.sorted_refs() for c in commits if c.refs},
        width=width,
        height=height,
    )


def layout_topology(
    commits: Sequence[Commit],
    cells: CellSize = TOPOLOGY_CELLS,
    keep_merges: bool = False,
) -> TopologyLayout:
    """Lays out only ref-bearing and root commits, bridged by simplified edges."""
    interesting, edges = simplify_ancestry(commits, keep_merges=keep_merges)
    rows = index_rows(interesting)

    targets_by_source = group_by_source(edges)
    columns = assign_columns(interesting, lambda commit: targets_by_source.get(commit.oid, []))

    positions: List[NodePosition] = []
    labels: Dict[str, NodeLabel] = {}
    for row, commit in enumerate(interesting):
        x, y = cells.to_point(row, columns[commit.oid])
        positions.append(NodePosition(oid=commit.oid, x=x, y=y, hit_radius=TOPOLOGY_RADIUS))
        labels[commit.oid] = node_label(commit)

    connectors: List[Connector] = []
    seen_sources = set()
    for edge in edges:
        connectors.append(Connector(
            source=edge.source,
            target=edge.target,
            source_row=rows[edge.source],
            target_row=rows[edge.target],
            source_column=columns[edge.source],
            target_column=columns[edge.target],
            primary=edge.source not in seen_sources,
            dashed=edge.distance > 1,
        ))
        seen_sources.add(edge.source)

    width, height = cells.extent(len(interesting), max(columns.values(), default=0) + 1)
    logger.debug(f"Topology layout: {len(interesting)} of {len(commits)} commits, {len(edges)} edges")

    return TopologyLayout(
        interesting=list(interesting),
        edges=edges,
        rows=rows,
        columns=columns,
        positions=positions,
        connectors=connectors,
        labels=labels,
        width=width,
        height=height,
    )
