import logging
from dataclasses import asdict
from typing import List, Sequence

from lanegraph.graph.branch import branch_membership, find_head
from lanegraph.graph.geometry import hit_test
from lanegraph.graph.layout import layout_history, layout_topology
from lanegraph.graph.models import Commit, Connector, NodePosition, Ref, RefKind
from lanegraph.api.schemas import (
    BranchRequest,
    BranchResponse,
    CommitSchema,
    ConnectorSchema,
    HistoryLayoutResponse,
    HitTestRequest,
    HitTestResponse,
    LayoutRequest,
    NodeLabelSchema,
    NodePositionSchema,
    RefSchema,
    SimplifiedEdgeSchema,
    TopologyLayoutResponse,
    TopologyRequest,
)

logger = logging.getLogger(__name__)

# Cap on commits laid out per request
DEFAULT_MAX_COMMITS = 2000

class LayoutService:
    def __init__(self, max_commits: int = DEFAULT_MAX_COMMITS):
        if max_commits < 1:
            logger.warning(f"Ignoring max_commits={max_commits}, using 1")
            max_commits = 1
        self.max_commits = max_commits

    def to_commits(self, items: Sequence[CommitSchema]) -> List[Commit]:
        """Converts request commits to core records, capped at max_commits."""
        if len(items) > self.max_commits:
            logger.warning(f"Received {len(items)} commits, laying out the first {self.max_commits}")
            items = items[: self.max_commits]

        return [
            Commit(
                oid=item.oid,
                parents=tuple(item.parents),
                refs=tuple(Ref(name=r.name, kind=RefKind.parse(r.kind)) for r in item.refs),
                author_time=item.author_time,
                author_name=item.author_name,
                author_email=item.author_email,
                summary=item.summary,
            )
            for item in items
        ]

    def history(self, req: LayoutRequest) -> HistoryLayoutResponse:
        commits = self.to_commits(req.commits)
        layout = layout_history(commits)

        return HistoryLayoutResponse(
            columns=layout.columns,
            positions=[self._position(p) for p in layout.positions],
            connectors=[self._connector(c) for c in layout.connectors],
            # Display order
            current_branch=[c.oid for c in commits if c.oid in layout.current_branch],
            badges={
                oid: [RefSchema(name=r.name, kind=r.kind.value) for r in refs]
                for oid, refs in layout.badges.items()
            },
            width=layout.width,
            height=layout.height,
        )

    def topology(self, req: TopologyRequest) -> TopologyLayoutResponse:
        commits = self.to_commits(req.commits)
        layout = layout_topology(commits, keep_merges=req.keep_merges)

        return TopologyLayoutResponse(
            interesting=[c.oid for c in layout.interesting],
            edges=[SimplifiedEdgeSchema(**asdict(e)) for e in layout.edges],
            columns=layout.columns,
            positions=[self._position(p) for p in layout.positions],
            connectors=[self._connector(c) for c in layout.connectors],
            labels={oid: NodeLabelSchema(**asdict(label)) for oid, label in layout.labels.items()},
            width=layout.width,
            height=layout.height,
        )

    def branch(self, req: BranchRequest) -> BranchResponse:
        commits = self.to_commits(req.commits)
        head = req.head if req.head is not None else find_head(commits)
        members = branch_membership(commits, head)
        return BranchResponse(head=head, members=[c.oid for c in commits if c.oid in members])

    def hit(self, req: HitTestRequest) -> HitTestResponse:
        positions = [NodePosition(oid=p.oid, x=p.x, y=p.y, hit_radius=p.hit_radius) for p in req.positions]
        return HitTestResponse(oid=hit_test(positions, req.x, req.y))

    def _position(self, pos: NodePosition) -> NodePositionSchema:
        return NodePositionSchema(**asdict(pos))

    def _connector(self, conn: Connector) -> ConnectorSchema:
        return ConnectorSchema(**asdict(conn))
