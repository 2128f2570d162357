from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from lanegraph.graph.models import NodePosition

# Drawn node radii
COMMIT_RADIUS = 6
MERGE_RADIUS = 10
TOPOLOGY_RADIUS = 15

# Extra slack around a node that still counts as pointing at it
HIT_TOLERANCE = 5


@dataclass(frozen=True)
class CellSize:
    row_height: float
    col_width: float
    padding_top: float
    padding_left: float
    # Horizontal offset from the column origin to the node anchor
    node_offset: float = 0.0
    # Room to the right of the last column for labels
    label_margin: float = 0.0

    def to_point(self, row: int, column: int) -> Tuple[float, float]:
        x = self.padding_left + column * self.col_width + self.node_offset
        y = self.padding_top + row * self.row_height
        return x, y

    def extent(self, row_count: int, column_count: int) -> Tuple[float, float]:
        """Canvas (width, height) needed for the given grid."""
        width = max(column_count, 1) * self.col_width + self.padding_left + self.label_margin
        height = (row_count + 1) * self.row_height + self.padding_top
        return width, height


HISTORY_CELLS = CellSize(row_height=50, col_width=24, padding_top=30, padding_left=30)
TOPOLOGY_CELLS = CellSize(
    row_height=80,
    col_width=180,
    padding_top=40,
    padding_left=40,
    node_offset=10,
    label_margin=200,
)


def hit_test(
    positions: Optional[Iterable[NodePosition]],
    x: float,
    y: float,
    tolerance: float = HIT_TOLERANCE,
) -> Optional[str]:
    """Returns the id of the node under the pointer, if any.

    A node is hit when the pointer lies within ``hit_radius + tolerance`` of
    its centre. When several nodes qualify the closest one wins; equal
    distances keep the earliest node.
    """
    if not positions:
        return None

    found = None
    best = float("inf")
    for pos in positions:
        dx = x - pos.x
        dy = y - pos.y
        dist = dx * dx + dy * dy
        reach = pos.hit_radius + tolerance
        if dist <= reach * reach and dist < best:
            best = dist
            found = pos.oid
    return found
