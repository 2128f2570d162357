from typing import Dict, Sequence

from lanegraph.graph.models import Commit


def index_rows(commits: Sequence[Commit]) -> Dict[str, int]:
    """Maps each commit id to its position in the display order."""
    # A duplicated id keeps its last row
    return {commit.oid: row for row, commit in enumerate(commits)}
