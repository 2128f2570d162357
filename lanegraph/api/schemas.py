from typing import Dict, List, Optional
from pydantic import BaseModel

class RefSchema(BaseModel):
    name: str
    kind: str = "other" # unknown kinds are treated as 'other'

class CommitSchema(BaseModel):
    oid: str
    parents: List[str] = []
    refs: List[RefSchema] = []
    author_time: int = 0
    author_name: str = ""
    author_email: str = ""
    summary: str = ""

class LayoutRequest(BaseModel):
    commits: List[CommitSchema]

class TopologyRequest(LayoutRequest):
    keep_merges: bool = False

class BranchRequest(LayoutRequest):
    head: Optional[str] = None

class NodePositionSchema(BaseModel):
    oid: str
    x: float
    y: float
    hit_radius: float

class ConnectorSchema(BaseModel):
    source: str
    target: str
    source_row: int
    target_row: int
    source_column: int
    target_column: int
    primary: bool
    dashed: bool
    current_branch: bool = False

class SimplifiedEdgeSchema(BaseModel):
    source: str
    target: str
    distance: int

class NodeLabelSchema(BaseModel):
    text: str
    extra_refs: int = 0

class HistoryLayoutResponse(BaseModel):
    columns: Dict[str, int]
    positions: List[NodePositionSchema]
    connectors: List[ConnectorSchema]
    current_branch: List[str]
    badges: Dict[str, List[RefSchema]] = {}
    width: float
    height: float

class TopologyLayoutResponse(BaseModel):
    interesting: List[str]
    edges: List[SimplifiedEdgeSchema]
    columns: Dict[str, int]
    positions: List[NodePositionSchema]
    connectors: List[ConnectorSchema]
    labels: Dict[str, NodeLabelSchema]
    width: float
    height: float

class BranchResponse(BaseModel):
    head: Optional[str] = None
    members: List[str]

class HitTestRequest(BaseModel):
    positions: List[NodePositionSchema] = []
    x: float
    y: float

class HitTestResponse(BaseModel):
    oid: Optional[str] = None
