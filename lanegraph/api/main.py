from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os

from lanegraph.api.service import LayoutService, DEFAULT_MAX_COMMITS
from lanegraph.api.schemas import (
    BranchRequest,
    BranchResponse,
    HistoryLayoutResponse,
    HitTestRequest,
    HitTestResponse,
    LayoutRequest,
    TopologyLayoutResponse,
    TopologyRequest,
)

import logging

# Configure Logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Commit Graph Layout API")

# Allow CORS
# In production, set ALLOWED_ORIGINS to a comma-separated list of domains
allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "*")
allowed_origins = [origin.strip() for origin in allowed_origins_env.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize Service
# Larger payloads are truncated to MAX_COMMITS before layout.
max_commits = int(os.getenv("MAX_COMMITS", str(DEFAULT_MAX_COMMITS)))
service = LayoutService(max_commits=max_commits)
logger.info(f"Layout service ready (max_commits={max_commits})")

@app.post("/api/layout/history", response_model=HistoryLayoutResponse)
def history_layout(req: LayoutRequest):
    """Lane layout with one row per commit."""
    return service.history(req)

@app.post("/api/layout/topology", response_model=TopologyLayoutResponse)
def topology_layout(req: TopologyRequest):
    """Layout of ref-bearing and root commits joined by simplified edges."""
    return service.topology(req)

@app.post("/api/branch", response_model=BranchResponse)
def current_branch(req: BranchRequest):
    """Commits on the first-parent line below HEAD."""
    return service.branch(req)

@app.post("/api/hit-test", response_model=HitTestResponse)
def hit(req: HitTestRequest):
    return service.hit(req)

@app.get("/health")
def health_check():
    return {"status": "ok", "max_commits": service.max_commits}
