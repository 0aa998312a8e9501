from pydantic import BaseModel
from typing import Dict, List, Optional


class SweepReport(BaseModel):
    started_at: str
    duration_ms: int
    scanned: int
    issued_count: int
    deleted_count: int
    failed_count: int
    partial: bool
    kept: List[str] = []
    deleted: List[str] = []
    failed: Dict[str, str] = {}

class HealthResponse(BaseModel):
    status: str
    scheduler_running: bool
    next_run_at: Optional[str] = None
