from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict

from src.monitoring.models import AlertSeverity


class MonitoringRunRequest(BaseModel):
    session_id: Optional[str] = None
    search_query: Optional[str] = None


class MonitoringRunResponse(BaseModel):
    success: bool = True
    results_found: int
    highest_similarity: Optional[float]
    next_search_at: datetime


class InfringementAlertResponse(BaseModel):
    id: UUID
    session_id: UUID
    alert_type: str
    severity: AlertSeverity
    title: str
    description: Optional[str]
    confidence_score: float
    source_url: Optional[str]
    is_read: bool
    alert_metadata: Optional[Dict[str, Any]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
