from enum import Enum
from sqlalchemy import Column, String, Text, Float, Integer, Boolean, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from src.database import Base
from src.shared.models import AuditMixin


class AlertSeverity(str, Enum):
    HIGH = "high"
    CRITICAL = "critical"


class PriorArtMonitor(Base, AuditMixin):
    """Recurring prior art check for one session; one row per session."""
    __tablename__ = "prior_art_monitors"

    session_id = Column(ForeignKey("patent_sessions.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    search_query = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    results_found = Column(Integer, default=0, nullable=False)
    highest_similarity_score = Column(Float, nullable=True)
    last_search_at = Column(DateTime(timezone=True), nullable=True)
    next_search_at = Column(DateTime(timezone=True), nullable=True)

    # Snapshot of the top results from the last run
    monitoring_data = Column(JSONB, nullable=True)


class InfringementAlert(Base, AuditMixin):
    __tablename__ = "infringement_alerts"

    session_id = Column(ForeignKey("patent_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    alert_type = Column(String, nullable=False, default="high_similarity")
    severity = Column(SAEnum(AlertSeverity), nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    confidence_score = Column(Float, nullable=False)
    source_url = Column(String, nullable=True)
    is_read = Column(Boolean, default=False, nullable=False)
    alert_metadata = Column("metadata", JSONB, nullable=True)
