from sqlalchemy import Column, String, Text, Float, Integer, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from src.database import Base
from src.shared.models import AuditMixin


class PriorArtResult(Base, AuditMixin):
    """A ranked, annotated candidate patent stored for one search session."""
    __tablename__ = "prior_art_results"

    session_id = Column(ForeignKey("patent_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    rank = Column(Integer, nullable=False)

    title = Column(String, nullable=False, default="")
    publication_number = Column(String, nullable=True)
    summary = Column(Text, nullable=True)
    url = Column(String, nullable=True)
    patent_date = Column(String, nullable=True)
    assignee = Column(String, nullable=True)
    source = Column(String, nullable=True)

    similarity_score = Column(Float, nullable=False)
    semantic_score = Column(Float, nullable=False, default=0.0)
    keyword_score = Column(Float, nullable=False, default=0.0)

    overlap_claims = Column(JSONB, nullable=False, default=list)
    difference_claims = Column(JSONB, nullable=False, default=list)

    session = relationship("src.sessions.models.PatentSession", back_populates="prior_art_results")
