from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from src.database import Base
from src.shared.models import AuditMixin


class PatentSession(Base, AuditMixin):
    """One drafting session: the invention idea plus everything gathered about it."""
    __tablename__ = "patent_sessions"

    user_id = Column(String, nullable=True, index=True)
    idea_prompt = Column(Text, nullable=True)
    technical_analysis = Column(Text, nullable=True)
    # Output of the backend/codebase analysis step, e.g. {"summary": ..., "tables": [...]}
    backend_analysis = Column(JSONB, nullable=True)
    patent_type = Column(String, nullable=True)

    questions = relationship(
        "AIQuestion",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="AIQuestion.created_at",
    )
    prior_art_results = relationship(
        "src.prior_art.models.PriorArtResult",
        back_populates="session",
        cascade="all, delete-orphan",
    )


class AIQuestion(Base, AuditMixin):
    """Interview question asked during intake and the user's answer."""
    __tablename__ = "ai_questions"

    session_id = Column(ForeignKey("patent_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=True)

    session = relationship("PatentSession", back_populates="questions")
