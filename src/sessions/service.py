from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.sessions.models import AIQuestion, PatentSession


class SessionStore:
    """Read access to drafting sessions and their interview answers."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_session(self, session_id: UUID) -> Optional[PatentSession]:
        result = await self.db.execute(
            select(PatentSession).where(PatentSession.id == session_id)
        )
        return result.scalar_one_or_none()

    async def get_answered_questions(self, session_id: UUID) -> List[Tuple[str, str]]:
        """Return (question, answer) pairs in the order they were asked."""
        result = await self.db.execute(
            select(AIQuestion)
            .where(AIQuestion.session_id == session_id)
            .order_by(AIQuestion.created_at)
        )
        return [
            (q.question, q.answer)
            for q in result.scalars().all()
            if q.answer
        ]
