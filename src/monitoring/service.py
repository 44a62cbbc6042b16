import logging
from datetime import timedelta
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from src.monitoring.models import AlertSeverity, InfringementAlert, PriorArtMonitor
from src.monitoring.schemas import MonitoringRunResponse
from src.prior_art.schemas import ScoredCandidate
from src.prior_art.service import PriorArtService
from src.shared.models import utcnow

logger = logging.getLogger(__name__)

MONITORING_INTERVAL = timedelta(days=7)
ALERT_THRESHOLD = 0.7
CRITICAL_THRESHOLD = 0.85
SNAPSHOT_SIZE = 5


def alert_severity(score: Optional[float]) -> Optional[AlertSeverity]:
    """Severity for a similarity score, or None when no alert is warranted."""
    if score is None or score <= ALERT_THRESHOLD:
        return None
    return AlertSeverity.CRITICAL if score > CRITICAL_THRESHOLD else AlertSeverity.HIGH


class MonitoringService:
    def __init__(self, db: AsyncSession, prior_art: PriorArtService):
        self.db = db
        self.prior_art = prior_art

    async def run(self, session_id: UUID, search_query: Optional[str] = None) -> MonitoringRunResponse:
        """
        Re-run the prior art search for a session and record the outcome.

        Raises whatever the search raises; the monitor row is only written
        after the new results have been stored.
        """
        results = await self.prior_art.search(session_id, search_query)
        highest = results[0].scores.combined_score if results else None

        now = utcnow()
        monitor = await self._upsert_monitor(session_id, search_query, results, highest, now)

        severity = alert_severity(highest)
        if severity is not None:
            self.db.add(self._build_alert(session_id, results[0], severity))
            logger.info("High similarity alert (%s) for session %s: %.3f", severity.value, session_id, highest)

        await self.db.commit()
        return MonitoringRunResponse(
            results_found=len(results),
            highest_similarity=highest,
            next_search_at=monitor.next_search_at,
        )

    async def _upsert_monitor(
        self,
        session_id: UUID,
        search_query: Optional[str],
        results: List[ScoredCandidate],
        highest: Optional[float],
        now,
    ) -> PriorArtMonitor:
        result = await self.db.execute(
            select(PriorArtMonitor).where(PriorArtMonitor.session_id == session_id)
        )
        monitor = result.scalar_one_or_none()
        if monitor is None:
            monitor = PriorArtMonitor(session_id=session_id)
            self.db.add(monitor)

        monitor.search_query = search_query
        monitor.is_active = True
        monitor.results_found = len(results)
        monitor.highest_similarity_score = highest
        monitor.last_search_at = now
        monitor.next_search_at = now + MONITORING_INTERVAL
        monitor.monitoring_data = {
            "last_results": [
                {
                    "title": r.candidate.title,
                    "publication_number": r.candidate.publication_number,
                    "similarity_score": r.scores.combined_score,
                }
                for r in results[:SNAPSHOT_SIZE]
            ]
        }
        return monitor

    def _build_alert(self, session_id: UUID, top: ScoredCandidate, severity: AlertSeverity) -> InfringementAlert:
        score = top.scores.combined_score
        return InfringementAlert(
            session_id=session_id,
            alert_type="high_similarity",
            severity=severity,
            title=f"High similarity detected: {top.candidate.title or 'Unknown patent'}",
            description=(
                f"Found patent with {round(score * 100)}% similarity to your invention. "
                "Review recommended before filing."
            ),
            confidence_score=score,
            source_url=top.candidate.url,
            is_read=False,
            alert_metadata={
                "publication_number": top.candidate.publication_number,
                "detected_at": utcnow().isoformat(),
            },
        )

    async def list_alerts(self, session_id: UUID) -> List[InfringementAlert]:
        result = await self.db.execute(
            select(InfringementAlert)
            .where(InfringementAlert.session_id == session_id)
            .order_by(desc(InfringementAlert.created_at))
        )
        return list(result.scalars().all())
