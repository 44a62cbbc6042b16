import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.llm.factory import get_embeddings, get_retrieval_llm
from src.prior_art.config import SearchConfig
from src.prior_art.context import backend_summary, build_search_context
from src.prior_art.differentiators import DifferentiatorExtractor, SystemFacts
from src.prior_art.exceptions import (
    ResultPersistenceError,
    SearchConfigurationError,
    SessionNotFoundError,
)
from src.prior_art.models import PriorArtResult
from src.prior_art.retriever import PatentRetriever
from src.prior_art.schemas import (
    CandidatePatent,
    PriorArtSearchResponse,
    ScoredCandidate,
    SimilarityScores,
)
from src.prior_art.scoring import combine_scores, ordered_tokens, tokenize, jaccard, SCORE_PRECISION
from src.prior_art.semantic import SemanticScorer
from src.sessions.service import SessionStore

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = (
    "No prior art found. This is a strong novelty indicator for your invention."
)


def search_response(results: List[ScoredCandidate]) -> PriorArtSearchResponse:
    if not results:
        return PriorArtSearchResponse(results_found=0, message=NO_RESULTS_MESSAGE)
    return PriorArtSearchResponse(
        results_found=len(results),
        message=f"Prior art search completed: {len(results)} similar patents found",
    )


def rank_candidates(results: List[ScoredCandidate]) -> List[ScoredCandidate]:
    """Order by combined score, highest first. Ties keep retrieval order."""
    return sorted(results, key=lambda r: r.scores.combined_score, reverse=True)


class PriorArtService:
    def __init__(
        self,
        db: AsyncSession,
        config: SearchConfig,
        retriever: Optional[PatentRetriever] = None,
        semantic_scorer: Optional[SemanticScorer] = None,
        differentiators: Optional[DifferentiatorExtractor] = None,
    ):
        self.db = db
        self.config = config
        self.sessions = SessionStore(db)
        self._retriever = retriever
        self._semantic_scorer = semantic_scorer
        self.differentiators = differentiators or DifferentiatorExtractor()

    def _get_retriever(self) -> PatentRetriever:
        if self._retriever is not None:
            return self._retriever
        try:
            llm = get_retrieval_llm(self.config)
        except ValueError as e:
            raise SearchConfigurationError(str(e)) from e
        return PatentRetriever(llm, max_candidates=self.config.max_candidates)

    def _get_semantic_scorer(self) -> Optional[SemanticScorer]:
        if self._semantic_scorer is not None:
            return self._semantic_scorer
        if not self.config.semantic_enabled:
            return None
        return SemanticScorer(
            get_embeddings(self.config),
            concurrency=self.config.embedding_concurrency,
        )

    async def build_context(
        self,
        session_id: UUID,
        search_query: Optional[str] = None,
        patent_type: Optional[str] = None,
    ) -> tuple[str, SystemFacts]:
        """Load the session and assemble the search context and system facts."""
        session = await self.sessions.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)

        qa_pairs = await self.sessions.get_answered_questions(session_id)
        context = build_search_context(
            idea_prompt=session.idea_prompt,
            technical_analysis=session.technical_analysis,
            qa_pairs=qa_pairs,
            backend_analysis_summary=backend_summary(session.backend_analysis),
            patent_category=patent_type or session.patent_type,
            search_query=search_query,
            max_chars=self.config.context_max_chars,
        )
        return context, SystemFacts.from_backend_analysis(session.backend_analysis)

    async def score_candidates(
        self,
        context: str,
        candidates: List[CandidatePatent],
        facts: Optional[SystemFacts] = None,
    ) -> List[ScoredCandidate]:
        """Score, annotate and rank candidates against the search context."""
        if not candidates:
            return []

        query_order = ordered_tokens(context)
        query_tokens = frozenset(query_order)
        candidate_tokens = [tokenize(c.text) for c in candidates]

        semantic_scores = None
        scorer = self._get_semantic_scorer()
        if scorer is not None:
            semantic_scores = await scorer.score(context, [c.text for c in candidates])
        if semantic_scores is None:
            logger.info("Semantic scoring unavailable, using keyword similarity only")

        scored = []
        for i, candidate in enumerate(candidates):
            keyword = round(jaccard(query_tokens, candidate_tokens[i]), SCORE_PRECISION)
            semantic = (
                round(semantic_scores[i], SCORE_PRECISION)
                if semantic_scores is not None else None
            )
            scored.append(ScoredCandidate(
                candidate=candidate,
                scores=SimilarityScores(
                    keyword_score=keyword,
                    semantic_score=semantic,
                    combined_score=combine_scores(keyword, semantic),
                ),
                differentiators=self.differentiators.extract(
                    query_order, candidate_tokens[i], facts
                ),
            ))
        return rank_candidates(scored)

    async def search(
        self,
        session_id: UUID,
        search_query: Optional[str] = None,
        patent_type: Optional[str] = None,
    ) -> List[ScoredCandidate]:
        """
        Run the prior art pipeline for a session and replace its stored results.

        Retrieval and embedding problems degrade the result quality but never
        fail the search. Missing retrieval credentials and database errors do.
        """
        if not self.config.retrieval_api_key and self._retriever is None:
            raise SearchConfigurationError("PERPLEXITY_API_KEY is not configured")

        context, facts = await self.build_context(session_id, search_query, patent_type)
        logger.info("Prior art search for session %s: context length %d", session_id, len(context))

        candidates = await self._get_retriever().retrieve(context)
        ranked = await self.score_candidates(context, candidates, facts)

        await self.replace_results(session_id, ranked)

        top = ranked[0].scores.combined_score if ranked else 0
        logger.info("Prior art search complete: %d results, top score %s", len(ranked), top)
        return ranked

    def _to_record(self, session_id: UUID, rank: int, result: ScoredCandidate) -> PriorArtResult:
        candidate, scores = result.candidate, result.scores
        return PriorArtResult(
            session_id=session_id,
            rank=rank,
            title=candidate.title,
            publication_number=candidate.publication_number or None,
            summary=candidate.abstract,
            url=candidate.url,
            patent_date=candidate.patent_date,
            assignee=candidate.assignee,
            source=self.config.source_label,
            similarity_score=scores.combined_score,
            semantic_score=scores.semantic_score or 0.0,
            keyword_score=scores.keyword_score,
            overlap_claims=result.differentiators.overlap_claims,
            difference_claims=result.differentiators.difference_claims,
        )

    async def replace_results(self, session_id: UUID, ranked: List[ScoredCandidate]) -> None:
        """Delete the session's previous results and insert ``ranked`` in one transaction."""
        try:
            await self.db.execute(
                delete(PriorArtResult).where(PriorArtResult.session_id == session_id)
            )
            self.db.add_all([
                self._to_record(session_id, rank, result)
                for rank, result in enumerate(ranked, start=1)
            ])
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.exception("Failed to store prior art results for session %s", session_id)
            await self.db.rollback()
            raise ResultPersistenceError(str(e)) from e

    async def list_results(self, session_id: UUID) -> List[PriorArtResult]:
        result = await self.db.execute(
            select(PriorArtResult)
            .where(PriorArtResult.session_id == session_id)
            .order_by(PriorArtResult.rank)
        )
        return list(result.scalars().all())
