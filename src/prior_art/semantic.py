import asyncio
import logging
from typing import List, Optional, Sequence

from langchain_core.embeddings import Embeddings

from src.prior_art.scoring import cosine_similarity

logger = logging.getLogger(__name__)

MAX_EMBEDDING_INPUT_CHARS = 8000


class SemanticScorer:
    """Embedding-based similarity between the query and each candidate.

    Candidate embeddings are requested concurrently, at most ``concurrency``
    at a time. Scores are returned in input order once every request has
    finished.
    """

    def __init__(self, embeddings: Embeddings, concurrency: int = 5):
        self.embeddings = embeddings
        self.concurrency = max(1, concurrency)

    async def _embed(self, text: str) -> List[float]:
        return await self.embeddings.aembed_query(text[:MAX_EMBEDDING_INPUT_CHARS])

    async def score(self, query: str, candidate_texts: Sequence[str]) -> Optional[List[float]]:
        """
        Return one score in [0, 1] per candidate, or None if the query itself
        could not be embedded (semantic scoring is then off for the search).
        """
        try:
            query_vector = await self._embed(query)
        except Exception as e:
            logger.warning("Query embedding failed, falling back to keyword scoring: %s", e)
            return None

        semaphore = asyncio.Semaphore(self.concurrency)

        async def score_one(index: int, text: str) -> float:
            async with semaphore:
                try:
                    vector = await self._embed(text)
                except Exception as e:
                    logger.warning("Embedding failed for candidate %d: %s", index, e)
                    return 0.0
            return cosine_similarity(query_vector, vector)

        return list(await asyncio.gather(
            *(score_one(i, text) for i, text in enumerate(candidate_texts))
        ))
