from dataclasses import dataclass
from typing import Optional

from src.config import Settings, settings as default_settings


@dataclass(frozen=True)
class SearchConfig:
    """Credentials and knobs for one prior art search.

    Built from the environment at the request boundary and handed to the
    pipeline, so nothing below the router looks credentials up on its own.
    """
    retrieval_api_key: Optional[str] = None
    embedding_api_key: Optional[str] = None
    retrieval_base_url: str = "https://api.perplexity.ai"
    retrieval_model: str = "sonar"
    embedding_model: str = "text-embedding-3-small"
    request_timeout: float = 30.0
    embedding_concurrency: int = 5
    max_candidates: int = 20
    context_max_chars: int = 10_000
    source_label: str = "Perplexity"

    @property
    def semantic_enabled(self) -> bool:
        return bool(self.embedding_api_key)

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "SearchConfig":
        return cls(
            retrieval_api_key=settings.PERPLEXITY_API_KEY or None,
            embedding_api_key=settings.OPENAI_API_KEY or None,
            retrieval_base_url=settings.PERPLEXITY_BASE_URL,
            retrieval_model=settings.PERPLEXITY_MODEL,
            embedding_model=settings.OPENAI_MODEL_EMBEDDING,
            request_timeout=settings.PRIOR_ART_REQUEST_TIMEOUT,
            embedding_concurrency=settings.PRIOR_ART_EMBEDDING_CONCURRENCY,
            max_candidates=settings.PRIOR_ART_MAX_CANDIDATES,
            context_max_chars=settings.PRIOR_ART_CONTEXT_MAX_CHARS,
            source_label=settings.PRIOR_ART_SOURCE_LABEL,
        )
