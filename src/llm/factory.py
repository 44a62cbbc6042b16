from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings
    from langchain_core.language_models.chat_models import BaseChatModel

    from src.prior_art.config import SearchConfig

# Module-level caches, keyed by the credential and model a client was built for
_llm_cache: dict[tuple, BaseChatModel] = {}
_embedding_cache: dict[tuple, Embeddings] = {}


def clear_llm_cache() -> None:
    """Drop all cached LLM / embedding instances so they're recreated on next call."""
    _llm_cache.clear()
    _embedding_cache.clear()


# ---------------------------------------------------------------------------
# Internal constructors (lazy imports to avoid hard dep on unused packages)
# ---------------------------------------------------------------------------

def _create_retrieval_model(
    *,
    api_key: str,
    base_url: str,
    model: str,
    timeout: float,
) -> BaseChatModel:
    from langchain_openai import ChatOpenAI

    # The search provider speaks the OpenAI chat completions protocol
    return ChatOpenAI(
        model=model,
        base_url=base_url,
        api_key=api_key,
        temperature=0.1,
        timeout=timeout,
        max_retries=0,
    )


def _create_embeddings(*, api_key: str, model: str, timeout: float) -> Embeddings:
    from langchain_openai import OpenAIEmbeddings

    return OpenAIEmbeddings(
        model=model,
        api_key=api_key,
        timeout=timeout,
        max_retries=0,
    )


# ---------------------------------------------------------------------------
# Public factory functions
# ---------------------------------------------------------------------------

def get_retrieval_llm(config: SearchConfig) -> BaseChatModel:
    """Web-search backed chat model. Used for: Prior art retrieval."""
    if not config.retrieval_api_key:
        raise ValueError("PERPLEXITY_API_KEY is required for prior art retrieval")
    key = (config.retrieval_api_key, config.retrieval_base_url, config.retrieval_model)
    if key not in _llm_cache:
        _llm_cache[key] = _create_retrieval_model(
            api_key=config.retrieval_api_key,
            base_url=config.retrieval_base_url,
            model=config.retrieval_model,
            timeout=config.request_timeout,
        )
    return _llm_cache[key]


def get_embeddings(config: SearchConfig) -> Embeddings:
    """Embedding Engine. Used for: Semantic prior art scoring."""
    if not config.embedding_api_key:
        raise ValueError("OPENAI_API_KEY is required for semantic scoring")
    key = (config.embedding_api_key, config.embedding_model)
    if key not in _embedding_cache:
        _embedding_cache[key] = _create_embeddings(
            api_key=config.embedding_api_key,
            model=config.embedding_model,
            timeout=config.request_timeout,
        )
    return _embedding_cache[key]
