from src.llm.factory import (
    get_retrieval_llm,
    get_embeddings,
    clear_llm_cache,
)
