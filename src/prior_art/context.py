"""Builds the free-text query sent to the retrieval and embedding providers."""

from typing import Any, Iterable, Optional, Tuple

DEFAULT_MAX_CONTEXT_CHARS = 10_000


def format_questions(qa_pairs: Iterable[Tuple[str, Optional[str]]]) -> str:
    """Format interview (question, answer) pairs, skipping unanswered ones."""
    parts = []
    for question, answer in qa_pairs:
        if not answer or not str(answer).strip():
            continue
        parts.append(f"Q: {str(question).strip()}\nA: {str(answer).strip()}")
    return "\n".join(parts)


def backend_summary(backend_analysis: Any) -> str:
    """Pull a summary string out of a stored backend-analysis blob."""
    if not backend_analysis:
        return ""
    if isinstance(backend_analysis, str):
        return backend_analysis
    if isinstance(backend_analysis, dict):
        summary = backend_analysis.get("summary") or backend_analysis.get("analysis")
        return summary if isinstance(summary, str) else ""
    return ""


def build_search_context(
    idea_prompt: Optional[str] = None,
    technical_analysis: Optional[str] = None,
    qa_pairs: Iterable[Tuple[str, Optional[str]]] = (),
    backend_analysis_summary: Optional[str] = None,
    patent_category: Optional[str] = None,
    search_query: Optional[str] = None,
    max_chars: int = DEFAULT_MAX_CONTEXT_CHARS,
) -> str:
    """
    Assemble the search context for one prior art search.

    An explicit, non-blank ``search_query`` wins and is used verbatim. Otherwise
    the session fields are joined with newlines in a fixed order: idea prompt,
    technical analysis, interview answers, backend summary, patent category.
    The result is always truncated to ``max_chars``.
    """
    if search_query and search_query.strip():
        return search_query[:max_chars]

    parts = [
        idea_prompt,
        technical_analysis,
        format_questions(qa_pairs),
        backend_analysis_summary,
        patent_category,
    ]
    context = "\n".join(p.strip() for p in parts if p and p.strip())
    return context[:max_chars]
