"""Lexical and semantic similarity between an invention and a candidate patent."""

import re
from typing import FrozenSet, List, Optional, Sequence

import numpy as np
from numpy.linalg import norm

SEMANTIC_WEIGHT = 0.7
KEYWORD_WEIGHT = 0.3
MAX_COMBINED_SCORE = 0.95
SCORE_PRECISION = 3

MIN_TOKEN_LENGTH = 3

STOPWORDS: FrozenSet[str] = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "any", "can", "had",
    "her", "was", "one", "our", "out", "has", "him", "his", "how", "its", "may",
    "new", "now", "own", "who", "did", "get", "let", "she", "too", "use", "via",
    "per", "yet", "nor", "off", "few", "why", "also", "been", "both", "each",
    "from", "have", "into", "just", "more", "most", "much", "must", "only",
    "over", "same", "some", "such", "than", "that", "them", "then", "there",
    "these", "they", "this", "those", "very", "were", "what", "when", "where",
    "which", "while", "with", "will", "would", "about", "above", "after",
    "again", "against", "among", "because", "before", "being", "below",
    "between", "could", "does", "doing", "down", "during", "further", "having",
    "here", "itself", "once", "other", "should", "their", "theirs", "through",
    "under", "until", "upon", "your", "yours", "within", "without", "whom",
})

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def ordered_tokens(text: Optional[str]) -> List[str]:
    """Significant tokens of ``text`` in first-seen order, without duplicates."""
    if not text:
        return []
    seen = set()
    tokens = []
    for word in _NON_ALNUM.sub(" ", text.lower()).split():
        if len(word) < MIN_TOKEN_LENGTH or word in STOPWORDS or word in seen:
            continue
        seen.add(word)
        tokens.append(word)
    return tokens


def tokenize(text: Optional[str]) -> FrozenSet[str]:
    """Lowercase alphanumeric words longer than two characters, minus stopwords."""
    return frozenset(ordered_tokens(text))


def jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def keyword_score(query: str, candidate_text: str) -> float:
    return jaccard(tokenize(query), tokenize(candidate_text))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity clamped to [0, 1]; mismatched or zero vectors score 0."""
    if a is None or b is None or len(a) == 0 or len(a) != len(b):
        return 0.0
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    denominator = norm(va) * norm(vb)
    if denominator == 0:
        return 0.0
    return float(min(max(np.dot(va, vb) / denominator, 0.0), 1.0))


def combine_scores(keyword: float, semantic: Optional[float]) -> float:
    """
    Blend keyword and semantic similarity into the score shown to the user.

    ``semantic`` is None when semantic scoring was unavailable for the whole
    search; the keyword score is then used on its own. The result never
    exceeds MAX_COMBINED_SCORE.
    """
    if semantic is None:
        combined = keyword
    else:
        combined = SEMANTIC_WEIGHT * semantic + KEYWORD_WEIGHT * keyword
    return round(min(combined, MAX_COMBINED_SCORE), SCORE_PRECISION)
