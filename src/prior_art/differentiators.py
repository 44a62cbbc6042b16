"""Human-readable overlap / difference talking points for a candidate patent."""

import random
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, List, Optional, Sequence

from src.prior_art.schemas import Differentiators

MAX_PHRASES = 5
MAX_FACT_PHRASES = 2

OVERLAP_TEMPLATES = (
    'Uses "{term}" technology',
    "Addresses {term} functionality",
    "Both rely on {term}",
    "Similar {term}-based approach",
)
DIFFERENCE_TEMPLATES = (
    "Your novel {term} implementation",
    "Unique {term} integration",
    "Distinct approach to {term}",
    "Specialized {term} handling",
)

OVERLAP_FALLBACK = "General technological approach"
DIFFERENCE_FALLBACK = "Specific implementation details"

# Picks one template from the given options
TemplateSelector = Callable[[Sequence[str]], str]


def first_template(templates: Sequence[str]) -> str:
    return templates[0]


@dataclass(frozen=True)
class SystemFacts:
    """Known facts about the user's own implementation, from the backend analysis."""
    table_count: int = 0
    function_count: int = 0

    @staticmethod
    def _count(analysis: dict, count_key: str, list_key: str) -> int:
        value = analysis.get(count_key)
        if isinstance(value, int) and not isinstance(value, bool):
            return max(value, 0)
        items = analysis.get(list_key)
        return len(items) if isinstance(items, list) else 0

    @classmethod
    def from_backend_analysis(cls, analysis: Any) -> "SystemFacts":
        if not isinstance(analysis, dict):
            return cls()
        return cls(
            table_count=cls._count(analysis, "table_count", "tables"),
            function_count=cls._count(analysis, "function_count", "functions"),
        )

    def phrases(self) -> List[str]:
        phrases = []
        if self.table_count:
            phrases.append(f"Custom database with {self.table_count} specialized tables")
        if self.function_count:
            phrases.append(f"{self.function_count} custom backend functions")
        return phrases[:MAX_FACT_PHRASES]


class DifferentiatorExtractor:
    def __init__(self, selector: Optional[TemplateSelector] = None):
        self.selector = selector or random.choice

    def _phrase(self, templates: Sequence[str], term: str) -> str:
        return self.selector(templates).format(term=term)

    def extract(
        self,
        query_tokens: Sequence[str],
        candidate_tokens: FrozenSet[str],
        facts: Optional[SystemFacts] = None,
    ) -> Differentiators:
        """
        Build overlap and difference phrases from the token sets.

        ``query_tokens`` keeps first-seen order so the chosen terms are stable.
        Both lists hold between 1 and MAX_PHRASES entries.
        """
        shared = [t for t in query_tokens if t in candidate_tokens]
        unique = [t for t in query_tokens if t not in candidate_tokens]

        overlap = [self._phrase(OVERLAP_TEMPLATES, t) for t in shared[:MAX_PHRASES]]

        fact_phrases = facts.phrases() if facts else []
        room = MAX_PHRASES - len(fact_phrases)
        difference = [self._phrase(DIFFERENCE_TEMPLATES, t) for t in unique[:room]]
        difference.extend(fact_phrases)

        return Differentiators(
            overlap_claims=overlap or [OVERLAP_FALLBACK],
            difference_claims=difference or [DIFFERENCE_FALLBACK],
        )
