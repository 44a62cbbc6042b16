import logging
import re
from typing import List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate

from src.prior_art.decoder import decode_candidates
from src.prior_art.prompts import PRIOR_ART_SEARCH_SYSTEM_PROMPT, PRIOR_ART_SEARCH_USER_PROMPT
from src.prior_art.schemas import CandidatePatent

logger = logging.getLogger(__name__)

GOOGLE_PATENTS_URL = "https://patents.google.com/patent/{number}"

_NUMBER_NOISE = re.compile(r"[\s,/]+")


def patent_url(publication_number: Optional[str]) -> Optional[str]:
    """Google Patents link for a publication number, e.g. 'US 10,567,123 B2'."""
    if not publication_number:
        return None
    number = _NUMBER_NOISE.sub("", publication_number).upper()
    return GOOGLE_PATENTS_URL.format(number=number) if number else None


def deduplicate(candidates: List[CandidatePatent]) -> List[CandidatePatent]:
    """Keep the first occurrence of each publication number (or title when unnumbered)."""
    seen = set()
    unique = []
    for candidate in candidates:
        key = (candidate.publication_number or candidate.title).strip().lower()
        if key and key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique


def _response_text(content) -> str:
    # Some providers return a list of content blocks instead of a string
    if isinstance(content, list):
        return "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return content if isinstance(content, str) else str(content or "")


class PatentRetriever:
    """Asks a web-search backed model for candidate patents similar to a query."""

    def __init__(self, llm: BaseChatModel, max_candidates: int = 20):
        self.llm = llm
        self.max_candidates = max_candidates
        self.prompt = ChatPromptTemplate.from_messages([
            ("system", PRIOR_ART_SEARCH_SYSTEM_PROMPT),
            ("user", PRIOR_ART_SEARCH_USER_PROMPT),
        ])

    async def retrieve(self, context: str) -> List[CandidatePatent]:
        """
        Return candidate patents for ``context``.

        Provider errors and unparseable answers are logged and yield an empty
        list; an empty result is a valid outcome for the search.
        """
        chain = self.prompt | self.llm
        try:
            response = await chain.ainvoke({"context": context})
        except Exception as e:
            logger.warning("Prior art retrieval request failed: %s", e)
            return []

        text = _response_text(getattr(response, "content", response))
        candidates = decode_candidates(text)
        if candidates is None:
            logger.warning("Prior art retrieval returned no JSON array (%d chars)", len(text))
            return []

        unique = deduplicate(candidates)[: self.max_candidates]
        for candidate in unique:
            if not candidate.url:
                candidate.url = patent_url(candidate.publication_number)
        logger.info("Retrieved %d candidate patents (%d before de-duplication)", len(unique), len(candidates))
        return unique
