"""Tolerant decoding of candidate patents from free-text model responses.

Web-search models often wrap the requested JSON array in prose or markdown
fences. The decoder scans for the first substring that parses as a JSON array
and maps its objects onto ``CandidatePatent``; anything else is reported as
unparseable instead of raising.
"""

import json
import logging
from typing import Any, List, Optional

from src.prior_art.schemas import CandidatePatent

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()

# Field names the providers have been seen to use for each candidate attribute
_FIELD_ALIASES = {
    "publication_number": ("number", "publication_number", "patent_number", "id"),
    "title": ("title", "name"),
    "abstract": ("abstract", "summary", "description"),
    "patent_date": ("date", "patent_date", "publication_date"),
    "assignee": ("assignee", "organization", "applicant"),
    "url": ("url", "link"),
}


def extract_json_array(text: str) -> Optional[list]:
    """Return the first well-formed JSON array embedded in ``text``, or None.

    Arrays of objects win over earlier arrays of scalars, so citation markers
    such as ``[1]`` in surrounding prose are skipped.
    """
    if not text:
        return None
    first_scalar_array = None
    start = text.find("[")
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except ValueError:
            value = None
        if isinstance(value, list):
            if not value or any(isinstance(v, dict) for v in value):
                return value
            if first_scalar_array is None:
                first_scalar_array = value
        start = text.find("[", start + 1)
    return first_scalar_array


def _first_value(item: dict, keys) -> Any:
    for key in keys:
        value = item.get(key)
        if value not in (None, ""):
            return value
    return None


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        value = ", ".join(str(v) for v in value if v is not None)
    text = str(value).strip()
    return text or None


def candidate_from_raw(item: Any) -> Optional[CandidatePatent]:
    """Map one loosely-shaped JSON object onto a CandidatePatent."""
    if not isinstance(item, dict):
        return None
    fields = {
        name: _as_text(_first_value(item, aliases))
        for name, aliases in _FIELD_ALIASES.items()
    }
    if not fields["title"] and not fields["abstract"] and not fields["publication_number"]:
        return None
    return CandidatePatent(
        publication_number=fields["publication_number"] or "",
        title=fields["title"] or "",
        abstract=fields["abstract"] or "",
        patent_date=fields["patent_date"],
        assignee=fields["assignee"],
        url=fields["url"],
    )


def decode_candidates(text: Any) -> Optional[List[CandidatePatent]]:
    """
    Decode a provider response into candidates.

    Returns None when no JSON array can be found (unparseable), otherwise the
    list of candidates that could be mapped, which may be empty.
    """
    if not isinstance(text, str):
        text = str(text) if text is not None else ""
    items = extract_json_array(text)
    if items is None:
        return None
    candidates = []
    for item in items:
        candidate = candidate_from_raw(item)
        if candidate is None:
            logger.debug("Skipping unusable candidate entry: %r", item)
            continue
        candidates.append(candidate)
    return candidates
