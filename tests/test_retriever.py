import json

import pytest
from langchain_core.language_models import FakeListChatModel

from src.prior_art.retriever import PatentRetriever, deduplicate, patent_url
from src.prior_art.schemas import CandidatePatent


def payload(items):
    return "Results below.\n```json\n" + json.dumps(items) + "\n```"


class TestPatentUrl:
    def test_strips_spaces_commas_and_slashes(self):
        assert patent_url("US 10,567,123 B2") == "https://patents.google.com/patent/US10567123B2"
        assert patent_url("WO2021/234567") == "https://patents.google.com/patent/WO2021234567"

    def test_missing_number(self):
        assert patent_url("") is None
        assert patent_url(None) is None


def test_deduplicate_by_number_then_title():
    candidates = [
        CandidatePatent(publication_number="US1", title="A"),
        CandidatePatent(publication_number="us1", title="A again"),
        CandidatePatent(title="Unnumbered"),
        CandidatePatent(title="unnumbered"),
        CandidatePatent(publication_number="US2", title="B"),
    ]
    assert [c.title for c in deduplicate(candidates)] == ["A", "Unnumbered", "B"]


@pytest.mark.asyncio
async def test_retrieve_parses_and_fills_urls():
    llm = FakeListChatModel(responses=[payload([
        {"number": "US10567123B2", "title": "Pad", "abstract": "A pad", "date": "2020-02-18"},
        {"number": "EP3789456A1", "title": "Station", "abstract": "A station",
         "url": "https://example.org/ep3789456"},
    ])])
    retriever = PatentRetriever(llm)

    candidates = await retriever.retrieve("wireless charging pad")

    assert [c.publication_number for c in candidates] == ["US10567123B2", "EP3789456A1"]
    assert candidates[0].url == "https://patents.google.com/patent/US10567123B2"
    assert candidates[1].url == "https://example.org/ep3789456"


@pytest.mark.asyncio
async def test_retrieve_caps_candidate_count():
    items = [{"number": f"US{i}", "title": f"T{i}"} for i in range(30)]
    retriever = PatentRetriever(FakeListChatModel(responses=[payload(items)]), max_candidates=12)

    candidates = await retriever.retrieve("query")

    assert len(candidates) == 12


@pytest.mark.asyncio
async def test_unparseable_response_yields_no_candidates():
    retriever = PatentRetriever(FakeListChatModel(responses=["I could not search right now."]))
    assert await retriever.retrieve("query") == []


@pytest.mark.asyncio
async def test_provider_error_yields_no_candidates(failing_chat_model):
    retriever = PatentRetriever(failing_chat_model)
    assert await retriever.retrieve("query") == []
