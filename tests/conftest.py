import asyncio
from typing import AsyncGenerator, Dict, List
from uuid import UUID, uuid4
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from langchain_core.embeddings import Embeddings
from langchain_core.language_models.chat_models import BaseChatModel
from sqlalchemy.sql.dml import Delete

from src.main import app
from src.prior_art.config import SearchConfig
from src.prior_art.differentiators import DifferentiatorExtractor, first_template
from src.prior_art.schemas import CandidatePatent


# ---------------------------------------------------------------------------
# Provider fakes
# ---------------------------------------------------------------------------

class LetterEmbeddings(Embeddings):
    """26-dim letter-frequency vectors; texts containing a fail marker raise."""

    def __init__(self, fail_markers=(), delay: float = 0.0):
        self.fail_markers = tuple(fail_markers)
        self.delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def _vector(self, text: str) -> List[float]:
        vector = [0.0] * 26
        for ch in text.lower():
            if "a" <= ch <= "z":
                vector[ord(ch) - ord("a")] += 1.0
        return vector

    def embed_documents(self, texts):
        return [self._vector(t) for t in texts]

    def embed_query(self, text):
        return self._vector(text)

    async def aembed_query(self, text):
        self.calls.append(text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if any(marker in text for marker in self.fail_markers):
                raise ConnectionError("embedding provider returned 503")
            return self._vector(text)
        finally:
            self.in_flight -= 1


class FailingChatModel(BaseChatModel):
    @property
    def _llm_type(self) -> str:
        return "failing"

    def _generate(self, messages, stop=None, run_manager=None, **kwargs):
        raise ConnectionError("search provider unavailable")


# ---------------------------------------------------------------------------
# In-memory stand-in for the AsyncSession used by result persistence
# ---------------------------------------------------------------------------

class FakeResultDB:
    """Stages deletes/inserts like a transaction and applies them on commit."""

    def __init__(self):
        self.committed: Dict[UUID, list] = {}
        self.commit_error = None
        self.rollbacks = 0
        self._deleted = set()
        self._added = []

    async def execute(self, statement):
        if isinstance(statement, Delete):
            self._deleted.add(statement.whereclause.right.value)
        return MagicMock()

    def add(self, row):
        self._added.append(row)

    def add_all(self, rows):
        self._added.extend(rows)

    async def commit(self):
        if self.commit_error is not None:
            raise self.commit_error
        for session_id in self._deleted:
            self.committed[session_id] = []
        for row in self._added:
            self.committed.setdefault(row.session_id, []).append(row)
        self._deleted, self._added = set(), []

    async def rollback(self):
        self.rollbacks += 1
        self._deleted, self._added = set(), []

    def results(self, session_id):
        return list(self.committed.get(session_id, []))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def search_config() -> SearchConfig:
    return SearchConfig(
        retrieval_api_key="test-retrieval-key",
        embedding_api_key="test-embedding-key",
        embedding_concurrency=3,
    )


@pytest.fixture
def keyword_only_config() -> SearchConfig:
    return SearchConfig(retrieval_api_key="test-retrieval-key", embedding_api_key=None)


@pytest.fixture
def fake_db() -> FakeResultDB:
    return FakeResultDB()


@pytest.fixture
def extractor() -> DifferentiatorExtractor:
    return DifferentiatorExtractor(selector=first_template)


@pytest.fixture
def session_id() -> UUID:
    return uuid4()


@pytest.fixture
def patent_session():
    session = MagicMock()
    session.idea_prompt = "wireless charging pad with foreign object detection"
    session.technical_analysis = None
    session.backend_analysis = None
    session.patent_type = None
    return session


@pytest.fixture
def session_store(patent_session):
    store = MagicMock()
    store.get_session = AsyncMock(return_value=patent_session)
    store.get_answered_questions = AsyncMock(return_value=[])
    return store


@pytest.fixture
def make_retriever():
    def _make(candidates: List[CandidatePatent]):
        retriever = MagicMock()
        retriever.retrieve = AsyncMock(return_value=candidates)
        return retriever
    return _make


@pytest.fixture
def charging_candidates() -> List[CandidatePatent]:
    return [
        CandidatePatent(
            publication_number="US9000001B2",
            title="Inductive power transmitter",
            abstract="A transmitter coil delivers power to a receiver in a vehicle.",
        ),
        CandidatePatent(
            publication_number="US9000002B2",
            title="Wireless charging pad with foreign object detection",
            abstract="A charging pad detects a foreign object placed on the pad.",
            assignee="Example Corp.",
        ),
        CandidatePatent(
            publication_number="US9000003B2",
            title="Wireless charging station",
            abstract="A charging station for phones with a cooling fan.",
        ),
    ]


@pytest_asyncio.fixture(scope="function")
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Client for testing API endpoints; tests install their own dependency overrides."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def letter_embeddings():
    return LetterEmbeddings


@pytest.fixture
def failing_chat_model():
    return FailingChatModel()
