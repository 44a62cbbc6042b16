from typing import List, Optional
from uuid import UUID
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict


class CandidatePatent(BaseModel):
    """One document returned by the retrieval provider, before scoring."""
    publication_number: str = Field("", description="External identifier, e.g. 'US10567123B2'")
    title: str = ""
    abstract: str = ""
    patent_date: Optional[str] = None
    assignee: Optional[str] = None
    url: Optional[str] = None

    @property
    def text(self) -> str:
        return f"{self.title} {self.abstract}".strip()


class SimilarityScores(BaseModel):
    keyword_score: float = Field(..., ge=0.0, le=1.0)
    semantic_score: Optional[float] = Field(None, ge=0.0, le=1.0)
    combined_score: float = Field(..., ge=0.0, le=0.95)


class Differentiators(BaseModel):
    overlap_claims: List[str] = Field(..., min_length=1, max_length=5)
    difference_claims: List[str] = Field(..., min_length=1, max_length=5)


class ScoredCandidate(BaseModel):
    candidate: CandidatePatent
    scores: SimilarityScores
    differentiators: Differentiators


class PriorArtSearchRequest(BaseModel):
    # Optional here so a missing id can be answered with the documented 400 body
    session_id: Optional[str] = None
    search_query: Optional[str] = None
    patent_type: Optional[str] = None


class PriorArtSearchResponse(BaseModel):
    success: bool = True
    results_found: int
    message: str


class PriorArtErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: str
    message: str


class PriorArtResultResponse(BaseModel):
    id: UUID
    session_id: UUID
    rank: int
    title: str
    publication_number: Optional[str]
    summary: Optional[str]
    url: Optional[str]
    patent_date: Optional[str]
    assignee: Optional[str]
    source: Optional[str]
    similarity_score: float
    semantic_score: float
    keyword_score: float
    overlap_claims: List[str]
    difference_claims: List[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
