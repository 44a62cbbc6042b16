import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.prior_art.config import SearchConfig
from src.prior_art.exceptions import SearchConfigurationError, SessionNotFoundError
from src.prior_art.schemas import (
    PriorArtErrorResponse,
    PriorArtResultResponse,
    PriorArtSearchRequest,
    PriorArtSearchResponse,
)
from src.prior_art.service import PriorArtService, search_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["prior-art"])


def get_search_config() -> SearchConfig:
    return SearchConfig.from_settings()


def get_prior_art_service(
    db: AsyncSession = Depends(get_db),
    config: SearchConfig = Depends(get_search_config),
) -> PriorArtService:
    return PriorArtService(db, config)


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error})


def failure_response(details: str, message: str) -> JSONResponse:
    body = PriorArtErrorResponse(error="Internal server error", details=details, message=message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )


def parse_session_id(raw: Optional[str]):
    """Return (UUID, None) or (None, error JSONResponse)."""
    if not raw or not raw.strip():
        return None, error_response(status.HTTP_400_BAD_REQUEST, "session_id is required")
    try:
        return UUID(raw.strip()), None
    except ValueError:
        return None, error_response(status.HTTP_400_BAD_REQUEST, "session_id must be a valid UUID")


@router.post(
    "/prior-art/search",
    response_model=PriorArtSearchResponse,
    responses={500: {"model": PriorArtErrorResponse}},
)
async def search_prior_art(
    request: Optional[PriorArtSearchRequest] = None,
    service: PriorArtService = Depends(get_prior_art_service),
):
    request = request or PriorArtSearchRequest()
    session_id, error = parse_session_id(request.session_id)
    if error is not None:
        return error

    try:
        results = await service.search(session_id, request.search_query, request.patent_type)
    except SessionNotFoundError:
        return error_response(status.HTTP_404_NOT_FOUND, "Session not found")
    except SearchConfigurationError as e:
        logger.error("Prior art search is not configured: %s", e)
        return failure_response(str(e), "Prior art search is not configured")
    except Exception as e:
        logger.exception("Prior art search failed for session %s", session_id)
        return failure_response(str(e), "Prior art search failed")

    return search_response(results)


@router.get("/sessions/{session_id}/prior-art", response_model=List[PriorArtResultResponse])
async def list_prior_art_results(
    session_id: UUID,
    service: PriorArtService = Depends(get_prior_art_service),
):
    return await service.list_results(session_id)
