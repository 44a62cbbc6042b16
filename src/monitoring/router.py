import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.monitoring.schemas import InfringementAlertResponse, MonitoringRunRequest, MonitoringRunResponse
from src.monitoring.service import MonitoringService
from src.prior_art.exceptions import SearchConfigurationError, SessionNotFoundError
from src.prior_art.router import error_response, failure_response, get_prior_art_service, parse_session_id
from src.prior_art.schemas import PriorArtErrorResponse
from src.prior_art.service import PriorArtService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["monitoring"])


def get_monitoring_service(
    prior_art: PriorArtService = Depends(get_prior_art_service),
) -> MonitoringService:
    return MonitoringService(prior_art.db, prior_art)


@router.post(
    "/prior-art/monitoring/run",
    response_model=MonitoringRunResponse,
    responses={500: {"model": PriorArtErrorResponse}},
)
async def run_monitoring(
    request: Optional[MonitoringRunRequest] = None,
    service: MonitoringService = Depends(get_monitoring_service),
):
    request = request or MonitoringRunRequest()
    session_id, error = parse_session_id(request.session_id)
    if error is not None:
        return error

    try:
        return await service.run(session_id, request.search_query)
    except SessionNotFoundError:
        return error_response(status.HTTP_404_NOT_FOUND, "Session not found")
    except SearchConfigurationError as e:
        return failure_response(str(e), "Prior art search is not configured")
    except Exception as e:
        logger.exception("Prior art monitoring run failed for session %s", session_id)
        return failure_response(str(e), "Prior art monitoring failed")


@router.get("/sessions/{session_id}/prior-art/alerts", response_model=List[InfringementAlertResponse])
async def list_alerts(
    session_id: UUID,
    service: MonitoringService = Depends(get_monitoring_service),
):
    return await service.list_alerts(session_id)
