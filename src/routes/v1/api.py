from fastapi import APIRouter

from src.prior_art.router import router as prior_art_router
from src.monitoring.router import router as monitoring_router

api_router = APIRouter()

api_router.include_router(prior_art_router)
api_router.include_router(monitoring_router)
