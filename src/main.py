import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.config import settings
from src.database import engine
from src.llm import clear_llm_cache

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s %s starting", settings.PROJECT_NAME, settings.VERSION)
    if not settings.PERPLEXITY_API_KEY:
        logger.warning("PERPLEXITY_API_KEY is not set; prior art searches will fail")
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; prior art scoring will be keyword-only")
    yield
    clear_llm_cache()
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )

    # Routers
    from src.routes.v1.api import api_router

    app.include_router(api_router, prefix=settings.API_V1_STR)

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "version": settings.VERSION,
            "prior_art_search": bool(settings.PERPLEXITY_API_KEY),
            "semantic_scoring": bool(settings.OPENAI_API_KEY),
        }

    return app

app = create_app()
