import asyncio
import logging

from src.database import engine, Base

# Import all models to ensure they are registered in Base.metadata
from src.sessions.models import PatentSession, AIQuestion
from src.prior_art.models import PriorArtResult
from src.monitoring.models import PriorArtMonitor, InfringementAlert

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


async def init_models():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created: %s", ", ".join(sorted(Base.metadata.tables)))
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(init_models())
