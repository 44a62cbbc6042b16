import asyncio
import logging
from uuid import UUID

from src.database import AsyncSessionLocal
# Registers PriorArtResult for the PatentSession.prior_art_results relationship
from src.prior_art.models import PriorArtResult  # noqa: F401
from src.sessions.models import PatentSession, AIQuestion

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

DEMO_SESSION_ID = UUID("00000000-0000-0000-0000-000000000101")

DEMO_QUESTIONS = [
    ("What problem does the invention solve?",
     "Metal objects left on a charging pad heat up and can start fires."),
    ("How does it detect foreign objects?",
     "It measures the quality factor of the transmitter coil before power transfer and "
     "compares it against a calibrated baseline."),
]


async def seed_data():
    async with AsyncSessionLocal() as session:
        demo = await session.get(PatentSession, DEMO_SESSION_ID)
        if demo:
            logger.info("Demo session already exists, nothing to do")
            return

        logger.info("Creating demo patent session %s", DEMO_SESSION_ID)
        session.add(PatentSession(
            id=DEMO_SESSION_ID,
            idea_prompt="Wireless charging pad with foreign object detection",
            technical_analysis="Inductive Qi-compatible transmitter with coil quality factor sensing.",
            backend_analysis={
                "summary": "Firmware service that logs calibration data per pad.",
                "tables": ["pads", "calibrations", "detections"],
            },
            patent_type="utility",
        ))
        await session.flush()
        for question, answer in DEMO_QUESTIONS:
            session.add(AIQuestion(session_id=DEMO_SESSION_ID, question=question, answer=answer))

        await session.commit()
        logger.info("Seeding complete.")

if __name__ == "__main__":
    asyncio.run(seed_data())
