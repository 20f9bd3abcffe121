"""
Database Seeder.

Run this script to populate the database with the sample guides defined
in data/sample_guides.py.

Usage:
    python -m incident_triage.scripts.db_seed_guides
"""

import logging

from incident_triage.config import settings
from incident_triage.data.sample_guides import SAMPLE_GUIDES
from incident_triage.infrastructure.database.connection import init_db, make_engine
from incident_triage.repositories.guide import DatabaseGuideRepository

logger = logging.getLogger(__name__)


def seed_guides(database_url: str = settings.DATABASE_URL) -> int:
    engine = make_engine(database_url)
    init_db(engine)

    repository = DatabaseGuideRepository(engine)
    logger.info(f"Found {len(SAMPLE_GUIDES)} guides to seed.")

    # save_guide() upserts, so re-running the seeder is safe
    for name, guide in SAMPLE_GUIDES.items():
        logger.info(f"Seeding guide: {name} ({len(guide)} steps)")
        repository.save_guide(guide)

    logger.info("Guide seeding complete.")
    return len(SAMPLE_GUIDES)


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    seed_guides()
