import logging

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from praxis.core.settings import settings
from praxis.data.case_studies import SIMULATIONS
from praxis.models.base import Base
from praxis.models.entities import Case

logger = logging.getLogger(__name__)


async def initialize_database(session: AsyncSession, engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        # Databases created before the profile settings columns existed.
        await conn.execute(text("ALTER TABLE profiles ADD COLUMN IF NOT EXISTS weekly_target_hours DOUBLE PRECISION"))
        await conn.execute(text("ALTER TABLE profiles ADD COLUMN IF NOT EXISTS learning_track VARCHAR(64)"))
        await conn.execute(
            text(
                "CREATE INDEX IF NOT EXISTS idx_user_lesson_progress_status_lesson "
                "ON user_lesson_progress (status, domain_id, module_id, lesson_id)"
            )
        )

    if not settings.seed_catalog_on_start:
        return

    count = int((await session.execute(select(func.count()).select_from(Case))).scalar_one())
    if count > 0:
        return

    for sim in SIMULATIONS:
        session.add(Case(id=sim["case_id"], title=sim["title"], status="published"))
    await session.commit()
    logger.info("Seeded %d simulation cases", len(SIMULATIONS))
