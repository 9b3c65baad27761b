from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Awaitable, Callable, TypeVar

from sqlalchemy import desc, func, select
from sqlalchemy.exc import DBAPIError, ProgrammingError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from praxis.core.errors import DataSourceError
from praxis.core.logging import DOMAIN_STORAGE, get_domain_logger
from praxis.data.curriculum import COMPETENCY_TO_DOMAIN
from praxis.models.entities import (
    Article,
    Case,
    Competency,
    DebriefRecord,
    LearningPath,
    LearningPathItem,
    Profile,
    Simulation,
    UserArticleProgress,
    UserLessonProgress,
    UserResidency,
)
from praxis.stores.base import (
    ArticleActivity,
    ContentRecord,
    Debrief,
    LearningPathItemRecord,
    LearningPathRecord,
    LearningStore,
    PopularLesson,
    PopularSimulation,
    ProfileSettings,
    ProgressRecord,
    SimulationRecord,
    average_competency_scores,
    default_learning_paths,
)

T = TypeVar("T")
logger = get_domain_logger(__name__, DOMAIN_STORAGE)


def _describe(exc: Exception) -> str:
    text = str(exc)
    return text.splitlines()[0] if text else type(exc).__name__


def _progress_record(row: UserLessonProgress) -> ProgressRecord:
    return ProgressRecord(
        user_id=row.user_id,
        domain_id=row.domain_id,
        module_id=row.module_id,
        lesson_id=row.lesson_id,
        status=row.status,
        progress_percentage=row.progress_percentage or 0,
        bookmarked=bool(row.bookmarked),
        time_spent_seconds=row.time_spent_seconds or 0,
        completed_at=row.completed_at,
        updated_at=row.updated_at,
        last_read_position=row.last_read_position,
    )


def _simulation_record(sim: Simulation, case_title: str | None) -> SimulationRecord:
    return SimulationRecord(
        id=str(sim.id),
        user_id=sim.user_id,
        case_id=sim.case_id,
        case_title=case_title or sim.case_id,
        status=sim.status,
        created_at=sim.created_at,
        updated_at=sim.updated_at,
        completed_at=sim.completed_at,
    )


class SqlLearningStore(LearningStore):
    """Reads from PostgreSQL through async SQLAlchemy.

    Each read opens its own session: the dashboard issues reads concurrently
    and an ``AsyncSession`` must not be shared between concurrent awaits.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _run(self, source: str, query: Callable[[AsyncSession], Awaitable[T]]) -> T:
        try:
            async with self._session_factory() as session:
                return await query(session)
        except SQLAlchemyError as exc:
            raise DataSourceError(source, _describe(exc)) from exc

    async def get_current_residency(self, user_id: str) -> int | None:
        async def query(db: AsyncSession):
            return (await db.execute(
                select(UserResidency.current_residency).where(UserResidency.user_id == user_id)
            )).scalar_one_or_none()

        return await self._run("residency", query)

    async def get_profile(self, user_id: str) -> ProfileSettings | None:
        async def full(db: AsyncSession):
            row = (await db.execute(
                select(Profile.bio, Profile.weekly_target_hours, Profile.learning_track).where(Profile.id == user_id)
            )).first()
            if row is None:
                return None
            return ProfileSettings(bio=row.bio, weekly_target_hours=row.weekly_target_hours,
                                   learning_track=row.learning_track)

        async def bio_only(db: AsyncSession):
            bio = (await db.execute(select(Profile.bio).where(Profile.id == user_id))).scalar_one_or_none()
            return ProfileSettings(bio=bio)

        try:
            async with self._session_factory() as session:
                return await full(session)
        except (ProgrammingError, DBAPIError) as exc:
            # Optional profile columns may not be migrated yet.
            logger.warning("Profile settings columns unavailable, reading bio only: %s", _describe(exc))
        except SQLAlchemyError as exc:
            raise DataSourceError("profile", _describe(exc)) from exc
        return await self._run("profile", bio_only)

    async def get_aggregate_scores(self, user_id: str) -> dict[str, float] | None:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(DebriefRecord.radar_chart_data)
                .join(Simulation, Simulation.id == DebriefRecord.simulation_id)
                .where(Simulation.user_id == user_id, Simulation.status == "completed")
            )).scalars().all()
            return average_competency_scores(list(rows), list(COMPETENCY_TO_DOMAIN))

        return await self._run("aggregate_scores", query)

    async def list_completed_article_ids(self, user_id: str) -> list[str]:
        async def query(db: AsyncSession):
            return list((await db.execute(
                select(UserArticleProgress.article_id)
                .where(UserArticleProgress.user_id == user_id, UserArticleProgress.status == "completed")
            )).scalars().all())

        return await self._run("completed_articles", query)

    async def list_completed_simulations(self, user_id: str) -> list[SimulationRecord]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(Simulation, Case.title)
                .join(Case, Case.id == Simulation.case_id)
                .where(Simulation.user_id == user_id, Simulation.status == "completed")
            )).all()
            return [_simulation_record(sim, title) for sim, title in rows]

        return await self._run("completed_simulations", query)

    async def list_in_progress_lessons(self, user_id: str, limit: int = 5) -> list[ProgressRecord]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(UserLessonProgress)
                .where(UserLessonProgress.user_id == user_id, UserLessonProgress.status == "in_progress")
                .order_by(desc(UserLessonProgress.updated_at))
                .limit(limit)
            )).scalars().all()
            return [_progress_record(r) for r in rows]

        return await self._run("in_progress_lessons", query)

    async def list_in_progress_simulations(self, user_id: str, limit: int = 5) -> list[SimulationRecord]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(Simulation, Case.title)
                .join(Case, Case.id == Simulation.case_id)
                .where(Simulation.user_id == user_id, Simulation.status == "in_progress")
                .order_by(desc(Simulation.updated_at))
                .limit(limit)
            )).all()
            return [_simulation_record(sim, title) for sim, title in rows]

        return await self._run("in_progress_simulations", query)

    async def list_lesson_progress(self, user_id: str) -> list[ProgressRecord]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(
                    UserLessonProgress.domain_id,
                    UserLessonProgress.module_id,
                    UserLessonProgress.lesson_id,
                    UserLessonProgress.status,
                    UserLessonProgress.completed_at,
                    UserLessonProgress.updated_at,
                ).where(UserLessonProgress.user_id == user_id)
            )).all()
            return [
                ProgressRecord(
                    user_id=user_id,
                    domain_id=r.domain_id,
                    module_id=r.module_id,
                    lesson_id=r.lesson_id,
                    status=r.status,
                    completed_at=r.completed_at,
                    updated_at=r.updated_at,
                )
                for r in rows
            ]

        return await self._run("lesson_progress", query)

    async def list_progress_history(self, user_id: str) -> list[ProgressRecord]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(UserLessonProgress)
                .where(UserLessonProgress.user_id == user_id)
                .order_by(desc(UserLessonProgress.updated_at))
            )).scalars().all()
            return [_progress_record(r) for r in rows]

        return await self._run("progress_history", query)

    async def list_recent_completed_articles(self, user_id: str, limit: int = 5) -> list[ArticleActivity]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(UserArticleProgress.article_id, UserArticleProgress.completed_at, Article.title,
                       Competency.name)
                .join(Article, Article.id == UserArticleProgress.article_id)
                .outerjoin(Competency, Competency.id == Article.competency_id)
                .where(UserArticleProgress.user_id == user_id, UserArticleProgress.status == "completed")
                .order_by(desc(UserArticleProgress.completed_at).nulls_last())
                .limit(limit)
            )).all()
            return [
                ArticleActivity(article_id=r.article_id, title=r.title, completed_at=r.completed_at,
                                competency=r.name)
                for r in rows
            ]

        return await self._run("recent_articles_completed", query)

    async def list_recent_simulations(self, user_id: str, limit: int = 3) -> list[SimulationRecord]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(Simulation, Case.title)
                .join(Case, Case.id == Simulation.case_id)
                .where(Simulation.user_id == user_id)
                .order_by(desc(Simulation.created_at))
                .limit(limit)
            )).all()
            return [_simulation_record(sim, title) for sim, title in rows]

        return await self._run("recent_simulations", query)

    async def list_residency_article_ids(self, residency_year: int) -> list[str]:
        async def query(db: AsyncSession):
            return list((await db.execute(
                select(Article.id)
                .join(Competency, Competency.id == Article.competency_id)
                .where(Competency.residency_year == residency_year, Article.status == "published")
            )).scalars().all())

        return await self._run("residency_articles", query)

    async def list_popular_lessons(self, limit: int) -> list[PopularLesson]:
        async def query(db: AsyncSession):
            completions = func.count(UserLessonProgress.id).label("completions")
            rows = (await db.execute(
                select(UserLessonProgress.domain_id, UserLessonProgress.module_id, UserLessonProgress.lesson_id,
                       completions)
                .where(UserLessonProgress.status == "completed")
                .group_by(UserLessonProgress.domain_id, UserLessonProgress.module_id, UserLessonProgress.lesson_id)
                .order_by(desc(completions))
                .limit(limit)
            )).all()
            return [
                PopularLesson(domain_id=r.domain_id, module_id=r.module_id, lesson_id=r.lesson_id,
                              completions=int(r.completions))
                for r in rows
            ]

        return await self._run("popular_lessons", query)

    async def list_popular_simulations(self, limit: int) -> list[PopularSimulation]:
        async def query(db: AsyncSession):
            completions = func.count(Simulation.id).label("completions")
            rows = (await db.execute(
                select(Simulation.case_id, completions)
                .where(Simulation.status == "completed")
                .group_by(Simulation.case_id)
                .order_by(desc(completions))
                .limit(limit)
            )).all()
            return [PopularSimulation(case_id=r.case_id, completions=int(r.completions)) for r in rows]

        return await self._run("popular_simulations", query)

    async def list_recent_cases(self, since: datetime, limit: int) -> list[ContentRecord]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(Case.id, Case.title, Case.created_at)
                .where(Case.status == "published", Case.created_at >= since)
                .order_by(desc(Case.created_at))
                .limit(limit)
            )).all()
            return [ContentRecord(id=r.id, title=r.title, created_at=r.created_at) for r in rows]

        return await self._run("recent_cases", query)

    async def list_recent_articles(self, since: datetime, limit: int) -> list[ContentRecord]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(Article.id, Article.title, Article.created_at, Article.storage_path)
                .where(Article.status == "published", Article.created_at >= since)
                .order_by(desc(Article.created_at))
                .limit(limit)
            )).all()
            return [
                ContentRecord(id=r.id, title=r.title, created_at=r.created_at, storage_path=r.storage_path)
                for r in rows
            ]

        return await self._run("recent_articles", query)

    async def list_debriefs(self, user_id: str) -> list[Debrief]:
        async def query(db: AsyncSession):
            rows = (await db.execute(
                select(DebriefRecord)
                .join(Simulation, Simulation.id == DebriefRecord.simulation_id)
                .where(Simulation.user_id == user_id)
                .order_by(desc(DebriefRecord.created_at))
            )).scalars().all()
            return [
                Debrief(
                    id=str(r.id),
                    user_id=user_id,
                    simulation_id=str(r.simulation_id),
                    summary=r.summary_text,
                    scores=dict(r.radar_chart_data or {}),
                    created_at=r.created_at,
                )
                for r in rows
            ]

        return await self._run("debriefs", query)

    async def list_learning_paths(self) -> list[LearningPathRecord]:
        async def query(db: AsyncSession):
            paths = (await db.execute(
                select(LearningPath)
                .where(LearningPath.status == "published")
                .order_by(desc(LearningPath.created_at))
            )).scalars().all()
            if not paths:
                return []
            items = (await db.execute(
                select(LearningPathItem)
                .where(LearningPathItem.path_id.in_([p.id for p in paths]))
                .order_by(LearningPathItem.path_id, LearningPathItem.order)
            )).scalars().all()
            by_path: dict = defaultdict(list)
            for item in items:
                by_path[item.path_id].append(
                    LearningPathItemRecord(
                        type=item.type,
                        domain_id=item.domain or "",
                        module_id=item.module,
                        lesson_id=item.lesson,
                        case_id=item.case_id,
                    )
                )
            return [
                LearningPathRecord(id=p.slug, title=p.title, description=p.description, duration=p.duration,
                                   items=by_path.get(p.id, []))
                for p in paths
            ]

        try:
            async with self._session_factory() as session:
                paths = await query(session)
        except ProgrammingError as exc:
            # Path tables are created by a later migration than the rest of the schema.
            logger.warning("Learning path tables unavailable, serving built-in paths: %s", _describe(exc))
            return default_learning_paths()
        except SQLAlchemyError as exc:
            raise DataSourceError("learning_paths", _describe(exc)) from exc
        return paths or default_learning_paths()
