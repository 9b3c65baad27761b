from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone

from praxis.data.curriculum import COMPETENCY_TO_DOMAIN
from praxis.stores.base import (
    ArticleActivity,
    ContentRecord,
    Debrief,
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

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _ts(value: datetime | None) -> datetime:
    if value is None:
        return _EPOCH
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


@dataclass
class PublishedArticle:
    id: str
    title: str
    created_at: datetime
    residency_year: int | None = None
    competency: str | None = None
    storage_path: str | None = None
    status: str = "published"


@dataclass
class ArticleProgress:
    user_id: str
    article_id: str
    status: str = "completed"
    completed_at: datetime | None = None


@dataclass
class PublishedCase:
    id: str
    title: str
    created_at: datetime
    status: str = "published"


@dataclass
class InMemoryLearningStore(LearningStore):
    """Process-local store seeded directly with records (local development and tests)."""

    residencies: dict[str, int] = field(default_factory=dict)
    profiles: dict[str, ProfileSettings] = field(default_factory=dict)
    lesson_progress: list[ProgressRecord] = field(default_factory=list)
    simulations: list[SimulationRecord] = field(default_factory=list)
    articles: list[PublishedArticle] = field(default_factory=list)
    article_progress: list[ArticleProgress] = field(default_factory=list)
    cases: list[PublishedCase] = field(default_factory=list)
    debriefs: list[Debrief] = field(default_factory=list)
    aggregate_scores: dict[str, dict[str, float]] = field(default_factory=dict)
    learning_paths: list[LearningPathRecord] = field(default_factory=list)

    def _lessons_for(self, user_id: str) -> list[ProgressRecord]:
        return [p for p in self.lesson_progress if p.user_id == user_id]

    def _simulations_for(self, user_id: str) -> list[SimulationRecord]:
        return [s for s in self.simulations if s.user_id == user_id]

    async def get_current_residency(self, user_id: str) -> int | None:
        return self.residencies.get(user_id)

    async def get_profile(self, user_id: str) -> ProfileSettings | None:
        return self.profiles.get(user_id)

    async def get_aggregate_scores(self, user_id: str) -> dict[str, float] | None:
        if user_id in self.aggregate_scores:
            return dict(self.aggregate_scores[user_id])
        completed_sim_ids = {s.id for s in self._simulations_for(user_id) if s.status == "completed"}
        score_maps = [d.scores for d in self.debriefs if d.simulation_id in completed_sim_ids]
        return average_competency_scores(score_maps, list(COMPETENCY_TO_DOMAIN))

    async def list_completed_article_ids(self, user_id: str) -> list[str]:
        return [p.article_id for p in self.article_progress if p.user_id == user_id and p.status == "completed"]

    async def list_completed_simulations(self, user_id: str) -> list[SimulationRecord]:
        return [s for s in self._simulations_for(user_id) if s.status == "completed"]

    async def list_in_progress_lessons(self, user_id: str, limit: int = 5) -> list[ProgressRecord]:
        rows = [p for p in self._lessons_for(user_id) if p.status == "in_progress"]
        rows.sort(key=lambda p: _ts(p.updated_at), reverse=True)
        return rows[:limit]

    async def list_in_progress_simulations(self, user_id: str, limit: int = 5) -> list[SimulationRecord]:
        rows = [s for s in self._simulations_for(user_id) if s.status == "in_progress"]
        rows.sort(key=lambda s: _ts(s.updated_at), reverse=True)
        return rows[:limit]

    async def list_lesson_progress(self, user_id: str) -> list[ProgressRecord]:
        return self._lessons_for(user_id)

    async def list_progress_history(self, user_id: str) -> list[ProgressRecord]:
        rows = self._lessons_for(user_id)
        rows.sort(key=lambda p: _ts(p.updated_at), reverse=True)
        return rows

    async def list_recent_completed_articles(self, user_id: str, limit: int = 5) -> list[ArticleActivity]:
        titles = {a.id: a for a in self.articles}
        rows = [p for p in self.article_progress if p.user_id == user_id and p.status == "completed"]
        rows.sort(key=lambda p: _ts(p.completed_at), reverse=True)
        out = []
        for p in rows[:limit]:
            article = titles.get(p.article_id)
            out.append(
                ArticleActivity(
                    article_id=p.article_id,
                    title=article.title if article else p.article_id,
                    completed_at=p.completed_at,
                    competency=article.competency if article else None,
                )
            )
        return out

    async def list_recent_simulations(self, user_id: str, limit: int = 3) -> list[SimulationRecord]:
        rows = self._simulations_for(user_id)
        rows.sort(key=lambda s: _ts(s.created_at), reverse=True)
        return rows[:limit]

    async def list_residency_article_ids(self, residency_year: int) -> list[str]:
        return [a.id for a in self.articles if a.residency_year == residency_year and a.status == "published"]

    async def list_popular_lessons(self, limit: int) -> list[PopularLesson]:
        counts = Counter(
            (p.domain_id, p.module_id, p.lesson_id) for p in self.lesson_progress if p.status == "completed"
        )
        return [
            PopularLesson(domain_id=d, module_id=m, lesson_id=l, completions=n)
            for (d, m, l), n in counts.most_common(limit)
        ]

    async def list_popular_simulations(self, limit: int) -> list[PopularSimulation]:
        counts = Counter(s.case_id for s in self.simulations if s.status == "completed")
        return [PopularSimulation(case_id=c, completions=n) for c, n in counts.most_common(limit)]

    async def list_recent_cases(self, since: datetime, limit: int) -> list[ContentRecord]:
        rows = [c for c in self.cases if c.status == "published" and _ts(c.created_at) >= _ts(since)]
        rows.sort(key=lambda c: _ts(c.created_at), reverse=True)
        return [ContentRecord(id=c.id, title=c.title, created_at=c.created_at) for c in rows[:limit]]

    async def list_recent_articles(self, since: datetime, limit: int) -> list[ContentRecord]:
        rows = [a for a in self.articles if a.status == "published" and _ts(a.created_at) >= _ts(since)]
        rows.sort(key=lambda a: _ts(a.created_at), reverse=True)
        return [
            ContentRecord(id=a.id, title=a.title, created_at=a.created_at, storage_path=a.storage_path)
            for a in rows[:limit]
        ]

    async def list_debriefs(self, user_id: str) -> list[Debrief]:
        rows = [d for d in self.debriefs if d.user_id == user_id]
        rows.sort(key=lambda d: _ts(d.created_at), reverse=True)
        return rows

    async def list_learning_paths(self) -> list[LearningPathRecord]:
        return list(self.learning_paths) or default_learning_paths()
