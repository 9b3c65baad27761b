from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from praxis.data.collections import DEFAULT_LEARNING_PATHS

LESSON_STATUSES = ("not_started", "in_progress", "completed")


@dataclass
class ProgressRecord:
    user_id: str
    domain_id: str
    module_id: str
    lesson_id: str
    status: str = "not_started"
    progress_percentage: int = 0
    bookmarked: bool = False
    time_spent_seconds: int = 0
    completed_at: datetime | None = None
    updated_at: datetime | None = None
    last_read_position: dict | None = None


@dataclass
class SimulationRecord:
    id: str
    user_id: str
    case_id: str
    case_title: str
    status: str = "in_progress"
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None


@dataclass
class ArticleActivity:
    article_id: str
    title: str
    completed_at: datetime | None = None
    competency: str | None = None


@dataclass
class ContentRecord:
    """A published case or article, as listed by recency."""

    id: str
    title: str
    created_at: datetime
    storage_path: str | None = None


@dataclass
class PopularLesson:
    domain_id: str
    module_id: str
    lesson_id: str
    completions: int = 0


@dataclass
class PopularSimulation:
    case_id: str
    completions: int = 0


@dataclass
class ProfileSettings:
    bio: str | None = None
    weekly_target_hours: float | None = None
    learning_track: str | None = None


@dataclass
class LearningPathItemRecord:
    type: str  # lesson | case
    domain_id: str = ""
    module_id: str | None = None
    lesson_id: str | None = None
    case_id: str | None = None


@dataclass
class LearningPathRecord:
    id: str
    title: str
    duration: str
    description: str | None = None
    items: list[LearningPathItemRecord] = field(default_factory=list)


@dataclass
class Debrief:
    id: str
    user_id: str
    simulation_id: str
    summary: str | None = None
    scores: dict[str, float] = field(default_factory=dict)
    created_at: datetime | None = None


class LearningStore(ABC):
    """Narrow read contract for everything the dashboard and ranker consume.

    Implementations raise ``DataSourceError`` when the backing store cannot
    answer; callers decide how to degrade.
    """

    # Profile
    @abstractmethod
    async def get_current_residency(self, user_id: str) -> int | None:
        raise NotImplementedError

    @abstractmethod
    async def get_profile(self, user_id: str) -> ProfileSettings | None:
        raise NotImplementedError

    # Scoring
    @abstractmethod
    async def get_aggregate_scores(self, user_id: str) -> dict[str, float] | None:
        raise NotImplementedError

    # Progress
    @abstractmethod
    async def list_completed_article_ids(self, user_id: str) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    async def list_completed_simulations(self, user_id: str) -> list[SimulationRecord]:
        raise NotImplementedError

    @abstractmethod
    async def list_in_progress_lessons(self, user_id: str, limit: int = 5) -> list[ProgressRecord]:
        raise NotImplementedError

    @abstractmethod
    async def list_in_progress_simulations(self, user_id: str, limit: int = 5) -> list[SimulationRecord]:
        raise NotImplementedError

    @abstractmethod
    async def list_lesson_progress(self, user_id: str) -> list[ProgressRecord]:
        raise NotImplementedError

    @abstractmethod
    async def list_progress_history(self, user_id: str) -> list[ProgressRecord]:
        raise NotImplementedError

    @abstractmethod
    async def list_recent_completed_articles(self, user_id: str, limit: int = 5) -> list[ArticleActivity]:
        raise NotImplementedError

    @abstractmethod
    async def list_recent_simulations(self, user_id: str, limit: int = 3) -> list[SimulationRecord]:
        raise NotImplementedError

    # Content (shared across users)
    @abstractmethod
    async def list_residency_article_ids(self, residency_year: int) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    async def list_popular_lessons(self, limit: int) -> list[PopularLesson]:
        raise NotImplementedError

    @abstractmethod
    async def list_popular_simulations(self, limit: int) -> list[PopularSimulation]:
        raise NotImplementedError

    @abstractmethod
    async def list_recent_cases(self, since: datetime, limit: int) -> list[ContentRecord]:
        raise NotImplementedError

    @abstractmethod
    async def list_recent_articles(self, since: datetime, limit: int) -> list[ContentRecord]:
        raise NotImplementedError

    @abstractmethod
    async def list_learning_paths(self) -> list[LearningPathRecord]:
        """Published curated paths, newest first."""
        raise NotImplementedError

    # Debriefs
    @abstractmethod
    async def list_debriefs(self, user_id: str) -> list[Debrief]:
        raise NotImplementedError


def average_competency_scores(score_maps: list[dict], competency_keys: list[str]) -> dict[str, float]:
    """Average each competency over the debriefs that scored it; unscored competencies stay 0."""
    buckets: dict[str, list[float]] = {key: [] for key in competency_keys}
    for scores in score_maps:
        for key in competency_keys:
            value = (scores or {}).get(key)
            if isinstance(value, (int, float)) and value:
                buckets[key].append(float(value))
    return {key: (sum(vals) / len(vals) if vals else 0.0) for key, vals in buckets.items()}


def default_learning_paths() -> list[LearningPathRecord]:
    return [
        LearningPathRecord(
            id=p["id"],
            title=p["title"],
            description=p.get("description"),
            duration=p["duration"],
            items=[
                LearningPathItemRecord(
                    type=item["type"],
                    domain_id=item.get("domain", ""),
                    module_id=item.get("module"),
                    lesson_id=item.get("lesson"),
                    case_id=item.get("case_id"),
                )
                for item in p.get("items", [])
            ],
        )
        for p in DEFAULT_LEARNING_PATHS
    ]
