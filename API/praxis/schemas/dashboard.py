from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ContentType = Literal["lesson", "case"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContentPointer(CamelModel):
    type: ContentType
    id: str
    title: str
    url: str
    reason: str | None = None
    competency_name: str | None = None
    domain_id: str | None = None
    module_id: str | None = None
    lesson_id: str | None = None
    case_id: str | None = None


class Recommendation(CamelModel):
    primary: ContentPointer | None = None
    alternates: list[ContentPointer] = Field(default_factory=list)


class ResidencySummary(CamelModel):
    year: int
    title: str
    articles_completed: int
    total_articles: int
    simulations_completed: int
    total_simulations: int


class RecentActivity(CamelModel):
    id: str
    type: Literal["article", "simulation"]
    title: str
    completed_at: datetime | None = None
    competency: str | None = None


class JumpBackInItem(CamelModel):
    type: Literal["lesson", "simulation"]
    id: str
    title: str
    url: str
    progress: int | None = None


class ShelfLesson(CamelModel):
    id: str
    title: str
    url: str
    module_title: str
    domain_title: str | None = None


class ShelfCase(CamelModel):
    id: str
    title: str
    url: str


class StrengthenCoreShelf(CamelModel):
    competency_name: str
    competency_key: str
    domain_id: str
    lessons: list[ShelfLesson] = Field(default_factory=list)
    cases: list[ShelfCase] = Field(default_factory=list)


class ContentItem(CamelModel):
    """A lesson or case card on the spotlight, year-path and popular shelves."""

    type: ContentType
    id: str
    title: str
    url: str
    reason: str | None = None
    module_title: str | None = None
    domain_title: str | None = None


class NewContentItem(CamelModel):
    type: ContentType
    id: str
    title: str
    url: str
    created_at: datetime


class RoadmapLesson(CamelModel):
    id: str
    lesson_id: str
    title: str
    number: int
    url: str
    status: Literal["completed", "in_progress", "not_started"]


class RoadmapModule(CamelModel):
    id: str
    title: str
    number: int
    lessons: list[RoadmapLesson] = Field(default_factory=list)


class RoadmapSection(CamelModel):
    domain_id: str
    domain_title: str
    modules: list[RoadmapModule] = Field(default_factory=list)


class NextLesson(CamelModel):
    id: str
    domain_id: str
    module_id: str
    lesson_id: str
    title: str
    module_title: str
    domain_title: str
    url: str


class Roadmap(CamelModel):
    sections: list[RoadmapSection] = Field(default_factory=list)
    next_lesson: NextLesson | None = None
    total_lessons: int = 0
    completed_count: int = 0
    percent_complete: int = 0


class WeeklyGoal(CamelModel):
    target_hours: float
    current_hours: float = 0.0
    progress: int = 0


class DomainCompletion(CamelModel):
    domain_id: str
    domain_title: str
    completed: bool
    progress: int


class CollectionItem(ContentItem):
    completed: bool = False


class ContentCollection(CamelModel):
    id: str
    title: str
    subtitle: str
    items: list[CollectionItem] = Field(default_factory=list)
    view_all_href: str | None = None


class LearningPathStep(CamelModel):
    type: ContentType
    id: str
    title: str
    url: str | None = None
    completed: bool = False


class PathProgress(CamelModel):
    completed: int = 0
    total: int = 0
    percentage: int = 0


class LearningPath(CamelModel):
    id: str
    title: str
    description: str | None = None
    duration: str
    items: list[LearningPathStep] = Field(default_factory=list)
    progress: PathProgress = Field(default_factory=PathProgress)


class DashboardData(CamelModel):
    recommendation: Recommendation = Field(default_factory=Recommendation)
    residency_data: ResidencySummary | None = None
    current_streak: int = 0
    longest_streak: int = 0
    recent_activities: list[RecentActivity] = Field(default_factory=list)
    aggregate_scores: dict[str, float] | None = None
    jump_back_in_items: list[JumpBackInItem] = Field(default_factory=list)
    strengthen_core_shelves: list[StrengthenCoreShelf] = Field(default_factory=list)
    new_content: list[NewContentItem] = Field(default_factory=list)
    popular_content: list[ContentItem] = Field(default_factory=list)
    practice_spotlight: list[ContentItem] = Field(default_factory=list)
    continue_year_path: list[ContentItem] = Field(default_factory=list)
    roadmap: Roadmap = Field(default_factory=Roadmap)
    weekly_goal: WeeklyGoal
    latest_key_insight: str | None = None
    learning_track: str | None = None
    domain_completions: list[DomainCompletion] = Field(default_factory=list)
    themed_collections: list[ContentCollection] = Field(default_factory=list)
    module_collections: list[ContentCollection] = Field(default_factory=list)
    learning_paths: list[LearningPath] = Field(default_factory=list)
