"""
Pure shelf derivations for the dashboard.

Every function here takes already-fetched snapshots plus the catalog and
returns one shelf. None of them touch a store, so each can be tested (and
fail) on its own.
"""
from __future__ import annotations

import math
from collections.abc import Collection
from datetime import datetime, timezone

from praxis.content.catalog import Catalog, LessonRef, lesson_key, simulation_url
from praxis.data.curriculum import residency_title
from praxis.schemas.dashboard import (
    ContentItem,
    DomainCompletion,
    JumpBackInItem,
    NewContentItem,
    ResidencySummary,
    ShelfCase,
    ShelfLesson,
    StrengthenCoreShelf,
)
from praxis.stores.base import ContentRecord, PopularLesson, PopularSimulation, ProgressRecord, SimulationRecord

JUMP_BACK_IN_LIMIT = 5
STRENGTHEN_CORE_SHELVES = 2
STRENGTHEN_CORE_LESSONS = 8
FOUNDATIONAL_LESSONS = 3
STRENGTHEN_CORE_CASES = 3
SPOTLIGHT_LIMIT = 6
SPOTLIGHT_RECENT_LESSONS = 10
SPOTLIGHT_CASES_PER_DOMAIN = 2
SPOTLIGHT_LESSONS_PER_DOMAIN = 3
YEAR_PATH_LIMIT = 6
NEW_CONTENT_LIMIT = 7
POPULAR_LESSON_SLOTS = 8
POPULAR_TOTAL_SLOTS = 10
POPULAR_LIMIT = 8

APPLY_REASON = "Apply what you've learned"
STRENGTHEN_REASON = "Strengthen your understanding"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _ts(value: datetime | None) -> datetime:
    if value is None:
        return _EPOCH
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def completed_lesson_keys(progress: list[ProgressRecord]) -> set[str]:
    return {lesson_key(p.domain_id, p.module_id, p.lesson_id) for p in progress if p.status == "completed"}


def in_progress_lesson_keys(progress: list[ProgressRecord]) -> set[str]:
    return {lesson_key(p.domain_id, p.module_id, p.lesson_id) for p in progress if p.status == "in_progress"}


def _lesson_item(lesson: LessonRef, reason: str | None = None) -> ContentItem:
    return ContentItem(
        type="lesson",
        id=lesson.key,
        title=lesson.title,
        url=lesson.url,
        reason=reason,
        module_title=lesson.module_title,
        domain_title=lesson.domain_title,
    )


def residency_summary(
    year: int | None,
    residency_article_ids: list[str],
    completed_article_ids: list[str],
    completed_simulations: list[SimulationRecord],
    catalog: Catalog,
) -> ResidencySummary | None:
    if not year or not residency_article_ids:
        return None
    completed = set(completed_article_ids)
    return ResidencySummary(
        year=year,
        title=residency_title(year),
        articles_completed=sum(1 for article_id in residency_article_ids if article_id in completed),
        total_articles=len(residency_article_ids),
        simulations_completed=len(completed_simulations),
        total_simulations=len(catalog.simulations),
    )


def _has_saved_position(progress: ProgressRecord) -> bool:
    position = progress.last_read_position
    if not isinstance(position, dict):
        return False
    scroll = position.get("scrollTop")
    return isinstance(scroll, (int, float)) and not isinstance(scroll, bool)


def jump_back_in(
    in_progress_lessons: list[ProgressRecord],
    in_progress_simulations: list[SimulationRecord],
    catalog: Catalog,
) -> list[JumpBackInItem]:
    """Lessons with a saved reading position come first; everything else follows by recency."""
    positioned: list[tuple[datetime, JumpBackInItem]] = []
    rest: list[tuple[datetime, JumpBackInItem]] = []

    for progress in in_progress_lessons:
        lesson = catalog.find_lesson(progress.domain_id, progress.module_id, progress.lesson_id)
        if lesson is None:
            continue
        item = JumpBackInItem(
            type="lesson",
            id=lesson.key,
            title=lesson.title,
            url=lesson.url,
            progress=progress.progress_percentage,
        )
        bucket = positioned if _has_saved_position(progress) else rest
        bucket.append((_ts(progress.updated_at), item))

    for sim in in_progress_simulations:
        item = JumpBackInItem(type="simulation", id=sim.id, title=sim.case_title, url=simulation_url(sim.case_id))
        rest.append((_ts(sim.updated_at), item))

    positioned.sort(key=lambda pair: pair[0], reverse=True)
    rest.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in positioned + rest][:JUMP_BACK_IN_LIMIT]


def scored_competencies(scores: object) -> dict[str, float] | None:
    """Keep only competencies that carry a real, finite score."""
    if not isinstance(scores, dict):
        return None
    return {
        str(key): float(value)
        for key, value in scores.items()
        if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
    }


def _weakest_competencies(scores: dict[str, float]) -> list[str]:
    scored = [(key, value) for key, value in (scored_competencies(scores) or {}).items() if value > 0]
    scored.sort(key=lambda pair: pair[1])
    return [key for key, _ in scored[:STRENGTHEN_CORE_SHELVES]]


def strengthen_core(
    scores: dict[str, float] | None,
    completed_keys: Collection[str],
    catalog: Catalog,
) -> list[StrengthenCoreShelf]:
    if not scores:
        return []

    shelves: list[StrengthenCoreShelf] = []
    for competency_key in _weakest_competencies(scores):
        domain_id = catalog.domain_for_competency(competency_key)
        domain = catalog.domain_by_id(domain_id) if domain_id else None
        if domain is None:
            continue

        domain_lessons = [l for l in catalog.all_lessons_flat() if l.domain_id == domain.id]
        open_lessons = [l for l in domain_lessons if l.key not in completed_keys]

        foundational: list[LessonRef] = []
        if domain.modules:
            first_module = min(domain.modules, key=lambda m: m.number)
            first_ids = [l.id for l in sorted(first_module.lessons, key=lambda l: l.number)][:FOUNDATIONAL_LESSONS]
            foundational = [l for l in open_lessons if l.module_id == first_module.id and l.lesson_id in first_ids]

        foundational_keys = {l.key for l in foundational}
        others = sorted(
            (l for l in open_lessons if l.key not in foundational_keys),
            key=lambda l: (l.module_number, l.lesson_number),
        )
        chosen = (foundational + others)[:STRENGTHEN_CORE_LESSONS]

        lessons = [
            ShelfLesson(id=l.key, title=l.title, url=l.url, module_title=l.module_title, domain_title=l.domain_title)
            for l in chosen
        ]
        cases = [
            ShelfCase(id=s.case_id, title=s.title, url=s.url)
            for s in catalog.related_simulations(domain.id)[:STRENGTHEN_CORE_CASES]
        ]
        if lessons or cases:
            shelves.append(
                StrengthenCoreShelf(
                    competency_name=catalog.competency_display_name(competency_key),
                    competency_key=competency_key,
                    domain_id=domain.id,
                    lessons=lessons,
                    cases=cases,
                )
            )
    return shelves


def recent_completed_domains(progress: list[ProgressRecord]) -> list[str]:
    """Domains of the most recently completed lessons, most recent first, without repeats."""
    completed = [p for p in progress if p.status == "completed"]
    completed.sort(key=lambda p: _ts(p.completed_at or p.updated_at), reverse=True)
    domains: list[str] = []
    for p in completed[:SPOTLIGHT_RECENT_LESSONS]:
        if p.domain_id and p.domain_id not in domains:
            domains.append(p.domain_id)
    return domains


def practice_spotlight(progress: list[ProgressRecord], catalog: Catalog) -> list[ContentItem]:
    domains = recent_completed_domains(progress)
    items: list[ContentItem] = []
    seen: set[str] = set()

    for domain_id in domains:
        for sim in catalog.related_simulations(domain_id)[:SPOTLIGHT_CASES_PER_DOMAIN]:
            if len(items) >= SPOTLIGHT_LIMIT:
                break
            if sim.case_id in seen:
                continue
            seen.add(sim.case_id)
            items.append(ContentItem(type="case", id=sim.case_id, title=sim.title, url=sim.url, reason=APPLY_REASON))

    if len(items) < SPOTLIGHT_LIMIT:
        lessons = catalog.all_lessons_flat()
        for domain_id in domains:
            for lesson in [l for l in lessons if l.domain_id == domain_id][:SPOTLIGHT_LESSONS_PER_DOMAIN]:
                if len(items) >= SPOTLIGHT_LIMIT:
                    break
                if lesson.key in seen:
                    continue
                seen.add(lesson.key)
                items.append(_lesson_item(lesson, STRENGTHEN_REASON))
            if len(items) >= SPOTLIGHT_LIMIT:
                break

    return items[:SPOTLIGHT_LIMIT]


def continue_year_path(completed_keys: Collection[str], catalog: Catalog) -> list[ContentItem]:
    path: list[ContentItem] = []
    for lesson in catalog.all_lessons_flat():
        if lesson.key in completed_keys:
            continue
        path.append(_lesson_item(lesson))
        if len(path) >= YEAR_PATH_LIMIT:
            break
    return path


def _lesson_for_article(article: ContentRecord, lessons: list[LessonRef]) -> LessonRef | None:
    for lesson in lessons:
        if (article.storage_path and lesson.lesson_id in article.storage_path) or article.id == lesson.lesson_id:
            return lesson
    return None


def new_content(cases: list[ContentRecord], articles: list[ContentRecord], catalog: Catalog) -> list[NewContentItem]:
    """Newest cases and lesson-backed articles; articles that map to no lesson are dropped."""
    items = [
        NewContentItem(type="case", id=c.id, title=c.title, url=simulation_url(c.id), created_at=c.created_at)
        for c in cases
    ]
    lessons = catalog.all_lessons_flat()
    for article in articles:
        lesson = _lesson_for_article(article, lessons)
        if lesson is not None:
            items.append(
                NewContentItem(type="lesson", id=lesson.key, title=article.title, url=lesson.url,
                               created_at=article.created_at)
            )
    items.sort(key=lambda i: _ts(i.created_at), reverse=True)
    return items[:NEW_CONTENT_LIMIT]


def popular_content(
    popular_lessons: list[PopularLesson],
    popular_simulations: list[PopularSimulation],
    catalog: Catalog,
) -> list[ContentItem]:
    """Lessons fill first; simulations top up the list, which is then capped."""
    items: list[ContentItem] = []
    for pop in popular_lessons:
        lesson = catalog.find_lesson(pop.domain_id, pop.module_id, pop.lesson_id)
        if lesson is not None and len(items) < POPULAR_LESSON_SLOTS:
            items.append(_lesson_item(lesson))
    for pop in popular_simulations:
        sim = catalog.find_simulation(pop.case_id)
        if sim is not None and len(items) < POPULAR_TOTAL_SLOTS:
            items.append(ContentItem(type="case", id=sim.case_id, title=sim.title, url=sim.url))
    return items[:POPULAR_LIMIT]


def domain_completions(completed_keys: Collection[str], catalog: Catalog) -> list[DomainCompletion]:
    lessons = catalog.all_lessons_flat()
    out: list[DomainCompletion] = []
    for domain in catalog.domains:
        keys = [l.key for l in lessons if l.domain_id == domain.id]
        done = sum(1 for key in keys if key in completed_keys)
        total = len(keys)
        out.append(
            DomainCompletion(
                domain_id=domain.id,
                domain_title=domain.title,
                completed=total > 0 and done == total,
                progress=round(done / total * 100) if total else 0,
            )
        )
    return out
