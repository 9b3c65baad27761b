"""
Browse shelves: themed collections, whole-module collections and curated
learning paths with the user's completion.

Like the other shelves these are pure functions over the catalog and
already-fetched snapshots.
"""
from __future__ import annotations

from collections.abc import Collection

from praxis.content.catalog import Catalog, LessonRef, SimulationRef, lesson_key
from praxis.data.collections import THEMED_COLLECTIONS
from praxis.schemas.dashboard import (
    CollectionItem,
    ContentCollection,
    LearningPath,
    LearningPathStep,
    PathProgress,
)
from praxis.stores.base import LearningPathRecord, SimulationRecord

COLLECTION_ITEM_LIMIT = 8
THEME_CASE_LIMIT = 3
MIN_INTRODUCTIONS = 6
MIN_CROSS_DOMAIN = 6
MODULE_COLLECTION_LIMIT = 3
MIN_MODULE_LESSONS = 2
LEARNING_PATH_LIMIT = 6


def _lesson_item(lesson: LessonRef, completed_keys: Collection[str]) -> CollectionItem:
    return CollectionItem(
        type="lesson",
        id=lesson.key,
        title=lesson.title,
        url=lesson.url,
        module_title=lesson.module_title,
        domain_title=lesson.domain_title,
        completed=lesson.key in completed_keys,
    )


def _case_item(sim: SimulationRef) -> CollectionItem:
    return CollectionItem(type="case", id=sim.case_id, title=sim.title, url=sim.url)


def _matches_theme(lesson: LessonRef, theme: dict) -> bool:
    if lesson.domain_id in theme.get("domains", ()):
        return True
    text = f"{lesson.title} {lesson.module_title}".lower()
    return any(keyword in text for keyword in theme.get("keywords", ()))


def _theme_collection(theme: dict, catalog: Catalog, completed_keys: Collection[str]) -> ContentCollection | None:
    lessons = [l for l in catalog.all_lessons_flat() if _matches_theme(l, theme)]
    lessons = lessons[: theme.get("lesson_limit", COLLECTION_ITEM_LIMIT)]
    tags = set(theme.get("case_tags", ()))
    cases = [s for s in catalog.simulations if tags.intersection(s.tags)] if tags else []
    cases = cases[: theme.get("case_limit", THEME_CASE_LIMIT)]

    items = [_lesson_item(l, completed_keys) for l in lessons] + [_case_item(s) for s in cases]
    if not items:
        return None
    return ContentCollection(
        id=theme["id"],
        title=theme["title"],
        subtitle=theme["subtitle"],
        items=items[:COLLECTION_ITEM_LIMIT],
        view_all_href=theme.get("view_all_href"),
    )


def _domain_introductions(catalog: Catalog, completed_keys: Collection[str]) -> list[CollectionItem]:
    firsts: dict[str, LessonRef] = {}
    for lesson in catalog.all_lessons_flat():
        firsts.setdefault(lesson.domain_id, lesson)
    return [_lesson_item(l, completed_keys) for l in firsts.values()]


def _cross_domain_mix(catalog: Catalog, completed_keys: Collection[str]) -> list[CollectionItem]:
    """The first open lesson of each domain; fully completed domains are skipped."""
    picks: dict[str, LessonRef] = {}
    for lesson in catalog.all_lessons_flat():
        if lesson.key not in completed_keys:
            picks.setdefault(lesson.domain_id, lesson)
    return [_lesson_item(l, completed_keys) for l in picks.values()][:COLLECTION_ITEM_LIMIT]


def themed_collections(
    completed_keys: Collection[str],
    catalog: Catalog,
    themes: list[dict] | None = None,
) -> list[ContentCollection]:
    collections = []
    for theme in THEMED_COLLECTIONS if themes is None else themes:
        collection = _theme_collection(theme, catalog, completed_keys)
        if collection is not None:
            collections.append(collection)

    introductions = _domain_introductions(catalog, completed_keys)
    if len(introductions) >= MIN_INTRODUCTIONS:
        collections.append(
            ContentCollection(
                id="domain-introductions",
                title="Start Here: Domain Introductions",
                subtitle="Quick overviews of each learning domain",
                items=introductions[:COLLECTION_ITEM_LIMIT],
                view_all_href="/library/curriculum",
            )
        )

    if catalog.simulations:
        collections.append(
            ContentCollection(
                id="case-studies-collection",
                title="Interactive Case Studies",
                subtitle="Apply your learning in real-world scenarios",
                items=[_case_item(s) for s in catalog.simulations[:COLLECTION_ITEM_LIMIT]],
                view_all_href="/simulations",
            )
        )

    mix = _cross_domain_mix(catalog, completed_keys)
    if len(mix) >= MIN_CROSS_DOMAIN:
        collections.append(
            ContentCollection(
                id="cross-domain-explore",
                title="Explore Across Domains",
                subtitle="A mix of lessons from different learning areas",
                items=mix,
                view_all_href="/library/curriculum",
            )
        )
    return collections


def module_collections(
    completed_keys: Collection[str],
    catalog: Catalog,
    limit: int = MODULE_COLLECTION_LIMIT,
) -> list[ContentCollection]:
    """Whole modules in catalog order, skipping modules with fewer than two lessons."""
    by_module: dict[tuple[str, str], list[LessonRef]] = {}
    for lesson in catalog.all_lessons_flat():
        by_module.setdefault((lesson.domain_id, lesson.module_id), []).append(lesson)

    collections = []
    for (domain_id, module_id), lessons in by_module.items():
        if len(lessons) < MIN_MODULE_LESSONS:
            continue
        first = lessons[0]
        collections.append(
            ContentCollection(
                id=f"module-{domain_id}-{module_id}",
                title=first.module_title,
                subtitle=f"Complete module from {first.domain_title}",
                items=[_lesson_item(l, completed_keys) for l in lessons],
                view_all_href=f"/library/curriculum/{domain_id}/{module_id}",
            )
        )
        if len(collections) >= limit:
            break
    return collections


def learning_paths(
    paths: list[LearningPathRecord],
    completed_keys: Collection[str],
    completed_simulations: list[SimulationRecord],
    catalog: Catalog,
    limit: int = LEARNING_PATH_LIMIT,
) -> list[LearningPath]:
    """The newest curated paths with per-path completion.

    Every step counts towards the total, including steps that no longer
    resolve against the catalog; those are shown with their raw id.
    """
    completed_cases = {s.case_id for s in completed_simulations}
    out = []
    for path in paths[:limit]:
        steps: list[LearningPathStep] = []
        for item in path.items:
            if item.type == "lesson":
                key = lesson_key(item.domain_id, item.module_id or "", item.lesson_id or "")
                lesson = catalog.find_lesson(item.domain_id, item.module_id or "", item.lesson_id or "")
                steps.append(
                    LearningPathStep(
                        type="lesson",
                        id=key,
                        title=lesson.title if lesson else (item.lesson_id or key),
                        url=lesson.url if lesson else None,
                        completed=key in completed_keys,
                    )
                )
            elif item.type == "case" and item.case_id:
                sim = catalog.find_simulation(item.case_id)
                steps.append(
                    LearningPathStep(
                        type="case",
                        id=item.case_id,
                        title=sim.title if sim else item.case_id,
                        url=sim.url if sim else None,
                        completed=item.case_id in completed_cases,
                    )
                )

        total = len(path.items)
        done = sum(1 for step in steps if step.completed)
        out.append(
            LearningPath(
                id=path.id,
                title=path.title,
                description=path.description,
                duration=path.duration,
                items=steps,
                progress=PathProgress(
                    completed=done,
                    total=total,
                    percentage=round(done / total * 100) if total else 0,
                ),
            )
        )
    return out
