from __future__ import annotations

from datetime import timedelta

import pytest

from praxis.core.errors import DataSourceError
from praxis.recommendation.engine import RecommendationEngine
from praxis.stores.base import ProgressRecord
from praxis.stores.memory import InMemoryLearningStore


def _progress(lesson, status, when) -> ProgressRecord:
    return ProgressRecord(
        user_id="u1",
        domain_id=lesson.domain_id,
        module_id=lesson.module_id,
        lesson_id=lesson.lesson_id,
        status=status,
        completed_at=when if status == "completed" else None,
        updated_at=when,
    )


@pytest.mark.asyncio
async def test_new_user_is_pointed_at_first_lesson(store, catalog, now):
    result = await RecommendationEngine(store, catalog).get_smart_recommendations("u1", now=now)
    lessons = catalog.all_lessons_flat()

    assert result.primary.type == "lesson"
    assert result.primary.id == lessons[0].key
    assert result.primary.reason == "Continue your curriculum"
    assert [a.id for a in result.alternates] == [l.key for l in lessons[1:4]]


@pytest.mark.asyncio
async def test_weak_competency_comes_first(store, catalog, now):
    store.aggregate_scores["u1"] = {"riskManagement": 1.2, "financialAcumen": 4.5}
    result = await RecommendationEngine(store, catalog).get_smart_recommendations("u1", now=now)

    assert result.primary.domain_id == "crisis-leadership-public-composure"
    assert result.primary.competency_name == "Risk Management"
    assert result.primary.reason == "Strengthen Risk Management"


@pytest.mark.asyncio
async def test_completed_module_recommends_related_case(store, catalog, now):
    module_lessons = [l for l in catalog.all_lessons_flat() if l.module_id == "ceo-as-investor"]
    store.lesson_progress.extend(_progress(l, "completed", now - timedelta(days=3)) for l in module_lessons)
    result = await RecommendationEngine(store, catalog).get_smart_recommendations("u1", now=now)

    assert result.primary.type == "case"
    assert result.primary.case_id in {s.case_id for s in catalog.related_simulations("capital-allocation")}
    assert result.primary.url.startswith("/simulations/")
    assert len(result.alternates) <= 3


@pytest.mark.asyncio
async def test_recently_touched_lessons_are_cooled_down(store, catalog, now):
    first = catalog.all_lessons_flat()[0]
    store.lesson_progress.append(_progress(first, "in_progress", now - timedelta(hours=1)))
    result = await RecommendationEngine(store, catalog, cooldown_hours=24).get_smart_recommendations("u1", now=now)

    ids = [result.primary.id] + [a.id for a in result.alternates]
    assert first.key not in ids


@pytest.mark.asyncio
async def test_recommendations_are_unique(store, catalog, now):
    store.aggregate_scores["u1"] = {"financialAcumen": 1.0}
    result = await RecommendationEngine(store, catalog).get_smart_recommendations("u1", now=now)
    ids = [result.primary.id] + [a.id for a in result.alternates]
    assert len(ids) == len(set(ids))


class BrokenStore(InMemoryLearningStore):
    async def list_lesson_progress(self, user_id):
        raise DataSourceError("lesson_progress", "connection refused")


@pytest.mark.asyncio
async def test_store_errors_propagate(catalog, now):
    with pytest.raises(DataSourceError):
        await RecommendationEngine(BrokenStore(), catalog).get_smart_recommendations("u1", now=now)
