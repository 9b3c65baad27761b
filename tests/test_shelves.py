from __future__ import annotations

from datetime import timedelta

from praxis.dashboard import shelves
from praxis.stores.base import (
    ContentRecord,
    PopularLesson,
    PopularSimulation,
    ProgressRecord,
    SimulationRecord,
)


def _progress(lesson, status="completed", **kwargs) -> ProgressRecord:
    return ProgressRecord(
        user_id="u1",
        domain_id=lesson.domain_id,
        module_id=lesson.module_id,
        lesson_id=lesson.lesson_id,
        status=status,
        **kwargs,
    )


def test_residency_summary_counts_year_articles(catalog):
    summary = shelves.residency_summary(
        1,
        ["a1", "a2", "a3"],
        ["a2", "a3", "other"],
        [SimulationRecord(id="s1", user_id="u1", case_id="c", case_title="C", status="completed")],
        catalog,
    )
    assert summary.title == "Year 1: The Operator's Residency"
    assert summary.articles_completed == 2
    assert summary.total_articles == 3
    assert summary.simulations_completed == 1
    assert summary.total_simulations == len(catalog.simulations)

    assert shelves.residency_summary(2, ["a1"], [], [], catalog).title == "Year 2: Business Acumen Core"
    assert shelves.residency_summary(None, ["a1"], [], [], catalog) is None
    assert shelves.residency_summary(1, [], [], [], catalog) is None


def test_jump_back_in_puts_saved_positions_first(catalog, now):
    lessons = catalog.all_lessons_flat()
    in_progress = [
        _progress(lessons[0], "in_progress", progress_percentage=40, updated_at=now - timedelta(hours=1)),
        _progress(lessons[1], "in_progress", progress_percentage=10, updated_at=now - timedelta(hours=5),
                  last_read_position={"scrollTop": 420}),
        _progress(lessons[2], "in_progress", updated_at=now - timedelta(hours=3),
                  last_read_position={"scrollTop": "bad"}),
        ProgressRecord(user_id="u1", domain_id="gone", module_id="gone", lesson_id="gone", status="in_progress",
                       updated_at=now),
    ]
    sims = [
        SimulationRecord(id="sim-1", user_id="u1", case_id="cs_05_zoom_security_crisis_2020", case_title="Zoom",
                         updated_at=now - timedelta(hours=2)),
    ]
    items = shelves.jump_back_in(in_progress, sims, catalog)

    assert [i.id for i in items] == [lessons[1].key, lessons[0].key, "sim-1", lessons[2].key]
    assert items[0].progress == 10
    assert items[2].type == "simulation"
    assert items[2].url == "/simulations/cs_05_zoom_security_crisis_2020/brief"
    assert items[2].progress is None


def test_jump_back_in_is_capped(catalog, now):
    lessons = catalog.all_lessons_flat()[:5]
    in_progress = [_progress(l, "in_progress", updated_at=now - timedelta(minutes=i)) for i, l in enumerate(lessons)]
    sims = [SimulationRecord(id=f"s{i}", user_id="u1", case_id="c", case_title="C", updated_at=now) for i in range(3)]
    assert len(shelves.jump_back_in(in_progress, sims, catalog)) == 5


def test_strengthen_core_caps_lessons_and_keeps_foundational_first(catalog):
    scores = {"financialAcumen": 1.5, "strategicThinking": 2.5, "marketAwareness": 4.0, "riskManagement": 0}
    result = shelves.strengthen_core(scores, set(), catalog)

    assert [s.competency_key for s in result] == ["financialAcumen", "strategicThinking"]
    capital = result[0]
    assert capital.domain_id == "capital-allocation"
    assert capital.competency_name == "Financial Acumen"
    assert 0 < len(capital.lessons) <= 8
    assert [l.id for l in capital.lessons[:3]] == [
        "capital-allocation-ceo-as-investor-five-choices",
        "capital-allocation-ceo-as-investor-per-share-value",
        "capital-allocation-ceo-as-investor-opportunity-cost",
    ]
    assert len(capital.cases) <= 3
    assert "cs_unit_economics_crisis" in [c.id for c in capital.cases]


def test_strengthen_core_skips_completed_foundational_lessons(catalog):
    first = catalog.all_lessons_flat()[0]
    result = shelves.strengthen_core({"financialAcumen": 1.0}, {first.key}, catalog)
    ids = [l.id for l in result[0].lessons]
    assert first.key not in ids
    assert ids[0] == "capital-allocation-ceo-as-investor-per-share-value"


def test_strengthen_core_empty_without_scores(catalog):
    assert shelves.strengthen_core(None, set(), catalog) == []
    assert shelves.strengthen_core({"financialAcumen": 0.0}, set(), catalog) == []


def test_practice_spotlight_cases_then_lesson_backfill(catalog, now):
    lessons = [l for l in catalog.all_lessons_flat() if l.domain_id == "capital-allocation"]
    progress = [_progress(lessons[0], completed_at=now)]
    items = shelves.practice_spotlight(progress, catalog)

    cases = [i for i in items if i.type == "case"]
    backfill = [i for i in items if i.type == "lesson"]
    assert len(cases) == 2
    assert all(i.reason == "Apply what you've learned" for i in cases)
    assert [i.id for i in backfill] == [l.key for l in lessons[:3]]
    assert all(i.reason == "Strengthen your understanding" for i in backfill)
    assert len(items) <= 6


def test_practice_spotlight_orders_domains_by_recency_and_dedupes(catalog, now):
    capital = next(l for l in catalog.all_lessons_flat() if l.domain_id == "capital-allocation")
    crisis = next(l for l in catalog.all_lessons_flat() if l.domain_id == "crisis-leadership-public-composure")
    progress = [
        _progress(capital, completed_at=now - timedelta(days=2)),
        _progress(crisis, completed_at=now),
    ]
    items = shelves.practice_spotlight(progress, catalog)
    ids = [i.id for i in items]

    assert items[0].id == "cs_unit_economics_crisis"
    assert len(ids) == len(set(ids))
    assert len(items) == 6


def test_practice_spotlight_empty_without_completions(catalog):
    assert shelves.practice_spotlight([], catalog) == []


def test_continue_year_path_skips_completed(catalog):
    lessons = catalog.all_lessons_flat()
    path = shelves.continue_year_path({lessons[0].key, lessons[2].key}, catalog)
    assert [i.id for i in path] == [l.key for l in (lessons[1], *lessons[3:8])]


def test_new_content_maps_articles_to_lessons(catalog, now):
    cases = [ContentRecord(id="cs_new", title="New case", created_at=now - timedelta(days=2))]
    articles = [
        ContentRecord(id="a1", title="Per-share value", created_at=now - timedelta(days=1),
                      storage_path="curriculum/capital-allocation/per-share-value.md"),
        ContentRecord(id="five-choices", title="Five choices", created_at=now - timedelta(days=3)),
        ContentRecord(id="a3", title="Orphan", created_at=now, storage_path="misc/unknown.md"),
    ]
    items = shelves.new_content(cases, articles, catalog)

    assert [i.id for i in items] == [
        "capital-allocation-ceo-as-investor-per-share-value",
        "cs_new",
        "capital-allocation-ceo-as-investor-five-choices",
    ]
    assert items[0].title == "Per-share value"
    assert items[1].url == "/simulations/cs_new/brief"


def test_popular_content_lessons_first_then_capped(catalog):
    lessons = catalog.all_lessons_flat()[:8]
    popular_lessons = [
        PopularLesson(domain_id=l.domain_id, module_id=l.module_id, lesson_id=l.lesson_id, completions=20 - i)
        for i, l in enumerate(lessons)
    ]
    popular_sims = [PopularSimulation(case_id=s.case_id, completions=3) for s in catalog.simulations[:5]]

    items = shelves.popular_content(popular_lessons, popular_sims, catalog)
    assert len(items) == 8
    assert all(i.type == "lesson" for i in items)


def test_popular_content_simulations_top_up(catalog):
    lesson = catalog.all_lessons_flat()[0]
    popular_lessons = [
        PopularLesson(domain_id=lesson.domain_id, module_id=lesson.module_id, lesson_id=lesson.lesson_id),
        PopularLesson(domain_id="gone", module_id="gone", lesson_id="gone"),
    ]
    popular_sims = [
        PopularSimulation(case_id="cs_skill_02_second_order"),
        PopularSimulation(case_id="unknown_case"),
    ]
    items = shelves.popular_content(popular_lessons, popular_sims, catalog)
    assert [(i.type, i.id) for i in items] == [("lesson", lesson.key), ("case", "cs_skill_02_second_order")]


def test_domain_completions(catalog):
    capital = [l.key for l in catalog.all_lessons_flat() if l.domain_id == "capital-allocation"]
    moat = [l.key for l in catalog.all_lessons_flat() if l.domain_id == "competitive-moat-architecture"]
    result = {d.domain_id: d for d in shelves.domain_completions(set(capital) | set(moat[:3]), catalog)}

    assert result["capital-allocation"].completed is True
    assert result["capital-allocation"].progress == 100
    assert result["competitive-moat-architecture"].completed is False
    assert result["competitive-moat-architecture"].progress == round(3 / len(moat) * 100)
    assert result["global-systems-thinking"].progress == 0
