from __future__ import annotations

from praxis.dashboard.collections import learning_paths, module_collections, themed_collections
from praxis.stores.base import LearningPathItemRecord, LearningPathRecord, SimulationRecord, default_learning_paths


def _by_id(collections):
    return {c.id: c for c in collections}


def test_themes_pull_domain_and_keyword_lessons(catalog):
    themes = _by_id(themed_collections(set(), catalog))

    dealmaking = themes["m-and-a-essentials"]
    assert all(i.type == "lesson" for i in dealmaking.items)
    assert [i.id for i in dealmaking.items] == [
        l.key for l in catalog.all_lessons_flat() if l.domain_id == "high-stakes-dealmaking-integration"
    ]
    assert dealmaking.view_all_href == "/library/curriculum/high-stakes-dealmaking-integration"

    financial = themes["financial-acumen-quickstart"]
    # "Discounted Cash Flow" sits outside the theme's domain but matches a keyword.
    assert "capital-allocation-calculating-intrinsic-value-dcf-for-ceo" in {i.id for i in financial.items}
    assert len(financial.items) <= 8


def test_crisis_playbook_mixes_lessons_and_tagged_cases(catalog):
    crisis = _by_id(themed_collections(set(), catalog))["crisis-leadership-playbook"]

    lessons = [i for i in crisis.items if i.type == "lesson"]
    cases = [i for i in crisis.items if i.type == "case"]
    assert len(lessons) == 6
    assert [c.id for c in cases] == [
        "cs_unit_economics_crisis",
        "cs_01_tesla_production_crisis_2018",
    ]
    assert len(crisis.items) == 8


def test_built_in_collections_follow_the_themes(catalog):
    ids = [c.id for c in themed_collections(set(), catalog)]
    assert ids[-3:] == ["domain-introductions", "case-studies-collection", "cross-domain-explore"]

    introductions = _by_id(themed_collections(set(), catalog))["domain-introductions"]
    assert len(introductions.items) == 8
    assert introductions.items[0].id == catalog.all_lessons_flat()[0].key


def test_cross_domain_mix_moves_past_completed_lessons(catalog):
    first, second = catalog.all_lessons_flat()[:2]
    mix = _by_id(themed_collections({first.key}, catalog))["cross-domain-explore"]

    assert mix.items[0].id == second.key
    assert all(not i.completed for i in mix.items)


def test_theme_without_matches_is_omitted(catalog):
    theme = {"id": "empty", "title": "Empty", "subtitle": "", "keywords": ["no-such-topic"]}
    ids = [c.id for c in themed_collections(set(), catalog, themes=[theme])]
    assert "empty" not in ids


def test_completed_lessons_are_flagged(catalog):
    lesson = catalog.all_lessons_flat()[0]
    intro = _by_id(themed_collections({lesson.key}, catalog))["domain-introductions"]
    assert intro.items[0].completed is True
    assert intro.items[1].completed is False


def test_module_collections_take_whole_modules_in_order(catalog):
    collections = module_collections(set(), catalog)

    assert [c.id for c in collections] == [
        "module-capital-allocation-ceo-as-investor",
        "module-capital-allocation-calculating-intrinsic-value",
        "module-competitive-moat-architecture-foundational-theory",
    ]
    assert len(collections[0].items) == 3
    assert collections[0].subtitle == "Complete module from Mastery of Capital Allocation"
    assert collections[0].view_all_href == "/library/curriculum/capital-allocation/ceo-as-investor"


def test_learning_path_progress_counts_lessons_and_cases(catalog):
    path = next(p for p in default_learning_paths() if p.id == "crisis-ready-ceo")
    first_lesson = path.items[0]
    completed_keys = {f"{first_lesson.domain_id}-{first_lesson.module_id}-{first_lesson.lesson_id}"}
    sims = [
        SimulationRecord(id="s1", user_id="u1", case_id="cs_03_airbnb_covid_crisis_2020", case_title="Airbnb",
                         status="completed"),
    ]

    [result] = learning_paths([path], completed_keys, sims, catalog)

    assert result.progress.completed == 2
    assert result.progress.total == 4
    assert result.progress.percentage == 50
    assert [s.completed for s in result.items] == [True, False, True, False]
    assert result.items[2].url == "/simulations/cs_03_airbnb_covid_crisis_2020/brief"


def test_learning_path_keeps_unknown_steps_in_total(catalog):
    path = LearningPathRecord(
        id="legacy",
        title="Legacy",
        duration="1 week",
        items=[
            LearningPathItemRecord(type="lesson", domain_id="retired-domain", module_id="m", lesson_id="gone"),
            LearningPathItemRecord(type="case", domain_id="", case_id="cs_retired"),
        ],
    )
    [result] = learning_paths([path], set(), [], catalog)

    assert result.progress.total == 2
    assert result.progress.percentage == 0
    assert [s.title for s in result.items] == ["gone", "cs_retired"]
    assert all(s.url is None for s in result.items)


def test_learning_paths_are_capped(catalog):
    paths = [LearningPathRecord(id=f"p{i}", title=f"P{i}", duration="1 week") for i in range(9)]
    result = learning_paths(paths, set(), [], catalog)

    assert [p.id for p in result] == [f"p{i}" for i in range(6)]
    assert result[0].progress.percentage == 0


def test_built_in_paths_resolve_against_the_catalog(catalog):
    for path in default_learning_paths():
        for item in path.items:
            if item.type == "lesson":
                assert catalog.find_lesson(item.domain_id, item.module_id, item.lesson_id), item
            else:
                assert catalog.find_simulation(item.case_id), item
