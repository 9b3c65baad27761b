from __future__ import annotations

from praxis.content.catalog import build_catalog, lesson_key


def test_catalog_flattens_in_canonical_order(catalog):
    lessons = catalog.all_lessons_flat()
    stats = catalog.stats()

    assert stats["total_domains"] == len(catalog.domains) == 10
    assert stats["total_lessons"] == len(lessons)
    assert lessons[0].key == "capital-allocation-ceo-as-investor-five-choices"
    assert lessons[0].url == "/library/curriculum/capital-allocation/ceo-as-investor/five-choices"
    order = [(catalog.domains.index(catalog.domain_by_id(l.domain_id)), l.module_number, l.lesson_number)
             for l in lessons]
    assert order == sorted(order)


def test_find_lesson_and_simulation(catalog):
    lesson = catalog.find_lesson("capital-allocation", "ceo-as-investor", "per-share-value")
    assert lesson is not None
    assert lesson.domain_title == "Mastery of Capital Allocation"
    assert catalog.find_lesson("capital-allocation", "ceo-as-investor", "missing") is None

    sim = catalog.find_simulation("cs_skill_01_asymmetric_warfare")
    assert sim.url == "/simulations/cs_skill_01_asymmetric_warfare/brief"
    assert catalog.find_simulation("nope") is None


def test_related_simulations_follow_tag_table(catalog):
    moat = {s.case_id for s in catalog.related_simulations("competitive-moat-architecture")}
    assert moat == {"cs_04_netflix_content_strategy_2019", "cs_skill_01_asymmetric_warfare"}

    crisis = {s.case_id for s in catalog.related_simulations("crisis-leadership-public-composure")}
    assert "cs_01_tesla_production_crisis_2018" in crisis
    assert "cs_03_airbnb_covid_crisis_2020" in crisis

    assert catalog.related_simulations("global-systems-thinking") == []
    assert catalog.related_simulations("unknown-domain") == []


def test_every_domain_resolves_related_simulations(catalog):
    for domain in catalog.domains:
        assert isinstance(catalog.related_simulations(domain.id), list)


def test_competency_mapping(catalog):
    assert catalog.domain_for_competency("financialAcumen") == "capital-allocation"
    assert catalog.competency_display_name("leadershipJudgment") == "Leadership Judgment"
    assert catalog.domain_for_competency("unknown") is None
    assert catalog.competency_display_name("unknown") == "unknown"


def test_build_catalog_from_config():
    catalog = build_catalog(
        [{"id": "d", "title": "D", "modules": [{"id": "m", "number": 1, "title": "M",
                                                 "lessons": [{"id": "l", "number": 1, "title": "L"}]}]}],
        [{"case_id": "c1", "title": "C1", "tags": ["x"]}, {"case_id": "c2", "title": "C2", "tags": ["y"]}],
        domain_case_tags={"d": ["y"]},
    )
    assert [s.case_id for s in catalog.related_simulations("d")] == ["c2"]
    assert catalog.all_lessons_flat()[0].key == lesson_key("d", "m", "l")
