from __future__ import annotations

import random

from praxis.content.catalog import build_catalog
from praxis.dashboard.roadmap import build_roadmap


def test_empty_progress_points_at_first_lesson(catalog):
    roadmap = build_roadmap(catalog, set(), set())
    first = catalog.all_lessons_flat()[0]

    assert roadmap.completed_count == 0
    assert roadmap.total_lessons == len(catalog.all_lessons_flat())
    assert roadmap.percent_complete == 0
    assert roadmap.next_lesson is not None
    assert roadmap.next_lesson.id == first.key
    assert roadmap.next_lesson.url == "/library/curriculum/capital-allocation/ceo-as-investor/five-choices"
    assert [s.domain_id for s in roadmap.sections] == [d.id for d in catalog.domains]


def test_next_lesson_is_first_not_completed_in_canonical_order(catalog):
    lessons = catalog.all_lessons_flat()
    rng = random.Random(7)
    for _ in range(25):
        completed = {l.key for l in lessons if rng.random() < 0.6}
        roadmap = build_roadmap(catalog, completed, set())
        expected = next((l for l in lessons if l.key not in completed), None)
        assert roadmap.completed_count == len(completed)
        if expected is None:
            assert roadmap.next_lesson is None
        else:
            assert roadmap.next_lesson.id == expected.key


def test_everything_completed_has_no_next_lesson(catalog):
    completed = {l.key for l in catalog.all_lessons_flat()}
    roadmap = build_roadmap(catalog, completed, set())
    assert roadmap.next_lesson is None
    assert roadmap.completed_count == roadmap.total_lessons
    assert roadmap.percent_complete == 100


def test_in_progress_lesson_can_be_next_and_is_tagged(catalog):
    first, second = catalog.all_lessons_flat()[:2]
    roadmap = build_roadmap(catalog, {first.key}, {second.key})
    module_lessons = roadmap.sections[0].modules[0].lessons

    assert module_lessons[0].status == "completed"
    assert module_lessons[1].status == "in_progress"
    assert module_lessons[2].status == "not_started"
    assert roadmap.next_lesson.id == second.key


def test_modules_and_lessons_walk_by_number_not_declaration_order():
    curriculum = [
        {
            "id": "d1",
            "title": "Domain One",
            "modules": [
                {"id": "m2", "number": 2, "title": "Second", "lessons": [{"id": "x", "number": 1, "title": "X"}]},
                {
                    "id": "m1",
                    "number": 1,
                    "title": "First",
                    "lessons": [
                        {"id": "b", "number": 2, "title": "B"},
                        {"id": "a", "number": 1, "title": "A"},
                    ],
                },
            ],
        }
    ]
    catalog = build_catalog(curriculum, [])
    roadmap = build_roadmap(catalog, {"d1-m1-a"}, set())

    assert [m.id for m in roadmap.sections[0].modules] == ["m1", "m2"]
    assert [l.lesson_id for l in roadmap.sections[0].modules[0].lessons] == ["a", "b"]
    assert roadmap.next_lesson.id == "d1-m1-b"
    assert roadmap.percent_complete == 33
