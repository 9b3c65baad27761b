from __future__ import annotations

from collections.abc import Collection

from praxis.content.catalog import Catalog, lesson_key, lesson_url
from praxis.schemas.dashboard import NextLesson, Roadmap, RoadmapLesson, RoadmapModule, RoadmapSection


def lesson_status(key: str, completed_keys: Collection[str], in_progress_keys: Collection[str]) -> str:
    if key in completed_keys:
        return "completed"
    if key in in_progress_keys:
        return "in_progress"
    return "not_started"


def build_roadmap(catalog: Catalog, completed_keys: Collection[str], in_progress_keys: Collection[str]) -> Roadmap:
    """Walk the whole curriculum in canonical order and tag every lesson.

    ``next_lesson`` is the first lesson that is not completed; the walk still
    visits every lesson so the full section tree is emitted.
    """
    sections: list[RoadmapSection] = []
    next_lesson: NextLesson | None = None
    total = 0
    completed = 0

    for domain in catalog.domains:
        modules: list[RoadmapModule] = []
        for module in sorted(domain.modules, key=lambda m: m.number):
            lessons: list[RoadmapLesson] = []
            for lesson in sorted(module.lessons, key=lambda l: l.number):
                key = lesson_key(domain.id, module.id, lesson.id)
                status = lesson_status(key, completed_keys, in_progress_keys)
                url = lesson_url(domain.id, module.id, lesson.id)
                total += 1
                if status == "completed":
                    completed += 1
                elif next_lesson is None:
                    next_lesson = NextLesson(
                        id=key,
                        domain_id=domain.id,
                        module_id=module.id,
                        lesson_id=lesson.id,
                        title=lesson.title,
                        module_title=module.title,
                        domain_title=domain.title,
                        url=url,
                    )
                lessons.append(
                    RoadmapLesson(id=key, lesson_id=lesson.id, title=lesson.title, number=lesson.number, url=url,
                                  status=status)
                )
            modules.append(RoadmapModule(id=module.id, title=module.title, number=module.number, lessons=lessons))
        sections.append(RoadmapSection(domain_id=domain.id, domain_title=domain.title, modules=modules))

    return Roadmap(
        sections=sections,
        next_lesson=next_lesson,
        total_lessons=total,
        completed_count=completed,
        percent_complete=round(completed / total * 100) if total else 0,
    )
