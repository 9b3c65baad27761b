"""Read-only content catalog: curriculum tree, flattened lessons and the simulation registry.

The catalog is built once from static data and shared across requests. Lookups
that the dashboard performs per item (lesson by key, simulation by case id) are
indexed up front.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from praxis.core.logging import DOMAIN_CATALOG, get_domain_logger
from praxis.data.case_studies import DOMAIN_CASE_TAGS, SIMULATIONS
from praxis.data.curriculum import COMPETENCY_DISPLAY_NAMES, COMPETENCY_TO_DOMAIN, CURRICULUM_DOMAINS

logger = get_domain_logger(__name__, DOMAIN_CATALOG)


def lesson_key(domain_id: str, module_id: str, lesson_id: str) -> str:
    return f"{domain_id}-{module_id}-{lesson_id}"


def lesson_url(domain_id: str, module_id: str, lesson_id: str) -> str:
    return f"/library/curriculum/{domain_id}/{module_id}/{lesson_id}"


def simulation_url(case_id: str) -> str:
    return f"/simulations/{case_id}/brief"


@dataclass(frozen=True)
class LessonRef:
    domain_id: str
    module_id: str
    lesson_id: str
    title: str
    module_title: str
    domain_title: str
    module_number: int
    lesson_number: int

    @property
    def key(self) -> str:
        return lesson_key(self.domain_id, self.module_id, self.lesson_id)

    @property
    def url(self) -> str:
        return lesson_url(self.domain_id, self.module_id, self.lesson_id)


@dataclass(frozen=True)
class SimulationRef:
    case_id: str
    title: str
    description: str = ""
    estimated_duration: int = 0
    difficulty: str = "intermediate"
    domain_id: str | None = None
    tags: tuple[str, ...] = ()

    @property
    def url(self) -> str:
        return simulation_url(self.case_id)


@dataclass(frozen=True)
class Lesson:
    id: str
    number: int
    title: str


@dataclass(frozen=True)
class Module:
    id: str
    number: int
    title: str
    lessons: tuple[Lesson, ...]


@dataclass(frozen=True)
class Domain:
    id: str
    title: str
    modules: tuple[Module, ...]

    @property
    def lesson_count(self) -> int:
        return sum(len(m.lessons) for m in self.modules)


@dataclass
class Catalog:
    domains: list[Domain]
    simulations: list[SimulationRef]
    domain_case_tags: dict[str, list[str]] = field(default_factory=dict)
    competency_domains: dict[str, str] = field(default_factory=dict)
    competency_names: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._domains_by_id = {d.id: d for d in self.domains}
        self._lessons = [
            LessonRef(
                domain_id=domain.id,
                module_id=module.id,
                lesson_id=lesson.id,
                title=lesson.title,
                module_title=module.title,
                domain_title=domain.title,
                module_number=module.number,
                lesson_number=lesson.number,
            )
            for domain in self.domains
            for module in sorted(domain.modules, key=lambda m: m.number)
            for lesson in sorted(module.lessons, key=lambda l: l.number)
        ]
        self._lessons_by_key = {l.key: l for l in self._lessons}
        self._simulations_by_id = {s.case_id: s for s in self.simulations}
        unknown = set(self.domain_case_tags) - set(self._domains_by_id)
        if unknown:
            logger.warning("Case tag table references unknown domains: %s", sorted(unknown))

    def all_lessons_flat(self) -> list[LessonRef]:
        """Every lesson in canonical (domain, module number, lesson number) order."""
        return list(self._lessons)

    def all_simulations(self) -> list[SimulationRef]:
        return list(self.simulations)

    def domain_by_id(self, domain_id: str) -> Domain | None:
        return self._domains_by_id.get(domain_id)

    def find_lesson(self, domain_id: str, module_id: str, lesson_id: str) -> LessonRef | None:
        return self._lessons_by_key.get(lesson_key(domain_id, module_id, lesson_id))

    def find_simulation(self, case_id: str) -> SimulationRef | None:
        return self._simulations_by_id.get(case_id)

    def related_simulations(self, domain_id: str) -> list[SimulationRef]:
        tags = set(self.domain_case_tags.get(domain_id, ()))
        if not tags:
            return []
        return [s for s in self.simulations if tags.intersection(s.tags)]

    def domain_for_competency(self, competency_key: str) -> str | None:
        return self.competency_domains.get(competency_key)

    def competency_display_name(self, competency_key: str) -> str:
        return self.competency_names.get(competency_key, competency_key)

    def stats(self) -> dict:
        return {
            "total_domains": len(self.domains),
            "total_modules": sum(len(d.modules) for d in self.domains),
            "total_lessons": len(self._lessons),
            "total_simulations": len(self.simulations),
        }


def build_catalog(
    curriculum: list[dict],
    simulations: list[dict],
    domain_case_tags: dict[str, list[str]] | None = None,
    competency_domains: dict[str, str] | None = None,
    competency_names: dict[str, str] | None = None,
) -> Catalog:
    domains = [
        Domain(
            id=d["id"],
            title=d["title"],
            modules=tuple(
                Module(
                    id=m["id"],
                    number=int(m["number"]),
                    title=m["title"],
                    lessons=tuple(
                        Lesson(id=l["id"], number=int(l["number"]), title=l["title"]) for l in m.get("lessons", [])
                    ),
                )
                for m in d.get("modules", [])
            ),
        )
        for d in curriculum
    ]
    sims = [
        SimulationRef(
            case_id=s["case_id"],
            title=s["title"],
            description=s.get("description", ""),
            estimated_duration=int(s.get("estimated_duration", 0)),
            difficulty=s.get("difficulty", "intermediate"),
            domain_id=s.get("domain_id"),
            tags=tuple(s.get("tags", ())),
        )
        for s in simulations
    ]
    return Catalog(
        domains=domains,
        simulations=sims,
        domain_case_tags=dict(domain_case_tags or {}),
        competency_domains=dict(competency_domains or {}),
        competency_names=dict(competency_names or {}),
    )


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    catalog = build_catalog(
        CURRICULUM_DOMAINS,
        SIMULATIONS,
        domain_case_tags=DOMAIN_CASE_TAGS,
        competency_domains=COMPETENCY_TO_DOMAIN,
        competency_names=COMPETENCY_DISPLAY_NAMES,
    )
    logger.info("Catalog loaded: %s", catalog.stats())
    return catalog
