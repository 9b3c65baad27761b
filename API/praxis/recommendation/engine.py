"""
Smart recommendation ranking.

Candidates are produced in priority order (weak competency remediation,
simulations for finished modules, then the curriculum's next lesson),
de-duplicated, and split into one primary pick plus a few alternates.
Storage errors propagate; the dashboard decides how to degrade.
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

from praxis.content.catalog import Catalog, LessonRef, lesson_key
from praxis.core.logging import DOMAIN_RECOMMENDATION, get_domain_logger
from praxis.core.settings import settings
from praxis.schemas.dashboard import ContentPointer, Recommendation
from praxis.stores.base import LearningStore, ProgressRecord

logger = get_domain_logger(__name__, DOMAIN_RECOMMENDATION)

MAX_ALTERNATES = 3
CONTINUE_REASON = "Continue your curriculum"


def _aware(ts: datetime) -> datetime:
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def _lesson_pointer(lesson: LessonRef, reason: str, competency_name: str | None = None) -> ContentPointer:
    return ContentPointer(
        type="lesson",
        id=lesson.key,
        title=lesson.title,
        url=lesson.url,
        reason=reason,
        competency_name=competency_name,
        domain_id=lesson.domain_id,
        module_id=lesson.module_id,
        lesson_id=lesson.lesson_id,
    )


class RecommendationEngine:
    def __init__(
        self,
        store: LearningStore,
        catalog: Catalog,
        *,
        cooldown_hours: int | None = None,
        weak_threshold: float | None = None,
    ):
        self.store = store
        self.catalog = catalog
        self.cooldown = timedelta(
            hours=settings.recommendation_cooldown_hours if cooldown_hours is None else cooldown_hours
        )
        self.weak_threshold = settings.weak_competency_threshold if weak_threshold is None else weak_threshold

    def _cooled_down_keys(self, progress: list[ProgressRecord], now: datetime) -> set[str]:
        """Lessons touched within the cooldown window are never recommended."""
        cutoff = now - self.cooldown
        return {
            lesson_key(p.domain_id, p.module_id, p.lesson_id)
            for p in progress
            if p.updated_at is not None and _aware(p.updated_at) >= cutoff
        }

    def _weak_competency_candidates(
        self, scores: dict[str, float] | None, blocked: set[str]
    ) -> list[ContentPointer]:
        if not scores:
            return []
        weak = sorted(
            (
                (key, value)
                for key, value in scores.items()
                if isinstance(value, (int, float)) and 0 < value < self.weak_threshold
            ),
            key=lambda pair: pair[1],
        )
        out: list[ContentPointer] = []
        lessons = self.catalog.all_lessons_flat()
        for competency_key, _ in weak:
            domain_id = self.catalog.domain_for_competency(competency_key)
            if not domain_id:
                continue
            name = self.catalog.competency_display_name(competency_key)
            lesson = next((l for l in lessons if l.domain_id == domain_id and l.key not in blocked), None)
            if lesson is not None:
                out.append(_lesson_pointer(lesson, f"Strengthen {name}", competency_name=name))
        return out

    def _completed_module_candidates(self, completed: set[str], completed_cases: set[str]) -> list[ContentPointer]:
        out: list[ContentPointer] = []
        for domain in self.catalog.domains:
            for module in sorted(domain.modules, key=lambda m: m.number):
                keys = [lesson_key(domain.id, module.id, l.id) for l in module.lessons]
                if not keys or not all(k in completed for k in keys):
                    continue
                for sim in self.catalog.related_simulations(domain.id):
                    if sim.case_id in completed_cases:
                        continue
                    out.append(
                        ContentPointer(
                            type="case",
                            id=sim.case_id,
                            title=sim.title,
                            url=sim.url,
                            reason=f"Apply {module.title} in a simulation",
                            domain_id=domain.id,
                            module_id=module.id,
                            case_id=sim.case_id,
                        )
                    )
        return out

    def _next_lesson_candidates(self, blocked: set[str], limit: int) -> list[ContentPointer]:
        out: list[ContentPointer] = []
        for lesson in self.catalog.all_lessons_flat():
            if lesson.key in blocked:
                continue
            out.append(_lesson_pointer(lesson, CONTINUE_REASON))
            if len(out) >= limit:
                break
        return out

    async def get_smart_recommendations(self, user_id: str, now: datetime | None = None) -> Recommendation:
        now = now or datetime.now(timezone.utc)
        progress, completed_sims, scores = await asyncio.gather(
            self.store.list_lesson_progress(user_id),
            self.store.list_completed_simulations(user_id),
            self.store.get_aggregate_scores(user_id),
        )

        completed = {lesson_key(p.domain_id, p.module_id, p.lesson_id) for p in progress if p.status == "completed"}
        blocked = completed | self._cooled_down_keys(progress, now)
        completed_cases = {s.case_id for s in completed_sims}

        candidates = (
            self._weak_competency_candidates(scores, blocked)
            + self._completed_module_candidates(completed, completed_cases)
            + self._next_lesson_candidates(blocked, MAX_ALTERNATES + 1)
        )

        ranked: list[ContentPointer] = []
        seen: set[str] = set()
        for candidate in candidates:
            if candidate.id in seen:
                continue
            seen.add(candidate.id)
            ranked.append(candidate)

        logger.debug("user=%s candidates=%d ranked=%d", user_id, len(candidates), len(ranked))
        if not ranked:
            return Recommendation()
        return Recommendation(primary=ranked[0], alternates=ranked[1 : 1 + MAX_ALTERNATES])
