"""
Dashboard assembly.

Two concurrent fetch batches (profile-level, then per-user and catalog data)
feed a set of independent shelf derivations. Every fetch and every shelf is
isolated: a failure is logged, counted, and replaced by that slot's empty
default, so the call always returns a complete ``DashboardData``.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol

from praxis.content.catalog import Catalog
from praxis.core.logging import DOMAIN_DASHBOARD, get_domain_logger
from praxis.core.resilience import derive_or_default, fetch_or_default, settle_all
from praxis.core.settings import settings
from praxis.dashboard import activity, collections, shelves
from praxis.dashboard.roadmap import build_roadmap
from praxis.schemas.dashboard import DashboardData, Recommendation, Roadmap, WeeklyGoal
from praxis.stores.base import LearningStore


class Recommender(Protocol):
    async def get_smart_recommendations(self, user_id: str) -> Recommendation: ...


logger = get_domain_logger(__name__, DOMAIN_DASHBOARD)


async def _empty_list() -> list:
    return []


async def assemble_dashboard_data(
    user_id: str,
    store: LearningStore,
    catalog: Catalog,
    recommender: Recommender,
    now: datetime | None = None,
) -> DashboardData:
    now = now or datetime.now(timezone.utc)
    timeout = settings.source_fetch_timeout_seconds

    def fetch(label, factory, default):
        return fetch_or_default(label, factory, default, timeout_seconds=timeout)

    # Profile batch
    residency, raw_scores, recommendation = await settle_all(
        fetch("residency", lambda: store.get_current_residency(user_id), None),
        fetch("aggregate_scores", lambda: store.get_aggregate_scores(user_id), None),
        fetch("recommendation", lambda: recommender.get_smart_recommendations(user_id), Recommendation()),
    )

    recommendation = derive_or_default(
        "recommendation", lambda: Recommendation.model_validate(recommendation), Recommendation()
    )
    scores = derive_or_default("aggregate_scores", lambda: shelves.scored_competencies(raw_scores), None)

    # Data batch
    since = now - timedelta(days=settings.new_content_window_days)
    limit = settings.recent_content_limit
    (
        residency_article_ids,
        completed_article_ids,
        completed_simulations,
        in_progress_lessons,
        in_progress_simulations,
        lesson_progress,
        recent_articles,
        recent_simulations,
        history,
        popular_lessons,
        popular_simulations,
        latest_cases,
        latest_articles,
        profile,
        debriefs,
        curated_paths,
    ) = await settle_all(
        fetch(
            "residency_articles",
            (lambda: store.list_residency_article_ids(residency)) if residency else _empty_list,
            [],
        ),
        fetch("completed_articles", lambda: store.list_completed_article_ids(user_id), []),
        fetch("completed_simulations", lambda: store.list_completed_simulations(user_id), []),
        fetch("in_progress_lessons", lambda: store.list_in_progress_lessons(user_id, 5), []),
        fetch("in_progress_simulations", lambda: store.list_in_progress_simulations(user_id, 5), []),
        fetch("lesson_progress", lambda: store.list_lesson_progress(user_id), []),
        fetch("recent_articles_completed", lambda: store.list_recent_completed_articles(user_id, 5), []),
        fetch("recent_simulations", lambda: store.list_recent_simulations(user_id, 3), []),
        fetch("progress_history", lambda: store.list_progress_history(user_id), []),
        fetch("popular_lessons", lambda: store.list_popular_lessons(settings.popular_lessons_limit), []),
        fetch("popular_simulations", lambda: store.list_popular_simulations(settings.popular_simulations_limit), []),
        fetch("recent_cases", lambda: store.list_recent_cases(since, limit), []),
        fetch("recent_articles", lambda: store.list_recent_articles(since, limit), []),
        fetch("profile", lambda: store.get_profile(user_id), None),
        fetch("debriefs", lambda: store.list_debriefs(user_id), []),
        fetch("learning_paths", store.list_learning_paths, []),
    )

    completed_keys = derive_or_default(
        "completed_keys", lambda: shelves.completed_lesson_keys(lesson_progress), set()
    )
    in_progress_keys = derive_or_default(
        "in_progress_keys", lambda: shelves.in_progress_lesson_keys(lesson_progress), set()
    )
    current_streak, longest_streak = derive_or_default(
        "streaks", lambda: activity.compute_streaks(history, now), (0, 0)
    )

    data = DashboardData(
        recommendation=recommendation,
        residency_data=derive_or_default(
            "residency_data",
            lambda: shelves.residency_summary(
                residency, residency_article_ids, completed_article_ids, completed_simulations, catalog
            ),
            None,
        ),
        current_streak=current_streak,
        longest_streak=longest_streak,
        recent_activities=derive_or_default(
            "recent_activities", lambda: activity.recent_activities(recent_articles, recent_simulations), []
        ),
        aggregate_scores=scores,
        jump_back_in_items=derive_or_default(
            "jump_back_in",
            lambda: shelves.jump_back_in(in_progress_lessons, in_progress_simulations, catalog),
            [],
        ),
        strengthen_core_shelves=derive_or_default(
            "strengthen_core", lambda: shelves.strengthen_core(scores, completed_keys, catalog), []
        ),
        new_content=derive_or_default(
            "new_content", lambda: shelves.new_content(latest_cases, latest_articles, catalog), []
        ),
        popular_content=derive_or_default(
            "popular_content",
            lambda: shelves.popular_content(popular_lessons, popular_simulations, catalog),
            [],
        ),
        practice_spotlight=derive_or_default(
            "practice_spotlight", lambda: shelves.practice_spotlight(lesson_progress, catalog), []
        ),
        continue_year_path=derive_or_default(
            "continue_year_path", lambda: shelves.continue_year_path(completed_keys, catalog), []
        ),
        roadmap=derive_or_default(
            "roadmap", lambda: build_roadmap(catalog, completed_keys, in_progress_keys), Roadmap()
        ),
        weekly_goal=derive_or_default(
            "weekly_goal",
            lambda: activity.compute_weekly_goal(history, profile, now, settings.default_weekly_target_hours),
            WeeklyGoal(target_hours=settings.default_weekly_target_hours),
        ),
        latest_key_insight=derive_or_default(
            "latest_key_insight", lambda: activity.latest_key_insight(debriefs), None
        ),
        learning_track=derive_or_default("learning_track", lambda: activity.profile_learning_track(profile), None),
        domain_completions=derive_or_default(
            "domain_completions", lambda: shelves.domain_completions(completed_keys, catalog), []
        ),
        themed_collections=derive_or_default(
            "themed_collections", lambda: collections.themed_collections(completed_keys, catalog), []
        ),
        module_collections=derive_or_default(
            "module_collections", lambda: collections.module_collections(completed_keys, catalog), []
        ),
        learning_paths=derive_or_default(
            "learning_paths",
            lambda: collections.learning_paths(curated_paths, completed_keys, completed_simulations, catalog),
            [],
        ),
    )
    logger.debug(
        "Assembled dashboard user=%s roadmap=%d/%d jump_back_in=%d",
        user_id,
        data.roadmap.completed_count,
        data.roadmap.total_lessons,
        len(data.jump_back_in_items),
    )
    return data
