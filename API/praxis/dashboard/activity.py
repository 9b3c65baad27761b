"""Time-based dashboard figures: weekly goal, streaks, latest insight and recent activity."""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from praxis.schemas.dashboard import RecentActivity, WeeklyGoal
from praxis.stores.base import ArticleActivity, Debrief, ProfileSettings, ProgressRecord, SimulationRecord

_WEEKLY_COMMITMENT = re.compile(r"Weekly commitment:\s*(\d+(?:\.\d+)?)\s*hours?", re.IGNORECASE)


def _as_local(ts: datetime, now: datetime) -> datetime:
    """Express ``ts`` in the timezone of ``now``; naive values are taken as already local."""
    if ts.tzinfo is None or now.tzinfo is None:
        return ts.replace(tzinfo=now.tzinfo)
    return ts.astimezone(now.tzinfo)


def _sort_ts(ts: datetime | None) -> float:
    return ts.timestamp() if ts is not None else float("-inf")


def week_start(now: datetime) -> datetime:
    """Monday 00:00 of the week containing ``now``."""
    monday = now - timedelta(days=now.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def resolve_weekly_target(profile: ProfileSettings | None, default_target: float) -> float:
    if profile is not None:
        if profile.weekly_target_hours and profile.weekly_target_hours > 0:
            return float(profile.weekly_target_hours)
        if profile.bio:
            match = _WEEKLY_COMMITMENT.search(profile.bio)
            if match and float(match.group(1)) > 0:
                return float(match.group(1))
    return float(default_target)


def profile_learning_track(profile: ProfileSettings | None) -> str | None:
    track = profile.learning_track if profile is not None else None
    return (track.strip() or None) if isinstance(track, str) else None


def compute_weekly_goal(
    history: list[ProgressRecord],
    profile: ProfileSettings | None,
    now: datetime,
    default_target: float = 2.0,
) -> WeeklyGoal:
    target = resolve_weekly_target(profile, default_target)
    start = week_start(now)
    seconds = sum(
        max(0, p.time_spent_seconds or 0)
        for p in history
        if p.updated_at is not None and _as_local(p.updated_at, now) >= start
    )
    current = round(seconds / 3600, 1)
    progress = min(100, round(current / target * 100)) if target > 0 else 0
    return WeeklyGoal(target_hours=target, current_hours=current, progress=progress)


def completion_dates(history: list[ProgressRecord], now: datetime) -> set[date]:
    return {_as_local(p.completed_at, now).date() for p in history if p.completed_at is not None}


def compute_streaks(history: list[ProgressRecord], now: datetime) -> tuple[int, int]:
    """Return (current, longest) runs of consecutive completion days.

    The current streak must end today; a gap today means 0.
    """
    days = completion_dates(history, now)
    if not days:
        return 0, 0

    current = 0
    cursor = now.date()
    while cursor in days:
        current += 1
        cursor -= timedelta(days=1)

    longest = 0
    run = 0
    previous: date | None = None
    for day in sorted(days):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return current, longest


def latest_key_insight(debriefs: list[Debrief]) -> str | None:
    if not debriefs:
        return None
    newest = max(debriefs, key=lambda d: _sort_ts(d.created_at))
    summary = (newest.summary or "").strip()
    if not summary:
        return None
    first = summary.split(".", 1)[0].strip()
    return first or None


def recent_activities(
    articles: list[ArticleActivity],
    simulations: list[SimulationRecord],
    limit: int = 5,
) -> list[RecentActivity]:
    items = [
        RecentActivity(id=a.article_id, type="article", title=a.title, completed_at=a.completed_at,
                       competency=a.competency)
        for a in articles
    ] + [
        RecentActivity(id=s.id, type="simulation", title=s.case_title, completed_at=s.created_at)
        for s in simulations
    ]
    items.sort(key=lambda i: _sort_ts(i.completed_at), reverse=True)
    return items[:limit]
