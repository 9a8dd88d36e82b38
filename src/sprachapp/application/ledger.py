"""
Progress ledger: per-language daily statistics, XP and streaks.

Pure functions over immutable values; inputs are never mutated.
"""

from dataclasses import replace

from sprachapp.domain.constants import XP_CORRECT, XP_PER_LEVEL, XP_WRONG
from sprachapp.domain.models import Achievement, DailyStat, Lang, Ledger, Profile

from .clock import days_between


def advance_streak(profile: Profile, day_key: str) -> Profile:
    """
    Apply the day-boundary transition for activity on `day_key`.

    - Next calendar day after `last_active_day`: streak grows by one.
    - A gap of more than one day: streak restarts at 1.
    - Same day: unchanged.
    - A day before `last_active_day` (clock skew, restored backup): unchanged.
    """
    elapsed = days_between(profile.last_active_day, day_key)

    if elapsed <= 0:
        return profile
    if elapsed == 1:
        streak = profile.streak + 1
    else:
        streak = 1

    return replace(
        profile,
        streak=streak,
        best_streak=max(profile.best_streak, streak),
        last_active_day=day_key,
    )


def stat_for(ledger: Ledger, lang: Lang, day_key: str) -> DailyStat:
    return ledger.get(lang, {}).get(day_key, DailyStat())


def record_review(
    ledger: Ledger,
    profile: Profile,
    lang: Lang,
    day_key: str,
    correct: bool,
    minutes: float = 0.0,
) -> tuple[Ledger, Profile]:
    """
    Account one review answered on `day_key`.

    Runs the streak transition, bumps the (lang, day) stat (creating it on
    the first review of the day) and awards XP.

    Returns:
        The updated (ledger, profile) pair.
    """
    profile = advance_streak(profile, day_key)

    stat = stat_for(ledger, lang, day_key)
    stat = DailyStat(
        reviewed=stat.reviewed + 1,
        correct=stat.correct + (1 if correct else 0),
        wrong=stat.wrong + (0 if correct else 1),
        minutes=stat.minutes + minutes,
    )

    new_ledger = {code: dict(days) for code, days in ledger.items()}
    new_ledger.setdefault(lang, {})[day_key] = stat

    profile = replace(profile, xp=profile.xp + (XP_CORRECT if correct else XP_WRONG))
    return new_ledger, profile


def xp_level(xp: int) -> int:
    """Displayed level: one level per XP_PER_LEVEL points, starting at 1."""
    return xp // XP_PER_LEVEL + 1


def xp_progress(xp: int) -> int:
    """Points collected towards the next level."""
    return xp % XP_PER_LEVEL


def goal_progress(stat: DailyStat, daily_goal: int) -> float:
    """Fraction of the daily goal reached (capped at 1.0)."""
    if daily_goal <= 0:
        return 1.0
    return min(1.0, stat.reviewed / daily_goal)


# ---------- Achievements ----------

WELCOME = Achievement(id="welcome", title="Willkommen", desc="Erste Sprache geladen", icon="🚀")

ACHIEVEMENT_CATALOG: tuple[Achievement, ...] = (WELCOME,)


def unlock_achievement(
    achievements: tuple[Achievement, ...], achievement_id: str, now: int
) -> tuple[Achievement, ...]:
    """Stamp `unlocked_at` on the given achievement unless it is already unlocked."""
    return tuple(
        replace(a, unlocked_at=now)
        if a.id == achievement_id and a.unlocked_at is None
        else a
        for a in achievements
    )
