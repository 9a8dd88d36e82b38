"""
Spaced-repetition scheduler.

This is a pure computation module with no I/O. `schedule` never mutates
the card it is given; it returns an updated copy.
"""

import math
from dataclasses import replace

from sprachapp.domain.constants import (
    EASE_BONUS,
    EASE_MAX,
    EASE_MIN,
    EASE_PENALTY,
    MS_PER_DAY,
    RELEARN_DELAY_MS,
)
from sprachapp.domain.models import Card


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def next_ease(ease: float, correct: bool) -> float:
    """Ease after a review, clamped to [EASE_MIN, EASE_MAX]."""
    delta = EASE_BONUS if correct else -EASE_PENALTY
    return clamp(ease + delta, EASE_MIN, EASE_MAX)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def schedule(card: Card, correct: bool, now: int) -> Card:
    """
    Compute the card's state after a review answered at `now`.

    Correct: ease grows, interval becomes 1 day (first success) or the
    previous interval times the new ease, rounded to the nearest
    whole day. A fractional interval may round down to 0 days.
    Wrong: ease shrinks, interval resets to 0 and the card comes back
    after a short relearn delay.
    """
    ease = next_ease(card.ease, correct)

    if not correct:
        return replace(
            card,
            ease=ease,
            interval_days=0,
            due=now + RELEARN_DELAY_MS,
            lapses=card.lapses + 1,
            last_reviewed=now,
        )

    if card.interval_days == 0:
        interval = 1
    else:
        interval = round_half_up(card.interval_days * ease)

    return replace(
        card,
        ease=ease,
        interval_days=interval,
        due=now + interval * MS_PER_DAY,
        last_reviewed=now,
    )
