"""
Study Service: Application layer orchestrator.

Threads an explicit AppData value through the scheduler, pack loader and
ledger. Every function takes the current state and returns the next one;
persisting it is the caller's job.
"""

import logging
from dataclasses import replace

from sprachapp.domain.constants import DEFAULT_DAILY_GOAL
from sprachapp.domain.errors import CardNotFoundError
from sprachapp.domain.models import AppData, Lang, Level, PackContent, Profile, empty_ledger

from .clock import day_key
from .ledger import ACHIEVEMENT_CATALOG, WELCOME, record_review, unlock_achievement
from .pack_loader import load_pack
from .scheduler import schedule

logger = logging.getLogger(__name__)


def new_app_data(now: int, username: str = "User") -> AppData:
    """Initial state for a first launch."""
    profile = Profile(
        username=username,
        target_lang=Lang.EN,
        level=Level.BEGINNER,
        daily_goal=DEFAULT_DAILY_GOAL,
        xp=0,
        streak=0,
        best_streak=0,
        last_active_day=day_key(now),
        created_at=now,
    )
    return AppData(
        profile=profile,
        cards=(),
        achievements=ACHIEVEMENT_CATALOG,
        daily_stats_by_lang=empty_ledger(),
    )


def answer_card(
    data: AppData, card_id: str, correct: bool, now: int, minutes: float = 0.0
) -> AppData:
    """
    Apply a review answer to one card and account it in the ledger.

    The review counts for the card's own language on the UTC day of `now`.

    Raises:
        CardNotFoundError: If `card_id` is not in the deck.
    """
    cards = list(data.cards)
    for i, card in enumerate(cards):
        if card.id == card_id:
            cards[i] = schedule(card, correct, now)
            break
    else:
        raise CardNotFoundError(card_id)

    ledger, profile = record_review(
        data.daily_stats_by_lang,
        data.profile,
        cards[i].target_lang,
        day_key(now),
        correct,
        minutes,
    )
    logger.debug(
        f"[review] {card_id} correct={correct} -> interval={cards[i].interval_days} "
        f"ease={cards[i].ease}"
    )
    return replace(data, cards=tuple(cards), profile=profile, daily_stats_by_lang=ledger)


def switch_language(data: AppData, lang: Lang) -> AppData:
    if data.profile.target_lang == lang:
        return data
    return replace(data, profile=replace(data.profile, target_lang=lang))


def apply_pack(data: AppData, pack: PackContent, now: int) -> AppData:
    """
    Merge a fully fetched pack into the deck and switch to its language.

    `data` must be the state current at the time the pack arrived, not the
    state from before the fetch started.
    """
    new_cards = load_pack(data.cards, pack.lang, pack.vocab, pack.sentences, now)
    data = switch_language(data, pack.lang)

    if not new_cards:
        logger.info(f"[pack] {pack.lang.value}: deck already up to date")
        return data

    logger.info(f"[pack] {pack.lang.value}: added {len(new_cards)} cards")
    return replace(
        data,
        cards=data.cards + tuple(new_cards),
        achievements=unlock_achievement(data.achievements, WELCOME.id, now),
    )
