"""
Domain models for the flashcard deck and learning progress.

These are pure data structures with no I/O or external dependencies.
All of them are immutable; operations return updated copies.
"""

from dataclasses import dataclass, field
from enum import Enum


class Lang(str, Enum):
    """Supported target languages."""

    EN = "EN"
    ES = "ES"
    FR = "FR"
    RU = "RU"


NATIVE_LANG = "DE"


class Level(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class CardKind(str, Enum):
    VOCAB = "vocab"
    SENTENCE = "sentence"


@dataclass(frozen=True)
class Card:
    """
    A single reviewable flashcard.

    Attributes:
        id: Opaque unique identifier.
        target_lang: Language the card teaches.
        kind: Vocabulary word or full sentence.
        front: Prompt text in the native language.
        back: Answer text in the target language.
        example: Optional example sentence.
        example_translation: Translation of the example sentence.
        due: Epoch milliseconds at or after which the card may be reviewed.
        interval_days: Current review interval in days (may be fractional).
        ease: Interval growth multiplier, kept within [EASE_MIN, EASE_MAX].
        lapses: Number of failed reviews.
        last_reviewed: Epoch milliseconds of the last review, if any.
    """

    id: str
    target_lang: Lang
    kind: CardKind
    front: str
    back: str
    due: int
    interval_days: float
    ease: float
    lapses: int = 0
    example: str | None = None
    example_translation: str | None = None
    last_reviewed: int | None = None


@dataclass(frozen=True)
class DailyStat:
    """Review counts for one (language, day)."""

    reviewed: int = 0
    correct: int = 0
    wrong: int = 0
    minutes: float = 0.0


@dataclass(frozen=True)
class Profile:
    """
    The learner's profile. One per app instance.

    `last_active_day` is an ISO date key (YYYY-MM-DD).
    """

    username: str
    target_lang: Lang
    level: Level
    daily_goal: int
    xp: int
    streak: int
    best_streak: int
    last_active_day: str
    created_at: int
    native_lang: str = NATIVE_LANG


@dataclass(frozen=True)
class Achievement:
    id: str
    title: str
    desc: str
    icon: str
    unlocked_at: int | None = None


# language -> (day key -> stat)
Ledger = dict[Lang, dict[str, DailyStat]]


def empty_ledger() -> Ledger:
    return {lang: {} for lang in Lang}


@dataclass(frozen=True)
class AppData:
    """
    Aggregate root: the whole application state.

    This is the unit of persistence, export and import.
    """

    profile: Profile
    cards: tuple[Card, ...] = ()
    achievements: tuple[Achievement, ...] = ()
    daily_stats_by_lang: Ledger = field(default_factory=empty_ledger)


@dataclass(frozen=True)
class PackEntry:
    """One validated (source, target) pair from a language pack."""

    source: str
    target: str
    example: str | None = None
    example_translation: str | None = None


@dataclass(frozen=True)
class PackContent:
    """A complete language pack as delivered by a pack source."""

    lang: Lang
    vocab: list = field(default_factory=list)  # raw entries, validated by the loader
    sentences: list = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.vocab and not self.sentences
