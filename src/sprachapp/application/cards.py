"""Card construction and due-card selection."""

from collections.abc import Iterable

from sprachapp.domain.constants import EASE_START
from sprachapp.domain.models import Card, CardKind, Lang

from .id_service import generate_card_id


def create_card(
    target_lang: Lang,
    kind: CardKind,
    front: str,
    back: str,
    *,
    now: int,
    example: str | None = None,
    example_translation: str | None = None,
) -> Card:
    """Build a fresh card that is due immediately."""
    return Card(
        id=generate_card_id(),
        target_lang=target_lang,
        kind=kind,
        front=front,
        back=back,
        example=example,
        example_translation=example_translation,
        due=now,
        interval_days=0,
        ease=EASE_START,
        lapses=0,
    )


def due_cards(cards: Iterable[Card], lang: Lang, now: int) -> list[Card]:
    """Cards of `lang` whose due time has passed, in deck order."""
    return [c for c in cards if c.target_lang == lang and c.due <= now]


def next_due_card(cards: Iterable[Card], lang: Lang, now: int) -> Card | None:
    for card in cards:
        if card.target_lang == lang and card.due <= now:
            return card
    return None
