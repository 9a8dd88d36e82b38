from dataclasses import replace

from sprachapp.application.cards import create_card, due_cards, next_due_card
from sprachapp.application.id_service import generate_card_id
from sprachapp.domain.models import CardKind, Lang
from tests.conftest import DAY, T0


def test_create_card_has_fresh_scheduling_state():
    card = create_card(
        Lang.FR,
        CardKind.SENTENCE,
        "Ein Baguette, bitte.",
        "Une baguette, s'il vous plaît.",
        now=T0,
        example="Ich möchte ein Baguette.",
    )

    assert card.target_lang == Lang.FR
    assert card.kind == CardKind.SENTENCE
    assert card.due == T0
    assert card.interval_days == 0
    assert card.ease == 2.0
    assert card.lapses == 0
    assert card.last_reviewed is None
    assert card.example == "Ich möchte ein Baguette."
    assert card.example_translation is None


def test_card_ids_are_unique():
    ids = {generate_card_id() for _ in range(1000)}
    assert len(ids) == 1000
    assert all(i.startswith("card_") for i in ids)


def test_due_cards_filters_language_and_time():
    a = create_card(Lang.EN, CardKind.VOCAB, "laufen", "to run", now=T0)
    b = create_card(Lang.ES, CardKind.VOCAB, "Hallo", "hola", now=T0)
    c = replace(create_card(Lang.EN, CardKind.VOCAB, "Zeit", "time", now=T0), due=T0 + DAY)
    d = create_card(Lang.EN, CardKind.VOCAB, "essen", "to eat", now=T0)

    assert due_cards([a, b, c, d], Lang.EN, T0) == [a, d]
    assert due_cards([a, b, c, d], Lang.EN, T0 + DAY) == [a, c, d]
    assert due_cards([a, b, c, d], Lang.RU, T0) == []


def test_next_due_card_keeps_deck_order():
    later = replace(create_card(Lang.EN, CardKind.VOCAB, "Zeit", "time", now=T0), due=T0 + 1)
    first = create_card(Lang.EN, CardKind.VOCAB, "laufen", "to run", now=T0)
    second = create_card(Lang.EN, CardKind.VOCAB, "essen", "to eat", now=T0)

    assert next_due_card([later, first, second], Lang.EN, T0) == first
    assert next_due_card([later], Lang.EN, T0) is None
