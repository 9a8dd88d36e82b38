from dataclasses import replace

import pytest

from sprachapp.application.cards import create_card
from sprachapp.application.scheduler import next_ease, schedule
from sprachapp.domain.constants import EASE_MAX, EASE_MIN, RELEARN_DELAY_MS
from sprachapp.domain.models import CardKind, Lang
from tests.conftest import DAY


@pytest.fixture
def card():
    return create_card(Lang.EN, CardKind.VOCAB, "laufen", "to run", now=0)


def test_first_correct_review_schedules_one_day(card):
    after = schedule(card, True, 0)

    assert after.interval_days == 1
    assert after.ease == pytest.approx(2.1)
    assert after.due == 86_400_000
    assert after.lapses == 0
    assert after.last_reviewed == 0


def test_second_correct_review_grows_by_ease(card):
    first = schedule(card, True, 0)
    second = schedule(first, True, 86_400_000)

    assert second.interval_days == 2  # round(1 * 2.2)
    assert second.ease == pytest.approx(2.2)
    assert second.due == 86_400_000 + 172_800_000


def test_wrong_review_at_minimum_ease_stays_clamped(card):
    weak = replace(card, ease=1.3, interval_days=5, lapses=2)

    after = schedule(weak, False, 1000)

    assert after.ease == pytest.approx(1.3)
    assert after.interval_days == 0
    assert after.lapses == 3
    assert after.due == 1000 + RELEARN_DELAY_MS
    assert after.last_reviewed == 1000


@pytest.mark.parametrize(
    "interval, ease, lapses",
    [(0, 2.0, 0), (1, 2.1, 0), (30, 2.8, 4), (0.1, 1.3, 9)],
)
def test_wrong_review_always_resets_interval(card, interval, ease, lapses):
    prior = replace(card, interval_days=interval, ease=ease, lapses=lapses)
    t = 5 * DAY

    after = schedule(prior, False, t)

    assert after.interval_days == 0
    assert after.due == t + 0.1 * 86_400_000
    assert after.lapses == lapses + 1


def test_interval_sequence_from_fresh_card(card):
    intervals = []
    now = 0
    for _ in range(5):
        card = schedule(card, True, now)
        intervals.append(card.interval_days)
        now = card.due

    # Each step multiplies by the updated ease, then rounds.
    assert intervals == [1, 2, 5, 12, 30]


def test_ease_never_exceeds_maximum(card):
    previous = card.ease
    for i in range(30):
        card = schedule(card, True, i * DAY)
        assert card.ease >= previous
        assert card.ease <= EASE_MAX
        previous = card.ease
    assert card.ease == EASE_MAX


def test_ease_never_drops_below_minimum(card):
    for i in range(30):
        card = schedule(card, False, i * DAY)
        assert card.ease >= EASE_MIN
    assert card.ease == EASE_MIN
    assert card.lapses == 30


def test_half_day_interval_rounds_up(card):
    prior = replace(card, interval_days=5, ease=2.4)

    after = schedule(prior, True, 0)

    # 5 * 2.5 = 12.5
    assert after.interval_days == 13


def test_fractional_interval_is_accepted(card):
    prior = replace(card, interval_days=0.5)

    after = schedule(prior, True, 0)

    assert after.interval_days == 1
    assert after.due == DAY


def test_schedule_does_not_modify_input(card):
    before = replace(card)

    schedule(card, True, 123)
    schedule(card, False, 456)

    assert card == before


def test_schedule_is_deterministic(card):
    assert schedule(card, True, 42) == schedule(card, True, 42)
    assert schedule(card, False, 42) == schedule(card, False, 42)


def test_next_ease_steps():
    assert next_ease(2.0, True) == pytest.approx(2.1)
    assert next_ease(2.0, False) == pytest.approx(1.8)
    assert next_ease(2.75, True) == EASE_MAX
    assert next_ease(1.4, False) == EASE_MIN


def test_ease_off_the_hundredths_grid_is_kept_exact(card):
    prior = replace(card, interval_days=10, ease=2.123)

    after = schedule(prior, True, 0)

    assert after.ease == 2.123 + 0.1
    assert after.interval_days == 22  # round(10 * 2.223)


def test_small_fractional_interval_can_round_to_zero(card):
    prior = replace(card, interval_days=0.2, ease=1.3)

    after = schedule(prior, True, 5 * DAY)

    # round(0.2 * 1.4) = 0
    assert after.interval_days == 0
    assert after.due == 5 * DAY
    assert after.ease == pytest.approx(1.4)
