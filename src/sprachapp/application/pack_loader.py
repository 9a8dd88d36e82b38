"""Deduplicating merge of language pack content into the deck."""

import logging
from collections.abc import Iterable
from typing import Any

from sprachapp.domain.models import Card, CardKind, Lang, PackEntry

from .cards import create_card

logger = logging.getLogger(__name__)


def parse_entry(raw: Any) -> PackEntry | None:
    """
    Validate one raw pack entry.

    Accepts a PackEntry or a mapping with non-empty string `de` (source) and
    `x` (target) keys, plus optional `example` / `exampleTranslation`.
    Returns None for anything else.
    """
    if isinstance(raw, PackEntry):
        return raw
    if not isinstance(raw, dict):
        return None

    source = raw.get("de")
    target = raw.get("x")
    if not isinstance(source, str) or not isinstance(target, str):
        return None
    source, target = source.strip(), target.strip()
    if not source or not target:
        return None

    example = raw.get("example")
    example_translation = raw.get("exampleTranslation")
    return PackEntry(
        source=source,
        target=target,
        example=example if isinstance(example, str) else None,
        example_translation=(
            example_translation if isinstance(example_translation, str) else None
        ),
    )


def load_pack(
    existing_cards: Iterable[Card],
    target_lang: Lang,
    raw_vocab: Iterable[Any],
    raw_sentences: Iterable[Any],
    now: int,
) -> list[Card]:
    """
    Build the cards a pack adds to the deck.

    Malformed entries are skipped with a warning. Candidates whose
    (language, front) pair is already in the deck, or appeared earlier in
    the same pack, are dropped. Loading the same pack twice therefore adds
    nothing the second time.

    Returns:
        Only the new cards to append; `existing_cards` is left untouched.
    """
    seen = {(c.target_lang, c.front) for c in existing_cards}
    new_cards: list[Card] = []
    skipped = 0

    for kind, entries in ((CardKind.VOCAB, raw_vocab), (CardKind.SENTENCE, raw_sentences)):
        for raw in entries:
            entry = parse_entry(raw)
            if entry is None:
                logger.warning(
                    f"[pack] Skipping malformed {kind.value} entry for {target_lang.value}: {raw!r}"
                )
                continue

            key = (target_lang, entry.source)
            if key in seen:
                skipped += 1
                continue
            seen.add(key)

            new_cards.append(
                create_card(
                    target_lang,
                    kind,
                    entry.source,
                    entry.target,
                    now=now,
                    example=entry.example,
                    example_translation=entry.example_translation,
                )
            )

    logger.debug(
        f"[pack] {target_lang.value}: {len(new_cards)} new cards, {skipped} duplicates skipped"
    )
    return new_cards
