from __future__ import annotations

import random
from collections.abc import Sequence

from .types import Card, ConfigurationError, FaceValue, require_count


def _distinct_prefix(alphabet: Sequence[FaceValue], count: int) -> list[FaceValue]:
    chosen: list[FaceValue] = []
    for value in alphabet:
        if value in chosen:
            continue
        chosen.append(value)
        if len(chosen) == count:
            break
    return chosen


def _shuffle(rng: random.Random, items: list[FaceValue]) -> None:
    # Fisher-Yates, walking down from the last slot.
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]


def build_deck(
    alphabet: Sequence[FaceValue],
    pair_count: int,
    rng: random.Random | None = None,
) -> list[Card]:
    """Deal a shuffled board of ``2 * pair_count`` face-down cards.

    The first ``pair_count`` distinct values of ``alphabet`` are used, each
    exactly twice. Pass a seeded ``random.Random`` for a reproducible order.
    """
    if require_count("pair_count", pair_count) < 1:
        raise ConfigurationError(f"pair_count must be at least 1, got {pair_count}")
    values = _distinct_prefix(alphabet, pair_count)
    if len(values) < pair_count:
        raise ConfigurationError(
            f"Alphabet has {len(values)} distinct values, {pair_count} pairs requested."
        )

    faces = [v for v in values for _ in range(2)]
    _shuffle(rng or random.Random(), faces)
    return [Card(id=i, face_value=face) for i, face in enumerate(faces)]
