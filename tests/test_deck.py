from __future__ import annotations

import random
from collections import Counter

import pytest

from memorymatch.engine.deck import build_deck
from memorymatch.engine.types import ConfigurationError

from _helpers import NoSwapRandom


def test_deck_has_each_value_exactly_twice() -> None:
    deck = build_deck(list(range(20)), 8, random.Random(1))
    assert len(deck) == 16
    counts = Counter(c.face_value for c in deck)
    assert set(counts) == set(range(8))
    assert all(n == 2 for n in counts.values())
    assert [c.id for c in deck] == list(range(16))
    assert not any(c.is_face_up or c.is_matched for c in deck)


def test_first_distinct_values_are_used() -> None:
    deck = build_deck(["a", "a", "b", "c", "d"], 3, random.Random(0))
    assert {c.face_value for c in deck} == {"a", "b", "c"}


def test_seeded_deck_is_reproducible() -> None:
    first = [c.face_value for c in build_deck(range(18), 18, random.Random(424242))]
    second = [c.face_value for c in build_deck(range(18), 18, random.Random(424242))]
    assert first == second


def test_unseeded_deck_is_still_valid() -> None:
    deck = build_deck("xyz", 3)
    assert sorted(c.face_value for c in deck) == ["x", "x", "y", "y", "z", "z"]


def test_every_ordering_of_a_small_deck_occurs() -> None:
    seen = set()
    for seed in range(300):
        deck = build_deck("ab", 2, random.Random(seed))
        seen.add("".join(c.face_value for c in deck))
    # 4!/(2!*2!) distinct layouts of a a b b
    assert len(seen) == 6


def test_no_swap_source_keeps_dealing_order() -> None:
    deck = build_deck("abc", 3, NoSwapRandom())
    assert [c.face_value for c in deck] == ["a", "a", "b", "b", "c", "c"]


def test_short_alphabet_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        build_deck(list(range(7)), 8)
    # duplicates do not count towards the distinct values
    with pytest.raises(ConfigurationError):
        build_deck(["a", "a", "b"], 3)


def test_pair_count_below_one_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        build_deck("abc", 0)


@pytest.mark.parametrize("pair_count", [2.5, "3", True])
def test_non_integer_pair_count_is_rejected(pair_count: object) -> None:
    with pytest.raises(ConfigurationError):
        build_deck("abcdefgh", pair_count)  # type: ignore[arg-type]
