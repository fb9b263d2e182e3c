from __future__ import annotations

import pytest

from memorymatch.engine.game import MemoryGame

from _helpers import ordered_game


@pytest.fixture
def two_player_game() -> MemoryGame:
    return ordered_game(pair_count=2, player_count=2)
