from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Literal

# Numbers theme uses ints, icons theme uses strings; the engine only compares them.
FaceValue = Hashable

GameStatus = Literal["in_progress", "complete"]
Phase = Literal["idle", "dealt", "one_selected", "resolving", "complete"]

MIN_PLAYERS = 1
MAX_PLAYERS = 4


class ConfigurationError(ValueError):
    """Raised when a deal cannot be built from the supplied configuration."""


def require_count(name: str, value: object) -> int:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass
class Card:
    id: int
    face_value: FaceValue
    is_face_up: bool = False
    is_matched: bool = False


@dataclass(frozen=True)
class GameConfig:
    alphabet: tuple[FaceValue, ...]
    pair_count: int
    player_count: int = 1

    def validate(self) -> None:
        require_count("player_count", self.player_count)
        require_count("pair_count", self.pair_count)
        if not MIN_PLAYERS <= self.player_count <= MAX_PLAYERS:
            raise ConfigurationError(
                f"player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {self.player_count}"
            )
        if self.pair_count < 1:
            raise ConfigurationError(f"pair_count must be at least 1, got {self.pair_count}")
