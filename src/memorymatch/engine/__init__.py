"""Deterministic, headless game-state engine for Memory Match.

IMPORTANT: This package must never import pygame.
"""

from .actions import ResolveAction, SelectCardAction
from .deck import build_deck
from .game import GameState, MemoryGame, StepResult, new_game, replay
from .types import Card, ConfigurationError, GameConfig, GameStatus, Phase

__all__ = [
    "Card",
    "ConfigurationError",
    "GameConfig",
    "GameState",
    "GameStatus",
    "MemoryGame",
    "Phase",
    "ResolveAction",
    "SelectCardAction",
    "StepResult",
    "build_deck",
    "new_game",
    "replay",
]
