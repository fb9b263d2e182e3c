from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .actions import Action, ResolveAction, SelectCardAction
from .deck import build_deck
from .types import Card, GameConfig, GameStatus, Phase

Event = dict[str, object]


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    reason: str | None = None


def _rejected(reason: str) -> StepResult:
    return StepResult(ok=False, events=[], reason=reason)


@dataclass
class GameState:
    config: GameConfig | None = None
    seed: int | None = None  # seed of the current deal
    cards: list[Card] = field(default_factory=list)
    selection: list[int] = field(default_factory=list)
    scores: list[int] = field(default_factory=list)
    current_player: int = 0
    status: GameStatus = "in_progress"
    phase: Phase = "idle"
    move_count: int = 0
    pending_match: bool | None = None  # decided on the second pick, applied on resolve
    restart_pending: bool = False
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def pairs_found(self) -> int:
        return sum(1 for c in self.cards if c.is_matched) // 2

    def all_matched(self) -> bool:
        return bool(self.cards) and all(c.is_matched for c in self.cards)


class MemoryGame:
    """Owns one memory-match game and applies the play rules to it.

    Play operations never raise: a rejected call is a no-op that returns
    ``StepResult(ok=False)``. Only ``reset`` can fail, with
    ``ConfigurationError``, and then the previous game is left as it was.

    The reveal pause is driven by the caller: after ``select_card`` reports
    phase ``resolving`` the caller waits its delay, then calls
    ``resolve_pending_selection`` once.
    """

    def __init__(
        self,
        seed: int | None = None,
        rng_factory: Callable[[int], random.Random] = random.Random,
    ) -> None:
        self.seed = seed
        # Draws one seed per deal; each deal shuffles with rng_factory(deal_seed).
        self.rng = random.Random(seed)
        self._rng_factory = rng_factory
        self.state = GameState()
        self._lock = threading.RLock()

    # -- read model --------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def pairs_found(self) -> int:
        return self.state.pairs_found

    def leaders(self) -> list[int]:
        """Indices of the players holding the top score (more than one on a tie)."""
        scores = self.state.scores
        if not scores:
            return []
        best = max(scores)
        return [i for i, s in enumerate(scores) if s == best]

    # -- dealing -----------------------------------------------------------

    def reset(self, config: GameConfig, seed: int | None = None) -> StepResult:
        """Deal a new board. ``seed`` pins the shuffle; otherwise one is drawn from the game rng."""
        with self._lock:
            config.validate()
            deal_seed = seed if seed is not None else self.rng.randrange(2**32)
            # build_deck raises before the current state is replaced
            cards = build_deck(config.alphabet, config.pair_count, self._rng_factory(deal_seed))
            self.state = GameState(
                config=config,
                seed=deal_seed,
                cards=cards,
                scores=[0] * config.player_count,
                phase="dealt",
            )
            event: Event = {
                "type": "GAME_DEALT",
                "seed": deal_seed,
                "pair_count": config.pair_count,
                "player_count": config.player_count,
            }
            self.state.event_log.append(event)
            return StepResult(ok=True, events=[event])

    # -- play --------------------------------------------------------------

    def select_card(self, card_id: int) -> StepResult:
        with self._lock:
            state = self.state
            if state.phase == "idle":
                return _rejected("No game dealt.")
            if state.status == "complete":
                return _rejected("Game already complete.")
            if len(state.selection) >= 2:
                return _rejected("Two cards already pending.")
            if card_id < 0 or card_id >= len(state.cards):
                return _rejected("Invalid card id.")
            card = state.cards[card_id]
            if card.is_matched:
                return _rejected("Card already matched.")
            if card.is_face_up:
                return _rejected("Card already face up.")

            state.action_log.append(SelectCardAction(card_id=card_id))
            card.is_face_up = True
            state.selection.append(card_id)
            events: list[Event] = [
                {"type": "CARD_FLIPPED", "card_id": card_id, "face_value": card.face_value}
            ]

            if len(state.selection) == 1:
                state.phase = "one_selected"
            else:
                first, second = (state.cards[i] for i in state.selection)
                state.phase = "resolving"
                state.move_count += 1
                state.pending_match = first.face_value == second.face_value
                events.append(
                    {
                        "type": "SELECTION_RESOLVING",
                        "card_ids": list(state.selection),
                        "match": state.pending_match,
                    }
                )
            state.event_log.extend(events)
            return StepResult(ok=True, events=events)

    def resolve_pending_selection(self) -> StepResult:
        with self._lock:
            state = self.state
            if len(state.selection) != 2:
                return _rejected("Nothing to resolve.")

            state.action_log.append(ResolveAction())
            first, second = (state.cards[i] for i in state.selection)
            player = state.current_player
            events: list[Event] = []

            if state.pending_match:
                first.is_matched = True
                second.is_matched = True
                state.scores[player] += 1
                events.append(
                    {"type": "PAIR_MATCHED", "player": player, "card_ids": [first.id, second.id]}
                )
            else:
                first.is_face_up = False
                second.is_face_up = False
                events.append(
                    {"type": "PAIR_MISSED", "player": player, "card_ids": [first.id, second.id]}
                )
                if len(state.scores) > 1:
                    state.current_player = (player + 1) % len(state.scores)
                    events.append({"type": "TURN_PASSED", "player": state.current_player})

            state.selection.clear()
            state.pending_match = None

            if state.all_matched():
                # Round ends on the final match; the turn does not advance.
                state.status = "complete"
                state.phase = "complete"
                events.append(
                    {
                        "type": "GAME_COMPLETE",
                        "scores": list(state.scores),
                        "moves": state.move_count,
                        "leaders": self.leaders(),
                    }
                )
            else:
                state.phase = "dealt"

            state.event_log.extend(events)
            return StepResult(ok=True, events=events)

    # -- restart gate ------------------------------------------------------

    def request_restart(self) -> StepResult:
        with self._lock:
            if self.state.config is None:
                return _rejected("No game dealt.")
            if self.state.restart_pending:
                return _rejected("Restart already requested.")
            self.state.restart_pending = True
            event: Event = {"type": "RESTART_REQUESTED"}
            self.state.event_log.append(event)
            return StepResult(ok=True, events=[event])

    def cancel_restart(self) -> StepResult:
        with self._lock:
            if not self.state.restart_pending:
                return _rejected("No restart requested.")
            self.state.restart_pending = False
            event: Event = {"type": "RESTART_CANCELLED"}
            self.state.event_log.append(event)
            return StepResult(ok=True, events=[event])

    def confirm_restart(self) -> StepResult:
        with self._lock:
            if not self.state.restart_pending or self.state.config is None:
                return _rejected("No restart requested.")
            return self.reset(self.state.config)

    # -- replay ------------------------------------------------------------

    def step(self, action: Action) -> StepResult:
        if isinstance(action, SelectCardAction):
            return self.select_card(action.card_id)
        if isinstance(action, ResolveAction):
            return self.resolve_pending_selection()
        return _rejected("Unknown action.")


def new_game(config: GameConfig, seed: int | None = None) -> MemoryGame:
    game = MemoryGame(seed=seed)
    game.reset(config)
    return game


def replay(config: GameConfig, deal_seed: int, actions: Iterable[Action]) -> MemoryGame:
    """Rebuild a deal from its ``GameState.seed`` and applied actions."""
    game = MemoryGame()
    game.reset(config, seed=deal_seed)
    for a in actions:
        game.step(a)
        if game.state.status == "complete":
            break
    return game
