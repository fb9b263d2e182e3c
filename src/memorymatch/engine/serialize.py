from __future__ import annotations


from .actions import Action, ResolveAction, SelectCardAction
from .game import GameState
from .types import Card, GameConfig


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, SelectCardAction):
        return {"type": "select", "card_id": a.card_id}
    if isinstance(a, ResolveAction):
        return {"type": "resolve"}
    # should be unreachable
    return {"type": "unknown"}


def _config_to_dict(cfg: GameConfig | None) -> dict[str, object] | None:
    if cfg is None:
        return None
    return {
        "alphabet": list(cfg.alphabet),
        "pair_count": cfg.pair_count,
        "player_count": cfg.player_count,
    }


def _card_to_dict(c: Card) -> dict[str, object]:
    return {
        "id": c.id,
        "face_value": c.face_value,
        "is_face_up": c.is_face_up,
        "is_matched": c.is_matched,
    }


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current game state."""
    return {
        "seed": state.seed,
        "config": _config_to_dict(state.config),
        "phase": state.phase,
        "status": state.status,
        "cards": [_card_to_dict(c) for c in state.cards],
        "selection": list(state.selection),
        "pending_match": state.pending_match,
        "scores": list(state.scores),
        "current_player": state.current_player,
        "move_count": state.move_count,
        "restart_pending": state.restart_pending,
        "action_log": [action_to_dict(a) for a in state.action_log],
    }
