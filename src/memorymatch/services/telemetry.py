from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from memorymatch.engine.game import GameState


def game_payload(state: GameState) -> dict[str, object]:
    cfg = state.config
    return {
        "pair_count": cfg.pair_count if cfg is not None else 0,
        "player_count": cfg.player_count if cfg is not None else 0,
        "status": state.status,
        "moves": state.move_count,
        "scores": list(state.scores),
        "pairs_found": state.pairs_found,
    }


@dataclass
class TelemetryService:
    """Append-only JSONL log of game events (boot, deals, restarts, completions)."""

    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_game(self, event_type: str, state: GameState, **extra: object) -> None:
        payload = game_payload(state)
        payload.update(extra)
        self.log(event_type, payload)

    def read_all(self) -> list[dict[str, object]]:
        if not self.path.exists():
            return []
        return [
            json.loads(line)
            for line in self.path.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]
