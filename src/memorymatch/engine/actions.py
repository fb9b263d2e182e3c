from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectCardAction:
    card_id: int


@dataclass(frozen=True)
class ResolveAction:
    pass


Action = SelectCardAction | ResolveAction
