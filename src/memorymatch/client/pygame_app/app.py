from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

import pygame  # type: ignore[import-not-found]

from memorymatch.paths import Paths
from memorymatch.services.content import ContentCatalog, ContentService
from memorymatch.services.telemetry import TelemetryService
from memorymatch.services.timers import DEFAULT_REVEAL_DELAY

from .ui import Fonts


@dataclass
class SceneTransition:
    next_scene: "Scene"


class Scene(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> SceneTransition | None: ...
    def render(self, screen: pygame.Surface) -> None: ...


@dataclass
class SetupChoice:
    theme: str = "numbers"
    grid: str = "4x4"
    players: int = 1


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    fonts: Fonts
    content: ContentService
    telemetry: TelemetryService
    seed: int | None = None
    reveal_delay: float = DEFAULT_REVEAL_DELAY
    choice: SetupChoice = field(default_factory=SetupChoice)

    # Loaded at boot
    catalog: Optional[ContentCatalog] = None


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        return 0
