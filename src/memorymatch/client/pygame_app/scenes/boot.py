from __future__ import annotations

import traceback

import pygame  # type: ignore[import-not-found]

from memorymatch.services.content import ContentError

from ..app import GameContext, SceneTransition
from ..ui import BG_DARK, Button, draw_text
from .setup import SetupScene


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            self.ctx.content.validate_all()
            catalog = self.ctx.content.load_catalog()
            self.ctx.catalog = catalog

            # Unknown ids from the command line fall back to the catalog defaults.
            choice = self.ctx.choice
            if choice.theme not in catalog.themes:
                choice.theme = catalog.default_theme
            if choice.grid not in catalog.grids:
                choice.grid = catalog.default_grid

            self.ctx.telemetry.log("boot", {"ok": True, "seed": self.ctx.seed})
            return SceneTransition(SetupScene(self.ctx))
        except ContentError as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            self._quit_button = Button(
                rect=pygame.Rect(20, 700, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill(BG_DARK)
        fonts = self.ctx.fonts
        draw_text(screen, fonts.big, "memory", (20, 20))

        if self._error is None:
            draw_text(screen, fonts.ui, "Loading themes...", (20, 80))
        else:
            draw_text(screen, fonts.ui, "BOOT ERROR", (20, 80), color=(240, 80, 80))
            y = 120
            for line in self._error.splitlines()[:22]:
                draw_text(screen, fonts.small, line[:120], (20, y), color=(230, 230, 230))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, fonts.ui)
